"""
Upstream OData resources queried by the portal.

Each resource names its entity set, how the request key is placed in the
URL, and the context label used when a call against it fails.
"""
from dataclasses import dataclass
from typing import Optional, Type
from urllib.parse import quote

from vendor_portal.core.exceptions import ValidationException
from vendor_portal.domain.models.records import (
    AgingRecord,
    DomainRecord,
    GoodsReceipt,
    Invoice,
    Memo,
    PurchaseOrder,
    RFQ,
    VendorProfile,
)

VENDOR_ID_LENGTH = 10


def pad_vendor_id(vendor_id: Optional[str]) -> str:
    """
    Left-pad a vendor number with zeros to the SAP LIFNR width.

    Longer identifiers are returned unchanged.

    Raises:
        ValidationException: If the identifier is missing or blank.
    """
    if vendor_id is None or not vendor_id.strip():
        raise ValidationException("Vendor ID is required", field="vendorId")
    return vendor_id.rjust(VENDOR_ID_LENGTH, "0")


def odata_literal(value: str) -> str:
    """Quote a value as an OData string literal."""
    return "'" + value.replace("'", "''") + "'"


def url_literal(value: str) -> str:
    """
    OData string literal, percent-encoded for use inside a URL.

    Unencoded, a ``?``, ``#`` or ``/`` in the value would end the path or
    the query early.
    """
    return quote(odata_literal(value), safe="'")


@dataclass(frozen=True)
class EntityResource:
    """A single entity addressed by key, e.g. ``Set(Key='...')``."""

    entity_set: str
    source: str
    key_field: Optional[str] = None
    record_type: Optional[Type[DomainRecord]] = None
    not_found_message: Optional[str] = None
    raw_value: bool = False

    def path(self, key: str) -> str:
        if self.key_field:
            path = f"{self.entity_set}({self.key_field}={url_literal(key)})"
        else:
            path = f"{self.entity_set}({url_literal(key)})"
        if self.raw_value:
            path += "/$value"
        return path


@dataclass(frozen=True)
class CollectionResource:
    """An entity set filtered on one vendor field."""

    entity_set: str
    source: str
    filter_field: str = "VendorId"
    record_type: Optional[Type[DomainRecord]] = None
    # None means an empty result is returned as an empty list
    not_found_message: Optional[str] = None

    def path(self, vendor_id: str) -> str:
        return f"{self.entity_set}?$filter=({self.filter_field} eq {url_literal(vendor_id)})"


VENDOR_LOGIN = EntityResource(
    entity_set="ZVENDOR_ATCLOGINSet",
    key_field="Lifnr",
    source="SAP Login Error",
    not_found_message="Vendor not found",
)

VENDOR_PROFILE = EntityResource(
    entity_set="ZATC_VENDORPROFILESet",
    key_field="VendorId",
    source="SAP Profile Error",
    record_type=VendorProfile,
    not_found_message="Profile not found",
)

INVOICE_PDF = EntityResource(
    entity_set="ZATC_OINVSet",
    source="SAP Invoice PDF Error",
    raw_value=True,
)

GOODS_RECEIPTS = CollectionResource(
    entity_set="ZATC_GOODSSet",
    source="SAP Goods Receipt Error",
    record_type=GoodsReceipt,
    not_found_message="No goods receipts found",
)

INVOICES = CollectionResource(
    entity_set="ZATC_INVOICETABLESet",
    source="SAP Invoice Error",
    record_type=Invoice,
    not_found_message="No invoices found",
)

MEMOS = CollectionResource(
    entity_set="ZATC_MEMOSet",
    source="SAP Memo Error",
    record_type=Memo,
)

PURCHASE_ORDERS = CollectionResource(
    entity_set="ZATC_PURCHASESet",
    source="SAP Purchase Order Error",
    record_type=PurchaseOrder,
)

RFQS = CollectionResource(
    entity_set="ZATC_RFQSet",
    source="SAP RFQ Error",
    filter_field="Lifnr",
    record_type=RFQ,
)

AGING = CollectionResource(
    entity_set="ZATC_V_AGINGSet",
    source="SAP Aging Error",
    record_type=AgingRecord,
)
