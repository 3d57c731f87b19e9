from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_pascal

from vendor_portal.adapters.sap.normalizer import parse_sap_date


class DomainRecord(BaseModel):
    """
    Flat record returned to the portal client.

    Fields are declared in snake_case, serialized in camelCase and read from
    the upstream entity property of the same name in PascalCase
    (``material_doc`` <- ``MaterialDoc``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    # Fields holding SAP dates, normalized to YYYY-MM-DD
    date_fields: ClassVar[Tuple[str, ...]] = ()

    @staticmethod
    def upstream_name(field_name: str) -> str:
        return to_pascal(field_name)

    @classmethod
    def from_entity(cls, entity: Dict[str, Any]) -> "DomainRecord":
        """
        Build a record from one upstream entity.

        Raises:
            pydantic.ValidationError: If a required field is missing or a
                value has the wrong shape.
        """
        values = {}
        for name in cls.model_fields:
            key = cls.upstream_name(name)
            if key not in entity:
                continue
            value = entity[key]
            if name in cls.date_fields:
                value = parse_sap_date(value)
            values[name] = value
        return cls.model_validate(values)


class VendorProfile(DomainRecord):
    vendor_id: str
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postcode: Optional[str] = None
    street: Optional[str] = None


class GoodsReceipt(DomainRecord):
    date_fields: ClassVar[Tuple[str, ...]] = ("post_date", "entry_date")

    material_doc: str
    doc_year: Optional[str] = None
    post_date: Optional[str] = None
    entry_date: Optional[str] = None
    po_number: Optional[str] = None
    po_item: Optional[str] = None
    material: Optional[str] = None
    quantity: Optional[str] = None
    unit: Optional[str] = None
    vendor_id: Optional[str] = None


class Invoice(DomainRecord):
    date_fields: ClassVar[Tuple[str, ...]] = ("invoice_date",)

    invoice_no: str
    invoice_date: Optional[str] = None
    total_amount: Optional[str] = None
    currency: Optional[str] = None
    payment_terms: Optional[str] = None
    po_no: Optional[str] = None
    po_item: Optional[str] = None
    material_no: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[str] = None
    unit_price: Optional[str] = None
    unit: Optional[str] = None


class Memo(DomainRecord):
    date_fields: ClassVar[Tuple[str, ...]] = ("posting_date", "entry_date")

    memo_doc: str
    doc_year: Optional[str] = None
    posting_date: Optional[str] = None
    entry_date: Optional[str] = None
    vendor_id: Optional[str] = None
    memo_type: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    reference_doc_no: Optional[str] = None
    doc_type: Optional[str] = None
    company_code: Optional[str] = None


class PurchaseOrder(DomainRecord):
    date_fields: ClassVar[Tuple[str, ...]] = ("delivery_date", "doc_date")

    vendor_id: Optional[str] = None
    delivery_date: Optional[str] = None
    doc_date: Optional[str] = None
    material: Optional[str] = None
    unit: Optional[str] = None
    po_number: str
    item_number: Optional[str] = None


class AgingRecord(DomainRecord):
    date_fields: ClassVar[Tuple[str, ...]] = ("payment_date", "entry_date", "due_date")

    payment_doc: str
    doc_year: Optional[str] = None
    payment_date: Optional[str] = None
    entry_date: Optional[str] = None
    vendor_id: Optional[str] = None
    amount_paid: Optional[str] = None
    currency: Optional[str] = None
    due_date: Optional[str] = None
    aging: Optional[str] = None


class RFQ(DomainRecord):
    """Request for quotation as shown in the portal."""

    rfq_number: str
    material: Optional[str] = None
    description: Optional[str] = None
    created_date: Optional[str] = None
    target_date: Optional[str] = None


class LoginRequest(BaseModel):
    """Login form posted by the portal; presence is checked by the route."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    lifnr: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
