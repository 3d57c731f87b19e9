import hmac
import logging
from typing import List, Optional

from vendor_portal.adapters.interfaces.connector import APIConnector
from vendor_portal.adapters.sap.normalizer import ODataNormalizer
from vendor_portal.adapters.sap.resources import (
    AGING,
    GOODS_RECEIPTS,
    INVOICE_PDF,
    INVOICES,
    MEMOS,
    PURCHASE_ORDERS,
    RFQS,
    VENDOR_LOGIN,
    VENDOR_PROFILE,
    CollectionResource,
    pad_vendor_id,
)
from vendor_portal.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationException,
)
from vendor_portal.infrastructure.error.handler import ErrorHandler
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

logger = logging.getLogger(__name__)

# Served by /rfq until the upstream RFQ entity is mapped
PLACEHOLDER_RFQ_START = 6000000000
PLACEHOLDER_RFQ_COUNT = 5


def placeholder_rfqs() -> List[RFQ]:
    return [
        RFQ(
            rfq_number=str(PLACEHOLDER_RFQ_START + offset),
            material="13",
            description="Wood",
            created_date="May 30, 2025",
            target_date="Nov 30, 2025",
        )
        for offset in range(PLACEHOLDER_RFQ_COUNT)
    ]


class VendorPortalService:
    """Answers portal requests with one upstream SAP call each."""

    def __init__(
        self,
        connector: APIConnector,
        normalizer: Optional[ODataNormalizer] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """Initialize with the upstream connector."""
        self.connector = connector
        self.normalizer = normalizer or ODataNormalizer()
        self.error_handler = error_handler or ErrorHandler(logger)

    async def login(self, lifnr: Optional[str], password: Optional[str]) -> None:
        """
        Check a vendor's password against the one stored upstream.

        Raises:
            ValidationException: If lifnr or password is missing
            NotFoundError: If the vendor does not exist upstream
            AuthenticationError: If the password does not match
        """
        if not lifnr or not lifnr.strip() or not password:
            raise ValidationException("Lifnr and password are required")

        vendor_id = pad_vendor_id(lifnr)
        payload = await self.connector.get_json(VENDOR_LOGIN.path(vendor_id), VENDOR_LOGIN.source)
        entity = self._unwrap_entity(payload, VENDOR_LOGIN.source)
        if entity is None:
            raise NotFoundError(VENDOR_LOGIN.not_found_message, source=VENDOR_LOGIN.source)

        # The upstream stores the password in clear text
        stored = entity.get("Password")
        if not isinstance(stored, str) or not hmac.compare_digest(
            stored.encode("utf-8"), password.encode("utf-8")
        ):
            logger.info(f"Login rejected for vendor {vendor_id}")
            raise AuthenticationError("Invalid password", source=VENDOR_LOGIN.source)

        logger.info(f"Login successful for vendor {vendor_id}")

    async def get_profile(self, vendor_id: str) -> VendorProfile:
        """Gets the vendor master data."""
        vendor_id = pad_vendor_id(vendor_id)
        resource = VENDOR_PROFILE
        payload = await self.connector.get_json(resource.path(vendor_id), resource.source)
        entity = self._unwrap_entity(payload, resource.source)
        if entity is None:
            raise NotFoundError(resource.not_found_message, source=resource.source)
        return self._map_records([entity], VendorProfile, resource.source)[0]

    async def get_goods_receipts(self, vendor_id: str) -> List[GoodsReceipt]:
        return await self._fetch_records(GOODS_RECEIPTS, vendor_id)

    async def get_invoices(self, vendor_id: str) -> List[Invoice]:
        return await self._fetch_records(INVOICES, vendor_id)

    async def get_memos(self, vendor_id: str) -> List[Memo]:
        return await self._fetch_records(MEMOS, vendor_id)

    async def get_purchase_orders(self, vendor_id: str) -> List[PurchaseOrder]:
        return await self._fetch_records(PURCHASE_ORDERS, vendor_id)

    async def get_aging(self, vendor_id: str) -> List[AgingRecord]:
        return await self._fetch_records(AGING, vendor_id)

    async def get_rfqs(self, vendor_id: str) -> List[RFQ]:
        """
        Gets the vendor's requests for quotation.

        The upstream query is made so its failures surface, but its result
        is not mapped yet: a fixed placeholder list is returned instead.
        """
        vendor_id = pad_vendor_id(vendor_id)
        await self.connector.get_json(RFQS.path(vendor_id), RFQS.source)
        logger.warning(
            f"Serving placeholder RFQs for vendor {vendor_id}, upstream result discarded",
            extra={"data": {"source": RFQS.source, "vendor_id": vendor_id}}
        )
        return placeholder_rfqs()

    async def get_invoice_pdf(self, invoice_id: str) -> bytes:
        """Downloads the invoice document as PDF bytes."""
        if not invoice_id or not invoice_id.strip():
            raise ValidationException("Invoice ID is required", field="invoiceId")
        return await self.connector.get_bytes(
            INVOICE_PDF.path(invoice_id), INVOICE_PDF.source, accept="application/pdf"
        )

    async def _fetch_records(self, resource: CollectionResource, vendor_id: str) -> List[DomainRecord]:
        vendor_id = pad_vendor_id(vendor_id)
        payload = await self.connector.get_json(resource.path(vendor_id), resource.source)
        try:
            entities = self.normalizer.extract_results(payload)
        except ValueError as e:
            raise self.error_handler.handle_error(e, resource.source) from e

        records = self._map_records(entities, resource.record_type, resource.source)
        logger.debug(f"Retrieved {len(records)} records from {resource.entity_set} for vendor {vendor_id}")

        if not records and resource.not_found_message:
            raise NotFoundError(resource.not_found_message, source=resource.source)
        return records

    def _unwrap_entity(self, payload, source: str):
        try:
            return self.normalizer.extract_entity(payload)
        except ValueError as e:
            raise self.error_handler.handle_error(e, source) from e

    def _map_records(self, entities, record_type, source: str) -> List[DomainRecord]:
        try:
            return self.normalizer.normalize_many(entities, record_type)
        except ValueError as e:
            raise self.error_handler.handle_error(e, source) from e
