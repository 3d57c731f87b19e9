import re
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Path, Response, status

from vendor_portal.api.dependencies import get_vendor_service
from vendor_portal.domain.models.records import (
    AgingRecord,
    GoodsReceipt,
    Invoice,
    LoginRequest,
    Memo,
    MessageResponse,
    PurchaseOrder,
    RFQ,
    VendorProfile,
)
from vendor_portal.services.vendor_service import VendorPortalService

vendor_router = APIRouter()

_PLAIN_FILENAME = re.compile(r"[A-Za-z0-9._-]+")


def attachment_disposition(filename: str) -> str:
    """
    Content-Disposition value for a download.

    Names outside a safe ASCII set get a quoted ASCII fallback plus an
    RFC 5987 ``filename*`` parameter, since header values must be latin-1.
    """
    if _PLAIN_FILENAME.fullmatch(filename):
        return f"attachment; filename={filename}"
    fallback = re.sub(r"[^A-Za-z0-9._-]", "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@vendor_router.post(
    "/login",
    response_model=MessageResponse,
    summary="Vendor login",
    responses={400: {"description": "Missing lifnr or password"},
               401: {"description": "Invalid password"},
               404: {"description": "Vendor not found"}},
)
async def login(
    credentials: Optional[LoginRequest] = None,
    service: VendorPortalService = Depends(get_vendor_service),
):
    """Checks a vendor number and password against SAP."""
    credentials = credentials or LoginRequest()
    await service.login(credentials.lifnr, credentials.password)
    return MessageResponse(message="Login successful")


@vendor_router.get(
    "/profile/{vendor_id}",
    response_model=VendorProfile,
    summary="Vendor profile",
)
async def get_profile(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_profile(vendor_id)


@vendor_router.get(
    "/goodsreceipt/{vendor_id}",
    response_model=List[GoodsReceipt],
    summary="Goods receipts",
    responses={404: {"description": "No goods receipts found"}},
)
async def get_goods_receipts(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_goods_receipts(vendor_id)


@vendor_router.get(
    "/invoices/{vendor_id}",
    response_model=List[Invoice],
    summary="Invoices",
    responses={404: {"description": "No invoices found"}},
)
async def get_invoices(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_invoices(vendor_id)


@vendor_router.get(
    "/invoice/{invoice_id}",
    response_class=Response,
    summary="Invoice PDF download",
    responses={status.HTTP_200_OK: {"content": {"application/pdf": {}}}},
)
async def download_invoice(
    invoice_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    """Streams the invoice document from SAP as an attachment."""
    pdf = await service.get_invoice_pdf(invoice_id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": attachment_disposition(f"Invoice_{invoice_id}.pdf"),
            "Content-Length": str(len(pdf)),
        },
    )


@vendor_router.get(
    "/memos/{vendor_id}",
    response_model=List[Memo],
    summary="Credit and debit memos",
)
async def get_memos(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_memos(vendor_id)


@vendor_router.get(
    "/purchase-orders/{vendor_id}",
    response_model=List[PurchaseOrder],
    summary="Purchase orders",
)
async def get_purchase_orders(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_purchase_orders(vendor_id)


@vendor_router.get(
    "/rfq/{vendor_id}",
    response_model=List[RFQ],
    summary="Requests for quotation (placeholder data)",
)
async def get_rfqs(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_rfqs(vendor_id)


@vendor_router.get(
    "/aging/{vendor_id}",
    response_model=List[AgingRecord],
    summary="Payment aging",
)
async def get_aging(
    vendor_id: str = Path(...),
    service: VendorPortalService = Depends(get_vendor_service),
):
    return await service.get_aging(vendor_id)
