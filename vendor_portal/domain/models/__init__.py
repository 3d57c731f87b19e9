from vendor_portal.domain.models.records import (
    AgingRecord,
    DomainRecord,
    GoodsReceipt,
    Invoice,
    LoginRequest,
    Memo,
    MessageResponse,
    PurchaseOrder,
    RFQ,
    VendorProfile,
)

__all__ = [
    "AgingRecord",
    "DomainRecord",
    "GoodsReceipt",
    "Invoice",
    "LoginRequest",
    "Memo",
    "MessageResponse",
    "PurchaseOrder",
    "RFQ",
    "VendorProfile",
]
