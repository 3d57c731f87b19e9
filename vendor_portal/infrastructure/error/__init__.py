"""
Error handling package for the Vendor Portal Adapter.
Provides centralized processing and categorization of upstream failures.
"""

from vendor_portal.infrastructure.error.handler import (
    ErrorHandler,
    ErrorDetails,
    ErrorCategory,
    ErrorSeverity
)

__all__ = [
    "ErrorHandler",
    "ErrorDetails",
    "ErrorCategory",
    "ErrorSeverity",
]
