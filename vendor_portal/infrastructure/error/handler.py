"""
Error handling module for the upstream SAP calls.
Turns failed calls into API exceptions carrying the client error envelope.
"""
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from vendor_portal.core.exceptions import (
    APIException,
    UpstreamConnectionError,
    UpstreamHTTPError,
    UpstreamPayloadError,
)


class ErrorCategory(str, Enum):
    """Categorization of upstream failures for logging."""
    UPSTREAM_HTTP = "upstream_http"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    INVALID_PAYLOAD = "invalid_payload"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    MEDIUM = "medium"
    HIGH = "high"


class ErrorDetails(BaseModel):
    """Structured error details for consistency in logging."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str
    http_status_code: Optional[int] = None
    context: Dict[str, Any] = {}


def response_details(response: httpx.Response) -> Any:
    """Return an upstream error body as JSON when it parses, else as text."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def failure_message(exception: Exception) -> str:
    """Message of an exception, never empty."""
    return str(exception) or type(exception).__name__


class ErrorHandler:
    """
    Central processing of failed upstream calls.

    Every failure is categorized and logged with its context label, then
    converted into the APIException that renders the client response.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_error(
        self,
        exception: Exception,
        source: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> APIException:
        """
        Log a failed upstream call and build the exception to raise.

        Args:
            exception: What the HTTP client or the mapping step raised
            source: Context label of the operation, e.g. "SAP Memo Error"
            context: Additional context for the log record

        Returns:
            APIException: UpstreamHTTPError when the upstream answered,
            UpstreamConnectionError when it could not be reached, and
            UpstreamPayloadError when its answer could not be mapped
        """
        error_details = self.categorize_error(exception, source, context or {})
        self.log_error(error_details)

        if isinstance(exception, httpx.HTTPStatusError):
            response = exception.response
            return UpstreamHTTPError(
                source=source,
                status_code=response.status_code,
                status_text=response.reason_phrase,
                details=response_details(response),
                context=error_details.context,
            )
        if error_details.category == ErrorCategory.INVALID_PAYLOAD:
            return UpstreamPayloadError(
                source=source,
                message=error_details.message,
                context=error_details.context,
            )
        return UpstreamConnectionError(
            source=source,
            message=error_details.message,
            code=f"upstream_{error_details.category.value}_error",
            context=error_details.context,
            original_exception=exception,
        )

    def categorize_error(
        self,
        exception: Exception,
        source: str,
        context: Dict[str, Any],
    ) -> ErrorDetails:
        """
        Categorize an error based on the exception type and build error details.

        Args:
            exception: The exception that occurred
            source: Context label
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        http_status_code = None
        severity = ErrorSeverity.HIGH

        if isinstance(exception, httpx.HTTPStatusError):
            category = ErrorCategory.UPSTREAM_HTTP
            http_status_code = exception.response.status_code
            if http_status_code < 500:
                severity = ErrorSeverity.MEDIUM
        elif isinstance(exception, httpx.TimeoutException):
            category = ErrorCategory.TIMEOUT
        elif isinstance(exception, httpx.HTTPError):
            category = ErrorCategory.CONNECTION
        else:
            category = ErrorCategory.INVALID_PAYLOAD

        if isinstance(exception, httpx.HTTPError):
            try:
                context = {**context, "url": str(exception.request.url)}
            except RuntimeError:
                # request is not bound on errors raised outside a client call
                pass

        return ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=category,
            severity=severity,
            message=failure_message(exception),
            source=source,
            http_status_code=http_status_code,
            context=context,
        )

    def log_error(self, error_details: ErrorDetails) -> None:
        """
        Log error details at the level matching their severity.

        Args:
            error_details: Structured error information
        """
        log_data = error_details.model_dump(mode="json", exclude_none=True)
        message = f"{error_details.source}: {error_details.message}"

        if error_details.severity == ErrorSeverity.HIGH:
            self.logger.error(message, extra={"data": log_data})
        else:
            self.logger.warning(message, extra={"data": log_data})
