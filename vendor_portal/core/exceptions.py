from fastapi import status
from typing import Any, Dict, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class. ``source`` is the
    context label of the operation that failed (e.g. "SAP Memo Error").
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        source: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.source = source
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the response body sent to the client."""
        return {"error": self.detail}


class ValidationException(APIException):
    """Exception raised when a required input is missing."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )


class NotFoundError(APIException):
    """Exception raised when the upstream system has nothing for the request."""

    def __init__(
        self,
        detail: str,
        code: str = "not_found_error",
        source: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            source=source,
            context=context
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.detail}


class AuthenticationError(APIException):
    """Exception raised when vendor login fails."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        code: str = "authentication_error",
        source: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code=code,
            source=source,
            context=context
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.detail}


class UpstreamHTTPError(APIException):
    """The upstream system answered with a non-2xx status."""

    def __init__(
        self,
        source: str,
        status_code: int,
        status_text: str,
        details: Any = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status_code,
            detail=f"{source}: upstream returned {status_code} {status_text}".rstrip(),
            code="upstream_http_error",
            source=source,
            context=context
        )
        self.status_text = status_text
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.source,
            "statusText": self.status_text,
            "details": self.details,
        }


class UpstreamConnectionError(APIException):
    """The upstream call failed before any response was received."""

    def __init__(
        self,
        source: str,
        message: str,
        code: str = "upstream_connection_error",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
            code=code,
            source=source,
            context=context
        )
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        return {"error": f"{self.source} failed", "details": self.detail}


class UpstreamPayloadError(APIException):
    """The upstream system answered 2xx with a body that cannot be mapped."""

    def __init__(
        self,
        source: str,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=message,
            code="upstream_payload_error",
            source=source,
            context=context
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"error": f"{self.source} failed", "details": self.detail}
