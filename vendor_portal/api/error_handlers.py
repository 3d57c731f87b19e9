from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vendor_portal.core.exceptions import (
    APIException,
    AuthenticationError,
    NotFoundError,
    ValidationException,
)
from vendor_portal.core.logging import get_logger

logger = get_logger(__name__)


def _log_data(request: Request, exc: APIException) -> dict:
    return {
        "data": {
            "request_path": request.url.path,
            "status_code": exc.status_code,
            "error_code": exc.code,
            "source": exc.source,
        }
    }


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Upstream failures were already logged by the ErrorHandler with their
    full details; this records what the client was sent.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    if isinstance(exc, (ValidationException, NotFoundError, AuthenticationError)):
        logger.info(f"{exc.source or 'Request'} rejected: {exc.detail}", extra=_log_data(request, exc))
    else:
        logger.error(f"{exc.source or 'Request'} failed: {exc.detail}", extra=_log_data(request, exc))

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body and parameter validation errors."""
    errors = [
        {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.info("Request validation error", extra={"data": {"request_path": request.url.path}})

    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"error": "Request validation error", "details": errors})
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
