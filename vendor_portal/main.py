from contextlib import asynccontextmanager
import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from vendor_portal.adapters.interfaces.connector import APIConnector
from vendor_portal.adapters.sap.client import SAPODataClient
from vendor_portal.api.error_handlers import register_exception_handlers
from vendor_portal.core.config import Settings, get_settings, load_env_file
from vendor_portal.core.logging import configure_logging, get_logger, set_correlation_id

logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    connector: Optional[APIConnector] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to the process-wide settings
        connector: Upstream connector, defaults to an SAPODataClient built
            from the settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    connector = connector or SAPODataClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up Vendor Portal Adapter")
        yield
        logger.info("Shutting down Vendor Portal Adapter")
        await app.state.connector.aclose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.connector = connector

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Correlation-ID"],
    )

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2)
                }
            }
        )
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    from vendor_portal.api.routes.health import health_router
    from vendor_portal.api.routes.vendor import vendor_router

    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(vendor_router, tags=["Vendor"])


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("vendor_portal.main:app", host=settings.HOST, port=settings.PORT)


# Load environment variables and configure logging early
load_env_file()
configure_logging()

app = create_application()


if __name__ == "__main__":
    run()
