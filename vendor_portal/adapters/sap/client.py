import json
from typing import Any, Optional

import httpx

from vendor_portal.adapters.interfaces.connector import APIConnector, RequestConfig
from vendor_portal.core.config import Settings
from vendor_portal.core.logging import get_logger
from vendor_portal.infrastructure.error.handler import ErrorHandler

logger = get_logger(__name__)


class SAPODataClient(APIConnector):
    """
    Client for the SAP Gateway OData service behind the vendor portal.

    Every request is a GET authenticated with the configured basic-auth
    credentials. Failures are handed to the ErrorHandler, which logs them
    and returns the exception raised to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize the client.

        Args:
            settings: Application settings holding the upstream URL and credentials
            transport: Optional transport, used to stub the upstream in tests
            error_handler: Optional error handler, defaults to one logging here
        """
        self.base_url = settings.SAP_BASE_URL
        self.config = RequestConfig(
            timeout=settings.SAP_TIMEOUT,
            verify_ssl=settings.SAP_VERIFY_SSL,
            ca_bundle=settings.SAP_CA_BUNDLE
        )
        self.error_handler = error_handler or ErrorHandler(logger)

        if not self.base_url:
            logger.warning("SAP_BASE_URL is not set, upstream calls will fail")
        if not self.config.verify_ssl:
            logger.warning(
                "TLS certificate verification for the SAP upstream is disabled",
                extra={"data": {"base_url": self.base_url}}
            )

        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(settings.SAP_USERNAME, settings.SAP_PASSWORD),
            timeout=self.config.timeout,
            verify=self.config.ssl_verification(),
            transport=transport
        )

    async def _get(self, path: str, source: str, accept: str) -> httpx.Response:
        url = self.build_url(self.base_url, path)
        logger.debug(f"GET {url}")
        try:
            response = await self._client.get(url, headers={"Accept": accept})
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise self.error_handler.handle_error(e, source) from e
        return response

    async def get_json(self, path: str, source: str) -> Any:
        response = await self._get(path, source, "application/json")
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise self.error_handler.handle_error(
                ValueError(f"Upstream response is not valid JSON: {e}"), source
            ) from e

    async def get_bytes(self, path: str, source: str, accept: str = "application/pdf") -> bytes:
        response = await self._get(path, source, accept)
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()
