"""
pytest configuration and fixtures for the vendor portal adapter tests
"""

import re
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vendor_portal.adapters.sap.client import SAPODataClient
from vendor_portal.core.config import Settings
from vendor_portal.main import create_application

SAP_BASE_URL = "https://sap.example.test/sap/opu/odata/sap/ZVENDOR_PORTAL_SRV"
_BASE_PATH = httpx.URL(SAP_BASE_URL).path.rstrip("/") + "/"


class FakeSAP:
    """
    Stand-in for the SAP Gateway, plugged into httpx.MockTransport.

    Canned responses are registered per entity set; every request is kept
    for assertions.
    """

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def reply(
        self,
        entity_set: str,
        json: Any = None,
        status_code: int = 200,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            return httpx.Response(status_code, json=json, headers=headers)

        self.routes[entity_set] = respond

    def fail(self, entity_set: str, error: Callable[[httpx.Request], Exception]) -> None:
        """Raise a transport error for ``entity_set``, or for every set with "*"."""
        def respond(request: httpx.Request) -> httpx.Response:
            raise error(request)

        self.routes[entity_set] = respond

    @property
    def last_url(self) -> str:
        return unquote(str(self.requests[-1].url))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        resource = request.url.path[len(_BASE_PATH):]
        entity_set = re.match(r"[A-Za-z_]+", resource).group(0)
        handler = self.routes.get(entity_set) or self.routes.get("*")
        if handler is None:
            return httpx.Response(404, json={"error": {"message": f"Resource {entity_set} not found"}})
        return handler(request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        SAP_BASE_URL=SAP_BASE_URL,
        SAP_USERNAME="portal_user",
        SAP_PASSWORD="portal_pass",
        SAP_TIMEOUT=5.0,
        ENABLE_STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def sap() -> FakeSAP:
    return FakeSAP()


@pytest_asyncio.fixture
async def client(settings, sap):
    """API client driving the app in-process against the fake SAP upstream"""
    connector = SAPODataClient(settings, transport=httpx.MockTransport(sap))
    app = create_application(settings, connector)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

    await connector.aclose()
