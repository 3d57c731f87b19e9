from abc import ABC, abstractmethod
from typing import Any, Optional
import logging
import ssl

logger = logging.getLogger(__name__)


class RequestConfig:
    """Transport settings for upstream requests."""

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        ca_bundle: Optional[str] = None
    ):
        """
        Initialize RequestConfig.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            ca_bundle: Optional CA bundle file to verify the upstream against
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.ca_bundle = ca_bundle

    def ssl_verification(self) -> Any:
        """Value for the HTTP client's ``verify`` argument."""
        if not self.verify_ssl:
            return False
        if self.ca_bundle:
            # system roots stay trusted, the bundle is added on top
            context = ssl.create_default_context()
            context.load_verify_locations(cafile=self.ca_bundle)
            return context
        return True


class APIConnector(ABC):
    """
    Abstract base interface for upstream API connectors.

    A connector performs exactly one GET per call and raises the
    normalized API exception when it fails.
    """

    @abstractmethod
    async def get_json(self, path: str, source: str) -> Any:
        """
        Fetch a JSON document.

        Args:
            path: Resource path relative to the base URL
            source: Context label used when the call fails

        Raises:
            APIException: If the call fails or the body is not JSON
        """

    @abstractmethod
    async def get_bytes(self, path: str, source: str, accept: str) -> bytes:
        """
        Fetch a binary payload.

        Raises:
            APIException: If the call fails
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Release pooled connections."""

    def build_url(self, base_url: str, path: str) -> str:
        """
        Builds a complete URL from the base URL and a resource path.

        Args:
            base_url: The base URL of the API
            path: The path to the specific resource

        Returns:
            str: The complete URL
        """
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
