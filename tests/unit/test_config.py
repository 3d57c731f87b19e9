"""
Tests for settings and upstream transport configuration
"""

import ssl

import pytest

from vendor_portal.adapters.interfaces.connector import RequestConfig
from vendor_portal.core.config import Settings

pytestmark = pytest.mark.unit


def test_defaults_verify_tls_and_bound_the_timeout():
    settings = Settings()

    assert settings.SAP_VERIFY_SSL is True
    assert settings.SAP_TIMEOUT > 0
    assert settings.PORT == 3000


def test_base_url_trailing_slash_is_removed():
    settings = Settings(SAP_BASE_URL="https://sap.example.test/sap/opu/odata/sap/SRV/")

    assert settings.SAP_BASE_URL == "https://sap.example.test/sap/opu/odata/sap/SRV"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("*", ["*"]),
        ("http://localhost:5173, https://portal.example.test", ["http://localhost:5173", "https://portal.example.test"]),
        ('["https://portal.example.test"]', ["https://portal.example.test"]),
    ],
)
def test_cors_origins(raw, expected):
    assert Settings(BACKEND_CORS_ORIGINS=raw).cors_origins == expected


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("SAP_VERIFY_SSL", "false")
    monkeypatch.setenv("SAP_USERNAME", "portal_user")

    settings = Settings()

    assert settings.SAP_VERIFY_SSL is False
    assert settings.SAP_USERNAME == "portal_user"


def test_ssl_verification_is_explicit_opt_out():
    assert RequestConfig().ssl_verification() is True
    assert RequestConfig(verify_ssl=False).ssl_verification() is False


class RecordingContext:
    def __init__(self, cafile=None):
        self.default_cafile = cafile
        self.loaded = []

    def load_verify_locations(self, cafile=None):
        self.loaded.append(cafile)


def test_ca_bundle_is_added_to_system_roots(monkeypatch):
    monkeypatch.setattr(ssl, "create_default_context", RecordingContext)

    verify = RequestConfig(ca_bundle="/etc/ssl/sap-ca.pem").ssl_verification()

    assert isinstance(verify, RecordingContext)
    # built without cafile, so the default trust store is loaded
    assert verify.default_cafile is None
    assert verify.loaded == ["/etc/ssl/sap-ca.pem"]
