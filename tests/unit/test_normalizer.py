"""
Tests for SAP date parsing and OData envelope handling
"""

import pytest

from vendor_portal.adapters.sap.normalizer import ODataNormalizer, parse_sap_date
from vendor_portal.domain.models.records import GoodsReceipt

pytestmark = pytest.mark.unit


class TestParseSapDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("/Date(1717027200000)/", "2024-05-30"),
            # time of day is dropped, UTC
            ("/Date(1717113599999)/", "2024-05-30"),
            ("/Date(0)/", "1970-01-01"),
            ("20250530", "2025-05-30"),
            # no calendar validation on compact dates
            ("20250230", "2025-02-30"),
        ],
    )
    def test_supported_encodings(self, value, expected):
        assert parse_sap_date(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "notadate", "2025-05-30", "2025053", "202505301", 20250530,
         "/Date(-1000)/", "/Date(99999999999999999999)/", "/Date(" + "9" * 5000 + ")/"],
    )
    def test_anything_else_is_none(self, value):
        assert parse_sap_date(value) is None


class TestODataNormalizer:
    def test_extract_entity(self):
        assert ODataNormalizer.extract_entity({"d": {"VendorId": "1"}}) == {"VendorId": "1"}
        assert ODataNormalizer.extract_entity({"d": None}) is None
        assert ODataNormalizer.extract_entity({}) is None

    def test_empty_entity_is_still_an_entity(self):
        assert ODataNormalizer.extract_entity({"d": {}}) == {}

    @pytest.mark.parametrize("payload", [{}, {"d": None}, {"d": {}}, {"d": {"results": None}}])
    def test_missing_results_default_to_empty(self, payload):
        assert ODataNormalizer.extract_results(payload) == []

    @pytest.mark.parametrize("payload", [[], "text", {"d": "x"}, {"d": {"results": "x"}},
                                         {"d": {"results": [1, 2]}}])
    def test_malformed_envelopes_raise(self, payload):
        with pytest.raises(ValueError):
            ODataNormalizer.extract_results(payload)

    def test_normalize_many(self):
        records = ODataNormalizer.normalize_many(
            [{"MaterialDoc": "1", "PostDate": "20240101"}, {"MaterialDoc": "2"}],
            GoodsReceipt,
        )

        assert [r.material_doc for r in records] == ["1", "2"]
        assert records[0].post_date == "2024-01-01"
        assert records[1].post_date is None
