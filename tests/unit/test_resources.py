"""
Tests for vendor id handling and upstream URL templates
"""

import pytest

from vendor_portal.adapters.sap.resources import (
    AGING,
    GOODS_RECEIPTS,
    INVOICE_PDF,
    INVOICES,
    MEMOS,
    PURCHASE_ORDERS,
    RFQS,
    VENDOR_LOGIN,
    VENDOR_PROFILE,
    odata_literal,
    pad_vendor_id,
)
from vendor_portal.core.exceptions import ValidationException

pytestmark = pytest.mark.unit


class TestPadVendorId:
    @pytest.mark.parametrize("vendor_id", ["1", "42", "12345", "123456789", "0000012345"])
    def test_short_ids_are_left_padded_to_ten(self, vendor_id):
        padded = pad_vendor_id(vendor_id)

        assert len(padded) == 10
        assert padded.endswith(vendor_id)
        assert set(padded[: 10 - len(vendor_id)]) <= {"0"}

    @pytest.mark.parametrize("vendor_id", ["12345678901", "V-0000000000001"])
    def test_long_ids_are_not_truncated(self, vendor_id):
        assert pad_vendor_id(vendor_id) == vendor_id

    def test_leading_dash_is_not_treated_as_sign(self):
        assert pad_vendor_id("-1") == "00000000-1"

    @pytest.mark.parametrize("vendor_id", [None, "", "   "])
    def test_blank_ids_are_rejected(self, vendor_id):
        with pytest.raises(ValidationException) as exc_info:
            pad_vendor_id(vendor_id)

        assert exc_info.value.status_code == 400


def test_odata_literal_doubles_quotes():
    assert odata_literal("0000012345") == "'0000012345'"
    assert odata_literal("O'Brien") == "'O''Brien'"


@pytest.mark.parametrize(
    "resource, key, path",
    [
        (VENDOR_LOGIN, "0000012345", "ZVENDOR_ATCLOGINSet(Lifnr='0000012345')"),
        (VENDOR_PROFILE, "0000012345", "ZATC_VENDORPROFILESet(VendorId='0000012345')"),
        (INVOICE_PDF, "5100000001", "ZATC_OINVSet('5100000001')/$value"),
        (GOODS_RECEIPTS, "0000012345", "ZATC_GOODSSet?$filter=(VendorId eq '0000012345')"),
        (INVOICES, "0000012345", "ZATC_INVOICETABLESet?$filter=(VendorId eq '0000012345')"),
        (MEMOS, "0000012345", "ZATC_MEMOSet?$filter=(VendorId eq '0000012345')"),
        (PURCHASE_ORDERS, "0000012345", "ZATC_PURCHASESet?$filter=(VendorId eq '0000012345')"),
        (RFQS, "0000012345", "ZATC_RFQSet?$filter=(Lifnr eq '0000012345')"),
        (AGING, "0000012345", "ZATC_V_AGINGSet?$filter=(VendorId eq '0000012345')"),
    ],
)
def test_resource_paths(resource, key, path):
    assert resource.path(key) == path


@pytest.mark.parametrize(
    "resource, key, path",
    [
        (VENDOR_PROFILE, "00000012?3", "ZATC_VENDORPROFILESet(VendorId='00000012%3F3')"),
        (INVOICE_PDF, "51#a", "ZATC_OINVSet('51%23a')/$value"),
        (INVOICE_PDF, "51/a b", "ZATC_OINVSet('51%2Fa%20b')/$value"),
        (MEMOS, "00000012&3", "ZATC_MEMOSet?$filter=(VendorId eq '00000012%263')"),
        (VENDOR_PROFILE, "O'Brien", "ZATC_VENDORPROFILESet(VendorId='O''Brien')"),
    ],
)
def test_keys_are_percent_encoded(resource, key, path):
    assert resource.path(key) == path


def test_only_goods_receipts_and_invoices_treat_empty_as_not_found():
    assert GOODS_RECEIPTS.not_found_message == "No goods receipts found"
    assert INVOICES.not_found_message == "No invoices found"
    for resource in (MEMOS, PURCHASE_ORDERS, AGING, RFQS):
        assert resource.not_found_message is None
