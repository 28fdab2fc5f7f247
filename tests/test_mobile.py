"""
Test Suite for Egyptian Mobile Number Utilities

Tests validation, normalisation, formatting, carrier lookup, extraction from
free text (including bidi-garbled digit groups) and masking.
"""

import re

import pytest

from aqar.extraction.mobile import (
    extract_mobile,
    find_mobiles,
    format_mobile,
    get_carrier,
    handle_mobile_number,
    is_egyptian_mobile,
    mask_mobiles,
    normalize_mobile,
    validate_mobile,
)

VALID_FORMS = [
    "01012345678",
    "+201012345678",
    "201012345678",
    "00201012345678",
    "010 1234 5678",
    "010-1234-5678",
    "+20 10 1234 5678",
    "٠١٠١٢٣٤٥٦٧٨",
]


class TestNormalizeAndValidate:
    """Test canonical form reduction."""

    @pytest.mark.parametrize("number", VALID_FORMS)
    def test_reduces_to_canonical(self, number):
        assert normalize_mobile(number) == "01012345678"

    @pytest.mark.parametrize("number", VALID_FORMS)
    def test_normalized_form_validates(self, number):
        assert validate_mobile(normalize_mobile(number))

    @pytest.mark.parametrize("number", VALID_FORMS)
    def test_normalize_is_idempotent(self, number):
        once = normalize_mobile(number)

        assert normalize_mobile(once) == once

    @pytest.mark.parametrize("number", [
        "",
        None,
        "0101234567",     # 10 digits
        "010123456789",   # 12 digits
        "01312345678",    # carrier digit 3
        "02012345678",    # landline prefix
        "+20 12 345",     # truncated
        "not a number",
    ])
    def test_rejects_invalid(self, number):
        assert normalize_mobile(number) is None
        assert not validate_mobile(number)

    def test_alias(self):
        assert is_egyptian_mobile("01512345678")


class TestFormatAndCarrier:
    """Test display formatting and operator lookup."""

    def test_format(self):
        assert format_mobile("01012345678") == "+20 10 1234 5678"
        assert format_mobile("+201512345678") == "+20 15 1234 5678"

    def test_format_returns_invalid_unchanged(self):
        assert format_mobile("12345") == "12345"
        assert format_mobile(None) == ""

    @pytest.mark.parametrize("number,carrier", [
        ("01012345678", "Vodafone"),
        ("01112345678", "Etisalat"),
        ("01212345678", "Orange"),
        ("01512345678", "WE"),
    ])
    def test_carrier(self, number, carrier):
        assert get_carrier(number) == carrier

    def test_carrier_arabic(self):
        assert get_carrier("01012345678", lang="ar") == "فودافون"

    def test_carrier_invalid(self):
        assert get_carrier("01312345678") is None


class TestExtractMobile:
    """Test finding a number inside free text."""

    def test_compact(self):
        assert extract_mobile("اتصل 01012345678 الآن") == "01012345678"

    def test_country_coded_with_spaces(self):
        assert extract_mobile("Call +20 11 2345 6789 today") == "01123456789"

    def test_local_with_dashes(self):
        assert extract_mobile("موبايل: 012-3456-7890") == "01234567890"

    def test_arabic_digits(self):
        assert extract_mobile("للتواصل ٠١٥١٢٣٤٥٦٧٨") == "01512345678"

    def test_bidi_split_digits(self):
        """Groups reversed by right-to-left rendering are put back in order."""
        assert extract_mobile("للتواصل 26433244 10 20+") == "01026433244"

    def test_split_digits_must_validate(self):
        assert extract_mobile("26433244 30 20+") is None

    def test_first_number_wins(self):
        assert extract_mobile("01012345678 or 01112345678") == "01012345678"

    def test_no_number(self):
        assert extract_mobile("شقة للبيع") is None
        assert extract_mobile("") is None
        assert extract_mobile(None) is None

    def test_find_all_keeps_duplicates(self):
        text = "01012345678 / +20 10 1234 5678 / 01112345678"

        assert find_mobiles(text) == ["01012345678", "01012345678", "01112345678"]


class TestMaskMobiles:
    """Test privacy masking in free text."""

    TEXT = "للتواصل 01012345678 أو +201112345678 رقم الشقة 2500000"

    def test_authenticated_sees_formatted(self):
        masked = mask_mobiles(self.TEXT, is_authenticated=True)

        assert "+20 10 1234 5678" in masked
        assert "+20 11 1234 5678" in masked

    def test_authenticated_keeps_all_digits(self):
        masked = mask_mobiles("call 01012345678", is_authenticated=True)

        assert len(re.sub(r"\D", "", masked)) >= 11

    def test_anonymous_reveals_only_prefix(self):
        masked = mask_mobiles(self.TEXT, is_authenticated=False)

        assert "01*********" in masked
        assert "+2*********" in masked
        assert "12345678" not in masked

    def test_non_mobile_runs_untouched(self):
        masked = mask_mobiles(self.TEXT, is_authenticated=False)

        assert "2500000" in masked

    def test_invalid_mobile_shape_untouched(self):
        assert mask_mobiles("code 01312345678") == "code 01312345678"

    def test_empty(self):
        assert mask_mobiles("") == ""
        assert mask_mobiles(None) == ""

    def test_mask_settings(self, monkeypatch, reset_settings):
        monkeypatch.setenv("MASK_CHAR", "x")
        monkeypatch.setenv("MASK_PREFIX_LENGTH", "3")

        assert mask_mobiles("01012345678") == "010xxxxxxxxx"


class TestHandleMobileNumber:
    """Test the contact-field presentation bundle."""

    def test_anonymous(self):
        display = handle_mobile_number("01012345678", is_authenticated=False)

        assert display.is_valid
        assert display.formatted == "+20 10 1234 5678"
        assert display.masked == "01*********"
        assert display.displayed == display.masked

    def test_authenticated(self):
        display = handle_mobile_number("01012345678", is_authenticated=True)

        assert display.displayed == "+20 10 1234 5678"

    def test_invalid_number(self):
        display = handle_mobile_number("12345", is_authenticated=True)

        assert not display.is_valid
        assert display.displayed == "12345"

    def test_empty(self):
        display = handle_mobile_number(None)

        assert display.original == ""
        assert not display.is_valid
