"""
Test Suite for Listing Completeness Validation
"""

import pytest

from aqar.quality import PropertyValidation, validate_property_data


class TestValidatePropertyData:
    """Test required/optional field checks."""

    def test_complete_listing(self, complete_listing_record):
        result = validate_property_data(complete_listing_record)

        assert result.is_valid
        assert result.completeness_score == 100
        assert result.missing_required == []
        assert result.suggestions == []

    def test_missing_required(self, complete_listing_record):
        del complete_listing_record["price"]
        complete_listing_record["location"] = ""

        result = validate_property_data(complete_listing_record)

        assert not result.is_valid
        assert result.missing_required == ["location", "price"]
        assert result.suggestions == ["Add required fields: location, price"]

    def test_missing_optional_only(self):
        record = {"title": "Villa", "location": "Zayed", "price": 9000000, "property_type": "villa"}

        result = validate_property_data(record)

        assert result.is_valid
        assert result.missing_optional == ["description", "agent_name", "mobile", "area_size", "rooms"]
        assert result.completeness_score == 44
        assert result.suggestions == [
            "Consider adding optional fields: description, agent_name, mobile, area_size, rooms"
        ]

    def test_zero_is_a_value(self, complete_listing_record):
        complete_listing_record["rooms"] = 0

        assert "rooms" not in validate_property_data(complete_listing_record).missing_optional

    def test_null_marker_is_missing(self, complete_listing_record):
        complete_listing_record["title"] = "null"

        assert validate_property_data(complete_listing_record).missing_required == ["title"]

    def test_empty_mapping(self):
        result = validate_property_data({})

        assert not result.is_valid
        assert result.completeness_score == 0

    @pytest.mark.parametrize("value", [None, "listing", 42])
    def test_non_mapping(self, value):
        result = validate_property_data(value)

        assert isinstance(result, PropertyValidation)
        assert not result.is_valid
        assert result.suggestions == ["Property data is required"]

    def test_to_dict(self, complete_listing_record):
        data = validate_property_data(complete_listing_record).to_dict()

        assert data["is_valid"] is True
        assert data["completeness_score"] == 100
