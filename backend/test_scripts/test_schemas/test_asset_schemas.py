"""
Tests for asset registration input validation.

Covers the per-category request schemas and validate_registration(): shape,
types, ISO dates, finite numbers, percentage range, owners list rules and
category resolution. No database involved.

Reference: backend/app/schemas/assets.py, backend/app/services/asset_validation.py
"""
from datetime import date
from decimal import Decimal

import pytest

from backend.app.db.models import AssetCategory
from backend.app.schemas.assets import OwnerShare, VehicleCreateRequest, VehicleDetailFields
from backend.app.services.asset_errors import InvalidInput
from backend.app.services.asset_validation import validate_registration
from backend.test_scripts.asset_payloads import FULL_PAYLOADS, EXPECTED_CATEGORY, bmw_payload, full_payload


def _error_fields(exc: InvalidInput) -> set[str]:
    return {err["field"] for err in exc.details["errors"]}


# ============================================================================
# TESTS: accepted input
# ============================================================================

class TestValidRequests:
    """Requests that must pass validation."""

    @pytest.mark.parametrize("slug", sorted(FULL_PAYLOADS))
    def test_full_payload_every_category(self, slug):
        """VAL-001: Full payload validates for every category."""
        result = validate_registration(slug, full_payload(slug))

        assert result.category.value == EXPECTED_CATEGORY[slug]
        assert len(result.owners) == 2

    def test_minimal_vehicle(self):
        """VAL-002: Required fields only; optionals stay None, not zero."""
        result = validate_registration("vehicle", bmw_payload())
        detail = result.detail

        assert isinstance(detail, VehicleDetailFields)
        assert detail.vehicle_name == "BMW X5"
        assert detail.purchase_price == Decimal("300000")
        assert detail.make is None
        assert detail.year is None
        assert detail.outstanding_loan is None
        assert detail.purchase_date is None

    def test_typed_values(self):
        """VAL-003: Numbers become Decimal, dates become date, year stays int."""
        result = validate_registration("vehicle", full_payload("vehicle"))
        detail = result.detail

        assert detail.outstanding_loan == Decimal("50000.5")
        assert detail.purchase_date == date(2021, 3, 15)
        assert detail.year == 2021
        assert result.owners[0].percentage == Decimal("60")

    def test_detail_excludes_owners(self):
        """VAL-004: The typed detail record carries detail fields only."""
        result = validate_registration("vehicle", bmw_payload())

        assert "owners" not in result.detail.model_dump()

    def test_float_percentages_parsed_exactly(self):
        """VAL-005: 33.33 is parsed as Decimal('33.33'), not its binary float value."""
        owners = [{"userId": "u1", "percentage": 33.33}, {"userId": "u2", "percentage": 66.67}]
        result = validate_registration("vehicle", bmw_payload(owners))

        assert result.owners[0].percentage == Decimal("33.33")
        assert result.owners[1].percentage == Decimal("66.67")

    @pytest.mark.parametrize("raw", ["vehicle", "VEHICLE", "Vehicle", AssetCategory.VEHICLE])
    def test_category_spellings(self, raw):
        """VAL-006: Slug, enum value and enum member all resolve."""
        assert validate_registration(raw, bmw_payload()).category is AssetCategory.VEHICLE

    def test_iso_timestamp_date_reduced_to_date(self):
        """VAL-007: Full ISO timestamps (JS toISOString) are accepted as dates."""
        body = bmw_payload()
        body["purchaseDate"] = "2021-03-15T00:00:00.000Z"
        result = validate_registration("vehicle", body)

        assert result.detail.purchase_date == date(2021, 3, 15)

    def test_snake_case_keys_accepted(self):
        """VAL-008: Field names are accepted alongside camelCase aliases."""
        body = {
            "vehicle_name": "Vespa",
            "vehicle_type": "scooter",
            "purchase_price": 4000,
            "current_value": 2500,
            "owners": [{"user_id": "u1", "percentage": 100}],
            }
        result = validate_registration("vehicle", body)

        assert result.detail.vehicle_name == "Vespa"
        assert result.owners[0].user_id == "u1"

    def test_zero_percentage_owner_allowed(self):
        """VAL-009: 0 is inside [0, 100]."""
        owners = [{"userId": "u1", "percentage": 100}, {"userId": "u2", "percentage": 0}]
        result = validate_registration("vehicle", bmw_payload(owners))

        assert result.owners[1].percentage == Decimal("0")


# ============================================================================
# TESTS: rejected input
# ============================================================================

class TestInvalidRequests:
    """Requests that must fail with InvalidInput, before any side effect."""

    def test_missing_required_field(self):
        """VAL-101: Missing vehicleName is named in the error."""
        body = bmw_payload()
        del body["vehicleName"]

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert "vehicleName" in _error_fields(exc_info.value)
        assert exc_info.value.status_code == 400
        assert exc_info.value.kind == "InvalidInput"

    def test_multiple_violations_all_reported(self):
        """VAL-102: Every violation is listed, not just the first."""
        body = bmw_payload()
        del body["vehicleName"]
        body["currentValue"] = "a lot"

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert {"vehicleName", "currentValue"} <= _error_fields(exc_info.value)

    @pytest.mark.parametrize("bad_value", ["300000", True, None, [1], {"amount": 1}])
    def test_number_must_be_json_number(self, bad_value):
        """VAL-103: Strings, booleans, null and containers are not numbers."""
        body = bmw_payload()
        body["purchasePrice"] = bad_value

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert "purchasePrice" in _error_fields(exc_info.value)

    @pytest.mark.parametrize("bad_value", [float("nan"), float("inf"), float("-inf")])
    def test_number_must_be_finite(self, bad_value):
        """VAL-104: NaN and infinities are rejected."""
        body = bmw_payload()
        body["currentValue"] = bad_value

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    @pytest.mark.parametrize("bad_date", ["15/03/2021", "2021-13-01", "yesterday", 20210315])
    def test_non_iso_date(self, bad_date):
        """VAL-105: Dates must be ISO-8601."""
        body = bmw_payload()
        body["purchaseDate"] = bad_date

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert "purchaseDate" in _error_fields(exc_info.value)

    @pytest.mark.parametrize("bad_year", [2021.5, "2021", True])
    def test_year_must_be_integer(self, bad_year):
        """VAL-106: year accepts JSON integers only."""
        body = bmw_payload()
        body["year"] = bad_year

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    @pytest.mark.parametrize("percentage", [-1, 100.01, 150])
    def test_percentage_out_of_range(self, percentage):
        """VAL-107: Percentages outside [0, 100] are rejected."""
        owners = [{"userId": "u1", "percentage": percentage}]

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", bmw_payload(owners))

    def test_empty_owners(self):
        """VAL-108: At least one owner is required."""
        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", bmw_payload(owners=[]))

        assert "owners" in _error_fields(exc_info.value)

    def test_missing_owners(self):
        """VAL-109: owners is required."""
        body = bmw_payload()
        del body["owners"]

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    def test_duplicate_owner(self):
        """VAL-110: The same userId twice is rejected."""
        owners = [{"userId": "u1", "percentage": 50}, {"userId": "u1", "percentage": 50}]

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", bmw_payload(owners))

        assert "Duplicate owner" in exc_info.value.message

    def test_unknown_field(self):
        """VAL-111: Unknown fields are rejected instead of silently dropped."""
        body = bmw_payload()
        body["colour"] = "black"

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert "colour" in _error_fields(exc_info.value)

    def test_field_of_other_category(self):
        """VAL-112: A real-estate field is unknown to a vehicle request."""
        body = bmw_payload()
        body["propertyName"] = "Villa"

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    def test_unknown_category(self):
        """VAL-113: Unknown category is InvalidInput."""
        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("spaceship", bmw_payload())

        assert "spaceship" in exc_info.value.message

    @pytest.mark.parametrize("body", [[], "vehicle", 42, None])
    def test_body_must_be_object(self, body):
        """VAL-114: Non-object bodies are rejected."""
        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    def test_empty_required_string(self):
        """VAL-115: Required names cannot be empty strings."""
        body = bmw_payload()
        body["vehicleName"] = ""

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", body)

    def test_owner_user_id_must_be_string(self):
        """VAL-116: userId is a string."""
        owners = [{"userId": 1, "percentage": 100}]

        with pytest.raises(InvalidInput):
            validate_registration("vehicle", bmw_payload(owners))

    @pytest.mark.parametrize("field,value,message", [
        ("purchasePrice", 0.12345, "at most 4 decimal places"),
        ("currentValue", 123456789012, "at most 11 digits before the decimal point"),
        ("outstandingLoan", 1e16, "at most 11 digits before the decimal point"),
        ])
    def test_amount_must_fit_column(self, field, value, message):
        """VAL-117: Amounts are rejected, never rounded, when the column cannot hold them."""
        body = bmw_payload()
        body[field] = value

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", body)

        assert exc_info.value.details["errors"][0]["field"] == field
        assert message in exc_info.value.details["errors"][0]["message"]

    def test_percentage_must_fit_column(self):
        """VAL-118: Percentages keep at most 6 decimal places."""
        owners = [{"userId": "u1", "percentage": 33.3333334}, {"userId": "u2", "percentage": 66.6666666}]

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration("vehicle", bmw_payload(owners))

        assert _error_fields(exc_info.value) == {"owners.0.percentage", "owners.1.percentage"}

    @pytest.mark.parametrize("slug,field", [
        ("real-estate", "areaSqFt"),
        ("bank-account", "interestRate"),
        ("investment", "initialInvestment"),
        ("business", "annualRevenue"),
        ("other", "currentValuation"),
        ])
    def test_every_category_checks_its_columns(self, slug, field):
        """VAL-119: The column check applies to the decimal fields of every category."""
        body = full_payload(slug)
        body[field] = 1.23456

        with pytest.raises(InvalidInput) as exc_info:
            validate_registration(slug, body)

        assert _error_fields(exc_info.value) == {field}


# ============================================================================
# TESTS: schema models directly
# ============================================================================

class TestSchemaModels:
    """Direct checks on the pydantic models."""

    def test_camel_case_serialization(self):
        """SCH-001: Dumping by alias yields the wire format."""
        request = VehicleCreateRequest.model_validate(bmw_payload())
        dumped = request.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert dumped["vehicleName"] == "BMW X5"
        assert dumped["purchasePrice"] == 300000.0
        assert dumped["owners"][0] == {"userId": "u1", "percentage": 60.0}

    def test_owner_share_json_number(self):
        """SCH-002: Percentages serialize to JSON numbers, not strings."""
        share = OwnerShare(user_id="u1", percentage=Decimal("12.5"))

        assert share.model_dump_json(by_alias=True) == '{"userId":"u1","percentage":12.5}'
