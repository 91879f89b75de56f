"""
Common schemas shared across subsystems.

This module contains Pydantic building blocks used by the asset, auth and
family schemas.

**Domain Coverage**:
- FiniteDecimal / Percentage: JSON numbers parsed to exact Decimal values
- IsoDate: ISO-8601 date accepted as "YYYY-MM-DD" or a full timestamp
- CamelModel / CamelRequestModel: camelCase wire format on top of snake_case fields
- ErrorResponse: the structured error body returned by every failing endpoint

**Design Notes**:
- Numbers are parsed through their decimal string form (Decimal(str(v))) so that
  33.33 + 33.33 + 33.34 sums to exactly 100
- Decimals are rendered back as JSON numbers, not strings
- Booleans and numeric strings are rejected where a number is expected
"""
# Postpones evaluation of type hints to improve imports and performance. Also avoid circular import issues.
from __future__ import annotations

from datetime import date as date_type
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from backend.app.utils.datetime_utils import parse_ISO_date


# =============================================================================
# SHARED VALIDATORS (DRY)
# =============================================================================

def validate_finite_number(v: Any) -> Decimal:
    """
    Shared validator for numeric fields.

    Accepts:
    - int / float -> Decimal (via str(), so 0.1 stays 0.1)
    - Decimal -> Decimal

    Rejects booleans, strings and non-finite values (NaN, Infinity).
    """
    # bool is a subclass of int
    if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
        raise ValueError(f"must be a number, got {type(v).__name__}")
    try:
        value = v if isinstance(v, Decimal) else Decimal(str(v))
    except InvalidOperation:
        raise ValueError(f"invalid number: {v!r}")
    if not value.is_finite():
        raise ValueError("must be a finite number")
    return value


def validate_iso_date(v: Any) -> date_type:
    """Shared validator for date fields (ISO-8601 string or date object)."""
    return parse_ISO_date(v)


def validate_strict_int(v: Any) -> int:
    """Integer fields: JSON integers only, no bools, floats or digit strings."""
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"must be an integer, got {type(v).__name__}")
    return v


# =============================================================================
# ANNOTATED TYPES
# =============================================================================

FiniteDecimal = Annotated[
    Decimal,
    BeforeValidator(validate_finite_number),
    PlainSerializer(float, return_type=float, when_used="json"),
]

Percentage = Annotated[FiniteDecimal, Field(ge=0, le=100)]

IsoDate = Annotated[date_type, BeforeValidator(validate_iso_date)]

StrictInteger = Annotated[int, BeforeValidator(validate_strict_int)]

NonEmptyStr = Annotated[str, Field(min_length=1)]


# =============================================================================
# BASE MODELS
# =============================================================================

class CamelModel(BaseModel):
    """
    Base for schemas exchanged with the frontend.

    Fields are declared in snake_case and travel as camelCase on the wire
    (e.g. purchase_price <-> "purchasePrice"). Both spellings are accepted
    on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelRequestModel(CamelModel):
    """Request body base: unknown fields are rejected instead of silently dropped."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# =============================================================================
# ERROR RESPONSE
# =============================================================================

class ErrorResponse(BaseModel):
    """
    Structured error body.

    Example:
        {
          "kind": "OwnershipSumInvalid",
          "message": "Ownership percentages must sum to 100 (got 90)",
          "details": {"computed_sum": 90.0}
        }
    """
    kind: str = Field(..., description="Stable error kind, e.g. InvalidInput")
    message: str = Field(..., description="Human-readable message, safe to show to users")
    details: Optional[dict[str, Any]] = Field(default=None, description="Kind-specific diagnostics")
