"""
Decimal precision utilities for FamilyFolio.

Every numeric column in the database is NUMERIC(precision, scale). Incoming
values are checked against the column they will be stored in, so that what
is read back is exactly what was sent.

Usage:
    from backend.app.utils.decimal_utils import get_model_column_precision, check_fits_column

    precision, scale = get_model_column_precision(VehicleAsset, "purchase_price")
    # Returns: (15, 4)

    check_fits_column(Decimal("0.12345"), VehicleAsset, "purchase_price")
    # Raises ValueError: at most 4 decimal places
"""
from decimal import Decimal
from typing import Type, Tuple

from sqlalchemy import Numeric
from sqlmodel import SQLModel


def get_model_column_precision(model: Type[SQLModel], column_name: str) -> Tuple[int, int]:
    """
    Get (precision, scale) for a numeric column from SQLModel.

    Reads the column type definition from the model to get the actual
    precision and scale values, avoiding hardcoded constants.

    Args:
        model: SQLModel class (e.g., VehicleAsset, AssetOwnership)
        column_name: Column name (e.g., "purchase_price", "percentage")

    Returns:
        Tuple of (precision, scale)
        - precision: Total number of digits
        - scale: Number of decimal digits
        Example: (15, 4) means 15 total digits, 4 after decimal point

    Raises:
        ValueError: If column not found or not a Numeric type

    Example:
        >>> get_model_column_precision(VehicleAsset, "purchase_price")
        (15, 4)
        >>> get_model_column_precision(AssetOwnership, "percentage")
        (9, 6)
    """
    if not hasattr(model, '__table__'):
        raise ValueError(f"Model {model.__name__} has no __table__ attribute")

    table = model.__table__

    if column_name not in table.columns:
        raise ValueError(f"Column '{column_name}' not found in {model.__name__}")

    column_type = table.columns[column_name].type

    if not isinstance(column_type, Numeric):
        raise ValueError(
            f"Column '{column_name}' in {model.__name__} is not Numeric type "
            f"(found: {type(column_type).__name__})"
            )

    precision = column_type.precision
    scale = column_type.scale

    if precision is None or scale is None:
        raise ValueError(f"Column '{column_name}' in {model.__name__} has undefined precision/scale")

    return precision, scale


def check_fits_column(value: Decimal, model: Type[SQLModel], column_name: str) -> Decimal:
    """
    Reject a decimal that the column cannot store exactly.

    Nothing is rounded or truncated: a value with more fractional digits than
    the column scale, or more integer digits than precision - scale, raises.

    Returns:
        The value unchanged

    Raises:
        ValueError: Value does not fit the column

    Example:
        >>> check_fits_column(Decimal("33.333333"), AssetOwnership, "percentage")
        Decimal('33.333333')
        >>> check_fits_column(Decimal("33.3333334"), AssetOwnership, "percentage")
        ValueError: must have at most 6 decimal places
    """
    precision, scale = get_model_column_precision(model, column_name)

    # normalize() drops trailing zeros: 1.50000000 fits a scale of 4
    normalized = value.normalize()
    fractional_digits = max(0, -normalized.as_tuple().exponent)
    if fractional_digits > scale:
        raise ValueError(f"must have at most {scale} decimal places")

    integer_digits = max(0, normalized.adjusted() + 1) if normalized else 0
    if integer_digits > precision - scale:
        raise ValueError(f"must have at most {precision - scale} digits before the decimal point")

    return value
