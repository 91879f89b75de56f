"""
Input validation for asset registration.

Turns a raw request body (category field bag + owners) into a typed,
category-specific record. No side effects: nothing is read from or written
to the database here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from pydantic import BaseModel, ValidationError

from backend.app.db.models import AssetCategory
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import OwnerShare
from backend.app.services.asset_categories import AssetCategoryRegistry
from backend.app.services.asset_errors import InvalidInput

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidatedRegistration:
    """A create request that passed shape and type validation."""
    category: AssetCategory
    detail: BaseModel  # instance of the category's detail_schema
    owners: List[OwnerShare]


def format_validation_errors(errors: list[dict]) -> list[dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe {field, message} entries."""
    formatted = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        formatted.append({"field": loc or "body", "message": err.get("msg", "invalid value")})
    return formatted


def invalid_input_from_errors(errors: list[dict]) -> InvalidInput:
    """Build an InvalidInput naming every violation."""
    violations = format_validation_errors(errors)
    summary = "; ".join(f"{v['field']}: {v['message']}" for v in violations)
    return InvalidInput(f"Invalid input: {summary}", details={"errors": violations})


def validate_registration(category: str | AssetCategory, payload: Any) -> ValidatedRegistration:
    """
    Validate a raw create request for the given category.

    Args:
        category: AssetCategory, enum value ("VEHICLE") or URL slug ("vehicle", "real-estate")
        payload: Decoded JSON body

    Returns:
        ValidatedRegistration with the typed detail record and owner list

    Raises:
        InvalidInput: Unknown category, non-object body, or any field violation
    """
    try:
        descriptor = AssetCategoryRegistry.resolve(category)
    except ValueError as e:
        raise InvalidInput(str(e), details={"errors": [{"field": "category", "message": str(e)}]}) from e

    if not isinstance(payload, dict):
        raise InvalidInput(
            "Invalid input: request body must be a JSON object",
            details={"errors": [{"field": "body", "message": "must be a JSON object"}]},
            )

    try:
        request = descriptor.create_schema.model_validate(payload)
    except ValidationError as e:
        error = invalid_input_from_errors(e.errors())
        logger.info("Asset registration rejected", reason="invalid_input", category=descriptor.category.value,
                    errors=error.details["errors"])
        raise error from e

    # Values are already validated: construct without a second pass
    detail = descriptor.detail_schema.model_construct(**request.model_dump(include=set(descriptor.detail_field_names())))
    return ValidatedRegistration(category=descriptor.category, detail=detail, owners=list(request.owners))
