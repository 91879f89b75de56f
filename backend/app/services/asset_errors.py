"""
Asset registration error taxonomy.

Every failure of the registration workflow (and of the read path) is an
AssetRegistrationError subclass carrying:
- kind: stable machine-readable name (rendered as "kind" in the error body)
- status_code: HTTP status the API layer maps it to
- message: safe, human-readable text (never storage-layer detail)
- details: optional kind-specific diagnostics
"""
from decimal import Decimal
from typing import Any, Optional


class AssetRegistrationError(Exception):
    """Base class for all asset registration errors."""
    kind: str = "AssetRegistrationError"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInput(AssetRegistrationError):
    """Malformed, missing or out-of-range request fields."""
    kind = "InvalidInput"
    status_code = 400


class OwnershipSumInvalid(AssetRegistrationError):
    """Ownership percentages do not sum to 100."""
    kind = "OwnershipSumInvalid"
    status_code = 400

    def __init__(self, computed_sum: Decimal):
        self.computed_sum = computed_sum
        super().__init__(
            f"Ownership percentages must sum to 100 (got {computed_sum.normalize():f})",
            details={"computed_sum": float(computed_sum)},
            )


class OwnerNotInFamily(AssetRegistrationError):
    """One or more owners are not active members of the requesting family."""
    kind = "OwnerNotInFamily"
    status_code = 400

    def __init__(self, user_ids: list[str]):
        self.user_ids = user_ids
        super().__init__(
            "All owners must be members of your family",
            details={"user_ids": user_ids},
            )


class PersistenceFailed(AssetRegistrationError):
    """The atomic write could not complete; nothing was persisted."""
    kind = "PersistenceFailed"
    status_code = 500

    def __init__(self, message: str = "Could not save the asset, no changes were made"):
        super().__init__(message)


class DetailMissing(AssetRegistrationError):
    """Stored asset has no detail row matching its category."""
    kind = "DetailMissing"
    status_code = 500

    def __init__(self, asset_id: str, category: str):
        self.asset_id = asset_id
        self.category = category
        label = category.replace("_", " ").capitalize()
        super().__init__(
            f"{label} data missing",
            details={"asset_id": asset_id, "category": category},
            )


class AssetNotFound(AssetRegistrationError):
    """No visible asset with the given id."""
    kind = "AssetNotFound"
    status_code = 404

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset {asset_id} not found", details={"asset_id": asset_id})


class Unauthenticated(AssetRegistrationError):
    """No valid requesting identity."""
    kind = "Unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
