"""
Services package.
Business logic for asset registration, families and authentication.

Asset registration workflow:
- validate_registration: shape/type checks (InvalidInput)
- OwnershipVerifier: percentage sum + family membership
- AssetPersister: atomic Asset -> Detail -> Ownership insert, read-side assembly
- AssetRegistrationService: the three steps wired together
"""
from backend.app.services.asset_errors import (
    AssetRegistrationError,
    InvalidInput,
    OwnershipSumInvalid,
    OwnerNotInFamily,
    PersistenceFailed,
    DetailMissing,
    AssetNotFound,
    Unauthenticated,
    )
from backend.app.services.asset_categories import AssetCategoryRegistry, register_category
from backend.app.services.asset_validation import ValidatedRegistration, validate_registration
from backend.app.services.ownership_verifier import OwnershipVerifier
from backend.app.services.asset_persister import AssetPersister, assemble_asset
from backend.app.services.asset_registration import AssetRegistrationService
from backend.app.services.auth_service import RequestingIdentity

__all__ = [
    "AssetRegistrationError",
    "InvalidInput",
    "OwnershipSumInvalid",
    "OwnerNotInFamily",
    "PersistenceFailed",
    "DetailMissing",
    "AssetNotFound",
    "Unauthenticated",
    "AssetCategoryRegistry",
    "register_category",
    "ValidatedRegistration",
    "validate_registration",
    "OwnershipVerifier",
    "AssetPersister",
    "assemble_asset",
    "AssetRegistrationService",
    "RequestingIdentity",
    ]
