"""
Asset Registration Service

One generic workflow for every asset category:

    validate_registration -> OwnershipVerifier.verify -> AssetPersister.persist

Strictly sequential within a request. Validation and ownership failures are
raised before any write is attempted.
"""
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import AssetCategory
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import AssetResponseBase
from backend.app.services.asset_errors import InvalidInput
from backend.app.services.asset_persister import AssetPersister
from backend.app.services.asset_validation import validate_registration
from backend.app.services.auth_service import RequestingIdentity
from backend.app.services.ownership_verifier import OwnershipVerifier

logger = get_logger(__name__)


class AssetRegistrationService:
    """
    Service for registering and reading family assets.

    All methods are async and expect an AsyncSession. Unlike read-only
    services, register() commits (or rolls back) its own unit of work.
    """

    def __init__(
        self,
        session: AsyncSession,
        tolerance: Optional[Decimal] = None,
        timeout_seconds: Optional[float] = None,
        ):
        self.session = session
        self.verifier = OwnershipVerifier(session, tolerance=tolerance)
        self.persister = AssetPersister(session, timeout_seconds=timeout_seconds)

    async def register(self, identity: RequestingIdentity, category: str | AssetCategory, payload: Any) -> str:
        """
        Register a new asset for the requesting user's family.

        Args:
            identity: Resolved requesting user (user id + family id)
            category: Category enum, enum value or URL slug
            payload: Decoded JSON body (detail fields + owners)

        Returns:
            New asset ID

        Raises:
            InvalidInput, OwnershipSumInvalid, OwnerNotInFamily: before any write
            PersistenceFailed: the write was rolled back
        """
        registration = validate_registration(category, payload)
        await self.verifier.verify(identity.family_id, registration.owners)
        asset_id = await self.persister.persist(identity.family_id, registration)

        logger.info("Asset registered", asset_id=asset_id, category=registration.category.value,
                    family_id=identity.family_id, requested_by=identity.user_id)
        return asset_id

    async def get(self, identity: RequestingIdentity, asset_id: str) -> AssetResponseBase:
        """Fetch one assembled asset of the requesting family."""
        return await self.persister.load(asset_id, identity.family_id)

    async def list_assets(self, identity: RequestingIdentity, category: Optional[str] = None) -> list[AssetResponseBase]:
        """
        List assembled assets of the requesting family.

        Args:
            category: Optional category filter (enum value or URL slug)
        """
        resolved = None
        if category is not None:
            try:
                resolved = AssetCategory.from_slug(category)
            except ValueError as e:
                raise InvalidInput(str(e), details={"errors": [{"field": "category", "message": str(e)}]}) from e
        return await self.persister.list_for_family(identity.family_id, resolved)
