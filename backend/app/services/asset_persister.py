"""
Atomic asset persistence and read-side assembly.

Write path: Asset -> Detail -> Ownerships are inserted in that order inside a
single transaction. Either everything commits or the session is rolled back
and PersistenceFailed is raised (no automatic retries).

Read path: rows are loaded for one asset (or a family's assets) and projected
into the category-tagged response by assemble_asset(), which refuses to
invent data when the detail row is missing.
"""
import asyncio
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from backend.app.config import get_settings
from backend.app.db.models import Asset, AssetCategory, AssetOwnership, User
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import AssetResponseBase, OwnershipResponse
from backend.app.services.asset_categories import AssetCategoryRegistry
from backend.app.services.asset_errors import AssetNotFound, DetailMissing, PersistenceFailed
from backend.app.services.asset_validation import ValidatedRegistration
from backend.app.utils.datetime_utils import to_iso_z

logger = get_logger(__name__)


# ============================================================================
# ASSEMBLY (pure)
# ============================================================================

def assemble_asset(
    asset: Asset,
    detail: Optional[SQLModel],
    ownerships: Sequence[tuple[AssetOwnership, User]],
    ) -> AssetResponseBase:
    """
    Project stored rows into the category-tagged response.

    Args:
        asset: Asset header row
        detail: Detail row of the asset's category, or None if absent
        ownerships: (ownership, owner) pairs in display order

    Returns:
        Instance of the category's response schema

    Raises:
        DetailMissing: If the detail row is absent or belongs to another category
    """
    descriptor = AssetCategoryRegistry.get(AssetCategory(asset.category))

    if detail is None or not isinstance(detail, descriptor.detail_model):
        logger.error("Asset detail missing", asset_id=asset.id, category=descriptor.category.value,
                     family_id=asset.family_id)
        raise DetailMissing(asset.id, descriptor.category.value)

    return descriptor.response_schema(
        asset_id=asset.id,
        family_id=asset.family_id,
        ownerships=[
            OwnershipResponse(user_id=ownership.user_id, name=user.name, percentage=ownership.percentage)
            for ownership, user in ownerships
            ],
        created_at=to_iso_z(asset.created_at),
        updated_at=to_iso_z(asset.updated_at),
        deleted_at=to_iso_z(asset.deleted_at),
        **descriptor.detail_values(detail),
        )


# ============================================================================
# PERSISTER
# ============================================================================

class AssetPersister:
    """
    Storage side of asset registration.

    The session is passed in explicitly; this class owns the commit/rollback
    of the registration unit of work.
    """

    def __init__(self, session: AsyncSession, timeout_seconds: Optional[float] = None):
        self.session = session
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else get_settings().PERSIST_TIMEOUT_SECONDS

    async def _insert_unit(self, family_id: str, registration: ValidatedRegistration) -> str:
        descriptor = AssetCategoryRegistry.get(registration.category)

        # 1. Asset envelope
        asset = Asset(family_id=family_id, category=registration.category)
        asset_id = asset.id
        self.session.add(asset)
        await self.session.flush()

        # 2. Category detail
        self.session.add(descriptor.build_detail_row(asset_id, registration.detail))
        await self.session.flush()

        # 3. Ownerships
        self.session.add_all([
            AssetOwnership(asset_id=asset_id, user_id=owner.user_id, percentage=owner.percentage)
            for owner in registration.owners
            ])
        await self.session.flush()

        await self.session.commit()
        return asset_id

    async def persist(self, family_id: str, registration: ValidatedRegistration) -> str:
        """
        Insert Asset, Detail and Ownership rows as one transaction.

        Returns:
            The new asset ID

        Raises:
            PersistenceFailed: On any storage error or timeout (nothing persisted)
        """
        try:
            asset_id = await asyncio.wait_for(self._insert_unit(family_id, registration), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            await self.session.rollback()
            logger.error("Asset persistence timed out", family_id=family_id, category=registration.category.value,
                         timeout_seconds=self.timeout_seconds)
            raise PersistenceFailed() from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Asset persistence failed", family_id=family_id, category=registration.category.value,
                         error=str(e), error_type=type(e).__name__)
            raise PersistenceFailed() from e

        logger.info("Asset created", asset_id=asset_id, family_id=family_id, category=registration.category.value,
                    owners=len(registration.owners))
        return asset_id

    # ------------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------------

    async def _load_rows(self, asset: Asset) -> tuple[Optional[SQLModel], list[tuple[AssetOwnership, User]]]:
        descriptor = AssetCategoryRegistry.get(AssetCategory(asset.category))
        detail_model = descriptor.detail_model

        detail_stmt = select(detail_model).where(
            detail_model.asset_id == asset.id,
            detail_model.deleted_at.is_(None),
            )
        detail = (await self.session.execute(detail_stmt)).scalars().first()

        # Largest share first, ties by user id
        ownership_stmt = (
            select(AssetOwnership, User)
            .join(User, User.id == AssetOwnership.user_id)
            .where(AssetOwnership.asset_id == asset.id)
            .order_by(AssetOwnership.percentage.desc(), AssetOwnership.user_id)
        )
        ownerships = [(row[0], row[1]) for row in (await self.session.execute(ownership_stmt)).all()]
        return detail, ownerships

    async def load(self, asset_id: str, family_id: str) -> AssetResponseBase:
        """
        Load and assemble one asset visible to the given family.

        Raises:
            AssetNotFound: No non-deleted asset with this ID in the family
            DetailMissing: Integrity violation (see assemble_asset)
            PersistenceFailed: Storage error while reading
        """
        try:
            stmt = select(Asset).where(
                Asset.id == asset_id,
                Asset.family_id == family_id,
                Asset.deleted_at.is_(None),
                )
            asset = (await self.session.execute(stmt)).scalars().first()
            if asset is None:
                raise AssetNotFound(asset_id)
            detail, ownerships = await self._load_rows(asset)
        except SQLAlchemyError as e:
            logger.error("Asset read failed", asset_id=asset_id, error=str(e), error_type=type(e).__name__)
            raise PersistenceFailed("Could not read the asset") from e

        return assemble_asset(asset, detail, ownerships)

    async def list_for_family(self, family_id: str, category: Optional[AssetCategory] = None) -> list[AssetResponseBase]:
        """
        Load and assemble all non-deleted assets of a family, oldest first.

        Args:
            family_id: Requesting family
            category: Optional category filter
        """
        try:
            stmt = select(Asset).where(Asset.family_id == family_id, Asset.deleted_at.is_(None))
            if category is not None:
                stmt = stmt.where(Asset.category == category)
            stmt = stmt.order_by(Asset.created_at, Asset.id)
            assets = list((await self.session.execute(stmt)).scalars().all())

            loaded = []
            for asset in assets:
                detail, ownerships = await self._load_rows(asset)
                loaded.append((asset, detail, ownerships))
        except SQLAlchemyError as e:
            logger.error("Asset list failed", family_id=family_id, error=str(e), error_type=type(e).__name__)
            raise PersistenceFailed("Could not read assets") from e

        return [assemble_asset(asset, detail, ownerships) for asset, detail, ownerships in loaded]
