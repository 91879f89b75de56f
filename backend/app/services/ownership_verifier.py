"""
Ownership verification for asset registration.

Enforces the two cross-cutting ownership rules before any write happens:
1. Percentages sum to 100 (within the configured tolerance, default exact)
2. Every owner is an active, non-deleted member of the requesting family

Read-only: the only I/O is the membership lookup.
"""
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from backend.app.config import get_settings
from backend.app.db.models import User
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import OwnerShare
from backend.app.services.asset_errors import OwnerNotInFamily, OwnershipSumInvalid

logger = get_logger(__name__)

HUNDRED = Decimal("100")


def ownership_sum(owners: Sequence[OwnerShare]) -> Decimal:
    """Exact sum of the owners' percentages."""
    return sum((owner.percentage for owner in owners), Decimal("0"))


class OwnershipVerifier:
    """
    Verifies an ownership list against the requesting family.

    The sum check runs first (no I/O), then the membership lookup.
    """

    def __init__(self, session: AsyncSession, tolerance: Optional[Decimal] = None):
        self.session = session
        self.tolerance = tolerance if tolerance is not None else get_settings().OWNERSHIP_SUM_TOLERANCE

    def check_sum(self, owners: Sequence[OwnerShare]) -> Decimal:
        """
        Raises:
            OwnershipSumInvalid: If |sum - 100| exceeds the tolerance
        """
        total = ownership_sum(owners)
        if abs(total - HUNDRED) > self.tolerance:
            logger.info("Ownership rejected", reason="sum_invalid", computed_sum=str(total))
            raise OwnershipSumInvalid(total)
        return total

    async def check_membership(self, family_id: str, owners: Sequence[OwnerShare]) -> None:
        """
        Raises:
            OwnerNotInFamily: If any owner is not an active member of the family
        """
        requested = {owner.user_id for owner in owners}
        stmt = select(User.id).where(
            User.family_id == family_id,
            User.id.in_(requested),
            User.is_active == True,  # noqa: E712
            User.deleted_at.is_(None),
            )
        result = await self.session.execute(stmt)
        found = set(result.scalars().all())

        if len(found) != len(requested):
            missing = sorted(requested - found)
            logger.info("Ownership rejected", reason="owner_not_in_family", family_id=family_id, user_ids=missing)
            raise OwnerNotInFamily(missing)

    async def verify(self, family_id: str, owners: Sequence[OwnerShare]) -> None:
        """Run both checks; the first failure is terminal."""
        self.check_sum(owners)
        await self.check_membership(family_id, owners)
