"""
User Service

Business logic for families and users, used by both API and CLI.
"""
from typing import Optional

from sqlmodel import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

import structlog

from backend.app.db.models import Family, User
from backend.app.services.auth_service import hash_password, delete_user_sessions
from backend.app.utils.datetime_utils import utcnow

logger = structlog.get_logger(__name__)


# =============================================================================
# Families
# =============================================================================

async def create_family(session: AsyncSession, name: str) -> Family:
    """
    Create a new family.

    Args:
        session: Database session
        name: Family display name

    Returns:
        The created Family
    """
    family = Family(name=name)
    session.add(family)
    await session.commit()

    logger.info("Family created", family_id=family.id, name=name)
    return family


async def get_family_by_id(session: AsyncSession, family_id: str) -> Optional[Family]:
    stmt = select(Family).where(Family.id == family_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def list_family_members(session: AsyncSession, family_id: str) -> list[User]:
    """
    List active, non-deleted members of a family, ordered by name.

    Args:
        session: Database session
        family_id: Family ID

    Returns:
        List of users
    """
    stmt = (
        select(User)
        .where(User.family_id == family_id, User.is_active == True, User.deleted_at.is_(None))  # noqa: E712
        .order_by(User.name, User.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


# =============================================================================
# Users
# =============================================================================

async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """
    Get user by email (case-insensitive).

    Args:
        session: Database session
        email: Email to search

    Returns:
        User or None if not found
    """
    stmt = select(User).where(User.email == email.strip().lower())
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_user_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    """
    Get user by ID.

    Args:
        session: Database session
        user_id: User ID

    Returns:
        User or None if not found
    """
    stmt = select(User).where(User.id == user_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def list_users(session: AsyncSession, family_id: Optional[str] = None) -> list[User]:
    """
    List all users, optionally restricted to one family.

    Args:
        session: Database session
        family_id: Optional family filter

    Returns:
        List of users (including inactive ones)
    """
    stmt = select(User)
    if family_id is not None:
        stmt = stmt.where(User.family_id == family_id)
    stmt = stmt.order_by(User.family_id, User.name)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_user(
    session: AsyncSession,
    name: str,
    email: str,
    password: str,
    family_id: str,
    is_active: bool = True,
) -> tuple[Optional[User], Optional[str]]:
    """
    Create a new user in an existing family.

    Args:
        session: Database session
        name: Display name
        email: Email address (stored lower-case)
        password: Plain text password (will be hashed)
        family_id: Family the user joins
        is_active: Whether user is active

    Returns:
        Tuple of (User, None) on success or (None, error_message) on failure
    """
    if await get_family_by_id(session, family_id) is None:
        return None, f"Family '{family_id}' not found"

    return await _add_user(session, name, email, password, family_id, is_active)


async def register_user(
    session: AsyncSession,
    name: str,
    email: str,
    password: str,
    family_id: Optional[str] = None,
    family_name: Optional[str] = None,
) -> tuple[Optional[User], Optional[str]]:
    """
    Self-registration: join the family `family_id` or create a family named `family_name`.

    The new family and its first member are committed in one transaction, so a
    rejected user never leaves an empty family behind.

    Returns:
        Tuple of (User, None) on success or (None, error_message) on failure
    """
    if family_id is None:
        family = Family(name=family_name)
        session.add(family)
        family_id = family.id
    elif await get_family_by_id(session, family_id) is None:
        return None, f"Family '{family_id}' not found"

    return await _add_user(session, name, email, password, family_id)


async def _add_user(
    session: AsyncSession,
    name: str,
    email: str,
    password: str,
    family_id: str,
    is_active: bool = True,
) -> tuple[Optional[User], Optional[str]]:
    if await get_user_by_email(session, email):
        await session.rollback()
        return None, "Email already registered"

    user = User(
        family_id=family_id,
        name=name,
        email=email.strip().lower(),
        hashed_password=hash_password(password),
        is_active=is_active,
    )
    session.add(user)

    try:
        await session.commit()
    except IntegrityError:
        # A concurrent registration took the email between lookup and insert
        await session.rollback()
        logger.warning("User insert rejected by unique constraint", email=user.email)
        return None, "Email already registered"

    logger.info("User created", user_id=user.id, family_id=family_id, email=user.email)
    return user, None


async def reset_password(
    session: AsyncSession,
    email: str,
    new_password: str,
) -> tuple[bool, Optional[str]]:
    """
    Reset a user's password and log out all of their sessions.

    Returns:
        Tuple of (success, error_message)
    """
    user = await get_user_by_email(session, email)
    if not user:
        return False, f"User '{email}' not found"

    user.hashed_password = hash_password(new_password)
    session.add(user)
    await session.commit()

    delete_user_sessions(user.id)

    logger.info("Password reset", user_id=user.id, email=user.email)
    return True, None


async def set_user_active(
    session: AsyncSession,
    email: str,
    active: bool,
) -> tuple[bool, Optional[str]]:
    """
    Activate or deactivate a user.

    Inactive users cannot log in and are not accepted as owners of new assets.

    Returns:
        Tuple of (success, error_message)
    """
    user = await get_user_by_email(session, email)
    if not user:
        return False, f"User '{email}' not found"

    user.is_active = active
    session.add(user)
    await session.commit()

    if not active:
        delete_user_sessions(user.id)

    status = "activated" if active else "deactivated"
    logger.info(f"User {status}", user_id=user.id, email=user.email)
    return True, None


async def soft_delete_user(session: AsyncSession, email: str) -> tuple[bool, Optional[str]]:
    """
    Mark a user as deleted. Existing ownership rows are kept.

    Returns:
        Tuple of (success, error_message)
    """
    user = await get_user_by_email(session, email)
    if not user:
        return False, f"User '{email}' not found"
    if user.deleted_at is not None:
        return False, f"User '{email}' is already deleted"

    user.deleted_at = utcnow()
    session.add(user)
    await session.commit()
    delete_user_sessions(user.id)

    logger.info("User deleted", user_id=user.id, email=user.email)
    return True, None
