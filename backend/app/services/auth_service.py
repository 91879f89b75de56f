"""
Authentication Service

Password hashing/verification, in-memory login sessions and the
RequestingIdentity value handed to the asset workflow.
"""
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import bcrypt
import structlog

from backend.app.config import get_settings
from backend.app.utils.datetime_utils import utcnow

logger = structlog.get_logger(__name__)

# Using bcrypt with cost factor 12 (good balance of security and speed)
BCRYPT_ROUNDS = 12

SESSION_ID_LENGTH = 64  # 256 bits of entropy


@dataclass(frozen=True)
class RequestingIdentity:
    """Authenticated caller: who is asking, and which family they act for."""
    user_id: str
    family_id: str


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    # bcrypt has a 72-byte limit
    password_bytes = password.encode('utf-8')[:72]
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password_bytes, salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8')[:72], hashed_password.encode('utf-8'))
    except ValueError as e:
        logger.warning("Password verification failed", error=str(e))
        return False


# =============================================================================
# Session Management (In-Memory)
# =============================================================================

# Session storage: {session_id: {"user_id": str, "created_at": datetime, "expires_at": datetime}}
_sessions: dict[str, dict] = {}


def session_lifetime(long_life: bool = False) -> timedelta:
    """Normal sessions last SESSION_EXPIRE_HOURS, long-life ones LONG_SESSION_EXPIRE_DAYS."""
    settings = get_settings()
    if long_life:
        return timedelta(days=settings.LONG_SESSION_EXPIRE_DAYS)
    return timedelta(hours=settings.SESSION_EXPIRE_HOURS)


def create_session(user_id: str, long_life: bool = False) -> str:
    """
    Create a new session for a user.

    Args:
        user_id: ID of the authenticated user
        long_life: Keep the session for days ("remember me") instead of hours

    Returns:
        Session ID (to be stored in cookie)
    """
    session_id = secrets.token_urlsafe(SESSION_ID_LENGTH)
    now = utcnow()

    _sessions[session_id] = {
        "user_id": user_id,
        "created_at": now,
        "expires_at": now + session_lifetime(long_life),
        }

    logger.info("Session created", user_id=user_id, long_life=long_life, session_id=session_id[:8] + "...")
    return session_id


def get_session(session_id: str) -> Optional[dict]:
    """Get session data if valid and not expired (expired sessions are dropped)."""
    session = _sessions.get(session_id)
    if not session:
        return None

    if utcnow() > session["expires_at"]:
        delete_session(session_id)
        return None

    return session


def get_user_id_from_session(session_id: str) -> Optional[str]:
    """User ID of a valid session, or None."""
    session = get_session(session_id)
    return session["user_id"] if session else None


def delete_session(session_id: str) -> bool:
    """
    Delete a session (logout).

    Returns:
        True if session was deleted, False if not found
    """
    if _sessions.pop(session_id, None) is not None:
        logger.info("Session deleted", session_id=session_id[:8] + "...")
        return True
    return False


def delete_user_sessions(user_id: str) -> int:
    """
    Delete all sessions for a user (password reset, deactivation).

    Returns:
        Number of sessions deleted
    """
    to_delete = [sid for sid, data in _sessions.items() if data["user_id"] == user_id]
    for sid in to_delete:
        del _sessions[sid]

    if to_delete:
        logger.info("User sessions deleted", user_id=user_id, count=len(to_delete))
    return len(to_delete)


def cleanup_expired_sessions() -> int:
    """
    Remove all expired sessions.

    Returns:
        Number of sessions cleaned up
    """
    now = utcnow()
    to_delete = [sid for sid, data in _sessions.items() if now > data["expires_at"]]
    for sid in to_delete:
        del _sessions[sid]

    if to_delete:
        logger.info("Expired sessions cleaned up", count=len(to_delete))
    return len(to_delete)
