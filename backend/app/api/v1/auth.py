"""
Authentication API Endpoints

Provides registration, login, logout and the requesting-identity dependency
used by every family-scoped endpoint.
"""
from typing import Literal

from fastapi import APIRouter, Response, Request, Depends
from sqlalchemy.ext.asyncio import AsyncSession

import structlog

from backend.app.config import get_settings
from backend.app.db.session import get_session_generator
from backend.app.db.models import User
from backend.app.schemas.auth import (
    AuthLoginRequest,
    AuthLoginResponse,
    AuthLogoutResponse,
    AuthMeResponse,
    AuthUserResponse,
    AuthRegisterRequest,
    AuthRegisterResponse,
)
from backend.app.services.asset_errors import InvalidInput, Unauthenticated
from backend.app.services.auth_service import (
    RequestingIdentity,
    verify_password,
    create_session,
    get_user_id_from_session,
    delete_session,
    session_lifetime,
    cleanup_expired_sessions,
)
from backend.app.services import user_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Session cookie configuration
SESSION_COOKIE_NAME = "session"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"


def get_session_cookie(request: Request) -> str | None:
    """Extract session cookie from request."""
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_session_generator)
) -> User:
    """
    Dependency to get current authenticated user.
    Raises Unauthenticated (401) if not authenticated.
    """
    session_id = get_session_cookie(request)
    if not session_id:
        raise Unauthenticated()

    user_id = get_user_id_from_session(session_id)
    if not user_id:
        raise Unauthenticated("Session expired or invalid")

    user = await user_service.get_user_by_id(session, user_id)
    if not user or user.deleted_at is not None:
        raise Unauthenticated("User not found")

    if not user.is_active:
        raise Unauthenticated("User account is disabled")

    return user


async def get_requesting_identity(current_user: User = Depends(get_current_user)) -> RequestingIdentity:
    """Dependency resolving the caller into the identity the asset workflow expects."""
    return RequestingIdentity(user_id=current_user.id, family_id=current_user.family_id)


@router.post("/login", response_model=AuthLoginResponse)
async def login(
    request: AuthLoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session_generator)
):
    """
    Authenticate user and create session.

    Returns user info and sets the session cookie. With `longLife: true` the
    session lasts LONG_SESSION_EXPIRE_DAYS instead of SESSION_EXPIRE_HOURS.
    """
    user = await user_service.get_user_by_email(session, request.email)

    if not user or user.deleted_at is not None:
        logger.warning("Login failed: user not found", email=request.email)
        raise Unauthenticated("Invalid credentials")

    if not user.is_active:
        logger.warning("Login failed: user inactive", email=request.email)
        raise Unauthenticated("Account is disabled")

    if not verify_password(request.password, user.hashed_password):
        logger.warning("Login failed: wrong password", email=request.email)
        raise Unauthenticated("Invalid credentials")

    cleanup_expired_sessions()
    session_id = create_session(user.id, long_life=request.long_life)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=int(session_lifetime(request.long_life).total_seconds()),
        httponly=SESSION_COOKIE_HTTPONLY,
        samesite=SESSION_COOKIE_SAMESITE,
        secure=get_settings().SESSION_COOKIE_SECURE,
    )

    logger.info("User logged in", user_id=user.id, family_id=user.family_id)

    return AuthLoginResponse(user=AuthUserResponse.model_validate(user))


@router.post("/logout", response_model=AuthLogoutResponse)
async def logout(
    request: Request,
    response: Response,
):
    """
    Logout current user and destroy session.
    """
    session_id = get_session_cookie(request)
    if session_id:
        delete_session(session_id)

    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=SESSION_COOKIE_HTTPONLY,
        samesite=SESSION_COOKIE_SAMESITE,
        secure=get_settings().SESSION_COOKIE_SECURE,
    )

    return AuthLogoutResponse()


@router.get("/me", response_model=AuthMeResponse)
async def get_me(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user info.
    """
    return AuthMeResponse(user=AuthUserResponse.model_validate(current_user))


@router.post("/register", response_model=AuthRegisterResponse, status_code=201)
async def register(
    request: AuthRegisterRequest,
    session: AsyncSession = Depends(get_session_generator)
):
    """
    Register a new user.

    Either joins an existing family (`familyId`) or creates a new one
    (`familyName`) with the new user as its first member.
    """
    user, error = await user_service.register_user(
        session,
        name=request.name,
        email=request.email,
        password=request.password,
        family_id=request.family_id,
        family_name=request.family_name,
    )

    if not user:
        raise InvalidInput(error)

    logger.info("User registered", user_id=user.id, family_id=user.family_id)

    return AuthRegisterResponse(user=AuthUserResponse.model_validate(user))
