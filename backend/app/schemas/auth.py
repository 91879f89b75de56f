"""
Authentication and Family Schemas

Pydantic models for auth and family API requests/responses.
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from backend.app.schemas.common import CamelModel, CamelRequestModel


# =============================================================================
# Request Schemas
# =============================================================================

class AuthLoginRequest(CamelRequestModel):
    """Login request with email and password."""
    email: str = Field(..., min_length=1, description="Account email")
    password: str = Field(..., min_length=1, description="Password")
    long_life: bool = Field(default=False, description="Keep the session for days instead of hours")


class AuthRegisterRequest(CamelRequestModel):
    """
    Registration request.

    Exactly one of family_id (join an existing family) or family_name
    (create a new family) must be given.
    """
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=8, description="Password (min 8 chars)")
    family_id: Optional[str] = Field(default=None, description="Existing family to join")
    family_name: Optional[str] = Field(default=None, min_length=1, description="New family to create")

    @model_validator(mode='after')
    def validate_family_choice(self):
        if (self.family_id is None) == (self.family_name is None):
            raise ValueError("Provide exactly one of familyId or familyName")
        return self


# =============================================================================
# Response Schemas
# =============================================================================

class AuthUserResponse(CamelModel):
    """User info returned after login or from /me endpoint."""
    id: str
    family_id: str
    name: str
    email: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthLoginResponse(CamelModel):
    """Response after successful login."""
    user: AuthUserResponse
    message: str = "Login successful"


class AuthLogoutResponse(CamelModel):
    """Response after logout."""
    message: str = "Logged out successfully"


class AuthMeResponse(CamelModel):
    """Response from /me endpoint."""
    user: AuthUserResponse


class AuthRegisterResponse(CamelModel):
    """Response after successful registration."""
    user: AuthUserResponse
    message: str = "Registration successful"


class FamilyMemberResponse(CamelModel):
    """A member of the caller's family (GET /family/members)."""
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}
