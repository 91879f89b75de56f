"""
Family API endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.v1.auth import get_requesting_identity
from backend.app.db.session import get_session_generator
from backend.app.schemas.auth import FamilyMemberResponse
from backend.app.services import user_service
from backend.app.services.auth_service import RequestingIdentity

family_router = APIRouter(prefix="/family", tags=["Family"])


@family_router.get("/members", response_model=List[FamilyMemberResponse])
async def list_members(
    identity: RequestingIdentity = Depends(get_requesting_identity),
    session: AsyncSession = Depends(get_session_generator)
    ):
    """
    List active members of the caller's family (candidate asset owners).
    """
    members = await user_service.list_family_members(session, identity.family_id)
    return [FamilyMemberResponse.model_validate(member) for member in members]
