"""
Asset API endpoints.
Handles asset registration (one route for every category) and family-scoped reads.
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.v1.auth import get_requesting_identity
from backend.app.db.session import get_session_generator
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import AssetCreatedResponse, AssetResponse
from backend.app.schemas.common import ErrorResponse
from backend.app.services.asset_categories import AssetCategoryRegistry
from backend.app.services.asset_registration import AssetRegistrationService
from backend.app.services.auth_service import RequestingIdentity

logger = get_logger(__name__)

asset_router = APIRouter(prefix="/assets", tags=["Assets"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "InvalidInput, OwnershipSumInvalid or OwnerNotInFamily"},
    401: {"model": ErrorResponse, "description": "Unauthenticated"},
    500: {"model": ErrorResponse, "description": "PersistenceFailed or DetailMissing"},
    }


# ============================================================================
# READ ENDPOINTS
# ============================================================================

@asset_router.get("", response_model=List[AssetResponse], responses=ERROR_RESPONSES)
async def list_assets(
    category: Optional[str] = Query(default=None, description="Category slug (e.g. vehicle, real-estate) or enum value"),
    identity: RequestingIdentity = Depends(get_requesting_identity),
    session: AsyncSession = Depends(get_session_generator)
    ):
    """
    List the caller's family assets, oldest first.

    **Example**: `GET /api/v1/assets?category=vehicle`
    """
    return await AssetRegistrationService(session).list_assets(identity, category)


@asset_router.get("/categories")
async def list_categories():
    """
    List supported asset categories.

    **Response Example**:
    ```json
    [{"category": "REAL_ESTATE", "slug": "real-estate"}, {"category": "VEHICLE", "slug": "vehicle"}]
    ```
    """
    return AssetCategoryRegistry.list_categories()


@asset_router.get(
    "/{asset_id}",
    response_model=AssetResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse, "description": "AssetNotFound"}},
    )
async def get_asset(
    asset_id: str,
    identity: RequestingIdentity = Depends(get_requesting_identity),
    session: AsyncSession = Depends(get_session_generator)
    ):
    """
    Get one asset: envelope + category detail + ownerships with owner names.

    **Response Example** (vehicle):
    ```json
    {
      "assetId": "6f1c...",
      "category": "VEHICLE",
      "familyId": "a9e2...",
      "vehicleName": "BMW X5",
      "vehicleType": "car",
      "make": null,
      "purchasePrice": 300000.0,
      "currentValue": 280000.0,
      "ownerships": [
        {"userId": "u1", "name": "Anna", "percentage": 60.0},
        {"userId": "u2", "name": "Marco", "percentage": 40.0}
      ],
      "createdAt": "2025-01-31T10:00:00.123456Z",
      "updatedAt": "2025-01-31T10:00:00.123456Z",
      "deletedAt": null
    }
    ```
    """
    return await AssetRegistrationService(session).get(identity, asset_id)


# ============================================================================
# REGISTRATION
# ============================================================================

@asset_router.post("/{category}", response_model=AssetCreatedResponse, status_code=201, responses=ERROR_RESPONSES)
async def create_asset(
    category: str,
    payload: Any = Body(..., description="Category detail fields plus owners"),
    identity: RequestingIdentity = Depends(get_requesting_identity),
    session: AsyncSession = Depends(get_session_generator)
    ):
    """
    Register a new asset for the caller's family.

    `category` is a slug (`real-estate`, `vehicle`, `bank-account`,
    `investment`, `business`, `other`) or the enum value (`VEHICLE`).

    **Request Example** (vehicle):
    ```json
    {
      "vehicleName": "BMW X5",
      "vehicleType": "car",
      "purchasePrice": 300000,
      "currentValue": 280000,
      "owners": [
        {"userId": "u1", "percentage": 60},
        {"userId": "u2", "percentage": 40}
      ]
    }
    ```

    **Response Example**:
    ```json
    {"assetId": "6f1c..."}
    ```

    Owners must be members of the caller's family and percentages must sum to 100.
    """
    asset_id = await AssetRegistrationService(session).register(identity, category, payload)
    return AssetCreatedResponse(asset_id=asset_id)
