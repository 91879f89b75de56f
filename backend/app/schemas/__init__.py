"""
Pydantic schemas for FamilyFolio.

Used across multiple subsystems (API, Services) to validate data structures
and standardize data exchange between components.

**Organization by Domain**:
- common.py: Shared types (FiniteDecimal, Percentage, IsoDate), camelCase bases, ErrorResponse
- assets.py: Asset registration schemas (create requests, tagged read responses)
- auth.py: Auth and family member schemas

**Design Notes**:
- All models use Pydantic v2
- Schemas separated from API layer (no inline definitions)
"""
from backend.app.schemas.common import (
    FiniteDecimal,
    Percentage,
    IsoDate,
    StrictInteger,
    NonEmptyStr,
    CamelModel,
    CamelRequestModel,
    ErrorResponse,
    )
from backend.app.schemas.assets import (
    OwnerShare,
    OwnershipResponse,
    # Detail fields
    RealEstateDetailFields,
    VehicleDetailFields,
    BankAccountDetailFields,
    InvestmentDetailFields,
    BusinessDetailFields,
    OtherDetailFields,
    # Create
    AssetCreateBase,
    RealEstateCreateRequest,
    VehicleCreateRequest,
    BankAccountCreateRequest,
    InvestmentCreateRequest,
    BusinessCreateRequest,
    OtherCreateRequest,
    AssetCreatedResponse,
    # Read
    AssetResponseBase,
    RealEstateAssetResponse,
    VehicleAssetResponse,
    BankAccountAssetResponse,
    InvestmentAssetResponse,
    BusinessAssetResponse,
    OtherAssetResponse,
    AssetResponse,
    )
from backend.app.schemas.auth import (
    AuthLoginRequest,
    AuthRegisterRequest,
    AuthUserResponse,
    AuthLoginResponse,
    AuthLogoutResponse,
    AuthMeResponse,
    AuthRegisterResponse,
    FamilyMemberResponse,
    )

__all__ = [
    # Common
    "FiniteDecimal",
    "Percentage",
    "IsoDate",
    "StrictInteger",
    "NonEmptyStr",
    "CamelModel",
    "CamelRequestModel",
    "ErrorResponse",
    # Assets
    "OwnerShare",
    "OwnershipResponse",
    "RealEstateDetailFields",
    "VehicleDetailFields",
    "BankAccountDetailFields",
    "InvestmentDetailFields",
    "BusinessDetailFields",
    "OtherDetailFields",
    "AssetCreateBase",
    "RealEstateCreateRequest",
    "VehicleCreateRequest",
    "BankAccountCreateRequest",
    "InvestmentCreateRequest",
    "BusinessCreateRequest",
    "OtherCreateRequest",
    "AssetCreatedResponse",
    "AssetResponseBase",
    "RealEstateAssetResponse",
    "VehicleAssetResponse",
    "BankAccountAssetResponse",
    "InvestmentAssetResponse",
    "BusinessAssetResponse",
    "OtherAssetResponse",
    "AssetResponse",
    # Auth
    "AuthLoginRequest",
    "AuthRegisterRequest",
    "AuthUserResponse",
    "AuthLoginResponse",
    "AuthLogoutResponse",
    "AuthMeResponse",
    "AuthRegisterResponse",
    "FamilyMemberResponse",
    ]
