"""
Asset Registration Schemas.

Pydantic models for creating and reading family assets.

**Domain Coverage**:
- Owner shares: {userId, percentage} entries of an ownership list
- Detail fields: one model per category (real estate, vehicle, bank account,
  investment, business, other)
- Create requests: detail fields + owners, one per category
- Responses: category-tagged assembled asset (envelope + detail + ownerships)

**Design Notes**:
- Wire format is camelCase (purchasePrice, userId); Python side is snake_case
- Request models forbid unknown fields
- Optional fields default to None, never to 0: absence stays distinguishable
- Detail field names match the detail table columns one-to-one

**Structure**:
- Ownership: OwnerShare, OwnershipResponse
- Detail fields: RealEstateDetailFields ... OtherDetailFields
- Create: AssetCreateBase + <Category>CreateRequest, AssetCreatedResponse
- Read: AssetResponseBase + <Category>AssetResponse, AssetResponse (tagged union)
"""
# Postpones evaluation of type hints to improve imports and performance. Also avoid circular import issues.
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, ClassVar, List, Literal, Optional, Type, Union

from pydantic import Field, ValidationInfo, field_validator, model_validator
from sqlmodel import SQLModel

from backend.app.db.models import (
    AssetCategory,
    AssetOwnership,
    RealEstateAsset,
    VehicleAsset,
    BankAccountAsset,
    InvestmentAsset,
    BusinessAsset,
    OtherAsset,
    )
from backend.app.schemas.common import (
    CamelModel,
    CamelRequestModel,
    FiniteDecimal,
    IsoDate,
    NonEmptyStr,
    Percentage,
    StrictInteger,
    )
from backend.app.utils.decimal_utils import check_fits_column


# ============================================================================
# OWNERSHIP
# ============================================================================

class OwnerShare(CamelRequestModel):
    """One entry of a create request's ownership list."""
    user_id: NonEmptyStr = Field(..., description="Family member user ID")
    percentage: Percentage = Field(..., description="Share of the asset in [0, 100]")

    @field_validator("percentage")
    @classmethod
    def fits_percentage_column(cls, v: Decimal) -> Decimal:
        return check_fits_column(v, AssetOwnership, "percentage")


class OwnershipResponse(CamelModel):
    """Ownership row as returned on read, with the owner's display name resolved."""
    user_id: str
    name: str
    percentage: FiniteDecimal


# ============================================================================
# DETAIL FIELDS (one model per category)
# ============================================================================

class DetailFieldsBase(CamelRequestModel):
    """
    Base for the per-category detail fields.

    Every decimal must fit the NUMERIC column of table_model it is stored in:
    extra decimal places or integer digits are rejected, never rounded.
    """
    table_model: ClassVar[Type[SQLModel]]

    @field_validator("*")
    @classmethod
    def fits_table_column(cls, v, info: ValidationInfo):
        if isinstance(v, Decimal):
            return check_fits_column(v, cls.table_model, info.field_name)
        return v


class RealEstateDetailFields(DetailFieldsBase):
    """Land, houses, apartments."""
    table_model = RealEstateAsset

    property_name: NonEmptyStr
    property_type: NonEmptyStr
    location: NonEmptyStr
    plot_number: Optional[str] = None
    area_sq_ft: Optional[FiniteDecimal] = None
    purchase_date: Optional[IsoDate] = None
    purchase_price: FiniteDecimal
    current_value: FiniteDecimal
    valuation_date: Optional[IsoDate] = None
    rental_income: Optional[FiniteDecimal] = None


class VehicleDetailFields(DetailFieldsBase):
    """Cars, motorbikes, boats."""
    table_model = VehicleAsset

    vehicle_name: NonEmptyStr
    vehicle_type: NonEmptyStr
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[StrictInteger] = None
    registration_number: Optional[str] = None
    purchase_price: FiniteDecimal
    purchase_date: Optional[IsoDate] = None
    current_value: FiniteDecimal
    outstanding_loan: Optional[FiniteDecimal] = None


class BankAccountDetailFields(DetailFieldsBase):
    """Savings, current and deposit accounts."""
    table_model = BankAccountAsset

    account_name: NonEmptyStr
    bank_name: NonEmptyStr
    account_number: Optional[str] = None
    account_type: NonEmptyStr
    current_balance: FiniteDecimal
    interest_rate: Optional[FiniteDecimal] = None
    opening_date: Optional[IsoDate] = None


class InvestmentDetailFields(DetailFieldsBase):
    """Brokerage accounts, funds and portfolios."""
    table_model = InvestmentAsset

    investment_name: NonEmptyStr
    broker: NonEmptyStr
    account_number: Optional[str] = None
    investment_type: NonEmptyStr
    initial_investment: FiniteDecimal
    investment_date: Optional[IsoDate] = None
    current_value: FiniteDecimal
    last_updated: Optional[IsoDate] = None


class BusinessDetailFields(DetailFieldsBase):
    """Ownership stakes in companies."""
    table_model = BusinessAsset

    business_name: NonEmptyStr
    license_number: Optional[str] = None
    industry: NonEmptyStr
    entity_type: Optional[str] = None
    initial_investment: FiniteDecimal
    establishment_date: Optional[IsoDate] = None
    current_valuation: FiniteDecimal
    annual_revenue: Optional[FiniteDecimal] = None


class OtherDetailFields(DetailFieldsBase):
    """Anything else worth tracking (art, jewellery, collectibles)."""
    table_model = OtherAsset

    asset_name: NonEmptyStr
    asset_category: NonEmptyStr
    description: Optional[str] = None
    purchase_price: FiniteDecimal
    purchase_date: Optional[IsoDate] = None
    current_valuation: FiniteDecimal
    valuation_date: Optional[IsoDate] = None


# ============================================================================
# CREATE
# ============================================================================

class AssetCreateBase(CamelRequestModel):
    """
    Ownership part shared by every create request.

    Rules:
    - at least one owner
    - each userId at most once (a repeated owner would count twice toward 100)

    The percentage-sum rule and the family-membership rule are checked later
    by the ownership verifier, not here.
    """
    owners: List[OwnerShare] = Field(..., min_length=1, description="Ownership list")

    @model_validator(mode='after')
    def validate_unique_owners(self):
        seen: set[str] = set()
        duplicates: list[str] = []
        for owner in self.owners:
            if owner.user_id in seen and owner.user_id not in duplicates:
                duplicates.append(owner.user_id)
            seen.add(owner.user_id)
        if duplicates:
            raise ValueError(f"Duplicate owner userId(s): {', '.join(duplicates)}")
        return self


class RealEstateCreateRequest(RealEstateDetailFields, AssetCreateBase):
    """POST /assets/real-estate body."""


class VehicleCreateRequest(VehicleDetailFields, AssetCreateBase):
    """
    POST /assets/vehicle body.

    Example:
        {
          "vehicleName": "BMW X5",
          "vehicleType": "car",
          "purchasePrice": 300000,
          "currentValue": 280000,
          "owners": [{"userId": "u1", "percentage": 60}, {"userId": "u2", "percentage": 40}]
        }
    """


class BankAccountCreateRequest(BankAccountDetailFields, AssetCreateBase):
    """POST /assets/bank-account body."""


class InvestmentCreateRequest(InvestmentDetailFields, AssetCreateBase):
    """POST /assets/investment body."""


class BusinessCreateRequest(BusinessDetailFields, AssetCreateBase):
    """POST /assets/business body."""


class OtherCreateRequest(OtherDetailFields, AssetCreateBase):
    """POST /assets/other body."""


class AssetCreatedResponse(CamelModel):
    """Response after successful registration (HTTP 201)."""
    asset_id: str


# ============================================================================
# READ
# ============================================================================

class AssetResponseBase(CamelModel):
    """
    Envelope fields shared by every assembled asset.

    Timestamps are ISO-8601 UTC strings ("2025-01-31T10:00:00.123456Z").
    """
    asset_id: str
    family_id: str
    ownerships: List[OwnershipResponse]
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None


class RealEstateAssetResponse(RealEstateDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.REAL_ESTATE] = AssetCategory.REAL_ESTATE


class VehicleAssetResponse(VehicleDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.VEHICLE] = AssetCategory.VEHICLE


class BankAccountAssetResponse(BankAccountDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.BANK_ACCOUNT] = AssetCategory.BANK_ACCOUNT


class InvestmentAssetResponse(InvestmentDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.INVESTMENT] = AssetCategory.INVESTMENT


class BusinessAssetResponse(BusinessDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.BUSINESS] = AssetCategory.BUSINESS


class OtherAssetResponse(OtherDetailFields, AssetResponseBase):
    category: Literal[AssetCategory.OTHER] = AssetCategory.OTHER


AssetResponse = Annotated[
    Union[
        RealEstateAssetResponse,
        VehicleAssetResponse,
        BankAccountAssetResponse,
        InvestmentAssetResponse,
        BusinessAssetResponse,
        OtherAssetResponse,
    ],
    Field(discriminator="category"),
]
