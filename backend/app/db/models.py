"""
Database models for FamilyFolio.

All models use SQLModel (SQLAlchemy 2.x) with the following conventions:
- Primary keys are UUID4 strings generated application-side
- Decimal columns use Numeric(15, 4) for money, Numeric(9, 6) for percentages.
  SQLite keeps NUMERIC values as 8-byte floats, exact up to 15 significant
  digits, so precision never exceeds 15
- Timestamps in UTC (created_at, updated_at, deleted_at)
- Soft delete: rows with deleted_at set are ignored by every read path
- Foreign keys enforced with PRAGMA foreign_keys=ON
"""
import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Column,
    UniqueConstraint,
    Numeric,
    Text,
    event,
    CheckConstraint,
    )
from sqlmodel import Field, SQLModel

from backend.app.utils.datetime_utils import utcnow


def new_id() -> str:
    """Generate a new primary key (UUID4 string)."""
    return str(uuid.uuid4())


# ============================================================================
# ENUMS
# ============================================================================

class AssetCategory(str, Enum):
    """
    Asset category - selects which detail table holds the asset's fields.

    Usage: Every asset row carries exactly one category; the matching detail
    row lives in the table named below.

    - REAL_ESTATE: Land, houses, apartments (real_estate_assets)
    - VEHICLE: Cars, motorbikes, boats (vehicle_assets)
    - BANK_ACCOUNT: Savings, current and deposit accounts (bank_account_assets)
    - INVESTMENT: Brokerage accounts, funds, portfolios (investment_assets)
    - BUSINESS: Ownership stakes in companies (business_assets)
    - OTHER: Anything else worth tracking, e.g. art or jewellery (other_assets)

    Impact:
    - Drives request validation (each category has its own field set)
    - Drives read-side assembly (the response is tagged with the category)
    - URL slug form is lower-case with dashes, e.g. "real-estate"
    """
    REAL_ESTATE = "REAL_ESTATE"
    VEHICLE = "VEHICLE"
    BANK_ACCOUNT = "BANK_ACCOUNT"
    INVESTMENT = "INVESTMENT"
    BUSINESS = "BUSINESS"
    OTHER = "OTHER"

    @property
    def slug(self) -> str:
        """URL form of the category ("BANK_ACCOUNT" -> "bank-account")."""
        return self.value.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, raw: str) -> "AssetCategory":
        """
        Resolve a category from its URL slug or enum value (case-insensitive).

        Raises:
            ValueError: If the value names no known category
        """
        normalized = raw.strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(c.slug for c in cls)
            raise ValueError(f"Unknown asset category '{raw}'. Valid categories: {valid}")


# ============================================================================
# FAMILIES & USERS
# ============================================================================

class Family(SQLModel, table=True):
    """
    A family office: the unit that owns assets.

    Every user belongs to exactly one family, and every asset is registered
    under one family. Owners of an asset must be members of its family.
    """
    __tablename__ = "families"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(nullable=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class User(SQLModel, table=True):
    """
    User account.

    Notes:
    - email is unique across all families and used as the login identifier
    - inactive or soft-deleted users cannot log in and cannot own new assets
    """
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    family_id: str = Field(foreign_key="families.id", nullable=False, index=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False, unique=True, index=True)
    hashed_password: str = Field(nullable=False)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


# ============================================================================
# ASSETS
# ============================================================================

class Asset(SQLModel, table=True):
    """
    Asset header row - category tag plus family scope.

    The category-specific fields live in exactly one detail table, linked
    1-to-1 through its asset_id column. Ownership shares live in
    asset_ownerships and always sum to 100 per asset.
    """
    __tablename__ = "assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    family_id: str = Field(foreign_key="families.id", nullable=False, index=True)
    category: AssetCategory = Field(nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class RealEstateAsset(SQLModel, table=True):
    """Detail row for REAL_ESTATE assets."""
    __tablename__ = "real_estate_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    property_name: str = Field(nullable=False)
    property_type: str = Field(nullable=False)  # e.g. "Apartment", "Land"
    location: str = Field(nullable=False)
    plot_number: Optional[str] = Field(default=None)
    area_sq_ft: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(15, 4)))
    purchase_date: Optional[date_type] = Field(default=None)
    purchase_price: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    current_value: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    valuation_date: Optional[date_type] = Field(default=None)
    rental_income: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(15, 4)))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class VehicleAsset(SQLModel, table=True):
    """Detail row for VEHICLE assets."""
    __tablename__ = "vehicle_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    vehicle_name: str = Field(nullable=False)
    vehicle_type: str = Field(nullable=False)  # e.g. "Car", "Motorbike"
    make: Optional[str] = Field(default=None)
    model: Optional[str] = Field(default=None)
    year: Optional[int] = Field(default=None)
    registration_number: Optional[str] = Field(default=None)
    purchase_price: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    purchase_date: Optional[date_type] = Field(default=None)
    current_value: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    outstanding_loan: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(15, 4)))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class BankAccountAsset(SQLModel, table=True):
    """Detail row for BANK_ACCOUNT assets."""
    __tablename__ = "bank_account_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    account_name: str = Field(nullable=False)
    bank_name: str = Field(nullable=False)
    account_number: Optional[str] = Field(default=None)
    account_type: str = Field(nullable=False)  # e.g. "Savings", "Fixed Deposit"
    current_balance: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    interest_rate: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(15, 4)))
    opening_date: Optional[date_type] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class InvestmentAsset(SQLModel, table=True):
    """Detail row for INVESTMENT assets."""
    __tablename__ = "investment_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    investment_name: str = Field(nullable=False)
    broker: str = Field(nullable=False)
    account_number: Optional[str] = Field(default=None)
    investment_type: str = Field(nullable=False)  # e.g. "Mutual Fund", "Equity"
    initial_investment: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    investment_date: Optional[date_type] = Field(default=None)
    current_value: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    last_updated: Optional[date_type] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class BusinessAsset(SQLModel, table=True):
    """Detail row for BUSINESS assets."""
    __tablename__ = "business_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    business_name: str = Field(nullable=False)
    license_number: Optional[str] = Field(default=None)
    industry: str = Field(nullable=False)
    entity_type: Optional[str] = Field(default=None)  # e.g. "LLC", "Sole Proprietorship"
    initial_investment: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    establishment_date: Optional[date_type] = Field(default=None)
    current_valuation: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    annual_revenue: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(15, 4)))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class OtherAsset(SQLModel, table=True):
    """Detail row for OTHER assets."""
    __tablename__ = "other_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, unique=True)

    asset_name: str = Field(nullable=False)
    asset_category: str = Field(nullable=False)  # free-form, e.g. "Jewellery"
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    purchase_price: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    purchase_date: Optional[date_type] = Field(default=None)
    current_valuation: Decimal = Field(sa_column=Column(Numeric(15, 4), nullable=False))
    valuation_date: Optional[date_type] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = Field(default=None)


class AssetOwnership(SQLModel, table=True):
    """
    Ownership share of one user in one asset.

    Invariants (enforced by the registration workflow, partially by the DB):
    - percentage in [0, 100] (CHECK constraint)
    - one row per (asset_id, user_id) (UNIQUE constraint)
    - percentages of one asset sum to 100
    - user belongs to the asset's family
    """
    __tablename__ = "asset_ownerships"
    __table_args__ = (
        UniqueConstraint("asset_id", "user_id", name="uq_asset_ownerships_asset_user"),
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="ck_asset_ownerships_percentage_range"),
        )

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_id: str = Field(foreign_key="assets.id", nullable=False, index=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True)
    percentage: Decimal = Field(sa_column=Column(Numeric(9, 6), nullable=False))

    created_at: datetime = Field(default_factory=utcnow)


# ============================================================================
# EVENT LISTENERS
# ============================================================================

@event.listens_for(Family, "before_update")
@event.listens_for(User, "before_update")
@event.listens_for(Asset, "before_update")
@event.listens_for(RealEstateAsset, "before_update")
@event.listens_for(VehicleAsset, "before_update")
@event.listens_for(BankAccountAsset, "before_update")
@event.listens_for(InvestmentAsset, "before_update")
@event.listens_for(BusinessAsset, "before_update")
@event.listens_for(OtherAsset, "before_update")
def receive_before_update(mapper, connection, target):
    """Update updated_at timestamp on update."""
    target.updated_at = utcnow()
