"""
Database base module.
SQLModel base classes and metadata.
Import all models here so Alembic can detect them.
"""
from sqlmodel import SQLModel

# Import all models so Alembic can detect them
from backend.app.db.models import (
    # Enums
    AssetCategory,
    # Models
    Family,
    User,
    Asset,
    RealEstateAsset,
    VehicleAsset,
    BankAccountAsset,
    InvestmentAsset,
    BusinessAsset,
    OtherAsset,
    AssetOwnership,
    )

__all__ = [
    "SQLModel",
    # Enums
    "AssetCategory",
    # Models
    "Family",
    "User",
    "Asset",
    "RealEstateAsset",
    "VehicleAsset",
    "BankAccountAsset",
    "InvestmentAsset",
    "BusinessAsset",
    "OtherAsset",
    "AssetOwnership",
    ]
