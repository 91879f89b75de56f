"""
Database module exports.
"""
from backend.app.db.base import (
    SQLModel,
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
from backend.app.db.session import get_async_engine, get_session_generator

__all__ = [
    "SQLModel",
    "get_async_engine",  # For async FastAPI app and the CLI
    "get_session_generator",
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
