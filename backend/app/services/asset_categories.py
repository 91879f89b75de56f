"""
Asset category registry.

One generic registration workflow serves all six categories. Everything that
differs between categories is captured by a descriptor class registered here:
- create_schema: request model (detail fields + owners)
- detail_schema: detail fields alone (typed record handed to the persister)
- detail_model: SQLModel detail table
- response_schema: category-tagged read model

Usage:
    descriptor = AssetCategoryRegistry.get(AssetCategory.VEHICLE)
    row = descriptor.build_detail_row(asset_id, detail)
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Type

from pydantic import BaseModel
from sqlmodel import SQLModel

from backend.app.db.models import (
    AssetCategory,
    RealEstateAsset,
    VehicleAsset,
    BankAccountAsset,
    InvestmentAsset,
    BusinessAsset,
    OtherAsset,
    )
from backend.app.logging_config import get_logger
from backend.app.schemas.assets import (
    AssetCreateBase,
    AssetResponseBase,
    RealEstateDetailFields,
    RealEstateCreateRequest,
    RealEstateAssetResponse,
    VehicleDetailFields,
    VehicleCreateRequest,
    VehicleAssetResponse,
    BankAccountDetailFields,
    BankAccountCreateRequest,
    BankAccountAssetResponse,
    InvestmentDetailFields,
    InvestmentCreateRequest,
    InvestmentAssetResponse,
    BusinessDetailFields,
    BusinessCreateRequest,
    BusinessAssetResponse,
    OtherDetailFields,
    OtherCreateRequest,
    OtherAssetResponse,
    )

logger = get_logger(__name__)


class AssetCategoryDescriptor:
    """Base class for category descriptors. Subclasses only set the class attributes."""
    category: ClassVar[AssetCategory]
    create_schema: ClassVar[Type[AssetCreateBase]]
    detail_schema: ClassVar[Type[BaseModel]]
    detail_model: ClassVar[Type[SQLModel]]
    response_schema: ClassVar[Type[AssetResponseBase]]

    @classmethod
    def slug(cls) -> str:
        return cls.category.slug

    @classmethod
    def detail_field_names(cls) -> List[str]:
        return list(cls.detail_schema.model_fields)

    @classmethod
    def build_detail_row(cls, asset_id: str, detail: BaseModel) -> SQLModel:
        """Create the (unsaved) detail table row for a validated detail record."""
        return cls.detail_model(asset_id=asset_id, **detail.model_dump())

    @classmethod
    def detail_values(cls, row: SQLModel) -> Dict[str, Any]:
        """Read the detail fields back from a stored detail row."""
        return {name: getattr(row, name) for name in cls.detail_field_names()}


class AssetCategoryRegistry:
    """Registry of category descriptors, keyed by AssetCategory."""
    _descriptors: Dict[AssetCategory, Type[AssetCategoryDescriptor]] = {}

    @classmethod
    def register(cls, descriptor_class: Type[AssetCategoryDescriptor]) -> None:
        """
        Register a descriptor class.

        The descriptor_class must define a `category` attribute; registering
        the same category twice is a programming error.
        """
        category = getattr(descriptor_class, "category", None)
        if not isinstance(category, AssetCategory):
            raise ValueError("Descriptor class must define a category attribute")
        if category in cls._descriptors:
            raise ValueError(f"Category {category.value} is already registered")
        cls._descriptors[category] = descriptor_class
        logger.debug("Asset category registered", category=category.value, slug=category.slug)

    @classmethod
    def get(cls, category: AssetCategory) -> Type[AssetCategoryDescriptor]:
        """Get descriptor by category. Raises KeyError for unregistered categories."""
        return cls._descriptors[category]

    @classmethod
    def resolve(cls, raw: str | AssetCategory) -> Type[AssetCategoryDescriptor]:
        """
        Get descriptor from an enum member, enum value or URL slug.

        Raises:
            ValueError: If the value names no registered category
        """
        category = raw if isinstance(raw, AssetCategory) else AssetCategory.from_slug(raw)
        descriptor = cls._descriptors.get(category)
        if descriptor is None:
            raise ValueError(f"No descriptor registered for category {category.value}")
        return descriptor

    @classmethod
    def list_categories(cls) -> List[Dict[str, str]]:
        """
        List all registered categories.

        Returns:
            List of dicts with 'category' and 'slug' keys
        """
        return [{"category": c.value, "slug": c.slug} for c in cls._descriptors]


# Decorator factory
def register_category(registry_class: Type[AssetCategoryRegistry] = AssetCategoryRegistry):
    """
    Decorator to register a descriptor class with the given registry.

    Example usage:
    @register_category()
    class VehicleCategory(AssetCategoryDescriptor):
        category = AssetCategory.VEHICLE
        ...
    """

    def decorator(descriptor_class: Type[AssetCategoryDescriptor]):
        registry_class.register(descriptor_class)
        return descriptor_class

    return decorator


# ============================================================================
# DESCRIPTORS
# ============================================================================

@register_category()
class RealEstateCategory(AssetCategoryDescriptor):
    category = AssetCategory.REAL_ESTATE
    create_schema = RealEstateCreateRequest
    detail_schema = RealEstateDetailFields
    detail_model = RealEstateAsset
    response_schema = RealEstateAssetResponse


@register_category()
class VehicleCategory(AssetCategoryDescriptor):
    category = AssetCategory.VEHICLE
    create_schema = VehicleCreateRequest
    detail_schema = VehicleDetailFields
    detail_model = VehicleAsset
    response_schema = VehicleAssetResponse


@register_category()
class BankAccountCategory(AssetCategoryDescriptor):
    category = AssetCategory.BANK_ACCOUNT
    create_schema = BankAccountCreateRequest
    detail_schema = BankAccountDetailFields
    detail_model = BankAccountAsset
    response_schema = BankAccountAssetResponse


@register_category()
class InvestmentCategory(AssetCategoryDescriptor):
    category = AssetCategory.INVESTMENT
    create_schema = InvestmentCreateRequest
    detail_schema = InvestmentDetailFields
    detail_model = InvestmentAsset
    response_schema = InvestmentAssetResponse


@register_category()
class BusinessCategory(AssetCategoryDescriptor):
    category = AssetCategory.BUSINESS
    create_schema = BusinessCreateRequest
    detail_schema = BusinessDetailFields
    detail_model = BusinessAsset
    response_schema = BusinessAssetResponse


@register_category()
class OtherCategory(AssetCategoryDescriptor):
    category = AssetCategory.OTHER
    create_schema = OtherCreateRequest
    detail_schema = OtherDetailFields
    detail_model = OtherAsset
    response_schema = OtherAssetResponse
