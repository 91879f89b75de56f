"""
Tests for AssetRegistrationService.

End-to-end workflow at the service level: validate -> verify -> persist,
then read back through assembly.

Covers:
- Round-trip for every category (what was registered is what is read)
- The BMW X5 scenarios (success, bad sum, foreign owner)
- No side effects on rejected registrations
- Idempotent reads, family scoping, listing, DetailMissing on corrupted data

Reference: backend/app/services/asset_registration.py
"""
from decimal import Decimal

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Asset, AssetCategory, AssetOwnership, VehicleAsset
from backend.app.services.asset_errors import (
    AssetNotFound,
    DetailMissing,
    InvalidInput,
    OwnerNotInFamily,
    OwnershipSumInvalid,
    )
from backend.app.services.asset_registration import AssetRegistrationService
from backend.test_scripts.asset_payloads import EXPECTED_CATEGORY, FULL_PAYLOADS, bmw_payload, full_payload


async def count_rows(engine, model) -> int:
    async with AsyncSession(engine) as check:
        return (await check.execute(select(func.count()).select_from(model))).scalar_one()


# ============================================================================
# TESTS: round-trip
# ============================================================================

class TestRoundTrip:
    """Register then read: detail fields and ownerships come back unchanged."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", sorted(FULL_PAYLOADS))
    async def test_every_category_round_trips(self, session, identity, slug):
        """REG-001: Every submitted field is returned with the same value."""
        service = AssetRegistrationService(session)
        payload = full_payload(slug)

        asset_id = await service.register(identity, slug, payload)
        asset = await service.get(identity, asset_id)
        dumped = asset.model_dump(mode="json", by_alias=True)

        assert dumped["assetId"] == asset_id
        assert dumped["familyId"] == identity.family_id
        assert dumped["category"] == EXPECTED_CATEGORY[slug]
        for key, value in FULL_PAYLOADS[slug].items():
            assert dumped[key] == value, f"{slug}.{key}: {dumped[key]!r} != {value!r}"

        assert dumped["ownerships"] == [
            {"userId": "u1", "name": "Anna", "percentage": 60.0},
            {"userId": "u2", "name": "Marco", "percentage": 40.0},
            ]
        assert dumped["createdAt"].endswith("Z")
        assert dumped["updatedAt"].endswith("Z")
        assert dumped["deletedAt"] is None

    @pytest.mark.asyncio
    async def test_omitted_optionals_read_back_as_none(self, session, identity):
        """REG-002: Optional fields never submitted come back as null, not 0."""
        service = AssetRegistrationService(session)

        asset_id = await service.register(identity, "vehicle", bmw_payload())
        dumped = (await service.get(identity, asset_id)).model_dump(mode="json", by_alias=True)

        assert dumped["make"] is None
        assert dumped["year"] is None
        assert dumped["outstandingLoan"] is None
        assert dumped["purchaseDate"] is None

    @pytest.mark.asyncio
    async def test_fractional_percentages_exact(self, session, identity):
        """REG-003: 66.67 / 33.33 is accepted and read back exactly."""
        service = AssetRegistrationService(session)
        owners = [{"userId": "u1", "percentage": 66.67}, {"userId": "u2", "percentage": 33.33}]

        asset_id = await service.register(identity, "vehicle", bmw_payload(owners))
        asset = await service.get(identity, asset_id)

        assert [o.percentage for o in asset.ownerships] == [Decimal("66.67"), Decimal("33.33")]

    @pytest.mark.asyncio
    async def test_ownerships_ordered_by_share(self, session, identity):
        """REG-004: Largest share first."""
        service = AssetRegistrationService(session)
        owners = [{"userId": "u1", "percentage": 25}, {"userId": "u2", "percentage": 75}]

        asset_id = await service.register(identity, "other", full_payload("other", owners))
        asset = await service.get(identity, asset_id)

        assert [o.user_id for o in asset.ownerships] == ["u2", "u1"]

    @pytest.mark.asyncio
    async def test_values_at_column_limits_round_trip(self, session, identity):
        """REG-005: The widest values the columns accept come back digit for digit."""
        service = AssetRegistrationService(session)
        owners = [{"userId": "u1", "percentage": 66.666667}, {"userId": "u2", "percentage": 33.333333}]
        body = bmw_payload(owners)
        body["purchasePrice"] = 99999999999.9999
        body["currentValue"] = 0.0001
        body["outstandingLoan"] = 12345678901.2345

        asset_id = await service.register(identity, "vehicle", body)
        asset = await service.get(identity, asset_id)

        assert asset.purchase_price == Decimal("99999999999.9999")
        assert asset.current_value == Decimal("0.0001")
        assert asset.outstanding_loan == Decimal("12345678901.2345")
        assert [o.percentage for o in asset.ownerships] == [Decimal("66.666667"), Decimal("33.333333")]
        assert sum(o.percentage for o in asset.ownerships) == Decimal("100")


# ============================================================================
# TESTS: scenarios
# ============================================================================

class TestScenarios:
    """The three reference scenarios for a vehicle registration."""

    @pytest.mark.asyncio
    async def test_bmw_two_owners_succeeds(self, engine, session, identity):
        """REG-101: u1 60 + u2 40 creates one vehicle with two ownerships."""
        service = AssetRegistrationService(session)

        asset_id = await service.register(identity, "vehicle", bmw_payload())
        asset = await service.get(identity, asset_id)

        assert asset.category == AssetCategory.VEHICLE
        assert asset.vehicle_name == "BMW X5"
        assert asset.purchase_price == Decimal("300000")
        assert asset.current_value == Decimal("280000")
        assert {(o.user_id, o.percentage) for o in asset.ownerships} == {
            ("u1", Decimal("60")), ("u2", Decimal("40")),
            }
        assert await count_rows(engine, Asset) == 1
        assert await count_rows(engine, VehicleAsset) == 1
        assert await count_rows(engine, AssetOwnership) == 2

    @pytest.mark.asyncio
    async def test_bmw_sum_ninety_rejected(self, engine, session, identity):
        """REG-102: u1 60 + u2 30 fails with OwnershipSumInvalid(90), nothing stored."""
        owners = [{"userId": "u1", "percentage": 60}, {"userId": "u2", "percentage": 30}]

        with pytest.raises(OwnershipSumInvalid) as exc_info:
            await AssetRegistrationService(session).register(identity, "vehicle", bmw_payload(owners))

        assert exc_info.value.computed_sum == Decimal("90")
        assert await count_rows(engine, Asset) == 0
        assert await count_rows(engine, VehicleAsset) == 0
        assert await count_rows(engine, AssetOwnership) == 0

    @pytest.mark.asyncio
    async def test_bmw_foreign_owner_rejected(self, engine, session, identity):
        """REG-103: An owner from another family fails with OwnerNotInFamily, nothing stored."""
        owners = [{"userId": "u1", "percentage": 60}, {"userId": "x1", "percentage": 40}]

        with pytest.raises(OwnerNotInFamily) as exc_info:
            await AssetRegistrationService(session).register(identity, "vehicle", bmw_payload(owners))

        assert exc_info.value.user_ids == ["x1"]
        assert await count_rows(engine, Asset) == 0
        assert await count_rows(engine, AssetOwnership) == 0

    @pytest.mark.asyncio
    async def test_invalid_input_before_ownership_checks(self, engine, session, identity):
        """REG-104: Validation errors win over a bad sum in the same request."""
        body = bmw_payload([{"userId": "u1", "percentage": 10}])
        del body["vehicleName"]

        with pytest.raises(InvalidInput):
            await AssetRegistrationService(session).register(identity, "vehicle", body)

        assert await count_rows(engine, Asset) == 0

    @pytest.mark.asyncio
    async def test_tolerance_override(self, session, identity):
        """REG-105: A service built with a tolerance accepts near-100 sums."""
        owners = [{"userId": "u1", "percentage": 33.33}, {"userId": "u2", "percentage": 66.66}]
        service = AssetRegistrationService(session, tolerance=Decimal("0.01"))

        assert await service.register(identity, "vehicle", bmw_payload(owners))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("purchasePrice", 0.12345),
        ("currentValue", 123456789012.5),
        ("currentValue", 12345678901234567890123),
        ])
    async def test_amount_beyond_column_rejected(self, engine, session, identity, field, value):
        """REG-106: Amounts the column cannot hold exactly are InvalidInput, nothing stored."""
        body = bmw_payload()
        body[field] = value

        with pytest.raises(InvalidInput) as exc_info:
            await AssetRegistrationService(session).register(identity, "vehicle", body)

        assert [e["field"] for e in exc_info.value.details["errors"]] == [field]
        assert await count_rows(engine, Asset) == 0

    @pytest.mark.asyncio
    async def test_percentage_beyond_column_rejected(self, engine, session, identity):
        """REG-107: Shares with more than 6 decimals are rejected, not rounded to a sum other than 100."""
        owners = [{"userId": "u1", "percentage": 66.6666667}, {"userId": "u2", "percentage": 33.3333333}]

        with pytest.raises(InvalidInput) as exc_info:
            await AssetRegistrationService(session).register(identity, "vehicle", bmw_payload(owners))

        assert [e["field"] for e in exc_info.value.details["errors"]] == ["owners.0.percentage", "owners.1.percentage"]
        assert await count_rows(engine, AssetOwnership) == 0


# ============================================================================
# TESTS: reads
# ============================================================================

class TestReads:
    """Read-side behaviour: idempotence, scoping, listing, integrity."""

    @pytest.mark.asyncio
    async def test_read_is_idempotent(self, session, identity):
        """REG-201: Two reads with no writes in between are identical."""
        service = AssetRegistrationService(session)
        asset_id = await service.register(identity, "real-estate", full_payload("real-estate"))

        first = await service.get(identity, asset_id)
        second = await service.get(identity, asset_id)

        assert first == second
        assert first.model_dump(mode="json") == second.model_dump(mode="json")

    @pytest.mark.asyncio
    async def test_unknown_asset(self, session, identity):
        """REG-202: Unknown id is AssetNotFound."""
        with pytest.raises(AssetNotFound):
            await AssetRegistrationService(session).get(identity, "does-not-exist")

    @pytest.mark.asyncio
    async def test_other_family_cannot_read(self, session, identity, other_identity):
        """REG-203: Another family's asset is reported as not found."""
        service = AssetRegistrationService(session)
        asset_id = await service.register(identity, "vehicle", bmw_payload())

        with pytest.raises(AssetNotFound):
            await service.get(other_identity, asset_id)

    @pytest.mark.asyncio
    async def test_detail_missing(self, session, identity):
        """REG-204: Removing the detail row turns reads into DetailMissing."""
        service = AssetRegistrationService(session)
        asset_id = await service.register(identity, "vehicle", bmw_payload())

        await session.execute(delete(VehicleAsset).where(VehicleAsset.asset_id == asset_id))
        await session.commit()

        with pytest.raises(DetailMissing) as exc_info:
            await service.get(identity, asset_id)

        assert exc_info.value.asset_id == asset_id
        assert exc_info.value.message == "Vehicle data missing"

    @pytest.mark.asyncio
    async def test_list_family_assets(self, session, identity, other_identity):
        """REG-205: Listing shows only the family's own assets."""
        service = AssetRegistrationService(session)
        vehicle_id = await service.register(identity, "vehicle", bmw_payload())
        account_id = await service.register(identity, "bank-account", full_payload("bank-account"))
        await service.register(other_identity, "other", full_payload("other", [{"userId": "x1", "percentage": 100}]))

        assets = await service.list_assets(identity)

        assert {a.asset_id for a in assets} == {vehicle_id, account_id}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("category", ["vehicle", "VEHICLE"])
    async def test_list_with_category_filter(self, session, identity, category):
        """REG-206: Category filter accepts slug or enum value."""
        service = AssetRegistrationService(session)
        vehicle_id = await service.register(identity, "vehicle", bmw_payload())
        await service.register(identity, "bank-account", full_payload("bank-account"))

        assets = await service.list_assets(identity, category)

        assert [a.asset_id for a in assets] == [vehicle_id]

    @pytest.mark.asyncio
    async def test_list_with_invalid_category(self, session, identity):
        """REG-207: Unknown category filter is InvalidInput."""
        with pytest.raises(InvalidInput) as exc_info:
            await AssetRegistrationService(session).list_assets(identity, "spaceship")

        assert exc_info.value.details["errors"][0]["field"] == "category"

    @pytest.mark.asyncio
    async def test_list_empty(self, session, identity):
        """REG-208: No assets yields an empty list."""
        assert await AssetRegistrationService(session).list_assets(identity) == []
