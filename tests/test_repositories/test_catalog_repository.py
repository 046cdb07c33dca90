"""
Тесты для BoatRepository, ExtraPackRepository и CatalogManager.
"""

import pytest
from decimal import Decimal

from boat_rental.catalog_data import DEFAULT_BOATS, DEFAULT_PACKS
from boat_rental.database.managers import CatalogManager
from boat_rental.database.models import init_models
from boat_rental.database.repositories import BoatRepository, ExtraPackRepository
from boat_rental.exceptions import CatalogIntegrityError
from boat_rental.schemas.catalog import DurationKey, Season


def _boat_row(boat_id="test-boat", sort_order=0, is_active=True):
    return {
        "id": boat_id,
        "name": "Test Boat",
        "requires_license": True,
        "capacity": 6,
        "deposit": Decimal("500"),
        "pricing": {
            season: {"period": "test", "prices": {"2h": 100, "4h": 150, "8h": 200}}
            for season in ("LOW", "MID", "HIGH")
        },
        "extras": [],
        "is_active": is_active,
        "sort_order": sort_order,
    }


@pytest.mark.asyncio(loop_scope="function")
class TestBoatRepository:
    """Тесты для BoatRepository."""

    async def test_create_and_get(self, db_session):
        repo = BoatRepository(db_session)

        await repo.create_many([_boat_row()])
        boat = await repo.get_by_id("test-boat")

        assert boat is not None
        assert boat.requires_license is True
        assert boat.pricing["HIGH"]["prices"]["8h"] == 200
        assert await repo.count() == 1

    async def test_get_missing(self, db_session):
        repo = BoatRepository(db_session)

        assert await repo.get_by_id("titanic") is None
        assert not await repo.any_exists()

    async def test_get_active_ordered(self, db_session):
        """Неактивные лодки скрыты, порядок по sort_order."""
        repo = BoatRepository(db_session)
        await repo.create_many([
            _boat_row("second", sort_order=2),
            _boat_row("hidden", sort_order=0, is_active=False),
            _boat_row("first", sort_order=1),
        ])

        boats = await repo.get_active()

        assert [boat.id for boat in boats] == ["first", "second"]
        assert await repo.any_exists()

    async def test_to_catalog_payload(self, db_session):
        repo = BoatRepository(db_session)
        await repo.create_many([_boat_row()])

        payload = (await repo.get_by_id("test-boat")).to_catalog_payload()

        assert payload["requiresLicense"] is True
        assert payload["extras"] == []


@pytest.mark.asyncio(loop_scope="function")
class TestExtraPackRepository:
    """Тесты для ExtraPackRepository."""

    async def test_get_active_ordered_by_price(self, db_session):
        repo = ExtraPackRepository(db_session)
        await repo.create_many([
            {"id": "big", "name": "Big", "extras": ["Nevera"], "price": Decimal("30"),
             "original_price": Decimal("35")},
            {"id": "small", "name": "Small", "extras": ["Nevera"], "price": Decimal("4"),
             "original_price": Decimal("5")},
        ])

        packs = await repo.get_active()

        assert [pack.id for pack in packs] == ["small", "big"]
        assert await repo.count() == 2


@pytest.mark.asyncio(loop_scope="function")
class TestCatalogManager:
    """Тесты наполнения и загрузки каталога."""

    async def test_seed_defaults(self, db_session):
        manager = CatalogManager(db_session)

        added = await manager.seed_defaults()

        assert added is True
        assert await BoatRepository(db_session).count() == len(DEFAULT_BOATS)
        assert await ExtraPackRepository(db_session).count() == len(DEFAULT_PACKS)

    async def test_seed_is_idempotent(self, db_session):
        manager = CatalogManager(db_session)
        await manager.seed_defaults()

        added = await manager.seed_defaults()

        assert added is False
        assert await BoatRepository(db_session).count() == len(DEFAULT_BOATS)

    async def test_load_catalog(self, db_session, catalog):
        """Каталог из БД совпадает с каталогом по умолчанию."""
        manager = CatalogManager(db_session)
        await manager.seed_defaults()

        loaded = await manager.load_catalog()

        assert [boat.id for boat in loaded.boats] == [boat.id for boat in catalog.boats]
        assert {pack.id for pack in loaded.packs} == {pack.id for pack in catalog.packs}
        assert loaded.prices.price_for("solar-450", Season.LOW, DurationKey.H4) == Decimal("150")
        assert loaded.boat("solar-450").extra("Bebidas").price == Decimal("2.5")
        assert loaded.boat("trimarchi-57s").deposit == Decimal("500")

    async def test_load_empty_catalog(self, db_session):
        catalog = await CatalogManager(db_session).load_catalog()

        assert catalog.boats == ()

    async def test_seed_rejects_broken_data(self, db_session):
        """Данные с нарушенными правилами не попадают в БД."""
        boat = dict(DEFAULT_BOATS[0], requiresLicense=True)

        with pytest.raises(CatalogIntegrityError):
            await CatalogManager(db_session).seed_defaults(boats=[boat], packs=[])

        assert await BoatRepository(db_session).count() == 0


@pytest.mark.asyncio(loop_scope="function")
class TestInitModels:
    """Тесты создания схемы."""

    async def test_init_models_is_idempotent(self, async_engine, db_session):
        await init_models(async_engine)
        await init_models(async_engine)

        assert await BoatRepository(db_session).count() == 0
