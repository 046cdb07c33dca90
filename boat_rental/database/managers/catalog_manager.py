from typing import Any, Dict, Iterable, Optional

from boat_rental.catalog_data import DEFAULT_BOATS, DEFAULT_PACKS
from boat_rental.database.managers.base import BaseManager
from boat_rental.database.repositories import BoatRepository, ExtraPackRepository
from boat_rental.engine.catalog import Catalog, build_catalog


class CatalogManager(BaseManager):
    """Загрузка каталога из БД и начальное наполнение"""

    def __init__(self, session):
        super().__init__(session)
        self.boat_repo = BoatRepository(session)
        self.pack_repo = ExtraPackRepository(session)

    async def seed_defaults(
        self,
        boats: Optional[Iterable[Dict[str, Any]]] = None,
        packs: Optional[Iterable[Dict[str, Any]]] = None
    ) -> bool:
        """
        Заполнить каталог, если таблицы пусты

        Данные проверяются теми же правилами, что и при загрузке.

        Returns:
            True если данные добавлены, False если каталог уже заполнен

        Raises:
            CatalogIntegrityError: данные не проходят проверку
        """
        self._log_operation_start("seed_defaults")

        if await self.boat_repo.any_exists():
            self.logger.info("Каталог уже заполнен, пропускаем")
            self._log_operation_end("seed_defaults", added=False)
            return False

        catalog = build_catalog(
            DEFAULT_BOATS if boats is None else boats,
            DEFAULT_PACKS if packs is None else packs
        )

        boat_rows = []
        for position, boat in enumerate(catalog.boats):
            data = boat.model_dump(mode="json")
            boat_rows.append({
                "id": boat.id,
                "name": boat.display_name,
                "requires_license": boat.requires_license,
                "capacity": boat.capacity,
                "deposit": boat.deposit,
                "pricing": data["pricing"],
                "extras": data["extras"],
                "sort_order": position,
            })

        pack_rows = [
            {
                "id": pack.id,
                "name": pack.name,
                "name_en": pack.name_en,
                "extras": list(pack.extras),
                "price": pack.price,
                "original_price": pack.original_price,
                "icon": pack.icon,
            }
            for pack in catalog.packs
        ]

        await self.boat_repo.create_many(boat_rows)
        await self.pack_repo.create_many(pack_rows)

        self._log_operation_end("seed_defaults", boats=len(boat_rows), packs=len(pack_rows))
        return True

    async def load_catalog(self) -> Catalog:
        """
        Собрать неизменяемый каталог из активных записей

        Raises:
            CatalogIntegrityError: данные в БД не проходят проверку
        """
        self._log_operation_start("load_catalog")

        boats = await self.boat_repo.get_active()
        packs = await self.pack_repo.get_active()

        if not boats:
            self.logger.warning("В БД нет активных лодок")

        catalog = build_catalog(
            [boat.to_catalog_payload() for boat in boats],
            [pack.to_catalog_payload() for pack in packs]
        )

        self._log_operation_end("load_catalog", boats=len(catalog.boats), packs=len(catalog.packs))
        return catalog
