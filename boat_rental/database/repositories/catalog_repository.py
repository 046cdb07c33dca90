from typing import Any, Dict, List, Optional

from boat_rental.database.models import Boat, ExtraPackRecord
from boat_rental.database.repositories.base import BaseRepository


class BoatRepository(BaseRepository):
    """Репозиторий лодок каталога"""

    async def get_by_id(self, boat_id: str) -> Optional[Boat]:
        return await self._get_one(Boat, Boat.id == boat_id)

    async def get_active(self) -> List[Boat]:
        """Активные лодки в порядке отображения"""
        return await self._get_many(Boat, Boat.is_active.is_(True), order_by=Boat.sort_order)

    async def any_exists(self) -> bool:
        return await self._exists(Boat)

    async def count(self) -> int:
        return await self._count(Boat)

    async def create_many(self, boats: List[Dict[str, Any]]) -> List[Boat]:
        return await self._bulk_create(Boat, boats)


class ExtraPackRepository(BaseRepository):
    """Репозиторий пакетов допов"""

    async def get_active(self) -> List[ExtraPackRecord]:
        return await self._get_many(
            ExtraPackRecord, ExtraPackRecord.is_active.is_(True), order_by=ExtraPackRecord.price
        )

    async def count(self) -> int:
        return await self._count(ExtraPackRecord)

    async def create_many(self, packs: List[Dict[str, Any]]) -> List[ExtraPackRecord]:
        return await self._bulk_create(ExtraPackRecord, packs)
