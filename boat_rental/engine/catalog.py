"""
Каталог лодок: таблицы цен, допы и пакеты допов.

Каталог загружается один раз и дальше только читается, поэтому может
использоваться несколькими сессиями бронирования одновременно.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from boat_rental.exceptions import CatalogIntegrityError, NoSuchPrice, UnknownBoat, UnknownPack
from boat_rental.schemas.catalog import (
    DURATION_ORDER, LICENSED_DURATIONS, BoatPricingProfile, DurationKey,
    ExtraItem, ExtraPack, Season, sort_durations
)
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


# ================ ПРОВЕРКА ЦЕЛОСТНОСТИ ================

def expected_durations(requires_license: bool) -> Tuple[DurationKey, ...]:
    """Набор длительностей для категории лицензии"""
    return LICENSED_DURATIONS if requires_license else DURATION_ORDER


def check_boat_integrity(boat: BoatPricingProfile) -> None:
    """
    Проверить таблицу цен лодки

    Raises:
        CatalogIntegrityError: нет сезона, разные наборы длительностей
            по сезонам или набор не соответствует категории лицензии
    """
    missing = [season.value for season in Season if season not in boat.pricing]
    if missing:
        raise CatalogIntegrityError(
            f"Лодка '{boat.id}': не заданы цены для сезонов {', '.join(missing)}"
        )

    key_sets = {season: frozenset(boat.pricing[season].prices) for season in Season}
    reference = key_sets[Season.LOW]
    for season, keys in key_sets.items():
        if keys != reference:
            raise CatalogIntegrityError(
                f"Лодка '{boat.id}': набор длительностей сезона {season.value} "
                f"отличается от сезона {Season.LOW.value}"
            )

    expected = frozenset(expected_durations(boat.requires_license))
    if reference != expected:
        category = "с лицензией" if boat.requires_license else "без лицензии"
        got = ", ".join(k.value for k in sort_durations(reference))
        raise CatalogIntegrityError(
            f"Лодка '{boat.id}' ({category}): недопустимый набор длительностей [{got}]"
        )


# ================ КАТАЛОГ ================

class Catalog:
    """Неизменяемый каталог лодок и пакетов допов"""

    def __init__(self, boats: Iterable[BoatPricingProfile], packs: Iterable[ExtraPack] = ()):
        boats_by_id: Dict[str, BoatPricingProfile] = {}
        for boat in boats:
            if boat.id in boats_by_id:
                raise CatalogIntegrityError(f"Повторяющийся id лодки: '{boat.id}'")
            check_boat_integrity(boat)
            boats_by_id[boat.id] = boat

        packs_by_id: Dict[str, ExtraPack] = {}
        for pack in packs:
            if pack.id in packs_by_id:
                raise CatalogIntegrityError(f"Повторяющийся id пакета: '{pack.id}'")
            packs_by_id[pack.id] = pack

        self._boats = MappingProxyType(boats_by_id)
        self._packs = MappingProxyType(packs_by_id)

        logger.info(f"Каталог загружен: лодок {len(self._boats)}, пакетов {len(self._packs)}")

    @property
    def boats(self) -> Tuple[BoatPricingProfile, ...]:
        return tuple(self._boats.values())

    @property
    def packs(self) -> Tuple[ExtraPack, ...]:
        return tuple(self._packs.values())

    def boat(self, boat_id: str) -> BoatPricingProfile:
        """
        Raises:
            UnknownBoat: лодки нет в каталоге
        """
        boat = self._boats.get(boat_id)
        if boat is None:
            raise UnknownBoat(boat_id)
        return boat

    def find_boat(self, boat_id: Optional[str]) -> Optional[BoatPricingProfile]:
        if boat_id is None:
            return None
        return self._boats.get(boat_id)

    @property
    def prices(self) -> 'PriceCatalog':
        return PriceCatalog(self)

    @property
    def extras(self) -> 'ExtrasCatalog':
        return ExtrasCatalog(self)


def build_catalog(boats: Iterable[Dict[str, Any]], packs: Iterable[Dict[str, Any]] = ()) -> Catalog:
    """
    Собрать каталог из данных внешнего источника (camelCase или snake_case)

    Raises:
        CatalogIntegrityError: данные не проходят проверку
    """
    try:
        boat_models = [BoatPricingProfile.model_validate(item) for item in boats]
        pack_models = [ExtraPack.model_validate(item) for item in packs]
    except PydanticValidationError as e:
        logger.error(f"Ошибка загрузки каталога: {e}")
        raise CatalogIntegrityError(f"Некорректные данные каталога: {e}") from e

    return Catalog(boat_models, pack_models)


# ================ ТАБЛИЦА ЦЕН ================

class PriceCatalog:
    """Поиск цены аренды по лодке, сезону и длительности"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def price_for(self, boat_id: str, season: Season, duration_key: DurationKey) -> Decimal:
        """
        Raises:
            NoSuchPrice: нет лодки, сезона или длительности в таблице
        """
        boat = self.catalog.find_boat(boat_id)
        season_pricing = boat.pricing.get(season) if boat else None
        price = season_pricing.prices.get(duration_key) if season_pricing else None

        if price is None:
            error = NoSuchPrice(boat_id, season, duration_key)
            logger.error(error.message)
            raise error

        return price

    def available_durations(self, boat_id: str) -> List[DurationKey]:
        """Длительности лодки по таблице низкого сезона, по возрастанию"""
        boat = self.catalog.boat(boat_id)
        return sort_durations(boat.pricing[Season.LOW].prices)


# ================ ДОПЫ И ПАКЕТЫ ================

class ExtrasCatalog:
    """Допы лодки и доступные для нее пакеты"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def extras_for(self, boat_id: str) -> List[ExtraItem]:
        return list(self.catalog.boat(boat_id).extras)

    def packs_for(self, boat_id: str) -> List[ExtraPack]:
        """Пакеты, все допы которых есть у лодки"""
        offered = set(self.catalog.boat(boat_id).extra_names)
        return [pack for pack in self.catalog.packs if set(pack.extras) <= offered]

    def pack(self, boat_id: str, pack_id: str) -> ExtraPack:
        """
        Raises:
            UnknownPack: пакета нет или он недоступен для лодки
        """
        for pack in self.packs_for(boat_id):
            if pack.id == pack_id:
                return pack
        raise UnknownPack(pack_id, boat_id)

    def extra(self, boat_id: str, name: str) -> ExtraItem:
        item = self.catalog.boat(boat_id).extra(name)
        if item is None:
            raise ValueError(f"Доп '{name}' недоступен для лодки '{boat_id}'")
        return item
