"""
Допустимые длительности аренды и сброс зависимых полей.

Лодки с лицензией сдаются только на 2, 4 и 8 часов, без лицензии -
на любую длительность из 1h..8h. При смене фильтра лицензии, лодки или
даты зависимые поля пересчитываются строго по порядку:
фильтр -> лодка -> допустимые длительности -> выбранная длительность.
"""

from datetime import date
from typing import List, Optional

from boat_rental.engine.catalog import Catalog
from boat_rental.engine.season import resolve_season
from boat_rental.exceptions import IllegalDuration
from boat_rental.schemas.catalog import (
    DURATION_LABELS, DURATION_ORDER, LICENSED_DURATIONS, DurationKey, LicenseFilter
)
from boat_rental.schemas.summary import DurationOption
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


def legal_keys(
    catalog: Catalog,
    boat_id: Optional[str] = None,
    license_filter: Optional[LicenseFilter] = None
) -> List[DurationKey]:
    """Допустимые длительности для лодки, а без лодки - для категории лицензии"""
    if boat_id:
        return catalog.prices.available_durations(boat_id)
    if license_filter is LicenseFilter.WITH:
        return list(LICENSED_DURATIONS)
    return list(DURATION_ORDER)


def legal_durations(
    catalog: Catalog,
    boat_id: Optional[str] = None,
    license_filter: Optional[LicenseFilter] = None,
    on_date: Optional[date] = None
) -> List[DurationOption]:
    """
    Варианты длительности с подписями

    Цены подставляются, только когда известны лодка и дата.

    Raises:
        OutOfOperatingSeason: дата вне сезона работы
    """
    keys = legal_keys(catalog, boat_id, license_filter)

    if boat_id and on_date:
        season = resolve_season(on_date)
        return [
            DurationOption(
                key=key,
                label=DURATION_LABELS[key],
                price=catalog.prices.price_for(boat_id, season, key)
            )
            for key in keys
        ]

    return [DurationOption(key=key, label=DURATION_LABELS[key]) for key in keys]


def ensure_legal(
    catalog: Catalog,
    duration_key: DurationKey,
    boat_id: Optional[str] = None,
    license_filter: Optional[LicenseFilter] = None
) -> DurationKey:
    """
    Raises:
        IllegalDuration: длительность недоступна
    """
    legal = legal_keys(catalog, boat_id, license_filter)
    try:
        key = DurationKey(duration_key)
    except ValueError:
        raise IllegalDuration(duration_key, legal)

    if key not in legal:
        raise IllegalDuration(key, legal)
    return key


# ================ ШАГИ СБРОСА ЗАВИСИМЫХ ПОЛЕЙ ================

def reconcile_boat(
    catalog: Catalog,
    boat_id: Optional[str],
    license_filter: Optional[LicenseFilter]
) -> Optional[str]:
    """Лодка остается, если подходит под фильтр лицензии"""
    if boat_id is None or license_filter is None:
        return boat_id

    boat = catalog.boat(boat_id)
    if license_filter.matches(boat.requires_license):
        return boat_id

    logger.debug(f"Лодка '{boat_id}' не подходит под фильтр '{license_filter.value}', сброшена")
    return None


def reconcile_duration(
    catalog: Catalog,
    duration_key: Optional[DurationKey],
    boat_id: Optional[str],
    license_filter: Optional[LicenseFilter]
) -> Optional[DurationKey]:
    """Длительность остается, если входит в допустимый набор"""
    if duration_key is None:
        return None

    if duration_key in legal_keys(catalog, boat_id, license_filter):
        return duration_key

    logger.debug(
        f"Длительность {duration_key.value} недоступна "
        f"(лодка={boat_id}, фильтр={getattr(license_filter, 'value', None)}), сброшена"
    )
    return None
