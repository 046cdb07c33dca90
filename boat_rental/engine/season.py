from datetime import date

from boat_rental.exceptions import OutOfOperatingSeason
from boat_rental.schemas.catalog import Season


class SeasonMonths:
    """Месяцы ценовых сезонов"""

    HIGH = frozenset({8})                 # август
    MID = frozenset({7})                  # июль
    LOW = frozenset({4, 5, 6, 9, 10})     # апрель-июнь, сентябрь-октябрь
    # ноябрь-март - не работаем


def resolve_season(on_date: date) -> Season:
    """
    Определить ценовой сезон по дате

    Raises:
        OutOfOperatingSeason: дата вне апреля - октября
    """
    month = on_date.month
    if month in SeasonMonths.HIGH:
        return Season.HIGH
    if month in SeasonMonths.MID:
        return Season.MID
    if month in SeasonMonths.LOW:
        return Season.LOW
    raise OutOfOperatingSeason(on_date)
