"""Pydantic модели каталога: лодки, сезонные цены, допы и пакеты допов"""

import enum
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
)

from boat_rental.utils.money import parse_capacity, parse_money


class Season(str, enum.Enum):
    """Ценовой сезон"""
    LOW = "LOW"      # апрель-июнь, сентябрь-октябрь
    MID = "MID"      # июль
    HIGH = "HIGH"    # август


# Названия сезонов в исходном каталоге
SEASON_ALIASES = {
    "BAJA": Season.LOW,
    "MEDIA": Season.MID,
    "ALTA": Season.HIGH,
}


class DurationKey(str, enum.Enum):
    """Длительность аренды (ключ таблицы цен)"""
    H1 = "1h"
    H2 = "2h"
    H3 = "3h"
    H4 = "4h"
    H6 = "6h"
    H8 = "8h"


DURATION_ORDER: Tuple[DurationKey, ...] = (
    DurationKey.H1, DurationKey.H2, DurationKey.H3,
    DurationKey.H4, DurationKey.H6, DurationKey.H8,
)

LICENSED_DURATIONS: Tuple[DurationKey, ...] = (DurationKey.H2, DurationKey.H4, DurationKey.H8)

DURATION_LABELS: Dict[DurationKey, str] = {
    DurationKey.H1: "1 hora",
    DurationKey.H2: "2 horas",
    DurationKey.H3: "3 horas",
    DurationKey.H4: "4 horas - Media día",
    DurationKey.H6: "6 horas",
    DurationKey.H8: "8 horas - Día completo",
}


class LicenseFilter(str, enum.Enum):
    """Фильтр категории лицензии до выбора лодки"""
    WITH = "with"
    WITHOUT = "without"

    def matches(self, requires_license: bool) -> bool:
        return requires_license if self is LicenseFilter.WITH else not requires_license


def sort_durations(keys) -> List[DurationKey]:
    """Упорядочить ключи длительности 1h < 2h < ... < 8h"""
    return sorted((DurationKey(k) for k in keys), key=DURATION_ORDER.index)


class ExtraItem(BaseModel):
    """Дополнительная услуга с отдельной ценой"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    icon: str = ""

    @field_validator('price', mode='before')
    @classmethod
    def parse_price(cls, v):
        """Цены каталога приходят строками вида "2,5€/ud" """
        return parse_money(v)


class ExtraPack(BaseModel):
    """Пакет допов по фиксированной цене со скидкой"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    name_en: str = Field("", validation_alias=AliasChoices("name_en", "nameEN", "nameEn"))
    extras: Tuple[str, ...] = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    original_price: Decimal = Field(
        ..., ge=0, validation_alias=AliasChoices("original_price", "originalPrice")
    )
    icon: str = "Package"

    @field_validator('price', 'original_price', mode='before')
    @classmethod
    def parse_prices(cls, v):
        return parse_money(v)

    @model_validator(mode='after')
    def check_savings(self) -> 'ExtraPack':
        """Пакет не может стоить дороже допов по отдельности"""
        if self.original_price < self.price:
            raise ValueError(
                f"Пакет '{self.id}': цена {self.price} выше суммы допов {self.original_price}"
            )
        return self

    @property
    def savings(self) -> Decimal:
        return self.original_price - self.price

    def covers(self, extra_name: str) -> bool:
        return extra_name in self.extras


class SeasonPricing(BaseModel):
    """Цены одного сезона"""
    model_config = ConfigDict(frozen=True)

    period: str = ""
    prices: Dict[DurationKey, Decimal]

    @field_validator('prices', mode='before')
    @classmethod
    def parse_prices(cls, v):
        return {key: parse_money(price) for key, price in dict(v).items()}

    @field_validator('prices')
    @classmethod
    def check_prices(cls, v: Dict[DurationKey, Decimal]) -> Dict[DurationKey, Decimal]:
        if not v:
            raise ValueError('Таблица цен сезона пуста')
        for key, price in v.items():
            if price <= 0:
                raise ValueError(f"Цена для {key.value} должна быть положительной")
        return v


class BoatPricingProfile(BaseModel):
    """
    Профиль цен лодки.

    Загружается из каталога один раз и далее только читается.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    requires_license: bool = Field(
        False, validation_alias=AliasChoices("requires_license", "requiresLicense")
    )
    capacity: int = Field(..., ge=1)
    deposit: Decimal = Field(Decimal("0"), ge=0)
    pricing: Dict[Season, SeasonPricing]
    extras: Tuple[ExtraItem, ...] = ()

    @field_validator('capacity', mode='before')
    @classmethod
    def parse_capacity(cls, v):
        return parse_capacity(v)

    @field_validator('deposit', mode='before')
    @classmethod
    def parse_deposit(cls, v):
        return parse_money(v)

    @field_validator('pricing', mode='before')
    @classmethod
    def map_season_names(cls, v):
        """Сезоны могут называться BAJA/MEDIA/ALTA"""
        return {SEASON_ALIASES.get(str(key).upper(), key): value for key, value in dict(v).items()}

    @model_validator(mode='after')
    def check_extras_unique(self) -> 'BoatPricingProfile':
        names = [extra.name for extra in self.extras]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Лодка '{self.id}': повторяющиеся допы {sorted(duplicates)}")
        return self

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def extra_names(self) -> Tuple[str, ...]:
        return tuple(extra.name for extra in self.extras)

    def extra(self, name: str) -> Optional[ExtraItem]:
        for item in self.extras:
            if item.name == name:
                return item
        return None
