"""Pydantic модели результата расчета"""

import datetime
from decimal import Decimal
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from boat_rental.schemas.catalog import DurationKey, Season
from boat_rental.utils.money import ZERO, format_price


class DurationOption(BaseModel):
    """Вариант длительности для выбора"""
    model_config = ConfigDict(frozen=True)

    key: DurationKey
    label: str
    price: Optional[Decimal] = None

    @property
    def display_label(self) -> str:
        """Подпись с ценой: "4 horas - Media día - 150€" """
        if self.price is None:
            return self.label
        return f"{self.label} - {format_price(self.price)}"

    @property
    def short_label(self) -> str:
        return self.label.split(" - ")[0]


class DiscountResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    computed_discount: Decimal = ZERO


class AppliedPromotion(BaseModel):
    """Примененная промоакция в сводке"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["gift_card", "percentage"]
    code: str
    value: Decimal  # остаток карты или процент
    computed_discount: Decimal


class PricedBookingSummary(BaseModel):
    """
    Итоговая сводка цены.

    Строится заново при каждом изменении выбора и не изменяется.
    Залог информационный и в итог не входит.
    """
    model_config = ConfigDict(frozen=True)

    boat_id: str
    boat_name: str = ""
    date: datetime.date
    season: Season
    duration_key: DurationKey
    base_price: Decimal
    selected_pack_id: Optional[str] = None
    extras: Tuple[str, ...] = ()
    extras_total: Decimal = ZERO
    promotion: Optional[AppliedPromotion] = None
    subtotal: Decimal
    total: Decimal
    deposit: Decimal = ZERO

    @model_validator(mode='after')
    def check_totals(self) -> 'PricedBookingSummary':
        if self.subtotal != self.base_price + self.extras_total:
            raise ValueError('Подытог должен равняться цене аренды плюс допы')
        if self.total < 0:
            raise ValueError('Итоговая сумма не может быть отрицательной')
        return self

    @property
    def discount(self) -> Decimal:
        return self.promotion.computed_discount if self.promotion else ZERO


class SubmissionResult(BaseModel):
    """Результат попытки отправки формы"""
    model_config = ConfigDict(frozen=True)

    ok: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    summary: Optional[PricedBookingSummary] = None
