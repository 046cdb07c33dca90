"""Pydantic модели промоакций: подарочная карта или процентная скидка"""

from decimal import Decimal
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boat_rental.utils.money import parse_money


class GiftCard(BaseModel):
    """Подарочная карта с остатком"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["gift_card"] = "gift_card"
    code: str = Field(..., min_length=1)
    remaining_value: Decimal = Field(..., ge=0)

    @field_validator('remaining_value', mode='before')
    @classmethod
    def parse_remaining(cls, v):
        return parse_money(v)


class PercentageDiscount(BaseModel):
    """Код скидки в процентах (действует только на аренду)"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    code: str = Field(..., min_length=1)
    percentage: int = Field(..., ge=1, le=100)


PromotionCode = Annotated[Union[GiftCard, PercentageDiscount], Field(discriminator="kind")]


class GatewayResponse(BaseModel):
    """Ответ сервиса проверки кодов"""
    model_config = ConfigDict(frozen=True)

    status: int
    payload: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """2xx и нет явного valid: false"""
        return 200 <= self.status < 300 and self.payload.get("valid", True) is not False

    @property
    def message(self) -> Optional[str]:
        return self.payload.get("error") or self.payload.get("message")
