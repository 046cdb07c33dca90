"""Pydantic модели состояния бронирования (принадлежат одной сессии)"""

import datetime
from typing import Dict, Optional, Set

from pydantic import BaseModel, Field

from boat_rental.schemas.catalog import DurationKey


# Поля формы в порядке отображения
BOOKING_FIELDS = ("name", "email", "phone", "date", "boat", "duration", "time", "people")


class Selection(BaseModel):
    """
    Текущий выбор пользователя.

    selected_extra_names - только допы, выбранные пользователем отдельно.
    Допы активного пакета включены неявно и здесь не хранятся, поэтому
    снятие пакета сохраняет самостоятельно выбранные допы.
    """
    boat_id: Optional[str] = None
    date: Optional[datetime.date] = None
    duration_key: Optional[DurationKey] = None
    selected_pack_id: Optional[str] = None
    selected_extra_names: Set[str] = Field(default_factory=set)


class BookingForm(BaseModel):
    """Контактные данные и параметры формы бронирования"""
    name: str = ""
    email: str = ""
    phone: str = ""
    time: str = ""
    people: Optional[int] = None


class FieldState(BaseModel):
    touched: bool = False


class FieldValidationState(BaseModel):
    """Состояние видимости ошибок полей формы"""
    fields: Dict[str, FieldState] = Field(
        default_factory=lambda: {name: FieldState() for name in BOOKING_FIELDS}
    )
    submitted: bool = False

    def touch(self, field: str) -> None:
        self.fields.setdefault(field, FieldState()).touched = True

    def touch_all(self) -> None:
        for name in BOOKING_FIELDS:
            self.touch(name)

    def is_touched(self, field: str) -> bool:
        state = self.fields.get(field)
        return bool(state and state.touched)
