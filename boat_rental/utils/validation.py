"""
Модуль валидаторов формы бронирования
"""

import re
from datetime import date
from typing import Any, Callable, Dict, Optional

from boat_rental.exceptions import FieldValidationError, InvalidFieldFormat, RequiredFieldMissing
from boat_rental.schemas.booking import BOOKING_FIELDS, BookingForm, FieldValidationState, Selection
from boat_rental.utils.logging_config import get_logger


logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


# ================ КОНТАКТНЫЕ ДАННЫЕ ================

def validate_name(v: Optional[str]) -> str:
    """Валидация имени"""
    cleaned = (v or "").strip()
    if not cleaned:
        logger.debug("Ошибка валидации имени | пустое значение")
        raise RequiredFieldMissing("name", "Введите имя")
    return cleaned


def validate_email(v: Optional[str]) -> str:
    """Валидация email"""
    logger.debug(f"Валидация email | входное значение: '{v}'")

    cleaned = (v or "").strip()
    if not cleaned:
        raise RequiredFieldMissing("email", "Введите email")

    if not EMAIL_PATTERN.match(cleaned):
        logger.debug("Ошибка валидации email | неверный формат")
        raise InvalidFieldFormat("email", "Неверный формат email. Пример: user@example.com")

    return cleaned


def validate_phone(v: Optional[str]) -> str:
    """Валидация телефона: только цифры, пробелы игнорируются"""
    logger.debug(f"Валидация телефона | входное значение: '{v}'")

    cleaned = re.sub(r'\s+', '', v or "")
    if not cleaned:
        raise RequiredFieldMissing("phone", "Введите номер телефона")

    if not cleaned.isdigit():
        logger.debug("Ошибка валидации телефона | недопустимые символы")
        raise InvalidFieldFormat("phone", "Номер телефона должен содержать только цифры")

    return cleaned


# ================ ПАРАМЕТРЫ БРОНИРОВАНИЯ ================

def validate_booking_date(v: Optional[date], today: Optional[date] = None) -> date:
    """Дата бронирования не раньше сегодняшней"""
    if v is None:
        raise RequiredFieldMissing("date", "Выберите дату")

    today = today or date.today()
    if v < today:
        logger.debug(f"Ошибка валидации даты | {v} раньше {today}")
        raise InvalidFieldFormat("date", "Дата не может быть в прошлом")

    return v


def validate_required(field: str, v: Any, message: str) -> Any:
    """Поле выбора должно быть заполнено"""
    if v is None or (isinstance(v, str) and not v.strip()):
        raise RequiredFieldMissing(field, message)
    return v


def validate_people(v: Optional[int], capacity: Optional[int] = None) -> int:
    """Количество человек от 1 до вместимости лодки"""
    if v is None:
        raise RequiredFieldMissing("people", "Укажите количество человек")

    if v < 1:
        raise InvalidFieldFormat("people", "Количество человек должно быть не меньше 1")

    if capacity is not None and v > capacity:
        logger.debug(f"Ошибка валидации количества человек | {v} > {capacity}")
        raise InvalidFieldFormat("people", f"Максимум {capacity} человек на этой лодке")

    return v


# ================ ФОРМА ЦЕЛИКОМ ================

class BookingFieldValidator:
    """
    Проверка полей формы и политика показа ошибок.

    Ошибка поля показывается, только если поле уже теряло фокус
    или была попытка отправки формы.
    """

    def __init__(self, capacity_for: Optional[Callable[[str], Optional[int]]] = None,
                 today: Callable[[], date] = date.today):
        self.capacity_for = capacity_for
        self.today = today

    def check_field(self, field: str, form: BookingForm, selection: Selection) -> None:
        """
        Raises:
            FieldValidationError: поле не прошло проверку
        """
        if field == "name":
            validate_name(form.name)
        elif field == "email":
            validate_email(form.email)
        elif field == "phone":
            validate_phone(form.phone)
        elif field == "date":
            validate_booking_date(selection.date, self.today())
        elif field == "boat":
            validate_required("boat", selection.boat_id, "Выберите лодку")
        elif field == "duration":
            validate_required("duration", selection.duration_key, "Выберите длительность")
        elif field == "time":
            validate_required("time", form.time, "Выберите время начала")
        elif field == "people":
            capacity = None
            if selection.boat_id and self.capacity_for:
                capacity = self.capacity_for(selection.boat_id)
            validate_people(form.people, capacity)
        else:
            raise ValueError(f"Неизвестное поле формы: '{field}'")

    def field_error(self, field: str, form: BookingForm, selection: Selection) -> str:
        """Текст ошибки поля или пустая строка"""
        try:
            self.check_field(field, form, selection)
        except FieldValidationError as e:
            return e.message
        return ""

    def errors(self, form: BookingForm, selection: Selection) -> Dict[str, str]:
        """Ошибки всех полей формы"""
        result = {}
        for field in BOOKING_FIELDS:
            message = self.field_error(field, form, selection)
            if message:
                result[field] = message
        return result

    def show_field_error(
        self,
        field: str,
        form: BookingForm,
        selection: Selection,
        state: FieldValidationState
    ) -> bool:
        """Показывать ли ошибку поля"""
        if not (state.is_touched(field) or state.submitted):
            return False
        return bool(self.field_error(field, form, selection))
