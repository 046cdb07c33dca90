"""
Тесты для модуля валидаторов формы бронирования
"""

import pytest
from datetime import date

from boat_rental.exceptions import FieldValidationError, InvalidFieldFormat, RequiredFieldMissing
from boat_rental.schemas.booking import BookingForm, FieldValidationState, Selection
from boat_rental.schemas.catalog import DurationKey
from boat_rental.utils.validation import (
    BookingFieldValidator,
    validate_booking_date,
    validate_email,
    validate_name,
    validate_people,
    validate_phone,
    validate_required,
)


TODAY = date(2026, 4, 1)


# ==================== Контактные данные ====================
class TestContactFields:
    """Тесты для имени, email и телефона."""

    def test_name(self):
        assert validate_name("  Ana  ") == "Ana"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_name(self, value):
        with pytest.raises(RequiredFieldMissing):
            validate_name(value)

    @pytest.mark.parametrize("value", ["user@example.com", "a.b@c.es", " ana@mail.org "])
    def test_valid_email(self, value):
        assert validate_email(value) == value.strip()

    @pytest.mark.parametrize("value", ["user@", "@example.com", "user@example", "us er@example.com"])
    def test_invalid_email(self, value):
        with pytest.raises(InvalidFieldFormat) as exc_info:
            validate_email(value)

        assert exc_info.value.field == "email"

    def test_empty_email(self):
        with pytest.raises(RequiredFieldMissing):
            validate_email("")

    def test_phone_spaces_ignored(self):
        """Пробелы в номере игнорируются."""
        assert validate_phone("612 345 678") == "612345678"

    @pytest.mark.parametrize("value", ["+34612345678", "612-345-678", "612abc"])
    def test_phone_only_digits(self, value):
        with pytest.raises(InvalidFieldFormat):
            validate_phone(value)

    def test_empty_phone(self):
        with pytest.raises(RequiredFieldMissing):
            validate_phone("   ")


# ==================== Параметры бронирования ====================
class TestBookingFields:
    """Тесты для даты, выбора и количества человек."""

    def test_today_is_valid(self):
        assert validate_booking_date(TODAY, TODAY) == TODAY

    def test_past_date(self):
        with pytest.raises(InvalidFieldFormat):
            validate_booking_date(date(2026, 3, 31), TODAY)

    def test_missing_date(self):
        with pytest.raises(RequiredFieldMissing):
            validate_booking_date(None, TODAY)

    def test_required(self):
        assert validate_required("time", "10:00", "Выберите время") == "10:00"
        with pytest.raises(RequiredFieldMissing) as exc_info:
            validate_required("time", " ", "Выберите время")

        assert exc_info.value.message == "Выберите время"

    @pytest.mark.parametrize("people,capacity", [(1, 5), (5, 5), (12, None)])
    def test_valid_people(self, people, capacity):
        assert validate_people(people, capacity) == people

    @pytest.mark.parametrize("people,capacity", [(0, 5), (6, 5), (-1, None)])
    def test_invalid_people(self, people, capacity):
        with pytest.raises(InvalidFieldFormat):
            validate_people(people, capacity)

    def test_field_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_people(None)


# ==================== Форма целиком ====================
class TestBookingFieldValidator:
    """Тесты проверки формы и видимости ошибок."""

    @pytest.fixture
    def validator(self):
        return BookingFieldValidator(capacity_for=lambda boat_id: 5, today=lambda: TODAY)

    @pytest.fixture
    def form(self):
        return BookingForm(name="Ana", email="ana@mail.es", phone="612345678", time="10:00", people=4)

    @pytest.fixture
    def selection(self):
        return Selection(boat_id="solar-450", date=date(2026, 5, 10), duration_key=DurationKey.H4)

    def test_valid_form(self, validator, form, selection):
        assert validator.errors(form, selection) == {}

    def test_empty_form(self, validator):
        errors = validator.errors(BookingForm(), Selection())

        assert set(errors) == {"name", "email", "phone", "date", "boat", "duration", "time", "people"}

    def test_people_over_capacity(self, validator, form, selection):
        form.people = 6

        assert validator.field_error("people", form, selection) == "Максимум 5 человек на этой лодке"

    def test_field_error_empty_when_valid(self, validator, form, selection):
        assert validator.field_error("email", form, selection) == ""

    def test_unknown_field(self, validator, form, selection):
        with pytest.raises(ValueError):
            validator.check_field("surname", form, selection)

    def test_check_field_raises(self, validator, selection):
        with pytest.raises(FieldValidationError):
            validator.check_field("name", BookingForm(), selection)

    def test_error_hidden_until_blur(self, validator, selection):
        """Ошибка не показывается, пока поле не теряло фокус."""
        state = FieldValidationState()
        form = BookingForm(email="wrong")

        assert not validator.show_field_error("email", form, selection, state)

        state.touch("email")
        assert validator.show_field_error("email", form, selection, state)
        assert not validator.show_field_error("phone", form, selection, state)

    def test_errors_shown_after_submit(self, validator, selection):
        state = FieldValidationState(submitted=True)

        assert validator.show_field_error("name", BookingForm(), selection, state)

    def test_valid_field_never_shown(self, validator, form, selection):
        state = FieldValidationState(submitted=True)
        state.touch_all()

        assert not validator.show_field_error("name", form, selection, state)
