"""
Сессия бронирования: состояние выбора одного пользователя.

Все производные значения (допустимые длительности, цена, допы, скидка)
пересчитываются из текущего выбора при каждом запросе. Сессия не
разделяется между пользователями, каталог - разделяется.
"""

from datetime import date
from typing import Callable, List, Optional, Union

from boat_rental.engine.catalog import Catalog
from boat_rental.engine.durations import (
    ensure_legal, legal_durations, reconcile_boat, reconcile_duration
)
from boat_rental.engine.extras import ExtrasPricer
from boat_rental.engine.promotions import PromotionGateway, PromotionResolver
from boat_rental.engine.summary import PricedSummaryBuilder
from boat_rental.schemas.booking import BookingForm, FieldValidationState, Selection
from boat_rental.schemas.catalog import DurationKey, ExtraPack, LicenseFilter
from boat_rental.schemas.promotion import PromotionCode
from boat_rental.schemas.summary import DurationOption, PricedBookingSummary, SubmissionResult
from boat_rental.utils.validation import BookingFieldValidator
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


class BookingSession:
    """Выбор лодки, даты, длительности, допов и промокода"""

    def __init__(
        self,
        catalog: Catalog,
        gateway: PromotionGateway,
        today: Callable[[], date] = date.today
    ):
        self.catalog = catalog
        self.selection = Selection()
        self.form = BookingForm()
        self.field_state = FieldValidationState()
        self.license_filter: Optional[LicenseFilter] = None

        self.extras_pricer = ExtrasPricer(catalog)
        self.summary_builder = PricedSummaryBuilder(catalog)
        self.promotions = PromotionResolver(gateway)
        self.validator = BookingFieldValidator(capacity_for=self._capacity, today=today)

    def _capacity(self, boat_id: str) -> Optional[int]:
        boat = self.catalog.find_boat(boat_id)
        return boat.capacity if boat else None

    def _reconcile(self) -> None:
        """Фильтр -> лодка -> пакет и допы -> длительность"""
        self.selection.boat_id = reconcile_boat(
            self.catalog, self.selection.boat_id, self.license_filter
        )
        self.extras_pricer.drop_unavailable(self.selection)
        self.selection.duration_key = reconcile_duration(
            self.catalog, self.selection.duration_key, self.selection.boat_id, self.license_filter
        )

    # ================ ВЫБОР ================

    def set_license_filter(self, license_filter: Optional[Union[LicenseFilter, str]]) -> None:
        self.license_filter = LicenseFilter(license_filter) if license_filter is not None else None
        logger.debug(f"Фильтр лицензии: {getattr(self.license_filter, 'value', None)}")
        self._reconcile()

    def select_boat(self, boat_id: Optional[str]) -> None:
        """
        Выбрать лодку. Фильтр лицензии выравнивается по категории лодки

        Raises:
            UnknownBoat: лодки нет в каталоге
        """
        if boat_id is None:
            self.selection.boat_id = None
        else:
            boat = self.catalog.boat(boat_id)
            self.selection.boat_id = boat.id
            self.license_filter = LicenseFilter.WITH if boat.requires_license else LicenseFilter.WITHOUT
            logger.debug(f"Выбрана лодка '{boat.id}'")
        self._reconcile()

    def set_date(self, on_date: Optional[date]) -> None:
        """Смена даты меняет только цену, допустимая длительность сохраняется"""
        self.selection.date = on_date
        self._reconcile()

    def set_duration(self, duration_key: Optional[Union[DurationKey, str]]) -> None:
        """
        Raises:
            IllegalDuration: длительность недоступна для лодки или фильтра
        """
        if duration_key is None:
            self.selection.duration_key = None
            return
        self.selection.duration_key = ensure_legal(
            self.catalog, duration_key, self.selection.boat_id, self.license_filter
        )

    def toggle_extra(self, extra_name: str) -> None:
        self.extras_pricer.toggle_extra(self.selection, extra_name)

    def select_pack(self, pack_id: str) -> ExtraPack:
        return self.extras_pricer.select_pack(self.selection, pack_id)

    def deselect_pack(self) -> None:
        self.extras_pricer.deselect_pack(self.selection)

    def is_extra_locked(self, extra_name: str) -> bool:
        return self.extras_pricer.is_locked(self.selection, extra_name)

    # ================ ПРОМОКОД ================

    @property
    def promotion(self) -> Optional[PromotionCode]:
        return self.promotions.active

    async def apply_code(self, raw_code: str) -> PromotionCode:
        """
        Raises:
            InvalidCode, ValidationInProgress, StaleValidationResult
        """
        return await self.promotions.validate(raw_code)

    def clear_code(self) -> None:
        self.promotions.clear()

    # ================ ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ ================

    def duration_options(self) -> List[DurationOption]:
        return legal_durations(
            self.catalog, self.selection.boat_id, self.license_filter, self.selection.date
        )

    def summary(self) -> PricedBookingSummary:
        """Сводка строится заново на каждый вызов"""
        return self.summary_builder.build(self.selection, self.promotions.active)

    # ================ ФОРМА ================

    def update_form(self, **fields) -> None:
        for name, value in fields.items():
            if name not in BookingForm.model_fields:
                raise ValueError(f"Неизвестное поле формы: '{name}'")
            setattr(self.form, name, value)

    def blur(self, field: str) -> None:
        self.field_state.touch(field)

    def field_error(self, field: str) -> str:
        return self.validator.field_error(field, self.form, self.selection)

    def show_field_error(self, field: str) -> bool:
        return self.validator.show_field_error(field, self.form, self.selection, self.field_state)

    def submit(self) -> SubmissionResult:
        """
        Попытка отправки: все поля помечаются затронутыми и проверяются.

        Ошибки полей прерывают отправку, ошибки расчета цены пробрасываются.
        """
        self.field_state.touch_all()
        self.field_state.submitted = True

        errors = self.validator.errors(self.form, self.selection)
        if errors:
            logger.info(f"Отправка прервана, ошибки полей: {sorted(errors)}")
            return SubmissionResult(ok=False, errors=errors)

        summary = self.summary()
        logger.info(
            f"Бронирование готово к отправке: лодка={summary.boat_id}, "
            f"дата={summary.date}, итого={summary.total}"
        )
        return SubmissionResult(ok=True, summary=summary)
