"""
Сборка итоговой сводки цены бронирования.

Сводка строится заново из текущего выбора и ничего не кэширует:
одинаковый вход дает одинаковую сводку. Если сезон, цена или
длительность не определены, сводка не строится.
"""

from decimal import Decimal
from typing import Optional

from boat_rental.engine.catalog import Catalog
from boat_rental.engine.discounts import DiscountCalculator
from boat_rental.engine.durations import ensure_legal
from boat_rental.engine.extras import ExtrasPricer
from boat_rental.engine.season import resolve_season
from boat_rental.exceptions import IncompleteSelection
from boat_rental.schemas.booking import Selection
from boat_rental.schemas.promotion import GiftCard, PromotionCode
from boat_rental.schemas.summary import AppliedPromotion, PricedBookingSummary
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


class PricedSummaryBuilder:
    """Расчет сводки: аренда + допы - скидка"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.extras_pricer = ExtrasPricer(catalog)

    @staticmethod
    def missing_fields(selection: Selection):
        missing = []
        if not selection.boat_id:
            missing.append("boat")
        if selection.date is None:
            missing.append("date")
        if selection.duration_key is None:
            missing.append("duration")
        return missing

    def build(self, selection: Selection, promotion: Optional[PromotionCode] = None) -> PricedBookingSummary:
        """
        Построить сводку по выбору

        Raises:
            IncompleteSelection: не выбраны лодка, дата или длительность
            OutOfOperatingSeason: дата вне сезона работы
            IllegalDuration: длительность недоступна для лодки
            NoSuchPrice: нет цены в таблице
        """
        missing = self.missing_fields(selection)
        if missing:
            raise IncompleteSelection(missing)

        boat = self.catalog.boat(selection.boat_id)
        season = resolve_season(selection.date)
        duration_key = ensure_legal(self.catalog, selection.duration_key, boat.id)

        base_price = self.catalog.prices.price_for(boat.id, season, duration_key)
        extras_total = self.extras_pricer.price(selection)
        subtotal = base_price + extras_total

        discount = DiscountCalculator.apply(promotion, base_price, extras_total).computed_discount
        total = DiscountCalculator.total(subtotal, discount)

        summary = PricedBookingSummary(
            boat_id=boat.id,
            boat_name=boat.display_name,
            date=selection.date,
            season=season,
            duration_key=duration_key,
            base_price=base_price,
            selected_pack_id=selection.selected_pack_id,
            extras=tuple(self.extras_pricer.effective_extras(selection)),
            extras_total=extras_total,
            promotion=self._applied(promotion, discount),
            subtotal=subtotal,
            total=total,
            deposit=boat.deposit,
        )

        logger.debug(
            f"Сводка: лодка={boat.id}, сезон={season.value}, длительность={duration_key.value}, "
            f"аренда={base_price}, допы={extras_total}, скидка={discount}, итого={total}"
        )
        return summary

    @staticmethod
    def _applied(promotion: Optional[PromotionCode], discount: Decimal) -> Optional[AppliedPromotion]:
        if promotion is None:
            return None
        if isinstance(promotion, GiftCard):
            value = promotion.remaining_value
        else:
            value = Decimal(promotion.percentage)
        return AppliedPromotion(
            kind=promotion.kind,
            code=promotion.code,
            value=value,
            computed_discount=discount,
        )
