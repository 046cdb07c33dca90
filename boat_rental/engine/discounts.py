from decimal import Decimal
from typing import Optional

from boat_rental.exceptions import PricingInvariantError
from boat_rental.schemas.promotion import GiftCard, PercentageDiscount, PromotionCode
from boat_rental.schemas.summary import DiscountResult
from boat_rental.utils.money import ZERO, round_half_up
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


class DiscountCalculator:
    """Применение промоакции к цене аренды и допам"""

    @staticmethod
    def apply(promotion: Optional[PromotionCode], base_price: Decimal, extras_total: Decimal) -> DiscountResult:
        """
        Рассчитать скидку

        - подарочная карта: min(остаток, аренда + допы)
        - процентная скидка: только от цены аренды, допы оплачиваются полностью
        """
        if promotion is None:
            return DiscountResult(computed_discount=ZERO)

        subtotal = base_price + extras_total

        if isinstance(promotion, GiftCard):
            discount = min(promotion.remaining_value, subtotal)
        elif isinstance(promotion, PercentageDiscount):
            discount = round_half_up(base_price * promotion.percentage / Decimal(100))
        else:
            raise TypeError(f"Неизвестный тип промоакции: {type(promotion).__name__}")

        logger.debug(
            f"Скидка по коду {promotion.code} ({promotion.kind}): "
            f"аренда={base_price}, допы={extras_total}, скидка={discount}"
        )
        return DiscountResult(computed_discount=discount)

    @staticmethod
    def total(subtotal: Decimal, discount: Decimal) -> Decimal:
        """
        Итог после скидки

        Raises:
            PricingInvariantError: итог получился отрицательным
        """
        total = subtotal - discount
        if total < 0:
            logger.error(f"Отрицательный итог: подытог={subtotal}, скидка={discount}")
            raise PricingInvariantError(
                f"Итог не может быть отрицательным: {subtotal} - {discount}"
            )
        return total
