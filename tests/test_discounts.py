import pytest
from decimal import Decimal

from boat_rental.engine.discounts import DiscountCalculator
from boat_rental.exceptions import PricingInvariantError
from boat_rental.schemas.promotion import GiftCard, PercentageDiscount


class TestDiscountCalculator:
    """Тесты применения промоакций."""

    def test_no_promotion(self):
        result = DiscountCalculator.apply(None, Decimal("150"), Decimal("10"))

        assert result.computed_discount == Decimal("0")

    def test_gift_card_capped_at_subtotal(self):
        """Карта на 1000 при подытоге 150: скидка 150, итог 0."""
        card = GiftCard(code="GIFT1000", remaining_value=1000)

        discount = DiscountCalculator.apply(card, Decimal("150"), Decimal("0")).computed_discount

        assert discount == Decimal("150")
        assert DiscountCalculator.total(Decimal("150"), discount) == Decimal("0")

    def test_gift_card_covers_extras(self):
        """Подарочная карта действует и на допы."""
        card = GiftCard(code="GIFT50", remaining_value="50")

        discount = DiscountCalculator.apply(card, Decimal("150"), Decimal("20")).computed_discount

        assert discount == Decimal("50")
        assert DiscountCalculator.total(Decimal("170"), discount) == Decimal("120")

    def test_percentage_only_on_base_price(self):
        """10% от аренды 200 и допов 50: скидка 20, итог 230."""
        code = PercentageDiscount(code="SUMMER10", percentage=10)

        discount = DiscountCalculator.apply(code, Decimal("200"), Decimal("50")).computed_discount

        assert discount == Decimal("20")
        assert DiscountCalculator.total(Decimal("250"), discount) == Decimal("230")

    @pytest.mark.parametrize("base_price,percentage,expected", [
        (Decimal("75"), 10, Decimal("8")),     # 7.5 -> 8
        (Decimal("85"), 10, Decimal("9")),     # 8.5 -> 9
        (Decimal("115"), 15, Decimal("17")),   # 17.25 -> 17
        (Decimal("290"), 100, Decimal("290")),
    ])
    def test_percentage_rounding_half_up(self, base_price, percentage, expected):
        code = PercentageDiscount(code="ROUND", percentage=percentage)

        assert DiscountCalculator.apply(code, base_price, Decimal("0")).computed_discount == expected

    def test_negative_total_is_rejected(self):
        with pytest.raises(PricingInvariantError):
            DiscountCalculator.total(Decimal("100"), Decimal("101"))

    def test_unknown_promotion_type(self):
        with pytest.raises(TypeError):
            DiscountCalculator.apply(object(), Decimal("100"), Decimal("0"))


class TestPromotionModels:
    """Тесты моделей промоакций."""

    @pytest.mark.parametrize("percentage", [0, 101, -5])
    def test_percentage_out_of_range(self, percentage):
        with pytest.raises(ValueError):
            PercentageDiscount(code="BAD", percentage=percentage)

    def test_gift_card_negative_value(self):
        with pytest.raises(ValueError):
            GiftCard(code="BAD", remaining_value=-1)
