"""
Проверка кодов по таблицам БД.

Отвечает так же, как внешний сервис: 404 для неизвестной карты,
200 с valid: false для недействительного кода.
"""

from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from boat_rental.database.models import GiftCardPaymentStatus, GiftCardStatus
from boat_rental.database.repositories import DiscountCodeRepository, GiftCardRepository
from boat_rental.schemas.promotion import GatewayResponse
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


def _rejected(message: str) -> GatewayResponse:
    return GatewayResponse(status=200, payload={"valid": False, "error": message})


class DatabasePromotionGateway:
    """Проверка подарочных карт и кодов скидки по данным БД"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        now: Callable[[], datetime] = datetime.now
    ):
        self.session_factory = session_factory
        self.now = now

    async def check_gift_card(self, code: str) -> GatewayResponse:
        async with self.session_factory() as session:
            card = await GiftCardRepository(session).get_by_code(code.strip())

        if card is None:
            logger.debug(f"Подарочная карта {code} не найдена")
            return GatewayResponse(
                status=404, payload={"valid": False, "error": "Подарочная карта не найдена"}
            )

        if card.status == GiftCardStatus.expired or self.now() > card.expires_at:
            return _rejected("Срок действия подарочной карты истек")

        if card.status == GiftCardStatus.used:
            return _rejected("Подарочная карта уже использована")

        if card.status == GiftCardStatus.cancelled:
            return _rejected("Подарочная карта аннулирована")

        if card.payment_status != GiftCardPaymentStatus.completed:
            return _rejected("Подарочная карта не активирована")

        logger.info(f"Подарочная карта {card.code} действительна, остаток {card.remaining_amount}")
        return GatewayResponse(status=200, payload={
            "valid": True,
            "code": card.code,
            "remainingAmount": str(card.remaining_amount),
            "recipientName": card.recipient_name,
            "expiresAt": card.expires_at.isoformat(),
        })

    async def check_discount_code(self, code: str) -> GatewayResponse:
        async with self.session_factory() as session:
            discount = await DiscountCodeRepository(session).get_by_code(code.strip())

        if discount is None:
            logger.debug(f"Код скидки {code} не найден")
            return _rejected("Код скидки не найден")

        if discount.expires_at is not None and self.now() > discount.expires_at:
            return _rejected("Срок действия кода скидки истек")

        if discount.current_uses >= discount.max_uses:
            return _rejected("Код скидки уже использован")

        if not discount.is_active:
            return _rejected("Код скидки не активен")

        logger.info(f"Код скидки {discount.code} действителен: {discount.discount_percent}%")
        return GatewayResponse(status=200, payload={
            "valid": True,
            "discountPercent": discount.discount_percent,
        })
