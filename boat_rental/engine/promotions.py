"""
Проверка промокодов: подарочные карты и коды скидки.

Код проверяется сначала как подарочная карта, затем как код скидки.
Одновременно активна только одна промоакция, а в полете может быть
только одна проверка: новый код отменяет проверку предыдущего.
"""

import asyncio
from decimal import Decimal
from typing import Dict, Any, Optional, Protocol, Tuple

from pydantic import ValidationError as PydanticValidationError

from boat_rental.exceptions import InvalidCode, StaleValidationResult, ValidationInProgress
from boat_rental.schemas.promotion import GatewayResponse, GiftCard, PercentageDiscount, PromotionCode
from boat_rental.utils.money import parse_money
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


GIFT_CARD_VALUE_KEYS = ("remainingBalance", "remainingAmount", "amount")
DISCOUNT_VALUE_KEYS = ("percentage", "discountPercent", "discount")


class PromotionGateway(Protocol):
    """Внешний сервис проверки кодов"""

    async def check_gift_card(self, code: str) -> GatewayResponse:
        ...

    async def check_discount_code(self, code: str) -> GatewayResponse:
        ...


def normalize_code(raw_code: Optional[str]) -> str:
    """Убрать пробелы по краям и привести к верхнему регистру"""
    return (raw_code or "").strip().upper()


def extract_value(payload: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[Decimal]:
    """Первое числовое значение из ответа по списку ключей"""
    for key in keys:
        value = payload.get(key)
        if value is None:
            continue
        try:
            return parse_money(value)
        except ValueError:
            logger.warning(f"Некорректное значение '{key}' в ответе: {value!r}")
    return None


class PromotionResolver:
    """Проверка кода и хранение активной промоакции сессии"""

    def __init__(self, gateway: PromotionGateway):
        self.gateway = gateway
        self.active: Optional[PromotionCode] = None
        self._generation = 0
        self._pending_code: Optional[str] = None
        self._pending_task: Optional[asyncio.Task] = None

    @property
    def in_flight(self) -> bool:
        return self._pending_task is not None and not self._pending_task.done()

    @property
    def pending_code(self) -> Optional[str]:
        return self._pending_code if self.in_flight else None

    def clear(self) -> None:
        """
        Сбросить активную промоакцию и отменить незавершенную проверку.

        Уже построенные сводки не пересчитываются.
        """
        if self.in_flight:
            logger.info(f"Проверка кода {self._pending_code} отменена")
            self._generation += 1
            self._pending_task.cancel()
        self._pending_task = None
        self._pending_code = None

        if self.active is not None:
            logger.info(f"Промоакция {self.active.code} сброшена")
        self.active = None

    async def validate(self, raw_code: str) -> PromotionCode:
        """
        Проверить код и сделать его активной промоакцией

        Raises:
            InvalidCode: код не найден ни среди карт, ни среди скидок
            ValidationInProgress: этот же код уже проверяется
            StaleValidationResult: проверка отменена более новым кодом
        """
        code = normalize_code(raw_code)
        if not code:
            self.clear()
            raise InvalidCode(raw_code or "")

        if self.in_flight and self._pending_code == code:
            logger.debug(f"Код {code} уже проверяется")
            raise ValidationInProgress(code)

        self.clear()
        self._generation += 1
        generation = self._generation

        task = asyncio.ensure_future(self._lookup(code))
        self._pending_task = task
        self._pending_code = code
        logger.info(f"Проверка кода {code} (запрос #{generation})")

        try:
            promotion = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                raise StaleValidationResult(code)
            raise
        finally:
            if self._pending_task is task:
                self._pending_task = None
                self._pending_code = None

        if generation != self._generation:
            logger.info(f"Результат проверки кода {code} устарел и отброшен")
            raise StaleValidationResult(code)

        if promotion is None:
            logger.info(f"Код {code} недействителен")
            raise InvalidCode(code)

        self.active = promotion
        logger.info(f"Код {code} принят: {promotion.kind}")
        return promotion

    async def _lookup(self, code: str) -> Optional[PromotionCode]:
        """Подарочная карта имеет приоритет над кодом скидки"""
        response = await self.gateway.check_gift_card(code)
        if response.ok:
            value = extract_value(response.payload, GIFT_CARD_VALUE_KEYS)
            if value is None:
                logger.warning(f"Карта {code}: в ответе нет остатка, {response.payload}")
            else:
                try:
                    return GiftCard(code=code, remaining_value=value)
                except PydanticValidationError:
                    logger.warning(f"Карта {code}: недопустимый остаток {value}")
        else:
            logger.debug(f"Код {code} не является подарочной картой (status={response.status})")

        response = await self.gateway.check_discount_code(code)
        if response.ok:
            value = extract_value(response.payload, DISCOUNT_VALUE_KEYS)
            if value is not None and value == value.to_integral_value():
                try:
                    return PercentageDiscount(code=code, percentage=int(value))
                except PydanticValidationError:
                    logger.warning(f"Код {code}: недопустимый процент скидки {value}")
                    return None
            logger.warning(f"Код {code}: в ответе нет целого процента, {response.payload}")
        else:
            logger.debug(f"Код {code} не является кодом скидки (status={response.status})")

        return None
