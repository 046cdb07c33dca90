"""
Денежные суммы: разбор строк каталога и форматирование
"""

import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")

MoneyInput = Union[str, int, float, Decimal]


def parse_money(value: MoneyInput) -> Decimal:
    """
    Привести сумму из каталога к Decimal

    Поддерживает строки вида "250€", "10€", "2,5€/ud" - берется первое число,
    запятая считается десятичным разделителем. Знак минуса сохраняется,
    отрицательные суммы отклоняют сами модели.
    """
    if isinstance(value, bool):
        raise ValueError('Сумма не может быть логическим значением')

    if isinstance(value, Decimal):
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        # через str, чтобы 2.5 не превратилось в 2.50000000000000001
        return Decimal(str(value))

    match = re.search(r'(-?\d+(?:[.,]\d+)?)', str(value))
    if not match:
        logger.warning(f"Не удалось разобрать сумму: '{value}'")
        raise ValueError(f"Неверный формат суммы: '{value}'")

    try:
        return Decimal(match.group(1).replace(',', '.'))
    except InvalidOperation:
        raise ValueError(f"Неверный формат суммы: '{value}'")


def parse_capacity(value: Union[str, int]) -> int:
    """Вместимость из строки вида "5 Personas" """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    match = re.match(r'^\s*(\d+)', str(value))
    if not match:
        raise ValueError(f"Неверный формат вместимости: '{value}'")
    return int(match.group(1))


def round_half_up(amount: Decimal) -> Decimal:
    """Округление до целого евро, половина - вверх"""
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_price(amount: Decimal) -> str:
    """Форматирование для отображения: 150 -> "150€", 2.5 -> "2.5€" """
    if amount == amount.to_integral_value():
        return f"{int(amount)}€"
    return f"{amount.normalize()}€"
