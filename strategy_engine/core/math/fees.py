"""
Fees — пропорциональные комиссии в PPM

Комиссия задаётся в parts-per-million (1_000_000 = 100%).

Направления округления асимметричны, оба в пользу протокола:
- add_fee округляет вверх (никогда не недобрать комиссию)
- subtract_fee округляет вниз (никогда не переплатить)
Менять их местами нельзя.
"""

from decimal import Decimal, localcontext
from typing import Final

from strategy_engine.core.math.numerics import (
    DECIMAL_CONTEXT,
    DecimalLike,
    Rounding,
    div_rounded,
    to_decimal,
)

# Разрешение комиссии: 1_000_000 PPM = 100%
PPM_RESOLUTION: Final[int] = 1_000_000


def validate_fee_ppm(trading_fee_ppm: int) -> None:
    """
    Проверка комиссии: целое в [0, PPM_RESOLUTION).

    Комиссия 100% запрещена: add_fee делил бы на ноль.

    Raises:
        TypeError: Если комиссия не int
        ValueError: Если комиссия вне диапазона
    """
    if isinstance(trading_fee_ppm, bool) or not isinstance(trading_fee_ppm, int):
        raise TypeError(f"trading_fee_ppm must be int, got {type(trading_fee_ppm).__name__}")

    if trading_fee_ppm < 0 or trading_fee_ppm >= PPM_RESOLUTION:
        raise ValueError(
            f"trading_fee_ppm must be in [0, {PPM_RESOLUTION}), got {trading_fee_ppm}"
        )


def add_fee(amount: DecimalLike, trading_fee_ppm: int) -> Decimal:
    """
    Минимальная gross-сумма, которая после комиссии даёт amount.

    add_fee = ceil(amount * PPM / (PPM - fee))

    Args:
        amount: Нетто-сумма (base units)
        trading_fee_ppm: Комиссия в PPM

    Returns:
        Gross-сумма (целое Decimal)

    Examples:
        >>> add_fee(1000, 2000)
        Decimal('1003')
    """
    validate_fee_ppm(trading_fee_ppm)
    value = to_decimal(amount, "amount")

    with localcontext(DECIMAL_CONTEXT):
        gross_numerator = value * PPM_RESOLUTION

    return div_rounded(
        gross_numerator,
        PPM_RESOLUTION - trading_fee_ppm,
        rounding=Rounding.CEIL,
    )


def subtract_fee(amount: DecimalLike, trading_fee_ppm: int) -> Decimal:
    """
    Нетто-сумма, получаемая после комиссии.

    subtract_fee = floor(amount * (PPM - fee) / PPM)

    Examples:
        >>> subtract_fee(1000, 2000)
        Decimal('998')
    """
    validate_fee_ppm(trading_fee_ppm)
    value = to_decimal(amount, "amount")

    with localcontext(DECIMAL_CONTEXT):
        net_numerator = value * (PPM_RESOLUTION - trading_fee_ppm)

    return div_rounded(
        net_numerator,
        PPM_RESOLUTION,
        rounding=Rounding.FLOOR,
    )
