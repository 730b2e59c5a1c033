"""
Encoders — компактная упаковка rates для on-chain ордера

Формат хранения:
- rate хранится как sqrt(rate) в fixed-point с 48 дробными битами,
  сохраняются только 48 старших значащих битов
- float-упаковка: exponent * 2^48 | mantissa, mantissa < 2^48

Упаковка lossy: относительная ошибка rate порядка 2^-46.
"""

from decimal import ROUND_FLOOR, Decimal, localcontext
from typing import Final

from strategy_engine.core.math.numerics import DECIMAL_CONTEXT, DecimalLike, to_decimal

# Fixed-point единица: 48 дробных битов
RATE_ONE: Final[int] = 2**48


def encode_rate(rate: DecimalLike) -> int:
    """
    Упаковка rate: floor(sqrt(rate) * 2^48) с обнулением младших битов.

    Количество обнуляемых битов равно битовой длине целой части, так что
    остаётся 48 значащих битов.

    Raises:
        ValueError: Если rate отрицательный
    """
    value = to_decimal(rate, "rate")
    if value < 0:
        raise ValueError(f"rate cannot be negative, got {rate}")

    with localcontext(DECIMAL_CONTEXT):
        data = int((value.sqrt() * RATE_ONE).to_integral_value(rounding=ROUND_FLOOR))

    length = (data // RATE_ONE).bit_length()
    return (data >> length) << length


def decode_rate(value: int) -> Decimal:
    """Распаковка rate: (value / 2^48)^2."""
    with localcontext(DECIMAL_CONTEXT):
        return (Decimal(value) / RATE_ONE) ** 2


def encode_float(value: int) -> int:
    """
    Float-упаковка целого: exponent * 2^48 | mantissa.

    Examples:
        >>> encode_float(5)
        5
        >>> decode_float(encode_float(2**60)) == 2**60
        True
    """
    if value < 0:
        raise ValueError(f"value cannot be negative, got {value}")

    exponent = (value // RATE_ONE).bit_length()
    mantissa = value >> exponent
    return RATE_ONE * exponent | mantissa


def decode_float(value: int) -> int:
    """Обратная float-распаковка: mantissa << exponent."""
    return (value % RATE_ONE) << (value // RATE_ONE)
