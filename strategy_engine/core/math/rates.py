"""
Rates — нормализация цен в пространство base units

Внутренний rate ордера выражается как "base units покупаемого токена за
base unit продаваемого токена". Человеческая цена (quote за base) переводится
в это пространство масштабированием на 10^(decimals разности).

Для ордера, продающего base token, rate — обратная величина цены, поэтому
помимо прямой нормализации есть инвертированная.
"""

from decimal import Decimal, localcontext

from strategy_engine.core.math.numerics import (
    DECIMAL_CONTEXT,
    DecimalLike,
    decimal_to_str,
    ten_pow,
    to_decimal,
)


def normalize_rate(
    amount: DecimalLike,
    amount_token_decimals: int,
    other_token_decimals: int,
) -> str:
    """
    Прямая нормализация rate.

    rate = amount * 10^(amount_token_decimals - other_token_decimals)

    Args:
        amount: Цена или rate
        amount_token_decimals: decimals токена, в котором выражен amount
        other_token_decimals: decimals второго токена пары

    Returns:
        Нормализованный rate (каноническая десятичная строка)

    Examples:
        >>> normalize_rate("2000", 6, 18)
        '0.000000002'
    """
    value = to_decimal(amount, "amount")

    with localcontext(DECIMAL_CONTEXT):
        return decimal_to_str(value * ten_pow(amount_token_decimals, other_token_decimals))


def normalize_inverted_rate(
    amount: DecimalLike,
    amount_token_decimals: int,
    other_token_decimals: int,
) -> str:
    """
    Инвертированная нормализация rate.

    rate = normalize_rate(1 / amount, other_token_decimals, amount_token_decimals)

    Нулевой amount даёт "0" без деления: пустая граница диапазона остаётся
    пустой, а не превращается в бесконечность.

    Examples:
        >>> normalize_inverted_rate("2000", 6, 18)
        '500000000'
        >>> normalize_inverted_rate("0", 6, 18)
        '0'
    """
    value = to_decimal(amount, "amount")
    if value.is_zero():
        return "0"

    with localcontext(DECIMAL_CONTEXT):
        inverted = Decimal(1) / value

    return normalize_rate(inverted, other_token_decimals, amount_token_decimals)
