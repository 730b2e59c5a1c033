"""
Builder — построение ордеров стратегии из человеческих параметров

Стратегия задаётся двумя диапазонами цен (quote за 1 base) и бюджетами:
- покупка: buy_price_low ≤ buy_price_marginal ≤ buy_price_high, бюджет в quote
- продажа: sell_price_low ≤ sell_price_marginal ≤ sell_price_high, бюджет в base

Порядок проверок фиксирован (определяет приоритет ошибок):
1. Цены неотрицательны → InvalidPriceError
2. Порядок low/marginal/high на каждой стороне → InvalidPriceOrderingError
3. Бюджеты неотрицательны → InvalidBudgetError
"""

import logging
from decimal import Decimal

from strategy_engine.core.domain.orders import DecodedOrder, DecodedStrategy
from strategy_engine.core.errors import (
    InvalidBudgetError,
    InvalidPriceError,
    InvalidPriceOrderingError,
)
from strategy_engine.core.math.numerics import (
    DecimalLike,
    Rounding,
    to_base_units,
    to_decimal,
    validate_token_decimals,
)
from strategy_engine.core.math.rates import normalize_inverted_rate, normalize_rate

logger = logging.getLogger(__name__)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_side_ordering(side: str, low: Decimal, marginal: Decimal, high: Decimal) -> None:
    """Проверка low ≤ marginal ≤ high для одной стороны."""
    if low > marginal or low > high or marginal > high:
        raise InvalidPriceOrderingError(
            f"{side}: low/marginal price must be lower than or equal to marginal/high price "
            f"(low={low}, marginal={marginal}, high={high})"
        )


# =============================================================================
# ПОСТРОЕНИЕ
# =============================================================================


def build_strategy_object(
    base_token: str,
    quote_token: str,
    base_decimals: int,
    quote_decimals: int,
    buy_price_low: DecimalLike,
    buy_price_marginal: DecimalLike,
    buy_price_high: DecimalLike,
    buy_budget: DecimalLike,
    sell_price_low: DecimalLike,
    sell_price_marginal: DecimalLike,
    sell_price_high: DecimalLike,
    sell_budget: DecimalLike,
) -> DecodedStrategy:
    """
    Построение decoded стратегии с валидацией.

    Args:
        base_token: Адрес base token (token0)
        quote_token: Адрес quote token (token1)
        base_decimals: decimals base token
        quote_decimals: decimals quote token
        buy_price_low: Нижняя цена покупки (quote за 1 base)
        buy_price_marginal: Marginal цена покупки
        buy_price_high: Верхняя цена покупки
        buy_budget: Бюджет покупки (в quote token)
        sell_price_low: Нижняя цена продажи (quote за 1 base)
        sell_price_marginal: Marginal цена продажи
        sell_price_high: Верхняя цена продажи
        sell_budget: Бюджет продажи (в base token)

    Returns:
        DecodedStrategy с order0 (продаёт base) и order1 (продаёт quote)

    Raises:
        InvalidPriceError: Если какая-либо цена отрицательна
        InvalidPriceOrderingError: Если нарушен порядок цен на стороне
        InvalidBudgetError: Если какой-либо бюджет отрицателен
    """
    logger.debug(
        "build_strategy_object called: base=%s quote=%s buy=[%s, %s, %s] %s sell=[%s, %s, %s] %s",
        base_token,
        quote_token,
        buy_price_low,
        buy_price_marginal,
        buy_price_high,
        buy_budget,
        sell_price_low,
        sell_price_marginal,
        sell_price_high,
        sell_budget,
    )

    prices = {
        "buy_price_low": to_decimal(buy_price_low, "buy_price_low"),
        "buy_price_marginal": to_decimal(buy_price_marginal, "buy_price_marginal"),
        "buy_price_high": to_decimal(buy_price_high, "buy_price_high"),
        "sell_price_low": to_decimal(sell_price_low, "sell_price_low"),
        "sell_price_marginal": to_decimal(sell_price_marginal, "sell_price_marginal"),
        "sell_price_high": to_decimal(sell_price_high, "sell_price_high"),
    }

    # 1. Знак цен
    negative = [name for name, value in prices.items() if value < 0]
    if negative:
        raise InvalidPriceError(f"prices cannot be negative: {', '.join(negative)}")

    # 2. Порядок цен на каждой стороне
    _validate_side_ordering(
        "buy",
        prices["buy_price_low"],
        prices["buy_price_marginal"],
        prices["buy_price_high"],
    )
    _validate_side_ordering(
        "sell",
        prices["sell_price_low"],
        prices["sell_price_marginal"],
        prices["sell_price_high"],
    )

    # 3. Знак бюджетов
    budgets = {
        "buy_budget": to_decimal(buy_budget, "buy_budget"),
        "sell_budget": to_decimal(sell_budget, "sell_budget"),
    }
    negative = [name for name, value in budgets.items() if value < 0]
    if negative:
        raise InvalidBudgetError(f"budgets cannot be negative: {', '.join(negative)}")

    order0, order1 = create_orders(
        base_decimals,
        quote_decimals,
        prices["buy_price_low"],
        prices["buy_price_marginal"],
        prices["buy_price_high"],
        budgets["buy_budget"],
        prices["sell_price_low"],
        prices["sell_price_marginal"],
        prices["sell_price_high"],
        budgets["sell_budget"],
    )

    strategy = DecodedStrategy(
        token0=base_token,
        token1=quote_token,
        order0=order0,
        order1=order1,
    )
    logger.debug("build_strategy_object info: %s", strategy)
    return strategy


def create_orders(
    base_decimals: int,
    quote_decimals: int,
    buy_price_low: DecimalLike,
    buy_price_marginal: DecimalLike,
    buy_price_high: DecimalLike,
    buy_budget: DecimalLike,
    sell_price_low: DecimalLike,
    sell_price_marginal: DecimalLike,
    sell_price_high: DecimalLike,
    sell_budget: DecimalLike,
) -> tuple[DecodedOrder, DecodedOrder]:
    """
    Построение пары ордеров без валидации.

    order0 продаёт base token: rates выражены в base за 1 quote, поэтому
    цены продажи инвертируются и меняются местами (lowest = 1/high,
    highest = 1/low).

    order1 продаёт quote token: rates выражены в quote за 1 base, цены
    покупки нормализуются напрямую.

    Бюджеты переводятся в base units с округлением вниз: в ордер никогда не
    попадает больше, чем указал пользователь.

    Returns:
        (order0, order1)
    """
    validate_token_decimals(base_decimals, "base_decimals")
    validate_token_decimals(quote_decimals, "quote_decimals")

    # order0: продаёт base token
    liquidity0 = to_base_units(sell_budget, base_decimals, rounding=Rounding.FLOOR)
    order0 = DecodedOrder(
        liquidity=str(liquidity0),
        lowest_rate=normalize_inverted_rate(sell_price_high, quote_decimals, base_decimals),
        highest_rate=normalize_inverted_rate(sell_price_low, quote_decimals, base_decimals),
        marginal_rate=normalize_inverted_rate(sell_price_marginal, quote_decimals, base_decimals),
    )

    # order1: продаёт quote token
    liquidity1 = to_base_units(buy_budget, quote_decimals, rounding=Rounding.FLOOR)
    order1 = DecodedOrder(
        liquidity=str(liquidity1),
        lowest_rate=normalize_rate(buy_price_low, quote_decimals, base_decimals),
        highest_rate=normalize_rate(buy_price_high, quote_decimals, base_decimals),
        marginal_rate=normalize_rate(buy_price_marginal, quote_decimals, base_decimals),
    )

    logger.debug("create_orders info: order0=%s order1=%s", order0, order1)
    return order0, order1
