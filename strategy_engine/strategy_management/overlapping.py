"""
Overlapping — распределение двусторонней стратегии по рыночной цене и спреду

По внешним границам (buy_price_low, sell_price_high), рыночной цене,
спреду в процентах и бюджету покупки выводит согласованную кривую:
внутренние границы, marginal-цены обеих сторон и бюджет продажи.

ФОРМУЛЫ:
    total_range = sell_price_high - buy_price_low
    spread = total_range * spread_percentage / 100
    buy_price_high = sell_price_high - spread
    sell_price_low = buy_price_low + spread

    buy_low_range = market_price - buy_price_low - spread / 2
    buy_low_budget_ratio = buy_low_range / (buy_price_high - buy_price_low)
    buy_order_yint = buy_budget / buy_low_budget_ratio
    buy_price_marginal = buy_price_low + (buy_price_high - buy_price_low) * ratio

    geo_mean = sqrt(buy_price_low * sell_price_high)
    sell_order_yint = buy_order_yint / geo_mean
    sell_high_budget_ratio = 1 - buy_low_budget_ratio
    sell_budget = sell_order_yint * sell_high_budget_ratio
    sell_price_marginal = sell_price_high - (sell_price_high - sell_price_low) * sell_ratio

Цены усекаются до decimals quote token, бюджет продажи — до decimals base token.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext

from strategy_engine.core.errors import (
    DegenerateRangeError,
    InvalidBudgetError,
    InvalidPriceError,
    MarketPriceOutOfRangeError,
)
from strategy_engine.core.math.numerics import (
    DECIMAL_CONTEXT,
    DecimalLike,
    to_decimal,
    trim_decimal,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OverlappingDistributionConfig:
    """Конфигурация overlapping-распределения.

    reject_out_of_range_market_price: отклонять рыночную цену, при которой
    доля бюджета покупки выходит за (0, 1]. При False доля пропагирует как
    есть (отрицательный бюджет продажи или marginal вне диапазона).
    """

    reject_out_of_range_market_price: bool = True


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OverlappingDistributionResult:
    """Результат overlapping-распределения (десятичные строки)."""

    buy_price_high: str  # quote за 1 base
    buy_price_marginal: str  # quote за 1 base
    sell_price_low: str  # quote за 1 base
    sell_price_marginal: str  # quote за 1 base
    sell_budget: str  # в base token


# =============================================================================
# РАСЧЁТ
# =============================================================================


def calculate_overlapping_distribution(
    base_decimals: int,
    quote_decimals: int,
    buy_price_low: DecimalLike,
    sell_price_high: DecimalLike,
    market_price: DecimalLike,
    spread_percentage: DecimalLike,
    buy_budget: DecimalLike,
    config: OverlappingDistributionConfig | None = None,
) -> OverlappingDistributionResult:
    """
    Вычисление overlapping-распределения.

    Входы проверяются до расчёта: неотрицательные цены и бюджет,
    spread_percentage в [0, 100), buy_price_low < sell_price_high.

    Args:
        base_decimals: decimals base token
        quote_decimals: decimals quote token
        buy_price_low: Нижняя внешняя граница (quote за 1 base)
        sell_price_high: Верхняя внешняя граница (quote за 1 base)
        market_price: Рыночная цена (quote за 1 base)
        spread_percentage: Спред в процентах от полного диапазона (0.1 = 0.1%)
        buy_budget: Бюджет покупки (в quote token)
        config: Конфигурация (default: OverlappingDistributionConfig())

    Returns:
        OverlappingDistributionResult

    Raises:
        InvalidPriceError: Если buy_price_low, sell_price_high или market_price
            отрицательны
        InvalidBudgetError: Если buy_budget отрицателен
        DegenerateRangeError: Если spread_percentage вне [0, 100), диапазон
            покупки не положителен (в том числе при перепутанных внешних
            границах), доля бюджета или среднее геометрическое границ нулевые
        MarketPriceOutOfRangeError: Если доля бюджета вне (0, 1]
    """
    config = config or OverlappingDistributionConfig()

    buy_low = to_decimal(buy_price_low, "buy_price_low")
    sell_high = to_decimal(sell_price_high, "sell_price_high")
    market = to_decimal(market_price, "market_price")
    spread_pct = to_decimal(spread_percentage, "spread_percentage")
    budget = to_decimal(buy_budget, "buy_budget")

    negative = [
        name
        for name, value in (
            ("buy_price_low", buy_low),
            ("sell_price_high", sell_high),
            ("market_price", market),
        )
        if value < 0
    ]
    if negative:
        raise InvalidPriceError(f"prices cannot be negative: {', '.join(negative)}")
    if budget < 0:
        raise InvalidBudgetError("budgets cannot be negative: buy_budget")
    if spread_pct < 0 or spread_pct >= 100:
        raise DegenerateRangeError(
            f"spread_percentage must be in [0, 100), got {spread_pct}"
        )

    with localcontext(DECIMAL_CONTEXT):
        total_range = sell_high - buy_low
        spread = total_range * spread_pct / 100

        buy_high = sell_high - spread
        sell_low = buy_low + spread

        buy_range = buy_high - buy_low
        sell_range = sell_high - sell_low

        if buy_range <= 0:
            raise DegenerateRangeError(
                f"buy price range is empty (buy_price_low={buy_low}, "
                f"sell_price_high={sell_high}, spread_percentage={spread_pct})"
            )

        buy_low_range = market - buy_low - spread / 2
        buy_low_budget_ratio = buy_low_range / buy_range

        if config.reject_out_of_range_market_price and (
            buy_low_budget_ratio < 0 or buy_low_budget_ratio > 1
        ):
            raise MarketPriceOutOfRangeError(
                f"market_price {market} must be within "
                f"({buy_low + spread / 2}, {sell_high - spread / 2}]"
            )

        if buy_low_budget_ratio.is_zero():
            raise DegenerateRangeError(
                f"market_price {market} leaves no buy budget ratio "
                f"(equals buy_price_low + spread / 2)"
            )

        buy_order_yint = budget / buy_low_budget_ratio
        buy_marginal = buy_low + buy_range * buy_low_budget_ratio

        geo_mean = (buy_low * sell_high).sqrt()
        if geo_mean.is_zero():
            raise DegenerateRangeError(
                f"geometric mean of outer bounds is zero (buy_price_low={buy_low})"
            )
        sell_order_yint = buy_order_yint / geo_mean

        sell_high_budget_ratio = Decimal(1) - buy_low_budget_ratio
        sell_budget = sell_order_yint * sell_high_budget_ratio
        sell_marginal = sell_high - sell_range * sell_high_budget_ratio

    result = OverlappingDistributionResult(
        buy_price_high=trim_decimal(buy_high, quote_decimals),
        buy_price_marginal=trim_decimal(buy_marginal, quote_decimals),
        sell_price_low=trim_decimal(sell_low, quote_decimals),
        sell_price_marginal=trim_decimal(sell_marginal, quote_decimals),
        sell_budget=trim_decimal(sell_budget, base_decimals),
    )
    logger.debug(
        "calculate_overlapping_distribution info: buy_low_budget_ratio=%s geo_mean=%s result=%s",
        buy_low_budget_ratio,
        geo_mean,
        result,
    )
    return result
