"""
Юнит-тесты для построения ордеров стратегии

Проверяет:
1. Пример ETH (18 decimals) / USDC (6 decimals): ликвидность и rates
2. Приоритет ошибок валидации: цены → порядок → бюджеты
3. Инвариант lowest ≤ marginal ≤ highest в обоих ордерах
4. Округление бюджетов вниз при переводе в base units
"""

from decimal import Decimal

import pytest

from strategy_engine.core.errors import (
    InvalidBudgetError,
    InvalidPriceError,
    InvalidPriceOrderingError,
    StrategyEngineError,
)
from strategy_engine.strategy_management.builder import build_strategy_object, create_orders

BASE = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
QUOTE = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


@pytest.fixture
def params() -> dict:
    """Параметры стратегии ETH/USDC"""
    return {
        "base_token": BASE,
        "quote_token": QUOTE,
        "base_decimals": 18,
        "quote_decimals": 6,
        "buy_price_low": "1800",
        "buy_price_marginal": "2000",
        "buy_price_high": "2000",
        "buy_budget": "1000",
        "sell_price_low": "2000",
        "sell_price_marginal": "2000",
        "sell_price_high": "2200",
        "sell_budget": "0.5",
    }


def _assert_ordered(order) -> None:
    lowest = Decimal(order.lowest_rate)
    marginal = Decimal(order.marginal_rate)
    highest = Decimal(order.highest_rate)
    assert lowest <= marginal <= highest


# =============================================================================
# ПОСТРОЕНИЕ
# =============================================================================


class TestBuildStrategyObject:
    """Тесты build_strategy_object"""

    def test_example_liquidity(self, params: dict) -> None:
        """Бюджеты переводятся в base units своего токена"""
        strategy = build_strategy_object(**params)

        assert strategy.token0 == BASE
        assert strategy.token1 == QUOTE
        assert strategy.order1.liquidity == "1000000000"
        assert strategy.order0.liquidity == "500000000000000000"

    def test_buy_order_rates(self, params: dict) -> None:
        """order1: цены покупки нормализуются напрямую"""
        strategy = build_strategy_object(**params)

        assert strategy.order1.lowest_rate == "0.0000000018"
        assert strategy.order1.highest_rate == "0.000000002"
        assert strategy.order1.marginal_rate == "0.000000002"

    def test_sell_order_rates_inverted(self, params: dict) -> None:
        """order0: цены продажи инвертируются, low и high меняются местами"""
        strategy = build_strategy_object(**params)

        assert strategy.order0.highest_rate == "500000000"
        assert strategy.order0.marginal_rate == "500000000"
        assert strategy.order0.lowest_rate.startswith("454545454.545454545454")
        # 1 / lowest_rate * 10^12 возвращает sell_price_high
        back = Decimal(10) ** 12 / Decimal(strategy.order0.lowest_rate)
        assert abs(back - Decimal("2200")) < Decimal("1e-20")

    def test_rates_ordered(self, params: dict) -> None:
        """Инвариант: lowest ≤ marginal ≤ highest в обоих ордерах"""
        params.update(
            buy_price_marginal="1950.5",
            sell_price_marginal="2100.25",
        )
        strategy = build_strategy_object(**params)

        _assert_ordered(strategy.order0)
        _assert_ordered(strategy.order1)

    def test_overlapping_ranges_allowed(self, params: dict) -> None:
        """Диапазоны покупки и продажи могут пересекаться"""
        params.update(
            buy_price_high="2100",
            buy_price_marginal="2050",
            sell_price_low="1900",
            sell_price_marginal="1950",
        )
        strategy = build_strategy_object(**params)
        _assert_ordered(strategy.order0)
        _assert_ordered(strategy.order1)

    def test_zero_budgets(self, params: dict) -> None:
        """Нулевые бюджеты допустимы"""
        params.update(buy_budget="0", sell_budget="0")
        strategy = build_strategy_object(**params)

        assert strategy.order0.liquidity == "0"
        assert strategy.order1.liquidity == "0"

    def test_zero_buy_price_low(self, params: dict) -> None:
        """Нулевая нижняя цена покупки даёт нулевой rate"""
        params.update(buy_price_low="0")
        strategy = build_strategy_object(**params)
        assert strategy.order1.lowest_rate == "0"

    def test_budget_floored(self, params: dict) -> None:
        """Лишние знаки бюджета отбрасываются вниз"""
        params.update(buy_budget="1000.0000009", sell_budget="0.5000000000000000009")
        strategy = build_strategy_object(**params)

        assert strategy.order1.liquidity == "1000000000"
        assert strategy.order0.liquidity == "500000000000000000"

    def test_single_price_ranges(self, params: dict) -> None:
        """Диапазон из одной цены: low = marginal = high"""
        params.update(
            buy_price_low="2000",
            sell_price_high="2000",
        )
        strategy = build_strategy_object(**params)

        assert strategy.order1.lowest_rate == strategy.order1.highest_rate
        assert strategy.order0.lowest_rate == strategy.order0.highest_rate

    def test_float_price_rejected(self, params: dict) -> None:
        """float вместо строки запрещён"""
        params.update(buy_price_low=1800.0)
        with pytest.raises(TypeError):
            build_strategy_object(**params)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestValidation:
    """Тесты приоритета ошибок валидации"""

    def test_negative_price(self, params: dict) -> None:
        """Отрицательная цена → InvalidPriceError с именем поля"""
        params.update(buy_price_low="-1")
        with pytest.raises(InvalidPriceError, match="buy_price_low"):
            build_strategy_object(**params)

    def test_negative_price_wins_over_ordering(self, params: dict) -> None:
        """Знак цены проверяется раньше порядка"""
        params.update(sell_price_high="-5")
        with pytest.raises(InvalidPriceError) as exc_info:
            build_strategy_object(**params)
        assert not isinstance(exc_info.value, InvalidPriceOrderingError)

    def test_negative_price_wins_over_budget(self, params: dict) -> None:
        """Знак цены проверяется раньше бюджета"""
        params.update(sell_price_marginal="-1", buy_budget="-1")
        with pytest.raises(InvalidPriceError):
            build_strategy_object(**params)

    def test_buy_ordering(self, params: dict) -> None:
        """Нарушение порядка на стороне покупки"""
        params.update(buy_price_marginal="2100")
        with pytest.raises(InvalidPriceOrderingError, match="buy"):
            build_strategy_object(**params)

    def test_sell_ordering(self, params: dict) -> None:
        """Нарушение порядка на стороне продажи"""
        params.update(sell_price_low="2300", sell_price_marginal="2300")
        with pytest.raises(InvalidPriceOrderingError, match="sell"):
            build_strategy_object(**params)

    def test_ordering_wins_over_budget(self, params: dict) -> None:
        """Порядок цен проверяется раньше бюджета"""
        params.update(buy_price_low="2500", sell_budget="-1")
        with pytest.raises(InvalidPriceOrderingError):
            build_strategy_object(**params)

    def test_negative_budget(self, params: dict) -> None:
        """Отрицательный бюджет → InvalidBudgetError"""
        params.update(sell_budget="-0.5")
        with pytest.raises(InvalidBudgetError, match="sell_budget"):
            build_strategy_object(**params)

    def test_errors_share_base_class(self, params: dict) -> None:
        """Ошибки валидации — StrategyEngineError и ValueError"""
        params.update(buy_budget="-1")
        with pytest.raises(StrategyEngineError):
            build_strategy_object(**params)
        with pytest.raises(ValueError):
            build_strategy_object(**params)


class TestCreateOrders:
    """Тесты create_orders без валидации"""

    def test_invalid_decimals(self) -> None:
        """decimals вне [0, 255] запрещены"""
        with pytest.raises(ValueError):
            create_orders(18, 256, "1", "1", "1", "1", "1", "1", "1", "1")

    def test_same_decimals(self) -> None:
        """Одинаковые decimals: rates равны ценам и обратным ценам"""
        order0, order1 = create_orders(18, 18, "1", "2", "4", "10", "2", "4", "8", "3")

        assert order1.lowest_rate == "1"
        assert order1.marginal_rate == "2"
        assert order1.highest_rate == "4"
        assert order0.lowest_rate == "0.125"
        assert order0.marginal_rate == "0.25"
        assert order0.highest_rate == "0.5"
        assert order1.liquidity == str(10 * 10**18)
        assert order0.liquidity == str(3 * 10**18)
