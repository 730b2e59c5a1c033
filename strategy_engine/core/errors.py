"""
Errors — иерархия исключений движка стратегий

Разделяет два класса отказов:
- некорректный ввод (не ретраится, вызывающий обязан исправить параметры)
- отказ внешней зависимости (LookupFailure, может быть повторён вызывающим)

Ошибки валидации наследуют ValueError, чтобы код, ловящий ValueError,
продолжал работать.
"""


class StrategyEngineError(Exception):
    """Базовое исключение движка стратегий."""

    pass


# =============================================================================
# ОШИБКИ ВАЛИДАЦИИ ВВОДА
# =============================================================================


class InvalidPriceError(StrategyEngineError, ValueError):
    """Отрицательная цена."""

    pass


class InvalidPriceOrderingError(StrategyEngineError, ValueError):
    """Нарушен порядок low ≤ marginal ≤ high на одной из сторон."""

    pass


class InvalidBudgetError(StrategyEngineError, ValueError):
    """Отрицательный бюджет."""

    pass


class DegenerateRangeError(StrategyEngineError, ValueError):
    """
    Вырожденный диапазон в overlapping-распределении.

    Возникает, когда делитель в расчёте обращается в ноль:
    spread_percentage == 100, buy_price_low == sell_price_high
    или рыночная цена ровно на границе buy_price_low + spread / 2.
    """

    pass


class MarketPriceOutOfRangeError(InvalidPriceError):
    """
    Рыночная цена вне диапазона, который распределение может представить.

    Доля бюджета покупки при такой цене выходит за (0, 1], что дало бы
    отрицательный бюджет продажи или marginal-цену вне своего диапазона.
    """

    pass


# =============================================================================
# ОШИБКИ ВНЕШНИХ ЗАВИСИМОСТЕЙ
# =============================================================================


class LookupFailure(StrategyEngineError):
    """
    Отказ резолвера decimals токена.

    Может быть повторён вызывающим; движок сам не ретраит.
    """

    pass
