"""
Strategy — человеческое представление стратегии

Immutable Pydantic модель для отображения: цены в quote за 1 base,
бюджеты в единицах соответствующего токена. Цены и бюджеты — десятичные
строки; вложенная encoded стратегия хранит on-chain поля целыми числами.

Порядок low ≤ marginal ≤ high требуется на каждой стороне отдельно;
диапазоны покупки и продажи могут пересекаться или касаться.
"""

from pydantic import BaseModel, Field, field_validator

from strategy_engine.core.domain.orders import EncodedStrategy
from strategy_engine.core.math.numerics import to_decimal


class Strategy(BaseModel):
    """Стратегия в человеческих единицах."""

    # Идентификация
    id: str = Field(..., min_length=1, description="On-chain идентификатор стратегии")
    base_token: str = Field(..., min_length=1, description="Адрес base token")
    quote_token: str = Field(..., min_length=1, description="Адрес quote token")

    # Сторона покупки (продаёт quote token)
    buy_price_low: str = Field(..., description="Нижняя цена покупки (quote за base)")
    buy_price_marginal: str = Field(..., description="Marginal цена покупки")
    buy_price_high: str = Field(..., description="Верхняя цена покупки")
    buy_budget: str = Field(..., description="Бюджет покупки (в quote token)")

    # Сторона продажи (продаёт base token)
    sell_price_low: str = Field(..., description="Нижняя цена продажи (quote за base)")
    sell_price_marginal: str = Field(..., description="Marginal цена продажи")
    sell_price_high: str = Field(..., description="Верхняя цена продажи")
    sell_budget: str = Field(..., description="Бюджет продажи (в base token)")

    encoded: EncodedStrategy = Field(
        ...,
        description=(
            "Исходная encoded стратегия; в JSON-дампе id, y, z, A, B остаются "
            "целыми числами (в отличие от строковых цен и бюджетов)"
        ),
    )

    model_config = {"frozen": True}

    @field_validator(
        "buy_price_low",
        "buy_price_marginal",
        "buy_price_high",
        "buy_budget",
        "sell_price_low",
        "sell_price_marginal",
        "sell_price_high",
        "sell_budget",
    )
    @classmethod
    def validate_decimal_string(cls, v: str) -> str:
        """Цены и бюджеты — конечные неотрицательные десятичные строки."""
        if to_decimal(v, "value") < 0:
            raise ValueError(f"prices and budgets cannot be negative, got {v}")
        return v
