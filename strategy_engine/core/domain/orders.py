"""
Orders — модели ордеров и стратегий в base units

Immutable Pydantic модели для двух представлений стратегии:
- decoded: ликвидность в base units, rates в нормализованном пространстве
- encoded: компактный on-chain формат (y, z, A, B)

Стратегия состоит из двух ордеров:
- order0 продаёт token0 (base), rates инвертированы относительно цены
- order1 продаёт token1 (quote), rates соответствуют цене напрямую
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from strategy_engine.core.math.numerics import to_decimal

_UINT_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# ORDERS
# =============================================================================


class DecodedOrder(BaseModel):
    """
    Одна сторона стратегии в base units.

    Все значения хранятся строками, чтобы не терять точность при
    сериализации. Порядок lowest ≤ marginal ≤ highest обеспечивается
    построителем ордеров, а не моделью: декодированный из lossy-формата
    ордер может отличаться от исходного в последних знаках.
    """

    liquidity: str = Field(..., description="Ликвидность в base units (целое число строкой)")
    lowest_rate: str = Field(..., description="Нижняя граница rate")
    highest_rate: str = Field(..., description="Верхняя граница rate")
    marginal_rate: str = Field(..., description="Текущий marginal rate")

    model_config = {"frozen": True}

    @field_validator("liquidity")
    @classmethod
    def validate_liquidity(cls, v: str) -> str:
        """Ликвидность — неотрицательное целое в base units."""
        if not _UINT_PATTERN.fullmatch(v):
            raise ValueError(f"liquidity must be a non-negative integer string, got {v!r}")
        return v

    @field_validator("lowest_rate", "highest_rate", "marginal_rate")
    @classmethod
    def validate_rate(cls, v: str) -> str:
        """Rate — конечное неотрицательное десятичное число."""
        if to_decimal(v, "rate") < 0:
            raise ValueError(f"rate cannot be negative, got {v}")
        return v


class EncodedOrder(BaseModel):
    """
    Ордер в компактном on-chain формате.

    y — ликвидность, z — ёмкость (y-intercept), A и B — упакованные
    ширина диапазона и нижняя граница sqrt-rate.
    """

    y: int = Field(..., ge=0, description="Ликвидность (base units)")
    z: int = Field(..., ge=0, description="Ёмкость ордера (base units)")
    A: int = Field(..., ge=0, description="Упакованная ширина диапазона sqrt-rate")
    B: int = Field(..., ge=0, description="Упакованная нижняя граница sqrt-rate")

    model_config = {"frozen": True}


# =============================================================================
# STRATEGIES
# =============================================================================


class DecodedStrategy(BaseModel):
    """Стратегия из двух decoded ордеров."""

    token0: str = Field(..., min_length=1, description="Адрес base token")
    token1: str = Field(..., min_length=1, description="Адрес quote token")
    order0: DecodedOrder = Field(..., description="Ордер, продающий token0")
    order1: DecodedOrder = Field(..., description="Ордер, продающий token1")

    model_config = {"frozen": True}


class EncodedStrategy(BaseModel):
    """
    Стратегия в on-chain формате.

    id отсутствует у стратегии, которая ещё не создана on-chain.
    """

    id: Optional[int] = Field(None, ge=0, description="On-chain идентификатор стратегии")
    token0: str = Field(..., min_length=1, description="Адрес base token")
    token1: str = Field(..., min_length=1, description="Адрес quote token")
    order0: EncodedOrder
    order1: EncodedOrder

    model_config = {"frozen": True}


class DecodedStrategyRecord(DecodedStrategy):
    """Decoded стратегия, прочитанная on-chain: с id и исходной encoded формой."""

    id: int = Field(..., ge=0, description="On-chain идентификатор стратегии")
    encoded: EncodedStrategy = Field(..., description="Исходная encoded стратегия")
