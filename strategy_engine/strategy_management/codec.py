"""
Codec — адаптер между on-chain и человеческим представлениями стратегии

Цепочки данных:
    построение:   Strategy-параметры → DecodedStrategy → encode → EncodedStrategy
    отображение:  EncodedStrategy → decode → DecodedStrategyRecord → parse → Strategy

Упаковка ордера — внешняя lossy-зависимость за протоколом OrderCodec.
CompactOrderCodec реализует on-chain формат (y, z, A, B).

parse_strategy — обратное преобразование к create_orders: каждый ордер
декодируется преобразованием, обратным тому, которым он был построен.
"""

import asyncio
import logging
from typing import Protocol

from strategy_engine.core.contracts.validators import validate_strategy
from strategy_engine.core.domain.orders import (
    DecodedOrder,
    DecodedStrategy,
    DecodedStrategyRecord,
    EncodedOrder,
    EncodedStrategy,
)
from strategy_engine.core.domain.strategy import Strategy
from strategy_engine.core.math.encoders import (
    decode_float,
    decode_rate,
    encode_float,
    encode_rate,
)
from strategy_engine.core.math.numerics import decimal_to_str, from_base_units
from strategy_engine.core.math.rates import normalize_inverted_rate, normalize_rate
from strategy_engine.strategy_management.decimals import DecimalsResolver

logger = logging.getLogger(__name__)


# =============================================================================
# ORDER CODEC
# =============================================================================


class OrderCodec(Protocol):
    """Упаковка одного ордера в on-chain формат и обратно."""

    def encode_order(self, order: DecodedOrder) -> EncodedOrder: ...

    def decode_order(self, order: EncodedOrder) -> DecodedOrder: ...


class CompactOrderCodec:
    """
    On-chain формат ордера.

    y = liquidity
    z = y, если H == M, иначе y * (H - L) / (M - L)
    A = encode_float(H - L), B = encode_float(L)
    где L, H, M — упакованные sqrt-rates (lowest, highest, marginal).
    """

    def encode_order(self, order: DecodedOrder) -> EncodedOrder:
        """
        Упаковка ордера.

        Raises:
            ValueError: Если rates не упорядочены или ордер с ликвидностью
                имеет marginal rate на нижней границе диапазона
        """
        y = int(order.liquidity)
        L = encode_rate(order.lowest_rate)
        H = encode_rate(order.highest_rate)
        M = encode_rate(order.marginal_rate)

        if not L <= M <= H:
            raise ValueError(
                f"rates must satisfy lowest <= marginal <= highest, got {order}"
            )

        if H == M:
            z = y
        elif M == L:
            if y:
                raise ValueError(
                    f"marginal rate cannot equal lowest rate on a funded order: {order}"
                )
            z = 0
        else:
            z = y * (H - L) // (M - L)

        return EncodedOrder(y=y, z=z, A=encode_float(H - L), B=encode_float(L))

    def decode_order(self, order: EncodedOrder) -> DecodedOrder:
        """
        Распаковка ордера.

        Raises:
            ValueError: Если y > z (ликвидность больше ёмкости ордера)
        """
        y, z = order.y, order.z
        if y > z:
            raise ValueError(f"order liquidity cannot exceed its capacity (y={y}, z={z})")
        A = decode_float(order.A)
        B = decode_float(order.B)

        marginal = B + A if y == z else B + A * y // z

        return DecodedOrder(
            liquidity=str(y),
            lowest_rate=decimal_to_str(decode_rate(B)),
            highest_rate=decimal_to_str(decode_rate(B + A)),
            marginal_rate=decimal_to_str(decode_rate(marginal)),
        )


# =============================================================================
# STRATEGY CODEC
# =============================================================================


def encode_strategy(strategy: DecodedStrategy, codec: OrderCodec) -> EncodedStrategy:
    """Структурная перепаковка decoded стратегии в encoded (без id)."""
    return EncodedStrategy(
        token0=strategy.token0,
        token1=strategy.token1,
        order0=codec.encode_order(strategy.order0),
        order1=codec.encode_order(strategy.order1),
    )


def decode_strategy(strategy: EncodedStrategy, codec: OrderCodec) -> DecodedStrategyRecord:
    """
    Структурная перепаковка encoded стратегии в decoded.

    Сохраняет id и исходную encoded форму рядом с декодированными ордерами.

    Raises:
        ValueError: Если у encoded стратегии нет id (не создана on-chain)
    """
    if strategy.id is None:
        raise ValueError("encoded strategy has no id")

    return DecodedStrategyRecord(
        id=strategy.id,
        token0=strategy.token0,
        token1=strategy.token1,
        order0=codec.decode_order(strategy.order0),
        order1=codec.decode_order(strategy.order1),
        encoded=strategy,
    )


async def parse_strategy(
    strategy: DecodedStrategyRecord,
    decimals: DecimalsResolver,
    *,
    validate_contract: bool = False,
) -> Strategy:
    """
    Перевод decoded стратегии в человеческие единицы.

    decimals обоих токенов запрашиваются параллельно; ошибка любого
    запроса прерывает разбор с этой ошибкой.

    order1 (продаёт quote) даёт цены покупки прямой нормализацией.
    order0 (продаёт base) даёт цены продажи инвертированной нормализацией:
    lowest rate → sell high, highest rate → sell low.

    Args:
        strategy: Результат decode_strategy
        decimals: Резолвер decimals токенов
        validate_contract: Проверить JSON-дамп результата схемой strategy.json

    Returns:
        Strategy в человеческих единицах

    Raises:
        LookupFailure: Если резолвер не смог получить decimals
        ValidationError: Если validate_contract и дамп нарушает контракт
    """
    logger.debug("parse_strategy called: id=%s", strategy.id)
    token0, token1 = strategy.token0, strategy.token1
    order0, order1 = strategy.order0, strategy.order1

    decimals0, decimals1 = await asyncio.gather(
        decimals.fetch_decimals(token0),
        decimals.fetch_decimals(token1),
    )

    parsed = Strategy(
        id=str(strategy.id),
        base_token=token0,
        quote_token=token1,
        buy_price_low=normalize_rate(order1.lowest_rate, decimals0, decimals1),
        buy_price_marginal=normalize_rate(order1.marginal_rate, decimals0, decimals1),
        buy_price_high=normalize_rate(order1.highest_rate, decimals0, decimals1),
        buy_budget=decimal_to_str(from_base_units(order1.liquidity, decimals1)),
        sell_price_low=normalize_inverted_rate(order0.highest_rate, decimals1, decimals0),
        sell_price_marginal=normalize_inverted_rate(order0.marginal_rate, decimals1, decimals0),
        sell_price_high=normalize_inverted_rate(order0.lowest_rate, decimals1, decimals0),
        sell_budget=decimal_to_str(from_base_units(order0.liquidity, decimals0)),
        encoded=strategy.encoded,
    )
    logger.debug(
        "parse_strategy info: id=%s decimals0=%s decimals1=%s strategy=%s",
        parsed.id,
        decimals0,
        decimals1,
        parsed,
    )
    if validate_contract:
        validate_strategy(parsed.model_dump(mode="json"))
    return parsed
