"""
CreateStrategy — сборка стратегии и передача во внешний контрактный API

Порядок:
1. decimals base/quote токенов (параллельно, через резолвер)
2. построение ордеров (build_strategy_object) или overlapping-распределение
3. упаковка в on-chain формат (encode_strategy)
4. передача в ContractsApi, который возвращает handle транзакции

validate_contract=True проверяет JSON-дамп encoded стратегии схемой
encoded_strategy.json до передачи в ContractsApi.

Подпись, газ и ABI — ответственность ContractsApi.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Protocol

from strategy_engine.core.contracts.validators import validate_encoded_strategy
from strategy_engine.core.domain.orders import EncodedStrategy
from strategy_engine.core.math.numerics import DecimalLike
from strategy_engine.strategy_management.builder import build_strategy_object
from strategy_engine.strategy_management.codec import OrderCodec, encode_strategy
from strategy_engine.strategy_management.decimals import DecimalsResolver
from strategy_engine.strategy_management.overlapping import (
    OverlappingDistributionConfig,
    calculate_overlapping_distribution,
)

logger = logging.getLogger(__name__)


class ContractsApi(Protocol):
    """Внешний клиент контракта: принимает готовую encoded стратегию."""

    async def create_strategy(
        self, strategy: EncodedStrategy, overrides: Optional[Dict[str, Any]] = None
    ) -> Any: ...


async def create_buy_sell_strategy(
    api: ContractsApi,
    decimals: DecimalsResolver,
    codec: OrderCodec,
    base_token: str,
    quote_token: str,
    buy_price_low: DecimalLike,
    buy_price_marginal: DecimalLike,
    buy_price_high: DecimalLike,
    buy_budget: DecimalLike,
    sell_price_low: DecimalLike,
    sell_price_marginal: DecimalLike,
    sell_price_high: DecimalLike,
    sell_budget: DecimalLike,
    overrides: Optional[Dict[str, Any]] = None,
    validate_contract: bool = False,
) -> Any:
    """
    Создание стратегии по двум явно заданным диапазонам.

    Returns:
        Handle транзакции от ContractsApi

    Raises:
        LookupFailure: Если резолвер не смог получить decimals
        InvalidPriceError, InvalidPriceOrderingError, InvalidBudgetError:
            При некорректных параметрах стратегии
        ValidationError: Если validate_contract и дамп нарушает контракт
    """
    logger.debug("create_buy_sell_strategy called: base=%s quote=%s", base_token, quote_token)
    base_decimals, quote_decimals = await asyncio.gather(
        decimals.fetch_decimals(base_token),
        decimals.fetch_decimals(quote_token),
    )

    strategy = build_strategy_object(
        base_token,
        quote_token,
        base_decimals,
        quote_decimals,
        buy_price_low,
        buy_price_marginal,
        buy_price_high,
        buy_budget,
        sell_price_low,
        sell_price_marginal,
        sell_price_high,
        sell_budget,
    )
    encoded = encode_strategy(strategy, codec)
    if validate_contract:
        validate_encoded_strategy(encoded.model_dump(mode="json"))

    logger.debug("create_buy_sell_strategy info: %s", encoded)
    return await api.create_strategy(encoded, overrides)


async def create_overlapping_strategy(
    api: ContractsApi,
    decimals: DecimalsResolver,
    codec: OrderCodec,
    base_token: str,
    quote_token: str,
    buy_price_low: DecimalLike,
    sell_price_high: DecimalLike,
    market_price: DecimalLike,
    spread_percentage: DecimalLike,
    buy_budget: DecimalLike,
    overrides: Optional[Dict[str, Any]] = None,
    config: OverlappingDistributionConfig | None = None,
    validate_contract: bool = False,
) -> Any:
    """
    Создание overlapping-стратегии по внешнему диапазону, рыночной цене и спреду.

    Внутренние границы, marginal-цены и бюджет продажи выводятся
    calculate_overlapping_distribution, дальше путь тот же, что у
    create_buy_sell_strategy.

    Raises:
        LookupFailure: Если резолвер не смог получить decimals
        DegenerateRangeError: Если диапазон вырожден
        MarketPriceOutOfRangeError: Если рыночная цена вне диапазона
        ValidationError: Если validate_contract и дамп нарушает контракт
    """
    logger.debug(
        "create_overlapping_strategy called: base=%s quote=%s market=%s spread=%s",
        base_token,
        quote_token,
        market_price,
        spread_percentage,
    )
    base_decimals, quote_decimals = await asyncio.gather(
        decimals.fetch_decimals(base_token),
        decimals.fetch_decimals(quote_token),
    )

    distribution = calculate_overlapping_distribution(
        base_decimals,
        quote_decimals,
        buy_price_low,
        sell_price_high,
        market_price,
        spread_percentage,
        buy_budget,
        config=config,
    )

    strategy = build_strategy_object(
        base_token,
        quote_token,
        base_decimals,
        quote_decimals,
        buy_price_low,
        distribution.buy_price_marginal,
        distribution.buy_price_high,
        buy_budget,
        distribution.sell_price_low,
        distribution.sell_price_marginal,
        sell_price_high,
        distribution.sell_budget,
    )
    encoded = encode_strategy(strategy, codec)
    if validate_contract:
        validate_encoded_strategy(encoded.model_dump(mode="json"))

    logger.debug("create_overlapping_strategy info: %s", encoded)
    return await api.create_strategy(encoded, overrides)
