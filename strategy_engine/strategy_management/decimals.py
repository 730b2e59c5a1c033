"""
Decimals — резолвер decimals токенов

Движок получает decimals через протокол DecimalsResolver и ничего не
кэширует сам. Decimals — реализация резолвера поверх произвольного
async fetcher (например, вызов decimals() ERC-20 контракта) с кэшем.

Ошибки fetcher пропагируют как есть; LookupFailure поднимается, только если
fetcher вернул некорректное значение.
"""

import logging
from typing import Awaitable, Callable, Dict, Protocol

from strategy_engine.core.errors import LookupFailure
from strategy_engine.core.math.numerics import MAX_TOKEN_DECIMALS

logger = logging.getLogger(__name__)

DecimalsFetcher = Callable[[str], Awaitable[int]]


class DecimalsResolver(Protocol):
    """Асинхронный источник decimals токена."""

    async def fetch_decimals(self, address: str) -> int: ...


class Decimals:
    """
    Резолвер decimals с кэшем по адресу токена.

    Неудачные запросы не кэшируются: повторный вызов обращается к fetcher
    снова.
    """

    def __init__(self, fetcher: DecimalsFetcher):
        self._fetcher = fetcher
        self._cache: Dict[str, int] = {}

    async def fetch_decimals(self, address: str) -> int:
        """
        Получение decimals токена.

        Args:
            address: Адрес токена

        Returns:
            decimals в [0, 255]

        Raises:
            LookupFailure: Если адрес пустой или fetcher вернул некорректное значение
        """
        if not address:
            raise LookupFailure("token address cannot be empty")

        cached = self._cache.get(address)
        if cached is not None:
            return cached

        logger.debug("fetching decimals for token %s", address)
        decimals = await self._fetcher(address)

        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise LookupFailure(f"invalid decimals for token {address}: {decimals!r}")
        if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
            raise LookupFailure(
                f"decimals for token {address} must be in [0, {MAX_TOKEN_DECIMALS}], got {decimals}"
            )

        self._cache[address] = decimals
        return decimals
