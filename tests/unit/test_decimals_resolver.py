"""
Юнит-тесты для резолвера decimals токенов

Проверяет:
1. Кэширование по адресу токена
2. Отклонение некорректных значений (LookupFailure)
3. Пропагацию ошибок fetcher без изменений
4. Отсутствие кэширования неудачных запросов
"""

import asyncio
from typing import Dict, List

import pytest

from strategy_engine.core.errors import LookupFailure, StrategyEngineError
from strategy_engine.strategy_management.decimals import Decimals


class RecordingFetcher:
    """Fetcher по таблице адресов, запоминающий вызовы"""

    def __init__(self, table: Dict[str, object]):
        self.table = table
        self.calls: List[str] = []

    async def __call__(self, address: str) -> int:
        self.calls.append(address)
        value = self.table[address]
        if isinstance(value, Exception):
            raise value
        return value  # type: ignore[return-value]


class TestDecimals:
    """Тесты Decimals"""

    def test_fetch(self) -> None:
        """Значение fetcher возвращается как есть"""
        fetcher = RecordingFetcher({"0xETH": 18, "0xUSDC": 6})
        resolver = Decimals(fetcher)

        assert asyncio.run(resolver.fetch_decimals("0xETH")) == 18
        assert asyncio.run(resolver.fetch_decimals("0xUSDC")) == 6

    def test_cached_per_address(self) -> None:
        """Повторный запрос не обращается к fetcher"""
        fetcher = RecordingFetcher({"0xETH": 18})
        resolver = Decimals(fetcher)

        async def fetch_twice() -> List[int]:
            return [
                await resolver.fetch_decimals("0xETH"),
                await resolver.fetch_decimals("0xETH"),
            ]

        assert asyncio.run(fetch_twice()) == [18, 18]
        assert fetcher.calls == ["0xETH"]

    def test_zero_decimals_cached(self) -> None:
        """decimals = 0 тоже кэшируется"""
        fetcher = RecordingFetcher({"0xZERO": 0})
        resolver = Decimals(fetcher)

        async def fetch_twice() -> None:
            await resolver.fetch_decimals("0xZERO")
            await resolver.fetch_decimals("0xZERO")

        asyncio.run(fetch_twice())
        assert fetcher.calls == ["0xZERO"]

    def test_empty_address(self) -> None:
        """Пустой адрес отклоняется без обращения к fetcher"""
        fetcher = RecordingFetcher({})
        resolver = Decimals(fetcher)

        with pytest.raises(LookupFailure, match="empty"):
            asyncio.run(resolver.fetch_decimals(""))
        assert fetcher.calls == []

    @pytest.mark.parametrize("value", [-1, 256, "18", 18.0, True, None])
    def test_invalid_value(self, value: object) -> None:
        """Некорректное значение от fetcher → LookupFailure"""
        resolver = Decimals(RecordingFetcher({"0xBAD": value}))

        with pytest.raises(LookupFailure, match="0xBAD"):
            asyncio.run(resolver.fetch_decimals("0xBAD"))

    def test_boundary_values(self) -> None:
        """Границы [0, 255] допустимы"""
        resolver = Decimals(RecordingFetcher({"0xA": 0, "0xB": 255}))

        assert asyncio.run(resolver.fetch_decimals("0xA")) == 0
        assert asyncio.run(resolver.fetch_decimals("0xB")) == 255

    def test_fetcher_error_propagates(self) -> None:
        """Ошибка fetcher пропагирует без изменений"""
        error = ConnectionError("rpc unavailable")
        resolver = Decimals(RecordingFetcher({"0xETH": error}))

        with pytest.raises(ConnectionError) as exc_info:
            asyncio.run(resolver.fetch_decimals("0xETH"))
        assert exc_info.value is error

    def test_failure_not_cached(self) -> None:
        """После неудачи повторный запрос снова обращается к fetcher"""
        fetcher = RecordingFetcher({"0xETH": ConnectionError("rpc unavailable")})
        resolver = Decimals(fetcher)

        with pytest.raises(ConnectionError):
            asyncio.run(resolver.fetch_decimals("0xETH"))

        fetcher.table["0xETH"] = 18
        assert asyncio.run(resolver.fetch_decimals("0xETH")) == 18
        assert fetcher.calls == ["0xETH", "0xETH"]

    def test_invalid_value_not_cached(self) -> None:
        """Некорректное значение не попадает в кэш"""
        fetcher = RecordingFetcher({"0xETH": 300})
        resolver = Decimals(fetcher)

        with pytest.raises(LookupFailure):
            asyncio.run(resolver.fetch_decimals("0xETH"))

        fetcher.table["0xETH"] = 18
        assert asyncio.run(resolver.fetch_decimals("0xETH")) == 18

    def test_lookup_failure_hierarchy(self) -> None:
        """LookupFailure — ошибка движка, но не ошибка ввода"""
        assert issubclass(LookupFailure, StrategyEngineError)
        assert not issubclass(LookupFailure, ValueError)
