"""
Domain models and value objects.

Contains the order and strategy representations: decoded (base units),
encoded (on-chain) and human (display).
"""

from strategy_engine.core.domain.orders import (
    DecodedOrder,
    DecodedStrategy,
    DecodedStrategyRecord,
    EncodedOrder,
    EncodedStrategy,
)
from strategy_engine.core.domain.strategy import Strategy

__all__ = [
    # Orders
    "DecodedOrder",
    "EncodedOrder",
    # Strategies
    "DecodedStrategy",
    "DecodedStrategyRecord",
    "EncodedStrategy",
    "Strategy",
]
