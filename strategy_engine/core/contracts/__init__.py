"""
Contract Validation Module

Модуль для валидации JSON представлений стратегий.
"""

from .validators import (
    ContractValidator,
    DecodedStrategyValidator,
    EncodedStrategyValidator,
    SchemaLoader,
    StrategyValidator,
    validate_decoded_strategy,
    validate_encoded_strategy,
    validate_strategy,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "StrategyValidator",
    "DecodedStrategyValidator",
    "EncodedStrategyValidator",
    # Functions
    "validate_strategy",
    "validate_decoded_strategy",
    "validate_encoded_strategy",
]
