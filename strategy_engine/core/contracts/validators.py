"""
JSON Schema контракты стратегий

Проверка JSON-дампов стратегий на границе с внешним миром:
parse_strategy проверяет Strategy перед отдачей наружу, сценарии
создания проверяют EncodedStrategy перед передачей в ContractsApi
(оба включаются флагом validate_contract).

Схемы (strategy_engine/core/contracts/schema/):
- strategy.json          (человеческое представление, цены строками)
- decoded_strategy.json  (ордера в base units)
- encoded_strategy.json  (on-chain формат, y/z/A/B и id целыми числами)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Схемы стратегий из каталога пакета, с кэшем и meta-валидацией."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Если файла схемы нет в каталоге
            ValueError: Если схема не проходит meta-валидацию Draft 2020-12
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка дампа одного представления стратегии против его схемы."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.validator = Draft202012Validator(_SCHEMA_LOADER.load_schema(schema_name))

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)


class StrategyValidator(ContractValidator):
    """Strategy: цены и бюджеты неотрицательными десятичными строками."""

    def __init__(self):
        super().__init__("strategy")


class DecodedStrategyValidator(ContractValidator):
    """DecodedStrategy: ликвидность целыми base units, rates без экспоненты."""

    def __init__(self):
        super().__init__("decoded_strategy")


class EncodedStrategyValidator(ContractValidator):
    """EncodedStrategy: on-chain поля целыми числами, id или null."""

    def __init__(self):
        super().__init__("encoded_strategy")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_strategy(data: Dict[str, Any]) -> None:
    """Проверка Strategy.model_dump(mode="json")."""
    StrategyValidator().validate(data)


def validate_decoded_strategy(data: Dict[str, Any]) -> None:
    DecodedStrategyValidator().validate(data)


def validate_encoded_strategy(data: Dict[str, Any]) -> None:
    """Проверка EncodedStrategy.model_dump(mode="json") перед отправкой в контракт."""
    EncodedStrategyValidator().validate(data)
