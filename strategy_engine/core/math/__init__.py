"""
Core math modules для strategy_engine

Точная десятичная арифметика, нормализация rates, комиссии и упаковка rates.
"""

# Numerics
from strategy_engine.core.math.numerics import (
    # Constants
    DECIMAL_CONTEXT,
    DECIMAL_PRECISION,
    MAX_TOKEN_DECIMALS,
    # Types
    DecimalLike,
    Rounding,
    # Parsing / formatting
    decimal_to_str,
    to_decimal,
    trim_decimal,
    # Arithmetic
    div_rounded,
    ten_pow,
    # Base units
    from_base_units,
    to_base_units,
    validate_token_decimals,
)

# Rates
from strategy_engine.core.math.rates import (
    normalize_inverted_rate,
    normalize_rate,
)

# Fees
from strategy_engine.core.math.fees import (
    PPM_RESOLUTION,
    add_fee,
    subtract_fee,
    validate_fee_ppm,
)

# Encoders
from strategy_engine.core.math.encoders import (
    RATE_ONE,
    decode_float,
    decode_rate,
    encode_float,
    encode_rate,
)

__all__ = [
    # Numerics: Constants
    "DECIMAL_CONTEXT",
    "DECIMAL_PRECISION",
    "MAX_TOKEN_DECIMALS",
    # Numerics: Types
    "DecimalLike",
    "Rounding",
    # Numerics: Parsing / formatting
    "decimal_to_str",
    "to_decimal",
    "trim_decimal",
    # Numerics: Arithmetic
    "div_rounded",
    "ten_pow",
    # Numerics: Base units
    "from_base_units",
    "to_base_units",
    "validate_token_decimals",
    # Rates
    "normalize_inverted_rate",
    "normalize_rate",
    # Fees
    "PPM_RESOLUTION",
    "add_fee",
    "subtract_fee",
    "validate_fee_ppm",
    # Encoders
    "RATE_ONE",
    "decode_float",
    "decode_rate",
    "encode_float",
    "encode_rate",
]
