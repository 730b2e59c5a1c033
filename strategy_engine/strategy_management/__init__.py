"""Strategy management — построение, распределение и декодирование стратегий.

- builder: ордера из человеческих диапазонов и бюджетов
- overlapping: распределение по рыночной цене и спреду
- codec: encode/decode/parse между представлениями
- decimals: резолвер decimals токенов
- create_strategy: сборка и передача во внешний контрактный API
"""

from .builder import build_strategy_object, create_orders
from .codec import (
    CompactOrderCodec,
    OrderCodec,
    decode_strategy,
    encode_strategy,
    parse_strategy,
)
from .create_strategy import (
    ContractsApi,
    create_buy_sell_strategy,
    create_overlapping_strategy,
)
from .decimals import Decimals, DecimalsFetcher, DecimalsResolver
from .overlapping import (
    OverlappingDistributionConfig,
    OverlappingDistributionResult,
    calculate_overlapping_distribution,
)

__all__ = [
    # Builder
    "build_strategy_object",
    "create_orders",
    # Overlapping
    "OverlappingDistributionConfig",
    "OverlappingDistributionResult",
    "calculate_overlapping_distribution",
    # Codec
    "CompactOrderCodec",
    "OrderCodec",
    "decode_strategy",
    "encode_strategy",
    "parse_strategy",
    # Decimals
    "Decimals",
    "DecimalsFetcher",
    "DecimalsResolver",
    # Create
    "ContractsApi",
    "create_buy_sell_strategy",
    "create_overlapping_strategy",
]
