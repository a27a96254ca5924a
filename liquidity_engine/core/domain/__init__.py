"""
Domain models and value objects.

Contains currency amounts, currency codes, liquidity snapshots and result
models.
"""

from liquidity_engine.core.domain.amounts import (
    DROPS_PER_NATIVE_UNIT,
    NATIVE_CURRENCY,
    CurrencyAmount,
    IssuedAmount,
    NativeAmount,
    asset_key,
    drops_to_native,
    is_native,
    issued,
    native,
    normalize,
    parse_ledger_amount,
)
from liquidity_engine.core.domain.currency_code import (
    CURRENCY_CODE_HEX_LENGTH,
    decode_currency,
    encode_currency,
    is_fixed_width,
)
from liquidity_engine.core.domain.ledger import (
    entry_from_offer,
    pool_from_amm,
    snapshot_from_ledger,
)
from liquidity_engine.core.domain.results import (
    ExecutionResult,
    Fill,
    InverseRates,
    MarketStatistics,
)
from liquidity_engine.core.domain.snapshot import (
    AMM_POOL_OWNER,
    FEE_SCALE,
    LiquiditySnapshot,
    OrderBookEntry,
    PoolSnapshot,
    TradeDirection,
    tradable_entries,
)

__all__ = [
    # Amounts
    "DROPS_PER_NATIVE_UNIT",
    "NATIVE_CURRENCY",
    "CurrencyAmount",
    "IssuedAmount",
    "NativeAmount",
    "asset_key",
    "drops_to_native",
    "is_native",
    "issued",
    "native",
    "normalize",
    "parse_ledger_amount",
    # Currency codes
    "CURRENCY_CODE_HEX_LENGTH",
    "decode_currency",
    "encode_currency",
    "is_fixed_width",
    # Ledger adapter
    "entry_from_offer",
    "pool_from_amm",
    "snapshot_from_ledger",
    # Results
    "ExecutionResult",
    "Fill",
    "InverseRates",
    "MarketStatistics",
    # Snapshot
    "AMM_POOL_OWNER",
    "FEE_SCALE",
    "LiquiditySnapshot",
    "OrderBookEntry",
    "PoolSnapshot",
    "TradeDirection",
    "tradable_entries",
]
