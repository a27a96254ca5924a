"""
Pricing — статистика, симуляция исполнения и эффективный rate

Чистые функции над immutable LiquiditySnapshot.
"""

from liquidity_engine.pricing.effective_rate import (
    DEFAULT_OWNER_RESERVE,
    TradeSide,
    adjust_effective_rate,
    offer_side,
    owner_reserve_from_drops,
    reserve_cost_factor,
)
from liquidity_engine.pricing.execution import (
    match_entries,
    simulate_execution,
    sort_by_quality,
)
from liquidity_engine.pricing.rate_statistics import (
    DEFAULT_DEPTH_SLIPPAGE,
    DepthMetrics,
    LiquidityRatioMetrics,
    SpreadMetrics,
    compute_bid_ask_spread,
    compute_depth_at_slippage,
    compute_inverse_rates,
    compute_liquidity_ratio,
    compute_market_statistics,
    compute_vwap,
    forward_rates,
    inverse_rates,
)

__all__ = [
    # Effective rate
    "DEFAULT_OWNER_RESERVE",
    "TradeSide",
    "adjust_effective_rate",
    "offer_side",
    "owner_reserve_from_drops",
    "reserve_cost_factor",
    # Execution
    "match_entries",
    "simulate_execution",
    "sort_by_quality",
    # Statistics
    "DEFAULT_DEPTH_SLIPPAGE",
    "DepthMetrics",
    "LiquidityRatioMetrics",
    "SpreadMetrics",
    "compute_bid_ask_spread",
    "compute_depth_at_slippage",
    "compute_inverse_rates",
    "compute_liquidity_ratio",
    "compute_market_statistics",
    "compute_vwap",
    "forward_rates",
    "inverse_rates",
]
