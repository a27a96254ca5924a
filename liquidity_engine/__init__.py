"""
Liquidity Engine — агрегация order book + AMM пула и симуляция исполнения.

Engine получает уже полученный снапшот ликвидности (две complementary книги
и опциональный AMM пул) и считает по нему статистику рынка, симулирует
исполнение сделки и корректирует rate предлагаемой offer на owner reserve.

Источники снапшота получаются внешним слоем параллельно и не атомарно,
поэтому все результаты — best-effort над композитным видом рынка, который
может быть слегка устаревшим. Вызывающий слой сам отбрасывает результаты
для устаревшего запроса.

Module-level функции делегируют в LiquidityEngine с конфигурацией по
умолчанию.
"""

from decimal import Decimal
from typing import Optional

from liquidity_engine.core.domain import (
    CurrencyAmount,
    ExecutionResult,
    Fill,
    InverseRates,
    IssuedAmount,
    LiquiditySnapshot,
    MarketStatistics,
    NativeAmount,
    OrderBookEntry,
    PoolSnapshot,
    TradeDirection,
    drops_to_native,
    issued,
    native,
    snapshot_from_ledger,
)
from liquidity_engine.core.errors import (
    InvalidAmount,
    InvalidCurrencyCode,
    InvalidInput,
    LiquidityEngineError,
)
from liquidity_engine.engine import EngineConfig, LiquidityEngine
from liquidity_engine.pricing import TradeSide, offer_side

__version__ = "0.1.0"

_DEFAULT_ENGINE = LiquidityEngine()


def compute_statistics(
    snapshot: LiquiditySnapshot,
    direction: Optional[TradeDirection] = None,
) -> MarketStatistics:
    """Статистика рынка по снапшоту (конфигурация по умолчанию)."""
    return _DEFAULT_ENGINE.compute_statistics(snapshot, direction)


def simulate_execution(
    snapshot: LiquiditySnapshot,
    spend_amount: object,
    direction: Optional[TradeDirection] = None,
) -> ExecutionResult:
    """Симуляция исполнения (конфигурация по умолчанию, fee пула учитывается)."""
    return _DEFAULT_ENGINE.simulate_execution(snapshot, spend_amount, direction)


def adjust_effective_rate(
    proposed_rate: object,
    owner_reserve: object,
    side: TradeSide,
) -> Decimal:
    """Эффективный rate offer с учётом owner reserve (XRP)."""
    return _DEFAULT_ENGINE.adjust_effective_rate(proposed_rate, owner_reserve, side)


def encode_currency(code: str) -> str:
    return _DEFAULT_ENGINE.encode_currency(code)


def decode_currency(code: str) -> str:
    return _DEFAULT_ENGINE.decode_currency(code)


__all__ = [
    # API
    "adjust_effective_rate",
    "compute_statistics",
    "decode_currency",
    "encode_currency",
    "simulate_execution",
    # Engine
    "EngineConfig",
    "LiquidityEngine",
    # Models
    "CurrencyAmount",
    "ExecutionResult",
    "Fill",
    "InverseRates",
    "IssuedAmount",
    "LiquiditySnapshot",
    "MarketStatistics",
    "NativeAmount",
    "OrderBookEntry",
    "PoolSnapshot",
    "TradeDirection",
    "TradeSide",
    # Helpers
    "drops_to_native",
    "issued",
    "native",
    "offer_side",
    "snapshot_from_ledger",
    # Errors
    "InvalidAmount",
    "InvalidCurrencyCode",
    "InvalidInput",
    "LiquidityEngineError",
]
