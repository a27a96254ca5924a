"""
LiquiditySnapshot — Модель снапшота ликвидности

Immutable Pydantic модели:
- OrderBookEntry: одна offer из order book (или синтетическая offer AMM пула)
- PoolSnapshot: снапшот AMM пула (два резерва + trading fee)
- LiquiditySnapshot: primary book + complementary book + опциональный пул

Снапшот создаётся один раз на запрос из уже полученных данных и не меняется
до конца всех вычислений над ним. Источники (две книги и пул) получаются
внешним слоем параллельно и не атомарно, поэтому снапшот — best-effort
композитный вид рынка, возможно слегка устаревший.
"""

from decimal import Decimal
from enum import Enum
from typing import Final, Iterable, Optional

from pydantic import BaseModel, Field, field_validator

from liquidity_engine.core.domain.amounts import CurrencyAmount, asset_key, normalize
from liquidity_engine.core.errors import InvalidInput
from liquidity_engine.core.math.numerical_safeguards import safe_divide

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Owner синтетической offer пула
AMM_POOL_OWNER: Final[str] = "AMM_POOL"

# Шкала trading fee: parts per million
FEE_SCALE: Final[int] = 1_000_000


# =============================================================================
# ENUMS
# =============================================================================


class TradeDirection(str, Enum):
    """
    Направление сделки относительно пула.

    Определяет ориентацию синтетической offer: какой резерв taker платит,
    а какой получает.
    """

    ASSET1_TO_ASSET2 = "asset1_to_asset2"  # taker платит asset1, получает asset2
    ASSET2_TO_ASSET1 = "asset2_to_asset1"  # taker платит asset2, получает asset1

    def reversed(self) -> "TradeDirection":
        if self is TradeDirection.ASSET1_TO_ASSET2:
            return TradeDirection.ASSET2_TO_ASSET1
        return TradeDirection.ASSET1_TO_ASSET2


# =============================================================================
# ORDER BOOK ENTRY
# =============================================================================


class OrderBookEntry(BaseModel):
    """
    Offer в order book.

    quality = taker_pays / taker_gets (меньше — лучше для taker).
    forward_rate = taker_gets / taker_pays (quote за единицу base).
    """

    taker_gets: CurrencyAmount = Field(..., description="Что получает taker")
    taker_pays: CurrencyAmount = Field(..., description="Что платит taker")
    is_amm: bool = Field(False, description="Синтетическая offer AMM пула")
    owner: str = Field("", description="Адрес владельца offer или AMM_POOL")
    sequence: Optional[int] = Field(None, ge=0, description="Sequence offer (nullable)")

    model_config = {"frozen": True}

    @property
    def gets_value(self) -> Decimal:
        return normalize(self.taker_gets)

    @property
    def pays_value(self) -> Decimal:
        return normalize(self.taker_pays)

    @property
    def quality(self) -> Decimal:
        """taker_pays / taker_gets, 0 при taker_gets == 0."""
        return safe_divide(self.pays_value, self.gets_value)

    @property
    def forward_rate(self) -> Decimal:
        """taker_gets / taker_pays, 0 при taker_pays == 0."""
        return safe_divide(self.gets_value, self.pays_value)

    @property
    def inverse_rate(self) -> Decimal:
        return self.quality

    @property
    def is_tradable(self) -> bool:
        """Обе стороны > 0 (иначе offer исключается из статистики)."""
        return self.gets_value > 0 and self.pays_value > 0


def tradable_entries(entries: Iterable[OrderBookEntry]) -> list[OrderBookEntry]:
    """Фильтр offers с нулевой стороной (защита от деления на ноль)."""
    return [entry for entry in entries if entry.is_tradable]


# =============================================================================
# POOL SNAPSHOT
# =============================================================================


class PoolSnapshot(BaseModel):
    """
    Снапшот AMM пула.

    trading_fee_bps в parts per million: 1000 → 0.1%.
    Fee применяется только при симуляции исполнения, не в статистике.
    """

    asset1: CurrencyAmount = Field(..., description="Резерв первого актива")
    asset2: CurrencyAmount = Field(..., description="Резерв второго актива")
    trading_fee_bps: int = Field(
        ..., ge=0, le=FEE_SCALE, description="Trading fee (parts per million)"
    )

    model_config = {"frozen": True}

    def fee_rate(self, fee_scale: int = FEE_SCALE) -> Decimal:
        """
        Fee как доля: trading_fee_bps / fee_scale.

        Raises:
            InvalidInput: fee_scale <= 0 или trading_fee_bps > fee_scale
                (fee больше 100% дала бы отрицательный выход)
        """
        if fee_scale <= 0:
            raise InvalidInput(f"fee_scale must be positive, got {fee_scale}")
        if self.trading_fee_bps > fee_scale:
            raise InvalidInput(
                f"trading_fee_bps {self.trading_fee_bps} exceeds fee_scale {fee_scale}"
            )
        return Decimal(self.trading_fee_bps) / Decimal(fee_scale)

    def direction_for(self, spent: CurrencyAmount) -> TradeDirection:
        """
        Направление сделки, в которой taker тратит актив spent.

        Raises:
            InvalidInput: spent не совпадает ни с одним резервом пула
        """
        key = asset_key(spent)
        if key == asset_key(self.asset1):
            return TradeDirection.ASSET1_TO_ASSET2
        if key == asset_key(self.asset2):
            return TradeDirection.ASSET2_TO_ASSET1
        raise InvalidInput(f"asset {key} is not held by the pool")

    def as_entry(self, direction: TradeDirection) -> OrderBookEntry:
        """
        Синтетическая offer пула, ориентированная по направлению сделки.

        Args:
            direction: какой резерв taker платит

        Returns:
            OrderBookEntry с is_amm=True и owner=AMM_POOL (без fee)
        """
        if direction is TradeDirection.ASSET1_TO_ASSET2:
            pays, gets = self.asset1, self.asset2
        else:
            pays, gets = self.asset2, self.asset1

        return OrderBookEntry(
            taker_gets=gets,
            taker_pays=pays,
            is_amm=True,
            owner=AMM_POOL_OWNER,
        )


# =============================================================================
# LIQUIDITY SNAPSHOT
# =============================================================================


class LiquiditySnapshot(BaseModel):
    """
    Композитный снапшот ликвидности пары.

    - entries: primary book (offers в направлении сделки)
    - counter_entries: complementary book (обратное направление, для spread
      и liquidity ratio)
    - pool: AMM пул (nullable)

    Immutable модель (frozen=True, последовательности хранятся как tuple).
    """

    entries: tuple[OrderBookEntry, ...] = Field((), description="Primary book")
    counter_entries: tuple[OrderBookEntry, ...] = Field(
        (), description="Complementary book"
    )
    pool: Optional[PoolSnapshot] = Field(None, description="AMM пул (nullable)")

    model_config = {"frozen": True}

    @field_validator("entries", "counter_entries")
    @classmethod
    def validate_book_entries(
        cls, v: tuple[OrderBookEntry, ...]
    ) -> tuple[OrderBookEntry, ...]:
        """Offer пула синтезируется из pool, в книгах её быть не может."""
        if any(entry.is_amm for entry in v):
            raise ValueError("book entries must not be AMM entries; pass the pool as pool")
        return v

    def _pool_entry(self, direction: Optional[TradeDirection]) -> list[OrderBookEntry]:
        if self.pool is None:
            return []
        if direction is None:
            raise InvalidInput("direction is required when the snapshot has a pool")
        return [self.pool.as_entry(direction)]

    def working_entries(
        self, direction: Optional[TradeDirection] = None
    ) -> list[OrderBookEntry]:
        """Primary book + синтетическая offer пула (в порядке входа)."""
        return list(self.entries) + self._pool_entry(direction)

    def counter_working_entries(
        self, direction: Optional[TradeDirection] = None
    ) -> list[OrderBookEntry]:
        """Complementary book + offer пула в обратной ориентации."""
        reverse = direction.reversed() if direction is not None else None
        return list(self.counter_entries) + self._pool_entry(reverse)

    @property
    def is_empty(self) -> bool:
        return not self.entries and not self.counter_entries and self.pool is None
