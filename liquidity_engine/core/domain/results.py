"""
Результаты вычислений engine.

Immutable Pydantic модели, которые возвращаются вызывающему слою (UI или
любой другой потребитель). Все значения — Decimal.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from liquidity_engine.core.math.numerical_safeguards import ZERO


# =============================================================================
# EXECUTION
# =============================================================================


class Fill(BaseModel):
    """Исполненная часть одной offer."""

    owner: str = Field(..., description="Владелец offer или AMM_POOL")
    is_amm: bool = Field(..., description="Offer пула")
    amount_in: Decimal = Field(..., ge=0, description="Потрачено")
    amount_out: Decimal = Field(..., ge=0, description="Получено (после fee)")
    rate: Decimal = Field(..., ge=0, description="Rate offer (gets/pays, до fee)")
    fee_paid: Decimal = Field(ZERO, ge=0, description="Удержанная fee (в активе выхода)")

    model_config = {"frozen": True}


class ExecutionResult(BaseModel):
    """
    Результат симуляции исполнения.

    realized_amount_in/out отражают только реально сматченный объём,
    никогда не запрошенную сумму.
    """

    realized_amount_in: Decimal = Field(..., ge=0)
    realized_amount_out: Decimal = Field(..., ge=0)
    average_rate: Decimal = Field(..., ge=0, description="out / in, 0 если in == 0")
    insufficient_liquidity: bool

    requested_amount_in: Decimal = Field(ZERO, ge=0)
    total_fees_paid: Decimal = Field(ZERO, ge=0)
    fills: tuple[Fill, ...] = ()

    model_config = {"frozen": True}

    @property
    def unfilled_amount(self) -> Decimal:
        return max(self.requested_amount_in - self.realized_amount_in, ZERO)


# =============================================================================
# STATISTICS
# =============================================================================


class InverseRates(BaseModel):
    """Статистика в обратном rate space (pays / gets)."""

    vwap: Decimal = ZERO
    simple_average: Decimal = ZERO
    best_rate: Decimal = ZERO
    worst_rate: Decimal = ZERO

    model_config = {"frozen": True}


class MarketStatistics(BaseModel):
    """
    Сводная статистика рынка.

    Вырожденные случаи (пустая книга, нулевые объёмы) дают нули, а не ошибку.
    """

    vwap: Decimal = ZERO
    simple_average: Decimal = ZERO
    best_rate: Decimal = ZERO
    worst_rate: Decimal = ZERO
    depth_at_slippage: Decimal = ZERO
    depth_at_slippage_pays: Decimal = ZERO
    volatility: Decimal = ZERO
    volatility_percent: Decimal = ZERO
    bid_ask_spread: Decimal = ZERO
    spread_percent: Decimal = ZERO
    liquidity_ratio: Decimal = ZERO

    entry_count: int = Field(0, ge=0, description="Offers в статистике (после фильтра)")
    inverse: InverseRates = Field(default_factory=InverseRates)

    model_config = {"frozen": True}
