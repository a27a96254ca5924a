"""
Execution Simulator — Greedy Best-Rate-First Matching

Симуляция исполнения гипотетической сделки против снапшота ликвидности:

1. Working list = primary book + синтетическая offer пула
2. Стабильная сортировка по quality (pays/gets) по возрастанию —
   лучшая цена первой, при равенстве сохраняется порядок входа
3. Для каждой offer: use = min(remaining, taker_pays)
   received = use * (gets / pays) * (1 - fee_rate)
   fee_rate = trading_fee_bps / 1_000_000 для offer пула, 0 для остальных
4. Остановка при remaining <= 0 или когда offers закончились

ФОРМУЛЫ:
    average_rate = realized_out / realized_in   (0 если realized_in == 0)
    fee_slice    = use * (gets / pays) * fee_rate

Если offers закончились раньше, чем потрачена вся сумма —
insufficient_liquidity = True, а realized_* отражают только сматченный объём.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from liquidity_engine.core.errors import InvalidInput
from liquidity_engine.core.domain.results import ExecutionResult, Fill
from liquidity_engine.core.domain.snapshot import (
    FEE_SCALE,
    LiquiditySnapshot,
    OrderBookEntry,
    TradeDirection,
    tradable_entries,
)
from liquidity_engine.core.math.numerical_safeguards import (
    DEFAULT_DECIMAL_PRECISION,
    ONE,
    ZERO,
    decimal_context,
    safe_divide,
    validate_positive,
)

logger = logging.getLogger(__name__)


# =============================================================================
# СОРТИРОВКА
# =============================================================================


def sort_by_quality(entries: Sequence[OrderBookEntry]) -> list[OrderBookEntry]:
    """
    Сортировка offers от лучшей цены к худшей.

    sorted() стабилен: offers с одинаковой quality остаются в порядке входа,
    поэтому результат воспроизводим.
    """
    return sorted(entries, key=lambda entry: entry.quality)


# =============================================================================
# СИМУЛЯЦИЯ
# =============================================================================


def match_entries(
    entries: Sequence[OrderBookEntry],
    spend_amount: Decimal,
    pool_fee_rate: Decimal = ZERO,
) -> ExecutionResult:
    """
    Жадное исполнение по уже отсортированным offers.

    Args:
        entries: Отфильтрованные и отсортированные offers
        spend_amount: Сумма к трате (> 0)
        pool_fee_rate: Доля fee для offer пула (is_amm=True). LiquiditySnapshot
            не допускает is_amm в книгах, поэтому это только синтетическая offer

    Returns:
        ExecutionResult с per-offer fills
    """
    remaining = spend_amount
    realized_in = ZERO
    realized_out = ZERO
    total_fees = ZERO
    fills: list[Fill] = []

    for entry in entries:
        if remaining <= 0:
            break

        pays = entry.pays_value
        rate = entry.gets_value / pays
        fee_rate = pool_fee_rate if entry.is_amm else ZERO

        amount_to_use = min(remaining, pays)
        gross_out = amount_to_use * rate
        received = gross_out * (ONE - fee_rate)
        fee_paid = gross_out - received

        remaining -= amount_to_use
        realized_in += amount_to_use
        realized_out += received
        total_fees += fee_paid

        fills.append(
            Fill(
                owner=entry.owner,
                is_amm=entry.is_amm,
                amount_in=amount_to_use,
                amount_out=received,
                rate=rate,
                fee_paid=fee_paid,
            )
        )
        logger.debug(
            "fill: owner=%s used=%s received=%s rate=%s fee=%s",
            entry.owner,
            amount_to_use,
            received,
            rate,
            fee_paid,
        )

    return ExecutionResult(
        realized_amount_in=realized_in,
        realized_amount_out=realized_out,
        average_rate=safe_divide(realized_out, realized_in),
        insufficient_liquidity=remaining > 0,
        requested_amount_in=spend_amount,
        total_fees_paid=total_fees,
        fills=tuple(fills),
    )


def simulate_execution(
    snapshot: LiquiditySnapshot,
    spend_amount: object,
    direction: Optional[TradeDirection] = None,
    fee_adjusted: bool = True,
    fee_scale: int = FEE_SCALE,
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> ExecutionResult:
    """
    Симуляция траты spend_amount против снапшота.

    Args:
        snapshot: Снапшот ликвидности
        spend_amount: Сумма к трате в активе taker_pays (> 0)
        direction: Направление сделки (обязательно, если есть пул)
        fee_adjusted: Применять trading fee пула
        fee_scale: Шкала trading fee (parts per million)
        precision: Точность decimal-контекста

    Returns:
        ExecutionResult

    Raises:
        InvalidInput: spend_amount <= 0, spend_amount точнее decimal-контекста
            или пул без direction
    """
    spend = validate_positive(spend_amount, "spend_amount")

    with decimal_context(precision):
        # +spend округляет до точности контекста
        if +spend != spend:
            raise InvalidInput(
                f"spend_amount {spend} has more than {precision} significant digits"
            )

        working = tradable_entries(snapshot.working_entries(direction))
        ordered = sort_by_quality(working)

        pool_fee_rate = ZERO
        if fee_adjusted and snapshot.pool is not None:
            pool_fee_rate = snapshot.pool.fee_rate(fee_scale)

        result = match_entries(ordered, spend, pool_fee_rate)

    if result.insufficient_liquidity:
        logger.info(
            "insufficient liquidity: requested=%s matched=%s entries=%d",
            spend,
            result.realized_amount_in,
            len(ordered),
        )

    return result
