"""
Rate & Statistics Engine

Вычисляет сводную статистику рынка по снапшоту ликвидности:
- forward rate каждой offer = taker_gets / taker_pays (quote за единицу base)
- VWAP = Σgets / Σpays (взвешен по объёму, не по числу offers)
- simple average = среднее forward rates (взвешено по числу offers)
- best/worst rate = max/min forward rate
- depth at slippage p: объём offers с quality <= best_quality * (1 + p)
- volatility = population stdev forward rates
- bid-ask spread = |best_buy - 1/best_sell|
- liquidity ratio = Σgets primary book / Σgets counter book

VWAP и simple average отвечают на разные вопросы ("цена всего объёма сейчас"
vs "типичная цена"), поэтому возвращаются оба.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Offers с нулевой стороной исключаются до расчётов
2. Деление на ноль даёт 0, не ошибку
3. worst_rate <= simple_average <= best_rate
4. Trading fee пула в статистике не применяется (только при исполнении)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Optional, Sequence

from liquidity_engine.core.domain.results import InverseRates, MarketStatistics
from liquidity_engine.core.domain.snapshot import (
    LiquiditySnapshot,
    OrderBookEntry,
    TradeDirection,
    tradable_entries,
)
from liquidity_engine.core.errors import InvalidInput
from liquidity_engine.core.math.numerical_safeguards import (
    DEFAULT_DECIMAL_PRECISION,
    ONE,
    ZERO,
    clamp,
    decimal_context,
    mean,
    percent_of,
    population_stdev,
    safe_divide,
    to_decimal,
)

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Допустимое отклонение от лучшей quality для depth (5%)
DEFAULT_DEPTH_SLIPPAGE: Final[Decimal] = Decimal("0.05")

TWO: Final[Decimal] = Decimal(2)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class SpreadMetrics:
    """Bid-ask spread между primary и complementary book."""

    spread: Decimal
    spread_percent: Decimal
    best_buy_rate: Decimal  # лучший forward rate primary book
    best_sell_rate: Decimal  # лучший forward rate counter book (не инвертирован)


@dataclass(frozen=True)
class LiquidityRatioMetrics:
    """Дисбаланс глубины по сторонам пары."""

    primary_volume: Decimal  # Σ taker_gets primary book
    counter_volume: Decimal  # Σ taker_gets counter book
    ratio: Decimal


@dataclass(frozen=True)
class DepthMetrics:
    """Объём в пределах slippage от лучшей quality."""

    gets: Decimal
    pays: Decimal
    max_quality: Decimal


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


def forward_rates(entries: Sequence[OrderBookEntry]) -> list[Decimal]:
    """Forward rates offers (ожидаются уже отфильтрованные offers)."""
    return [entry.gets_value / entry.pays_value for entry in entries]


def inverse_rates(entries: Sequence[OrderBookEntry]) -> list[Decimal]:
    return [entry.pays_value / entry.gets_value for entry in entries]


def compute_vwap(entries: Sequence[OrderBookEntry]) -> Decimal:
    """
    VWAP = Σgets / Σpays.

    Returns:
        VWAP или 0, если Σpays == 0
    """
    total_gets = sum((entry.gets_value for entry in entries), ZERO)
    total_pays = sum((entry.pays_value for entry in entries), ZERO)
    return safe_divide(total_gets, total_pays)


def compute_depth_at_slippage(
    entries: Sequence[OrderBookEntry],
    slippage_fraction: Decimal = DEFAULT_DEPTH_SLIPPAGE,
) -> DepthMetrics:
    """
    Объём offers, чья quality не хуже best_quality * (1 + slippage).

    best_quality — минимальная quality (pays/gets), т.к. меньшая quality
    выгоднее для taker.

    Args:
        entries: Отфильтрованные offers
        slippage_fraction: Допустимое отклонение (0.05 = 5%)

    Raises:
        InvalidInput: Если slippage_fraction < 0
    """
    slippage = to_decimal(slippage_fraction, "slippage_fraction")
    if slippage < 0:
        raise InvalidInput(f"slippage_fraction must be non-negative, got {slippage}")

    if not entries:
        return DepthMetrics(gets=ZERO, pays=ZERO, max_quality=ZERO)

    best_quality = min(entry.quality for entry in entries)
    max_quality = best_quality * (ONE + slippage)

    depth_gets = ZERO
    depth_pays = ZERO
    for entry in entries:
        if entry.quality <= max_quality:
            depth_gets += entry.gets_value
            depth_pays += entry.pays_value

    return DepthMetrics(gets=depth_gets, pays=depth_pays, max_quality=max_quality)


def compute_bid_ask_spread(
    buy_entries: Sequence[OrderBookEntry],
    sell_entries: Sequence[OrderBookEntry],
) -> SpreadMetrics:
    """
    Bid-ask spread между двумя complementary books.

    spread = |best_buy - 1/best_sell|
    spread_percent = 100 * spread / midpoint, midpoint = (best_buy + 1/best_sell) / 2

    Args:
        buy_entries: Primary book (отфильтрованный)
        sell_entries: Complementary book (отфильтрованный)

    Returns:
        SpreadMetrics (нули, если одна из сторон пуста)
    """
    best_buy = max(forward_rates(buy_entries), default=ZERO)
    best_sell = max(forward_rates(sell_entries), default=ZERO)

    if best_buy <= 0 or best_sell <= 0:
        return SpreadMetrics(
            spread=ZERO,
            spread_percent=ZERO,
            best_buy_rate=best_buy,
            best_sell_rate=best_sell,
        )

    best_sell_inverse = ONE / best_sell
    spread = abs(best_buy - best_sell_inverse)
    midpoint = (best_buy + best_sell_inverse) / TWO

    return SpreadMetrics(
        spread=spread,
        spread_percent=percent_of(spread, midpoint),
        best_buy_rate=best_buy,
        best_sell_rate=best_sell,
    )


def compute_liquidity_ratio(
    primary_entries: Sequence[OrderBookEntry],
    counter_entries: Sequence[OrderBookEntry],
) -> LiquidityRatioMetrics:
    """
    Отношение предложения primary book к complementary book.

    Каждая сторона измеряется тем, что она отдаёт taker (taker_gets),
    поэтому числитель и знаменатель в разных активах: ratio сравнивает
    предложение обеих книг в их собственных единицах.

    Returns:
        LiquidityRatioMetrics (ratio = 0, если counter_volume == 0)
    """
    primary_volume = sum((entry.gets_value for entry in primary_entries), ZERO)
    counter_volume = sum((entry.gets_value for entry in counter_entries), ZERO)

    return LiquidityRatioMetrics(
        primary_volume=primary_volume,
        counter_volume=counter_volume,
        ratio=safe_divide(primary_volume, counter_volume),
    )


def compute_inverse_rates(entries: Sequence[OrderBookEntry]) -> InverseRates:
    """Статистика в обратном rate space (pays/gets)."""
    rates = inverse_rates(entries)
    total_gets = sum((entry.gets_value for entry in entries), ZERO)
    total_pays = sum((entry.pays_value for entry in entries), ZERO)

    return InverseRates(
        vwap=safe_divide(total_pays, total_gets),
        simple_average=mean(rates),
        best_rate=max(rates, default=ZERO),
        worst_rate=min(rates, default=ZERO),
    )


# =============================================================================
# СВОДНАЯ СТАТИСТИКА
# =============================================================================


def compute_market_statistics(
    snapshot: LiquiditySnapshot,
    direction: Optional[TradeDirection] = None,
    slippage_fraction: Decimal = DEFAULT_DEPTH_SLIPPAGE,
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> MarketStatistics:
    """
    Сводная статистика рынка по снапшоту.

    Порядок:
    1. Working list: primary book + offer пула (ориентирована по direction, без fee)
    2. Фильтр offers с нулевой стороной
    3. Rates, VWAP, simple average, best/worst
    4. Depth at slippage
    5. Volatility
    6. Spread и liquidity ratio по complementary book

    Args:
        snapshot: Снапшот ликвидности
        direction: Направление сделки (обязательно, если есть пул)
        slippage_fraction: Допустимое отклонение для depth
        precision: Точность decimal-контекста

    Returns:
        MarketStatistics (все нули для пустой книги)

    Raises:
        InvalidInput: Пул без direction или отрицательный slippage_fraction
    """
    with decimal_context(precision):
        primary = tradable_entries(snapshot.working_entries(direction))
        counter = tradable_entries(snapshot.counter_working_entries(direction))

        depth = compute_depth_at_slippage(primary, slippage_fraction)
        spread = compute_bid_ask_spread(primary, counter)
        liquidity = compute_liquidity_ratio(primary, counter)

        rates = forward_rates(primary)
        best_rate = max(rates, default=ZERO)
        worst_rate = min(rates, default=ZERO)
        # округление суммы не должно выводить среднее за [worst, best]
        simple_average = clamp(mean(rates), worst_rate, best_rate)
        volatility = population_stdev(rates)

        statistics = MarketStatistics(
            vwap=compute_vwap(primary),
            simple_average=simple_average,
            best_rate=best_rate,
            worst_rate=worst_rate,
            depth_at_slippage=depth.gets,
            depth_at_slippage_pays=depth.pays,
            volatility=volatility,
            volatility_percent=percent_of(volatility, simple_average),
            bid_ask_spread=spread.spread,
            spread_percent=spread.spread_percent,
            liquidity_ratio=liquidity.ratio,
            entry_count=len(primary),
            inverse=compute_inverse_rates(primary),
        )

    logger.debug(
        "market statistics: entries=%d counter=%d vwap=%s spread=%s",
        len(primary),
        len(counter),
        statistics.vwap,
        statistics.bid_ask_spread,
    )
    return statistics
