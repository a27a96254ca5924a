"""
LiquidityEngine — фасад над pricing функциями

Один stateless объект на процесс (или на конфигурацию). Между вызовами
engine не хранит состояния: каждый вызов получает immutable снапшот
и возвращает immutable результат, поэтому engine можно вызывать из
нескольких потоков без блокировок.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from liquidity_engine.core.domain.currency_code import decode_currency, encode_currency
from liquidity_engine.core.domain.results import ExecutionResult, MarketStatistics
from liquidity_engine.core.domain.snapshot import (
    FEE_SCALE,
    LiquiditySnapshot,
    TradeDirection,
)
from liquidity_engine.core.math.numerical_safeguards import DEFAULT_DECIMAL_PRECISION
from liquidity_engine.pricing.effective_rate import (
    DEFAULT_OWNER_RESERVE,
    TradeSide,
    adjust_effective_rate,
)
from liquidity_engine.pricing.execution import simulate_execution
from liquidity_engine.pricing.rate_statistics import (
    DEFAULT_DEPTH_SLIPPAGE,
    compute_market_statistics,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация LiquidityEngine."""

    # Значащие цифры decimal-контекста
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION

    # Depth at slippage: допустимое отклонение от лучшей quality (0.05 = 5%)
    depth_slippage_fraction: Decimal = DEFAULT_DEPTH_SLIPPAGE

    # Шкала trading fee пула (parts per million)
    fee_scale: int = FEE_SCALE

    # Owner reserve на offer (XRP), если вызывающий не передал свой
    default_owner_reserve: Decimal = DEFAULT_OWNER_RESERVE


class LiquidityEngine:
    """
    Статистика рынка, симуляция исполнения и эффективный rate.

    Все методы — чистые функции над аргументами и self.config.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def compute_statistics(
        self,
        snapshot: LiquiditySnapshot,
        direction: Optional[TradeDirection] = None,
    ) -> MarketStatistics:
        """
        Сводная статистика рынка.

        Args:
            snapshot: Снапшот ликвидности
            direction: Направление сделки (обязательно, если в снапшоте есть пул)

        Returns:
            MarketStatistics

        Raises:
            InvalidInput: Пул без direction
        """
        return compute_market_statistics(
            snapshot,
            direction=direction,
            slippage_fraction=self.config.depth_slippage_fraction,
            precision=self.config.decimal_precision,
        )

    def simulate_execution(
        self,
        snapshot: LiquiditySnapshot,
        spend_amount: object,
        direction: Optional[TradeDirection] = None,
        fee_adjusted: bool = True,
    ) -> ExecutionResult:
        """
        Симуляция траты spend_amount против снапшота.

        Raises:
            InvalidInput: spend_amount <= 0 или пул без direction
        """
        return simulate_execution(
            snapshot,
            spend_amount,
            direction=direction,
            fee_adjusted=fee_adjusted,
            fee_scale=self.config.fee_scale,
            precision=self.config.decimal_precision,
        )

    def adjust_effective_rate(
        self,
        proposed_rate: object,
        owner_reserve: object = None,
        side: TradeSide = TradeSide.BUY,
    ) -> Decimal:
        """
        Эффективный rate предлагаемой offer.

        owner_reserve=None → config.default_owner_reserve.

        Raises:
            InvalidInput: proposed_rate <= 0 или неизвестная side
            InvalidAmount: owner_reserve некорректен
        """
        if owner_reserve is None:
            owner_reserve = self.config.default_owner_reserve

        effective = adjust_effective_rate(
            proposed_rate,
            owner_reserve,
            side,
            precision=self.config.decimal_precision,
        )
        logger.debug(
            "effective rate: proposed=%s reserve=%s side=%s effective=%s",
            proposed_rate,
            owner_reserve,
            side,
            effective,
        )
        return effective

    def encode_currency(self, code: str) -> str:
        return encode_currency(code)

    def decode_currency(self, code: str) -> str:
        return decode_currency(code)
