"""
Тесты LiquidityEngine и публичного API пакета
"""

from decimal import Decimal

import pytest

import liquidity_engine
from liquidity_engine import (
    EngineConfig,
    InvalidInput,
    LiquidityEngine,
    LiquiditySnapshot,
    OrderBookEntry,
    PoolSnapshot,
    TradeDirection,
    TradeSide,
    issued,
    native,
)

ISSUER = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"


def make_entry(gets: str, pays: str) -> OrderBookEntry:
    return OrderBookEntry(taker_gets=issued("USD", ISSUER, gets), taker_pays=native(pays))


@pytest.fixture
def snapshot() -> LiquiditySnapshot:
    return LiquiditySnapshot(entries=(make_entry("100", "10"), make_entry("180", "20")))


class TestEngineConfig:
    """Тесты конфигурации"""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.decimal_precision == 34
        assert config.depth_slippage_fraction == Decimal("0.05")
        assert config.fee_scale == 1_000_000
        assert config.default_owner_reserve == Decimal(2)

    def test_engine_default_config(self) -> None:
        assert LiquidityEngine().config == EngineConfig()


class TestLiquidityEngine:
    """Тесты методов LiquidityEngine"""

    def test_statistics_use_configured_slippage(self, snapshot) -> None:
        """depth_slippage_fraction из конфигурации"""
        narrow = LiquidityEngine().compute_statistics(snapshot)
        wide = LiquidityEngine(
            EngineConfig(depth_slippage_fraction=Decimal("0.2"))
        ).compute_statistics(snapshot)

        assert narrow.depth_at_slippage == Decimal(100)
        assert wide.depth_at_slippage == Decimal(280)

    def test_simulation_uses_configured_fee_scale(self) -> None:
        """fee_scale меняет интерпретацию trading_fee_bps"""
        pool = PoolSnapshot(
            asset1=native("1000"),
            asset2=issued("USD", ISSUER, "5000"),
            trading_fee_bps=1000,
        )
        snapshot = LiquiditySnapshot(pool=pool)
        direction = TradeDirection.ASSET1_TO_ASSET2

        default = LiquidityEngine().simulate_execution(snapshot, "10", direction)
        basis_points = LiquidityEngine(EngineConfig(fee_scale=10_000)).simulate_execution(
            snapshot, "10", direction
        )

        assert default.realized_amount_out == Decimal("49.95")
        # 1000 / 10_000 = 10%
        assert basis_points.realized_amount_out == Decimal(45)

    def test_pool_fee_above_fee_scale_rejected(self) -> None:
        """trading_fee_bps > fee_scale → InvalidInput, не отрицательный выход"""
        pool = PoolSnapshot(
            asset1=native("1000"),
            asset2=issued("USD", ISSUER, "5000"),
            trading_fee_bps=50_000,
        )
        snapshot = LiquiditySnapshot(pool=pool)
        engine = LiquidityEngine(EngineConfig(fee_scale=10_000))

        with pytest.raises(InvalidInput, match="fee_scale"):
            engine.simulate_execution(snapshot, "10", TradeDirection.ASSET1_TO_ASSET2)

    def test_non_positive_fee_scale_rejected(self) -> None:
        """fee_scale <= 0 → InvalidInput"""
        pool = PoolSnapshot(asset1=native("1"), asset2=native("1"), trading_fee_bps=0)
        snapshot = LiquiditySnapshot(pool=pool)

        for fee_scale in (0, -1):
            engine = LiquidityEngine(EngineConfig(fee_scale=fee_scale))
            with pytest.raises(InvalidInput, match="fee_scale"):
                engine.simulate_execution(snapshot, "1", TradeDirection.ASSET1_TO_ASSET2)

    def test_precision_applied(self, snapshot) -> None:
        """decimal_precision ограничивает значащие цифры"""
        result = LiquidityEngine(EngineConfig(decimal_precision=6)).simulate_execution(
            snapshot, "15"
        )
        assert result.average_rate == Decimal("9.66667")

    def test_default_owner_reserve(self) -> None:
        """owner_reserve=None → config.default_owner_reserve"""
        engine = LiquidityEngine()
        assert engine.adjust_effective_rate("10", side=TradeSide.BUY) == Decimal(12)

        custom = LiquidityEngine(EngineConfig(default_owner_reserve=Decimal(1)))
        assert custom.adjust_effective_rate("10", side=TradeSide.SELL) == Decimal(9)

    def test_currency_codec(self) -> None:
        engine = LiquidityEngine()
        assert engine.decode_currency(engine.encode_currency("SOLO")) == "SOLO"


class TestPublicAPI:
    """Тесты module-level функций"""

    def test_compute_statistics(self, snapshot) -> None:
        stats = liquidity_engine.compute_statistics(snapshot)
        assert stats.best_rate == Decimal(10)
        assert stats.worst_rate == Decimal(9)

    def test_simulate_execution(self, snapshot) -> None:
        result = liquidity_engine.simulate_execution(snapshot, "15")
        assert result.realized_amount_in == Decimal(15)
        assert result.realized_amount_out == Decimal(145)
        assert not result.insufficient_liquidity

    def test_adjust_effective_rate(self) -> None:
        assert liquidity_engine.adjust_effective_rate("10", "2", TradeSide.BUY) == Decimal(12)
        assert liquidity_engine.adjust_effective_rate("10", "2", TradeSide.SELL) == Decimal(8)

    def test_currency_codes(self) -> None:
        assert liquidity_engine.encode_currency("USD") == "USD"
        assert liquidity_engine.decode_currency(
            liquidity_engine.encode_currency("Hello")
        ) == "Hello"

    def test_errors_exported(self) -> None:
        with pytest.raises(InvalidInput):
            liquidity_engine.simulate_execution(LiquiditySnapshot(), "0")
