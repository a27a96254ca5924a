"""
Тесты модели LiquiditySnapshot (OrderBookEntry, PoolSnapshot)
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from liquidity_engine.core.domain import (
    AMM_POOL_OWNER,
    LiquiditySnapshot,
    OrderBookEntry,
    PoolSnapshot,
    TradeDirection,
    issued,
    native,
    tradable_entries,
)
from liquidity_engine.core.errors import InvalidInput

ISSUER = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"


def make_entry(gets: str, pays: str, owner: str = "rOwner") -> OrderBookEntry:
    """Offer: taker получает USD, платит XRP."""
    return OrderBookEntry(
        taker_gets=issued("USD", ISSUER, gets),
        taker_pays=native(pays),
        owner=owner,
    )


@pytest.fixture
def pool() -> PoolSnapshot:
    return PoolSnapshot(
        asset1=native("1000"),
        asset2=issued("USD", ISSUER, "5000"),
        trading_fee_bps=1000,
    )


class TestOrderBookEntry:
    """Тесты для OrderBookEntry"""

    def test_rates(self) -> None:
        """quality = pays/gets, forward_rate = gets/pays"""
        entry = make_entry("100", "10")
        assert entry.quality == Decimal("0.1")
        assert entry.forward_rate == Decimal(10)
        assert entry.inverse_rate == entry.quality

    def test_zero_side_not_tradable(self) -> None:
        """Offer с нулевой стороной исключается, rates деградируют в 0"""
        entry = make_entry("0", "10")
        assert not entry.is_tradable
        assert entry.quality == Decimal(0)
        assert make_entry("5", "0").forward_rate == Decimal(0)

    def test_tradable_filter_keeps_order(self) -> None:
        """Фильтр сохраняет порядок входа"""
        a, b, c = make_entry("1", "1", "a"), make_entry("0", "1", "b"), make_entry("2", "1", "c")
        assert [e.owner for e in tradable_entries([a, b, c])] == ["a", "c"]

    def test_sequence_optional(self) -> None:
        """sequence nullable, но не отрицательный"""
        assert make_entry("1", "1").sequence is None
        with pytest.raises(ValidationError):
            OrderBookEntry(
                taker_gets=native("1"), taker_pays=native("1"), sequence=-1
            )

    def test_frozen(self) -> None:
        """Entry immutable"""
        entry = make_entry("1", "1")
        with pytest.raises(ValidationError):
            entry.owner = "other"


class TestPoolSnapshot:
    """Тесты для PoolSnapshot"""

    def test_fee_rate_ppm(self, pool: PoolSnapshot) -> None:
        """1000 ppm = 0.1%"""
        assert pool.fee_rate() == Decimal("0.001")

    def test_fee_rate_checks_scale(self, pool: PoolSnapshot) -> None:
        """fee_scale <= 0 или меньше trading_fee_bps → InvalidInput"""
        assert pool.fee_rate(10_000) == Decimal("0.1")
        for fee_scale in (0, 999):
            with pytest.raises(InvalidInput, match="fee_scale"):
                pool.fee_rate(fee_scale)

    def test_fee_bounds(self) -> None:
        """trading_fee_bps в [0, 1_000_000]"""
        for fee in (-1, 1_000_001):
            with pytest.raises(ValidationError):
                PoolSnapshot(asset1=native("1"), asset2=native("1"), trading_fee_bps=fee)

    def test_as_entry_orientation(self, pool: PoolSnapshot) -> None:
        """Направление определяет, какой резерв taker платит"""
        forward = pool.as_entry(TradeDirection.ASSET1_TO_ASSET2)
        assert forward.taker_pays == pool.asset1
        assert forward.taker_gets == pool.asset2
        assert forward.is_amm
        assert forward.owner == AMM_POOL_OWNER
        assert forward.forward_rate == Decimal(5)

        backward = pool.as_entry(TradeDirection.ASSET2_TO_ASSET1)
        assert backward.taker_pays == pool.asset2
        assert backward.forward_rate == Decimal("0.2")

    def test_direction_for(self, pool: PoolSnapshot) -> None:
        """Направление из тратимого актива"""
        assert pool.direction_for(native("1")) is TradeDirection.ASSET1_TO_ASSET2
        assert pool.direction_for(issued("USD", ISSUER, "1")) is TradeDirection.ASSET2_TO_ASSET1

        with pytest.raises(InvalidInput):
            pool.direction_for(issued("EUR", ISSUER, "1"))

    def test_direction_reversed(self) -> None:
        assert TradeDirection.ASSET1_TO_ASSET2.reversed() is TradeDirection.ASSET2_TO_ASSET1
        assert TradeDirection.ASSET2_TO_ASSET1.reversed() is TradeDirection.ASSET1_TO_ASSET2


class TestLiquiditySnapshot:
    """Тесты для LiquiditySnapshot"""

    def test_working_entries_append_pool(self, pool: PoolSnapshot) -> None:
        """Primary book + offer пула в конце"""
        snapshot = LiquiditySnapshot(entries=(make_entry("100", "10"),), pool=pool)
        working = snapshot.working_entries(TradeDirection.ASSET1_TO_ASSET2)
        assert len(working) == 2
        assert working[-1].is_amm
        assert working[-1].taker_pays == pool.asset1

    def test_counter_entries_use_reversed_pool(self, pool: PoolSnapshot) -> None:
        """В complementary book пул ориентирован обратно"""
        snapshot = LiquiditySnapshot(pool=pool)
        counter = snapshot.counter_working_entries(TradeDirection.ASSET1_TO_ASSET2)
        assert counter[0].taker_pays == pool.asset2
        assert counter[0].taker_gets == pool.asset1

    def test_pool_requires_direction(self, pool: PoolSnapshot) -> None:
        """Пул без direction → InvalidInput"""
        snapshot = LiquiditySnapshot(pool=pool)
        with pytest.raises(InvalidInput, match="direction"):
            snapshot.working_entries()

    def test_without_pool_direction_optional(self) -> None:
        """Без пула direction не нужен"""
        snapshot = LiquiditySnapshot(entries=[make_entry("1", "1")])
        assert len(snapshot.working_entries()) == 1
        assert isinstance(snapshot.entries, tuple)

    def test_amm_entries_rejected_in_books(self, pool: PoolSnapshot) -> None:
        """Offer с is_amm в книгах запрещена: fee пула только у синтетической offer"""
        pool_entry = pool.as_entry(TradeDirection.ASSET1_TO_ASSET2)
        with pytest.raises(ValidationError, match="AMM"):
            LiquiditySnapshot(entries=(pool_entry,))
        with pytest.raises(ValidationError, match="AMM"):
            LiquiditySnapshot(counter_entries=(pool_entry,), pool=pool)

    def test_is_empty(self, pool: PoolSnapshot) -> None:
        assert LiquiditySnapshot().is_empty
        assert not LiquiditySnapshot(pool=pool).is_empty
