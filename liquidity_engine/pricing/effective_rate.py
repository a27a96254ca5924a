"""
EffectiveRate — Reserve-Adjusted Offer Rate

Каждая новая offer блокирует owner reserve на аккаунте. Модуль переносит
стоимость этого резерва в эффективный rate предлагаемой offer:

    reserve_cost_factor = owner_reserve / proposed_rate

    BUY:  effective = proposed_rate * (1 + factor)   (хуже для покупателя)
    SELL: effective = proposed_rate * (1 - factor)   (хуже для продавца)

owner_reserve — в major units (XRP). Резерв в drops сначала проходит через
amount normalizer (owner_reserve_from_drops).
"""

from decimal import Decimal
from enum import Enum
from typing import Final

from liquidity_engine.core.domain.amounts import (
    CurrencyAmount,
    drops_to_native,
    is_native,
    normalize,
)
from liquidity_engine.core.errors import InvalidInput
from liquidity_engine.core.math.numerical_safeguards import (
    DEFAULT_DECIMAL_PRECISION,
    ONE,
    ZERO,
    clamp,
    decimal_context,
    to_non_negative_decimal,
    validate_positive,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Owner reserve на одну offer по умолчанию (XRP)
DEFAULT_OWNER_RESERVE: Final[Decimal] = Decimal("2")


# =============================================================================
# ТИПЫ
# =============================================================================


class TradeSide(str, Enum):
    """Сторона предлагаемой offer"""

    BUY = "buy"
    SELL = "sell"


def offer_side(we_spend: CurrencyAmount) -> TradeSide:
    """BUY, если offer тратит native актив, иначе SELL."""
    return TradeSide.BUY if is_native(we_spend) else TradeSide.SELL


# =============================================================================
# ЭФФЕКТИВНЫЙ RATE
# =============================================================================


def owner_reserve_from_drops(drops: object) -> Decimal:
    """
    Конверсия owner reserve из drops в XRP.

    Examples:
        >>> owner_reserve_from_drops("2000000")
        Decimal('2.000000')
    """
    return normalize(drops_to_native(drops))


def reserve_cost_factor(proposed_rate: object, owner_reserve: object) -> Decimal:
    """
    Доля стоимости резерва, амортизированная на rate offer.

    Args:
        proposed_rate: Предлагаемый rate (> 0)
        owner_reserve: Owner reserve в XRP (>= 0)

    Returns:
        owner_reserve / proposed_rate

    Raises:
        InvalidInput: proposed_rate <= 0
        InvalidAmount: owner_reserve отрицательный или не парсится
    """
    rate = validate_positive(proposed_rate, "proposed_rate")
    reserve = to_non_negative_decimal(owner_reserve, "owner_reserve")
    return reserve / rate


def adjust_effective_rate(
    proposed_rate: object,
    owner_reserve: object,
    side: TradeSide,
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> Decimal:
    """
    Эффективный rate offer с учётом owner reserve.

    BUY:  proposed_rate * (1 + factor) >= proposed_rate
    SELL: proposed_rate * (1 - factor) <= proposed_rate, не ниже 0

    Args:
        proposed_rate: Предлагаемый rate (> 0)
        owner_reserve: Owner reserve в XRP (>= 0)
        side: Сторона offer (BUY/SELL)
        precision: Точность decimal-контекста

    Returns:
        Эффективный rate

    Raises:
        InvalidInput: proposed_rate <= 0 или неизвестная side
        InvalidAmount: owner_reserve отрицательный или не парсится
    """
    try:
        side = TradeSide(side)
    except ValueError:
        raise InvalidInput(f"side must be one of buy/sell, got {side!r}") from None

    with decimal_context(precision):
        rate = validate_positive(proposed_rate, "proposed_rate")
        factor = reserve_cost_factor(rate, owner_reserve)

        if side is TradeSide.BUY:
            return rate * (ONE + factor)

        # SELL: factor > 1 дал бы отрицательный rate
        return clamp(rate * (ONE - factor), min_value=ZERO)
