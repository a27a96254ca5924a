"""
Ledger Adapter — сырые ответы леджера → LiquiditySnapshot

Принимает уже полученные (внешним слоем) ответы book_offers и amm_info,
валидирует их JSON Schema контрактами и строит immutable снапшот.

Правила:
- taker_gets_funded / taker_pays_funded имеют приоритет над TakerGets /
  TakerPays: offer может быть обеспечена лишь частично
- native суммы строкой — drops, конвертируются в XRP
- в amm_info native резерв объектом {"currency": "XRP", "value": ...}
  тоже задан в drops
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional

import jsonschema

from liquidity_engine.core.contracts import validate_amm_pool, validate_book_offer
from liquidity_engine.core.domain.amounts import (
    NATIVE_CURRENCY,
    IssuedAmount,
    NativeAmount,
    drops_to_native,
    parse_ledger_amount,
)
from liquidity_engine.core.domain.snapshot import (
    LiquiditySnapshot,
    OrderBookEntry,
    PoolSnapshot,
)
from liquidity_engine.core.errors import InvalidInput

logger = logging.getLogger(__name__)


def _check_contract(
    validate: Callable[[Dict[str, Any]], None],
    payload: Dict[str, Any],
    what: str,
) -> None:
    if not isinstance(payload, dict):
        raise InvalidInput(f"{what} must be an object, got {type(payload).__name__}")
    try:
        validate(payload)
    except jsonschema.ValidationError as exc:
        raise InvalidInput(f"{what} violates contract: {exc.message}") from exc


def entry_from_offer(offer: Dict[str, Any]) -> OrderBookEntry:
    """
    OrderBookEntry из offer ответа book_offers.

    Raises:
        InvalidInput: offer не соответствует контракту book_offer
        InvalidAmount: сумма не парсится
    """
    _check_contract(validate_book_offer, offer, "book offer")

    gets_raw = offer.get("taker_gets_funded", offer["TakerGets"])
    pays_raw = offer.get("taker_pays_funded", offer["TakerPays"])

    return OrderBookEntry(
        taker_gets=parse_ledger_amount(gets_raw),
        taker_pays=parse_ledger_amount(pays_raw),
        owner=offer.get("Account", ""),
        sequence=offer.get("Sequence"),
    )


def _pool_amount(raw: object) -> NativeAmount | IssuedAmount:
    if (
        isinstance(raw, dict)
        and raw.get("currency") == NATIVE_CURRENCY
        and not raw.get("issuer")
    ):
        return drops_to_native(raw["value"])
    return parse_ledger_amount(raw)


def pool_from_amm(amm: Dict[str, Any]) -> PoolSnapshot:
    """
    PoolSnapshot из объекта amm ответа amm_info.

    Raises:
        InvalidInput: amm не соответствует контракту amm_pool
        InvalidAmount: резерв не парсится
    """
    _check_contract(validate_amm_pool, amm, "amm pool")

    return PoolSnapshot(
        asset1=_pool_amount(amm["amount"]),
        asset2=_pool_amount(amm["amount2"]),
        trading_fee_bps=amm["trading_fee"],
    )


def snapshot_from_ledger(
    offers: Iterable[Dict[str, Any]],
    counter_offers: Iterable[Dict[str, Any]] = (),
    amm: Optional[Dict[str, Any]] = None,
) -> LiquiditySnapshot:
    """
    Снапшот из ответов леджера.

    Args:
        offers: Offers primary book (в направлении сделки)
        counter_offers: Offers complementary book
        amm: Объект amm из amm_info (None, если пула нет)

    Returns:
        LiquiditySnapshot

    Raises:
        InvalidInput: payload не соответствует контракту
        InvalidAmount: сумма не парсится
    """
    entries = tuple(entry_from_offer(offer) for offer in offers)
    counter_entries = tuple(entry_from_offer(offer) for offer in counter_offers)
    pool = pool_from_amm(amm) if amm is not None else None

    logger.debug(
        "snapshot built: entries=%d counter=%d pool=%s",
        len(entries),
        len(counter_entries),
        pool is not None,
    )
    return LiquiditySnapshot(entries=entries, counter_entries=counter_entries, pool=pool)
