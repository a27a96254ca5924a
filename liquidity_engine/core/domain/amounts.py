"""
CurrencyAmount — Amount Normalizer

Tagged union для сумм в native (XRP) и issued (токен с issuer) валютах.
Единственный допустимый способ привести сумму к Decimal для расчётов.

ЗАПРЕЩЕНО различать native/issued по наличию полей (duck typing):
все функции диспетчеризуют по типу варианта.

Native суммы внутри engine всегда в major units (XRP, не drops).
Конверсия drops → XRP выполняется здесь, до построения снапшота.
"""

from decimal import Decimal
from typing import Annotated, Final, Literal, Union

from pydantic import BaseModel, Field, ValidationError

from liquidity_engine.core.errors import InvalidAmount
from liquidity_engine.core.math.numerical_safeguards import to_non_negative_decimal

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Код native валюты леджера
NATIVE_CURRENCY: Final[str] = "XRP"

# 1 XRP = 1_000_000 drops
DROPS_PER_NATIVE_UNIT: Final[int] = 1_000_000
NATIVE_DECIMALS: Final[int] = 6


# =============================================================================
# МОДЕЛИ
# =============================================================================


class NativeAmount(BaseModel):
    """Сумма в native валюте (major units)."""

    kind: Literal["native"] = "native"
    value: Decimal = Field(..., ge=0, description="Сумма в XRP (major units)")

    model_config = {"frozen": True}

    @property
    def currency(self) -> str:
        return NATIVE_CURRENCY


class IssuedAmount(BaseModel):
    """Сумма в issued валюте (currency code + issuer)."""

    kind: Literal["issued"] = "issued"
    currency: str = Field(..., min_length=1, description="Код валюты (≤3 символа или 40 hex)")
    issuer: str = Field(..., min_length=1, description="Адрес issuer")
    value: Decimal = Field(..., ge=0, description="Сумма токена")

    model_config = {"frozen": True}


CurrencyAmount = Annotated[
    Union[NativeAmount, IssuedAmount],
    Field(discriminator="kind"),
]


# =============================================================================
# ФАБРИКИ
# =============================================================================


def native(value: object) -> NativeAmount:
    """
    Создание NativeAmount из значения в XRP.

    Raises:
        InvalidAmount: Если значение не конечный неотрицательный Decimal
    """
    return NativeAmount(value=to_non_negative_decimal(value, "native value"))


def issued(currency: str, issuer: str, value: object) -> IssuedAmount:
    """
    Создание IssuedAmount.

    Raises:
        InvalidAmount: Если значение некорректно или пустые currency/issuer
    """
    amount = to_non_negative_decimal(value, "issued value")
    try:
        return IssuedAmount(currency=currency, issuer=issuer, value=amount)
    except ValidationError as exc:
        raise InvalidAmount(f"Invalid issued amount: {exc}") from exc


def drops_to_native(drops: object) -> NativeAmount:
    """
    Конверсия drops → NativeAmount (major units).

    Args:
        drops: Целое количество drops (str или int)

    Returns:
        NativeAmount

    Raises:
        InvalidAmount: Если drops не целое неотрицательное

    Examples:
        >>> drops_to_native("2500000").value
        Decimal('2.500000')
    """
    value = to_non_negative_decimal(drops, "drops")
    if value != value.to_integral_value():
        raise InvalidAmount(f"drops must be integral, got {drops}")
    # scaleb точен при любой точности контекста
    return NativeAmount(value=value.scaleb(-NATIVE_DECIMALS))


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def normalize(amount: NativeAmount | IssuedAmount) -> Decimal:
    """
    Приведение суммы к Decimal в major units.

    Native: value уже в XRP. Issued: value без изменений.

    Args:
        amount: NativeAmount или IssuedAmount

    Returns:
        Decimal значение суммы

    Raises:
        InvalidAmount: Если значение не конечный неотрицательный Decimal
            или тип суммы неизвестен
    """
    if isinstance(amount, NativeAmount):
        return to_non_negative_decimal(amount.value, "native value")
    if isinstance(amount, IssuedAmount):
        return to_non_negative_decimal(amount.value, "issued value")
    raise InvalidAmount(f"Unsupported amount type: {type(amount).__name__}")


def asset_key(amount: NativeAmount | IssuedAmount) -> tuple[str, str]:
    """
    Идентификатор актива (currency, issuer) без учёта суммы.

    Для native issuer пустой.
    """
    if isinstance(amount, NativeAmount):
        return (NATIVE_CURRENCY, "")
    if isinstance(amount, IssuedAmount):
        return (amount.currency, amount.issuer)
    raise InvalidAmount(f"Unsupported amount type: {type(amount).__name__}")


def is_native(amount: NativeAmount | IssuedAmount) -> bool:
    return isinstance(amount, NativeAmount)


# =============================================================================
# LEDGER JSON
# =============================================================================


def parse_ledger_amount(raw: object) -> NativeAmount | IssuedAmount:
    """
    Парсинг суммы в формате леджера.

    Форматы:
        "1000000"                                   → native, drops
        "1.5"                                       → native, уже в XRP
        {"currency": "XRP", "value": "1.5"}         → native, XRP
        {"currency": "USD", "issuer": "r...", "value": "10"} → issued

    Строка с десятичной точкой трактуется как сумма в XRP: так леджер
    отдаёт funded-суммы некоторых offers.

    Raises:
        InvalidAmount: Если формат не распознан
    """
    if isinstance(raw, str):
        if "." in raw:
            return native(raw)
        return drops_to_native(raw)

    if isinstance(raw, int) and not isinstance(raw, bool):
        return drops_to_native(raw)

    if isinstance(raw, dict):
        currency = raw.get("currency")
        value = raw.get("value")
        if value is None:
            raise InvalidAmount(f"Amount object has no value: {raw}")
        if currency == NATIVE_CURRENCY and not raw.get("issuer"):
            return native(value)
        if not currency or not raw.get("issuer"):
            raise InvalidAmount(f"Issued amount requires currency and issuer: {raw}")
        return issued(currency, raw["issuer"], value)

    raise InvalidAmount(f"Unsupported ledger amount: {raw!r}")
