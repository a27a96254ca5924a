"""
Numerical Safeguards — Decimal Math Primitives

Модуль обеспечивает точную и устойчивую арифметику для всех денежных расчётов:
- Парсинг входов в Decimal (никаких float в расчётах)
- Безопасное деление: деление на ноль возвращает fallback (0)
- Изолированный decimal-контекст на каждый вызов (thread-local)
- Статистические примитивы: mean, population stdev

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. NaN/Inf никогда не попадают в расчёты (InvalidAmount на входе)
3. Сравнения точные, без epsilon
4. Все операции детерминированы и воспроизводимы
"""

from contextlib import contextmanager
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation, localcontext
from typing import Final, Iterable, Iterator

from liquidity_engine.core.errors import InvalidAmount, InvalidInput

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Точность decimal-контекста по умолчанию (значащие цифры, как decimal128)
DEFAULT_DECIMAL_PRECISION: Final[int] = 34

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)
HUNDRED: Final[Decimal] = Decimal(100)


# =============================================================================
# DECIMAL-КОНТЕКСТ
# =============================================================================


@contextmanager
def decimal_context(precision: int = DEFAULT_DECIMAL_PRECISION) -> Iterator[Context]:
    """
    Локальный decimal-контекст для одного вычисления.

    localcontext() thread-local, поэтому параллельные вызовы engine
    из разных потоков не влияют друг на друга.

    Args:
        precision: Количество значащих цифр

    Yields:
        Активный Context
    """
    if precision <= 0:
        raise ValueError(f"precision must be positive, got {precision}")

    with localcontext() as ctx:
        ctx.prec = precision
        ctx.rounding = ROUND_HALF_EVEN
        yield ctx


# =============================================================================
# ПАРСИНГ
# =============================================================================


def to_decimal(value: object, name: str = "value") -> Decimal:
    """
    Парсинг значения в конечный Decimal.

    float конвертируется через str(), чтобы не тащить двоичный шум
    (0.1 → Decimal("0.1"), а не 0.1000000000000000055...).

    Args:
        value: str, int, float или Decimal
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Decimal

    Raises:
        InvalidAmount: Если значение не парсится или NaN/Inf

    Examples:
        >>> to_decimal("12.50")
        Decimal('12.50')
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"{name} must be a decimal number, got bool")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = _parse(str(value), name)
    elif isinstance(value, str):
        result = _parse(value.strip(), name)
    else:
        raise InvalidAmount(
            f"{name} must be a decimal number, got {type(value).__name__}"
        )

    if not result.is_finite():
        raise InvalidAmount(f"{name} must be finite (not NaN/Inf), got {value}")

    return result


def _parse(text: str, name: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidAmount(f"{name} is not a valid decimal: {text!r}") from None


def to_non_negative_decimal(value: object, name: str = "value") -> Decimal:
    """
    Парсинг в конечный неотрицательный Decimal.

    Raises:
        InvalidAmount: Если значение не парсится, NaN/Inf или < 0
    """
    result = to_decimal(value, name)
    if result < 0:
        raise InvalidAmount(f"{name} must be non-negative, got {value}")
    return result


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: Decimal,
    denominator: Decimal,
    fallback: Decimal = ZERO,
) -> Decimal:
    """
    Деление с защитой от деления на ноль.

    Пустая книга — валидное состояние рынка, поэтому статистика деградирует
    в 0, а не падает.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при denominator == 0 (default: 0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(Decimal(10), Decimal(4))
        Decimal('2.5')
        >>> safe_divide(Decimal(10), Decimal(0))
        Decimal('0')
    """
    if denominator == 0:
        return fallback
    return numerator / denominator


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """100 * part / whole, 0 при whole == 0."""
    return safe_divide(HUNDRED * part, whole)


# =============================================================================
# СТАТИСТИКА
# =============================================================================


def mean(values: Iterable[Decimal]) -> Decimal:
    """Арифметическое среднее (0 для пустой последовательности)."""
    items = list(values)
    if not items:
        return ZERO
    return sum(items, ZERO) / Decimal(len(items))


def population_stdev(values: Iterable[Decimal]) -> Decimal:
    """
    Стандартное отклонение генеральной совокупности (делитель N, не N-1).

    Returns:
        sqrt(sum((x - mean)^2) / N), 0 для пустой последовательности
    """
    items = list(values)
    if not items:
        return ZERO

    avg = mean(items)
    variance = sum(((x - avg) ** 2 for x in items), ZERO) / Decimal(len(items))
    return variance.sqrt()


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(
    value: Decimal,
    min_value: Decimal | None = None,
    max_value: Decimal | None = None,
) -> Decimal:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(Decimal("-1"), ZERO)
        Decimal('0')
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: object, name: str) -> Decimal:
    """
    Валидация, что значение — положительный Decimal.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Распарсенный Decimal

    Raises:
        InvalidInput: Если value <= 0 или не парсится
    """
    try:
        result = to_decimal(value, name)
    except InvalidAmount as exc:
        raise InvalidInput(str(exc)) from exc

    if result <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")

    return result

