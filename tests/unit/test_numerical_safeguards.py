"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Парсинг в Decimal и отказ от NaN/Inf
2. Безопасное деление
3. Изолированный decimal-контекст
4. Статистические примитивы
5. Валидацию параметров
"""

from decimal import Decimal, getcontext

import pytest

from liquidity_engine.core.errors import InvalidAmount, InvalidInput, LiquidityEngineError
from liquidity_engine.core.math.numerical_safeguards import (
    DEFAULT_DECIMAL_PRECISION,
    ZERO,
    clamp,
    decimal_context,
    mean,
    percent_of,
    population_stdev,
    safe_divide,
    to_decimal,
    to_non_negative_decimal,
    validate_positive,
)

# =============================================================================
# ПАРСИНГ
# =============================================================================


class TestToDecimal:
    """Тесты для to_decimal"""

    def test_string_parsed_exactly(self) -> None:
        """Строка парсится без потери точности"""
        assert to_decimal("12.50") == Decimal("12.50")
        assert to_decimal(" 3 ") == Decimal(3)

    def test_float_parsed_via_str(self) -> None:
        """float не тащит двоичный шум"""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_and_decimal(self) -> None:
        """int и Decimal принимаются"""
        assert to_decimal(7) == Decimal(7)
        assert to_decimal(Decimal("1.25")) == Decimal("1.25")

    def test_nan_and_inf_rejected(self) -> None:
        """NaN/Inf отклоняются"""
        for value in ("NaN", "Infinity", float("nan"), float("inf"), Decimal("-Inf")):
            with pytest.raises(InvalidAmount):
                to_decimal(value)

    def test_garbage_rejected(self) -> None:
        """Непарсящиеся значения отклоняются"""
        with pytest.raises(InvalidAmount, match="price"):
            to_decimal("abc", "price")

        with pytest.raises(InvalidAmount):
            to_decimal(None)

    def test_bool_rejected(self) -> None:
        """bool не считается числом"""
        with pytest.raises(InvalidAmount):
            to_decimal(True)

    def test_errors_are_value_errors(self) -> None:
        """Ошибки engine совместимы с ValueError"""
        with pytest.raises(ValueError):
            to_decimal("abc")
        assert issubclass(InvalidAmount, LiquidityEngineError)


class TestToNonNegativeDecimal:
    """Тесты для to_non_negative_decimal"""

    def test_zero_allowed(self) -> None:
        """Ноль допустим"""
        assert to_non_negative_decimal("0") == ZERO

    def test_negative_rejected(self) -> None:
        """Отрицательные значения отклоняются"""
        with pytest.raises(InvalidAmount, match="non-negative"):
            to_non_negative_decimal("-0.01")


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


class TestSafeDivide:
    """Тесты для safe_divide и percent_of"""

    def test_regular_division(self) -> None:
        """Обычное деление"""
        assert safe_divide(Decimal(10), Decimal(4)) == Decimal("2.5")

    def test_zero_denominator_returns_fallback(self) -> None:
        """Деление на ноль возвращает fallback"""
        assert safe_divide(Decimal(10), ZERO) == ZERO
        assert safe_divide(Decimal(10), ZERO, fallback=Decimal(-1)) == Decimal(-1)

    def test_percent_of(self) -> None:
        """Процент от целого"""
        assert percent_of(Decimal(1), Decimal(4)) == Decimal(25)
        assert percent_of(Decimal(1), ZERO) == ZERO


# =============================================================================
# DECIMAL-КОНТЕКСТ
# =============================================================================


class TestDecimalContext:
    """Тесты для decimal_context"""

    def test_precision_applied_inside(self) -> None:
        """Точность действует внутри контекста"""
        with decimal_context(5):
            assert Decimal(1) / Decimal(3) == Decimal("0.33333")

    def test_outer_context_restored(self) -> None:
        """Внешний контекст не меняется"""
        before = getcontext().prec
        with decimal_context(DEFAULT_DECIMAL_PRECISION):
            assert getcontext().prec == DEFAULT_DECIMAL_PRECISION
        assert getcontext().prec == before

    def test_non_positive_precision_rejected(self) -> None:
        """Точность <= 0 отклоняется"""
        with pytest.raises(ValueError):
            with decimal_context(0):
                pass


# =============================================================================
# СТАТИСТИКА
# =============================================================================


class TestStatistics:
    """Тесты для mean и population_stdev"""

    def test_mean(self) -> None:
        """Среднее и пустая последовательность"""
        assert mean([Decimal(9), Decimal(10)]) == Decimal("9.5")
        assert mean([]) == ZERO

    def test_population_stdev(self) -> None:
        """Делитель N, не N-1"""
        assert population_stdev([Decimal(9), Decimal(10)]) == Decimal("0.5")
        assert population_stdev([Decimal(2), Decimal(4), Decimal(4), Decimal(4),
                                 Decimal(5), Decimal(5), Decimal(7), Decimal(9)]) == Decimal(2)

    def test_stdev_degenerate(self) -> None:
        """Одно значение или пусто → 0"""
        assert population_stdev([Decimal(5)]) == ZERO
        assert population_stdev([]) == ZERO


# =============================================================================
# УТИЛИТЫ И ВАЛИДАЦИЯ
# =============================================================================


class TestClamp:
    """Тесты для clamp"""

    def test_bounds(self) -> None:
        """Обе границы и отсутствие границ"""
        assert clamp(Decimal(-1), ZERO) == ZERO
        assert clamp(Decimal(5), ZERO, Decimal(3)) == Decimal(3)
        assert clamp(Decimal(2), ZERO, Decimal(3)) == Decimal(2)
        assert clamp(Decimal(-7)) == Decimal(-7)


class TestValidatePositive:
    """Тесты для validate_positive"""

    def test_positive_returned(self) -> None:
        """Положительное значение возвращается как Decimal"""
        assert validate_positive("1.5", "x") == Decimal("1.5")

    def test_zero_and_negative_rejected(self) -> None:
        """0 и отрицательные → InvalidInput"""
        for value in ("0", -1):
            with pytest.raises(InvalidInput, match="spend_amount"):
                validate_positive(value, "spend_amount")

    def test_unparsable_is_invalid_input(self) -> None:
        """Непарсящееся значение тоже InvalidInput"""
        with pytest.raises(InvalidInput):
            validate_positive("abc", "x")
