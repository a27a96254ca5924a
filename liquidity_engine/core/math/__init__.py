"""
Core math modules для liquidity engine

Decimal-примитивы с гарантией точности и детерминизма.
"""

from liquidity_engine.core.math.numerical_safeguards import (
    # Constants
    DEFAULT_DECIMAL_PRECISION,
    HUNDRED,
    ONE,
    ZERO,
    # Context
    decimal_context,
    # Parsing
    to_decimal,
    to_non_negative_decimal,
    # Safe division
    percent_of,
    safe_divide,
    # Statistics
    mean,
    population_stdev,
    # Utilities
    clamp,
    # Validation
    validate_positive,
)

__all__ = [
    # Constants
    "DEFAULT_DECIMAL_PRECISION",
    "HUNDRED",
    "ONE",
    "ZERO",
    # Context
    "decimal_context",
    # Parsing
    "to_decimal",
    "to_non_negative_decimal",
    # Safe division
    "percent_of",
    "safe_divide",
    # Statistics
    "mean",
    "population_stdev",
    # Utilities
    "clamp",
    # Validation
    "validate_positive",
]
