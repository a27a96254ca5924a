"""
Исключения liquidity engine.

Все ошибки — отклонённый вызов с некорректным входом. Фатальных состояний нет:
вызов можно повторить с исправленными данными.
"""


class LiquidityEngineError(ValueError):
    """Базовая ошибка engine (совместима с ValueError)."""

    pass


class InvalidAmount(LiquidityEngineError):
    """Сумма не парсится как конечный неотрицательный Decimal."""

    pass


class InvalidCurrencyCode(LiquidityEngineError):
    """Некорректный код валюты (алфавит, длина, hex-формат)."""

    pass


class InvalidInput(LiquidityEngineError):
    """
    Некорректный параметр вызова.

    Например, spend_amount <= 0 или proposed_rate <= 0, либо сырой payload
    не прошёл JSON Schema контракт.
    """

    pass
