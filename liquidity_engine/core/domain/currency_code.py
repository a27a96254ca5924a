"""
Currency Code Codec

Кодирование кодов валют леджера:
- Коды ≤3 символов передаются как есть (стандартные коды, например "USD")
- Коды 4–20 символов: UTF-8 байты, дополненные нулями справа до 20 байт,
  в виде 40 hex-символов в верхнем регистре

Инвариант: decode_currency(encode_currency(code)) == code.

Формат совпадает с on-wire форматом леджера. Если формат upstream
изменится, менять нужно только этот модуль.
"""

import string
from typing import Final

from liquidity_engine.core.errors import InvalidCurrencyCode

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Ширина кода в байтах (160 бит)
CURRENCY_CODE_BYTES: Final[int] = 20
CURRENCY_CODE_HEX_LENGTH: Final[int] = 2 * CURRENCY_CODE_BYTES

# Максимальная длина стандартного кода (не кодируется)
STANDARD_CODE_MAX_LENGTH: Final[int] = 3

# Допустимый алфавит стандартного кода
STANDARD_CODE_ALPHABET: Final[frozenset[str]] = frozenset(
    string.ascii_letters + string.digits + "?!@#$%^&*<>(){}[]|"
)

# Позиция ASCII-кода в 160-битном стандартном формате (байты 12..14)
_STANDARD_FORM_OFFSET: Final[int] = 12

_HEX_DIGITS: Final[frozenset[str]] = frozenset(string.hexdigits)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_standard_code(code: str) -> None:
    bad = [ch for ch in code if ch not in STANDARD_CODE_ALPHABET]
    if bad:
        raise InvalidCurrencyCode(
            f"Currency code {code!r} contains disallowed characters: {''.join(bad)!r}"
        )


def _validate_long_code(code: str) -> bytes:
    if not code.isprintable():
        raise InvalidCurrencyCode(f"Currency code {code!r} contains non-printable characters")

    encoded = code.encode("utf-8")
    if len(encoded) > CURRENCY_CODE_BYTES:
        raise InvalidCurrencyCode(
            f"Currency code {code!r} too long: {len(encoded)} bytes > {CURRENCY_CODE_BYTES}"
        )
    return encoded


def is_fixed_width(code: str) -> bool:
    """Проверка, что код уже в 40-hex формате."""
    return len(code) == CURRENCY_CODE_HEX_LENGTH and all(ch in _HEX_DIGITS for ch in code)


# =============================================================================
# ENCODE / DECODE
# =============================================================================


def encode_currency(code: str) -> str:
    """
    Кодирование кода валюты в 40-hex формат.

    Args:
        code: Человекочитаемый код (1–20 символов)

    Returns:
        code без изменений, если len(code) <= 3, иначе 40 hex-символов

    Raises:
        InvalidCurrencyCode: Пустой код, недопустимые символы, > 20 байт

    Examples:
        >>> encode_currency("USD")
        'USD'
        >>> encode_currency("SOLO")
        '534F4C4F00000000000000000000000000000000'
    """
    if not isinstance(code, str) or not code:
        raise InvalidCurrencyCode(f"Currency code must be a non-empty string, got {code!r}")

    if len(code) <= STANDARD_CODE_MAX_LENGTH:
        _validate_standard_code(code)
        return code

    encoded = _validate_long_code(code)
    padded = encoded.ljust(CURRENCY_CODE_BYTES, b"\x00")
    return padded.hex().upper()


def decode_currency(code: str) -> str:
    """
    Декодирование 40-hex кода в человекочитаемый.

    Поддерживает оба 160-битных формата леджера:
    - нестандартный: UTF-8 байты + нулевое дополнение справа
    - стандартный: первый байт 0x00, ASCII-код в байтах 12..14

    Коды ≤3 символов возвращаются как есть.

    Raises:
        InvalidCurrencyCode: Неверная длина, не hex, ненулевые байты после
            дополнения, невалидный UTF-8
    """
    if not isinstance(code, str) or not code:
        raise InvalidCurrencyCode(f"Currency code must be a non-empty string, got {code!r}")

    if len(code) <= STANDARD_CODE_MAX_LENGTH:
        _validate_standard_code(code)
        return code

    if len(code) != CURRENCY_CODE_HEX_LENGTH:
        raise InvalidCurrencyCode(
            f"Fixed-width currency code must be {CURRENCY_CODE_HEX_LENGTH} hex chars, "
            f"got {len(code)}"
        )

    if not all(ch in _HEX_DIGITS for ch in code):
        raise InvalidCurrencyCode(f"Currency code {code!r} is not hex")

    raw = bytes.fromhex(code)

    if raw[0] == 0:
        return _decode_standard_form(raw, code)

    end = raw.find(b"\x00")
    if end == -1:
        end = CURRENCY_CODE_BYTES
    elif any(raw[end:]):
        raise InvalidCurrencyCode(f"Currency code {code!r} has data after padding")

    try:
        decoded = raw[:end].decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidCurrencyCode(f"Currency code {code!r} is not valid UTF-8") from None

    if not decoded.isprintable():
        raise InvalidCurrencyCode(f"Currency code {code!r} decodes to non-printable text")

    return decoded


def _decode_standard_form(raw: bytes, code: str) -> str:
    start = _STANDARD_FORM_OFFSET
    end = start + STANDARD_CODE_MAX_LENGTH
    if any(raw[:start]) or any(raw[end:]):
        raise InvalidCurrencyCode(f"Currency code {code!r} is not a valid standard code")

    try:
        decoded = raw[start:end].decode("ascii")
    except UnicodeDecodeError:
        raise InvalidCurrencyCode(f"Currency code {code!r} is not valid ASCII") from None

    _validate_standard_code(decoded)
    return decoded
