"""
Numeral — Base-36 цифры и точная арифметика rank-значений

Rank хранится как строка `whole:fraction`, где обе части записаны в
системе счисления base-36 (`0-9a-z`). Численно это число
`whole + 0.fraction`, поэтому вся арифметика ведётся на fractions.Fraction
без потери точности.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. whole всегда ровно WHOLE_WIDTH символов (фиксированная ширина)
2. fraction никогда не заканчивается на "0" (каноническая форма)
3. При (1) и (2) порядок строк совпадает с порядком чисел
4. Между двумя различными значениями всегда найдётся третье (precision extension)
"""

import math
from fractions import Fraction
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ СИСТЕМЫ СЧИСЛЕНИЯ
# =============================================================================

# Алфавит: ASCII-порядок символов совпадает с порядком цифр
DIGITS: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"

RADIX: Final[int] = len(DIGITS)

# Ширина целой части rank-строки
WHOLE_WIDTH: Final[int] = 6

# Исключающая верхняя граница значения: "1000000" в base-36
CEILING: Final[int] = RADIX**WHOLE_WIDTH

_DIGIT_VALUES: Final[dict] = {char: index for index, char in enumerate(DIGITS)}


# =============================================================================
# ЦИФРЫ
# =============================================================================


def digit_value(char: str) -> int:
    """Значение одной base-36 цифры."""
    try:
        return _DIGIT_VALUES[char]
    except KeyError:
        raise ValueError(f"Not a base-{RADIX} digit: {char!r}") from None


def is_numeral(text: str) -> bool:
    """True если строка состоит только из цифр алфавита (пустая — тоже)."""
    return all(char in _DIGIT_VALUES for char in text)


def encode(value: int, width: int = 0) -> str:
    """
    Запись неотрицательного целого в base-36.

    Args:
        value: Неотрицательное целое
        width: Минимальная ширина (дополняется нулями слева)

    Returns:
        Строка цифр

    Examples:
        >>> encode(35)
        'z'
        >>> encode(36, width=4)
        '0010'
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")

    chars = []
    while value:
        value, remainder = divmod(value, RADIX)
        chars.append(DIGITS[remainder])

    return "".join(reversed(chars)).rjust(max(width, 1), "0")


def decode(text: str) -> int:
    """
    Чтение base-36 строки как целого.

    Raises:
        ValueError: Пустая строка или символ вне алфавита
    """
    if not text:
        raise ValueError("Cannot decode an empty numeral")

    value = 0
    for char in text:
        value = value * RADIX + digit_value(char)
    return value


# =============================================================================
# ЗНАЧЕНИЯ RANK
# =============================================================================


def to_value(whole: str, fraction: str = "") -> Fraction:
    """
    Численное значение пары (whole, fraction).

    Examples:
        >>> to_value("000001", "i")
        Fraction(3, 2)
    """
    value = Fraction(decode(whole))
    if fraction:
        value += Fraction(decode(fraction), RADIX ** len(fraction))
    return value


def from_value(value: Fraction) -> tuple[str, str]:
    """
    Каноническая запись значения как (whole, fraction).

    Значение должно лежать в [0, CEILING) и иметь конечную запись в base-36
    (знаменатель делит некоторую степень RADIX).

    Raises:
        ValueError: Значение вне диапазона или с бесконечной записью
    """
    if value < 0 or value >= CEILING:
        raise ValueError(f"Rank value out of range [0, {CEILING}): {value}")

    whole = math.floor(value)
    remainder = value - whole

    digits = []
    while remainder:
        remainder *= RADIX
        digit = math.floor(remainder)
        digits.append(DIGITS[digit])
        remainder -= digit
        if len(digits) > _max_fraction_digits(value):
            raise ValueError(f"Value has no finite base-{RADIX} expansion: {value}")

    return encode(whole, WHOLE_WIDTH), "".join(digits)


def _max_fraction_digits(value: Fraction) -> int:
    # 36 = 2^2 * 3^2: для конечной записи хватает log2(denominator) цифр
    return value.denominator.bit_length() + 1


# =============================================================================
# MIDPOINT
# =============================================================================


def midpoint(low: Fraction, high: Fraction) -> Fraction:
    """
    Значение строго между low и high с минимальным числом дробных цифр.

    Перебирает точность scale = 0, 1, 2, ... и на первой точности, где между
    границами помещается хотя бы одно значение, выбирает ближайшее к
    floor от середины (low + high) / 2 на этой точности. Если на текущей
    точности места нет, точность растёт на одну цифру (precision extension).

    Args:
        low: Нижняя граница (исключительно)
        high: Верхняя граница (исключительно)

    Returns:
        Значение c: low < c < high

    Raises:
        ValueError: Если low >= high

    Examples:
        >>> midpoint(Fraction(0), Fraction(2))
        Fraction(1, 1)
        >>> midpoint(Fraction(1), Fraction(2))
        Fraction(3, 2)
    """
    if low >= high:
        raise ValueError(f"Empty interval: low={low} >= high={high}")

    scale = 0
    while True:
        unit = RADIX**scale
        first = math.floor(low * unit) + 1
        last = math.ceil(high * unit) - 1

        if first <= last:
            target = math.floor((low + high) * unit / 2)
            return Fraction(min(max(target, first), last), unit)

        scale += 1
