"""
Core math modules

Base-36 numeral system и точная арифметика rank-значений.
"""

from src.core.math.numeral import (
    CEILING,
    DIGITS,
    RADIX,
    WHOLE_WIDTH,
    decode,
    digit_value,
    encode,
    from_value,
    is_numeral,
    midpoint,
    to_value,
)

__all__ = [
    # Constants
    "CEILING",
    "DIGITS",
    "RADIX",
    "WHOLE_WIDTH",
    # Digits
    "decode",
    "digit_value",
    "encode",
    "is_numeral",
    # Values
    "from_value",
    "midpoint",
    "to_value",
]
