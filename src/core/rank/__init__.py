"""
Order-rank модули

Генерация, разбор и сравнение order-rank строк (RankSequence) поверх
base-36 арифметики из src.core.math.numeral.
"""

from src.core.rank.sequence import (
    DEFAULT_SEQUENCE,
    INITIAL_MAX_VALUE,
    INITIAL_MIN_VALUE,
    MAX_VALUE,
    MIN_VALUE,
    NEXT_STEP,
    SEQUENCE_SPACING,
    RankLike,
    RankSequence,
    compare_ranks,
    next_rank,
    parse_rank,
    rank_between,
)

__all__ = [
    # Constants
    "MIN_VALUE",
    "MAX_VALUE",
    "INITIAL_MIN_VALUE",
    "INITIAL_MAX_VALUE",
    "NEXT_STEP",
    "SEQUENCE_SPACING",
    # Types
    "RankLike",
    "RankSequence",
    "DEFAULT_SEQUENCE",
    # Functions
    "compare_ranks",
    "next_rank",
    "parse_rank",
    "rank_between",
]
