"""
Rank — Immutable модель order-rank значения

Формат строки:
    rank     := bucket "|" whole ":" fraction
    bucket   := "0" | "1" | "2"
    whole    := ровно 6 символов [0-9a-z]
    fraction := ноль или более символов [0-9a-z], не оканчивается на "0"

Пример: "0|hzzzzz:", "0|i00000:i", "1|000000:".

Порядок rank-значений — обычное лексикографическое сравнение строк. Бакет
стоит первым, поэтому ранги разных бакетов не перемешиваются.
"""

import re
from fractions import Fraction
from typing import Final

from pydantic import BaseModel, Field

from src.core.math.numeral import WHOLE_WIDTH, from_value, to_value

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТА
# =============================================================================

BUCKET_SEPARATOR: Final[str] = "|"
DECIMAL_SEPARATOR: Final[str] = ":"

DEFAULT_BUCKET: Final[int] = 0
BUCKET_COUNT: Final[int] = 3

RANK_PATTERN: Final[re.Pattern] = re.compile(
    r"^(?P<bucket>[0-2])\|(?P<whole>[0-9a-z]{%d}):(?P<fraction>(?:[0-9a-z]*[1-9a-z])?)$"
    % WHOLE_WIDTH
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RankError(ValueError):
    """Базовая ошибка работы с rank-значениями."""


class MalformedRankError(RankError):
    """
    Строка не соответствует грамматике bucket|whole:fraction.

    Запись-источник требует повторного назначения ранга.
    """


class OrderViolationError(RankError):
    """
    between(a, b) вызван при a >= b.

    Обычно означает устаревшее чтение при конкурентной перестановке:
    вызывающий код перечитывает текущие ранги и повторяет операцию.
    """


class BucketMismatchError(RankError):
    """Операция над рангами из разных бакетов."""


class RankBoundaryError(RankError):
    """Перед минимальным рангом бакета нет ни одного значения."""


# =============================================================================
# RANK
# =============================================================================


class Rank(BaseModel):
    """
    Order-rank значение.

    Immutable: перемещение записи — это назначение нового Rank,
    а не изменение существующего.
    """

    bucket: int = Field(DEFAULT_BUCKET, ge=0, lt=BUCKET_COUNT, description="Индекс бакета")
    whole: str = Field(
        ..., pattern=r"^[0-9a-z]{%d}$" % WHOLE_WIDTH, description="Целая часть (base-36)"
    )
    fraction: str = Field(
        "", pattern=r"^(?:[0-9a-z]*[1-9a-z])?$", description="Дробная часть (base-36)"
    )

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str) -> "Rank":
        """
        Разбор rank-строки.

        Raises:
            MalformedRankError: Строка не соответствует грамматике
        """
        if not isinstance(value, str):
            raise MalformedRankError(f"Rank must be a string, got {type(value).__name__}")

        match = RANK_PATTERN.fullmatch(value)
        if match is None:
            raise MalformedRankError(f"Malformed rank: {value!r}")

        return cls(
            bucket=int(match.group("bucket")),
            whole=match.group("whole"),
            fraction=match.group("fraction"),
        )

    @classmethod
    def from_value(cls, value: Fraction, bucket: int = DEFAULT_BUCKET) -> "Rank":
        """Rank с заданным численным значением в бакете."""
        whole, fraction = from_value(value)
        return cls(bucket=bucket, whole=whole, fraction=fraction)

    @property
    def value(self) -> Fraction:
        """Численное значение whole + 0.fraction."""
        return to_value(self.whole, self.fraction)

    def with_bucket(self, bucket: int) -> "Rank":
        """Тот же rank в другом бакете."""
        return Rank(bucket=bucket, whole=self.whole, fraction=self.fraction)

    def __str__(self) -> str:
        return f"{self.bucket}{BUCKET_SEPARATOR}{self.whole}{DECIMAL_SEPARATOR}{self.fraction}"

    # Сравнение строго по строке
    def __lt__(self, other: "Rank") -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return str(self) < str(other)

    def __le__(self, other: "Rank") -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return str(self) <= str(other)

    def __gt__(self, other: "Rank") -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return str(self) > str(other)

    def __ge__(self, other: "Rank") -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return str(self) >= str(other)
