"""
RankSequence — генерация, разбор и сравнение order-rank строк

Модуль даёт коллекции записей полный порядок, допускающий вставку новой
записи между любыми двумя существующими без перенумерации остальных:
- min / max / middle: опорные ранги бакета
- next / prev: соседний ранг с запасом (step) для будущих вставок
- between: ранг строго между двумя рангами
- sequential: серия рангов с явным шагом (spacing)
- rebalance: равномерное распределение рангов по бакету

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для любых a < b из одного бакета between(a, b) возвращает a < c < b
2. next(a) > a для любого a, без исключений исчерпания
3. Исчерпание места решается увеличением точности, а не ошибкой
4. Все операции — чистые функции, без состояния и I/O

Конкурентность: RankSequence не синхронизирует ничего. Если два процесса
прочитали один и тот же "последний" ранг и оба вызвали next(), они получат
одинаковые значения. Цикл "прочитать последний ранг → вычислить →
сохранить" вызывающий код сериализует сам (транзакция, блокировка).
"""

from fractions import Fraction
from typing import Final, List, Optional, Union

from loguru import logger

from src.core.domain.rank import (
    BUCKET_COUNT,
    DEFAULT_BUCKET,
    BucketMismatchError,
    OrderViolationError,
    Rank,
    RankBoundaryError,
)
from src.core.math.numeral import CEILING, RADIX, decode, midpoint

# =============================================================================
# ПАРАМЕТРЫ ПОСЛЕДОВАТЕЛЬНОСТИ
# =============================================================================

# Минимальное значение бакета: "000000"
MIN_VALUE: Final[Fraction] = Fraction(0)

# Максимальное целое значение бакета: "zzzzzz"
MAX_VALUE: Final[Fraction] = Fraction(CEILING - 1)

# Первый ранг после min(): "100000"
INITIAL_MIN_VALUE: Final[Fraction] = Fraction(decode("100000"))

# Первый ранг перед max(): "y00000"
INITIAL_MAX_VALUE: Final[Fraction] = Fraction(decode("y00000"))

# Запас, который next/prev оставляют от целой части исходного ранга
NEXT_STEP: Final[int] = 8

# Сколько раз next() применяется на одну запись в sequential()
# (2 = "пропустить один", место для вставок без перенумерации)
SEQUENCE_SPACING: Final[int] = 2


RankLike = Union[Rank, str]


# =============================================================================
# HELPERS
# =============================================================================


def _validate_bucket(bucket: int) -> int:
    if not isinstance(bucket, int) or not 0 <= bucket < BUCKET_COUNT:
        raise ValueError(f"bucket must be in [0, {BUCKET_COUNT}), got {bucket!r}")
    return bucket


def _validate_positive(name: str, value: int) -> int:
    if not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


# =============================================================================
# RANK SEQUENCE
# =============================================================================


class RankSequence:
    """
    Stateless генератор order-rank значений.

    Единственное "состояние" — ранг, который вызывающий код явно передаёт
    из одного шага в следующий.

    Args:
        step: Запас next/prev относительно целой части ранга
        spacing: Число вызовов next() на одну запись в sequential()
        bucket: Бакет по умолчанию для min/max/middle/rebalance
    """

    def __init__(
        self,
        step: int = NEXT_STEP,
        spacing: int = SEQUENCE_SPACING,
        bucket: int = DEFAULT_BUCKET,
    ):
        self.step = _validate_positive("step", step)
        self.spacing = _validate_positive("spacing", spacing)
        self.bucket = _validate_bucket(bucket)

    @classmethod
    def from_settings(cls, settings=None) -> "RankSequence":
        """RankSequence с параметрами из Settings (по умолчанию — глобальных)."""
        if settings is None:
            from src.config import settings

        return cls(
            step=settings.NEXT_STEP,
            spacing=settings.SEQUENCE_SPACING,
            bucket=settings.DEFAULT_BUCKET,
        )

    def __repr__(self) -> str:
        return f"RankSequence(step={self.step}, spacing={self.spacing}, bucket={self.bucket})"

    # -------------------------------------------------------------------------
    # Опорные ранги
    # -------------------------------------------------------------------------

    def _bucket(self, bucket: Optional[int]) -> int:
        return self.bucket if bucket is None else _validate_bucket(bucket)

    def min(self, bucket: Optional[int] = None) -> Rank:
        """Наименьший ранг бакета: "0|000000:"."""
        return Rank.from_value(MIN_VALUE, self._bucket(bucket))

    def max(self, bucket: Optional[int] = None) -> Rank:
        """Наибольший целый ранг бакета: "0|zzzzzz:"."""
        return Rank.from_value(MAX_VALUE, self._bucket(bucket))

    def middle(self, bucket: Optional[int] = None) -> Rank:
        """Ранг в середине диапазона: "0|hzzzzz:"."""
        return Rank.from_value(midpoint(MIN_VALUE, MAX_VALUE), self._bucket(bucket))

    # -------------------------------------------------------------------------
    # Разбор и сравнение
    # -------------------------------------------------------------------------

    @staticmethod
    def parse(value: RankLike) -> Rank:
        """
        Разбор rank-строки (Rank возвращается как есть).

        Raises:
            MalformedRankError: Строка не соответствует грамматике
        """
        if isinstance(value, Rank):
            return value
        return Rank.parse(value)

    def compare(self, a: RankLike, b: RankLike) -> int:
        """
        Лексикографическое сравнение: -1, 0 или 1.

        Examples:
            >>> RankSequence().compare("0|000000:", "0|hzzzzz:")
            -1
        """
        left, right = str(self.parse(a)), str(self.parse(b))
        if left < right:
            return -1
        if left > right:
            return 1
        return 0

    # -------------------------------------------------------------------------
    # Генерация
    # -------------------------------------------------------------------------

    def next(self, rank: RankLike) -> Rank:
        """
        Следующий ранг с запасом для вставок.

        - из min() → "100000"
        - иначе ceil(rank) + step
        - если это выходит за "zzzzzz" — середина между rank и потолком
          "1000000" (исключительно), т.е. точность увеличивается

        Никогда не падает из-за исчерпания места.
        """
        rank = self.parse(rank)
        value = rank.value

        if value == MIN_VALUE:
            return Rank.from_value(INITIAL_MIN_VALUE, rank.bucket)

        candidate = Fraction(-(-value.numerator // value.denominator) + self.step)
        if candidate >= CEILING:
            candidate = midpoint(value, Fraction(CEILING))
            logger.debug(f"next({rank}): near ceiling, extending precision")

        return Rank.from_value(candidate, rank.bucket)

    def prev(self, rank: RankLike) -> Rank:
        """
        Предыдущий ранг с запасом для вставок.

        - из max() → "y00000"
        - иначе floor(rank) - step
        - если это не выше min() — середина между min() и rank

        Raises:
            RankBoundaryError: rank является min() — перед ним ничего нет
        """
        rank = self.parse(rank)
        value = rank.value

        if value == MIN_VALUE:
            raise RankBoundaryError(f"Nothing sorts before the minimum rank {rank}")

        if value == MAX_VALUE:
            return Rank.from_value(INITIAL_MAX_VALUE, rank.bucket)

        candidate = Fraction(value.numerator // value.denominator - self.step)
        if candidate <= MIN_VALUE:
            candidate = midpoint(MIN_VALUE, value)

        return Rank.from_value(candidate, rank.bucket)

    def between(self, a: RankLike, b: RankLike) -> Rank:
        """
        Ранг строго между a и b.

        Выбирается значение с наименьшим числом дробных цифр, ближайшее к
        середине интервала. Если a и b соседние на текущей точности,
        добавляется цифра.

        Raises:
            OrderViolationError: a >= b (в том числе для разных бакетов)
            BucketMismatchError: a < b, но a и b из разных бакетов
        """
        left, right = self.parse(a), self.parse(b)

        if left >= right:
            raise OrderViolationError(f"between() requires a < b, got a={left}, b={right}")
        if left.bucket != right.bucket:
            raise BucketMismatchError(
                f"Cannot rank between buckets {left.bucket} and {right.bucket}: {left}, {right}"
            )

        return Rank.from_value(midpoint(left.value, right.value), left.bucket)

    def sequential(self, after: Optional[RankLike], count: int) -> List[Rank]:
        """
        count рангов подряд после after (или после min(), если after is None).

        Каждый следующий ранг получается spacing вызовами next(), оставляя
        место для будущих вставок. Текущий ранг передаётся явно из шага в шаг.

        Examples:
            >>> [str(r) for r in RankSequence().sequential(None, 2)]
            ['0|100008:', '0|10000o:']
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        rank = self.min() if after is None else self.parse(after)
        ranks = []
        for _ in range(count):
            for _ in range(self.spacing):
                rank = self.next(rank)
            ranks.append(rank)
        return ranks

    def rebalance(self, count: int, bucket: Optional[int] = None) -> List[Rank]:
        """
        count равномерно распределённых рангов по всему бакету.

        Используется для перераспределения переполненной коллекции в
        соседний бакет (см. in_next_bucket). Значения строго между min() и
        потолком бакета, без повторов, по возрастанию.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        bucket = self._bucket(bucket)

        unit = 1
        while CEILING * unit // (count + 1) < 1:
            unit *= RADIX

        gap = Fraction(CEILING * unit // (count + 1), unit)
        return [Rank.from_value(gap * index, bucket) for index in range(1, count + 1)]

    # -------------------------------------------------------------------------
    # Бакеты
    # -------------------------------------------------------------------------

    @staticmethod
    def in_next_bucket(rank: RankLike) -> Rank:
        """Тот же ранг в следующем бакете (0 → 1 → 2 → 0)."""
        rank = RankSequence.parse(rank)
        return rank.with_bucket((rank.bucket + 1) % BUCKET_COUNT)

    @staticmethod
    def in_prev_bucket(rank: RankLike) -> Rank:
        """Тот же ранг в предыдущем бакете (0 → 2 → 1 → 0)."""
        rank = RankSequence.parse(rank)
        return rank.with_bucket((rank.bucket - 1) % BUCKET_COUNT)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

DEFAULT_SEQUENCE: Final[RankSequence] = RankSequence()


def parse_rank(value: RankLike) -> Rank:
    """Разбор rank-строки последовательностью по умолчанию."""
    return DEFAULT_SEQUENCE.parse(value)


def compare_ranks(a: RankLike, b: RankLike) -> int:
    """Сравнение двух рангов: -1, 0 или 1."""
    return DEFAULT_SEQUENCE.compare(a, b)


def next_rank(rank: Optional[RankLike]) -> Rank:
    """Ранг после rank; middle() для пустой коллекции (rank is None)."""
    if rank is None:
        return DEFAULT_SEQUENCE.middle()
    return DEFAULT_SEQUENCE.next(rank)


def rank_between(a: RankLike, b: RankLike) -> Rank:
    """Ранг строго между a и b."""
    return DEFAULT_SEQUENCE.between(a, b)
