"""
Тесты для RankSequence — генерация order-rank строк

Проверяемые инварианты:
1. a < between(a, b) < b для любых a < b
2. next(a) > a, без исключений исчерпания (в т.ч. от max())
3. compare: рефлексивность, антисимметричность, транзитивность
4. parse(str(r)) == r для всех сгенерированных рангов
5. Precision extension: сотни вложенных between() не падают
6. OrderViolationError / BucketMismatchError / RankBoundaryError
"""

import functools
import itertools

import pytest

from src.core.domain import (
    BucketMismatchError,
    MalformedRankError,
    OrderViolationError,
    Rank,
    RankBoundaryError,
)
from src.core.rank import (
    DEFAULT_SEQUENCE,
    NEXT_STEP,
    SEQUENCE_SPACING,
    RankSequence,
    compare_ranks,
    next_rank,
    parse_rank,
    rank_between,
)


@pytest.fixture
def seq():
    """RankSequence с параметрами по умолчанию."""
    return RankSequence()


# =============================================================================
# ТЕСТЫ: Конфигурация
# =============================================================================


class TestRankSequenceConfig:
    """Параметры step / spacing / bucket"""

    def test_defaults(self, seq):
        assert seq.step == NEXT_STEP == 8
        assert seq.spacing == SEQUENCE_SPACING == 2
        assert seq.bucket == 0

    @pytest.mark.parametrize("kwargs", [{"step": 0}, {"step": -1}, {"spacing": 0}, {"bucket": 3}, {"bucket": -1}])
    def test_invalid_config_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RankSequence(**kwargs)

    def test_repr(self, seq):
        assert repr(seq) == "RankSequence(step=8, spacing=2, bucket=0)"


# =============================================================================
# ТЕСТЫ: Опорные ранги
# =============================================================================


class TestAnchors:
    """min / max / middle"""

    def test_min(self, seq):
        assert str(seq.min()) == "0|000000:"

    def test_max(self, seq):
        assert str(seq.max()) == "0|zzzzzz:"

    def test_middle(self, seq):
        assert str(seq.middle()) == "0|hzzzzz:"

    def test_anchor_order(self, seq):
        assert seq.min() < seq.middle() < seq.max()

    def test_explicit_bucket(self, seq):
        assert str(seq.min(bucket=2)) == "2|000000:"
        assert str(seq.middle(bucket=1)) == "1|hzzzzz:"

    def test_default_bucket_from_sequence(self):
        assert str(RankSequence(bucket=1).max()) == "1|zzzzzz:"

    def test_invalid_bucket_argument(self, seq):
        with pytest.raises(ValueError, match="bucket"):
            seq.min(bucket=5)


# =============================================================================
# ТЕСТЫ: parse / compare
# =============================================================================


class TestParseCompare:
    """parse и compare"""

    def test_parse_string(self, seq):
        assert seq.parse("0|hzzzzz:") == Rank.parse("0|hzzzzz:")

    def test_parse_passes_rank_through(self, seq):
        rank = seq.middle()
        assert seq.parse(rank) is rank

    def test_parse_not_a_valid_rank(self, seq):
        with pytest.raises(MalformedRankError):
            seq.parse("not-a-valid-rank")

    def test_compare_values(self, seq):
        assert seq.compare("0|000000:", "0|hzzzzz:") == -1
        assert seq.compare("0|hzzzzz:", "0|000000:") == 1
        assert seq.compare("0|hzzzzz:", seq.middle()) == 0

    def test_compare_malformed(self, seq):
        with pytest.raises(MalformedRankError):
            seq.compare("0|hzzzzz:", "bogus")


# =============================================================================
# ТЕСТЫ: next / prev
# =============================================================================


class TestNext:
    """next: ранг с запасом после исходного"""

    def test_next_from_min(self, seq):
        assert str(seq.next(seq.min())) == "0|100000:"

    def test_next_adds_step(self, seq):
        assert str(seq.next("0|100000:")) == "0|100008:"
        assert str(seq.next("0|hzzzzz:")) == "0|i00007:"

    def test_next_rounds_fraction_up(self, seq):
        assert str(seq.next("0|100000:i")) == "0|100009:"

    def test_next_custom_step(self):
        assert str(RankSequence(step=1).next("0|100000:")) == "0|100001:"

    def test_next_keeps_bucket(self, seq):
        assert str(seq.next("2|100000:")) == "2|100008:"

    def test_next_near_ceiling_uses_remaining_room(self, seq):
        assert str(seq.next("0|zzzzzt:")) == "0|zzzzzw:"

    def test_next_from_max_extends_precision(self, seq):
        """Даже от max() next не падает"""
        assert str(seq.next(seq.max())) == "0|zzzzzz:i"

    def test_next_never_exhausts(self, seq):
        rank = seq.max()
        for _ in range(200):
            following = seq.next(rank)
            assert following > rank
            rank = following

    @pytest.mark.parametrize(
        "value",
        ["0|000000:", "0|000000:1", "0|100000:", "0|hzzzzz:", "0|hzzzzz:zzz", "0|zzzzzy:", "0|zzzzzz:", "1|zzzzzz:zz"],
    )
    def test_next_is_greater(self, seq, value):
        assert seq.next(value) > seq.parse(value)


class TestPrev:
    """prev: ранг с запасом перед исходным"""

    def test_prev_from_max(self, seq):
        assert str(seq.prev(seq.max())) == "0|y00000:"

    def test_prev_subtracts_step(self, seq):
        assert str(seq.prev("0|100000:")) == "0|0zzzzs:"

    def test_prev_near_min_halves(self, seq):
        assert str(seq.prev("0|000005:")) == "0|000002:"
        assert str(seq.prev("0|000001:")) == "0|000000:i"

    def test_prev_from_min_raises(self, seq):
        with pytest.raises(RankBoundaryError):
            seq.prev(seq.min())

    def test_prev_is_smaller(self, seq):
        for value in ("0|000000:1", "0|000001:", "0|hzzzzz:", "0|zzzzzz:i"):
            assert seq.prev(value) < seq.parse(value)

    def test_prev_never_reaches_min(self, seq):
        rank = seq.middle()
        for _ in range(200):
            rank = seq.prev(rank)
            assert rank > seq.min()


# =============================================================================
# ТЕСТЫ: between
# =============================================================================


class TestBetween:
    """between: строго внутри интервала"""

    def test_between_integer_gap(self, seq):
        assert str(seq.between("0|000000:", "0|000003:")) == "0|000001:"

    def test_between_adjacent_integers(self, seq):
        assert str(seq.between("0|000000:", "0|000001:")) == "0|000000:i"
        assert str(seq.between("0|hzzzzz:", "0|i00000:")) == "0|hzzzzz:i"

    def test_between_adjacent_fractions(self, seq):
        assert str(seq.between("0|000000:i", "0|000000:j")) == "0|000000:ii"

    def test_between_prefix_and_extension(self, seq):
        a, b = "0|hzzzzz:", "0|hzzzzz:01"
        result = seq.between(a, b)
        assert seq.parse(a) < result < seq.parse(b)

    def test_between_min_and_max(self, seq):
        assert seq.between(seq.min(), seq.max()) == seq.middle()

    def test_between_reversed_raises(self, seq):
        a = seq.middle()
        b = seq.next(a)
        with pytest.raises(OrderViolationError):
            seq.between(b, a)

    def test_between_equal_raises(self, seq):
        with pytest.raises(OrderViolationError):
            seq.between("0|hzzzzz:", "0|hzzzzz:")

    def test_between_buckets_raises(self, seq):
        with pytest.raises(BucketMismatchError):
            seq.between("0|hzzzzz:", "1|hzzzzz:")
        with pytest.raises(BucketMismatchError):
            seq.between("0|zzzzzz:", "1|000000:")

    def test_between_buckets_reversed_is_order_violation(self, seq):
        with pytest.raises(OrderViolationError):
            seq.between("1|hzzzzz:", "0|hzzzzz:")
        with pytest.raises(OrderViolationError):
            seq.between("2|000000:", "0|zzzzzz:")

    def test_between_malformed_raises(self, seq):
        with pytest.raises(MalformedRankError):
            seq.between("0|hzzzzz:", "0|i00000:i0")

    def test_between_all_pairs(self, seq):
        values = [
            "0|000000:",
            "0|000000:01",
            "0|000000:1",
            "0|000001:",
            "0|100000:",
            "0|100000:0001",
            "0|100001:",
            "0|hzzzzz:",
            "0|hzzzzz:i",
            "0|zzzzzz:",
            "0|zzzzzz:zz",
        ]
        for low, high in itertools.combinations(values, 2):
            result = seq.between(low, high)
            assert seq.compare(low, result) == -1
            assert seq.compare(result, high) == -1

    def test_shrinking_interval_upper(self, seq):
        """between(a, between(a, b)) сотни раз подряд"""
        a, b = seq.min(), seq.next(seq.min())
        for _ in range(500):
            c = seq.between(a, b)
            assert a < c < b
            b = c
        assert seq.parse(str(b)) == b

    def test_shrinking_interval_lower(self, seq):
        a, b = seq.middle(), seq.next(seq.middle())
        for _ in range(500):
            c = seq.between(a, b)
            assert a < c < b
            a = c
        assert seq.parse(str(a)) == a

    def test_hundred_inserts_between_neighbours(self, seq):
        """100 вставок между min() и next(next(min()))"""
        a = seq.min()
        b = seq.next(seq.next(a))

        inserted = []
        last = a
        for _ in range(100):
            rank = seq.between(last, b)
            inserted.append(rank)
            last = rank

        assert len(set(inserted)) == 100
        assert all(a < rank < b for rank in inserted)
        # Порядок вставки совпадает с порядком сортировки
        assert sorted(inserted) == inserted
        assert sorted(str(r) for r in inserted) == [str(r) for r in inserted]

    def test_inserts_always_before_first(self, seq):
        a, b = seq.min(), seq.next(seq.min())
        inserted = []
        first = b
        for _ in range(100):
            first = seq.between(a, first)
            inserted.append(first)
        assert sorted(inserted) == list(reversed(inserted))
        assert all(a < rank < b for rank in inserted)


# =============================================================================
# ТЕСТЫ: sequential / rebalance / бакеты
# =============================================================================


class TestSequential:
    """sequential: серия рангов с явным spacing"""

    def test_sequential_from_empty(self, seq):
        assert [str(r) for r in seq.sequential(None, 2)] == ["0|100008:", "0|10000o:"]

    def test_sequential_after_rank(self, seq):
        ranks = seq.sequential("0|hzzzzz:", 2)
        assert [str(r) for r in ranks] == ["0|i0000f:", "0|i0000v:"]

    def test_sequential_spacing_one(self):
        ranks = RankSequence(spacing=1).sequential(None, 3)
        assert [str(r) for r in ranks] == ["0|100000:", "0|100008:", "0|10000g:"]

    def test_sequential_zero_count(self, seq):
        assert seq.sequential(None, 0) == []

    def test_sequential_negative_count(self, seq):
        with pytest.raises(ValueError):
            seq.sequential(None, -1)

    def test_sequential_is_strictly_increasing(self, seq):
        ranks = seq.sequential(seq.middle(), 50)
        assert all(low < high for low, high in zip(ranks, ranks[1:]))
        assert ranks[0] > seq.middle()

    def test_skip_one_leaves_room(self, seq):
        """Пять рангов от middle() со skip-one: вставка между соседями без роста точности"""
        ranks = seq.sequential(seq.middle(), 5)
        assert len(ranks) == 5

        for low, high in zip(ranks, ranks[1:]):
            inserted = seq.between(low, high)
            assert low < inserted < high
            assert inserted.fraction == ""

    def test_skip_one_matches_double_next(self, seq):
        rank = seq.middle()
        expected = []
        for _ in range(5):
            rank = seq.next(seq.next(rank))
            expected.append(rank)
        assert seq.sequential(seq.middle(), 5) == expected


class TestRebalance:
    """rebalance: равномерное распределение по бакету"""

    def test_rebalance_single(self, seq):
        assert [str(r) for r in seq.rebalance(1)] == ["0|i00000:"]

    def test_rebalance_three(self, seq):
        assert [str(r) for r in seq.rebalance(3, bucket=1)] == ["1|900000:", "1|i00000:", "1|r00000:"]

    def test_rebalance_is_spread_and_ordered(self, seq):
        ranks = seq.rebalance(1000)
        assert len(set(ranks)) == 1000
        assert sorted(ranks) == ranks
        assert ranks[0] > seq.min()
        assert ranks[-1] < seq.max()

    def test_rebalance_empty(self, seq):
        assert seq.rebalance(0) == []

    def test_rebalance_negative(self, seq):
        with pytest.raises(ValueError):
            seq.rebalance(-1)


class TestBuckets:
    """in_next_bucket / in_prev_bucket"""

    def test_next_bucket_cycle(self, seq):
        assert str(seq.in_next_bucket("0|hzzzzz:i")) == "1|hzzzzz:i"
        assert str(seq.in_next_bucket("2|hzzzzz:")) == "0|hzzzzz:"

    def test_prev_bucket_cycle(self, seq):
        assert str(seq.in_prev_bucket("1|hzzzzz:")) == "0|hzzzzz:"
        assert str(seq.in_prev_bucket("0|hzzzzz:")) == "2|hzzzzz:"


# =============================================================================
# ТЕСТЫ: Свойства порядка
# =============================================================================


def _generated_ranks():
    seq = RankSequence()
    ranks = [seq.min(), seq.middle(), seq.max()]
    ranks += seq.sequential(None, 10)
    ranks += [seq.next(r) for r in list(ranks)]
    ranks += [seq.between(low, high) for low, high in zip(sorted(ranks), sorted(ranks)[1:]) if low < high]
    return ranks


class TestOrderProperties:
    """compare — полный порядок над сгенерированными рангами"""

    def test_reflexive(self):
        for rank in _generated_ranks():
            assert compare_ranks(rank, rank) == 0

    def test_antisymmetric(self):
        ranks = _generated_ranks()
        for a, b in itertools.product(ranks[:20], ranks[:20]):
            assert compare_ranks(a, b) == -compare_ranks(b, a)

    def test_transitive(self):
        ranks = _generated_ranks()[:15]
        for a, b, c in itertools.product(ranks, repeat=3):
            if compare_ranks(a, b) <= 0 and compare_ranks(b, c) <= 0:
                assert compare_ranks(a, c) <= 0

    def test_compare_sort_matches_string_sort(self):
        ranks = _generated_ranks()
        by_compare = sorted(ranks, key=functools.cmp_to_key(compare_ranks))
        assert [str(r) for r in by_compare] == sorted(str(r) for r in ranks)

    def test_parse_round_trip(self):
        for rank in _generated_ranks():
            assert parse_rank(str(rank)) == rank


# =============================================================================
# ТЕСТЫ: Convenience functions
# =============================================================================


class TestConvenienceFunctions:
    """Функции поверх DEFAULT_SEQUENCE"""

    def test_default_sequence(self):
        assert isinstance(DEFAULT_SEQUENCE, RankSequence)

    def test_next_rank_empty_collection(self):
        assert str(next_rank(None)) == "0|hzzzzz:"

    def test_next_rank(self):
        assert str(next_rank("0|hzzzzz:")) == "0|i00007:"

    def test_rank_between(self):
        assert str(rank_between("0|000000:", "0|000001:")) == "0|000000:i"

    def test_rank_between_reversed(self):
        with pytest.raises(OrderViolationError):
            rank_between("0|000001:", "0|000000:")
