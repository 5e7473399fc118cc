import datetime

import pytest

from normival import (
    INTEGERS,
    Bound,
    DateDomain,
    DomainMismatchError,
    IntegerDomain,
    Interval,
    PassThroughDomain,
    RawInterval,
    ScalarRangeError,
    UnsupportedScalarError,
)

I8 = IntegerDomain(bits=8)
FLOATS = PassThroughDomain(value_type="float")


def iv(lo, hi, domain=INTEGERS) -> Interval:
    return Interval.closed(lo, hi, domain)


class TestConstruction:
    def test_open_lower_equals_successor(self) -> None:
        assert Interval(Bound.open(0), Bound.closed(15)) == Interval.closed(
            1, 15
        )

    def test_bare_values_are_closed(self) -> None:
        assert Interval(0, 5) == Interval(Bound.closed(0), Bound.closed(5))

    @pytest.mark.parametrize(
        "interval,expected",
        [
            (Interval.open(0, 5), iv(1, 4)),
            (Interval.left_open(0, 5), iv(1, 5)),
            (Interval.right_open(0, 5), iv(0, 4)),
            (Interval.point(3), iv(3, 3)),
            (Interval.open(2, 3), Interval.empty()),
            (Interval.closed(5, 1), Interval.empty()),
        ],
    )
    def test_named_constructors(self, interval, expected) -> None:
        assert interval == expected

    def test_rays(self) -> None:
        assert Interval.unbounded_from(3).lower == Bound.closed(3)
        assert Interval.unbounded_up_from(3).lower == Bound.closed(4)
        assert Interval.unbounded_to(3).upper == Bound.closed(3)
        assert Interval.unbounded_up_to(3).upper == Bound.closed(2)
        assert Interval.unbounded_from(3).upper == Bound.unbounded()

    def test_from_raw(self) -> None:
        raw = RawInterval(lower=Bound.open(0), upper=Bound.open(10))
        assert Interval.from_raw(raw) == iv(1, 9)

    def test_empty_intervals_are_equal_regardless_of_bounds(self) -> None:
        assert Interval.closed(9, 2) == Interval.open(4, 5)
        assert hash(Interval.closed(9, 2)) == hash(Interval.empty())

    def test_domain_is_part_of_identity(self) -> None:
        assert iv(1, 5) != iv(1, 5, I8)

    def test_full_over_bounded_domain(self) -> None:
        assert iv(-128, 127, I8).is_full()
        assert Interval.unbounded_from(-128, I8) == Interval.full(I8)
        assert Interval.full(I8) == iv(-128, 127, I8)
        assert Interval.full(I8).infimum == -128
        assert Interval.full(I8).supremum == 127
        assert Interval.unbounded_to(5, I8).lower == Bound.closed(-128)

    @pytest.mark.parametrize("value", [-128, 0, 127])
    def test_point_at_extreme_stays_degenerate(self, value: int) -> None:
        point = Interval.point(value, I8)
        assert point.is_degenerate()
        assert point.lower == point.upper == Bound.closed(value)
        assert point.supremum == value
        assert str(point) == str(value)
        assert not point.is_full()

    def test_open_at_extreme_is_empty(self) -> None:
        assert Interval.unbounded_up_from(127, I8).is_empty()
        assert Interval.unbounded_up_to(-128, I8).is_empty()

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ScalarRangeError):
            iv(0, 200, I8)
        with pytest.raises(UnsupportedScalarError):
            Interval(1.5, 3)


class TestQueries:
    def test_bounds_and_extrema(self) -> None:
        interval = Interval.open(0, 10)
        assert interval.lower == Bound.closed(1)
        assert interval.upper == Bound.closed(9)
        assert interval.infimum == 1
        assert interval.supremum == 9
        assert Interval.empty().infimum is None
        assert Interval.full().supremum is None

    def test_boundedness(self) -> None:
        assert iv(1, 2).is_bounded()
        ray = Interval.unbounded_from(1)
        assert ray.is_half_bounded()
        assert ray.is_left_bounded()
        assert not ray.is_right_bounded()
        assert not Interval.full().is_bounded()
        assert Interval.empty().is_bounded()

    def test_degenerate(self) -> None:
        assert Interval.point(4).is_degenerate()
        assert Interval.left_open(3, 4).is_degenerate()
        assert not iv(3, 4).is_degenerate()
        assert not Interval.empty().is_degenerate()

    def test_contains(self) -> None:
        interval = Interval.left_open(0, 15)
        assert not interval.contains(0)
        assert interval.contains(1)
        assert interval.contains(15)
        assert not interval.contains(16)
        assert Interval.full().contains(10**30)
        assert not Interval.empty().contains(0)

    def test_contains_validates_point(self) -> None:
        with pytest.raises(UnsupportedScalarError):
            iv(0, 5).contains("3")
        with pytest.raises(ScalarRangeError):
            iv(0, 5, I8).contains(1000)

    def test_overlaps(self) -> None:
        assert iv(0, 5).overlaps(iv(5, 9))
        assert not iv(0, 4).overlaps(iv(5, 9))
        assert not iv(0, 4).overlaps(Interval.empty())
        assert Interval.full().overlaps(iv(3, 3))

    def test_adjacent(self) -> None:
        assert iv(0, 4).is_adjacent(iv(5, 6))
        assert iv(5, 6).is_adjacent(iv(0, 4))
        assert Interval.left_open(0, 4).is_adjacent(Interval.open(4, 8))
        assert not iv(0, 3).is_adjacent(iv(5, 6))
        assert not iv(0, 5).is_adjacent(iv(5, 6))

    def test_adjacent_pass_through_needs_open_closed_pair(self) -> None:
        left = Interval.right_open(0.0, 1.0, FLOATS)
        assert left.is_adjacent(Interval.closed(1.0, 2.0, FLOATS))
        assert not left.is_adjacent(Interval.left_open(1.0, 2.0, FLOATS))

    def test_is_normalized_reports_mode(self) -> None:
        assert iv(0, 1).is_normalized()
        assert not Interval.right_open(0.0, 1.0, FLOATS).is_normalized()


class TestOpenness:
    def test_integer_intervals_are_closed(self) -> None:
        interval = Interval.open(0, 10, I8)
        assert interval.is_closed()
        assert interval.is_left_closed() and interval.is_right_closed()
        assert not interval.is_open()
        assert not interval.is_half_open()
        assert Interval.full(I8).is_closed()

    def test_unbounded_sides_count_as_open(self) -> None:
        ray = Interval.unbounded_to(3)
        assert ray.is_left_open()
        assert ray.is_right_closed()
        assert ray.is_half_open()
        assert ray.is_half_closed()
        assert ray.is_closed()
        assert Interval.full().is_open()
        assert Interval.full().is_closed()

    @pytest.mark.parametrize(
        "interval,left_open,right_open",
        [
            (Interval.open(0.0, 1.0, FLOATS), True, True),
            (Interval.left_open(0.0, 1.0, FLOATS), True, False),
            (Interval.right_open(0.0, 1.0, FLOATS), False, True),
            (Interval.closed(0.0, 1.0, FLOATS), False, False),
        ],
    )
    def test_pass_through_openness(
        self, interval, left_open, right_open
    ) -> None:
        assert interval.is_left_open() == left_open
        assert interval.is_right_open() == right_open
        assert interval.is_left_closed() != left_open
        assert interval.is_right_closed() != right_open
        assert interval.is_open() == (left_open and right_open)
        assert interval.is_closed() == (not left_open and not right_open)
        assert interval.is_half_open() == (left_open != right_open)
        assert interval.is_half_closed() == (left_open != right_open)

    def test_empty_is_neither_side(self) -> None:
        empty = Interval.empty(FLOATS)
        assert not empty.is_left_open() and not empty.is_right_open()
        assert not empty.is_left_closed() and not empty.is_right_closed()
        assert empty.is_open() and empty.is_closed()
        assert not empty.is_half_open()

    def test_proper(self) -> None:
        assert iv(0, 1).is_proper()
        assert not Interval.point(0).is_proper()
        assert not Interval.empty().is_proper()
        assert Interval.open(0.0, 1.0, FLOATS).is_proper()
        assert not Interval.point(127, I8).is_proper()

    def test_closure(self) -> None:
        assert Interval.open(0.0, 1.0, FLOATS).closure() == Interval.closed(
            0.0, 1.0, FLOATS
        )
        ray = Interval.unbounded_up_from(2.5, FLOATS)
        assert ray.closure() == Interval.unbounded_from(2.5, FLOATS)
        assert iv(-128, 5, I8).closure() == iv(-128, 5, I8)
        assert Interval.empty(FLOATS).closure().is_empty()

    def test_denormalized(self) -> None:
        assert iv(1, 15).denormalized() == RawInterval(
            lower=Bound.open(0), upper=Bound.open(16)
        )
        assert Interval.point(127, I8).denormalized() == RawInterval(
            lower=Bound.open(126), upper=Bound.unbounded()
        )
        assert Interval.empty().denormalized() is None
        denormalized = iv(3, 9, I8).denormalized()
        assert Interval.from_raw(denormalized, I8) == iv(3, 9, I8)


class TestSetOperations:
    def test_union_merges_adjacent(self) -> None:
        assert iv(0, 4).union(iv(5, 6)) == (iv(0, 6),)
        assert Interval.left_open(0, 4).union(iv(5, 6)) == (iv(1, 6),)

    def test_union_keeps_disjoint_operands_in_order(self) -> None:
        assert iv(7, 9).union(iv(0, 3)) == (iv(7, 9), iv(0, 3))

    def test_union_with_empty_returns_other(self) -> None:
        assert Interval.empty().union(iv(1, 2)) == (iv(1, 2),)
        assert iv(1, 2).union(Interval.empty()) == (iv(1, 2),)

    def test_union_commutes_as_point_set(self) -> None:
        a, b = iv(0, 10), iv(4, 20)
        assert a.union(b) == b.union(a) == (iv(0, 20),)

    def test_intersect(self) -> None:
        assert iv(0, 10).intersect(iv(5, 20)) == iv(5, 10)
        assert iv(0, 4).intersect(iv(5, 20)).is_empty()
        assert iv(0, 4).intersect(Interval.empty()).is_empty()
        assert Interval.full().intersect(iv(1, 2)) == iv(1, 2)

    def test_difference_splits(self) -> None:
        assert iv(0, 10).difference(iv(4, 6)) == (iv(0, 3), iv(7, 10))

    @pytest.mark.parametrize(
        "left,right,expected",
        [
            (iv(0, 10), iv(0, 10), ()),
            (iv(0, 10), iv(-5, 3), (iv(4, 10),)),
            (iv(0, 10), iv(8, 30), (iv(0, 7),)),
            (iv(0, 10), iv(20, 30), (iv(0, 10),)),
            (Interval.empty(), iv(0, 1), ()),
            (iv(0, 10), Interval.empty(), (iv(0, 10),)),
            (
                Interval.full(),
                iv(0, 10),
                (Interval.unbounded_to(-1), Interval.unbounded_from(11)),
            ),
        ],
    )
    def test_difference(self, left, right, expected) -> None:
        assert left.difference(right) == expected

    def test_complement(self) -> None:
        assert iv(0, 10).complement() == (
            Interval.unbounded_to(-1),
            Interval.unbounded_from(11),
        )
        assert Interval.empty().complement() == (Interval.full(),)
        assert Interval.full().complement() == ()
        assert Interval.unbounded_from(5).complement() == (
            Interval.unbounded_to(4),
        )

    def test_complement_on_bounded_domain(self) -> None:
        assert iv(-128, 0, I8).complement() == (iv(1, 127, I8),)
        assert iv(-128, 0, I8).complement()[0].upper == Bound.closed(127)
        assert Interval.point(127, I8).complement() == (iv(-128, 126, I8),)

    def test_complement_pass_through_flips_openness(self) -> None:
        left, right = Interval.right_open(0.0, 1.0, FLOATS).complement()
        assert left == Interval.unbounded_up_to(0.0, FLOATS)
        assert right == Interval.unbounded_from(1.0, FLOATS)

    def test_enclose(self) -> None:
        assert iv(0, 2).enclose(iv(8, 9)) == iv(0, 9)
        assert Interval.empty().enclose(iv(8, 9)) == iv(8, 9)

    def test_domain_mismatch(self) -> None:
        with pytest.raises(DomainMismatchError):
            iv(0, 1).union(iv(0, 1, I8))
        with pytest.raises(ValueError):
            iv(0, 1).intersect(iv(0, 1, I8))


class TestPoints:
    def test_size(self) -> None:
        assert iv(1, 15).size() == 15
        assert Interval.empty().size() == 0
        assert Interval.full(I8).size() == 256

    def test_points_both_directions(self) -> None:
        assert list(Interval.open(0, 5).points()) == [1, 2, 3, 4]
        assert list(Interval.open(0, 5).points(reverse=True)) == [4, 3, 2, 1]
        assert list(Interval.empty().points()) == []

    def test_points_over_bounded_domain_rays(self) -> None:
        points = list(Interval.unbounded_from(125, I8).points())
        assert points == [125, 126, 127]

    def test_date_points(self) -> None:
        domain = DateDomain()
        interval = Interval.open(
            datetime.date(2024, 2, 27), datetime.date(2024, 3, 2), domain
        )
        assert interval.size() == 3
        assert list(interval.points())[-1] == datetime.date(2024, 3, 1)

    def test_unbounded_points_raise(self) -> None:
        with pytest.raises(ValueError, match="unbounded"):
            Interval.unbounded_from(0).size()

    def test_pass_through_has_no_points(self) -> None:
        with pytest.raises(UnsupportedScalarError):
            Interval.closed(0.0, 1.0, FLOATS).size()
        with pytest.raises(UnsupportedScalarError):
            Interval.closed(0.0, 1.0, FLOATS).points()


class TestRendering:
    @pytest.mark.parametrize(
        "interval,text",
        [
            (iv(1, 15), "[1,15]"),
            (Interval.point(3), "3"),
            (Interval.empty(), "Ø"),
            (Interval.full(), "(-∞,∞)"),
            (Interval.unbounded_up_from(3), "[4,∞)"),
            (Interval.right_open(0.5, 1.0, FLOATS), "[0.5,1.0)"),
        ],
    )
    def test_str(self, interval, text) -> None:
        assert str(interval) == text

    def test_repr_names_domain(self) -> None:
        assert repr(iv(1, 2, I8)) == "Interval([1,2], domain=i8)"
