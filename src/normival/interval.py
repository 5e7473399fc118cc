"""The normalizing ``Interval`` value type."""

from collections.abc import Iterator
from typing import Any

from normival.core.bounds import (
    EMPTY,
    Bound,
    NormalizedInterval,
    RawInterval,
)
from normival.core.errors import DomainMismatchError
from normival.core.normalize import (
    NEG_INF,
    POS_INF,
    Cut,
    denormalize,
    interval_cuts,
    interval_from_cuts,
    normalize,
)
from normival.core.scalars import INTEGERS, ScalarDomain, require_boundable
from normival.render import format_normalized


def _as_bound(value: Bound | Any) -> Bound:
    if isinstance(value, Bound):
        return value
    return Bound.closed(value)


class Interval:
    """A contiguous set of points, always held in normalized form.

    Intervals are immutable; every operation returns new intervals. Bare
    values passed as bounds are treated as closed bounds, so
    ``Interval(0, 5)`` is ``[0, 5]``.
    """

    __slots__ = ("_normalized", "_domain")

    def __init__(
        self,
        lower: Bound | Any,
        upper: Bound | Any,
        domain: ScalarDomain = INTEGERS,
    ):
        raw = RawInterval(lower=_as_bound(lower), upper=_as_bound(upper))
        self._normalized = normalize(raw, domain)
        self._domain = domain

    # Constructors

    @classmethod
    def from_raw(
        cls, raw: RawInterval, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        return cls(raw.lower, raw.upper, domain)

    @classmethod
    def from_normalized(
        cls, normalized: NormalizedInterval, domain: ScalarDomain
    ) -> "Interval":
        """Wrap an already-canonical interval without re-normalizing."""
        interval = cls.__new__(cls)
        interval._normalized = normalized
        interval._domain = domain
        return interval

    @classmethod
    def from_cuts(
        cls, enter: Cut, exit_: Cut, domain: ScalarDomain
    ) -> "Interval":
        return cls.from_normalized(
            interval_from_cuts(enter, exit_, domain), domain
        )

    @classmethod
    def empty(cls, domain: ScalarDomain = INTEGERS) -> "Interval":
        return cls.from_normalized(EMPTY, domain)

    @classmethod
    def full(cls, domain: ScalarDomain = INTEGERS) -> "Interval":
        return cls(Bound.unbounded(), Bound.unbounded(), domain)

    @classmethod
    def point(cls, value: Any, domain: ScalarDomain = INTEGERS) -> "Interval":
        return cls(Bound.closed(value), Bound.closed(value), domain)

    @classmethod
    def closed(
        cls, lower: Any, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        return cls(Bound.closed(lower), Bound.closed(upper), domain)

    @classmethod
    def open(
        cls, lower: Any, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        return cls(Bound.open(lower), Bound.open(upper), domain)

    @classmethod
    def left_open(
        cls, lower: Any, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        return cls(Bound.open(lower), Bound.closed(upper), domain)

    @classmethod
    def right_open(
        cls, lower: Any, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        return cls(Bound.closed(lower), Bound.open(upper), domain)

    @classmethod
    def unbounded_from(
        cls, lower: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        """``[lower, +inf)``"""
        return cls(Bound.closed(lower), Bound.unbounded(), domain)

    @classmethod
    def unbounded_up_from(
        cls, lower: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        """``(lower, +inf)``"""
        return cls(Bound.open(lower), Bound.unbounded(), domain)

    @classmethod
    def unbounded_to(
        cls, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        """``(-inf, upper]``"""
        return cls(Bound.unbounded(), Bound.closed(upper), domain)

    @classmethod
    def unbounded_up_to(
        cls, upper: Any, domain: ScalarDomain = INTEGERS
    ) -> "Interval":
        """``(-inf, upper)``"""
        return cls(Bound.unbounded(), Bound.open(upper), domain)

    # Accessors

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    @property
    def normalized(self) -> NormalizedInterval:
        return self._normalized

    @property
    def lower(self) -> Bound | None:
        return self._normalized.lower

    @property
    def upper(self) -> Bound | None:
        return self._normalized.upper

    @property
    def infimum(self) -> Any | None:
        lower = self._normalized.lower
        return lower.value if lower is not None else None

    @property
    def supremum(self) -> Any | None:
        upper = self._normalized.upper
        return upper.value if upper is not None else None

    def cuts(self) -> tuple[Cut, Cut] | None:
        return interval_cuts(self._normalized, self._domain)

    # Queries

    def is_empty(self) -> bool:
        return self._normalized.is_empty

    def is_full(self) -> bool:
        return self.cuts() == (NEG_INF, POS_INF)

    def is_normalized(self) -> bool:
        """False when the domain is pass-through and open bounds are kept."""
        return self._domain.is_finite()

    def is_degenerate(self) -> bool:
        lower, upper = self.lower, self.upper
        return (
            lower is not None
            and upper is not None
            and lower.is_closed
            and upper.is_closed
            and lower.value == upper.value
        )

    def is_proper(self) -> bool:
        """True when the interval holds more than one point."""
        return not (self.is_empty() or self.is_degenerate())

    # Openness. An unbounded side counts as open; the empty interval is
    # neither left nor right open or closed.

    def is_left_open(self) -> bool:
        return self.lower is not None and not self.lower.is_closed

    def is_right_open(self) -> bool:
        return self.upper is not None and not self.upper.is_closed

    def is_left_closed(self) -> bool:
        return self.lower is not None and self.lower.is_closed

    def is_right_closed(self) -> bool:
        return self.upper is not None and self.upper.is_closed

    def is_open(self) -> bool:
        """True when no finite bound is closed."""
        lower, upper = self.lower, self.upper
        return not (
            (lower is not None and lower.is_closed)
            or (upper is not None and upper.is_closed)
        )

    def is_closed(self) -> bool:
        """True when no finite bound is open."""
        lower, upper = self.lower, self.upper
        return not (
            (lower is not None and lower.is_open)
            or (upper is not None and upper.is_open)
        )

    def is_half_open(self) -> bool:
        return self.is_left_open() != self.is_right_open()

    def is_half_closed(self) -> bool:
        return self.is_left_closed() != self.is_right_closed()

    def is_left_bounded(self) -> bool:
        return self.lower is None or self.lower.is_finite

    def is_right_bounded(self) -> bool:
        return self.upper is None or self.upper.is_finite

    def is_bounded(self) -> bool:
        return self.is_left_bounded() and self.is_right_bounded()

    def is_half_bounded(self) -> bool:
        return self.is_left_bounded() != self.is_right_bounded()

    def contains(self, point: Any) -> bool:
        raw = self._normalized.to_raw()
        if raw is None:
            return False
        self._domain.validate_value(point)
        return raw.contains(point)

    def overlaps(self, other: "Interval") -> bool:
        self._check_domain(other)
        mine, theirs = self.cuts(), other.cuts()
        if mine is None or theirs is None:
            return False
        return max(mine[0], theirs[0]) < min(mine[1], theirs[1])

    def is_adjacent(self, other: "Interval") -> bool:
        """True when the two intervals touch with no value between them."""
        self._check_domain(other)
        mine, theirs = self.cuts(), other.cuts()
        if mine is None or theirs is None:
            return False
        return mine[1] == theirs[0] or theirs[1] == mine[0]

    # Set operations

    def union(self, other: "Interval") -> tuple["Interval", ...]:
        """Merge into one interval, or return both operands if disjoint."""
        self._check_domain(other)
        if other.is_empty():
            return (self,)
        if self.is_empty():
            return (other,)
        if self.overlaps(other) or self.is_adjacent(other):
            return (self.enclose(other),)
        return (self, other)

    def intersect(self, other: "Interval") -> "Interval":
        self._check_domain(other)
        mine, theirs = self.cuts(), other.cuts()
        if mine is None or theirs is None:
            return Interval.empty(self._domain)
        return Interval.from_cuts(
            max(mine[0], theirs[0]), min(mine[1], theirs[1]), self._domain
        )

    def difference(self, other: "Interval") -> tuple["Interval", ...]:
        """Points of ``self`` not in ``other``; 0, 1 or 2 intervals."""
        self._check_domain(other)
        mine = self.cuts()
        if mine is None:
            return ()
        if not self.overlaps(other):
            return (self,)
        theirs = other.cuts()
        assert theirs is not None
        pieces = (
            Interval.from_cuts(mine[0], theirs[0], self._domain),
            Interval.from_cuts(theirs[1], mine[1], self._domain),
        )
        return tuple(piece for piece in pieces if not piece.is_empty())

    def complement(self) -> tuple["Interval", ...]:
        mine = self.cuts()
        if mine is None:
            return (Interval.full(self._domain),)
        pieces = (
            Interval.from_cuts(NEG_INF, mine[0], self._domain),
            Interval.from_cuts(mine[1], POS_INF, self._domain),
        )
        return tuple(piece for piece in pieces if not piece.is_empty())

    def closure(self) -> "Interval":
        """Smallest closed interval containing this one."""
        raw = self._normalized.to_raw()
        if raw is None:
            return self
        lower, upper = raw.lower, raw.upper
        if lower.is_open:
            lower = Bound.closed(lower.value)
        if upper.is_open:
            upper = Bound.closed(upper.value)
        return Interval(lower, upper, self._domain)

    def denormalized(self) -> RawInterval | None:
        """The same points written with open bounds, or None if empty."""
        return denormalize(self._normalized, self._domain)

    def enclose(self, other: "Interval") -> "Interval":
        """Smallest interval containing both operands."""
        self._check_domain(other)
        mine, theirs = self.cuts(), other.cuts()
        if mine is None:
            return other
        if theirs is None:
            return self
        return Interval.from_cuts(
            min(mine[0], theirs[0]), max(mine[1], theirs[1]), self._domain
        )

    # Point access (boundable domains only)

    def size(self) -> int:
        """Number of points in the interval."""
        domain = require_boundable(self._domain, "size")
        if self.is_empty():
            return 0
        lo, hi = self._point_range()
        return domain.count_between(lo, hi)

    def points(self, reverse: bool = False) -> Iterator[Any]:
        """Iterate the interval's points in increasing or decreasing order."""
        domain = require_boundable(self._domain, "points")
        if self.is_empty():
            return iter(())
        lo, hi = self._point_range()
        if reverse:
            return _walk(hi, lo, domain.predecessor)
        return _walk(lo, hi, domain.successor)

    def _point_range(self) -> tuple[Any, Any]:
        domain = require_boundable(self._domain, "point access")
        lower, upper = self.lower, self.upper
        assert lower is not None and upper is not None
        lo = lower.value if lower.is_finite else domain.minimum
        hi = upper.value if upper.is_finite else domain.maximum
        if lo is None or hi is None:
            raise ValueError(
                f"interval {self} is unbounded over {domain.name}"
            )
        return lo, hi

    def _check_domain(self, other: "Interval") -> None:
        if other._domain != self._domain:
            raise DomainMismatchError(self._domain.name, other._domain.name)

    # Dunder

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (
            self._normalized == other._normalized
            and self._domain == other._domain
        )

    def __hash__(self) -> int:
        return hash((self._normalized, self._domain))

    def __str__(self) -> str:
        return format_normalized(self._normalized, self._domain)

    def __repr__(self) -> str:
        return f"Interval({self}, domain={self._domain.name})"


def _walk(start: Any, stop: Any, step: Any) -> Iterator[Any]:
    current = start
    while True:
        yield current
        if current == stop:
            return
        current = step(current)
