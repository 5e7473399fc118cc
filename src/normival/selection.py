"""Possibly-disjoint sets of intervals with full set algebra."""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from normival.core.bounds import Bound
from normival.core.errors import DomainMismatchError
from normival.core.scalars import INTEGERS, ScalarDomain, require_boundable
from normival.interval import Interval
from normival.render import format_union
from normival.tine_tree import TineTree


class IntervalRun(Sequence[Interval]):
    """The disjoint intervals of a selection, in increasing order.

    Iterating is restartable and never mutates the selection; ``reversed``
    walks the intervals in decreasing order.
    """

    __slots__ = ("_tree",)

    def __init__(self, tree: TineTree):
        self._tree = tree

    @property
    def domain(self) -> ScalarDomain:
        return self._tree.domain

    def __len__(self) -> int:
        return self._tree.run_count()

    @overload
    def __getitem__(self, index: int) -> Interval: ...

    @overload
    def __getitem__(self, index: slice) -> list[Interval]: ...

    def __getitem__(self, index: int | slice) -> Interval | list[Interval]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        return Interval.from_normalized(
            self._tree.run(index), self._tree.domain
        )

    def __iter__(self) -> Iterator[Interval]:
        return self._intervals(reverse=False)

    def __reversed__(self) -> Iterator[Interval]:
        return self._intervals(reverse=True)

    def _intervals(self, reverse: bool) -> Iterator[Interval]:
        domain = self._tree.domain
        for normalized in self._tree.to_intervals(reverse=reverse):
            yield Interval.from_normalized(normalized, domain)

    def __repr__(self) -> str:
        return f"IntervalRun({list(self)!r})"


class Selection:
    """A normalized union of disjoint intervals over one scalar domain.

    Selections are immutable. Every operation returns a new selection whose
    tine tree is already merged, so equal point sets compare equal.
    """

    __slots__ = ("_tree",)

    def __init__(self, tree: TineTree):
        self._tree = tree

    # Constructors

    @classmethod
    def empty(cls, domain: ScalarDomain = INTEGERS) -> "Selection":
        return cls(TineTree(domain))

    @classmethod
    def full(cls, domain: ScalarDomain = INTEGERS) -> "Selection":
        return cls(TineTree.full(domain))

    @classmethod
    def from_interval(cls, interval: Interval) -> "Selection":
        return cls(TineTree(interval.domain).insert(interval.normalized))

    @classmethod
    def from_intervals(
        cls,
        intervals: Iterable[Interval],
        domain: ScalarDomain | None = None,
    ) -> "Selection":
        """Union any number of intervals.

        The domain is taken from the first interval when not given; an
        empty input needs an explicit domain unless ``int`` is intended.
        """
        if domain is None and isinstance(intervals, IntervalRun):
            domain = intervals.domain
        intervals = list(intervals)
        if domain is None:
            domain = intervals[0].domain if intervals else INTEGERS
        for interval in intervals:
            if interval.domain != domain:
                raise DomainMismatchError(domain.name, interval.domain.name)
        return cls(
            TineTree.from_intervals(
                domain, (interval.normalized for interval in intervals)
            )
        )

    @classmethod
    def from_points(
        cls, points: Iterable[Any], domain: ScalarDomain = INTEGERS
    ) -> "Selection":
        return cls.from_intervals(
            (Interval.point(point, domain) for point in points), domain
        )

    # Accessors

    @property
    def domain(self) -> ScalarDomain:
        return self._tree.domain

    @property
    def tree(self) -> TineTree:
        return self._tree

    def to_intervals(self) -> IntervalRun:
        return IntervalRun(self._tree)

    def iter_intervals(self, reverse: bool = False) -> Iterator[Interval]:
        run = self.to_intervals()
        return reversed(run) if reverse else iter(run)

    @property
    def interval_count(self) -> int:
        return self._tree.run_count()

    @property
    def lower(self) -> Bound | None:
        return self.enclose().lower

    @property
    def upper(self) -> Bound | None:
        return self.enclose().upper

    @property
    def infimum(self) -> Any | None:
        return self.enclose().infimum

    @property
    def supremum(self) -> Any | None:
        return self.enclose().supremum

    # Queries

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def is_full(self) -> bool:
        return self._tree.is_full()

    def is_normalized(self) -> bool:
        return self.domain.is_finite()

    def is_bounded(self) -> bool:
        return self.enclose().is_bounded()

    def is_left_bounded(self) -> bool:
        return self.enclose().is_left_bounded()

    def is_right_bounded(self) -> bool:
        return self.enclose().is_right_bounded()

    def is_half_bounded(self) -> bool:
        return self.enclose().is_half_bounded()

    def contains(self, point: Any) -> bool:
        return self._tree.contains(point)

    def overlaps(self, other: "Selection | Interval") -> bool:
        return not self._tree.intersect(self._coerce(other)).is_empty()

    def enclose(self) -> Interval:
        """Smallest interval containing the whole selection."""
        return Interval.from_normalized(self._tree.enclose(), self.domain)

    def closure(self) -> Interval:
        """Smallest closed interval containing the whole selection."""
        return self.enclose().closure()

    def size(self) -> int:
        """Number of points selected (boundable, bounded selections)."""
        require_boundable(self.domain, "size")
        return sum(interval.size() for interval in self.to_intervals())

    def points(self, reverse: bool = False) -> Iterator[Any]:
        require_boundable(self.domain, "points")
        for interval in self.iter_intervals(reverse=reverse):
            yield from interval.points(reverse=reverse)

    # Set algebra

    def union_with(self, other: "Selection | Interval") -> "Selection":
        return Selection(self._tree.union(self._coerce(other)))

    def intersect_with(self, other: "Selection | Interval") -> "Selection":
        return Selection(self._tree.intersect(self._coerce(other)))

    def subtract(self, other: "Selection | Interval") -> "Selection":
        return Selection(self._tree.subtract(self._coerce(other)))

    def symmetric_difference(
        self, other: "Selection | Interval"
    ) -> "Selection":
        return Selection(self._tree.symmetric_difference(self._coerce(other)))

    def complement(self) -> "Selection":
        return Selection(self._tree.complement())

    def add_interval(self, interval: Interval) -> "Selection":
        self._check_domain(interval.domain)
        return Selection(self._tree.insert(interval.normalized))

    def remove_interval(self, interval: Interval) -> "Selection":
        self._check_domain(interval.domain)
        return Selection(self._tree.remove(interval.normalized))

    def clip(self, interval: Interval) -> "Selection":
        self._check_domain(interval.domain)
        return Selection(self._tree.clip(interval.normalized))

    def _coerce(self, other: "Selection | Interval") -> TineTree:
        if isinstance(other, Interval):
            self._check_domain(other.domain)
            return TineTree(other.domain).insert(other.normalized)
        self._check_domain(other.domain)
        return other._tree

    def _check_domain(self, domain: ScalarDomain) -> None:
        if domain != self.domain:
            raise DomainMismatchError(self.domain.name, domain.name)

    # Dunder

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._tree == other._tree

    def __hash__(self) -> int:
        return hash(self._tree)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.to_intervals())

    def __str__(self) -> str:
        return format_union(self._tree.to_intervals(), self.domain)

    def __repr__(self) -> str:
        return f"Selection({self}, domain={self.domain.name})"
