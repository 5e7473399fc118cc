"""Disjoint interval sets stored as ordered membership transitions.

A ``TineTree`` keeps the boundaries ("tines") of a disjoint union of
intervals as a strictly increasing tuple of cuts (see
``normival.core.normalize``). Walking the tines from the left, each one
toggles membership, so transitions alternate between entering and exiting
the set. ``starts_inside`` records whether the region below the first tine
is covered; with it set the sequence begins with an exit and the set
extends to negative infinity. An unmatched final enter extends the set to
positive infinity.

Because every tine marks a real change of membership and equal point sets
produce equal cuts, two trees denoting the same set are structurally equal.
Trees are immutable; every operation returns a new tree.
"""

import logging
import operator
from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from normival.core.bounds import EMPTY, NormalizedInterval
from normival.core.normalize import (
    NEG_INF,
    POS_INF,
    Cut,
    interval_cuts,
    interval_from_cuts,
)
from normival.core.scalars import BoundableDomain, ScalarDomain

logger = logging.getLogger(__name__)

Predicate = Callable[[bool, bool], bool]


class Transition(str, Enum):
    ENTER = "enter"
    EXIT = "exit"


@dataclass(frozen=True)
class Tine:
    """A membership transition at a boundary.

    The boundary sits immediately below ``position``, or immediately above
    it when ``after`` is set (pass-through domains only).
    """

    position: Any
    transition: Transition
    after: bool = False

    @property
    def key(self) -> Cut:
        return (0, self.position, self.after)


def _subtract(a: bool, b: bool) -> bool:
    return a and not b


class TineTree:
    __slots__ = ("_domain", "_keys", "_starts_inside")

    def __init__(self, domain: ScalarDomain):
        self._domain = domain
        self._keys: tuple[Cut, ...] = ()
        self._starts_inside = False

    # Constructors

    @classmethod
    def _from_keys(
        cls,
        domain: ScalarDomain,
        keys: tuple[Cut, ...],
        starts_inside: bool,
    ) -> "TineTree":
        tree = cls(domain)
        tree._keys = keys
        tree._starts_inside = starts_inside
        return tree

    @classmethod
    def full(cls, domain: ScalarDomain) -> "TineTree":
        return cls._from_keys(domain, (), True)

    @classmethod
    def from_tines(
        cls, domain: ScalarDomain, tines: Iterable[Tine]
    ) -> "TineTree":
        """Build a tree from explicit tines, checking the invariants."""
        tines = list(tines)
        starts_inside = bool(tines) and tines[0].transition == Transition.EXIT
        inside = starts_inside
        previous: Cut | None = None
        for tine in tines:
            if tine.after and isinstance(domain, BoundableDomain):
                raise ValueError("boundable domains only use tines below")
            if (
                isinstance(domain, BoundableDomain)
                and tine.position == domain.minimum
            ):
                raise ValueError("no tine can sit below the domain minimum")
            domain.validate_value(tine.position)
            expected = Transition.EXIT if inside else Transition.ENTER
            if tine.transition != expected:
                raise ValueError(
                    f"tine at {tine.position!r} should be {expected.value}"
                )
            if previous is not None and tine.key <= previous:
                raise ValueError("tine positions must strictly increase")
            previous = tine.key
            inside = not inside
        return cls._from_keys(
            domain, tuple(tine.key for tine in tines), starts_inside
        )

    @classmethod
    def from_intervals(
        cls,
        domain: ScalarDomain,
        intervals: Iterable[NormalizedInterval],
    ) -> "TineTree":
        """Union any number of intervals in one sorted sweep."""
        depth_below = 0
        deltas: dict[Cut, int] = {}
        for interval in intervals:
            cuts = interval_cuts(interval, domain)
            if cuts is None:
                continue
            enter, exit_ = cuts
            if enter == NEG_INF:
                depth_below += 1
            else:
                deltas[enter] = deltas.get(enter, 0) + 1
            if exit_ != POS_INF:
                deltas[exit_] = deltas.get(exit_, 0) - 1

        keys: list[Cut] = []
        depth = depth_below
        for key in sorted(deltas):
            covered = depth > 0
            depth += deltas[key]
            if (depth > 0) != covered:
                keys.append(key)
        return cls._from_keys(domain, tuple(keys), depth_below > 0)

    # Accessors

    @property
    def domain(self) -> ScalarDomain:
        return self._domain

    @property
    def starts_inside(self) -> bool:
        return self._starts_inside

    @property
    def tines(self) -> tuple[Tine, ...]:
        return tuple(
            Tine(
                position=key[1],
                transition=(
                    Transition.EXIT
                    if self._inside_before(index)
                    else Transition.ENTER
                ),
                after=key[2],
            )
            for index, key in enumerate(self._keys)
        )

    def __len__(self) -> int:
        return len(self._keys)

    def is_empty(self) -> bool:
        return not self._keys and not self._starts_inside

    def is_full(self) -> bool:
        return not self._keys and self._starts_inside

    def _inside_before(self, index: int) -> bool:
        # Each tine toggles membership.
        return self._starts_inside != (index % 2 == 1)

    def contains(self, point: Any) -> bool:
        self._domain.validate_value(point)
        index = bisect_right(self._keys, (0, point, False))
        return self._inside_before(index)

    # Single-interval edits

    def _paint(self, enter: Cut, exit_: Cut, value: bool) -> "TineTree":
        if enter >= exit_:
            return self
        keys = self._keys
        lo = 0 if enter == NEG_INF else bisect_left(keys, enter)
        hi = len(keys) if exit_ == POS_INF else bisect_right(keys, exit_)
        middle: list[Cut] = []
        if enter != NEG_INF and self._inside_before(lo) != value:
            middle.append(enter)
        if exit_ != POS_INF and self._inside_before(hi) != value:
            middle.append(exit_)
        starts_inside = value if enter == NEG_INF else self._starts_inside
        return TineTree._from_keys(
            self._domain,
            keys[:lo] + tuple(middle) + keys[hi:],
            starts_inside,
        )

    def insert(self, interval: NormalizedInterval) -> "TineTree":
        """Add an interval, merging every run it overlaps or touches."""
        cuts = interval_cuts(interval, self._domain)
        if cuts is None:
            return self
        return self._paint(cuts[0], cuts[1], True)

    def remove(self, interval: NormalizedInterval) -> "TineTree":
        """Remove an interval, clipping or splitting the runs it meets."""
        cuts = interval_cuts(interval, self._domain)
        if cuts is None:
            return self
        return self._paint(cuts[0], cuts[1], False)

    def clip(self, interval: NormalizedInterval) -> "TineTree":
        """Keep only the part of the set inside ``interval``."""
        cuts = interval_cuts(interval, self._domain)
        if cuts is None:
            return TineTree(self._domain)
        enter, exit_ = cuts
        return self._paint(NEG_INF, enter, False)._paint(
            exit_, POS_INF, False
        )

    # Tree-vs-tree set operations

    def _sweep(self, other: "TineTree", predicate: Predicate) -> "TineTree":
        a, b = self._keys, other._keys
        in_a, in_b = self._starts_inside, other._starts_inside
        starts_inside = predicate(in_a, in_b)
        state = starts_inside
        keys: list[Cut] = []
        i = j = 0
        while i < len(a) or j < len(b):
            if j >= len(b) or (i < len(a) and a[i] < b[j]):
                key = a[i]
                in_a = not in_a
                i += 1
            elif i >= len(a) or b[j] < a[i]:
                key = b[j]
                in_b = not in_b
                j += 1
            else:
                # Shared boundary: both trees switch at once.
                key = a[i]
                in_a = not in_a
                in_b = not in_b
                i += 1
                j += 1
            covered = predicate(in_a, in_b)
            if covered != state:
                keys.append(key)
                state = covered
        logger.debug(
            "sweep %s: %d + %d tines -> %d",
            getattr(predicate, "__name__", predicate),
            len(a),
            len(b),
            len(keys),
        )
        return TineTree._from_keys(self._domain, tuple(keys), starts_inside)

    def union(self, other: "TineTree") -> "TineTree":
        return self._sweep(other, operator.or_)

    def intersect(self, other: "TineTree") -> "TineTree":
        return self._sweep(other, operator.and_)

    def subtract(self, other: "TineTree") -> "TineTree":
        return self._sweep(other, _subtract)

    def symmetric_difference(self, other: "TineTree") -> "TineTree":
        return self._sweep(other, operator.xor)

    def complement(self) -> "TineTree":
        return TineTree._from_keys(
            self._domain, self._keys, not self._starts_inside
        )

    # Traversal

    def _boundary(self, index: int) -> Cut:
        if self._starts_inside:
            if index == 0:
                return NEG_INF
            index -= 1
        if index == len(self._keys):
            return POS_INF
        return self._keys[index]

    def run_count(self) -> int:
        return (len(self._keys) + int(self._starts_inside) + 1) // 2

    def run(self, index: int) -> NormalizedInterval:
        """The ``index``-th covered interval in increasing order."""
        if not 0 <= index < self.run_count():
            raise IndexError(index)
        return interval_from_cuts(
            self._boundary(2 * index),
            self._boundary(2 * index + 1),
            self._domain,
        )

    def to_intervals(
        self, reverse: bool = False
    ) -> Iterator[NormalizedInterval]:
        indices = range(self.run_count())
        for index in reversed(indices) if reverse else indices:
            yield self.run(index)

    def lower_cut(self) -> Cut | None:
        return None if self.is_empty() else self._boundary(0)

    def upper_cut(self) -> Cut | None:
        if self.is_empty():
            return None
        return self._boundary(2 * self.run_count() - 1)

    def enclose(self) -> NormalizedInterval:
        lower, upper = self.lower_cut(), self.upper_cut()
        if lower is None or upper is None:
            return EMPTY
        return interval_from_cuts(lower, upper, self._domain)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TineTree):
            return NotImplemented
        return (
            self._keys == other._keys
            and self._starts_inside == other._starts_inside
            and self._domain == other._domain
        )

    def __hash__(self) -> int:
        return hash((self._keys, self._starts_inside, self._domain))

    def __repr__(self) -> str:
        return (
            f"TineTree({self._domain.name}, starts_inside="
            f"{self._starts_inside}, tines={len(self._keys)})"
        )
