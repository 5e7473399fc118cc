"""Normalization of raw intervals and the boundary-cut ordering.

A *cut* is a position between scalar values, encoded as a tuple so that
plain tuple comparison orders it:

* ``NEG_INF`` sits below every value and ``POS_INF`` above every value.
* ``(0, v, False)`` sits immediately below ``v``.
* ``(0, v, True)`` sits immediately above ``v``.

Over a boundable domain the cut above ``v`` is the cut below its successor,
so only the ``False`` form is ever produced there and equal point sets get
equal cuts. An interval is the region between its enter cut and its exit
cut, and is empty exactly when ``enter >= exit``.
"""

import logging
from typing import Any

from normival.core.bounds import (
    EMPTY,
    Bound,
    BoundKind,
    NormalizedInterval,
    RawInterval,
)
from normival.core.scalars import BoundableDomain, ScalarDomain

logger = logging.getLogger(__name__)

Cut = tuple[int, Any, bool]
NEG_INF: Cut = (-1, None, False)
POS_INF: Cut = (1, None, False)


def _validated(bound: Bound, domain: ScalarDomain) -> Bound:
    if bound.is_finite:
        domain.validate_value(bound.value)
    return bound


def _close_lower(bound: Bound, domain: BoundableDomain) -> Bound | None:
    if bound.kind != BoundKind.OPEN:
        return bound
    nxt = domain.successor(bound.value)
    return None if nxt is None else Bound.closed(nxt)


def _close_upper(bound: Bound, domain: BoundableDomain) -> Bound | None:
    if bound.kind != BoundKind.OPEN:
        return bound
    prev = domain.predecessor(bound.value)
    return None if prev is None else Bound.closed(prev)


def _pin_extremes(
    lower: Bound, upper: Bound, domain: BoundableDomain
) -> tuple[Bound, Bound]:
    # Over a bounded domain (-inf, x] is [min, x].
    if not lower.is_finite and domain.minimum is not None:
        lower = Bound.closed(domain.minimum)
    if not upper.is_finite and domain.maximum is not None:
        upper = Bound.closed(domain.maximum)
    return lower, upper


def _is_crossed(lower: Bound, upper: Bound) -> bool:
    if not (lower.is_finite and upper.is_finite):
        return False
    if lower.value > upper.value:
        return True
    return lower.value == upper.value and not (
        lower.is_closed and upper.is_closed
    )


def normalize(raw: RawInterval, domain: ScalarDomain) -> NormalizedInterval:
    """Reduce ``raw`` to its canonical form over ``domain``.

    Over a boundable domain open bounds are closed with successor and
    predecessor; an open bound at the extreme of the domain selects nothing
    and yields the empty interval. Closed bounds at the domain minimum or
    maximum stay closed, and unbounded sides of a domain with a minimum or
    maximum are pinned to that extreme. Crossed bounds yield the empty
    interval.
    Pass-through domains keep open bounds and only collapse crossed bounds.
    """
    lower = _validated(raw.lower, domain)
    upper = _validated(raw.upper, domain)

    if isinstance(domain, BoundableDomain):
        closed_lower = _close_lower(lower, domain)
        closed_upper = _close_upper(upper, domain)
        if closed_lower is None or closed_upper is None:
            logger.debug(
                "open bound at %s extreme collapses %r to empty",
                domain.name,
                raw,
            )
            return EMPTY
        lower, upper = _pin_extremes(closed_lower, closed_upper, domain)

    if _is_crossed(lower, upper):
        logger.debug("crossed bounds collapse %r to empty", raw)
        return EMPTY
    return NormalizedInterval.bounded(lower, upper)


def is_normalized(raw: RawInterval, domain: ScalarDomain) -> bool:
    """Return True if ``raw`` is already in canonical form."""
    normalized = normalize(raw, domain)
    return normalized.to_raw() == raw


def cut_below(value: Any, domain: ScalarDomain) -> Cut:
    if isinstance(domain, BoundableDomain) and value == domain.minimum:
        return NEG_INF
    return (0, value, False)


def cut_above(value: Any, domain: ScalarDomain) -> Cut:
    if isinstance(domain, BoundableDomain):
        nxt = domain.successor(value)
        return POS_INF if nxt is None else cut_below(nxt, domain)
    return (0, value, True)


def enter_cut(lower: Bound, domain: ScalarDomain) -> Cut:
    """Cut at which an interval with this lower bound starts."""
    match lower.kind:
        case BoundKind.UNBOUNDED:
            return NEG_INF
        case BoundKind.CLOSED:
            return cut_below(lower.value, domain)
    return cut_above(lower.value, domain)


def exit_cut(upper: Bound, domain: ScalarDomain) -> Cut:
    """Cut at which an interval with this upper bound stops."""
    match upper.kind:
        case BoundKind.UNBOUNDED:
            return POS_INF
        case BoundKind.CLOSED:
            return cut_above(upper.value, domain)
    return cut_below(upper.value, domain)


def _extreme_bound(domain: ScalarDomain, side: str) -> Bound:
    value = getattr(domain, side, None)
    return Bound.unbounded() if value is None else Bound.closed(value)


def lower_from_cut(cut: Cut, domain: ScalarDomain) -> Bound:
    if cut == NEG_INF:
        return _extreme_bound(domain, "minimum")
    _, value, after = cut
    return Bound.open(value) if after else Bound.closed(value)


def upper_from_cut(cut: Cut, domain: ScalarDomain) -> Bound:
    if cut == POS_INF:
        return _extreme_bound(domain, "maximum")
    _, value, after = cut
    if after:
        return Bound.closed(value)
    if isinstance(domain, BoundableDomain):
        # Finite cuts below the domain minimum are NEG_INF, so this exists.
        return Bound.closed(domain.predecessor(value))
    return Bound.open(value)


def interval_cuts(
    interval: NormalizedInterval, domain: ScalarDomain
) -> tuple[Cut, Cut] | None:
    """Return ``(enter, exit)`` cuts, or None for the empty interval."""
    if interval.lower is None or interval.upper is None:
        return None
    return enter_cut(interval.lower, domain), exit_cut(interval.upper, domain)


def interval_from_cuts(
    enter: Cut, exit_: Cut, domain: ScalarDomain
) -> NormalizedInterval:
    if enter >= exit_:
        return EMPTY
    return NormalizedInterval.bounded(
        lower_from_cut(enter, domain), upper_from_cut(exit_, domain)
    )


def _open_lower(bound: Bound, domain: BoundableDomain) -> Bound:
    if not bound.is_closed:
        return bound
    prev = domain.predecessor(bound.value)
    return Bound.unbounded() if prev is None else Bound.open(prev)


def _open_upper(bound: Bound, domain: BoundableDomain) -> Bound:
    if not bound.is_closed:
        return bound
    nxt = domain.successor(bound.value)
    return Bound.unbounded() if nxt is None else Bound.open(nxt)


def denormalize(
    interval: NormalizedInterval, domain: ScalarDomain
) -> RawInterval | None:
    """Rewrite a canonical interval with open bounds wherever possible.

    Over a boundable domain each closed bound moves one step outward and
    opens; a closed bound at a domain extreme becomes unbounded. Pass-through
    domains are returned as they are. The empty interval gives None.
    """
    raw = interval.to_raw()
    if raw is None or not isinstance(domain, BoundableDomain):
        return raw
    return RawInterval(
        lower=_open_lower(raw.lower, domain),
        upper=_open_upper(raw.upper, domain),
    )
