"""Render intervals and selections in interval notation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from normival.core.bounds import Bound, NormalizedInterval
from normival.core.scalars import ScalarDomain

if TYPE_CHECKING:
    from normival.interval import Interval
    from normival.selection import Selection

EMPTY_SYMBOL = "Ø"
UNION_SYMBOL = " ∪ "
_ASCII_SYMBOLS = {"empty": "empty", "neg": "-inf", "pos": "inf"}
_UNICODE_SYMBOLS = {"empty": EMPTY_SYMBOL, "neg": "-∞", "pos": "∞"}


def _render_lower(bound: Bound, domain: ScalarDomain, neg: str) -> str:
    if not bound.is_finite:
        return f"({neg}"
    bracket = "[" if bound.is_closed else "("
    return f"{bracket}{domain.format_value(bound.value)}"


def _render_upper(bound: Bound, domain: ScalarDomain, pos: str) -> str:
    if not bound.is_finite:
        return f"{pos})"
    bracket = "]" if bound.is_closed else ")"
    return f"{domain.format_value(bound.value)}{bracket}"


def format_normalized(
    interval: NormalizedInterval,
    domain: ScalarDomain,
    ascii_only: bool = False,
) -> str:
    symbols = _ASCII_SYMBOLS if ascii_only else _UNICODE_SYMBOLS
    lower, upper = interval.lower, interval.upper
    if lower is None or upper is None:
        return symbols["empty"]
    if lower.is_closed and upper.is_closed and lower.value == upper.value:
        return domain.format_value(lower.value)
    return (
        f"{_render_lower(lower, domain, symbols['neg'])},"
        f"{_render_upper(upper, domain, symbols['pos'])}"
    )


def format_union(
    intervals: Iterable[NormalizedInterval],
    domain: ScalarDomain,
    ascii_only: bool = False,
) -> str:
    parts = [
        format_normalized(interval, domain, ascii_only)
        for interval in intervals
    ]
    if not parts:
        return _ASCII_SYMBOLS["empty"] if ascii_only else EMPTY_SYMBOL
    return (" | " if ascii_only else UNION_SYMBOL).join(parts)


def format_interval(interval: Interval, ascii_only: bool = False) -> str:
    """Render an ``Interval`` in notation ``parse_interval`` accepts."""
    return format_normalized(interval.normalized, interval.domain, ascii_only)


def format_selection(selection: Selection, ascii_only: bool = False) -> str:
    """Render a ``Selection`` in notation ``parse_selection`` accepts."""
    return format_union(
        selection.tree.to_intervals(), selection.domain, ascii_only
    )
