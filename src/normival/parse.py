"""Parse interval notation into intervals and selections.

Accepted forms: ``Ø``, ``∅`` or ``empty``; a bare value (a single point);
``[a,b]``, ``(a,b)``, ``[a,b)``, ``(a,b]``; ``-∞``/``-inf`` and
``∞``/``+∞``/``inf``/``+inf`` on an open side for unbounded ends. A
selection is a list of intervals separated by ``∪``, ``|`` or top-level
commas, optionally wrapped in braces.
"""

from typing import Any

from normival.core.bounds import Bound
from normival.core.errors import NormivalError, NotationError
from normival.core.scalars import INTEGERS, ScalarDomain
from normival.interval import Interval
from normival.selection import Selection

_EMPTY_TOKENS = frozenset({"ø", "∅", "empty", "{}"})
_NEG_INF_TOKENS = frozenset({"-∞", "−∞", "-inf", "-infinity"})
_POS_INF_TOKENS = frozenset(
    {"∞", "+∞", "inf", "+inf", "infinity", "+infinity"}
)
_SEPARATORS = frozenset({",", "|", "∪"})


def _parse_value(text: str, domain: ScalarDomain, source: str) -> Any:
    if not text.strip():
        raise NotationError(source, "missing bound value")
    try:
        return domain.parse_value(text)
    except NormivalError:
        raise
    except (TypeError, ValueError) as err:
        raise NotationError(
            source, f"{text.strip()!r} is not a {domain.name} value"
        ) from err


def _parse_lower(token: str, domain: ScalarDomain, source: str) -> Bound:
    bracket, body = token[0], token[1:].strip()
    if body.lower() in _NEG_INF_TOKENS:
        if bracket != "(":
            raise NotationError(source, "an infinite bound must be open")
        return Bound.unbounded()
    value = _parse_value(body, domain, source)
    return Bound.closed(value) if bracket == "[" else Bound.open(value)


def _parse_upper(token: str, domain: ScalarDomain, source: str) -> Bound:
    body, bracket = token[:-1].strip(), token[-1]
    if body.lower() in _POS_INF_TOKENS:
        if bracket != ")":
            raise NotationError(source, "an infinite bound must be open")
        return Bound.unbounded()
    value = _parse_value(body, domain, source)
    return Bound.closed(value) if bracket == "]" else Bound.open(value)


def parse_interval(text: str, domain: ScalarDomain = INTEGERS) -> Interval:
    """Parse one interval and normalize it over ``domain``."""
    stripped = text.strip()
    if not stripped:
        raise NotationError(text, "empty input")
    if stripped.lower() in _EMPTY_TOKENS:
        return Interval.empty(domain)
    if stripped[0] not in "[(":
        if stripped[-1] in "])":
            raise NotationError(text, "missing opening bracket")
        return Interval.point(_parse_value(stripped, domain, text), domain)
    if stripped[-1] not in "])":
        raise NotationError(text, "missing closing bracket")
    parts = stripped.split(",")
    if len(parts) != 2:
        raise NotationError(text, "expected exactly two bounds")
    lower = _parse_lower(parts[0].strip(), domain, text)
    upper = _parse_upper(parts[1].strip(), domain, text)
    return Interval(lower, upper, domain)


def _split_top_level(text: str) -> list[str]:
    items: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
            if depth < 0:
                raise NotationError(text, "unbalanced brackets")
        if depth == 0 and char in _SEPARATORS:
            items.append("".join(current))
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise NotationError(text, "unbalanced brackets")
    items.append("".join(current))
    return items


def parse_selection(text: str, domain: ScalarDomain = INTEGERS) -> Selection:
    """Parse a union of intervals into a normalized selection."""
    stripped = text.strip()
    if stripped.startswith("{"):
        if not stripped.endswith("}"):
            raise NotationError(text, "missing closing brace")
        stripped = stripped[1:-1].strip()
    if not stripped or stripped.lower() in _EMPTY_TOKENS:
        return Selection.empty(domain)
    intervals = [
        parse_interval(item, domain) for item in _split_top_level(stripped)
    ]
    return Selection.from_intervals(intervals, domain)
