"""normival: normalizing intervals and disjoint interval selections."""

from normival.core.bounds import (
    Bound,
    BoundKind,
    IntervalKind,
    NormalizedInterval,
    RawInterval,
)
from normival.core.errors import (
    DomainMismatchError,
    NormivalError,
    NotationError,
    ScalarRangeError,
    UnsupportedScalarError,
)
from normival.core.normalize import denormalize, is_normalized, normalize
from normival.core.presets import domain_names, get_domain
from normival.core.scalars import (
    INTEGERS,
    BoundableDomain,
    DateDomain,
    IntegerDomain,
    PassThroughDomain,
    ScalarDomain,
)
from normival.interval import Interval
from normival.parse import parse_interval, parse_selection
from normival.render import format_interval, format_selection
from normival.selection import IntervalRun, Selection
from normival.tine_tree import Tine, TineTree, Transition

__all__ = [
    "INTEGERS",
    "Bound",
    "BoundKind",
    "BoundableDomain",
    "DateDomain",
    "DomainMismatchError",
    "IntegerDomain",
    "Interval",
    "IntervalKind",
    "IntervalRun",
    "NormalizedInterval",
    "NormivalError",
    "NotationError",
    "PassThroughDomain",
    "RawInterval",
    "ScalarDomain",
    "ScalarRangeError",
    "Selection",
    "Tine",
    "TineTree",
    "Transition",
    "UnsupportedScalarError",
    "denormalize",
    "domain_names",
    "format_interval",
    "format_selection",
    "get_domain",
    "is_normalized",
    "normalize",
    "parse_interval",
    "parse_selection",
]
