"""Bound and raw/normalized interval records."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class BoundKind(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    UNBOUNDED = "unbounded"


class Bound(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: BoundKind
    value: Any = None

    @model_validator(mode="after")
    def validate_value_presence(self) -> "Bound":
        if self.kind == BoundKind.UNBOUNDED and self.value is not None:
            raise ValueError("unbounded bound must not carry a value")
        if self.kind != BoundKind.UNBOUNDED and self.value is None:
            raise ValueError(f"{self.kind.value} bound requires a value")
        return self

    @classmethod
    def closed(cls, value: Any) -> "Bound":
        return cls(kind=BoundKind.CLOSED, value=value)

    @classmethod
    def open(cls, value: Any) -> "Bound":
        return cls(kind=BoundKind.OPEN, value=value)

    @classmethod
    def unbounded(cls) -> "Bound":
        return _UNBOUNDED

    @property
    def is_finite(self) -> bool:
        return self.kind != BoundKind.UNBOUNDED

    @property
    def is_closed(self) -> bool:
        return self.kind == BoundKind.CLOSED

    @property
    def is_open(self) -> bool:
        return self.kind == BoundKind.OPEN


_UNBOUNDED = Bound(kind=BoundKind.UNBOUNDED)


class RawInterval(BaseModel):
    """A pair of bounds exactly as written, before normalization.

    The bounds may cross; a crossed raw interval denotes the empty set.
    """

    model_config = ConfigDict(frozen=True)

    lower: Bound
    upper: Bound

    def is_crossed(self) -> bool:
        if not (self.lower.is_finite and self.upper.is_finite):
            return False
        lo, hi = self.lower.value, self.upper.value
        if lo > hi:
            return True
        return lo == hi and not (self.lower.is_closed and self.upper.is_closed)

    def contains(self, point: Any) -> bool:
        """Evaluate membership literally, without normalization."""
        lower, upper = self.lower, self.upper
        if lower.is_closed and point < lower.value:
            return False
        if lower.is_open and point <= lower.value:
            return False
        if upper.is_closed and point > upper.value:
            return False
        if upper.is_open and point >= upper.value:
            return False
        return True


class IntervalKind(str, Enum):
    EMPTY = "empty"
    FULL = "full"
    BOUNDED = "bounded"


class NormalizedInterval(BaseModel):
    """Canonical interval: empty, full, or bounded on at least one side."""

    model_config = ConfigDict(frozen=True)

    kind: IntervalKind
    lower: Bound | None = None
    upper: Bound | None = None

    @model_validator(mode="after")
    def validate_shape(self) -> "NormalizedInterval":
        match self.kind:
            case IntervalKind.EMPTY:
                if self.lower is not None or self.upper is not None:
                    raise ValueError("empty interval has no bounds")
            case IntervalKind.FULL:
                if self.lower != _UNBOUNDED or self.upper != _UNBOUNDED:
                    raise ValueError("full interval has unbounded bounds")
            case IntervalKind.BOUNDED:
                if self.lower is None or self.upper is None:
                    raise ValueError("bounded interval requires both bounds")
                if not (self.lower.is_finite or self.upper.is_finite):
                    raise ValueError("bounded interval needs a finite bound")
        return self

    @classmethod
    def bounded(cls, lower: Bound, upper: Bound) -> "NormalizedInterval":
        if not (lower.is_finite or upper.is_finite):
            return FULL
        return cls(kind=IntervalKind.BOUNDED, lower=lower, upper=upper)

    @property
    def is_empty(self) -> bool:
        return self.kind == IntervalKind.EMPTY

    @property
    def is_full(self) -> bool:
        return self.kind == IntervalKind.FULL

    def to_raw(self) -> RawInterval | None:
        if self.lower is None or self.upper is None:
            return None
        return RawInterval(lower=self.lower, upper=self.upper)


EMPTY = NormalizedInterval(kind=IntervalKind.EMPTY)
FULL = NormalizedInterval(
    kind=IntervalKind.FULL, lower=_UNBOUNDED, upper=_UNBOUNDED
)
