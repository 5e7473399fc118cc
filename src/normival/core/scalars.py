"""Scalar domains: the capability that decides how bounds normalize.

Every interval and selection is built over an explicit domain. A
``BoundableDomain`` knows each value's successor and predecessor, so open
bounds can be closed and adjacent runs merged. A ``PassThroughDomain`` is
ordered but continuous; intervals over it keep their open bounds and report
``is_normalized() is False``.
"""

import datetime
import decimal
import math
from abc import abstractmethod
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from normival.core.errors import ScalarRangeError, UnsupportedScalarError

INTEGER_BITS = (8, 16, 32, 64, 128)
_ONE_DAY = datetime.timedelta(days=1)


class ScalarDomain(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def is_finite(self) -> bool:
        """Return True when successor/predecessor are available."""

    @abstractmethod
    def validate_value(self, value: Any) -> Any:
        """Return ``value`` if it belongs to the domain, else raise."""

    @abstractmethod
    def parse_value(self, text: str) -> Any:
        """Parse a scalar from notation text. Raises ValueError."""

    def format_value(self, value: Any) -> str:
        return str(value)


class BoundableDomain(ScalarDomain):
    """A discrete domain with successor/predecessor."""

    def is_finite(self) -> bool:
        return True

    @property
    def minimum(self) -> Any | None:
        return None

    @property
    def maximum(self) -> Any | None:
        return None

    @abstractmethod
    def successor(self, value: Any) -> Any | None:
        """Return the next value, or None at the maximum."""

    @abstractmethod
    def predecessor(self, value: Any) -> Any | None:
        """Return the previous value, or None at the minimum."""

    @abstractmethod
    def count_between(self, lower: Any, upper: Any) -> int:
        """Number of points in the closed range ``[lower, upper]``."""


class IntegerDomain(BoundableDomain):
    """Signed or unsigned machine integers, or Python's unbounded ``int``.

    ``bits=None`` gives an unbounded domain: all of ``int`` when signed,
    the naturals (``0, 1, 2, ...``) when unsigned.
    """

    kind: Literal["int"] = "int"
    bits: int | None = None
    signed: bool = True

    @field_validator("bits")
    @classmethod
    def validate_bits(cls, bits: int | None) -> int | None:
        if bits is not None and bits not in INTEGER_BITS:
            raise ValueError(f"bits must be one of {INTEGER_BITS} or None")
        return bits

    @property
    def name(self) -> str:
        if self.bits is None:
            return "int" if self.signed else "nat"
        return f"{'i' if self.signed else 'u'}{self.bits}"

    @property
    def minimum(self) -> int | None:
        if not self.signed:
            return 0
        if self.bits is None:
            return None
        return -(1 << (self.bits - 1))

    @property
    def maximum(self) -> int | None:
        if self.bits is None:
            return None
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def validate_value(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedScalarError(
                f"{self.name} domain expects int, got {type(value).__name__}"
            )
        low, high = self.minimum, self.maximum
        if (low is not None and value < low) or (
            high is not None and value > high
        ):
            raise ScalarRangeError(
                f"{value} is outside the {self.name} range [{low}, {high}]"
            )
        return value

    def parse_value(self, text: str) -> int:
        return self.validate_value(int(text.strip()))

    def successor(self, value: int) -> int | None:
        if self.maximum is not None and value >= self.maximum:
            return None
        return value + 1

    def predecessor(self, value: int) -> int | None:
        if self.minimum is not None and value <= self.minimum:
            return None
        return value - 1

    def count_between(self, lower: int, upper: int) -> int:
        return max(upper - lower + 1, 0)


class DateDomain(BoundableDomain):
    """Calendar dates with one-day resolution."""

    kind: Literal["date"] = "date"

    @property
    def name(self) -> str:
        return "date"

    @property
    def minimum(self) -> datetime.date:
        return datetime.date.min

    @property
    def maximum(self) -> datetime.date:
        return datetime.date.max

    def validate_value(self, value: Any) -> datetime.date:
        # datetime is a date subclass but not day-granular.
        if not isinstance(value, datetime.date) or isinstance(
            value, datetime.datetime
        ):
            raise UnsupportedScalarError(
                f"date domain expects datetime.date, "
                f"got {type(value).__name__}"
            )
        return value

    def parse_value(self, text: str) -> datetime.date:
        return datetime.date.fromisoformat(text.strip())

    def format_value(self, value: datetime.date) -> str:
        return value.isoformat()

    def successor(self, value: datetime.date) -> datetime.date | None:
        if value >= datetime.date.max:
            return None
        return value + _ONE_DAY

    def predecessor(self, value: datetime.date) -> datetime.date | None:
        if value <= datetime.date.min:
            return None
        return value - _ONE_DAY

    def count_between(
        self, lower: datetime.date, upper: datetime.date
    ) -> int:
        return max((upper - lower).days + 1, 0)


PassThroughType = Literal["float", "str", "decimal", "datetime", "any"]


class PassThroughDomain(ScalarDomain):
    """An ordered domain with no successor/predecessor.

    Intervals over a pass-through domain are not normalized: open bounds are
    kept, and ``[0.0, 1.0)`` and ``[0.0, 1.0]`` stay distinct. Adjacency is
    only detected where one side is open and the other closed at the same
    value.
    """

    kind: Literal["ordered"] = "ordered"
    value_type: PassThroughType = "float"

    @property
    def name(self) -> str:
        return self.value_type

    def is_finite(self) -> bool:
        return False

    def validate_value(self, value: Any) -> Any:
        match self.value_type:
            case "float":
                if isinstance(value, bool) or not isinstance(
                    value, int | float
                ):
                    raise self._wrong_type(value)
                if not math.isfinite(value):
                    raise ScalarRangeError(
                        "float bounds must be finite; use an unbounded bound"
                    )
            case "str":
                if not isinstance(value, str):
                    raise self._wrong_type(value)
            case "decimal":
                if not isinstance(value, decimal.Decimal):
                    raise self._wrong_type(value)
                if not value.is_finite():
                    raise ScalarRangeError("decimal bounds must be finite")
            case "datetime":
                if not isinstance(value, datetime.datetime):
                    raise self._wrong_type(value)
        return value

    def parse_value(self, text: str) -> Any:
        text = text.strip()
        match self.value_type:
            case "float":
                return self.validate_value(float(text))
            case "decimal":
                try:
                    return self.validate_value(decimal.Decimal(text))
                except decimal.InvalidOperation as err:
                    raise ValueError(f"invalid decimal {text!r}") from err
            case "datetime":
                return datetime.datetime.fromisoformat(text)
        return text

    def format_value(self, value: Any) -> str:
        if isinstance(value, datetime.datetime):
            return value.isoformat()
        return str(value)

    def _wrong_type(self, value: Any) -> UnsupportedScalarError:
        return UnsupportedScalarError(
            f"{self.value_type} domain got {type(value).__name__}"
        )


def require_boundable(domain: ScalarDomain, operation: str) -> BoundableDomain:
    if not isinstance(domain, BoundableDomain):
        raise UnsupportedScalarError(
            f"{operation} needs a boundable domain; "
            f"{domain.name} is pass-through"
        )
    return domain


INTEGERS = IntegerDomain()
