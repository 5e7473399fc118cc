"""Exception types raised by normival."""


class NormivalError(Exception):
    """Base class for every error raised by normival."""


class UnsupportedScalarError(NormivalError, TypeError):
    """A value or operation that the scalar domain cannot support.

    Raised when a value has the wrong type for a domain, and when an
    operation that needs successor/predecessor (point iteration, point
    counts) is asked of a pass-through domain. This is distinct from an
    empty interval, which is an ordinary value.
    """


class ScalarRangeError(NormivalError, ValueError):
    """A value lies outside the representable range of its domain."""


class DomainMismatchError(NormivalError, ValueError):
    """Two operands were built over different scalar domains."""

    def __init__(self, left: object, right: object):
        self.left = left
        self.right = right
        super().__init__(f"domain mismatch: {left!r} vs {right!r}")


class NotationError(NormivalError, ValueError):
    """Interval notation text could not be parsed."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid interval notation {text!r}: {reason}")
