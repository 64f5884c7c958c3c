"""
Exceptions raised while decoding share documents and reconstructing secrets.

Input problems subclass ValueError so callers that already catch ValueError
keep working. A zero denominator during interpolation subclasses
ZeroDivisionError.
"""


class SSSRError(Exception):
    """Base class for all reconstruction failures."""


class DecodeError(SSSRError, ValueError):
    """
    The share document is malformed.

    Attributes:
        key: The document key (or field path) that failed to decode.
        reason: Human-readable description of the problem.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid share data at '{key}': {reason}")


class InsufficientSharesError(SSSRError, ValueError):
    """Fewer shares are available than the threshold requires."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Need {required} shares but only found {actual}")


class DivisionByZeroError(SSSRError, ZeroDivisionError):
    """Two selected shares have the same x coordinate."""

    def __init__(self, x: int):
        self.x = x
        super().__init__(
            f"Duplicate share x coordinate {x} produces a zero denominator"
        )


class NonIntegralSecretError(SSSRError, ValueError):
    """Exact interpolation produced a constant term that is not an integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Interpolated constant term {value} is not an integer")


class InconsistentSharesError(SSSRError, ValueError):
    """
    Some shares do not lie on the polynomial defined by the selected shares.

    Attributes:
        mismatched: x coordinates whose y values were not reproduced.
    """

    def __init__(self, mismatched: list[int]):
        self.mismatched = mismatched
        listing = ", ".join(str(x) for x in mismatched)
        super().__init__(
            f"Shares at x = {listing} are inconsistent with the selected shares"
        )
