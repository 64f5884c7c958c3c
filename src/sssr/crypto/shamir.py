"""
Shamir Secret Sharing (SSS) reconstruction over the integers.

A (k, n) share set hides a secret S as the constant term of a polynomial:
- f(x) = a_0 + a_1*x + ... + a_{k-1}*x^{k-1}, with a_0 = S
- Each share is a point (x_i, f(x_i))
- Any k shares determine f, and therefore S = f(0)

Unlike textbook SSS there is no prime field here: shares are plain
arbitrary-precision integers and reconstruction is Lagrange interpolation
over the integers.

Mathematical Basis:
    f(0) = sum_{i} y_i * L_i(0)

    L_i(0) = product_{j != i} (0 - x_j) / (x_i - x_j)

    Each term is computed as y_i * numerator_i / denominator_i where
    numerator_i and denominator_i are the two big-integer products above.

Arithmetic modes:
    TRUNCATE (default): each term's division truncates toward zero. This is
        the reference behavior and is exact whenever every term divides
        evenly (e.g. x = 1..k), but can drift from f(0) when an individual
        term is fractional.
    EXACT: terms are summed as rationals and the total must be an integer.

Reference:
    Shamir, A. (1979). "How to share a secret". Communications of the ACM.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Sequence

from ..errors import (
    DivisionByZeroError,
    InconsistentSharesError,
    InsufficientSharesError,
    NonIntegralSecretError,
)


_logger = logging.getLogger(__name__)


class ArithmeticMode(str, Enum):
    """How each Lagrange term's division is carried out."""

    TRUNCATE = "truncate"
    EXACT = "exact"


@dataclass(frozen=True)
class Share:
    """
    A single share in the secret sharing scheme.

    Attributes:
        x: The share identifier (evaluation point).
        y: The share value (polynomial evaluated at x).
    """

    x: int
    y: int


def _truncating_divide(dividend: int, divisor: int) -> int:
    """
    Integer division rounding toward zero.

    Python's // floors, so -5 // 2 == -3; this returns -2.

    Raises:
        ZeroDivisionError: If divisor is zero
    """
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def select_shares(shares: Sequence[Share], k: int) -> list[Share]:
    """
    Pick the shares used for reconstruction.

    The first k shares in encounter order are taken; the remaining shares
    are ignored (see verify_shares for an opt-in cross-check).

    Raises:
        InsufficientSharesError: If fewer than k shares are available
    """
    if len(shares) < k:
        raise InsufficientSharesError(required=k, actual=len(shares))
    return list(shares[:k])


def interpolate_at(
    points: Sequence[Share],
    x: int,
    mode: ArithmeticMode = ArithmeticMode.TRUNCATE,
):
    """
    Evaluate the polynomial through the given points at x.

    Args:
        points: Points with distinct x coordinates
        x: Where to evaluate
        mode: Division strategy for each Lagrange term

    Returns:
        int in TRUNCATE mode, Fraction in EXACT mode

    Raises:
        DivisionByZeroError: If two points share an x coordinate
    """
    total = Fraction(0) if mode is ArithmeticMode.EXACT else 0

    for i, point_i in enumerate(points):
        numerator = 1
        denominator = 1

        for j, point_j in enumerate(points):
            if i == j:
                continue

            numerator *= x - point_j.x
            denominator *= point_i.x - point_j.x

        try:
            if mode is ArithmeticMode.EXACT:
                term = Fraction(point_i.y * numerator, denominator)
            else:
                term = _truncating_divide(point_i.y * numerator, denominator)
        except ZeroDivisionError as exc:
            raise DivisionByZeroError(point_i.x) from exc

        total += term

    return total


def reconstruct_secret(
    shares: Sequence[Share],
    k: int,
    mode: ArithmeticMode = ArithmeticMode.TRUNCATE,
) -> int:
    """
    Reconstruct the secret (constant term) from the first k shares.

    Args:
        shares: Decoded shares in encounter order (at least k)
        k: Reconstruction threshold
        mode: Division strategy (default matches reference behavior)

    Returns:
        The reconstructed secret

    Raises:
        InsufficientSharesError: If fewer than k shares are given
        DivisionByZeroError: If two selected shares share an x coordinate
        NonIntegralSecretError: If EXACT mode yields a non-integer

    Example:
        >>> shares = [Share(1, 3), Share(2, 6), Share(3, 9)]
        >>> reconstruct_secret(shares, k=3)
        0
    """
    selected = select_shares(shares, k)
    _logger.debug(
        "Reconstructing from x = %s (%s mode)",
        [s.x for s in selected],
        mode.value,
    )

    secret = interpolate_at(selected, 0, mode)

    if mode is ArithmeticMode.EXACT:
        if secret.denominator != 1:
            raise NonIntegralSecretError(secret)
        secret = secret.numerator

    return secret


def verify_shares(shares: Sequence[Share], k: int) -> None:
    """
    Check that every share beyond the first k lies on the same polynomial.

    This is opt-in: reconstruct_secret never calls it. Predictions always
    use EXACT arithmetic, independent of the reconstruction mode. With
    exactly k shares there is nothing to compare and the check passes.

    Raises:
        InsufficientSharesError: If fewer than k shares are given
        DivisionByZeroError: If two selected shares share an x coordinate
        InconsistentSharesError: If any extra share is not reproduced
    """
    selected = select_shares(shares, k)
    mismatched = []

    for share in shares[k:]:
        expected = interpolate_at(selected, share.x, ArithmeticMode.EXACT)
        if expected != share.y:
            _logger.debug(
                "Share at x=%s has y=%s, polynomial gives %s",
                share.x,
                share.y,
                expected,
            )
            mismatched.append(share.x)

    if mismatched:
        raise InconsistentSharesError(mismatched)
