"""
Decoding of share documents into exact-integer points.

Document Structure:
    {
        "keys": {"n": 4, "k": 3},             # threshold parameters
        "1": {"base": 10, "value": "3"},      # share x=1
        "2": {"base": 2, "value": "110"},     # share x=2, y=6
        ...
    }

The share's x coordinate is its key; y is the value string decoded in the
record's base.
"""

import logging
import re
import string
from dataclasses import dataclass
from typing import Any, Mapping

from ..crypto.shamir import Share
from ..errors import DecodeError


_logger = logging.getLogger(__name__)

# Reserved document key holding the (n, k) parameters
THRESHOLD_KEY = "keys"

# Digit radix limits (0-9 then a-z)
MIN_BASE = 2
MAX_BASE = 36

_DIGITS = string.digits + string.ascii_lowercase
_SIGNED_ALNUM = re.compile(r"[+-]?[0-9A-Za-z]+")
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ShareSet:
    """
    All shares parsed from one document.

    Attributes:
        n: Declared total number of shares (informational)
        k: Reconstruction threshold
        shares: Shares in document order
    """

    n: int
    k: int
    shares: tuple[Share, ...]

    def __len__(self) -> int:
        return len(self.shares)


def decode_value(value: str, base: int) -> int:
    """
    Decode a positional-notation string in the given base.

    Digits are 0-9 then letters (either case) for bases above 10. An
    optional leading sign is accepted.

    Raises:
        ValueError: If base is out of range or a digit is invalid
    """
    if not MIN_BASE <= base <= MAX_BASE:
        raise ValueError(f"base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")
    if not _SIGNED_ALNUM.fullmatch(value):
        raise ValueError(f"'{value}' is not a base-{base} number")

    return _positional_int(value, base)


def _positional_int(text: str, base: int) -> int:
    """
    Accumulate a signed digit string one digit at a time.

    Unlike int(text, base), the length is not capped by
    sys.get_int_max_str_digits().
    """
    result = 0
    for char in text.lstrip("+-").lower():
        digit = _DIGITS.index(char)
        if digit >= base:
            raise ValueError(f"digit '{char}' is invalid in base {base}")
        result = result * base + digit

    return -result if text.startswith("-") else result


def _as_int(raw: Any, key: str) -> int:
    """Coerce a JSON integer (or decimal string) field."""
    if isinstance(raw, bool):
        raise DecodeError(key, "expected an integer, got a boolean")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _SIGNED_DECIMAL.fullmatch(raw):
        return _positional_int(raw, 10)
    raise DecodeError(key, f"expected an integer, got {raw!r}")


def _require_field(record: Any, field: str, key: str) -> Any:
    if not isinstance(record, Mapping):
        raise DecodeError(key, f"expected an object, got {type(record).__name__}")
    if field not in record:
        raise DecodeError(f"{key}.{field}", "missing field")
    return record[field]


def _decode_threshold(document: Mapping[str, Any]) -> tuple[int, int]:
    if THRESHOLD_KEY not in document:
        raise DecodeError(THRESHOLD_KEY, "missing threshold parameters")

    config = document[THRESHOLD_KEY]
    n = _as_int(_require_field(config, "n", THRESHOLD_KEY), f"{THRESHOLD_KEY}.n")
    k = _as_int(_require_field(config, "k", THRESHOLD_KEY), f"{THRESHOLD_KEY}.k")

    if n < 0:
        raise DecodeError(f"{THRESHOLD_KEY}.n", f"must be non-negative, got {n}")
    if k < 1:
        raise DecodeError(f"{THRESHOLD_KEY}.k", f"must be at least 1, got {k}")

    return n, k


def _decode_share(key: str, record: Any) -> Share:
    if not _SIGNED_DECIMAL.fullmatch(key):
        raise DecodeError(key, "share identifier is not a decimal integer")
    x = _positional_int(key, 10)

    base = _as_int(_require_field(record, "base", key), f"{key}.base")
    value = _require_field(record, "value", key)
    if not isinstance(value, str):
        raise DecodeError(f"{key}.value", f"expected a string, got {value!r}")

    try:
        y = decode_value(value, base)
    except ValueError as e:
        raise DecodeError(f"{key}.value", str(e)) from e

    return Share(x=x, y=y)


def decode_share_set(document: Any) -> ShareSet:
    """
    Decode a parsed share document.

    Args:
        document: Mapping with the reserved "keys" entry and one entry
            per share

    Returns:
        ShareSet with shares in document order

    Raises:
        DecodeError: If the structure, an identifier, a base or a value
            is invalid
    """
    if not isinstance(document, Mapping):
        raise DecodeError("<root>", f"expected an object, got {type(document).__name__}")

    n, k = _decode_threshold(document)
    shares = tuple(
        _decode_share(key, record)
        for key, record in document.items()
        if key != THRESHOLD_KEY
    )

    _logger.debug("Decoded %d shares (n=%d, k=%d)", len(shares), n, k)
    return ShareSet(n=n, k=k, shares=shares)
