"""
Reading share documents from disk and running one recovery task.
"""

import json
import logging
from pathlib import Path

from .shareset import ShareSet, decode_share_set
from ..crypto.shamir import ArithmeticMode, reconstruct_secret, verify_shares
from ..errors import DecodeError


_logger = logging.getLogger(__name__)


def load_share_set(path: str | Path) -> ShareSet:
    """
    Load and decode a JSON share document.

    Raises:
        OSError: If the file cannot be opened or read
        DecodeError: If the file is not UTF-8 JSON or not a valid document
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except UnicodeDecodeError as e:
            raise DecodeError(str(path), f"not UTF-8 text ({e})") from e
        except ValueError as e:
            # JSONDecodeError, or an integer literal over the str-digits limit
            raise DecodeError(str(path), f"invalid JSON ({e})") from e

    return decode_share_set(document)


def recover_from_file(
    path: str | Path,
    mode: ArithmeticMode = ArithmeticMode.TRUNCATE,
    verify: bool = False,
) -> int:
    """
    Run one reconstruction task for a share file.

    Args:
        path: JSON share document
        mode: Division strategy for interpolation
        verify: Cross-check shares beyond the first k before reconstructing

    Returns:
        The reconstructed secret
    """
    share_set = load_share_set(path)
    _logger.info(
        "Loaded %s: %d shares, n=%d, k=%d",
        path,
        len(share_set),
        share_set.n,
        share_set.k,
    )

    if verify:
        verify_shares(share_set.shares, share_set.k)

    return reconstruct_secret(share_set.shares, share_set.k, mode)
