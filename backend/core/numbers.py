# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Strict integer parsing for path ids, query parameters and token ids."""

import re
from typing import Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: Optional[str]) -> Optional[int]:
    """
    Parse *raw* as a signed 64-bit decimal, or return ``None``.

    Only ASCII digits with an optional leading sign are accepted: surrounding
    whitespace, ``_`` separators, non-ASCII digits and values outside the
    int64 range are all rejected.
    """
    if raw is None or not _DECIMAL.fullmatch(raw):
        return None
    # bounded before int() so huge inputs never reach the conversion
    if len(raw.lstrip("+-").lstrip("0")) > 19:
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value
