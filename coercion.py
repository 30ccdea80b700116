"""Explicit parsing of loosely typed JSON values into numbers."""
import math
import re
from typing import Any, Optional

_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse ``value`` as a finite float.

    Accepts ints, floats and numeric strings (surrounding whitespace allowed).
    Returns None for anything else, including booleans, empty strings, NaN and
    infinities.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.fullmatch(text):
            return None
        number = float(text)
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def parse_integer(value: Any) -> Optional[int]:
    """Parse ``value`` as a whole number. Fractional values are rejected, not truncated."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        try:
            return int(value.strip())
        except ValueError:
            # longer than the interpreter allows for str -> int
            return None

    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def truncate_integer(value: Any) -> Optional[int]:
    """Parse any finite number and truncate it toward zero (``"3.7"`` -> 3, ``"-2.5"`` -> -2)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_number(value)
    if number is None:
        return None
    return int(number)
