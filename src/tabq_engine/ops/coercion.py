"""Cell coercion rules shared by every table operation.

- ``to_number``: numeric view of a cell, ``NaN`` when the cell is not numeric.
  Blank strings and ``None`` are not numeric; ``"1,000"`` and ``"12%"`` are
  not numeric either.
- ``stringify``: display form used for grouping keys and ``contains``.
- ``loose_equals``: equality for the ``=``/``!=`` filter operators. Both sides
  numeric -> numeric comparison; otherwise exact string comparison.
"""

from __future__ import annotations

import math
import re
from typing import Any

NAN = float("nan")

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")
_INFINITY = re.compile(r"([+-]?)Infinity")
_RADIX = {"0x": 16, "0o": 8, "0b": 2}
_RADIX_DIGITS = {16: re.compile(r"[0-9a-f]+"), 8: re.compile(r"[0-7]+"), 2: re.compile(r"[01]+")}


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return float(value)
    if isinstance(value, int):
        return _int_to_float(value)
    if not isinstance(value, str):
        return NAN

    text = value.strip()
    if not text:
        return NAN

    if _DECIMAL.fullmatch(text):
        return float(text)

    inf = _INFINITY.fullmatch(text)
    if inf:
        return -math.inf if inf.group(1) == "-" else math.inf

    base = _RADIX.get(text[:2].lower())
    if base is not None and _RADIX_DIGITS[base].fullmatch(text[2:].lower()):
        return _int_to_float(int(text[2:], base))

    return NAN


def is_number(value: Any) -> bool:
    return not math.isnan(to_number(value))


def format_number(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def loose_equals(cell: Any, value: Any) -> bool:
    if cell is None or value is None:
        return cell is None and value is None

    left, right = to_number(cell), to_number(value)
    if not math.isnan(left) and not math.isnan(right):
        return left == right
    return stringify(cell) == stringify(value)


__all__ = ["NAN", "format_number", "is_number", "loose_equals", "stringify", "to_number"]
