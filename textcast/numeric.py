"""
Comma separated integer lists and the permissive casts behind them.

Cast table (to_int64 / to_int32 / to_int):
- bool -> 1 / 0
- int -> itself
- float -> truncated toward zero, NaN and infinities -> 0
- "[+-]digits" -> base-10 value, leading zeros stay decimal
- decimal float text ("1.5", "-2.", ".5", "1e3") -> truncated toward zero
- anything else ("", " 3", "true", "0x10", None, objects) -> 0

Width policy:
- Anything outside the signed 64-bit range is a failed parse and gives 0.
- 32-bit targets wrap an in-range value (two's complement).
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from .rules import CSV_SEPARATOR, INT32_BITS, INT64_BITS, INT_BITS

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT64_MIN = -(1 << (INT64_BITS - 1))
_INT64_MAX = (1 << (INT64_BITS - 1)) - 1


def _parse_text(token: str) -> Optional[int]:
    if _INT_RE.fullmatch(token):
        try:
            return int(token, 10)
        except ValueError:  # past sys.get_int_max_str_digits()
            return None
    if _FLOAT_RE.fullmatch(token):
        try:
            number = Decimal(token)
        except InvalidOperation:
            return None
        # 20+ digits never fit int64; skip building a huge int.
        if number.adjusted() > 19:
            return None
        return int(number)
    return None


def _parse(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return math.trunc(value)
    if isinstance(value, str):
        return _parse_text(value)
    return None


def _wrap(value: int, bits: int) -> int:
    if bits >= INT64_BITS:
        return value
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _cast(value: Any, bits: int) -> int:
    parsed = _parse(value)
    if parsed is None:
        logger.debug("cannot cast %r to int%d, using 0", value, bits)
        return 0
    if not _INT64_MIN <= parsed <= _INT64_MAX:
        logger.debug("%r overflows int64, using 0", value)
        return 0
    wrapped = _wrap(parsed, bits)
    if wrapped != parsed:
        logger.debug("%r wrapped to int%d as %d", value, bits, wrapped)
    return wrapped


def to_int64(value: Any) -> int:
    return _cast(value, INT64_BITS)


def to_int32(value: Any) -> int:
    return _cast(value, INT32_BITS)


def to_int(value: Any) -> int:
    return _cast(value, INT_BITS)


def to_int64s(tokens: Sequence[Any]) -> List[int]:
    """Cast each element with the permissive int64 rule; bad elements become 0."""
    return [to_int64(token) for token in tokens]


def to_int32s(tokens: Sequence[Any]) -> List[int]:
    return [to_int32(token) for token in tokens]


def to_ints(tokens: Sequence[Any]) -> List[int]:
    return [to_int(token) for token in tokens]


def _split(s: str) -> List[str]:
    if not s:
        return []
    return s.split(CSV_SEPARATOR)


def csv_to_int64s(s: str) -> List[int]:
    """
    Parse "1,2,3" into [1, 2, 3].

    "" gives [], empty tokens give 0 ("1,,3" -> [1, 0, 3]). Tokens are not
    stripped, so " 3" is not a number.
    """
    return to_int64s(_split(s))


def csv_to_int32s(s: str) -> List[int]:
    return to_int32s(_split(s))


def csv_to_ints(s: str) -> List[int]:
    return to_ints(_split(s))


def _join(values: Iterable[Any], bits: int) -> str:
    return CSV_SEPARATOR.join(str(_cast(v, bits)) for v in values)


def int64s_to_csv(values: Iterable[Any]) -> str:
    """Join integers as "1,2,3"; an empty input gives ""."""
    return _join(values, INT64_BITS)


def int32s_to_csv(values: Iterable[Any]) -> str:
    return _join(values, INT32_BITS)


def ints_to_csv(values: Iterable[Any]) -> str:
    return _join(values, INT_BITS)
