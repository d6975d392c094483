"""
Coercion between arbitrary values, text and bytes.

Rules:
- str and byte sequences are reinterpreted, never validated.
- Everything else goes through a single JSON branch (pydantic-core): compact,
  sorted keys, nested bytes as base64, NaN and infinities rejected.
- to_slice never raises; non-sequences give an empty list.
"""

from __future__ import annotations

import array
import json
import logging
from collections.abc import Sequence
from typing import Any, List, Union

from pydantic_core import PydanticSerializationError, to_json

from .errors import SerializationError
from .rules import TEXT_ENCODING, TEXT_ERRORS

logger = logging.getLogger(__name__)

ByteSequence = Union[bytes, bytearray, memoryview]
_BYTE_TYPES = (bytes, bytearray, memoryview)


def string_to_bytes(s: str) -> bytes:
    return s.encode(TEXT_ENCODING, TEXT_ERRORS)


def bytes_to_string(b: ByteSequence) -> str:
    # memoryview has no decode()
    if isinstance(b, memoryview):
        b = b.tobytes()
    return b.decode(TEXT_ENCODING, TEXT_ERRORS)


def bytes_view(data: Union[str, ByteSequence]) -> memoryview:
    """
    Borrow a read-only view over a byte sequence without copying.

    The view aliases its source: a bytearray mutated afterwards shows through,
    and resizing it while the view is alive raises BufferError. A str has no
    byte buffer to borrow, so it is encoded first.
    """
    if isinstance(data, str):
        data = string_to_bytes(data)
    return memoryview(data).toreadonly()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported value: {name}")


def _marshal(value: Any) -> bytes:
    # pydantic-core handles models, dataclasses and bytes (base64); the second
    # pass rejects NaN/Infinity and sorts object keys.
    try:
        raw = to_json(value, bytes_mode="base64")
        canonical = json.loads(raw, parse_constant=_reject_constant)
    except (PydanticSerializationError, ValueError) as exc:
        logger.debug("JSON encoding failed for %s: %s", type(value).__name__, exc)
        raise SerializationError(value, str(exc)) from exc
    text = json.dumps(canonical, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    return text.encode(TEXT_ENCODING)


def to_string(value: Any) -> str:
    """
    Convert a value to text.

    str is returned verbatim and byte sequences are decoded without validation
    (invalid UTF-8 survives as surrogate escapes). Anything else is rendered as
    compact JSON.

    Raises:
        SerializationError: the value cannot be encoded as JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, _BYTE_TYPES):
        return bytes_to_string(value)
    return bytes_to_string(_marshal(value))


def to_bytes(value: Any) -> bytes:
    """
    Convert a value to bytes, mirroring to_string.

    bytes come back as the same object; bytearray and memoryview are copied.

    Raises:
        SerializationError: the value cannot be encoded as JSON.
    """
    if isinstance(value, str):
        return string_to_bytes(value)
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return _marshal(value)


def to_slice(data: Any) -> List[Any]:
    """Return the elements of a sequence as a new list, or [] for anything else."""
    if isinstance(data, str):
        return []
    if isinstance(data, (Sequence, array.array)):
        return list(data)
    return []
