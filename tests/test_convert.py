import array
import logging
from collections import deque
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from textcast.convert import (
    bytes_to_string,
    bytes_view,
    string_to_bytes,
    to_bytes,
    to_slice,
    to_string,
)
from textcast.errors import SerializationError, TextcastError


class Point(BaseModel):
    x: int
    y: int


@dataclass
class Tag:
    name: str


def test_to_string_passes_str_through():
    s = "héllo"
    assert to_string(s) is s


def test_to_string_decodes_bytes():
    assert to_string("中文".encode("utf-8")) == "中文"
    assert to_string(bytearray(b"abc")) == "abc"
    assert to_string(memoryview(b"abc")) == "abc"


def test_to_string_does_not_validate_utf8():
    raw = b"ok\xff\xfe"
    text = to_string(raw)
    assert text.startswith("ok")
    assert to_bytes(text) == raw


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (True, "true"),
        (42, "42"),
        ([1, 2, 3], "[1,2,3]"),
        ({"a": 1, "b": [True, None]}, '{"a":1,"b":[true,null]}'),
        ({"k": "中文"}, '{"k":"中文"}'),
        (Point(x=1, y=2), '{"x":1,"y":2}'),
        (Tag(name="n"), '{"name":"n"}'),
    ],
)
def test_to_string_json(value, expected):
    assert to_string(value) == expected
    assert to_bytes(value) == expected.encode("utf-8")


def test_to_bytes_identity_for_bytes():
    raw = b"\x00\x01"
    assert to_bytes(raw) is raw


def test_to_bytes_copies_mutable_buffers():
    buf = bytearray(b"abc")
    out = to_bytes(buf)
    buf[0] = ord("z")
    assert out == b"abc"
    assert isinstance(out, bytes)


def test_to_bytes_encodes_str():
    assert to_bytes("中") == "中".encode("utf-8")


def test_unsupported_value_raises_serialization_error():
    marker = object()
    with pytest.raises(SerializationError) as exc_info:
        to_bytes({"v": marker})
    err = exc_info.value
    assert err.value == {"v": marker}
    assert "marshal value" in str(err)
    assert isinstance(err, TextcastError)
    assert isinstance(err, ValueError)
    assert exc_info.value.__cause__ is not None


def test_cyclic_value_raises_serialization_error():
    cyclic = []
    cyclic.append(cyclic)
    with pytest.raises(SerializationError):
        to_string(cyclic)


def test_serialization_failure_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="textcast.convert"):
        with pytest.raises(SerializationError):
            to_string(object())
    assert any(r.levelno == logging.DEBUG for r in caplog.records)


def test_string_bytes_helpers():
    assert string_to_bytes("abc") == b"abc"
    assert bytes_to_string(b"abc") == "abc"
    assert bytes_to_string(string_to_bytes("\udcff")) == "\udcff"


def test_bytes_view_borrows_without_copy():
    buf = bytearray(b"abc")
    view = bytes_view(buf)
    assert view.readonly
    buf[0] = ord("z")
    assert view.tobytes() == b"zbc"
    with pytest.raises(BufferError):
        buf.append(1)
    view.release()


def test_bytes_view_of_str():
    view = bytes_view("中")
    assert view.tobytes() == "中".encode("utf-8")
    with pytest.raises(TypeError):
        view[0] = 0


@pytest.mark.parametrize(
    "data, expected",
    [
        ([1, 2, 3], [1, 2, 3]),
        ((1, "a"), [1, "a"]),
        ([], []),
        (range(3), [0, 1, 2]),
        (deque([1, 2]), [1, 2]),
        (array.array("i", [4, 5]), [4, 5]),
        (b"ab", [97, 98]),
    ],
)
def test_to_slice_sequences(data, expected):
    assert to_slice(data) == expected


@pytest.mark.parametrize("data", [42, None, "abc", {"a": 1}, {1, 2}, iter([1]), 1.5])
def test_to_slice_non_sequences(data):
    assert to_slice(data) == []


def test_to_slice_returns_new_list():
    src = [1, 2]
    out = to_slice(src)
    assert out == src
    assert out is not src


@pytest.mark.parametrize(
    "value",
    [
        float("nan"),
        float("inf"),
        float("-inf"),
        {"x": float("inf")},
        [1.0, float("nan")],
        {"outer": {"inner": [float("-inf")]}},
    ],
)
def test_non_finite_floats_raise_serialization_error(value):
    with pytest.raises(SerializationError, match="unsupported value"):
        to_string(value)
    with pytest.raises(SerializationError):
        to_bytes(value)


def test_nan_text_inside_strings_is_fine():
    assert to_string({"v": "NaN Infinity"}) == '{"v":"NaN Infinity"}'


@pytest.mark.parametrize(
    "value, expected",
    [
        ({"k": b"hi!"}, '{"k":"aGkh"}'),
        ({"k": b"\x00\xfe\x10"}, '{"k":"AP4Q"}'),
        ([b""], '[""]'),
    ],
)
def test_nested_bytes_are_base64(value, expected):
    assert to_string(value) == expected


def test_object_keys_are_sorted():
    assert to_string({"b": 1, "a": 2}) == '{"a":2,"b":1}'
    assert to_string({"z": {"y": 1, "x": 2}, "a": [{"d": 0, "c": 0}]}) == (
        '{"a":[{"c":0,"d":0}],"z":{"x":2,"y":1}}'
    )


def test_equal_dicts_encode_the_same():
    first = {"b": 1, "a": 2}
    second = {"a": 2, "b": 1}
    assert to_bytes(first) == to_bytes(second)
