"""
Text shaping: identifier case conversion, character-class filters and cleanup.

Responsibilities:
- camel / snake case conversion of identifiers
- keep-only filters (ASCII digits, ASCII alphanumerics, Han ideographs)
- trimming and removal of non-graphic code points
"""

from __future__ import annotations

import unicodedata

import regex

_WORD_RE = regex.compile(r"[\p{L}\p{N}]+")
_NON_NUMERIC_RE = regex.compile(r"[^0-9 ]+")
_NON_ALPHANUMERIC_RE = regex.compile(r"[^a-zA-Z0-9 ]+")
_NON_CHINESE_RE = regex.compile(r"[^\p{Han}]+")
_NON_GRAPHIC_RE = regex.compile(r"[^\p{L}\p{M}\p{N}\p{P}\p{S}\p{Zs}]+")
_EDGE_SPACE_RE = regex.compile(r"\A\p{White_Space}+|\p{White_Space}+\Z")


def _title(word: str) -> str:
    # str.title() on one character gives its titlecase form ("ǆ" -> "ǅ", "ß" -> "Ss")
    return word[:1].title() + word[1:]


def _lower_char(ch: str) -> str:
    # simple case mapping: one code point in, one out ("İ" -> "i", "Σ" -> "σ")
    return ch.lower()[:1]


def to_camel_case(s: str) -> str:
    """
    Convert "user_id" / "user-id" / "user id" to "UserId".

    Words are maximal runs of Unicode letters and numbers; every other character
    is a separator and is dropped. Only the first character of a word changes.
    """
    return "".join(_title(word) for word in _WORD_RE.findall(s))


def to_snake_case(s: str) -> str:
    """
    Convert "UserId" to "user_id".

    The input goes through to_camel_case first. An underscore is inserted only
    at a lowercase -> uppercase transition, so runs of capitals ("ABCWorld")
    and digits stay glued to their neighbours.
    """
    camel = to_camel_case(s)
    out = []
    for i, ch in enumerate(camel):
        out.append(_lower_char(ch))
        if (
            i + 1 < len(camel)
            and unicodedata.category(ch) == "Ll"
            and unicodedata.category(camel[i + 1]) == "Lu"
        ):
            out.append("_")
    return "".join(out)


def only_numeric(s: str) -> str:
    """Drop everything except ASCII digits and spaces."""
    return _NON_NUMERIC_RE.sub("", s)


def only_alpha_numeric(s: str) -> str:
    """Drop everything except ASCII letters, ASCII digits and spaces."""
    return _NON_ALPHANUMERIC_RE.sub("", s)


def only_chinese(s: str) -> str:
    """Drop everything except Han ideographs."""
    return _NON_CHINESE_RE.sub("", s)


def clean_string(s: str, lowercase: bool = False) -> str:
    """
    Trim, optionally lowercase, then strip non-graphic code points.

    Rules:
    - Leading/trailing Unicode White_Space is removed.
    - lowercase=True lowercases the trimmed text, one code point at a time.
    - Control, format, surrogate, private-use, unassigned and line/paragraph
      separator code points are removed anywhere in the string.
    """
    s = _EDGE_SPACE_RE.sub("", s)
    if lowercase:
        s = "".join(_lower_char(ch) for ch in s)
    return _NON_GRAPHIC_RE.sub("", s)
