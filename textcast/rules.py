"""
Deterministic conversion rules.

This file exists to make the permissive-parsing policy explicit and enforceable.
"""

CSV_SEPARATOR = ","

# Text <-> bytes reinterpretation. surrogateescape lets invalid UTF-8 through
# unchanged and restores the original bytes on the way back.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

INT64_BITS = 64
INT32_BITS = 32
INT_BITS = 64  # platform int
