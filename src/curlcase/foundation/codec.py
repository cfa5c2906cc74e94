"""JSON codec shared by the tools (orjson).

Output formatting matches what agents expect from the tools:
compact JSON for request bodies, 2-space indented JSON for anything
shown back to the caller.

    >>> dumps_pretty({"a": [1, 2]})
    '{\\n  "a": [\\n    1,\\n    2\\n  ]\\n}'
"""

from __future__ import annotations

from dataclasses import dataclass

import orjson

from .errors import JsonValue

JSONDecodeError = orjson.JSONDecodeError
JSONEncodeError = orjson.JSONEncodeError


def loads(data: str | bytes) -> JsonValue:
    """Parse JSON text. Raises JSONDecodeError (also rejects NaN/Infinity)."""
    return orjson.loads(data)


def dumps(value: JsonValue) -> str:
    """Compact JSON text."""
    return orjson.dumps(value).decode()


def dumps_pretty(value: JsonValue) -> str:
    """2-space indented JSON text."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode()


# ─────────────────────────────────────────────────────────────────────────────
# Best-effort decoding
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Parsed:
    """Text that turned out to be JSON."""

    value: JsonValue


@dataclass(frozen=True, slots=True)
class Raw:
    """Text that is not JSON, kept verbatim."""

    text: str


Decoded = Parsed | Raw


def sniff_json(text: str) -> Decoded:
    """Try to read text as JSON, falling back to the raw text."""
    try:
        return Parsed(orjson.loads(text))
    except orjson.JSONDecodeError:
        return Raw(text)
