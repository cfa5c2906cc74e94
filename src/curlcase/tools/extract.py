"""parse-json tool - parse a JSON document and pull out a nested value.

Paths are dot-separated keys applied from the root: `users.0.name`.
Object keys are looked up by name, array elements by decimal index.
A path that leads nowhere is not an error; the result is `null`.

    >>> extract_path({"a": {"b": 42}}, "a.b")
    42
    >>> extract_path({"a": 1}, "a.b.c") is ABSENT
    True
    >>> render_value({"a": [1]})
    '{\\n  "a": [\\n    1\\n  ]\\n}'
"""

from __future__ import annotations

import re
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field

from curlcase.foundation.codec import JSONDecodeError, dumps_pretty, loads
from curlcase.foundation.core import BaseTool, ToolMetadata
from curlcase.foundation.errors import ErrorCode, JsonValue, ToolResult

_INDEX = re.compile(r"0|[1-9][0-9]*")


class _Absent:
    """Marker for a property that does not exist (distinct from JSON null)."""

    __slots__ = ()
    _instance: ClassVar[_Absent | None] = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def get_property(value: JsonValue, key: str) -> JsonValue | _Absent:
    """Index one level into a JSON value. Never raises; a miss is ABSENT."""
    match value:
        case dict():
            return value.get(key, ABSENT)
        case list() if _INDEX.fullmatch(key):
            index = int(key)
            return value[index] if index < len(value) else ABSENT
        case _:
            return ABSENT


def extract_path(document: JsonValue, path: str) -> JsonValue | _Absent:
    """Walk `path` from the root, stopping at the first null or missing value."""
    current: JsonValue | _Absent = document
    for segment in path.split("."):
        if current is None or current is ABSENT:
            break
        current = get_property(current, segment)  # type: ignore[arg-type]
    return current


def render_value(value: JsonValue | _Absent) -> str:
    """Objects and arrays as indented JSON, scalars as plain text."""
    match value:
        case _Absent() | None:  # a missing path renders like JSON null, never "undefined"
            return "null"
        case bool():
            return "true" if value else "false"
        case dict() | list():
            return dumps_pretty(value)
        case str():
            return value
        case _:
            return str(value)


class ParseJsonParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    json_text: str = Field(..., alias="json", description="The JSON string to parse")
    path: str | None = Field(
        default=None, description="Optional JSONPath-like expression to extract specific data",
    )


class ParseJsonTool(BaseTool[ParseJsonParams]):
    """Parses JSON text and returns it formatted, or the value at a dotted path."""

    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="parse-json",
        description="Parses a JSON string and returns a formatted representation",
        category="data",
    )
    params_schema: ClassVar[type[ParseJsonParams]] = ParseJsonParams

    def _run_result(self, params: ParseJsonParams) -> ToolResult:
        try:
            document = loads(params.json_text)
        except JSONDecodeError as e:
            return self._err(f"Error parsing JSON: {e}", ErrorCode.PARSE_ERROR, operation="parse")

        if not params.path:
            return self._ok(render_value(document))

        try:
            found = extract_path(document, params.path)
        except Exception as e:
            return self._err(
                f'Error extracting data with path "{params.path}": {e}',
                ErrorCode.INVALID_PARAMS,
                operation="extract",
            )
        return self._ok(render_value(found))

    async def _async_run_result(self, params: ParseJsonParams) -> ToolResult:
        return self._run_result(params)
