"""Tests for the orjson codec and best-effort body decoding."""

from __future__ import annotations

import pytest

from curlcase.foundation.codec import JSONDecodeError, Parsed, Raw, dumps, dumps_pretty, loads, sniff_json


def test_compact_and_pretty() -> None:
    value = {"a": [1, {"b": None}], "s": "ü"}
    assert dumps(value) == '{"a":[1,{"b":null}],"s":"ü"}'
    assert dumps_pretty(value) == '{\n  "a": [\n    1,\n    {\n      "b": null\n    }\n  ],\n  "s": "ü"\n}'


def test_pretty_round_trips() -> None:
    value = {"nested": {"list": [1.5, True, "x"]}}
    assert loads(dumps_pretty(value)) == value


@pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", "{a: 1}", ""])
def test_loads_is_strict(text: str) -> None:
    with pytest.raises(JSONDecodeError):
        loads(text)


@pytest.mark.parametrize("text, value", [('{"ok": true}', {"ok": True}), ("[]", []), ("3", 3), ("null", None)])
def test_sniff_json_parsed(text: str, value: object) -> None:
    assert sniff_json(text) == Parsed(value)


@pytest.mark.parametrize("text", ["<html/>", "", "hello world", "{"])
def test_sniff_json_raw(text: str) -> None:
    assert sniff_json(text) == Raw(text)
