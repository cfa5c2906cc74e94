"""Tests for the Result type, ErrorTrace and error classification.

Validates:
- Functor and monad laws
- Accessors and combinators
- Error context stacking
- Exception classification
"""

from __future__ import annotations

from typing import Callable

import httpx
import orjson
import pytest

from curlcase.foundation.errors import (
    Err,
    ErrorCode,
    ErrorTrace,
    Ok,
    Result,
    ToolError,
    ToolException,
    classify_exception,
    error_from_exception,
    result_to_string,
)
from curlcase.tools import TransportError, TransportTimeout


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor & Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    assert Ok(42).map(lambda x: x) == Ok(42)
    assert Err("fail").map(lambda x: x) == Err("fail")


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2

    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(42).flat_map(f) == f(42)


def test_monad_right_identity() -> None:
    """Monad law: m >>= return = m"""
    m: Result[int, str] = Ok(42)
    assert m.flat_map(lambda x: Ok(x)) == m


def test_monad_associativity() -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[int, str] = Ok(5)
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")
    assert result.is_err()
    assert result.unwrap_err() == "failed"
    assert result.ok() is None
    assert result.unwrap_or(7) == 7


def test_unwrap_on_err_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("boom").unwrap()


def test_map_err_and_or_else() -> None:
    assert Err("e").map_err(str.upper) == Err("E")
    assert Ok(1).map_err(str.upper) == Ok(1)
    assert Err("e").or_else(lambda e: Ok(len(e))) == Ok(1)
    assert Ok(3).or_else(lambda e: Ok(0)) == Ok(3)


def test_and_then_alias() -> None:
    assert Ok(2).and_then(lambda x: Ok(x + 1)) == Ok(3)
    assert Err("e").and_then(lambda x: Ok(x + 1)) == Err("e")


def test_match() -> None:
    assert Ok(2).match(ok=lambda v: f"ok {v}", err=lambda e: f"err {e}") == "ok 2"
    assert Err("x").match(ok=lambda v: f"ok {v}", err=lambda e: f"err {e}") == "err x"


def test_inspect_err_only_on_err() -> None:
    seen: list[str] = []
    Ok(1).inspect_err(seen.append)
    Err("bad").inspect_err(seen.append)
    assert seen == ["bad"]


def test_truthiness_iteration_repr() -> None:
    assert Ok(1) and not Err(1)
    assert list(Ok(5)) == [5]
    assert list(Err("x")) == []
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("x")) == "Err('x')"


# ═════════════════════════════════════════════════════════════════════════════
# ErrorTrace
# ═════════════════════════════════════════════════════════════════════════════


def test_trace_context_stacking() -> None:
    t = ErrorTrace("Error making request: refused", error_code=ErrorCode.NETWORK_ERROR).with_operation(
        "tool:curl",
    ).with_operation("request", method="GET")
    assert t.root_operation == "tool:curl"
    assert [c.operation for c in t.contexts] == ["tool:curl", "request"]
    assert t.contexts[1].metadata == {"method": "GET"}
    assert "[NETWORK_ERROR]" in t.format()


def test_trace_is_immutable() -> None:
    t = ErrorTrace("m")
    assert t.with_operation("tool:curl") is not t
    assert t.contexts == ()


def test_result_to_string_renders_message() -> None:
    result = error_from_exception("curl", RuntimeError("boom"))
    assert result_to_string(result, "curl") == "boom"
    assert result_to_string(Ok("fine"), "curl") == "fine"


def test_error_from_exception_with_context() -> None:
    t = error_from_exception("parse-json", ValueError("x"), "execution").unwrap_err()
    assert t.message == "execution: x"
    assert t.error_code == ErrorCode.INVALID_PARAMS
    assert t.details is not None


# ═════════════════════════════════════════════════════════════════════════════
# Classification
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("exc, code", [
    (TransportTimeout("Request timed out after 1000ms"), ErrorCode.TIMEOUT),
    (TimeoutError(), ErrorCode.TIMEOUT),
    (httpx.ConnectError("refused"), ErrorCode.NETWORK_ERROR),
    (TransportError("socket closed"), ErrorCode.NETWORK_ERROR),
    (orjson.JSONDecodeError("unexpected character", "{x", 1), ErrorCode.PARSE_ERROR),
    (ValueError("nope"), ErrorCode.INVALID_PARAMS),
    (RuntimeError("mystery"), ErrorCode.EXTERNAL_SERVICE_ERROR),
])
def test_classify_exception(exc: BaseException, code: ErrorCode) -> None:
    assert classify_exception(exc) == code


def test_tool_exception_carries_error() -> None:
    error = ToolError.create("curl", "Error making request: slow", ErrorCode.TIMEOUT)
    exc = ToolException(error)
    assert exc.error is error
    assert str(exc) == "Error making request: slow"
