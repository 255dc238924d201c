"""Tests for policy_portal foundation classes."""

import pytest

from policy_portal import __version__
from policy_portal.core.errors import AuthError, ExtractionFailed, NetworkError, StaleCriteria
from policy_portal.core.result_types import Err, Ok, Result


def test_version() -> None:
    """Version is defined as a string."""
    assert isinstance(__version__, str), (
        f"Version should be string, got {type(__version__)}"
    )


def test_result_ok() -> None:
    """Ok() creates a successful result."""
    result: Result[str, str] = Ok("success")
    assert result.is_ok(), "Result should be ok"
    assert not result.is_err(), "Result should not be error"
    assert result.unwrap() == "success"
    assert result.ok_value == "success"
    assert result.err_value is None


def test_result_err() -> None:
    """Err() creates an error result."""
    result: Result[str, str] = Err("failure")
    assert result.is_err(), "Result should be error"
    assert not result.is_ok(), "Result should not be ok"
    assert result.unwrap_err() == "failure"
    assert result.unwrap_or("fallback") == "fallback"


def test_result_unwrap_panic() -> None:
    """unwrap() raises on an error result."""
    with pytest.raises(ValueError, match="Called unwrap on Err value"):
        Err("failure").unwrap()


def test_result_unwrap_err_panic() -> None:
    """unwrap_err() raises on an ok result."""
    with pytest.raises(ValueError, match="Called unwrap_err on Ok value"):
        Ok("success").unwrap_err()


def test_result_map_and_chain() -> None:
    """map/and_then only touch Ok values; map_err only touches Err values."""
    assert Ok(2).map(lambda v: v * 10) == Ok(20)
    assert Err("x").map(lambda v: v * 10) == Err("x")
    assert Err("x").map_err(str.upper) == Err("X")
    assert Ok(2).map_err(str.upper) == Ok(2)
    assert Ok(2).and_then(lambda v: Ok(v + 1)) == Ok(3)
    assert Err("x").and_then(lambda v: Ok(v + 1)) == Err("x")


def test_error_values_render_for_agents() -> None:
    """Error values carry a readable message."""
    assert str(AuthError(status_code=401)) == "Authentication required (HTTP 401)"
    assert str(NetworkError("Server down")) == "Server down"
    assert str(NetworkError("Not found", status_code=404)) == "Not found (HTTP 404)"
    assert str(ExtractionFailed("Please upload a PDF file")) == "Please upload a PDF file"
    assert "superseded" in str(StaleCriteria(ticket=1, latest=3))


def test_error_values_are_immutable() -> None:
    """Error values are frozen attrs classes."""
    error = NetworkError("timeout")
    with pytest.raises(AttributeError):
        error.message = "changed"  # type: ignore[misc]
