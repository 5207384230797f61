"""Tests for the Result type.

Covers the combinators the pipeline relies on: construction, map, map_err.
"""

from __future__ import annotations

import pytest

from slack_mcp.foundation.errors import Err, Ok, Result


# ═════════════════════════════════════════════════════════════════════════════
# Construction
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_holds_value() -> None:
    result: Result[dict[str, bool], str] = Ok({"ok": True})

    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == {"ok": True}


def test_err_holds_failure() -> None:
    result: Result[int, str] = Err("channel_not_found")

    assert result.is_err()
    assert not result.is_ok()
    assert result.unwrap_err() == "channel_not_found"


def test_unwrap_wrong_side_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("invalid_auth").unwrap()
    with pytest.raises(RuntimeError, match="unwrap_err"):
        Ok(1).unwrap_err()


# ═════════════════════════════════════════════════════════════════════════════
# map / map_err
# ═════════════════════════════════════════════════════════════════════════════


def test_map_transforms_ok_only() -> None:
    assert Ok(2).map(lambda n: n * 10) == Ok(20)
    assert Err("ratelimited").map(lambda n: n * 10) == Err("ratelimited")


def test_map_err_transforms_err_only() -> None:
    assert Err("is_archived").map_err(str.upper) == Err("IS_ARCHIVED")
    assert Ok("sent").map_err(str.upper) == Ok("sent")


def test_map_then_map_err_chain() -> None:
    """The dispatcher shape: map the payload, then map the failure."""
    ok = Ok("payload").map(lambda t: f"[{t}]").map_err(lambda e: f"Failed: {e}")
    err = Err("not_in_channel").map(lambda t: f"[{t}]").map_err(lambda e: f"Failed: {e}")

    assert ok.unwrap() == "[payload]"
    assert err.unwrap_err() == "Failed: not_in_channel"


# ═════════════════════════════════════════════════════════════════════════════
# Equality and repr
# ═════════════════════════════════════════════════════════════════════════════


def test_equality_distinguishes_sides() -> None:
    assert Ok(42) == Ok(42)
    assert Ok(42) != Ok(43)
    assert Ok(42) != Err(42)
    assert Ok(1) != 1


def test_repr() -> None:
    assert repr(Ok(42)) == "Ok(42)"
    assert repr(Err("fail")) == "Err('fail')"
