"""Tests for iosenv.core.result module."""

from __future__ import annotations

import pytest

from iosenv.core.result import Err, Ok, Result, is_err, is_ok


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok(3).unwrap() == 3
        assert Ok(3).unwrap_or(0) == 3

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 10) == Ok(20)

    def test_repr(self) -> None:
        assert repr(Ok("x")) == "Ok('x')"


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_unwrap_or(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        err: Err[str] = Err("boom")
        assert err.map(lambda v: v) is err


class TestGuards:
    def test_is_ok(self) -> None:
        assert is_ok(_half(4))
        assert not is_err(_half(4))

    def test_is_err(self) -> None:
        result = _half(3)
        assert is_err(result)
        assert result.error == "3 is odd"

    def test_pattern_matching(self) -> None:
        match _half(8):
            case Ok(value):
                assert value == 4
            case Err():
                pytest.fail("expected Ok")
