"""Tests for autotag.core.result."""

import pytest

from autotag.core.result import Err, Ok, is_err, is_ok


class TestOk:
    def test_unwrap_returns_value(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_type_guards(self) -> None:
        assert is_ok(Ok(1))
        assert not is_err(Ok(1))


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_pattern_matching(self) -> None:
        match Err("boom"):
            case Ok(_):
                pytest.fail("expected Err")
            case Err(error):
                assert error == "boom"
