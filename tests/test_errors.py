"""Tests for the RuleRift error hierarchy."""

import pytest

from rulerift.errors import (
    ConfigurationError,
    InvalidMoveError,
    InvalidStateError,
    RuleRiftError,
)


class TestRuleRiftError:
    def test_default_code(self) -> None:
        err = RuleRiftError("boom")
        assert err.code == "RULERIFT_ERROR"
        assert str(err) == "[RULERIFT_ERROR] boom"

    def test_custom_code_and_context(self) -> None:
        err = RuleRiftError("boom", code="X", context={"size": 2})
        assert str(err) == "[X] boom (size=2)"
        assert err.to_dict() == {
            "code": "X",
            "message": "boom",
            "context": {"size": 2},
        }

    @pytest.mark.parametrize(
        "cls,code",
        [
            (InvalidStateError, "INVALID_STATE"),
            (InvalidMoveError, "INVALID_MOVE"),
            (ConfigurationError, "CONFIGURATION_ERROR"),
        ],
    )
    def test_subclass_codes(self, cls, code) -> None:
        err = cls("bad")
        assert isinstance(err, RuleRiftError)
        assert err.code == code


class TestInvalidMoveError:
    def test_move_is_recorded_in_context(self) -> None:
        err = InvalidMoveError("illegal", move="block@(0,0)")
        assert err.move == "block@(0,0)"
        assert err.context["move"] == "block@(0,0)"

    def test_without_move(self) -> None:
        err = InvalidMoveError("illegal")
        assert err.move is None
        assert err.context == {}
