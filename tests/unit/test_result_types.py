"""Unit tests for Ok/Err result wrappers."""

import pytest

from aw_license.core.result_types import Err, Ok, Result


class TestResultTypes:
    """Test result wrapper behaviour."""

    def test_ok(self) -> None:
        result = Ok("payload")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "payload"

        with pytest.raises(ValueError, match="unwrap_err on Ok"):
            result.unwrap_err()

    def test_err(self) -> None:
        error = RuntimeError("boom")
        result = Err(error)
        assert result.is_err()
        assert not result.is_ok()
        assert result.unwrap_err() is error

        with pytest.raises(ValueError, match="unwrap on Err"):
            result.unwrap()

    def test_results_are_frozen(self) -> None:
        """Test that results cannot be mutated."""
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_result_alias_accepts_both_wrappers(self) -> None:
        """Test that the alias is a union of the two wrappers."""
        alias = Result[int, str]
        assert Ok[int] in alias.__args__
        assert Err[str] in alias.__args__
