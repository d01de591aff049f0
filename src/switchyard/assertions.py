"""
Test assertions for Result and Option values.

Expressive assert helpers that produce clear failure messages, including for
outcomes produced by awaiting an AsyncResult or AsyncOption.

Usage in tests:
    from switchyard import ResultAssertions

    async def test_load_user():
        result = await load_user(42).run()
        user = ResultAssertions.assert_success(result)
        assert user.name == "Alice"

    async def test_missing_user():
        result = await load_user(-1).run()
        ResultAssertions.assert_failure_value(result, "not found")
"""

from __future__ import annotations

from typing import Any, TypeVar

from switchyard.option import Option
from switchyard.result import Result

A = TypeVar("A")
E = TypeVar("E")


class ResultAssertions:
    """Expressive test assertions for Result and Option values."""

    @staticmethod
    def assert_success(result: Result[Any, A], message: str = "") -> A:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_success(), f"Expected Success but got {result!r}{context}"
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[E, Any],
        expected_type: type | None = None,
        message: str = "",
    ) -> E:
        """
        Assert the Result is a Failure, optionally checking the payload type.

            error = ResultAssertions.assert_failure(result, ValueError)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), f"Expected Failure but got {result!r}{context}"
        error = result.error()
        if expected_type is not None:
            assert isinstance(error, expected_type), (
                f"Expected failure of type {expected_type.__name__} "
                f"but got {type(error).__name__}: {error!r}{context}"
            )
        return error

    @staticmethod
    def assert_success_value(result: Result[Any, A], expected_value: Any) -> None:
        """Assert the Result is a Success with the specific value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )

    @staticmethod
    def assert_failure_value(result: Result[E, Any], expected_error: Any) -> None:
        """Assert the Result is a Failure with the specific payload."""
        error = ResultAssertions.assert_failure(result)
        assert error == expected_error, (
            f"Expected failure payload {expected_error!r} but got {error!r}"
        )

    @staticmethod
    def assert_present(option: Option[A]) -> A:
        """Assert the Option is Present and return the value."""
        assert option.is_present(), f"Expected Present but got {option!r}"
        return option.value()

    @staticmethod
    def assert_absent(option: Option[Any]) -> None:
        assert option.is_absent(), f"Expected Absent() but got {option!r}"
