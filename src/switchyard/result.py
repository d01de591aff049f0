"""
Result — the synchronous success-or-failure sum type.

A Result[E, A] is either Success(value: A) or Failure(error: E).
Transformations short-circuit on Failure, so the happy path is the only
path written out:

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │ validate  │──Success──────│  enrich   │──Success──────│ persist  │──→ Result[E, A]
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result[E, A]

Unlike an exception, the failure payload is an ordinary value of any type:
a string, an enum, a FailureDescription, or a captured exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from switchyard.option import Absent, Option, Present

E = TypeVar("E")
F = TypeVar("F")
A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


class Result(Generic[E, A]):
    """
    Two possible states:
      - Success(value: A) — the happy path
      - Failure(error: E) — the failure track

    Usage:
        >>> Result.success(42).map(lambda x: x * 2)
        Success(84)

        >>> Result.failure("bad input").map(lambda x: x * 2).is_failure()
        True

    Both variants support structural pattern matching:

        match result:
            case Success(v): ...
            case Failure(e): ...
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Result is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Result is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> A:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err!r}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """
        Extract the failure payload. Raises ValueError if called on a Success.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(self, on_success: Callable[[A], R], on_failure: Callable[[E], R]) -> R:
        """
        Apply one of two functions depending on the state.

            result.either(
                on_success=lambda user: f"Hello {user.name}",
                on_failure=lambda err: f"Error: {err}",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[A], B]) -> Result[E, B]:
        """
        Transform the success value. Short-circuits on failure.

            Result.success(5).map(lambda x: x * 2)   # → Success(10)
            Result.failure("x").map(lambda x: x * 2) # → Failure('x')
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(_):
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(self, mapper: Callable[[E], F]) -> Result[F, A]:
        """Transform the failure payload. Passes through success unchanged."""
        match self:
            case Success(_):
                return self  # type: ignore[return-value]
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[A], Result[E, B]]) -> Result[E, B]:
        """
        Chain a Result-returning function. Short-circuits on failure.

            def validate(x: int) -> Result[str, int]:
                return Result.success(x) if x > 0 else Result.failure("Must be positive")

            Result.success(5).flat_map(validate)   # → Success(5)
            Result.success(-1).flat_map(validate)  # → Failure('Must be positive')
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(_):
                return self  # type: ignore[return-value]
        raise TypeError("unreachable")  # pragma: no cover

    def swap(self) -> Result[A, E]:
        """Exchange the tracks: Success(a) → Failure(a), Failure(e) → Success(e)."""
        match self:
            case Success(v):
                return Failure(v)
            case Failure(err):
                return Success(err)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[A], Any]) -> Result[E, A]:
        """Execute a side effect on the success value without altering the Result."""
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[E], Any]) -> Result[E, A]:
        """Execute a side effect on failure without altering the Result."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], A]) -> Result[E, A]:
        """Recover from failure by producing a success value."""
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: A) -> A:
        """Extract value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[E], A]) -> A:
        """Extract value or compute a default from the failure."""
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Conversions ────────────────────────

    def to_option(self) -> Option[A]:
        """Success → Present(value), Failure → Absent(). The failure payload is dropped."""
        match self:
            case Success(v):
                return Present(v)
        return Absent()

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: A) -> Result[Any, A]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def failure(error: E) -> Result[E, Any]:
        """Create a failed Result wrapping the given failure payload."""
        return Failure(error)

    @staticmethod
    def from_computation(computation: Callable[[], A]) -> Result[Exception, A]:
        """
        Run a computation that may raise and capture the exception as a Failure.

            Result.from_computation(lambda: int(raw))  # → Success(3) or Failure(ValueError(...))
        """
        try:
            return Success(computation())
        except Exception as e:
            return Failure(e)

    @staticmethod
    def from_optional(value: Optional[A], error: E) -> Result[E, A]:
        """
        Create a Result from a value that may be None.

            Result.from_optional(user, "User is required")
        """
        if value is not None:
            return Success(value)
        return Failure(error)

    @staticmethod
    def combine(ra: Result[E, A], rb: Result[E, B], combiner: Callable[[A, B], R]) -> Result[E, R]:
        """Combine two Results. Both must succeed for the combination to succeed."""
        return ra.flat_map(lambda a: rb.map(lambda b: combiner(a, b)))

    @staticmethod
    def all_of(results: Iterable[Result[E, A]]) -> Result[E, list[A]]:
        """
        Collect Results into a Result of list.
        Returns the first failure encountered, or Success with all values.
        """
        values: list[A] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(_):
                    return r  # type: ignore[return-value]
        return Success(values)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if result: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Result[Any, A]):
    """The success track — wraps a value of type A."""

    _value: A

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Result[E, Any]):
    """The failure track — wraps a failure payload of type E."""

    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"
