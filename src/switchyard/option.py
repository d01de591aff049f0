"""
Option — the synchronous present-or-absent sum type.

An Option[A] is either Present(value: A) or Absent(). It replaces
"maybe None" return values with something that composes:

    Option.of(config.get("port")).map(int).get_or_else(8080)

Unlike a bare None, Present(None) is a legal value: absence is a tag,
not a payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Optional, TypeVar

if TYPE_CHECKING:
    from switchyard.result import Result

A = TypeVar("A")
B = TypeVar("B")
E = TypeVar("E")
R = TypeVar("R")


class Option(Generic[A]):
    """
    Two possible states:
      - Present(value: A)
      - Absent()

        >>> Option.of(5).map(lambda x: x + 1)
        Present(6)
        >>> Option.of(None).map(lambda x: x + 1)
        Absent()
    """

    def is_present(self) -> bool:
        return isinstance(self, Present)

    def is_absent(self) -> bool:
        return isinstance(self, Absent)

    def value(self) -> A:
        """Extract the value. Raises ValueError on Absent."""
        match self:
            case Present(v):
                return v
        raise ValueError("Cannot get value from Absent")

    def either(self, on_present: Callable[[A], R], on_absent: Callable[[], R]) -> R:
        match self:
            case Present(v):
                return on_present(v)
        return on_absent()

    def map(self, mapper: Callable[[A], B]) -> Option[B]:
        """Transform the present value. Absent passes through."""
        match self:
            case Present(v):
                return Present(mapper(v))
        return Absent()

    def flat_map(self, mapper: Callable[[A], Option[B]]) -> Option[B]:
        match self:
            case Present(v):
                return mapper(v)
        return Absent()

    def filter(self, predicate: Callable[[A], bool]) -> Option[A]:
        """Keep the value only if it satisfies the predicate."""
        match self:
            case Present(v) if predicate(v):
                return self
        return Absent()

    def get_or_else(self, default: A) -> A:
        match self:
            case Present(v):
                return v
        return default

    def to_result(self, error: E) -> Result[E, A]:
        """Present(v) → Success(v), Absent() → Failure(error)."""
        from switchyard.result import Failure, Success

        match self:
            case Present(v):
                return Success(v)
        return Failure(error)

    @staticmethod
    def of(value: Optional[A]) -> Option[A]:
        """Build an Option from a value that may be None."""
        if value is None:
            return Absent()
        return Present(value)

    @staticmethod
    def cat_options(options: Iterable[Option[A]]) -> list[A]:
        """Values of all the Present options, in order."""
        return [o.value() for o in options if o.is_present()]

    def __bool__(self) -> bool:
        return self.is_present()


@dataclass(frozen=True, slots=True)
class Present(Option[A]):
    """A value is there."""

    _value: A

    def __repr__(self) -> str:
        return f"Present({self._value!r})"


@dataclass(frozen=True, slots=True)
class Absent(Option[Any]):
    """No value. All Absent() instances are equal."""

    def __repr__(self) -> str:
        return "Absent()"
