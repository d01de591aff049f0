"""
NonEmptyList — a list that is known to hold at least one element.

It is an ordinary list in every other respect, so it compares equal to a
plain list with the same elements and supports every list method.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from switchyard.option import Absent, Option, Present

A = TypeVar("A")


class NonEmptyList(list[A]):
    """
    >>> NonEmptyList([5])
    [5]
    >>> NonEmptyList.from_sequence([])
    Absent()
    """

    def __init__(self, items: Iterable[A]) -> None:
        super().__init__(items)
        if not self:
            raise ValueError("NonEmptyList requires at least one element")

    @staticmethod
    def is_non_empty(items: Sequence[A]) -> bool:
        return len(items) > 0

    @staticmethod
    def from_sequence(items: Sequence[A]) -> Option[NonEmptyList[A]]:
        """Present(NonEmptyList) when the sequence has elements, Absent() otherwise."""
        if NonEmptyList.is_non_empty(items):
            return Present(NonEmptyList(items))
        return Absent()

    @staticmethod
    def from_tuple(items: tuple[A, ...]) -> NonEmptyList[A]:
        return NonEmptyList(items)

    @staticmethod
    def unsafe_coerce(items: Sequence[A]) -> NonEmptyList[A]:
        """Like the constructor; raises ValueError when the sequence is empty."""
        return NonEmptyList(items)

    @staticmethod
    def head(items: NonEmptyList[A]) -> A:
        return items[0]

    @staticmethod
    def last(items: NonEmptyList[A]) -> A:
        return items[-1]
