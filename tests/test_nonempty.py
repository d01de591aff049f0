"""Tests for NonEmptyList."""

from __future__ import annotations

import pytest

from switchyard import Absent, NonEmptyList, Present


class TestNonEmptyList:
    def test_equals_plain_list(self):
        assert NonEmptyList([5]) == [5]

    def test_rejects_empty(self):
        with pytest.raises(ValueError, match="at least one element"):
            NonEmptyList([])

    def test_is_non_empty(self):
        assert NonEmptyList.is_non_empty([]) is False
        assert NonEmptyList.is_non_empty([1]) is True

    def test_from_sequence(self):
        assert NonEmptyList.from_sequence([]) == Absent()
        assert NonEmptyList.from_sequence([1]) == Present(NonEmptyList([1]))

    def test_from_tuple(self):
        assert NonEmptyList.from_tuple((1, "test")) == NonEmptyList([1, "test"])

    def test_head_and_last(self):
        items = NonEmptyList([1, 2, 3])
        assert NonEmptyList.head(items) == 1
        assert NonEmptyList.last(items) == 3

    def test_unsafe_coerce(self):
        with pytest.raises(ValueError):
            NonEmptyList.unsafe_coerce([])
        assert NonEmptyList.unsafe_coerce([1]) == NonEmptyList([1])

    def test_behaves_like_a_list(self):
        items = NonEmptyList([1, 2])
        items.append(3)
        assert [x * 2 for x in items] == [2, 4, 6]
        assert isinstance(items, list)
