"""Unit tests for the info response parser."""

from __future__ import annotations

import pytest

from stat_merge.core.parser import parse_flat, parse_list, parse_multi


class TestParseFlat:
    def test_simple_pairs(self) -> None:
        assert parse_flat("a=1;b=2") == {"a": "1", "b": "2"}

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw: str | None) -> None:
        assert parse_flat(raw) == {}

    def test_chunks_without_equals_are_dropped(self) -> None:
        assert parse_flat("a=1;garbage;b=2;") == {"a": "1", "b": "2"}

    def test_splits_at_first_equals_only(self) -> None:
        assert parse_flat("expr=a=b;c=1") == {"expr": "a=b", "c": "1"}

    def test_trims_keys_and_values(self) -> None:
        assert parse_flat(" a = 1 ; b=2 ") == {"a": "1", "b": "2"}

    def test_later_duplicate_wins(self) -> None:
        assert parse_flat("a=1;a=2") == {"a": "2"}

    def test_empty_value_is_kept(self) -> None:
        assert parse_flat("a=;b=2") == {"a": "", "b": "2"}


class TestParseMulti:
    def test_two_entities(self) -> None:
        raw = "ns=test:set=users:objects=10;ns=test:set=orders:objects=3"
        assert parse_multi(raw) == [
            {"ns": "test", "set": "users", "objects": "10"},
            {"ns": "test", "set": "orders", "objects": "3"},
        ]

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_input(self, raw: str | None) -> None:
        assert parse_multi(raw) == []

    def test_empty_chunks_are_dropped(self) -> None:
        assert parse_multi("a=1;; ;b=2;") == [{"a": "1"}, {"b": "2"}]

    def test_malformed_pairs_are_dropped(self) -> None:
        assert parse_multi("a=1:oops:b=2") == [{"a": "1", "b": "2"}]

    def test_value_containing_equals(self) -> None:
        assert parse_multi("exp=bin=1:ns=test") == [{"exp": "bin=1", "ns": "test"}]


class TestParseList:
    def test_comma_separated(self) -> None:
        assert parse_list("test,bar") == ["test", "bar"]

    def test_trims_and_drops_empty(self) -> None:
        assert parse_list(" test , ,bar,") == ["test", "bar"]

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw: str | None) -> None:
        assert parse_list(raw) == []
