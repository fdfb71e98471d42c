"""Unit tests for table response parsing."""

from __future__ import annotations

import json

import pytest

from kube_autocomplete.core.exceptions import TableParseError
from kube_autocomplete.core.table import flatten, format_pairs, parse_table


@pytest.mark.unit
class TestFlatten:
    """Tests for flatten."""

    def test_empty_labels_yield_nothing(self) -> None:
        """Only the labelled item contributes pairs."""
        raw = b'{"items":[{"metadata":{"labels":{"app":"web"}}},{"metadata":{"labels":{}}}]}'
        assert flatten(raw) == [("app", "web")]

    def test_multiple_items_in_order(self, pods_table: bytes) -> None:
        """Pairs from all items, item order first."""
        assert flatten(pods_table) == [("app", "web"), ("tier", "frontend"), ("app", "db")]

    def test_no_deduplication(self) -> None:
        """Identical pairs on several items are all emitted."""
        item = {"metadata": {"labels": {"app": "web"}}}
        raw = json.dumps({"items": [item, item, item]})
        assert flatten(raw) == [("app", "web")] * 3

    @pytest.mark.parametrize(
        "item",
        [
            {"metadata": {"labels": None}},
            {"metadata": {"name": "x"}},
            {"metadata": None},
            {},
        ],
    )
    def test_missing_or_null_labels(self, item: dict[str, object]) -> None:
        """Absent or null labels are treated as empty."""
        assert flatten(json.dumps({"items": [item]})) == []

    def test_missing_or_null_items(self) -> None:
        """A response without items has no labels."""
        assert flatten(b"{}") == []
        assert flatten(b'{"items": null}') == []

    def test_table_rows_are_read(self) -> None:
        """Server-side Table rows carry labels in object.metadata."""
        raw = json.dumps(
            {
                "kind": "Table",
                "columnDefinitions": [{"name": "Name", "type": "string"}],
                "rows": [
                    {"cells": ["web-1"], "object": {"metadata": {"labels": {"app": "web"}}}},
                    {"cells": ["no-object"]},
                ],
            }
        )
        assert flatten(raw) == [("app", "web")]

    def test_items_come_before_rows(self) -> None:
        """Items are flattened before rows."""
        raw = json.dumps(
            {
                "items": [{"metadata": {"labels": {"a": "1"}}}],
                "rows": [{"object": {"metadata": {"labels": {"b": "2"}}}}],
            }
        )
        assert flatten(raw) == [("a", "1"), ("b", "2")]


@pytest.mark.unit
class TestParseTable:
    """Tests for parse_table errors."""

    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b'{"items": [',
            b"[]",
            b'{"items": "nope"}',
            b'{"items": [{"metadata": {"labels": {"app": 1}}}]}',
        ],
    )
    def test_malformed_input_raises(self, raw: bytes) -> None:
        """Malformed JSON or unexpected shapes raise TableParseError."""
        with pytest.raises(TableParseError) as exc_info:
            parse_table(raw)
        assert "Cannot parse table response" in str(exc_info.value)
        assert exc_info.value.detail

    def test_accepts_str(self) -> None:
        """Text input is accepted as well as bytes."""
        assert parse_table('{"items": []}').items == []


@pytest.mark.unit
class TestFormatPairs:
    """Tests for format_pairs."""

    def test_key_value_lines(self) -> None:
        """Each pair becomes key=value."""
        assert format_pairs([("app", "web"), ("app.kubernetes.io/name", "db")]) == [
            "app=web",
            "app.kubernetes.io/name=db",
        ]

    def test_empty_value(self) -> None:
        """Empty label values keep the trailing '='."""
        assert format_pairs([("canary", "")]) == ["canary="]
