"""Parsing of list/Table responses into label pairs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kube_autocomplete.core.exceptions import TableParseError


def _none_to_empty(v: Any, empty: Any) -> Any:
    return empty if v is None else v


class ObjectMeta(BaseModel):
    """The part of object metadata we read."""

    model_config = ConfigDict(extra="ignore")

    labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("labels", mode="before")
    @classmethod
    def null_labels(cls, v: Any) -> Any:
        """Treat ``"labels": null`` as no labels."""
        return _none_to_empty(v, {})


class TableItem(BaseModel):
    """An object in a list response."""

    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @field_validator("metadata", mode="before")
    @classmethod
    def null_metadata(cls, v: Any) -> Any:
        """Treat ``"metadata": null`` as empty metadata."""
        return _none_to_empty(v, {})


class TableRow(BaseModel):
    """A row of a meta.k8s.io/v1 Table, carrying the partial object."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    obj: TableItem | None = Field(default=None, alias="object")


class Table(BaseModel):
    """A list or Table response.

    Plain lists carry objects under ``items``; server-side Tables carry
    them as ``rows[].object``. Both are read.
    """

    model_config = ConfigDict(extra="ignore")

    items: list[TableItem] = Field(default_factory=list)
    rows: list[TableRow] = Field(default_factory=list)

    @field_validator("items", "rows", mode="before")
    @classmethod
    def null_lists(cls, v: Any) -> Any:
        """Treat a null list as empty."""
        return _none_to_empty(v, [])

    def objects(self) -> list[TableItem]:
        """Return the objects of this response, items first, then rows."""
        return [*self.items, *(row.obj for row in self.rows if row.obj is not None)]


def parse_table(raw: bytes | str) -> Table:
    """Parse a response body.

    Raises:
        TableParseError: If the body is not JSON or not shaped like a list.
    """
    try:
        return Table.model_validate_json(raw)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        detail = errors[0]["msg"] if errors else str(e)
        raise TableParseError(detail=detail) from e


def flatten(raw: bytes | str) -> list[tuple[str, str]]:
    """Return every (key, value) label pair of every object in the response.

    No deduplication, sorting or filtering is applied.
    """
    return [
        (key, value)
        for item in parse_table(raw).objects()
        for key, value in item.metadata.labels.items()
    ]


def format_pairs(pairs: Iterable[tuple[str, str]]) -> list[str]:
    """Render label pairs as ``key=value`` lines."""
    return [f"{key}={value}" for key, value in pairs]
