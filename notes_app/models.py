"""Pydantic models for notes and the stored note collection."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

_CREATED_KEYS = ("date", "createdAt", "created_at")
_UPDATED_KEYS = ("updatedAt", "updated_at")


def utcnow() -> datetime:
    return datetime.now(UTC)


class Category(StrEnum):
    """Fixed set of labels a note can be filed under, in display order."""

    DAILY_BUGLE = "Daily Bugle"
    WEB_SHOOTERS = "Web Shooters"
    SPIDEY_SENSE = "Spidey Sense"
    HERO_WORK = "Hero Work"
    PERSONAL = "Personal"

    @classmethod
    def default(cls) -> Category:
        """The category used when none is chosen."""
        return next(iter(cls))

    @property
    def color(self) -> str:
        """Badge colour shown next to the note."""
        return CATEGORY_COLORS[self]


CATEGORY_COLORS: dict[Category, str] = {
    Category.DAILY_BUGLE: "#e23636",
    Category.WEB_SHOOTERS: "#007acc",
    Category.SPIDEY_SENSE: "#ffd700",
    Category.HERO_WORK: "#e23636",
    Category.PERSONAL: "#00d2d3",
}


class Note(BaseModel):
    """A single note with metadata.

    On the wire the creation timestamp is stored as ``date`` (``createdAt``
    is accepted too) and the edit timestamp as ``updatedAt``.

    Stored records are loaded as-is: non-empty fields and known categories
    are checked by the store when notes are created or edited, and a label
    outside :class:`Category` is kept verbatim.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note content")
    category: Category | str = Field(
        default_factory=Category.default, union_mode="left_to_right"
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices(*_CREATED_KEYS),
        serialization_alias="date",
        description="Creation timestamp, never modified",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices(*_UPDATED_KEYS),
        serialization_alias="updatedAt",
        description="Last edit timestamp",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_timestamps(cls, data: Any) -> Any:
        """Stamp new notes and default a missing updatedAt to the creation time."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        created_key = next((k for k in _CREATED_KEYS if data.get(k) is not None), None)
        if created_key is None:
            created_key = "created_at"
            data[created_key] = utcnow()
        if all(data.get(k) is None for k in _UPDATED_KEYS):
            data["updated_at"] = data[created_key]
        return data

    @property
    def category_color(self) -> str:
        """Badge colour; labels outside the known set use the default colour."""
        return CATEGORY_COLORS.get(self.category, CATEGORY_COLORS[Category.default()])

    @property
    def display_timestamp(self) -> datetime:
        """Timestamp shown on the note card."""
        return self.updated_at

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, content or category."""
        q = query.lower()
        return (
            q in self.title.lower()
            or q in self.content.lower()
            or q in str(self.category).lower()
        )


_NOTE_LIST = TypeAdapter(list[Note])


def serialize_notes(notes: Iterable[Note]) -> str:
    """Encode the collection as a JSON array, newest first."""
    return _NOTE_LIST.dump_json(list(notes), by_alias=True).decode("utf-8")


def deserialize_notes(blob: str | bytes) -> list[Note]:
    """Decode a JSON array produced by :func:`serialize_notes`.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) on malformed JSON
    or records that do not match the note schema.
    """
    return _NOTE_LIST.validate_json(blob)
