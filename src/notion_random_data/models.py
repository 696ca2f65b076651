"""Data models for notion-random-data."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


def rich_text(content: str) -> list[dict[str, Any]]:
    """Build a single-item rich_text array from plain text."""
    return [{"type": "text", "text": {"content": content}}]


def plain_text(items: list[dict[str, Any]] | None) -> str:
    """Concatenate the plain text of a rich_text array."""
    if not items:
        return ""
    return "".join(item.get("plain_text") or item.get("text", {}).get("content", "") for item in items)


def default_properties() -> dict[str, Any]:
    return {"default title col": {"title": {}}}


class CreateDatabaseOptions(BaseModel):
    """Named parameters for creating a database under a page."""

    parent_page_id: str
    title: str
    description: str = ""
    is_inline: bool = False
    properties: dict[str, Any] = Field(default_factory=default_properties)

    def to_request(self) -> dict[str, Any]:
        """Convert to the body of POST /v1/databases."""
        return {
            "parent": {"type": "page_id", "page_id": self.parent_page_id},
            "title": rich_text(self.title),
            "description": rich_text(self.description),
            "is_inline": self.is_inline,
            "properties": self.properties,
        }


class UpdateDatabaseOptions(BaseModel):
    """Changes to apply to an existing database.

    Fields left as None are not sent. In ``properties`` a key naming a new
    column adds it, an existing name or id with a schema object changes it,
    and ``None`` as the value removes the column.
    """

    title: str | None = None
    description: str | None = None
    archived: bool | None = None
    properties: dict[str, Any] | None = None

    def to_request(self) -> dict[str, Any]:
        """Convert to the body of PATCH /v1/databases/{id}."""
        body: dict[str, Any] = {}
        if self.title is not None:
            body["title"] = rich_text(self.title)
        if self.description is not None:
            body["description"] = rich_text(self.description)
        if self.archived is not None:
            body["archived"] = self.archived
        if self.properties is not None:
            body["properties"] = self.properties
        return body


class PropertyReading(BaseModel):
    """One property value read back from a page."""

    name: str
    property_id: str
    value: str


class PageReading(BaseModel):
    """All property values read back from a page."""

    page_id: str
    created_time: datetime
    properties: list[PropertyReading] = Field(default_factory=list)


class QueryReport(BaseModel):
    """Result of one filtered database query."""

    column: str
    value: str
    filter: dict[str, Any]
    matches: int


class RunStats(BaseModel):
    """Statistics from a scripted run."""

    database_id: str | None = None
    database_title: str = ""
    pages_created: int = 0
    pages_read: int = 0
    pages_skipped: int = 0
    queries: list[QueryReport] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
