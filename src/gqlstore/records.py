"""Record-level data model: references, records and the response envelope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import TypeAlias

from pydantic import BaseModel
from pydantic import Field

REF_KEY = "__ref"


@dataclass(frozen=True, slots=True)
class Reference:
    """Pointer from one record field to another record in the store."""

    entity_id: str

    def to_json(self) -> dict[str, str]:
        return {REF_KEY: self.entity_id}


EntityId: TypeAlias = str
StorageKey: TypeAlias = str
RecordValue: TypeAlias = Any
Record: TypeAlias = dict[StorageKey, RecordValue]
RecordMap: TypeAlias = dict[EntityId, Record]


def record_to_json(record: Record) -> dict[str, Any]:
    """Render a record with references in their ``{"__ref": id}`` form."""
    return {
        key: value.to_json() if isinstance(value, Reference) else value
        for key, value in record.items()
    }


class QueryResponse(BaseModel):
    """The ``{data, errors, extensions}`` envelope returned by a network layer."""

    model_config = {"extra": "allow"}

    data: dict[str, Any] | None = Field(
        default=None,
        description="Result tree keyed by response name (alias or field name).",
    )
    errors: list[dict[str, Any]] | None = Field(
        default=None,
        description="GraphQL errors reported alongside (or instead of) data.",
    )
    extensions: dict[str, Any] | None = Field(
        default=None,
        description="Server-specific metadata, ignored by the store.",
    )
