"""Core dummydb data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

FILTER_OPS = ("==", "!=", "<", "<=", ">", ">=")


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class DocumentMeta:
    """Audit timestamps stored next to the document data."""

    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, str]:
        return {"createdAt": self.created_at, "updatedAt": self.updated_at}


@dataclass(slots=True)
class Record:
    """Persisted unit for one document: data, id and metadata."""

    data: Dict[str, Any]
    id: str
    meta: DocumentMeta

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "id": self.id, "meta": self.meta.to_dict()}

    @classmethod
    def from_dict(cls, payload: Any) -> Record:
        """Build a record from decoded JSON.

        Raises ``ValueError`` when the payload does not have the
        ``{data, id, meta: {createdAt, updatedAt}}`` shape.
        """
        if not isinstance(payload, dict):
            raise ValueError("Record must be a JSON object")
        data = payload.get("data")
        doc_id = payload.get("id")
        meta = payload.get("meta")
        if not isinstance(data, dict):
            raise ValueError("Record 'data' must be an object")
        if not isinstance(doc_id, str):
            raise ValueError("Record 'id' must be a string")
        if not isinstance(meta, dict):
            raise ValueError("Record 'meta' must be an object")
        created_at = meta.get("createdAt")
        updated_at = meta.get("updatedAt")
        if not isinstance(created_at, str) or not isinstance(updated_at, str):
            raise ValueError("Record 'meta' timestamps must be strings")
        return cls(
            data=data,
            id=doc_id,
            meta=DocumentMeta(created_at=created_at, updated_at=updated_at),
        )


@dataclass(frozen=True, slots=True)
class WhereClause:
    """Single ``field op value`` filter."""

    field: str
    op: str
    value: Any


@dataclass(slots=True)
class LogEntry:
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
