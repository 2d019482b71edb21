"""Point-in-time read results."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from dummydb.models import DocumentMeta, Record
from dummydb.store.reference import DocumentReference


class ParseState(Enum):
    UNPARSED = "unparsed"
    PRESENT = "present"
    ABSENT = "absent"


class DocumentSnapshot:
    """Raw file content for one document, parsed lazily on first access.

    ``raw`` is ``None`` when the file was missing or unreadable. The content
    is parsed at most once; malformed JSON and records of the wrong shape are
    reported as a missing document, never as an error.
    """

    def __init__(self, ref: DocumentReference, raw: str | None) -> None:
        self._ref = ref
        self._raw = raw
        self._read_time = datetime.now(timezone.utc)
        self._state = ParseState.UNPARSED
        self._record: Record | None = None

    @property
    def id(self) -> str:
        return self._ref.id

    @property
    def ref(self) -> DocumentReference:
        return self._ref

    @property
    def read_time(self) -> datetime:
        return self._read_time

    @property
    def parse_state(self) -> ParseState:
        return self._state

    def exists(self) -> bool:
        return self._parse() is not None

    def data(self) -> Dict[str, Any] | None:
        record = self._parse()
        return record.data if record is not None else None

    def metadata(self) -> DocumentMeta | None:
        record = self._parse()
        return record.meta if record is not None else None

    def to_dict(self) -> Dict[str, Any] | None:
        record = self._parse()
        return record.to_dict() if record is not None else None

    def _parse(self) -> Record | None:
        if self._state is not ParseState.UNPARSED:
            return self._record

        self._state = ParseState.ABSENT
        if not self._raw:
            return None
        try:
            self._record = Record.from_dict(json.loads(self._raw))
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            self._ref.logger.debug("Ignoring malformed document %s: %s", self.id, exc)
            return None
        self._state = ParseState.PRESENT
        return self._record

    def __repr__(self) -> str:
        return f"DocumentSnapshot(id={self.id!r}, state={self._state.value})"
