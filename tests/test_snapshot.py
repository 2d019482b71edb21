"""Tests for DocumentSnapshot parsing."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dummydb.config import DbConfig
from dummydb.models import DocumentMeta
from dummydb.store.database import Database
from dummydb.store.reference import DocumentReference, collection, doc
from dummydb.store.snapshot import DocumentSnapshot, ParseState

RECORD = {
    "data": {"name": "Ada", "age": 36},
    "id": "ada",
    "meta": {"createdAt": "2024-01-01T00:00:00.000Z", "updatedAt": "2024-01-01T00:00:00.000Z"},
}


@pytest.fixture
def ref(tmp_path: Path) -> DocumentReference:
    db = Database(DbConfig(name="testdb", root_dir=tmp_path), logger=MagicMock())
    return doc(collection(db, "users"), "ada")


class TestDocumentSnapshot:
    """Test snapshot accessors."""

    def test_present_document(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, json.dumps(RECORD))

        assert snapshot.exists() is True
        assert snapshot.data() == {"name": "Ada", "age": 36}
        assert snapshot.metadata() == DocumentMeta(
            created_at="2024-01-01T00:00:00.000Z", updated_at="2024-01-01T00:00:00.000Z"
        )
        assert snapshot.to_dict() == RECORD

    def test_absent_document(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, None)

        assert snapshot.exists() is False
        assert snapshot.data() is None
        assert snapshot.metadata() is None
        assert snapshot.to_dict() is None

    def test_empty_content_is_absent(self, ref: DocumentReference) -> None:
        assert DocumentSnapshot(ref, "").exists() is False

    def test_identity(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, None)

        assert snapshot.id == "ada"
        assert snapshot.ref is ref
        assert isinstance(snapshot.read_time, datetime)
        assert snapshot.read_time.tzinfo is not None


class TestParsing:
    """Test lazy, memoized parsing."""

    def test_parse_is_deferred(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, json.dumps(RECORD))

        assert snapshot.parse_state is ParseState.UNPARSED
        snapshot.data()
        assert snapshot.parse_state is ParseState.PRESENT

    def test_parse_happens_once(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, json.dumps(RECORD))

        with patch("dummydb.store.snapshot.json.loads", wraps=json.loads) as loads:
            snapshot.exists()
            snapshot.data()
            snapshot.metadata()
            snapshot.exists()

        assert loads.call_count == 1

    def test_failed_parse_is_memoized(self, ref: DocumentReference) -> None:
        snapshot = DocumentSnapshot(ref, "{not json")

        with patch("dummydb.store.snapshot.json.loads", wraps=json.loads) as loads:
            assert snapshot.exists() is False
            assert snapshot.data() is None

        assert loads.call_count == 1
        assert snapshot.parse_state is ParseState.ABSENT

    def test_malformed_json_is_absence(self, ref: DocumentReference) -> None:
        """Malformed JSON looks exactly like a missing document; nothing is raised."""
        malformed = DocumentSnapshot(ref, "{not json")
        missing = DocumentSnapshot(ref, None)

        assert (malformed.exists(), malformed.data(), malformed.metadata()) == (
            missing.exists(),
            missing.data(),
            missing.metadata(),
        )
        ref.logger.debug.assert_called_once()

    @pytest.mark.parametrize("raw", ["[]", '"text"', "42", '{"data": {}, "id": "ada"}'])
    def test_wrong_shape_is_absence(self, ref: DocumentReference, raw: str) -> None:
        assert DocumentSnapshot(ref, raw).exists() is False

    def test_view_does_not_change_after_parse(self, ref: DocumentReference) -> None:
        """The snapshot never re-reads the file."""
        ref.path.write_text(json.dumps(RECORD), encoding="utf-8")
        snapshot = DocumentSnapshot(ref, ref.path.read_text(encoding="utf-8"))
        assert snapshot.data() == RECORD["data"]

        ref.path.write_text(json.dumps({**RECORD, "data": {"name": "Grace"}}), encoding="utf-8")

        assert snapshot.data() == RECORD["data"]
