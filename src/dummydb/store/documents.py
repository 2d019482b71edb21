"""Document access operations: read, write, add, delete and list."""

from __future__ import annotations

import asyncio
import json
import uuid
from typing import Any, Dict, List, Union

from dummydb.errors import DocumentDeleteError
from dummydb.models import DocumentMeta, Record, utc_timestamp
from dummydb.store.query import Query
from dummydb.store.reference import CollectionReference, DocumentReference, doc
from dummydb.store.snapshot import DocumentSnapshot
from dummydb.utils.concurrency import run_with_concurrency
from dummydb.utils.files import list_document_ids, sort_ids

# Listing is truncated before filters run; documents past the cap are never read.
MAX_DOCS = 100
CONCURRENCY = 10

Source = Union[CollectionReference, Query]


def _read_text(ref: DocumentReference) -> str:
    return ref.path.read_text(encoding="utf-8")


def _write_text(ref: DocumentReference, content: str) -> None:
    ref.path.write_text(content, encoding="utf-8")


async def get_doc(ref: DocumentReference) -> DocumentSnapshot:
    """Read one document. Missing and unreadable files both give an absent snapshot."""
    try:
        raw = await asyncio.to_thread(_read_text, ref)
    except FileNotFoundError:
        return DocumentSnapshot(ref, None)
    except (OSError, ValueError) as exc:
        ref.logger.error("Error getting document %s: %s", ref.id, exc)
        return DocumentSnapshot(ref, None)
    return DocumentSnapshot(ref, raw)


async def set_doc(ref: DocumentReference, data: Dict[str, Any]) -> None:
    """Write ``data`` to ``ref``, overwriting any existing document.

    Both ``createdAt`` and ``updatedAt`` are set to the current time on every
    call. Write errors propagate to the caller.
    """
    timestamp = utc_timestamp()
    record = Record(
        data=data,
        id=ref.id,
        meta=DocumentMeta(created_at=timestamp, updated_at=timestamp),
    )
    payload = json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))
    await asyncio.to_thread(_write_text, ref, payload)


async def add_doc(collection: CollectionReference, data: Dict[str, Any]) -> DocumentReference:
    """Store ``data`` under a freshly generated UUID4 id and return its reference."""
    ref = doc(collection, str(uuid.uuid4()))
    await set_doc(ref, data)
    return ref


async def delete_doc(ref: DocumentReference) -> None:
    """Remove a document. Deleting a missing document only logs a warning."""
    try:
        await asyncio.to_thread(ref.path.unlink)
    except FileNotFoundError:
        ref.logger.warning("Document %s does not exist, nothing to delete.", ref.id)
    except (OSError, ValueError) as exc:
        raise DocumentDeleteError(ref.id, getattr(exc, "strerror", None) or str(exc)) from exc


async def get_docs(source: Source) -> List[DocumentSnapshot]:
    """Snapshots for the first ``MAX_DOCS`` documents of a collection, in id order.

    When ``source`` is a ``Query`` its clauses are applied to the capped
    listing. Unparseable documents stay in an unfiltered listing and never
    match a filter.
    """
    if isinstance(source, Query):
        snapshots = await _get_docs_from_collection(source.collection)
        if not source.filters:
            return snapshots
        return [snapshot for snapshot in snapshots if source.matches(snapshot.data())]
    return await _get_docs_from_collection(source)


async def _get_docs_from_collection(collection: CollectionReference) -> List[DocumentSnapshot]:
    try:
        ids = await asyncio.to_thread(list_document_ids, collection.documents_path)
    except (OSError, ValueError) as exc:
        collection.logger.error(
            "Error getting documents from collection %s: %s", collection.path, exc
        )
        return []

    refs = [doc(collection, doc_id) for doc_id in sort_ids(ids)[:MAX_DOCS]]
    tasks = [_snapshot_reader(ref) for ref in refs]
    return await run_with_concurrency(tasks, CONCURRENCY)


def _snapshot_reader(ref: DocumentReference):
    async def read() -> DocumentSnapshot:
        try:
            raw = await asyncio.to_thread(_read_text, ref)
        except (OSError, ValueError) as exc:
            ref.logger.error("Error reading document %s: %s", ref.id, exc)
            return DocumentSnapshot(ref, None)
        return DocumentSnapshot(ref, raw)

    return read
