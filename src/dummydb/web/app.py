"""FastAPI application exposing a database over HTTP."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query as QueryParam
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from dummydb.config import DB_NAME, DB_ROOT_DIR, create_config
from dummydb.errors import ConfigError, DocumentDeleteError
from dummydb.store import (
    CollectionReference,
    Database,
    DocumentSnapshot,
    Query,
    add_doc,
    collection,
    delete_doc,
    doc,
    get_doc,
    get_docs,
    initialize_db,
    set_doc,
)
from dummydb.store.query import parse_clause

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="dummydb", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Databases are only opened under this server-side directory.
app.state.root_dir = Path(DB_ROOT_DIR)


class DocumentPayload(BaseModel):
    data: Dict[str, Any]


def _check_id(kind: str, value: str) -> str:
    if not value or value.startswith(".") or "/" in value or "\\" in value or "\0" in value:
        raise HTTPException(status_code=400, detail=f"Invalid {kind} id: {value!r}")
    return value


def _open_db(name: str | None) -> Database:
    try:
        config = create_config(name=name or DB_NAME, root_dir=app.state.root_dir)
    except ConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return initialize_db(config)


def _collection(collection_id: str, name: str | None) -> CollectionReference:
    _check_id("collection", collection_id)
    return collection(_open_db(name), collection_id)


def _serialize(snapshot: DocumentSnapshot) -> Dict[str, Any]:
    meta = snapshot.metadata()
    return {
        "id": snapshot.id,
        "exists": snapshot.exists(),
        "data": snapshot.data(),
        "meta": meta.to_dict() if meta is not None else None,
        "read_time": snapshot.read_time.isoformat(),
    }


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/collections/{collection_id}/documents")
async def list_documents(
    collection_id: str,
    where: List[str] = QueryParam(default=[]),
    name: str | None = None,
) -> Dict[str, Any]:
    """List up to 100 documents, filtered by ``where=field op value`` clauses."""
    source = Query(_collection(collection_id, name))
    for expression in where:
        try:
            clause = parse_clause(expression)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        source = source.where(clause.field, clause.op, clause.value)

    snapshots = await get_docs(source)
    return {"documents": [_serialize(snapshot) for snapshot in snapshots]}


@app.get("/collections/{collection_id}/documents/{doc_id}")
async def read_document(
    collection_id: str, doc_id: str, name: str | None = None
) -> Dict[str, Any]:
    ref = doc(_collection(collection_id, name), _check_id("document", doc_id))
    snapshot = await get_doc(ref)
    if not snapshot.exists():
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not found")
    return _serialize(snapshot)


@app.put("/collections/{collection_id}/documents/{doc_id}")
async def write_document(
    collection_id: str,
    doc_id: str,
    payload: DocumentPayload,
    name: str | None = None,
) -> Dict[str, Any]:
    ref = doc(_collection(collection_id, name), _check_id("document", doc_id))
    await set_doc(ref, payload.data)
    return {"status": "ok", "id": ref.id}


@app.post("/collections/{collection_id}/documents")
async def create_document(
    collection_id: str,
    payload: DocumentPayload,
    name: str | None = None,
) -> Dict[str, Any]:
    ref = await add_doc(_collection(collection_id, name), payload.data)
    return {"status": "ok", "id": ref.id}


@app.delete("/collections/{collection_id}/documents/{doc_id}")
async def remove_document(
    collection_id: str, doc_id: str, name: str | None = None
) -> Dict[str, Any]:
    ref = doc(_collection(collection_id, name), _check_id("document", doc_id))
    try:
        await delete_doc(ref)
    except DocumentDeleteError as exc:
        LOGGER.error("Delete failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"status": "ok", "deleted_id": doc_id}
