"""Path-resolving handles for collections and documents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from dummydb.store.database import Database

DOCUMENTS_DIR = "documents"
INDEXES_DIR = "indexes"
DOCUMENT_SUFFIX = ".json"


class Reference(ABC):
    """Identity plus a derived file-system path. Performs no I/O."""

    def __init__(self, id: str) -> None:
        self._id = id

    @property
    def id(self) -> str:
        return self._id

    @property
    @abstractmethod
    def path(self) -> Path:
        ...

    @property
    @abstractmethod
    def logger(self) -> logging.Logger:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, path={str(self.path)!r})"


class CollectionReference(Reference):
    """Directory ``<db>/collections/<id>`` with ``documents`` and ``indexes`` inside.

    The directories are created on construction if missing.
    """

    def __init__(self, db: Database, id: str) -> None:
        super().__init__(id)
        self._db = db
        if not self.path.exists():
            self.logger.info('Creating collection "%s"', self.id)
        self.documents_path.mkdir(parents=True, exist_ok=True)
        self.indexes_path.mkdir(parents=True, exist_ok=True)

    @property
    def database(self) -> Database:
        return self._db

    @property
    def path(self) -> Path:
        return self._db.collections_path / self.id

    @property
    def documents_path(self) -> Path:
        return self.path / DOCUMENTS_DIR

    @property
    def indexes_path(self) -> Path:
        return self.path / INDEXES_DIR

    @property
    def logger(self) -> logging.Logger:
        return self._db.logger


class DocumentReference(Reference):
    """Single JSON file under the owning collection's ``documents`` directory."""

    def __init__(self, collection: CollectionReference, id: str) -> None:
        super().__init__(id)
        self._collection = collection

    @property
    def parent(self) -> CollectionReference:
        return self._collection

    @property
    def path(self) -> Path:
        return self._collection.documents_path / f"{self.id}{DOCUMENT_SUFFIX}"

    @property
    def logger(self) -> logging.Logger:
        return self._collection.logger


def collection(db: Database, name: str) -> CollectionReference:
    """Reference to collection ``name``, creating its directories if needed."""
    return CollectionReference(db, name)


def doc(collection: CollectionReference, id: str) -> DocumentReference:
    """Reference to document ``id`` in ``collection``. No I/O."""
    return DocumentReference(collection, id)
