"""Exceptions raised by dummydb."""

from __future__ import annotations


class DummyDbError(Exception):
    """Base class for errors surfaced to callers."""


class ConfigError(DummyDbError, ValueError):
    """Invalid database name or missing root directory."""


class DocumentDeleteError(DummyDbError):
    """A document file exists but could not be removed."""

    def __init__(self, doc_id: str, reason: str) -> None:
        super().__init__(f"Failed to delete document {doc_id}: {reason}")
        self.doc_id = doc_id
        self.reason = reason
