"""Utility helpers for listing document files."""

from __future__ import annotations

import os
from functools import cmp_to_key, lru_cache
from pathlib import Path
from typing import Iterable, List

from pyuca import Collator

DOCUMENT_SUFFIX = ".json"


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loading the collation table is slow; build it once per process
    return Collator()


def _is_numeric(value: str) -> bool:
    return value.isascii() and value.isdigit()


def compare_ids(a: str, b: str) -> int:
    """Numeric comparison for two all-digit ids, Unicode collation otherwise.

    Collation follows the Unicode Collation Algorithm, so case is a
    tie-breaker: ``a < A < b < B``.
    """
    if _is_numeric(a) and _is_numeric(b):
        return (int(a) > int(b)) - (int(a) < int(b))
    key_a = _collator().sort_key(a)
    key_b = _collator().sort_key(b)
    if key_a == key_b:
        return (a > b) - (a < b)
    return (key_a > key_b) - (key_a < key_b)


def sort_ids(ids: Iterable[str]) -> List[str]:
    return sorted(ids, key=cmp_to_key(compare_ids))


def list_document_ids(documents_path: Path) -> List[str]:
    """Ids of the regular ``*.json`` files directly inside ``documents_path``.

    Symlinks and directories are skipped. Raises ``OSError`` if the
    directory cannot be listed.
    """
    ids: List[str] = []
    with os.scandir(documents_path) as entries:
        for entry in entries:
            if entry.name.endswith(DOCUMENT_SUFFIX) and entry.is_file(follow_symlinks=False):
                ids.append(entry.name[: -len(DOCUMENT_SUFFIX)])
    return ids
