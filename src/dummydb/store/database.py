"""On-disk database root and its bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from dummydb.config import DbConfig
from dummydb.models import LogEntry

LOGGER = logging.getLogger(__name__)

COLLECTIONS_DIR = "collections"


class Database:
    """Directory ``<root_path>/<name>`` holding the ``collections`` tree.

    ``logger`` receives every warning and error raised by references,
    snapshots and document operations that belong to this database.
    """

    def __init__(self, config: DbConfig, *, logger: logging.Logger | None = None) -> None:
        self.config = config
        self.logger = logger or LOGGER
        self._logs: List[LogEntry] = []
        self._ensure_structure()

    @property
    def path(self) -> Path:
        return self.config.root_path / self.config.name

    @property
    def collections_path(self) -> Path:
        return self.path / COLLECTIONS_DIR

    @property
    def logs(self) -> List[LogEntry]:
        return list(self._logs)

    def _ensure_structure(self) -> None:
        if not self.path.exists():
            self._log(logging.INFO, f"Database not found at {self.path}, generating...")
            self.collections_path.mkdir(parents=True, exist_ok=True)
            self._log(logging.INFO, f"Database successfully created at {self.path}")
        elif not self.collections_path.exists():
            self._log(
                logging.WARNING,
                f"Collections directory not found at {self.collections_path}, creating...",
            )
            self.collections_path.mkdir(parents=True, exist_ok=True)
            self._log(logging.INFO, f"Collections directory created at {self.collections_path}")

    def _log(self, level: int, message: str) -> None:
        self._logs.append(LogEntry(level=logging.getLevelName(level).lower(), message=message))
        self.logger.log(level, message)


def initialize_db(config: DbConfig, *, logger: logging.Logger | None = None) -> Database:
    return Database(config, logger=logger)
