"""Database configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from dummydb.errors import ConfigError

DB_NAME = "default"
DB_ROOT_DIR = "dummy-db"

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 16

_NAME_CHARS = re.compile(r"^[a-z0-9_-]+$")


def validate_name(name: str) -> None:
    """Check a database name, raising ``ConfigError`` on the first broken rule."""
    if not name or not isinstance(name, str):
        raise ConfigError("Database name must be a non-empty string")
    if not _NAME_CHARS.match(name):
        raise ConfigError(
            "Database name can only contain lowercase alphanumeric characters, "
            "underscores, and hyphens"
        )
    if not ("a" <= name[0] <= "z"):
        raise ConfigError("Database name must start with a letter")
    if name.endswith("_"):
        raise ConfigError("Database name cannot end with an underscore")
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ConfigError(
            f"Database name must be between {NAME_MIN_LENGTH} and "
            f"{NAME_MAX_LENGTH} characters long"
        )


@dataclass(slots=True)
class DbConfig:
    name: str = DB_NAME
    root_dir: Path | str = DB_ROOT_DIR
    root_path: Path = field(init=False)

    def __post_init__(self) -> None:
        validate_name(self.name)
        self.root_path = self.resolve_root_path(Path.cwd())
        if not self.root_path.is_dir():
            raise ConfigError(f"Root directory not found at {self.root_path}")

    def resolve_root_path(self, base_dir: Path | None = None) -> Path:
        root = Path(self.root_dir).expanduser()
        if root.is_absolute() or base_dir is None:
            return root
        return (base_dir / root).resolve()


def create_config(name: str | None = None, root_dir: Path | str | None = None) -> DbConfig:
    """Build a ``DbConfig``, filling in the default name and root directory."""
    return DbConfig(
        name=name if name is not None else DB_NAME,
        root_dir=root_dir if root_dir is not None else DB_ROOT_DIR,
    )
