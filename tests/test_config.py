"""Tests for database configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from dummydb.config import DbConfig, create_config, validate_name
from dummydb.errors import ConfigError


class TestValidateName:
    """Test database name rules."""

    @pytest.mark.parametrize("name", ["default", "abc", "my-db", "db_1", "a" * 16])
    def test_valid_names(self, name: str) -> None:
        validate_name(name)

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("", "non-empty"),
            ("My_DB", "lowercase alphanumeric"),
            ("db.name", "lowercase alphanumeric"),
            ("1abc", "start with a letter"),
            ("_abc", "start with a letter"),
            ("abc_", "cannot end with an underscore"),
            ("ab", "between 3 and 16"),
            ("a" * 17, "between 3 and 16"),
        ],
    )
    def test_invalid_names(self, name: str, message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            validate_name(name)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_name("x")


class TestDbConfig:
    """Test DbConfig dataclass."""

    def test_default_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should default to 'default' under ./dummy-db."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "dummy-db").mkdir()

        config = DbConfig()

        assert config.name == "default"
        assert config.root_path == (tmp_path / "dummy-db").resolve()

    def test_absolute_root(self, tmp_path: Path) -> None:
        config = DbConfig(name="testdb", root_dir=tmp_path)

        assert config.root_path == tmp_path

    def test_relative_root_resolved_against_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "local-db").mkdir()

        config = DbConfig(name="testdb", root_dir="local-db")

        assert config.root_path.is_absolute()
        assert config.root_path == (tmp_path / "local-db").resolve()

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Root directory not found"):
            DbConfig(name="testdb", root_dir=tmp_path / "missing")

    def test_invalid_name_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            DbConfig(name="Bad Name", root_dir=tmp_path)

    def test_resolve_root_path_without_base(self, tmp_path: Path) -> None:
        config = DbConfig(name="testdb", root_dir=tmp_path)
        config.root_dir = "relative/root"

        assert config.resolve_root_path(base_dir=None) == Path("relative/root")


class TestCreateConfig:
    """Test create_config defaults."""

    def test_fills_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "dummy-db").mkdir()

        config = create_config()

        assert config.name == "default"
        assert config.root_path.name == "dummy-db"

    def test_custom_values(self, tmp_path: Path) -> None:
        config = create_config(name="custom", root_dir=str(tmp_path))

        assert config.name == "custom"
        assert config.root_path == tmp_path
