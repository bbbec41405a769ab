"""Tests for VaultPaths path computation."""

from pathlib import Path

import pytest

from midivault.cli.util.paths import VaultPaths


class TestVaultPathsXDGMode:
    def test_xdg_mode_uses_home_directory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MIDIVAULT_DATA_DIR", raising=False)
        test_home = Path("/test/home")
        monkeypatch.setattr(Path, "home", lambda: test_home)

        paths = VaultPaths()

        assert paths.config_dir == test_home / ".config" / "midivault"
        assert paths.data_dir == test_home / ".local" / "share" / "midivault"
        assert paths.config_file == test_home / ".config" / "midivault" / "config.yaml"
        assert paths.database_file == test_home / ".local" / "share" / "midivault" / "midivault.db"
        assert paths.blobs_dir == test_home / ".local" / "share" / "midivault" / "blobs"


class TestVaultPathsOverrides:
    def test_data_dir_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIDIVAULT_DATA_DIR", "/data")
        paths = VaultPaths()
        assert paths.database_file == Path("/data/midivault.db")
        assert paths.blobs_dir == Path("/data/blobs")

    def test_explicit_override_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIDIVAULT_DATA_DIR", "/data")
        paths = VaultPaths(data_dir=Path("/custom"))
        assert paths.data_dir == Path("/custom")

    def test_ensure_directories(self, tmp_path: Path) -> None:
        paths = VaultPaths(config_dir=tmp_path / "config", data_dir=tmp_path / "data")

        paths.ensure_directories()

        assert paths.config_dir.is_dir()
        assert paths.blobs_dir.is_dir()
