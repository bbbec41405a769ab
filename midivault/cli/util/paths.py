"""Manages midivault directory structure following XDG Base Directory spec.

Directory layout:
    ~/.config/midivault/
        config.yaml         # User configuration

    ~/.local/share/midivault/
        midivault.db        # SQLite database (records, notifications, accounts, session)
        blobs/              # Payload files and their .json sidecars

MIDIVAULT_DATA_DIR moves the data directory.
"""

import os
from pathlib import Path


class VaultPaths:
    """Manages midivault paths following XDG Base Directory specification.

    Supports overriding individual directories for testing.
    """

    def __init__(
        self,
        *,
        config_dir: Path | None = None,
        data_dir: Path | None = None,
    ) -> None:
        """Initialize paths.

        Args:
            config_dir: Override config directory (default: ~/.config/midivault).
            data_dir: Override data directory (default: MIDIVAULT_DATA_DIR or
                ~/.local/share/midivault).
        """
        home = Path.home()
        env_data_dir = os.environ.get("MIDIVAULT_DATA_DIR")
        self._config_dir = config_dir or home / ".config" / "midivault"
        if data_dir is not None:
            self._data_dir = data_dir
        elif env_data_dir:
            self._data_dir = Path(env_data_dir).expanduser()
        else:
            self._data_dir = home / ".local" / "share" / "midivault"

    # -------------------------------------------------------------------------
    # Base directories
    # -------------------------------------------------------------------------

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    @property
    def config_file(self) -> Path:
        """Main config file."""
        return self._config_dir / "config.yaml"

    @property
    def database_file(self) -> Path:
        """SQLite database file."""
        return self._data_dir / "midivault.db"

    @property
    def blobs_dir(self) -> Path:
        """Payload directory."""
        return self._data_dir / "blobs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self.blobs_dir.mkdir(parents=True, exist_ok=True)
