import logging
import os
import sys
from pathlib import Path
from typing import Any

import logfire
import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from midivault.cli.util.paths import VaultPaths
from midivault.domain.catalog.model.value import PRIMARY_SLOT, UploadRule
from midivault.domain.catalog.service.upload_policy import DEFAULT_RULES


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from the YAML file named by MIDIVAULT_CONFIG_FILE.

    Falls back to ``~/.config/midivault/config.yaml`` when the variable is unset.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("MIDIVAULT_CONFIG_FILE")
        path = Path(config_file) if config_file else VaultPaths().config_file
        if path.exists():
            return yaml.safe_load(path.read_text()) or {}
        return {}


class StorageConfig(BaseModel):
    """Storage locations (nested in Config, uses env_nested_delimiter).

    Empty strings mean "derive from VaultPaths"; Config's model_validator fills them in.
    """

    database_url: str = ""
    blob_dir: str = ""
    echo: bool = False


class UploadsConfig(BaseModel):
    """Per-slot upload rules. The primary slot must always be present."""

    rules: dict[str, UploadRule] = Field(default_factory=lambda: dict(DEFAULT_RULES))

    @model_validator(mode="after")
    def require_primary_slot(self) -> Self:
        if PRIMARY_SLOT not in self.rules:
            raise ValueError(f"uploads.rules must define the '{PRIMARY_SLOT}' slot")
        return self


class CatalogConfig(BaseModel):
    admin_username: str | None = None  # May clear the whole catalog


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    logfire: bool = False  # Configure logfire so handler spans are recorded

    @property
    def file(self) -> str | None:
        """Get log file path from MIDIVAULT_LOG_FILE env var."""
        return os.environ.get("MIDIVAULT_LOG_FILE")


class Config(BaseSettings):
    storage: StorageConfig = StorageConfig()
    uploads: UploadsConfig = UploadsConfig()
    catalog: CatalogConfig = CatalogConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "MIDIVAULT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows MIDIVAULT_STORAGE__DATABASE_URL override
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def derive_storage_paths(self) -> Self:
        """Derive the database URL and blob directory from VaultPaths when not set.

        VaultPaths reads MIDIVAULT_DATA_DIR directly from the environment, so that
        variable moves both locations while explicit overrides still win.
        """
        if not self.storage.database_url or not self.storage.blob_dir:
            paths = VaultPaths()
            self.storage = StorageConfig(
                database_url=self.storage.database_url
                or f"sqlite+aiosqlite:///{paths.database_file}",
                blob_dir=self.storage.blob_dir or str(paths.blobs_dir),
                echo=self.storage.echo,
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - MIDIVAULT_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in startup, before the container is built.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    if config.logfire:
        logfire.configure(send_to_logfire="if-token-present", console=False)

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
