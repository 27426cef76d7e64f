import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


# =============================================================================
# Storage Configuration
# =============================================================================


class StorageConfig(BaseModel):
    """Object storage configuration (nested in Config, uses env_nested_delimiter).

    The bucket is reached through its S3-compatible endpoint. Leaving the HMAC
    keys empty falls back to the default boto3 credential chain.
    """

    bucket: str = "bouldering-app-media-dev"
    endpoint_url: str | None = "https://storage.googleapis.com"
    region: str = "auto"
    access_key_id: str = ""
    secret_access_key: str = ""
    public_host: str = "storage.googleapis.com"  # Host that serves media URLs
    namespace: list[str] = ["v1", "public"]  # Leading segments of every valid prefix


# =============================================================================
# Cleanup Task Queue Configuration
# =============================================================================


class TasksConfig(BaseModel):
    """Cloud Tasks queue used to schedule prefix deletions."""

    project: str = ""
    location: str = "asia-northeast1"
    queue: str = "gcs-delete-queue"
    handler_url: str = ""  # Full URL of POST /internal/tasks/gcs-delete-prefix
    service_account_email: str = ""  # Identity the queue signs its OIDC tokens as
    audience: str = ""  # Empty string = use handler_url
    schedule_delay_seconds: float = 1.0
    jwks_url: str = "https://www.googleapis.com/oauth2/v3/certs"
    issuers: list[str] = ["https://accounts.google.com", "accounts.google.com"]

    @property
    def enabled(self) -> bool:
        """True when every setting needed to create tasks is present."""
        return bool(self.project and self.handler_url and self.service_account_email)

    @property
    def missing(self) -> list[str]:
        """Names of the required settings that are still empty."""
        required = {
            "project": self.project,
            "handler_url": self.handler_url,
            "service_account_email": self.service_account_email,
        }
        return [name for name, value in required.items() if not value]

    @property
    def token_audience(self) -> str:
        return self.audience or self.handler_url


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by SWEEP_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("SWEEP_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Sweep"
    version: str = "0.1.0"
    description: str = "Media cleanup for deleted tweets"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter)."""

    url: str = "sqlite+aiosqlite:///~/.local/share/sweep/sweep.db"
    echo: bool = False
    auto_migrate: bool = True  # Create tables at startup (SQLite only)


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from SWEEP_LOG_FILE env var."""
        return os.environ.get("SWEEP_LOG_FILE")


class JwtConfig(BaseModel):
    """JWT configuration for end-user access tokens."""

    secret: str = ""  # Must be set in production
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60


class AuthConfig(BaseModel):
    """Authentication configuration."""

    jwt: JwtConfig = JwtConfig()


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()
    storage: StorageConfig = StorageConfig()
    tasks: TasksConfig = TasksConfig()

    model_config = {
        "env_prefix": "SWEEP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows SWEEP_TASKS__PROJECT override
    }

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
        4. yaml_settings - SWEEP_CONFIG_FILE yaml
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

    Should be called early in application startup, before other modules
    are imported to ensure all loggers pick up the configuration.
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
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("google.api_core").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
