"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote_plus

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _normalize_log_level(value: str) -> str:
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {value}")
    return level


class DbAuth(BaseModel):
    """Connection coordinates and credentials for a MongoDB instance."""

    host: str = "localhost"
    port: int = 27017
    username: str = ""
    password: str = ""
    database_name: str = "bookstore"
    auth_mechanism: str = "SCRAM-SHA-1"
    tls: bool = False
    server_selection_timeout_ms: int = 30000  # pymongo default

    @property
    def has_credentials(self) -> bool:
        return bool(self.username)

    @property
    def connection_url(self) -> str:
        """Build the mongodb:// URL, authenticating against database_name."""
        if not self.has_credentials:
            return f"mongodb://{self.host}:{self.port}/"

        credentials = f"{quote_plus(self.username)}:{quote_plus(self.password)}"
        return (
            f"mongodb://{credentials}@{self.host}:{self.port}/"
            f"?authSource={self.database_name}&authMechanism={self.auth_mechanism}"
        )

    @property
    def sanitized_url(self) -> str:
        """Connection URL with the password hidden, safe for logging."""
        if not self.has_credentials:
            return self.connection_url
        return self.connection_url.replace(
            f":{quote_plus(self.password)}@", ":***@", 1
        )


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")

    # Logging
    log_level: str = "INFO"
    logfire_token: str = ""

    # Nested configuration sections
    mongodb: DbAuth = Field(default_factory=DbAuth)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return _normalize_log_level(v)

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["mongodb"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    yaml_section = yaml_config[section_name] or {}

                    section_dict = section.model_dump()
                    section_dict.update(yaml_section)

                    setattr(self, section_name, section.__class__(**section_dict))

            if "log_level" in yaml_config:
                self.log_level = _normalize_log_level(str(yaml_config["log_level"]))

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
