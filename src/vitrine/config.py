"""Configuration management for Vitrine."""

import logging
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql://localhost:5432/vitrine"
    db_host: str | None = None
    db_port: int | None = None
    db_user: str | None = None
    db_password: str | None = None
    db_name: str | None = None
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 30.0

    # API
    host: str = "0.0.0.0"
    port: int = Field(
        default=19200,
        validation_alias=AliasChoices("port", "vitrine_port"),
        description="API port (checks PORT, then VITRINE_PORT, defaults to 19200)",
    )
    debug: bool = False

    # Password gate
    site_password: str | None = None
    session_secret: str | None = None
    session_cookie_name: str = "site-auth"
    session_max_age: int = 60 * 60 * 24 * 30  # 30 days
    session_cookie_secure: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid LOG_LEVEL: '{v}'")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is one of the supported renderers."""
        valid_formats = {"console", "json"}
        if v.lower() not in valid_formats:
            raise ValueError(
                f"Invalid LOG_FORMAT: '{v}'. "
                f"Must be one of: {', '.join(sorted(valid_formats))}"
            )
        return v.lower()

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        """Validate the pool bounds are consistent."""
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                "DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE "
                f"({self.db_pool_min_size} > {self.db_pool_max_size})"
            )
        return self

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Parse database URL if individual components not provided
        if not any(
            [self.db_host, self.db_port, self.db_user, self.db_password, self.db_name]
        ):
            parsed = urlparse(self.database_url)
            self.db_host = self.db_host or parsed.hostname
            self.db_port = self.db_port or parsed.port
            self.db_user = self.db_user or parsed.username
            self.db_password = self.db_password or parsed.password
            self.db_name = self.db_name or parsed.path.lstrip("/")

    @property
    def signing_key(self) -> str | None:
        """Key used to sign session cookies."""
        return self.session_secret or self.site_password


# Lazy settings initialization
_settings = None


def get_settings() -> Settings:
    """Get the settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


class SettingsProxy:
    """Proxy to provide attribute access to settings."""

    def __getattr__(self, name):
        return getattr(get_settings(), name)

    def __setattr__(self, name, value):
        setattr(get_settings(), name, value)


settings = SettingsProxy()
