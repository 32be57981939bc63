import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with validation.

    Values come from JSON_VIEW_* environment variables or a .env file in the
    working directory. Every field has a default, so Settings() always works.
    """

    log_level: str = Field(default="INFO", description="Logging level for the json_view logger")
    log_file: Path | None = Field(default=None, description="JSON log file path (console only when unset)")

    template_extension: str = Field(default=".json", description="Suffix of default template names")
    view_suffix: str = Field(default="view", min_length=1, description="Trailing name segment stripped from views")

    model_config = SettingsConfigDict(
        env_prefix="JSON_VIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a stdlib logging level."""
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return v

    @field_validator("template_extension", mode="after")
    @classmethod
    def validate_template_extension(cls, v: str) -> str:
        """Ensure template_extension looks like a file extension."""
        v = v.strip()
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("template_extension must start with '.' (e.g. '.json')")
        return v

    @field_validator("view_suffix", mode="after")
    @classmethod
    def validate_view_suffix(cls, v: str) -> str:
        """Ensure view_suffix is a lower-case identifier segment."""
        v = v.strip().lower()
        if not v.isidentifier():
            raise ValueError(f"view_suffix must be a valid identifier segment, got '{v}'")
        return v


# Singleton settings instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the singleton Settings instance.

    The environment is read once; call reset_settings() to pick up changes.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached Settings instance."""
    global _settings_instance
    _settings_instance = None
