"""DevToolbox process settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from devtoolbox.infrastructure.logging_setup import configure_logging
from devtoolbox.infrastructure.storage.path_guard import expand_root, validate_entry_name


class Settings(BaseSettings):
    """Application settings with env var support (``DEVTOOLBOX_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="DEVTOOLBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Persisted user preferences (storage path, theme, editor options)
    config_path: Path = Field(default=Path("~/.devtoolbox/config.json"))
    # Used when no storage path has been persisted yet
    default_workspace_root: Path = Field(default=Path("~/Documents/DevToolbox"))
    tool_scopes: list[str] = Field(default_factory=lambda: ["json", "xml", "base64", "http"])

    # Server/observability
    api_host: str = "127.0.0.1"
    api_port: int = Field(default=34115, ge=1, le=65535)
    api_reload: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("config_path", "default_workspace_root", mode="after")
    @classmethod
    def _expand_paths(cls, value: Path) -> Path:
        return expand_root(value)

    @field_validator("tool_scopes", mode="after")
    @classmethod
    def _check_tool_scopes(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one tool scope is required")
        return [validate_entry_name(scope) for scope in value]

    def setup_logging(self) -> None:
        configure_logging(level=self.log_level, json_logs=self.log_json)


# Global settings instance
settings = Settings()
