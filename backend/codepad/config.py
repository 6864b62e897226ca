"""Codepad configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPLOAD_EXTENSIONS = [
    "html", "htm", "css", "js", "json", "txt", "md", "xml",
    "svg", "csv", "yaml", "yml", "php", "py", "rb", "java",
    "c", "cpp", "h", "cs", "go", "ts", "jsx", "tsx",
]


class Settings(BaseSettings):
    """Application settings for the playground backend."""

    app_name: str = "Codepad"
    debug: bool = True
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Storage paths (relative resolved from backend/ at runtime)
    data_dir: str = "./data"
    database_path: str = "./data/codepad.db"

    # Durable key-value storage
    storage_backend: str = "sqlite"  # sqlite | memory
    storage_quota_bytes: int | None = None  # memory backend only, mimics localStorage quota

    # Storage keys: same layout the browser editor used in localStorage
    files_key: str = "editorFiles"
    recent_files_key: str = "editorRecentFiles"
    open_tabs_key: str = "editorOpenTabs"
    active_tab_key: str = "editorActiveTabIndex"

    # File store behaviour
    recent_files_limit: int = 10
    default_file_name: str = "index.html"
    upload_extensions: list[str] = DEFAULT_UPLOAD_EXTENSIONS
    max_notifications: int = 50

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="CODEPAD_",
        extra="ignore",
    )

    @field_validator("cors_origins", "upload_extensions", mode="before")
    @classmethod
    def split_comma_list(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @field_validator("upload_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower().lstrip(".") for ext in value]

    @field_validator("storage_backend")
    @classmethod
    def check_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in ("sqlite", "memory"):
            raise ValueError(f"Unknown storage backend: {value}")
        return value

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure data paths are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "database_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str(base / val))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
