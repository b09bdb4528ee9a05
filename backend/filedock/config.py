"""FileDock configuration, Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Widget host settings."""

    app_name: str = "FileDock"
    debug: bool = True
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:8000",
    ]

    # Remote file service
    remote_url: str = "http://127.0.0.1:1316"
    remote_public_url: str = ""  # Base for download links, empty = remote_url
    request_timeout_seconds: float = 5.0

    # Display
    display_name_max_length: int = 60
    placeholder_text: str = "Upload your first file!"

    # Mode: dev = in-process file service, prod = real remote
    mode: str = "dev"

    @property
    def is_dev_mode(self) -> bool:
        return self.mode == "dev"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="FILEDOCK_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:8000"]

    @field_validator("display_name_max_length")
    @classmethod
    def _check_name_length(cls, value: int) -> int:
        if value < 4:
            raise ValueError("display_name_max_length must be at least 4")
        return value

    @model_validator(mode="after")
    def _normalize_urls(self) -> "Settings":
        self.remote_url = self.remote_url.rstrip("/")
        self.remote_public_url = (self.remote_public_url or self.remote_url).rstrip("/")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
