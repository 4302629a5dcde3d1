from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(override=False)


DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:5174"]


class Settings(BaseModel):
    """Runtime configuration for the FastAPI server."""

    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    sqlite_db_path: Path = Field(default_factory=lambda: Path(os.getenv("SQLITE_DB", "artifacts/item_groups.db")))
    cors_origins: List[str] = Field(default_factory=lambda: os.getenv("CORS_ORIGINS") or list(DEFAULT_CORS_ORIGINS))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    max_records: int | None = Field(default_factory=lambda: os.getenv("MAX_RECORDS", "50000"))
    max_depth: int | None = Field(default_factory=lambda: os.getenv("MAX_DEPTH", "100"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(value, str):
            if not value.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported LOG_LEVEL: {value}")
        return level

    @field_validator("max_records", "max_depth", mode="before")
    @classmethod
    def _normalize_limit(cls, value: object) -> int | None:
        try:
            limit = int(value)
        except (TypeError, ValueError):
            return None
        return limit if limit > 0 else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for FastAPI dependency injection."""

    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_CORS_ORIGINS"]
