"""Library configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class RenderConfig(BaseModel):
    box_size: int = Field(default=10, ge=1, le=50)
    border: int = Field(default=4, ge=0, le=20)
    error_correction: Literal["L", "M", "Q", "H"] = Field(default="M")
    title: str = Field(default="QRIS", description="Label printed under the rendered code")


class Settings(BaseSettings):
    """Central library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QRISKIT_",
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    legacy_crc_padding: bool = Field(
        default=True,
        description="Only pad 3-digit CRC values to width 4",
    )
    enforce_fee_pair: bool = Field(
        default=False,
        description="Require payment fee category and payment fee to appear together",
    )
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized library settings."""

    return Settings()


settings = get_settings()
