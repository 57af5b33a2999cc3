"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class CodecConfig(BaseModel):
    container_tags: list[str] = Field(default_factory=lambda: ["62"], description="Tags parsed as nested TLV on extract")
    strict_parsing: bool = Field(default=False, description="Reject malformed TLV instead of truncating")
    crc_encoding: str = Field(default="utf-8", description="Byte encoding hashed by the CRC")
    tag_labels: dict[str, str] = Field(default_factory=dict, description="Extra top-level tag labels")
    subtag_labels: dict[str, str] = Field(default_factory=dict, description="Extra nested tag labels")

    @field_validator("container_tags")
    @classmethod
    def _two_char_tags(cls, value: list[str]) -> list[str]:
        for tag in value:
            if len(tag) != 2:
                raise ValueError(f"container tag must be 2 characters: {tag!r}")
        return value


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="qrisutil")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    codec: CodecConfig = Field(default_factory=CodecConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
