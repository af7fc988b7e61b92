"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class SharedConfig(BaseSettings):
    """Base configuration shared across all entry points."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class ValidatorConfig(SharedConfig):
    """Configuration for the validation service."""
    staging_strategy: Literal["memory", "file"] = Field(
        default="memory", validation_alias="STAGING_STRATEGY"
    )
    temp_dir: str | None = Field(default=None, validation_alias="TEMP_DIR")
    document_encoding: str = Field(
        default="utf-8", validation_alias="DOCUMENT_ENCODING"
    )
    validation_timeout_seconds: float = Field(
        default=30.0, gt=0, validation_alias="VALIDATION_TIMEOUT"
    )
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")


class ClientConfig(SharedConfig):
    """Configuration for the command-line client."""
    validator_url: str = Field(
        default="http://127.0.0.1:8000", validation_alias="VALIDATOR_URL"
    )
    request_timeout_seconds: float = Field(
        default=60.0, gt=0, validation_alias="REQUEST_TIMEOUT"
    )
