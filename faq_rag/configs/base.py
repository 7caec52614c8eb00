"""
Base configuration settings.

Shared fields for every FAQ RAG settings class: deployment environment,
debug flag and log level. Sub-settings add their own env_prefix; these
fields are read without one (ENVIRONMENT, DEBUG, LOG_LEVEL).

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BaseSettings(PydanticBaseSettings):
    """Common settings inherited by database, vector store and pipeline configs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(
        default=False,
        description="Enable FastAPI debug mode (tracebacks in error responses)",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Root log level passed to configure_logging()",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        # LOG_LEVEL=info is accepted as INFO
        return value.strip().upper() if isinstance(value, str) else value
