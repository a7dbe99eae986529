"""
Logger Configuration.

Options are resolved once per LoggerService. Explicit keyword arguments win
over `SAFELOG_*` environment variables, which win over the defaults below.

Usage:
    from safelog.config import LoggerOptions

    options = LoggerOptions(context="Billing", block_list=["password", "token"])
    options.to_sanitizer_config().visible_chars  # 4
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .sanitization.constants import (
    DEFAULT_CIRCULAR_VALUE,
    DEFAULT_MAX_LOG_VALUE_LENGTH,
    DEFAULT_MAX_MASKED_CHARS,
    DEFAULT_MAXIMUM_BREADTH,
    DEFAULT_MAXIMUM_DEPTH,
    DEFAULT_VISIBLE_CHARS,
)
from .sanitization.types import SanitizerConfig, normalize_block_list


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        if name == "WARN":
            name = "WARNING"
        return cls(name)

    @property
    def numeric(self) -> int:
        return getattr(logging, self.value)


class LoggerOptions(BaseSettings):
    """Construction options for a LoggerService."""

    model_config = SettingsConfigDict(
        env_prefix="SAFELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    context: str = Field(default="", description="Label prefixed to every message")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level forwarded to sinks")
    visible_chars: int = Field(default=DEFAULT_VISIBLE_CHARS, ge=0, description="Trailing chars left unmasked")
    max_masked_chars: int = Field(default=DEFAULT_MAX_MASKED_CHARS, ge=0, description="Cap on the masked run")
    max_log_value_length: int = Field(
        default=DEFAULT_MAX_LOG_VALUE_LENGTH,
        gt=0,
        description="Strings longer than this are truncated",
    )
    maximum_depth: int = Field(default=DEFAULT_MAXIMUM_DEPTH, gt=0, description="Serialization depth bound")
    maximum_breadth: int = Field(default=DEFAULT_MAXIMUM_BREADTH, gt=0, description="Serialization breadth bound")
    circular_value_placeholder: str = Field(
        default=DEFAULT_CIRCULAR_VALUE,
        description="Substituted for back-references to an ancestor",
    )
    deterministic: bool = Field(default=False, description="Emit mapping keys in sorted order")
    service: str = Field(default="", description="Constant `service` field on every record")
    block_list: Tuple[str, ...] = Field(default=(), description="Field-name substrings whose values are masked")
    development_format: bool = Field(default=False, description="Human-readable console output instead of JSON")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> LogLevel:
        return LogLevel.parse(v)

    @field_validator("block_list", mode="before")
    @classmethod
    def validate_block_list(cls, v: Any) -> Tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return normalize_block_list(v)

    def to_sanitizer_config(self) -> SanitizerConfig:
        return SanitizerConfig(
            visible_chars=self.visible_chars,
            max_masked_chars=self.max_masked_chars,
            max_log_value_length=self.max_log_value_length,
            maximum_depth=self.maximum_depth,
            maximum_breadth=self.maximum_breadth,
            circular_value_placeholder=self.circular_value_placeholder,
            deterministic=self.deterministic,
            sensitive_field_substrings=self.block_list,
        )
