"""
LoggerService: the logging facade.

Every call merges the instance's default extra with the per-call metadata,
sanitizes the result (bounded cycle-safe serialization, then masking and
truncation) and forwards it to the sinks. A failure while sanitizing drops
the record and is reported once at error level instead; no exception ever
leaves a log call.

Instances are not synchronized. When one instance is shared across threads,
calls to the `set_*` mutators must be serialized by the caller.
"""

from __future__ import annotations

import os
from typing import Any, Iterable, Mapping, Optional, Sequence

from pydantic import ValidationError

from ..config import LoggerOptions, LogLevel
from ..exceptions import ConfigurationError
from ..sanitization import SanitizerConfig, sanitize
from .core import build_logger
from .sinks import BaseSink, default_sinks

LogExtra = Mapping[str, Any]


class LogTemplate:
    """Fixed-message helpers bound to a LoggerService."""

    def __init__(self, logger: "LoggerService"):
        self._logger = logger

    def start(self, extra: Optional[LogExtra] = None) -> None:
        self._logger.info("Execution started", extra)

    def success(self, extra: Optional[LogExtra] = None) -> None:
        self._logger.info("Executed successfully", extra)

    def error(self, extra: Optional[LogExtra] = None) -> None:
        self._logger.error("Execution failed", extra)

    def not_found(self, resource: str, extra: Optional[LogExtra] = None) -> None:
        self._logger.error(f"Failed to find {resource}", extra)


def _resolve_options(options: Optional[LoggerOptions], overrides: dict[str, Any]) -> LoggerOptions:
    try:
        if options is None:
            return LoggerOptions(**overrides)
        if overrides:
            return LoggerOptions(**{**options.model_dump(), **overrides})
        return options
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid logger options ({exc.error_count()} error(s))",
            errors=exc.errors(include_url=False),
        ) from exc


def _resolve_level(options: LoggerOptions) -> LogLevel:
    # LOG_LEVEL from the environment takes precedence over the configured level
    raw = os.environ.get("LOG_LEVEL")
    if raw:
        try:
            return LogLevel.parse(raw)
        except ValueError:
            pass
    return options.log_level


class LoggerService:
    """Structured logger with metadata masking and truncation.

    Args:
        options: Resolved options; built from the environment when omitted.
        sinks: Output sinks; a single stdio sink (JSON, or console when
            `development_format` is set) when omitted.
        **overrides: Option fields applied on top of ``options``.

    Raises:
        ConfigurationError: when the options fail validation.

    Example:
        logger = LoggerService(context="Billing", block_list=["password"])
        logger.info("Charging card", {"user_id": 7, "password": "hunter22"})
        logger.tmpl.not_found("Invoice", {"id": 42})
    """

    def __init__(
        self,
        options: Optional[LoggerOptions] = None,
        *,
        sinks: Optional[Sequence[BaseSink]] = None,
        **overrides: Any,
    ):
        self._options = _resolve_options(options, overrides)
        self._sanitizer = self._options.to_sanitizer_config()
        self._context = self._options.context
        self._default_extra: dict[str, Any] = {}
        self._level = _resolve_level(self._options)
        self._sinks = list(sinks) if sinks is not None else default_sinks(
            development_format=self._options.development_format
        )
        self._logger = build_logger(self._sinks, level=self._level.numeric, service=self._options.service)

    # =========================================================================
    # Runtime mutators
    # =========================================================================

    def set_context(self, context_name: str) -> None:
        self._context = context_name

    def set_default_extra(self, extra: LogExtra) -> None:
        """Merge ``extra`` into the default extra attached to every call."""
        self._default_extra = {**self._default_extra, **extra}

    def set_extra(self, extra: LogExtra) -> None:
        """Replace the default extra wholesale."""
        self._default_extra = dict(extra)

    def set_block_list(self, block_list: Iterable[str]) -> None:
        self._sanitizer = self._sanitizer.with_block_list(block_list)

    @property
    def options(self) -> LoggerOptions:
        return self._options

    @property
    def context(self) -> str:
        return self._context

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def default_extra(self) -> dict[str, Any]:
        return dict(self._default_extra)

    @property
    def sanitizer_config(self) -> SanitizerConfig:
        return self._sanitizer

    @property
    def sinks(self) -> list[BaseSink]:
        return list(self._sinks)

    # =========================================================================
    # Log calls
    # =========================================================================

    def debug(self, message: str, extra: Optional[LogExtra] = None) -> None:
        self._log_safely("debug", message, extra)

    def info(self, message: str, extra: Optional[LogExtra] = None) -> None:
        self._log_safely("info", message, extra)

    def warn(self, message: str, extra: Optional[LogExtra] = None) -> None:
        self._log_safely("warning", message, extra)

    warning = warn

    def error(self, message: str, extra: Optional[LogExtra] = None) -> None:
        self._log_safely("error", message, extra)

    @property
    def tmpl(self) -> LogTemplate:
        return LogTemplate(self)

    def close(self) -> None:
        for sink in self._sinks:
            sink.close()

    # =========================================================================
    # Internals
    # =========================================================================

    def _merge_extra(self, extra: Optional[LogExtra]) -> dict[str, Any]:
        return {**self._default_extra, **(extra or {})}

    def _format_message(self, message: str) -> str:
        if not self._context:
            return message
        return f"{self._context}: {message}"

    def _log_safely(self, method_name: str, message: str, extra: Optional[LogExtra]) -> None:
        # filtered records are never sanitized, so they cannot fail either
        if LogLevel.parse(method_name).numeric < self._level.numeric:
            return
        try:
            metadata = sanitize(self._merge_extra(extra), self._sanitizer)
            log_fn = getattr(self._logger, method_name)
            log_fn(self._format_message(message), _name=self._context, _metadata=metadata)
        except Exception as error:
            self._report_failure(error)

    def _report_failure(self, error: Exception) -> None:
        try:
            self._logger.error("Logging error:", _name=self._context, exc_info=error)
        except Exception:
            pass  # the error channel itself is unavailable; never raise into the caller


def get_logger(context: str = "", **overrides: Any) -> LoggerService:
    """Create a LoggerService labelled with ``context``."""
    return LoggerService(context=context, **overrides)
