"""
Structlog processor chain and per-instance logger construction.

Each LoggerService owns its own wrapped logger (no global `structlog.configure`),
so instances with different contexts, levels and sinks never share state.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, WrappedLogger

from .sinks import BaseSink

# Keys owned by the processor chain; metadata cannot overwrite them.
RESERVED_KEYS = frozenset(
    {"event", "message", "level", "timestamp", "logger", "exc_info", "stack_info", "exception", "_name", "_metadata"}
)

# =============================================================================
# Structlog Processors
# =============================================================================


def merge_metadata(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Lift sanitized metadata to the top level of the event."""
    metadata = event_dict.pop("_metadata", None)
    if isinstance(metadata, dict):
        for key, value in metadata.items():
            if key not in RESERVED_KEYS:
                event_dict[key] = value
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name (the context label) to log event."""
    event_dict["logger"] = event_dict.pop("_name", None) or "root"
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


class MultiSinkRenderer:
    """Render a log event to every sink. Returns empty to suppress default output."""

    def __init__(self, sinks: Sequence[BaseSink]):
        self._sinks = list(sinks)

    @property
    def sinks(self) -> list[BaseSink]:
        return self._sinks

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        for sink in self._sinks:
            try:
                sink.emit(dict(event_dict))
            except Exception:
                pass  # Fail silently to avoid breaking the application
        return ""


# =============================================================================
# Construction
# =============================================================================


def build_logger(sinks: Sequence[BaseSink], *, level: int, service: str = "") -> FilteringBoundLogger:
    """Wrap a no-op logger with the processor chain that fans out to ``sinks``."""
    processors: list[Any] = [
        merge_metadata,
        structlog.processors.add_log_level,
        add_timestamp,
        add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        rename_event_key,
        MultiSinkRenderer(sinks),
    ]
    initial_values = {"service": service} if service else {}

    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        **initial_values,
    ).bind()
