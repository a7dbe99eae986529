"""
Logging facade for safelog.

LoggerService sanitizes metadata and hands each record to a structlog
processor chain that fans out to the configured sinks:
- stdio: Standard output (console/json format)

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for high-performance JSON serialization.
"""

from .core import build_logger
from .service import LoggerService, LogTemplate, get_logger
from .sinks import BaseSink, StdioSink

__all__ = ["BaseSink", "LogTemplate", "LoggerService", "StdioSink", "build_logger", "get_logger"]
