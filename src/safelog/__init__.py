from .config import LoggerOptions, LogLevel
from .exceptions import ConfigurationError, SafelogError, SanitizationError, SerializationError
from .logging import BaseSink, LoggerService, LogTemplate, StdioSink, get_logger
from .sanitization import SanitizerConfig, sanitize

__all__ = [
    "BaseSink",
    "ConfigurationError",
    "LogLevel",
    "LogTemplate",
    "LoggerOptions",
    "LoggerService",
    "SafelogError",
    "SanitizationError",
    "SanitizerConfig",
    "SerializationError",
    "StdioSink",
    "get_logger",
    "sanitize",
]
