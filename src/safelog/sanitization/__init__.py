"""
Metadata sanitization pipeline.

raw metadata -> error normalization (per node) -> bounded, cycle-safe
serialization -> mask + truncate walk -> plain data ready for a sink.
"""

from .errors import is_error_like, normalize_error
from .masking import is_sensitive, mask_value, truncate_value
from .pipeline import sanitize
from .serializer import SafeSerializer, serialize
from .types import MetadataValue, SanitizerConfig
from .walker import walk

__all__ = [
    "MetadataValue",
    "SafeSerializer",
    "SanitizerConfig",
    "is_error_like",
    "is_sensitive",
    "mask_value",
    "normalize_error",
    "sanitize",
    "serialize",
    "truncate_value",
    "walk",
]
