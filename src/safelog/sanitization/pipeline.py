from __future__ import annotations

from typing import Any

from .serializer import serialize
from .types import MetadataValue, SanitizerConfig
from .walker import walk


def sanitize(metadata: Any, config: SanitizerConfig) -> MetadataValue:
    """Serialize ``metadata`` within the configured bounds, then mask and truncate it."""
    return walk(serialize(metadata, config), config)
