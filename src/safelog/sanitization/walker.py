from __future__ import annotations

from typing import Any

from .masking import is_sensitive, mask_value, truncate_value
from .types import MetadataValue, SanitizerConfig


def walk(node: MetadataValue, config: SanitizerConfig) -> MetadataValue:
    """Mask sensitive fields and truncate long strings across a serialized tree.

    The input must already be acyclic (see ``serializer.serialize``). A new tree
    is returned; ``node`` is left untouched. Sensitive keys are masked and never
    additionally truncated.
    """
    if isinstance(node, list):
        return [walk(item, config) for item in node]
    if not isinstance(node, dict):
        return truncate_value(node, config.max_log_value_length)

    masked: dict[str, Any] = dict(node)
    for key, value in masked.items():
        if is_sensitive(key, config.sensitive_field_substrings):
            masked[key] = mask_value(value, config.visible_chars, config.max_masked_chars)
        elif isinstance(value, (dict, list)):
            masked[key] = walk(value, config)
        else:
            masked[key] = truncate_value(value, config.max_log_value_length)
    return masked
