"""
敏感字段掩码与值截断

敏感性只取决于值所在的键名 (大小写不敏感的子串匹配)，与值的内容无关。
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import orjson

from .constants import ELLIPSIS, MASK_CHAR


def is_sensitive(field_name: str, block_list: Iterable[str]) -> bool:
    """键名包含任一 block-list 条目 (忽略大小写) 时返回 True"""
    lowered = str(field_name).lower()
    return any(entry.lower() in lowered for entry in block_list)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return orjson.dumps(value, default=str).decode()


def mask_value(value: Any, visible_chars: int, max_masked_chars: int) -> Optional[str]:
    """掩码敏感值，保留末尾 visible_chars 个字符

    - None 保持为 None
    - 长度不超过 visible_chars (或 visible_chars 为 0) 时整体掩码，长度不变
    - 否则掩码段长度为 min(len - visible_chars, max_masked_chars)
    """
    if value is None:
        return None

    text = _as_text(value)
    if visible_chars == 0 or len(text) <= visible_chars:
        return MASK_CHAR * len(text)

    masked_len = min(len(text) - visible_chars, max_masked_chars)
    return MASK_CHAR * masked_len + text[-visible_chars:]


def truncate_value(value: Any, max_len: int) -> Any:
    """截断超长字符串，结果长度恰为 max_len，其他值原样返回"""
    if not isinstance(value, str) or len(value) <= max_len:
        return value
    if max_len <= len(ELLIPSIS):
        return value[:max_len]
    return value[: max_len - len(ELLIPSIS)] + ELLIPSIS
