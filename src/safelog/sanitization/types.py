from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_CIRCULAR_VALUE,
    DEFAULT_MAX_LOG_VALUE_LENGTH,
    DEFAULT_MAX_MASKED_CHARS,
    DEFAULT_MAXIMUM_BREADTH,
    DEFAULT_MAXIMUM_DEPTH,
    DEFAULT_VISIBLE_CHARS,
)


Scalar = Union[None, bool, int, float, str]
MetadataValue = Union[Scalar, List[Any], Dict[str, Any]]


def normalize_block_list(entries: Iterable[str]) -> Tuple[str, ...]:
    """小写化并去重，保留首次出现的顺序

    空字符串条目保留：它是任意键名的子串，会使所有字段被掩码。
    """
    seen: dict[str, None] = {}
    for entry in entries:
        seen.setdefault(str(entry).lower(), None)
    return tuple(seen)


class SanitizerConfig(BaseModel):
    """清洗配置

    每个 LoggerService 实例解析一次，之后只读。
    敏感字段列表只能通过 LoggerService.set_block_list 整体替换（生成新实例）。
    """

    model_config = ConfigDict(frozen=True)

    visible_chars: int = Field(default=DEFAULT_VISIBLE_CHARS, ge=0)
    max_masked_chars: int = Field(default=DEFAULT_MAX_MASKED_CHARS, ge=0)
    max_log_value_length: int = Field(default=DEFAULT_MAX_LOG_VALUE_LENGTH, gt=0)
    maximum_depth: int = Field(default=DEFAULT_MAXIMUM_DEPTH, gt=0)
    maximum_breadth: int = Field(default=DEFAULT_MAXIMUM_BREADTH, gt=0)
    circular_value_placeholder: str = DEFAULT_CIRCULAR_VALUE
    deterministic: bool = False
    sensitive_field_substrings: Tuple[str, ...] = ()

    @field_validator("sensitive_field_substrings", mode="before")
    @classmethod
    def validate_block_list(cls, v: Any) -> Tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return normalize_block_list(v)

    def with_block_list(self, block_list: Iterable[str]) -> "SanitizerConfig":
        """返回替换了敏感字段列表的新配置"""
        return self.model_copy(update={"sensitive_field_substrings": normalize_block_list(block_list)})
