"""
有界、环安全的元数据序列化

将任意形状 (可能自引用) 的对象图展开为纯数据树:
- 祖先回引替换为 circular_value_placeholder
- 超过 maximum_depth 的非空容器替换为 "[Object]" / "[Array]"
- 超过 maximum_breadth 的条目被丢弃，并追加汇总标记
- deterministic 为真时映射键排序输出

展开后的树再经 orjson 往返一次，保证输出只包含 JSON 标量、列表与字典。
"""

from __future__ import annotations

import dataclasses
import datetime
from collections.abc import Collection, Mapping, Set
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterable, List, Tuple
from uuid import UUID

import orjson
from pydantic import BaseModel

from ..exceptions import SerializationError
from .constants import BREADTH_LIMIT_KEY, DEPTH_LIMIT_ARRAY, DEPTH_LIMIT_OBJECT
from .errors import normalize_error, public_attrs
from .types import MetadataValue, SanitizerConfig

_ORJSON_OPTIONS = orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC

# orjson encodes integers in [-2**63, 2**64 - 1]
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1

# leaves rendered by orjson itself or by _orjson_default
_ENCODABLE_LEAVES = (
    datetime.date,
    datetime.time,
    UUID,
    Enum,
    Decimal,
    PurePath,
    bytes,
    bytearray,
    memoryview,
)


def _item_count(count: int) -> str:
    return f"{count} item{'s' if count > 1 else ''}"


def _orjson_default(obj: Any) -> Any:
    if isinstance(obj, (Decimal, PurePath)):
        return str(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).decode("utf-8", errors="replace")
    raise TypeError(type(obj).__name__)


class SafeSerializer:
    """Flattens metadata into plain data within the bounds of a SanitizerConfig."""

    def __init__(self, config: SanitizerConfig):
        self._config = config

    def serialize(self, value: Any) -> MetadataValue:
        tree = self._flatten(value, [])
        try:
            return orjson.loads(orjson.dumps(tree, default=_orjson_default, option=_ORJSON_OPTIONS))
        except orjson.JSONEncodeError as exc:
            cause = exc.__cause__
            type_name = str(cause) if isinstance(cause, TypeError) else "unknown"
            raise SerializationError(type_name=type_name, reason=str(exc)) from exc

    def _flatten(self, value: Any, stack: List[int]) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return value if _INT_MIN <= value <= _INT_MAX else str(value)
        if value is None or isinstance(value, (str, bool, float)):
            return value
        if isinstance(value, _ENCODABLE_LEAVES):
            return value

        identity = id(value)
        if identity in stack:
            return self._config.circular_value_placeholder

        value = normalize_error(value)

        if isinstance(value, Mapping):
            return self._flatten_mapping(value.items(), identity, stack)
        if isinstance(value, BaseModel):
            return self._flatten_mapping(value, identity, stack)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            fields = ((f.name, getattr(value, f.name)) for f in dataclasses.fields(value))
            return self._flatten_mapping(fields, identity, stack)
        if isinstance(value, (list, tuple)):
            return self._flatten_sequence(value, identity, stack, sort=False)
        if isinstance(value, Set):
            return self._flatten_sequence(value, identity, stack, sort=self._config.deterministic)
        if isinstance(value, Collection):
            # deque, range, dict views
            return self._flatten_sequence(value, identity, stack, sort=False)
        if hasattr(value, "__dict__") and not isinstance(value, type):
            return self._flatten_mapping(public_attrs(value).items(), identity, stack)

        # left to orjson, which raises for anything it cannot encode
        return value

    def _flatten_mapping(self, items: Iterable[Tuple[Any, Any]], identity: int, stack: List[int]) -> Any:
        pairs = [(str(key), item) for key, item in items]
        if not pairs:
            return {}
        if len(stack) >= self._config.maximum_depth:
            return DEPTH_LIMIT_OBJECT
        if self._config.deterministic:
            pairs.sort(key=lambda pair: pair[0])

        breadth = self._config.maximum_breadth
        result: dict[str, Any] = {}
        stack.append(identity)
        try:
            for key, item in pairs[:breadth]:
                result[key] = self._flatten(item, stack)
        finally:
            stack.pop()

        if len(pairs) > breadth:
            result[BREADTH_LIMIT_KEY] = f"{_item_count(len(pairs) - breadth)} not stringified"
        return result

    def _flatten_sequence(self, items: Iterable[Any], identity: int, stack: List[int], *, sort: bool) -> Any:
        values = list(items)
        if not values:
            return []
        if len(stack) >= self._config.maximum_depth:
            return DEPTH_LIMIT_ARRAY

        breadth = self._config.maximum_breadth
        stack.append(identity)
        try:
            if sort:
                # sort before slicing so the kept subset is stable
                result = sorted((self._flatten(item, stack) for item in values), key=repr)[:breadth]
            else:
                result = [self._flatten(item, stack) for item in values[:breadth]]
        finally:
            stack.pop()

        if len(values) > breadth:
            result.append(f"... {_item_count(len(values) - breadth)} not stringified")
        return result


def serialize(value: Any, config: SanitizerConfig) -> MetadataValue:
    """Flatten ``value`` into a bounded, acyclic plain-data tree.

    Raises:
        SerializationError: when a leaf value has no JSON representation.
    """
    return SafeSerializer(config).serialize(value)
