"""
错误对象归一化

异常对象的关键信息 (类型名、消息、堆栈) 不在其 __dict__ 中，
直接按属性序列化会丢失这些字段。这里将其展开为纯数据映射。
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any, Dict


def is_error_like(value: Any) -> bool:
    """判断值是否为错误对象

    Python 异常实例，或暴露 message / stack 属性的非映射对象。
    """
    if isinstance(value, BaseException):
        return True
    if isinstance(value, (Mapping, type, str, bytes)):
        return False
    # properties may raise anything, not only AttributeError
    try:
        return hasattr(value, "message") and hasattr(value, "stack")
    except Exception:
        return False


def _safe_getattr(value: Any, name: str, default: Any) -> Any:
    try:
        return getattr(value, name, default)
    except Exception:
        return default


def public_attrs(value: Any) -> Dict[str, Any]:
    try:
        attrs = vars(value)
    except TypeError:
        return {}
    return {k: v for k, v in attrs.items() if not k.startswith("_")}


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def normalize_error(value: Any) -> Any:
    """将错误对象转换为包含 name / message / stack 的映射，其他值原样返回"""
    if not is_error_like(value):
        return value

    normalized = public_attrs(value)

    if isinstance(value, BaseException):
        normalized["name"] = type(value).__name__
        normalized["message"] = _safe_str(value)
        normalized["stack"] = _format_stack(value)
        if value.__cause__ is not None:
            normalized["cause"] = value.__cause__
        return normalized

    normalized["name"] = _safe_str(_safe_getattr(value, "name", type(value).__name__))
    normalized["message"] = _safe_str(_safe_getattr(value, "message", ""))
    stack = _safe_getattr(value, "stack", None)
    normalized["stack"] = None if stack is None else _safe_str(stack)
    return normalized
