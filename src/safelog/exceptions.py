"""
safelog 统一异常体系

按来源拆分为两类:
- 清洗异常 (SanitizationError): 元数据序列化/清洗过程中出现的问题
- 配置异常 (ConfigurationError): LoggerOptions 校验失败

日志调用本身永远不会向调用方抛出这些异常，它们只会被 LoggerService
捕获并通过 sink 的 error 通道上报。
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SafelogError(Exception):
    """safelog 基础异常类

    所有 safelog 相关异常的根节点，便于统一捕获和处理。
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# ================================
# 清洗异常 (Sanitization Error)
# ================================


class SanitizationError(SafelogError):
    """清洗异常基类"""

    pass


class SerializationError(SanitizationError):
    """序列化失败异常

    当元数据中包含无法转换为纯数据的值时抛出。
    """

    def __init__(self, *, type_name: str, reason: str) -> None:
        super().__init__(
            f"Cannot serialize value of type '{type_name}': {reason}",
            code="SERIALIZATION_FAILED",
            details={"type_name": type_name, "reason": reason},
        )


# ================================
# 配置异常 (Configuration Error)
# ================================


class ConfigurationError(SafelogError):
    """配置异常

    LoggerOptions 或 SanitizerConfig 校验失败时抛出。
    """

    def __init__(self, message: str, *, errors: Optional[list[Dict[str, Any]]] = None) -> None:
        super().__init__(
            message,
            code="INVALID_CONFIGURATION",
            details={"errors": errors or []},
        )
