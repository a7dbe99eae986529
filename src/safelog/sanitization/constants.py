"""
Sanitization 模块常量定义

集中管理默认值与占位符，LoggerOptions 与 SanitizerConfig 共用同一份来源。
"""

from __future__ import annotations


# ================================
# 掩码相关常量
# ================================

# 掩码字符
MASK_CHAR = "*"

# 末尾保留的可见字符数
DEFAULT_VISIBLE_CHARS = 4

# 掩码段最大长度
DEFAULT_MAX_MASKED_CHARS = 8


# ================================
# 截断相关常量
# ================================

DEFAULT_MAX_LOG_VALUE_LENGTH = 100

# 截断后缀
ELLIPSIS = "..."


# ================================
# 序列化相关常量
# ================================

DEFAULT_MAXIMUM_DEPTH = 4

DEFAULT_MAXIMUM_BREADTH = 50

DEFAULT_CIRCULAR_VALUE = "Circular"

# 超过深度限制时替代容器的标记
DEPTH_LIMIT_OBJECT = "[Object]"
DEPTH_LIMIT_ARRAY = "[Array]"

# 超过宽度限制时，映射中追加的汇总键
BREADTH_LIMIT_KEY = "..."
