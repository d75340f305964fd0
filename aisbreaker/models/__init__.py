"""
异常定义模块

异常层次结构:
    Exception
    └── AIsBreakerError (基础异常)
        └── ConfigError (配置错误)
"""

from .errors import AIsBreakerError, ConfigError

__all__ = [
    "AIsBreakerError",
    "ConfigError",
]
