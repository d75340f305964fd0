"""
错误类型与异常定义

本模块定义适配器自身抛出的异常类。

错误分类设计:
    ┌──────────────┬───────────────────────────────────────────────────┐
    │ 错误类型      │ 处理方式                                          │
    ├──────────────┼───────────────────────────────────────────────────┤
    │ 配置错误      │ ConfigError: 配置文件不存在、格式错误             │
    │ 传输/HTTP错误 │ 不包装，aiohttp 异常原样抛给调用方，不重试        │
    │ 响应结构异常  │ 不校验，缺字段时输出为空或抛出 Python 运行时错误  │
    │ 图片写盘失败  │ 本地记录日志后吞掉，不影响返回的响应              │
    └──────────────┴───────────────────────────────────────────────────┘

异常层次结构:
    Exception
    └── AIsBreakerError (基础异常)
        └── ConfigError (配置错误)

使用示例:
    from aisbreaker.models.errors import ConfigError

    raise ConfigError("配置文件不存在", details={"path": "config.yaml"})
"""

from typing import Any


class AIsBreakerError(Exception):
    """
    基础异常类

    所有自定义异常的基类，提供统一的错误信息格式和附加详情支持。

    Attributes:
        message: 错误消息文本
        details: 附加的错误详情字典 (可选)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | 详情: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigError(AIsBreakerError):
    """
    配置错误

    常见场景:
        - 配置文件不存在
        - YAML 语法错误
        - 根节点不是字典
    """

    pass
