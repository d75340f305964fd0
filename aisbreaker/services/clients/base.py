"""
AI 客户端抽象基类

本模块定义厂商 HTTP 客户端的抽象接口，具体客户端继承此基类并实现
call 方法。

类/函数清单:
    BaseAIClient (ABC 抽象基类):
        - call(session, payload, **kwargs) -> dict  [抽象方法]
          发送一次厂商请求并返回解析后的 JSON
          输入: aiohttp.ClientSession 会话, dict 请求体
          输出: dict 厂商响应 JSON
          异常: aiohttp.ClientResponseError, aiohttp.ClientError, TimeoutError

设计目的:
    - 适配器只负责类型映射，HTTP 细节集中在客户端
    - 便于单元测试 (可注入 Mock 会话)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import aiohttp


class BaseAIClient(ABC):
    """
    AI 客户端抽象基类

    接口契约:
        - call 方法是异步的，使用 aiohttp 进行 HTTP 通信
        - 返回值是厂商响应 JSON 解析后的字典
        - 网络/API 错误应抛出 aiohttp 相关异常，不重试
        - 配置了超时且超时时抛出 TimeoutError
    """

    @abstractmethod
    async def call(
        self,
        session: aiohttp.ClientSession,
        payload: Dict[str, Any],
        **kwargs
    ) -> Dict[str, Any]:
        """
        调用厂商 API

        Args:
            session: aiohttp Session，用于发送 HTTP 请求
            payload: JSON 请求体
            **kwargs: 其他客户端特定参数

        Returns:
            响应 JSON 字典

        Raises:
            aiohttp.ClientResponseError: API 返回非 2xx 状态码或响应无法解析
            aiohttp.ClientError: 网络连接错误
            TimeoutError: 请求超时
        """
        pass
