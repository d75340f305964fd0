"""
AI 服务抽象基类

本模块定义 AIsBreaker 服务适配器的抽象接口。每个厂商适配器实现
AIsService，并通过对应的 AIsAPIFactory 创建。

类/函数清单:
    AIsProps (dataclass):
        属性: service_id (str) 服务标识

    AIsService (ABC 抽象基类):
        - send_message(request) -> ResponseFinal  [抽象方法, async]
          发送一次规范化请求并返回最终响应
          异常: 传输/HTTP 错误原样抛出

    AIsAPIFactory (ABC 抽象基类):
        - create_ais_api(props) -> AIsService  [抽象方法]

扩展指南:
    class NewService(AIsService):
        async def send_message(self, request: Request) -> ResponseFinal:
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Request, ResponseFinal


@dataclass
class AIsProps:
    service_id: str = ""


class AIsService(ABC):
    """
    AI 服务抽象基类

    接口契约:
        - send_message 是异步的，一次调用对应一次厂商请求
        - 返回值是规范化的 ResponseFinal
        - 网络/API 错误直接抛出，不在适配器内重试
    """

    service_id: str = ""

    @abstractmethod
    async def send_message(self, request: Request) -> ResponseFinal:
        """
        发送请求

        Args:
            request: 规范化请求

        Returns:
            规范化最终响应 (输出 + 用量 + 原始响应)
        """
        pass


P = TypeVar("P", bound=AIsProps)
S = TypeVar("S", bound=AIsService)


class AIsAPIFactory(ABC, Generic[P, S]):
    """服务工厂抽象基类"""

    service_id: str = ""

    @abstractmethod
    def create_ais_api(self, props: P) -> S:
        pass
