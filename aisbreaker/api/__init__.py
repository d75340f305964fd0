"""
AIsBreaker 共享接口模块

本模块提供各服务适配器共用的规范化数据模型和抽象接口。

模块结构:
    - models: 规范化请求/输出/用量 Pydantic 模型
    - service: AIsService / AIsAPIFactory 抽象基类, AIsProps 基础属性

使用示例:
    from aisbreaker.api import Request, ResponseFinal, AIsService
"""

from .models import (
    Engine,
    Input,
    InputText,
    Message,
    Output,
    OutputImage,
    OutputText,
    Request,
    RequestMedia,
    RequestMediaImage,
    RequestOptions,
    ResponseFinal,
    Usage,
)
from .service import AIsAPIFactory, AIsProps, AIsService

__all__ = [
    "Engine",
    "Input",
    "InputText",
    "Message",
    "Output",
    "OutputImage",
    "OutputText",
    "Request",
    "RequestMedia",
    "RequestMediaImage",
    "RequestOptions",
    "ResponseFinal",
    "Usage",
    "AIsAPIFactory",
    "AIsProps",
    "AIsService",
]
