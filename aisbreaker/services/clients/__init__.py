"""
厂商 HTTP 客户端模块

模块结构:
    - BaseAIClient: 抽象基类，定义客户端接口
    - StabilityAIClient: Stability AI 文生图接口的具体实现

类/函数清单:
    StabilityAIClient:
        - __init__(api_key, engine_id, api_host, timeout=None) -> None
          初始化客户端，拼接 /v1/generation/<engine_id>/text-to-image 端点
        - call(session, payload, **kwargs) -> dict
          发送文生图请求，返回响应 JSON

使用示例:
    from aisbreaker.services.clients import StabilityAIClient

    client = StabilityAIClient(api_key="sk-...")
    async with aiohttp.ClientSession() as session:
        response_json = await client.call(session, body)
"""

from .base import BaseAIClient
from .stability_client import StabilityAIClient

__all__ = ["BaseAIClient", "StabilityAIClient"]
