"""
Stability AI 客户端实现

本模块实现与 Stability AI REST API 的文生图接口通信。

API 文档:
    https://platform.stability.ai/rest-api#tag/v1generation/operation/textToImage
    API Key 获取: https://platform.stability.ai/docs/getting-started/authentication

通信协议:
    POST https://api.stability.ai/v1/generation/<engine_id>/text-to-image
    Content-Type: application/json
    Authorization: Bearer <api_key>

请求格式:
    {
        "text_prompts": [{"text": "a cat", "weight": 1}],
        "samples": 1,
        "width": 256,
        "height": 256
    }

响应格式:
    {
        "artifacts": [
            {"base64": "...", "finishReason": "SUCCESS", "seed": 1050625087},
            {"base64": "...", "finishReason": "CONTENT_FILTERED", "seed": 1229191277}
        ]
    }

超时配置:
    默认不设超时 (一次请求等待到完成为止)，可通过配置 request_timeout 指定总超时秒数。

错误处理:
    - HTTP 非 2xx: 抛出 ClientResponseError
    - 2xx 但 JSON 无效: 抛出 ClientResponseError
    - 超时: 抛出 TimeoutError
    - 网络错误: ClientError 原样抛出
    - 不做任何重试
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict

import aiohttp

from .base import BaseAIClient

DEFAULT_API_HOST = "https://api.stability.ai"
DEFAULT_ENGINE_ID = "stable-diffusion-v1-5"


class StabilityAIClient(BaseAIClient):
    """
    Stability AI 文生图客户端

    Attributes:
        api_url: 完整的文生图端点 URL
        request_timeout: aiohttp 超时配置
    """

    def __init__(
        self,
        api_key: str,
        engine_id: str = DEFAULT_ENGINE_ID,
        api_host: str = DEFAULT_API_HOST,
        timeout: float | None = None,
    ):
        """
        初始化客户端

        Args:
            api_key: Bearer Key，空字符串不在本地校验
            engine_id: 模型标识，用于拼接端点 URL
            api_host: API 根地址
            timeout: 总超时时间（秒），None 表示不设超时
        """
        self.api_key = api_key
        self.api_url = f"{api_host.rstrip('/')}/v1/generation/{engine_id}/text-to-image"
        self.request_timeout = aiohttp.ClientTimeout(total=timeout)

    async def call(
        self,
        session: aiohttp.ClientSession,
        payload: Dict[str, Any],
        **kwargs
    ) -> Dict[str, Any]:
        """
        调用文生图接口

        Args:
            session: aiohttp 客户端会话
            payload: 请求体 {text_prompts, samples, width, height}
            **kwargs: 合并到请求体的其他 API 参数 (如 cfg_scale, steps)

        Returns:
            响应 JSON

        Raises:
            aiohttp.ClientResponseError: HTTP 错误或响应格式无效
            TimeoutError: 请求超时
            aiohttp.ClientError: 网络连接错误
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        body = dict(payload)
        body.update(kwargs)

        logging.debug(f"Rest request body: {json.dumps(body)}")
        start_time = time.time()

        try:
            async with session.post(
                self.api_url,
                headers=headers,
                json=body,
                timeout=self.request_timeout,
            ) as resp:
                resp_status = resp.status
                response_text = await resp.text()
                elapsed = time.time() - start_time

                logging.debug(f"Stability API 响应状态: {resp_status} in {elapsed:.2f}s")

                if 200 <= resp_status < 300:
                    try:
                        return json.loads(response_text)
                    except json.JSONDecodeError as e:
                        logging.error(f"Stability API 返回 {resp_status} 但响应无效: {e}")
                        raise aiohttp.ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp_status,
                            message=f"Invalid 200 OK response: {e}",
                            headers=resp.headers,
                        ) from e

                logging.warning(f"Stability API 调用失败: HTTP {resp_status}")
                raise aiohttp.ClientResponseError(
                    resp.request_info,
                    resp.history,
                    status=resp_status,
                    message=f"Stability API Error: {response_text[:500]}",
                    headers=resp.headers,
                )

        except asyncio.TimeoutError as e:
            logging.error(f"调用 Stability API 超时 (>{self.request_timeout.total}s)")
            raise TimeoutError(
                f"Stability API call timed out after {time.time() - start_time:.2f}s"
            ) from e

        except aiohttp.ClientError as e:
            logging.error(f"调用 Stability API 时网络/客户端错误: {e}")
            raise
