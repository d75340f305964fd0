"""
响应收集器

记录请求进入时间，供适配器计算 Usage.total_milliseconds。
"""

import time

from ..api.models import Request


class ResponseCollector:
    """
    单次请求的响应收集器

    Attributes:
        request: 当前处理的规范化请求
        start_time: 请求进入时的单调时钟时间戳 (秒)
    """

    def __init__(self, request: Request):
        self.request = request
        self.start_time = time.monotonic()

    def get_millis_since_start(self) -> int:
        """返回自请求进入以来经过的毫秒数"""
        return int((time.monotonic() - self.start_time) * 1000)
