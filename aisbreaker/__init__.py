"""
aisbreaker-stability

Stability AI 文生图 (text-to-image) 服务适配器。
将厂商无关的 AIsBreaker 请求/响应抽象映射到 Stability AI REST API。
"""

__version__ = "0.3.0"
