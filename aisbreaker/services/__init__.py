"""
服务适配器模块

模块结构:
    - clients: 厂商 HTTP 客户端
    - stability: Stability AI 文生图服务适配器

使用示例:
    from aisbreaker.services import StabilityAIText2ImageFactory, StabilityAIText2ImageProps

    props = StabilityAIText2ImageProps.from_config(config)
    service = StabilityAIText2ImageFactory().create_ais_api(props)
"""

from .stability import (
    ENGINE,
    StabilityAIText2ImageFactory,
    StabilityAIText2ImageParams,
    StabilityAIText2ImageProps,
    StabilityAIText2ImageService,
)

__all__ = [
    "ENGINE",
    "StabilityAIText2ImageFactory",
    "StabilityAIText2ImageParams",
    "StabilityAIText2ImageProps",
    "StabilityAIText2ImageService",
]
