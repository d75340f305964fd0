"""
工具模块

模块内容:
    - ResponseCollector: 单次请求计时
    - schedule_image_writes: 后台写盘任务调度
    - write_base64_image_to_file: 同步写入单张 Base64 图片
    - strip_data_uri: 去掉 data URI 前缀
"""

from .image_files import (
    schedule_image_writes as schedule_image_writes,
    strip_data_uri as strip_data_uri,
    write_base64_image_to_file as write_base64_image_to_file,
)
from .response_collector import ResponseCollector as ResponseCollector
