"""
图片落盘工具

将输出中的 Base64 图片写入本地临时目录。写盘是尽力而为的旁路操作:
失败只记录日志，不向调用方抛出，也不影响已返回的响应。

文件命名:
    <output_dir>/<vendor>_<run_id>-output-<index>.png
    - run_id: 每个响应生成一次的随机 UUID，同一响应内所有图片共享
    - index: 图片在输出列表中的位置

执行模型:
    schedule_image_writes() 在当前事件循环上创建后台任务并立即返回该任务，
    实际写文件通过 asyncio.to_thread 在工作线程中执行。调用方可以选择
    await 返回的任务等待写盘完成 (结果为成功写入的路径列表)，响应路径不等待。

类/函数清单:
    strip_data_uri(data) -> str
    image_output_filename(output_dir, vendor, run_id, index) -> Path
    write_base64_image_to_file(data, path) -> bool
    write_image_outputs(outputs, output_dir, vendor, run_id) -> list[Path]  [async]
    schedule_image_writes(outputs, output_dir, vendor) -> asyncio.Task
"""

import asyncio
import base64
import logging
import re
import tempfile
import uuid
from pathlib import Path
from typing import Iterable

from ..api.models import Output

DATA_URI_PREFIX = re.compile(r"^data:image/png;base64,")


def strip_data_uri(data: str) -> str:
    """去掉可选的 data:image/png;base64, 前缀"""
    return DATA_URI_PREFIX.sub("", data, count=1)


def image_output_filename(
    output_dir: str | Path, vendor: str, run_id: str, index: int
) -> Path:
    return Path(output_dir) / f"{vendor}_{run_id}-output-{index}.png"


def write_base64_image_to_file(data: str, path: str | Path) -> bool:
    """
    解码 Base64 并写入二进制文件

    Args:
        data: Base64 图片数据 (可带 data URI 前缀)
        path: 目标文件路径

    Returns:
        写入是否成功。解码失败或 I/O 错误时记录日志并返回 False。
    """
    logging.info(f"写入图片文件: {path}")
    try:
        raw = base64.b64decode(strip_data_uri(data))
        Path(path).write_bytes(raw)
    except (ValueError, OSError) as e:
        # binascii.Error 是 ValueError 的子类
        logging.error(f"写入图片文件失败 {path}: {e}")
        return False
    return True


async def write_image_outputs(
    outputs: Iterable[Output], output_dir: Path, vendor: str, run_id: str
) -> list[Path]:
    """逐个写入带 Base64 数据的输出图片，返回成功写入的路径"""
    written: list[Path] = []
    for output in outputs:
        image = output.image
        if image is None or not image.base64:
            continue
        path = image_output_filename(output_dir, vendor, run_id, image.index)
        if await asyncio.to_thread(write_base64_image_to_file, image.base64, path):
            written.append(path)
    return written


def schedule_image_writes(
    outputs: Iterable[Output],
    output_dir: str | Path | None = None,
    vendor: str = "stability.ai",
) -> "asyncio.Task[list[Path]]":
    """
    调度后台写盘任务

    必须在运行中的事件循环内调用。

    Args:
        outputs: 规范化输出列表
        output_dir: 输出目录，None 表示系统临时目录
        vendor: 文件名前缀中的厂商标识

    Returns:
        写盘任务句柄，结果为成功写入的路径列表
    """
    run_id = str(uuid.uuid4())
    target_dir = Path(output_dir) if output_dir else Path(tempfile.gettempdir())
    return asyncio.create_task(
        write_image_outputs(list(outputs), target_dir, vendor, run_id)
    )
