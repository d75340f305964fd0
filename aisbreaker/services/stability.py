"""
Stability AI 文生图服务适配器

本模块把规范化的 AIsBreaker 请求映射为 Stability AI 文生图请求，
发起一次 HTTP 调用，再把厂商响应转换回规范化输出，并把返回的图片
以尽力而为的方式写入本地临时目录。

处理流程:
    ┌─────────────────────────────────────────────────────────────────┐
    │ Request                                                          │
    │   → Message(input=...) 列表                                      │
    │   → text_prompts [{text, weight?}]  (无文本的输入被跳过)         │
    │   → body {text_prompts, samples, width, height}                  │
    │   → StabilityAIClient.call()        (唯一的挂起点, 异常原样抛出)  │
    │   → artifacts → Output(image=...)   (无 base64 的 artifact 丢弃) │
    │   → ResponseFinal(outputs, usage, intern_response)               │
    │   ↘ schedule_image_writes()         (后台写盘, 响应路径不等待)   │
    └─────────────────────────────────────────────────────────────────┘

尺寸规则:
    厂商要求宽高为 64 的倍数且不小于 128:
        dim <= 128 → 128
        dim >  128 → floor(dim / 64) * 64
    请求未给出宽高时按 256 处理。

类/函数清单:
    StabilityAIText2ImageParams / StabilityAIText2ImageProps (dataclass)
        - StabilityAIText2ImageProps.from_config(config, environ) -> Props
          配置加载入口，API Key 在这里按 配置 > 环境变量 > "" 解析一次
    StabilityAIText2ImageFactory
        - create_ais_api(props) -> StabilityAIText2ImageService
    StabilityAIText2ImageService
        - send_message(request) -> ResponseFinal  [async]
        - wait_for_image_writes() -> list[Path]    [async]
    input_messages_to_stability_prompts(messages) -> list[StabilityPrompt]
    build_text_to_image_body(request) -> dict
    image_dimension(dim) -> int
    classify_artifact(artifact) -> ArtifactOutcome
    stability_response_to_outputs(response) -> list[Output]

使用示例:
    props = StabilityAIText2ImageProps.from_config(config)
    service = StabilityAIText2ImageFactory().create_ais_api(props)
    response = await service.send_message(Request.model_validate({
        "inputs": [{"text": {"content": "a cat", "weight": 1}}],
    }))
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, TypedDict

import aiohttp

from ..api.models import (
    Engine,
    Message,
    Output,
    OutputImage,
    Request,
    ResponseFinal,
    Usage,
)
from ..api.service import AIsAPIFactory, AIsProps, AIsService
from ..config.settings import DEFAULT_CONFIG, get_nested, merge_config, resolve_api_key
from ..utils.image_files import schedule_image_writes
from ..utils.response_collector import ResponseCollector
from .clients import StabilityAIClient
from .clients.stability_client import DEFAULT_API_HOST, DEFAULT_ENGINE_ID

SERVICE_ID = "StabilityAIText2Image"
VENDOR_FILE_TAG = "stability.ai"

ENGINE = Engine(service_id=SERVICE_ID, engine_id=DEFAULT_ENGINE_ID)

MIN_IMAGE_DIMENSION = 128
IMAGE_DIMENSION_STEP = 64
DEFAULT_IMAGE_DIMENSION = 256


# ==================== 厂商数据结构 ====================


class StabilityPrompt(TypedDict, total=False):
    text: str
    weight: float


class FinishReason(str, Enum):
    """artifact 的 finishReason 取值"""

    SUCCESS = "SUCCESS"
    CONTENT_FILTERED = "CONTENT_FILTERED"
    ERROR = "ERROR"


class StabilityArtifact(TypedDict):
    base64: str
    finishReason: str
    seed: int


class StabilityAIText2ImageResponse(TypedDict):
    artifacts: List[StabilityArtifact]


class ArtifactOutcome(Enum):
    """
    单个 artifact 的处理结果

    IMAGE 转换为输出图片；FILTERED / ERROR 不产生输出，只记录日志。
    """

    IMAGE = "image"
    FILTERED = "filtered"
    ERROR = "error"


# ==================== 配置 ====================


@dataclass
class StabilityAIText2ImageParams:
    """
    调用方可传入的参数

    Attributes:
        api_key: Bearer Key，为空时由配置加载阶段回退到环境变量
        api_key_id: Key 标签，仅用于标识，不参与请求
        debug: 是否以 DEBUG 级别记录原始响应
    """

    api_key: Optional[str] = None
    api_key_id: Optional[str] = "StabilityAI"
    debug: bool = False


@dataclass
class StabilityAIText2ImageProps(StabilityAIText2ImageParams, AIsProps):
    service_id: str = SERVICE_ID
    api_host: str = DEFAULT_API_HOST
    engine_id: str = DEFAULT_ENGINE_ID
    image_output_dir: Optional[str] = None
    request_timeout: Optional[float] = None

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "StabilityAIText2ImageProps":
        """
        从配置字典构造服务属性

        环境变量只在这里读取一次，服务本身不访问进程级全局状态。

        Args:
            config: 完整配置字典 (读取其中的 stability 部分)，None 表示全部使用默认值
            environ: 环境变量映射，默认 os.environ
        """
        merged = merge_config(DEFAULT_CONFIG, config or {})
        section = get_nested(merged, "stability", default={})

        timeout = section.get("request_timeout")
        return cls(
            api_key=resolve_api_key(section.get("api_key"), environ=environ),
            api_key_id=section.get("api_key_id"),
            debug=bool(section.get("debug", False)),
            api_host=section.get("api_host") or DEFAULT_API_HOST,
            engine_id=section.get("engine_id") or DEFAULT_ENGINE_ID,
            image_output_dir=section.get("image_output_dir"),
            request_timeout=float(timeout) if timeout is not None else None,
        )


# ==================== 请求转换 ====================


def input_messages_to_stability_prompts(messages: List[Message]) -> List[StabilityPrompt]:
    """
    把消息列表转换为厂商 prompt 列表

    每条带非空文本内容的输入消息对应一个 prompt，保持原有顺序；
    没有文本内容的输入以及历史输出都被跳过。
    """
    prompts: List[StabilityPrompt] = []
    for message in messages:
        text = message.input.text if message.input else None
        if text is None or not text.content:
            # 输出消息和非文本输入不回传给厂商
            continue
        prompt: StabilityPrompt = {"text": text.content}
        if text.weight is not None:
            prompt["weight"] = text.weight
        prompts.append(prompt)
    return prompts


def image_dimension(dim: float) -> int:
    """保证宽高是 64 的倍数且 >= 128"""
    if dim > MIN_IMAGE_DIMENSION:
        return int(dim // IMAGE_DIMENSION_STEP) * IMAGE_DIMENSION_STEP
    return MIN_IMAGE_DIMENSION


def build_text_to_image_body(request: Request) -> Dict[str, Any]:
    """
    构建文生图请求体

    Returns:
        {"text_prompts": [...], "samples": int, "width": int, "height": int}
    """
    all_messages = [Message(input=item) for item in request.inputs]
    prompts = input_messages_to_stability_prompts(all_messages)

    options = request.request_options
    image = request.request_media.image if request.request_media else None

    samples = (options.number_of_alternative_responses if options else None) or 1
    width = (image.width if image else None) or DEFAULT_IMAGE_DIMENSION
    height = (image.height if image else None) or DEFAULT_IMAGE_DIMENSION

    return {
        "text_prompts": prompts,
        "samples": samples,
        "width": image_dimension(width),
        "height": image_dimension(height),
    }


# ==================== 响应转换 ====================


def classify_artifact(artifact: Dict[str, Any]) -> ArtifactOutcome:
    if artifact.get("base64"):
        return ArtifactOutcome.IMAGE
    if artifact.get("finishReason") == FinishReason.CONTENT_FILTERED.value:
        return ArtifactOutcome.FILTERED
    return ArtifactOutcome.ERROR


def stability_response_to_outputs(response: Any) -> List[Output]:
    """
    把厂商响应转换为规范化输出列表

    只保留带非空 base64 的 artifact，索引按保留下来的顺序从 0 连续编号。
    响应中没有 artifacts 时返回空列表。响应结构不做校验。
    """
    outputs: List[Output] = []

    artifacts = response.get("artifacts") if isinstance(response, dict) else None
    if not artifacts:
        return outputs

    index = 0
    for artifact in artifacts:
        outcome = classify_artifact(artifact)
        if outcome is not ArtifactOutcome.IMAGE:
            logging.warning(
                f"丢弃无图片数据的 artifact: outcome={outcome.value}, "
                f"finishReason={artifact.get('finishReason')}, seed={artifact.get('seed')}"
            )
            continue
        outputs.append(
            Output(
                image=OutputImage(
                    index=index,
                    role="assistant",
                    base64=artifact["base64"],
                    is_processing=False,
                )
            )
        )
        index += 1

    return outputs


# ==================== 服务 ====================


class StabilityAIText2ImageService(AIsService):
    """
    Stability AI 文生图服务

    每次 send_message 独立完成一次请求，除构造时捕获的不可变配置外
    不在调用之间共享可变状态 (后台写盘任务集合除外)。

    Attributes:
        props: 服务属性
        stability_api_key: 构造时确定的 Bearer Key (可能为空)
        client: 厂商 HTTP 客户端
        pending_image_writes: 尚未被 wait_for_image_writes 收取的后台写盘任务
    """

    service_id = SERVICE_ID

    def __init__(
        self,
        props: StabilityAIText2ImageProps,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            props: 服务属性
            session: 可选的共享 aiohttp 会话；不传时每次调用临时创建并关闭
        """
        self.props = props
        self.stability_api_key = props.api_key or ""
        self.engine = Engine(service_id=SERVICE_ID, engine_id=props.engine_id)
        self.client = StabilityAIClient(
            self.stability_api_key,
            engine_id=props.engine_id,
            api_host=props.api_host,
            timeout=props.request_timeout,
        )
        self._session = session
        self.pending_image_writes: Set["asyncio.Task[List[Path]]"] = set()

    async def send_message(self, request: Request) -> ResponseFinal:
        response_collector = ResponseCollector(request)

        body = build_text_to_image_body(request)
        response_json = await self._post(body)
        if self.props.debug:
            logging.debug(json.dumps(response_json))

        result_outputs = stability_response_to_outputs(response_json)
        result_usage = Usage(
            engine=self.engine,
            total_milliseconds=response_collector.get_millis_since_start(),
        )

        self._track_image_writes(
            schedule_image_writes(
                result_outputs, self.props.image_output_dir, VENDOR_FILE_TAG
            )
        )

        return ResponseFinal(
            outputs=result_outputs,
            usage=result_usage,
            intern_response=response_json,
        )

    async def wait_for_image_writes(self) -> List[Path]:
        """
        等待并收取所有写盘任务

        已完成的任务保留在 pending_image_writes 中，直到被这里收取，
        因此调用前任务是否已结束不影响返回结果。每个任务只被收取一次。

        Returns:
            成功写入的文件路径；失败的写入已在任务内记录日志，这里不抛出
        """
        tasks = list(self.pending_image_writes)
        if not tasks:
            return []
        self.pending_image_writes.difference_update(tasks)
        results = await asyncio.gather(*tasks, return_exceptions=True)
        written: List[Path] = []
        for result in results:
            if isinstance(result, BaseException):
                continue
            written.extend(result)
        return written

    async def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if self._session is not None:
            return await self.client.call(self._session, body)
        async with aiohttp.ClientSession() as session:
            return await self.client.call(session, body)

    def _track_image_writes(self, task: "asyncio.Task[List[Path]]") -> None:
        self.pending_image_writes.add(task)
        task.add_done_callback(self._on_image_writes_done)

    def _on_image_writes_done(self, task: "asyncio.Task[List[Path]]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logging.error(f"图片写盘任务失败: {exc}")


class StabilityAIText2ImageFactory(
    AIsAPIFactory[StabilityAIText2ImageProps, StabilityAIText2ImageService]
):
    service_id = SERVICE_ID

    def create_ais_api(
        self, props: StabilityAIText2ImageProps
    ) -> StabilityAIText2ImageService:
        return StabilityAIText2ImageService(props)
