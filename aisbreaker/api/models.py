"""
AIsBreaker 规范化请求/响应 Pydantic 模型定义模块

本模块定义与厂商无关的请求、输出和用量模型。所有服务适配器只通过
这些模型与调用方交互。

命名约定:
    - Python 侧使用 snake_case 属性 (request.request_media)
    - 序列化/反序列化使用 camelCase 别名 (requestMedia)，与 AIsBreaker 线上格式一致
    - 构造时两种名字都接受

模型分类:

请求模型:
    - InputText(role?, content, weight?)
    - Input(text?)                   其他媒体类型作为额外字段保留，适配器忽略
    - RequestMediaImage(width?, height?)
    - RequestMedia(image?)
    - RequestOptions(number_of_alternative_responses?)
    - Request(inputs, request_media?, request_options?, conversation_state?)
        验证器: unwrap_message_input — 接受 {"input": {...}} 包装形式的输入项

输出模型:
    - OutputText(index, role, content, is_delta, is_processing)
    - OutputImage(index, role, base64?, url?, is_processing)
    - Output(text?, image?)
    - Message(input?, output?)

用量与最终响应:
    - Engine(service_id, engine_id)
    - Usage(engine, total_milliseconds)
    - ResponseFinal(outputs, conversation_state?, usage, intern_response)

依赖模块:
    - pydantic: 数据验证和序列化框架

使用示例:
    request = Request.model_validate({
        "inputs": [{"text": {"content": "a cat", "weight": 1}}],
        "requestMedia": {"image": {"width": 300, "height": 100}},
    })
    payload = response.model_dump(by_alias=True, exclude_none=True)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class AIsBaseModel(BaseModel):
    """camelCase 别名 + 允许额外字段的公共基类"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ==================== 请求模型 ====================


class InputText(AIsBaseModel):
    role: str | None = "user"
    content: str
    weight: float | None = None


class Input(AIsBaseModel):
    """
    单个输入项

    目前只有文本输入参与文生图请求，图片等其他输入作为额外字段保留。
    """

    text: InputText | None = None

    @model_validator(mode="before")
    @classmethod
    def unwrap_message_input(cls, values: Any) -> Any:
        """
        接受 {"input": {...}} 包装形式

        部分调用方按 Message 结构传入输入项，这里统一剥掉外层。
        """
        if (
            isinstance(values, dict)
            and set(values.keys()) == {"input"}
            and isinstance(values["input"], dict)
        ):
            return values["input"]
        return values


class RequestMediaImage(AIsBaseModel):
    width: int | None = None
    height: int | None = None


class RequestMedia(AIsBaseModel):
    image: RequestMediaImage | None = None


class RequestOptions(AIsBaseModel):
    number_of_alternative_responses: int | None = None


class Request(AIsBaseModel):
    """
    规范化请求

    Attributes:
        inputs: 有序的输入项列表
        request_media: 输出媒体提示 (如目标图片宽高)
        request_options: 生成选项 (如候选输出数量)
        conversation_state: 会话状态 (文生图不使用)
    """

    inputs: list[Input] = Field(default_factory=list)
    request_media: RequestMedia | None = None
    request_options: RequestOptions | None = None
    conversation_state: str | None = None


# ==================== 输出模型 ====================


class OutputText(AIsBaseModel):
    index: int
    role: str = "assistant"
    content: str
    is_delta: bool = False
    is_processing: bool = False


class OutputImage(AIsBaseModel):
    """
    单张输出图片

    Attributes:
        index: 在成功解码的图片中的位置 (从 0 开始)
        role: 固定为 "assistant"
        base64: Base64 图片数据
        url: 图片 URL (部分服务返回 URL 而非数据)
        is_processing: 是否仍在处理中 (最终响应中恒为 False)
    """

    index: int
    role: str = "assistant"
    base64: str | None = None
    url: str | None = None
    is_processing: bool = False


class Output(AIsBaseModel):
    text: OutputText | None = None
    image: OutputImage | None = None


class Message(AIsBaseModel):
    """对话中的单条消息，要么是输入，要么是输出"""

    input: Input | None = None
    output: Output | None = None


# ==================== 用量与最终响应 ====================


class Engine(AIsBaseModel):
    """服务标识 + 模型标识"""

    service_id: str
    engine_id: str


class Usage(AIsBaseModel):
    engine: Engine
    total_milliseconds: int


class ResponseFinal(AIsBaseModel):
    """
    最终响应

    Attributes:
        outputs: 规范化输出列表 (可能为空)
        conversation_state: 会话状态 (文生图不返回)
        usage: 引擎标识 + 耗时
        intern_response: 原始厂商响应，用于调试和审计
    """

    outputs: list[Output] = Field(default_factory=list)
    conversation_state: str | None = None
    usage: Usage
    intern_response: Any = None
