"""
配置管理模块

本模块提供适配器的配置功能，包括：
- YAML 配置文件加载与解析
- 默认配置定义
- 日志系统初始化
- API Key 解析 (显式配置 > 环境变量 > 空字符串)

配置文件结构:
    ┌─────────────────────────────────────────────────────────────────┐
    │                        config.yaml                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ global:                                                          │
    │   log:                                                           │
    │     level: info                  # 日志级别                      │
    │     format: text                 # 日志格式 (text/json)          │
    │     output: console              # 输出目标 (console/file)       │
    │                                                                  │
    │ stability:                                                       │
    │   api_key: ""                    # 为空时读取 STABILITY_API_KEY  │
    │   api_key_id: StabilityAI        # 仅作标签，不参与请求          │
    │   debug: false                   # 打印原始响应                  │
    │   api_host: https://api.stability.ai                             │
    │   engine_id: stable-diffusion-v1-5                               │
    │   image_output_dir: null         # null 表示系统临时目录         │
    │   request_timeout: null          # null 表示不设超时             │
    └─────────────────────────────────────────────────────────────────┘

环境变量:
    环境变量只在此处 (配置加载阶段) 读取一次，服务构造时不再访问
    进程级全局状态。

使用示例:
    config = merge_config(DEFAULT_CONFIG, load_config("config.yaml"))
    init_logging(config.get("global", {}).get("log"))
    api_key = resolve_api_key(get_nested(config, "stability", "api_key"))
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..models.errors import ConfigError


STABILITY_API_KEY_ENV = "STABILITY_API_KEY"

# 默认配置值
# 用户配置会深度合并到此默认配置上
DEFAULT_CONFIG: dict[str, Any] = {
    "global": {
        "log": {
            "level": "info",
            "format": "text",
            "output": "console",
            "file_path": "./logs/aisbreaker.log",
            "date_format": "%Y-%m-%d %H:%M:%S",
        },
    },
    "stability": {
        "api_key": None,
        "api_key_id": "StabilityAI",
        "debug": False,
        "api_host": "https://api.stability.ai",
        "engine_id": "stable-diffusion-v1-5",
        "image_output_dir": None,
        "request_timeout": None,
    },
}


def load_config(config_path: str | Path) -> dict[str, Any]:
    """
    加载 YAML 配置文件

    Args:
        config_path: 配置文件路径 (相对或绝对路径)

    Returns:
        配置字典

    Raises:
        ConfigError: 配置文件不存在或格式错误

    Note:
        此函数只负责加载和解析，不进行与默认配置的合并。
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"配置文件不存在: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 解析错误: {e}") from e
    except OSError as e:
        raise ConfigError(f"加载配置文件失败: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError("配置文件格式错误: 根节点必须是字典")

    logging.info(f"配置文件 '{config_path}' 加载成功")
    return config


def init_logging(log_config: dict[str, Any] | None = None) -> None:
    """
    初始化日志系统

    配置 Python 标准日志库，支持控制台和文件输出，支持 text 和 json 两种格式。

    Args:
        log_config: 日志配置字典，包含以下可选键:
            - level: 日志级别 (debug/info/warning/error)
            - format: 日志格式 (text/json)
            - output: 输出目标 (console/file)
            - file_path: 日志文件路径 (当 output=file 时)
            - date_format: 日期格式
    """
    if log_config is None:
        log_config = {}

    level_str = str(log_config.get("level", "info")).upper()
    level = getattr(logging, level_str, logging.INFO)

    log_format_type = log_config.get("format", "text")
    if log_format_type == "json":
        log_format = (
            '{"time": "%(asctime)s", "level": "%(levelname)s", '
            '"name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        log_format = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"

    date_format = log_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    output_type = log_config.get("output", "console")

    handlers: list[logging.Handler] = []

    if output_type == "file":
        file_path = log_config.get("file_path", "./logs/aisbreaker.log")
        try:
            log_dir = os.path.dirname(file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(file_path, encoding="utf-8"))
        except OSError as e:
            print(f"创建日志文件失败: {e}，回退到控制台", file=sys.stderr)
            output_type = "console"

    if output_type == "console" or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
        force=True,
    )

    # 降低第三方库的日志级别
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info(f"日志系统初始化完成 | 级别: {level_str}, 输出: {output_type}")


def resolve_api_key(
    explicit: str | None,
    env_var: str = STABILITY_API_KEY_ENV,
    environ: Mapping[str, str] | None = None,
) -> str:
    """
    解析 API Key

    优先级: 显式传入的值 > 环境变量 > 空字符串。
    空 Key 不在本地校验，只会在 HTTP 调用时以鉴权失败的形式暴露。

    Args:
        explicit: 显式配置的 Key (None 或空字符串视为未配置)
        env_var: 环境变量名
        environ: 环境变量映射，默认 os.environ

    Returns:
        API Key 字符串 (可能为空)
    """
    if explicit:
        return explicit
    if environ is None:
        environ = os.environ
    return environ.get(env_var) or ""


def get_nested(config: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    安全获取嵌套配置值

    Example:
        >>> config = {"a": {"b": {"c": 1}}}
        >>> get_nested(config, "a", "b", "c")
        1
        >>> get_nested(config, "a", "x", default=0)
        0
    """
    result = config
    for key in keys:
        if isinstance(result, dict):
            result = result.get(key)
        else:
            return default
        if result is None:
            return default
    return result


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    深度合并配置字典

    递归合并两个字典，override 中的值覆盖 base 中的同名键。

    Returns:
        合并后的配置 (新字典，不修改原始配置)

    Example:
        >>> merge_config({"a": {"b": 1, "c": 2}}, {"a": {"b": 10}})
        {'a': {'b': 10, 'c': 2}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = value

    return result
