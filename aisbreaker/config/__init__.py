"""
配置管理模块

导出清单 (均来自 settings.py):
    函数:
        load_config(config_path: str | Path) -> dict[str, Any]
            加载 YAML 配置文件并解析为字典
        init_logging(log_config: dict | None) -> None
            初始化日志系统 (支持 text/json 格式, console/file 输出)
        merge_config(base: dict, override: dict) -> dict
            深度合并两个配置字典 (override 覆盖 base)
        get_nested(config: dict, *keys: str, default=None) -> Any
            安全获取嵌套字典值
        resolve_api_key(explicit, env_var, environ) -> str
            按 显式值 > 环境变量 > "" 的优先级解析 API Key
    常量:
        DEFAULT_CONFIG: dict[str, Any]
        STABILITY_API_KEY_ENV: str

配置层次:
    配置的优先级从高到低:
    1. 运行时参数 (命令行参数)
    2. 配置文件 (config.yaml)
    3. 环境变量 (仅 API Key)
    4. 默认配置 (DEFAULT_CONFIG)
"""

from .settings import (
    load_config,
    init_logging,
    resolve_api_key,
    DEFAULT_CONFIG,
    STABILITY_API_KEY_ENV,
    merge_config,
    get_nested,
)

__all__ = [
    "load_config",
    "init_logging",
    "resolve_api_key",
    "DEFAULT_CONFIG",
    "STABILITY_API_KEY_ENV",
    "merge_config",
    "get_nested",
]
