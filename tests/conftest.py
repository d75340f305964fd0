"""
pytest fixtures - 测试共享资源

Fixtures 是 pytest 的核心概念，用于:
1. 提供测试数据
2. 设置/清理测试环境
3. 在多个测试间共享资源
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

try:
    import aiohttp
except ModuleNotFoundError:
    aiohttp = None

# 确保可以导入 aisbreaker 包
sys.path.insert(0, str(Path(__file__).parent.parent))

# "hello" / "world" 的 Base64 编码
PNG_BASE64_A = "aGVsbG8="
PNG_BASE64_B = "d29ybGQ="


# ==================== 配置 Fixtures ====================


@pytest.fixture
def sample_config(tmp_path) -> dict:
    """提供示例配置字典"""
    return {
        "global": {
            "log": {
                "level": "info",
                "format": "text",
                "output": "console",
            },
        },
        "stability": {
            "api_key": "sk-test",
            "api_key_id": "StabilityAI",
            "debug": False,
            "image_output_dir": str(tmp_path),
        },
    }


@pytest.fixture
def sample_config_file(sample_config, tmp_path) -> Path:
    """创建临时配置文件"""
    import yaml

    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, allow_unicode=True)
    return config_path


# ==================== 请求/响应 Fixtures ====================


@pytest.fixture
def cat_request_data() -> dict:
    """单个文本输入 + 尺寸提示的规范化请求"""
    return {
        "inputs": [{"input": {"text": {"content": "a cat", "weight": 1}}}],
        "requestMedia": {"image": {"width": 300, "height": 100}},
    }


@pytest.fixture
def stability_response() -> dict:
    """模拟 Stability AI 响应 (中间一个 artifact 被过滤)"""
    return {
        "artifacts": [
            {"base64": PNG_BASE64_A, "finishReason": "SUCCESS", "seed": 1050625087},
            {"base64": "", "finishReason": "CONTENT_FILTERED", "seed": 1229191277},
            {"base64": PNG_BASE64_B, "finishReason": "SUCCESS", "seed": 42},
        ]
    }


# ==================== Mock Fixtures ====================


def make_mock_session(status: int = 200, text: str = "{}"):
    """构造一个 session.post 返回指定状态和正文的 Mock aiohttp 会话"""
    if aiohttp is None:
        pytest.skip("aiohttp not available on this platform")
    session = AsyncMock(spec=aiohttp.ClientSession)
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text.return_value = text
    mock_response.request_info = MagicMock()
    mock_response.history = ()
    mock_response.headers = {}
    session.post.return_value.__aenter__.return_value = mock_response
    return session


@pytest.fixture
def mock_session_factory():
    """提供 make_mock_session 工厂"""
    return make_mock_session
