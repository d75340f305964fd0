"""
Stability AI 客户端单元测试

被测模块: aisbreaker/services/clients/stability_client.py (StabilityAIClient)

测试类/函数清单:
    TestStabilityAIClient                   Stability AI 客户端测试
        test_call_success                   验证成功调用返回 JSON 并携带正确 URL/请求头/请求体
        test_call_merges_kwargs             验证额外参数合并进请求体
        test_request_body_logged_at_debug   验证请求体 (含 prompt) 只在 DEBUG 级别记录
        test_call_api_error                 验证 401 错误抛出 ClientResponseError
        test_call_invalid_json              验证 200 但 JSON 无效时抛出异常
        test_call_timeout                   验证超时抛出 TimeoutError
        test_call_network_error             验证网络错误原样抛出
        test_empty_key_not_validated        验证空 Key 仍然发起请求
        test_url_building                   验证端点 URL 拼接
        test_no_timeout_by_default          验证默认不设超时
"""

import asyncio
import importlib
import json
import logging

import pytest

aiohttp = pytest.importorskip("aiohttp")
client_module = importlib.import_module("aisbreaker.services.clients.stability_client")
StabilityAIClient = client_module.StabilityAIClient

BODY = {
    "text_prompts": [{"text": "a cat", "weight": 1}],
    "samples": 1,
    "width": 256,
    "height": 128,
}


class TestStabilityAIClient:
    """Stability AI 客户端测试"""

    @pytest.fixture
    def client(self):
        return StabilityAIClient("sk-test")

    @pytest.mark.asyncio
    async def test_call_success(self, client, mock_session_factory):
        session = mock_session_factory(200, json.dumps({"artifacts": []}))

        result = await client.call(session, BODY)

        assert result == {"artifacts": []}
        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == (
            "https://api.stability.ai/v1/generation/stable-diffusion-v1-5/text-to-image"
        )
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["json"] == BODY

    @pytest.mark.asyncio
    async def test_call_merges_kwargs(self, client, mock_session_factory):
        session = mock_session_factory(200, "{}")

        await client.call(session, BODY, cfg_scale=7)

        _, kwargs = session.post.call_args
        assert kwargs["json"]["cfg_scale"] == 7
        assert "cfg_scale" not in BODY

    @pytest.mark.asyncio
    async def test_request_body_logged_at_debug(self, client, mock_session_factory, caplog):
        session = mock_session_factory(200, "{}")

        with caplog.at_level(logging.INFO):
            await client.call(session, BODY)
        assert not any("a cat" in record.getMessage() for record in caplog.records)

        caplog.clear()
        with caplog.at_level(logging.DEBUG):
            await client.call(session, BODY)
        body_records = [r for r in caplog.records if "Rest request body" in r.getMessage()]
        assert body_records
        assert all(r.levelno == logging.DEBUG for r in body_records)

    @pytest.mark.asyncio
    async def test_call_api_error(self, client, mock_session_factory):
        session = mock_session_factory(401, '{"message": "missing authorization header"}')

        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await client.call(session, BODY)

        assert exc.value.status == 401
        assert "missing authorization header" in exc.value.message

    @pytest.mark.asyncio
    async def test_call_invalid_json(self, client, mock_session_factory):
        session = mock_session_factory(200, "Invalid JSON")

        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await client.call(session, BODY)

        assert "Invalid 200 OK response" in str(exc.value)

    @pytest.mark.asyncio
    async def test_call_timeout(self, client, mock_session_factory):
        session = mock_session_factory()
        session.post.side_effect = asyncio.TimeoutError()

        with pytest.raises(TimeoutError) as exc:
            await client.call(session, BODY)

        assert "timed out" in str(exc.value)

    @pytest.mark.asyncio
    async def test_call_network_error(self, client, mock_session_factory):
        session = mock_session_factory()
        session.post.side_effect = aiohttp.ClientConnectionError("connection refused")

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.call(session, BODY)

    @pytest.mark.asyncio
    async def test_empty_key_not_validated(self, mock_session_factory):
        session = mock_session_factory(200, "{}")

        await StabilityAIClient("").call(session, BODY)

        _, kwargs = session.post.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer "

    def test_url_building(self):
        c1 = StabilityAIClient("k", engine_id="stable-diffusion-xl-1024-v1-0")
        assert c1.api_url == (
            "https://api.stability.ai/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image"
        )

        c2 = StabilityAIClient("k", api_host="http://localhost:8080/")
        assert c2.api_url == (
            "http://localhost:8080/v1/generation/stable-diffusion-v1-5/text-to-image"
        )

    def test_no_timeout_by_default(self, client):
        assert client.request_timeout.total is None
        assert StabilityAIClient("k", timeout=30).request_timeout.total == 30
