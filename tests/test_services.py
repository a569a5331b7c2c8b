"""Tests for the generation gateways and their error classification."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from anthropic import (
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    RateLimitError,
)
from google.genai import errors as genai_errors

from apa.models import ScenePlanRequest
from apa.services import (
    AnthropicClient,
    GatewayError,
    GatewayErrorKind,
    GeminiClient,
    create_gateway,
)
from apa.services.gemini import classify_api_error
from conftest import make_response

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"


@pytest.fixture
def plan_request():
    return ScenePlanRequest(concept="a cat explores a city", scene_count=3, visual_style="Noir")


def _anthropic_response(status: int) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("POST", ANTHROPIC_URL))


def _gemini_error(code: int, status: str, reason: str = "") -> genai_errors.APIError:
    details = [{"@type": "type.googleapis.com/google.rpc.ErrorInfo", "reason": reason}] if reason else []
    body = {"error": {"code": code, "message": "request failed", "status": status, "details": details}}
    cls = genai_errors.ClientError if code < 500 else genai_errors.ServerError
    return cls(code, body)


class TestCreateGateway:
    def test_gemini(self):
        gateway = create_gateway("gemini", model="gemini-test")
        assert isinstance(gateway, GeminiClient)
        assert gateway.model == "gemini-test"
        assert gateway.supports_structured_output is True

    def test_anthropic(self):
        gateway = create_gateway("anthropic")
        assert isinstance(gateway, AnthropicClient)
        assert gateway.supports_structured_output is False

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            create_gateway("openai")


class TestAnthropicClient:
    @pytest.fixture
    def sdk(self):
        with patch("apa.services.anthropic.AsyncAnthropic") as mock_cls:
            client = MagicMock()
            client.__aenter__ = AsyncMock(return_value=client)
            client.__aexit__ = AsyncMock(return_value=False)
            client.messages.create = AsyncMock()
            mock_cls.return_value = client
            yield mock_cls, client

    @pytest.mark.asyncio
    async def test_returns_text_with_single_attempt(self, sdk, plan_request):
        mock_cls, client = sdk
        block = MagicMock()
        block.text = "  " + make_response(3) + "\n"
        client.messages.create.return_value = MagicMock(content=[block])

        raw = await AnthropicClient(model="claude-test", timeout=5).generate(plan_request, "key-1")

        assert raw == make_response(3)
        mock_cls.assert_called_once_with(api_key="key-1", max_retries=0, timeout=5)
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["system"] == plan_request.system_instruction
        assert "NUMBER OF SCENES: 3" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error, kind",
        [
            (AuthenticationError("bad key", response=_anthropic_response(401), body=None), GatewayErrorKind.CREDENTIAL),
            (RateLimitError("slow down", response=_anthropic_response(429), body=None), GatewayErrorKind.QUOTA),
            (APITimeoutError(request=httpx.Request("POST", ANTHROPIC_URL)), GatewayErrorKind.TIMEOUT),
            (APIConnectionError(request=httpx.Request("POST", ANTHROPIC_URL)), GatewayErrorKind.TRANSPORT),
            (BadRequestError("bad request", response=_anthropic_response(400), body=None), GatewayErrorKind.UNKNOWN),
        ],
    )
    async def test_error_classification(self, sdk, plan_request, error, kind):
        _, client = sdk
        client.messages.create.side_effect = error

        with pytest.raises(GatewayError) as exc_info:
            await AnthropicClient().generate(plan_request, "key-1")

        assert exc_info.value.kind == kind
        assert client.messages.create.await_count == 1


class TestGeminiClassification:
    @pytest.mark.parametrize(
        "error, kind",
        [
            (_gemini_error(400, "INVALID_ARGUMENT", "API_KEY_INVALID"), GatewayErrorKind.CREDENTIAL),
            (_gemini_error(401, "UNAUTHENTICATED"), GatewayErrorKind.CREDENTIAL),
            (_gemini_error(403, "PERMISSION_DENIED"), GatewayErrorKind.CREDENTIAL),
            (_gemini_error(429, "RESOURCE_EXHAUSTED"), GatewayErrorKind.QUOTA),
            (_gemini_error(504, "DEADLINE_EXCEEDED"), GatewayErrorKind.TIMEOUT),
            (_gemini_error(400, "INVALID_ARGUMENT"), GatewayErrorKind.UNKNOWN),
            (_gemini_error(500, "INTERNAL"), GatewayErrorKind.UNKNOWN),
        ],
    )
    def test_classify(self, error, kind):
        assert classify_api_error(error) == kind


class TestGeminiClient:
    @pytest.fixture
    def sdk(self):
        with patch("apa.services.gemini.genai.Client") as mock_cls:
            client = MagicMock()
            client.aio.models.generate_content = AsyncMock()
            client.aio.aclose = AsyncMock()
            mock_cls.return_value = client
            yield mock_cls, client

    @pytest.mark.asyncio
    async def test_requests_json_mode(self, sdk, plan_request):
        mock_cls, client = sdk
        client.aio.models.generate_content.return_value = MagicMock(text=make_response(3))

        raw = await GeminiClient(model="gemini-test", timeout=30).generate(plan_request, "key-2")

        assert raw == make_response(3)
        assert mock_cls.call_args.kwargs["api_key"] == "key-2"
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_json_schema["maxProperties"] == 3
        assert config.system_instruction == plan_request.system_instruction

    @pytest.mark.asyncio
    async def test_structured_output_can_be_disabled(self, sdk, plan_request):
        _, client = sdk
        client.aio.models.generate_content.return_value = MagicMock(text="{}")

        await GeminiClient(structured_output=False).generate(plan_request, "key-2")

        config = client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.response_mime_type is None

    @pytest.mark.asyncio
    async def test_empty_text_becomes_empty_string(self, sdk, plan_request):
        _, client = sdk
        client.aio.models.generate_content.return_value = MagicMock(text=None)

        assert await GeminiClient().generate(plan_request, "key-2") == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error, kind",
        [
            (_gemini_error(400, "INVALID_ARGUMENT", "API_KEY_INVALID"), GatewayErrorKind.CREDENTIAL),
            (_gemini_error(429, "RESOURCE_EXHAUSTED"), GatewayErrorKind.QUOTA),
            (httpx.ReadTimeout("read timed out"), GatewayErrorKind.TIMEOUT),
            (httpx.ConnectError("connection refused"), GatewayErrorKind.TRANSPORT),
        ],
    )
    async def test_error_classification(self, sdk, plan_request, error, kind):
        _, client = sdk
        client.aio.models.generate_content.side_effect = error

        with pytest.raises(GatewayError) as exc_info:
            await GeminiClient().generate(plan_request, "key-2")

        assert exc_info.value.kind == kind
        assert client.aio.models.generate_content.await_count == 1
        client.aio.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_is_closed_after_success(self, sdk, plan_request):
        _, client = sdk
        client.aio.models.generate_content.return_value = MagicMock(text=make_response(3))

        await GeminiClient().generate(plan_request, "key-2")

        client.aio.aclose.assert_awaited_once()
