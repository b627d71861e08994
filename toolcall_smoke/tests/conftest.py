"""
Pytest configuration and shared fixtures for the toolcall-smoke test suite.

This module provides:
- Provider configs pointing at fake endpoints
- Fresh metrics collectors per test
- httpx.MockTransport-backed clients
- Response body factories
- A patched asyncio.sleep so retry tests never wait
"""

import json
from types import MappingProxyType
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from pydantic import SecretStr

from toolcall_smoke.core.prometheus_metrics import SmokeMetricsCollector
from toolcall_smoke.providers.client import ChatCompletionClient
from toolcall_smoke.providers.config import ProviderConfig


# Response Factories
def tool_call_body(tool_name: str = "read_file", arguments: str = '{"filename": "example.txt"}') -> dict:
    """A chat completion whose first choice calls a tool."""
    return {
        "id": f"chatcmpl-{tool_name}",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": f"call_{tool_name}",
                            "type": "function",
                            "function": {"name": tool_name, "arguments": arguments},
                        }
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ],
    }


def text_body(text: str = "I cannot do that.") -> dict:
    """A chat completion that answers in prose instead of calling a tool."""
    return {
        "id": "chatcmpl-text",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
    }


# Provider Fixtures
def make_provider(name: str = "openai", api_key: str = "sk-test") -> ProviderConfig:
    return ProviderConfig(
        name=name,
        endpoint_url=f"http://{name}.test/v1/chat/completions",
        api_key=SecretStr(api_key),
        model_id=f"{name}-model",
    )


@pytest.fixture
def provider() -> ProviderConfig:
    return make_provider("openai")


@pytest.fixture
def registry():
    return MappingProxyType({
        "openai": make_provider("openai"),
        "gemini": make_provider("gemini", api_key="gm-test"),
    })


@pytest.fixture
def metrics() -> SmokeMetricsCollector:
    """Isolated collector so counter values start at zero."""
    return SmokeMetricsCollector()


@pytest.fixture
def mock_sleep():
    """Replace asyncio.sleep used by the retry loop."""
    with patch("toolcall_smoke.core.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


# Client Fixtures
def make_client(handler, provider: ProviderConfig, metrics: SmokeMetricsCollector) -> ChatCompletionClient:
    """ChatCompletionClient whose HTTP traffic goes to `handler`."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatCompletionClient(provider, http_client=http_client, metrics=metrics)


class RecordingHandler:
    """MockTransport handler replaying a scripted list of responses.

    Items are either (status, json_body) tuples, httpx.Response objects
    (single use), or exceptions to raise. The last item repeats once the
    script runs out.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        status, body = item
        return httpx.Response(status, json=body)


class ByToolHandler:
    """MockTransport handler answering per prompt, keyed by the prompt text."""

    def __init__(self, responses_by_prompt: dict, default=None):
        self.responses_by_prompt = responses_by_prompt
        self.default = default
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prompt = json.loads(request.content)["messages"][0]["content"]
        status, body = self.responses_by_prompt.get(prompt, self.default)
        return httpx.Response(status, json=body)
