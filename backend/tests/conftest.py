"""Shared pytest fixtures for the PromptForge gateway tests."""

import json

import httpx
import pytest

from promptforge.core.config import AIProvider, GatewayConfig, ProviderConfig
from promptforge.services.llm.gateway import AIGateway


def openai_completion(content="Hello from OpenAI", choices=True):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ] if choices else [],
    }


def anthropic_message(text="Hello from Claude", blocks=True):
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-5-sonnet-20241022",
        "content": [{"type": "text", "text": text}] if blocks else [],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request and answers with the configured reply."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.reply(200, payload=openai_completion())
        super().__init__(self._handle)

    def reply(self, status_code=200, payload=None, content=None, error=None):
        self._status_code = status_code
        self._payload = payload
        self._content = content
        self._error = error

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._content is not None:
            return httpx.Response(
                self._status_code,
                content=self._content,
                headers={"content-type": "application/json"},
            )
        return httpx.Response(self._status_code, json=self._payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def gateway_config():
    return GatewayConfig(
        default_provider=AIProvider.OPENAI,
        openai=ProviderConfig(api_key="sk-test-openai", base_url="https://api.openai.test/v1"),
        azure_openai=ProviderConfig(
            api_key="azure-test-key",
            base_url="https://example.openai.azure.com",
            api_version="2024-02-15-preview",
        ),
        anthropic=ProviderConfig(api_key="sk-ant-test", base_url="https://api.anthropic.test"),
        request_timeout=5.0,
    )


@pytest.fixture
def gateway(gateway_config, transport):
    return AIGateway(gateway_config, http_client=httpx.AsyncClient(transport=transport))
