"""Shared pytest fixtures for OpenAI HTTP SDK tests."""

import json

import pytest

from openai_http_sdk.client import OpenAI
from openai_http_sdk.config import Configuration
from openai_http_sdk.http.transport import HTTPResponse
from openai_http_sdk.models.conversation_types import ChatMessage, ChatRole
from openai_http_sdk.models.queries import ChatQuery
from openai_http_sdk.models.streaming import StreamRequest
from tests.helpers.transport_mocks import ManualTransport, Recorder, ScriptedTransport


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests over in-process fake transports")
    config.addinivalue_line("markers", "integration: HTTPXTransport tests over httpx.MockTransport")


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "OPENAI_API_KEY": "test-openai-key",
        "OPENAI_ORGANIZATION": "org-test",
        "OPENAI_HOST": "proxy.example.com",
        "OPENAI_TIMEOUT": "15",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def configuration():
    """Configuration with a test token and organization."""
    return Configuration(token="test-token", organization_identifier="org-123")


@pytest.fixture
def stream_request():
    """Minimal streaming request descriptor."""
    return StreamRequest(
        method="POST",
        url="https://api.openai.com/v1/chat/completions",
        headers={"Authorization": "Bearer test-token"},
        body=b"{}",
        timeout=5.0
    )


@pytest.fixture
def chat_query():
    """Sample chat query."""
    return ChatQuery(
        model="gpt-4o-mini",
        messages=[
            ChatMessage(role=ChatRole.SYSTEM, content="You are a helpful assistant."),
            ChatMessage(role=ChatRole.USER, content="Say hello"),
        ],
        temperature=0.2
    )


@pytest.fixture
def manual_transport():
    return ManualTransport()


@pytest.fixture
def manual_client(configuration, manual_transport):
    """Client whose transport is driven by the test."""
    return OpenAI(configuration=configuration, transport=manual_transport)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def json_response():
    """Factory for HTTPResponse objects with a JSON body."""
    def make(payload, status_code=200):
        return HTTPResponse(status_code=status_code, body=json.dumps(payload).encode("utf-8"))
    return make


@pytest.fixture
def scripted_client(configuration):
    """Factory for a client backed by a ScriptedTransport."""
    def make(**script):
        transport = ScriptedTransport(**script)
        return OpenAI(configuration=configuration, transport=transport), transport
    return make


@pytest.fixture
def chat_completion_body():
    """Complete chat.completion response body."""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hello!"},
                "finish_reason": "stop"
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 2, "total_tokens": 12}
    }


@pytest.fixture
def api_error_body():
    """Error envelope as returned by the API."""
    return {
        "error": {
            "message": "Incorrect API key provided",
            "type": "invalid_request_error",
            "param": None,
            "code": "invalid_api_key"
        }
    }
