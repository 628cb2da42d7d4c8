"""Unit tests for the event decoder."""

import json

import pytest
from pydantic import ValidationError

from openai_http_sdk.errors import APIError, PayloadDecodeError
from openai_http_sdk.models.responses import ChatStreamResult, CompletionsResult
from openai_http_sdk.streaming.decoder import EventDecoder, decode_api_error
from tests.helpers.transport_mocks import chat_chunk

pytestmark = pytest.mark.unit


class TestEventDecoder:
    """Test payload decoding."""

    def test_decodes_expected_schema(self):
        decoder = EventDecoder(ChatStreamResult)

        result = decoder.decode(json.dumps(chat_chunk("abc", "Hello")).encode())

        assert result.is_success
        assert isinstance(result.value, ChatStreamResult)
        assert result.value.id == "abc"
        assert result.value.get_text() == "Hello"

    def test_error_payload_becomes_api_error(self, api_error_body):
        decoder = EventDecoder(ChatStreamResult)

        result = decoder.decode(json.dumps(api_error_body).encode(), status_code=401)

        assert not result.is_success
        assert isinstance(result.error, APIError)
        assert result.error.message == "Incorrect API key provided"
        assert result.error.error_type == "invalid_request_error"
        assert result.error.code == "invalid_api_key"
        assert result.error.status_code == 401

    def test_malformed_json_reports_original_failure(self):
        decoder = EventDecoder(ChatStreamResult)
        payload = b'{"id": "1", "choices": ['

        result = decoder.decode(payload)

        assert isinstance(result.error, PayloadDecodeError)
        assert result.error.payload == payload
        assert isinstance(result.error.original_error, ValidationError)
        assert "ChatStreamResult" in str(result.error)

    def test_wrong_schema_without_error_envelope(self):
        decoder = EventDecoder(CompletionsResult)

        result = decoder.decode(json.dumps(chat_chunk("1", "hi")).encode())

        assert isinstance(result.error, PayloadDecodeError)

    def test_unwrap_raises_stored_error(self):
        result = EventDecoder(ChatStreamResult).decode(b"not json")

        with pytest.raises(PayloadDecodeError) as exc_info:
            result.unwrap()
        assert exc_info.value is result.error


def test_decode_api_error_rejects_non_error_payloads():
    assert decode_api_error(b'{"id": "1"}') is None
    assert decode_api_error(b"garbage") is None
