"""Integration tests: client, streaming pipeline and HTTPXTransport over a mocked network."""

import json
import threading

import httpx
import pytest

from openai_http_sdk.client import OpenAI
from openai_http_sdk.errors import APIError, StreamCancelledError, TransportError
from openai_http_sdk.http.transport import HTTPXTransport
from openai_http_sdk.models.streaming import StreamRequest
from tests.helpers.transport_mocks import chat_chunk, sse

WAIT = 5.0


class Waiter:
    """Collects stream callbacks and signals completion."""

    def __init__(self):
        self.results = []
        self.errors = []
        self.done = threading.Event()

    def on_result(self, result):
        self.results.append(result)

    def on_complete(self, error):
        self.errors.append(error)
        self.done.set()

    def wait(self):
        assert self.done.wait(WAIT), "stream did not complete"
        return self


def make_client(configuration, handler):
    transport = HTTPXTransport(client=httpx.Client(transport=httpx.MockTransport(handler)), max_workers=4)
    return OpenAI(configuration=configuration, transport=transport), transport


def chunked(data, size=5):
    for i in range(0, len(data), size):
        yield data[i:i + size]


@pytest.mark.integration
class TestHTTPXStreaming:
    """Streaming calls end to end."""

    def test_chat_stream(self, configuration, chat_query):
        seen = {}

        def handler(request):
            seen["request"] = request
            body = sse(chat_chunk("1", "Hel"), chat_chunk("2", "lo"), chat_chunk("3", None, "stop"))
            return httpx.Response(200, headers={"Content-Type": "text/event-stream"}, content=chunked(body))

        client, transport = make_client(configuration, handler)
        waiter = Waiter()

        client.chats_stream(chat_query, waiter.on_result, waiter.on_complete)
        waiter.wait()

        request = seen["request"]
        assert request.url == "https://api.openai.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert json.loads(request.content)["stream"] is True

        assert waiter.errors == [None]
        assert [r.value.id for r in waiter.results] == ["1", "2", "3"]
        assert "".join(r.value.get_text() for r in waiter.results) == "Hello"
        assert client.active_streams == 0
        transport.close()

    def test_rate_limit_error_body(self, configuration, chat_query):
        def handler(request):
            return httpx.Response(429, json={
                "error": {"message": "Rate limit reached", "type": "requests", "param": None,
                          "code": "rate_limit_exceeded"}
            })

        client, transport = make_client(configuration, handler)
        waiter = Waiter()

        client.chats_stream(chat_query, waiter.on_result, waiter.on_complete)
        waiter.wait()

        assert waiter.results == []
        error = waiter.errors[0]
        assert isinstance(error, APIError)
        assert error.status_code == 429
        assert error.code == "rate_limit_exceeded"
        transport.close()

    def test_connection_failure(self, configuration, chat_query):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client, transport = make_client(configuration, handler)
        waiter = Waiter()

        client.chats_stream(chat_query, waiter.on_result, waiter.on_complete)
        waiter.wait()

        assert isinstance(waiter.errors[0], TransportError)
        assert isinstance(waiter.errors[0].original_error, httpx.ConnectError)
        transport.close()

    def test_cancel_mid_stream(self, configuration, chat_query):
        release = threading.Event()

        def body():
            yield sse(chat_chunk("1", "a"), done=False)
            release.wait(WAIT)
            yield sse(chat_chunk("2", "b"))

        client, transport = make_client(configuration, lambda request: httpx.Response(200, content=body()))
        waiter = Waiter()
        first = threading.Event()

        def on_result(result):
            waiter.on_result(result)
            first.set()

        session = client.chats_stream(chat_query, on_result, waiter.on_complete)
        assert first.wait(WAIT)
        session.cancel()
        release.set()
        waiter.wait()

        assert isinstance(waiter.errors[0], StreamCancelledError)
        assert [r.value.id for r in waiter.results] == ["1"]
        transport.close()


@pytest.mark.integration
class TestHTTPXPlainRequests:
    """Plain calls end to end."""

    def test_chat(self, configuration, chat_query, chat_completion_body):
        client, transport = make_client(configuration, lambda request: httpx.Response(200, json=chat_completion_body))
        done = threading.Event()
        results = []

        def completion(result):
            results.append(result)
            done.set()

        client.chats(chat_query, completion)

        assert done.wait(WAIT)
        assert results[0].value.choices[0].message.content == "Hello!"
        transport.close()

    def test_streams_and_plain_calls_share_the_transport(self, configuration, chat_query, chat_completion_body):
        def handler(request):
            if json.loads(request.content).get("stream"):
                return httpx.Response(200, content=chunked(sse(chat_chunk("s", "x")), size=3))
            return httpx.Response(200, json=chat_completion_body)

        client, transport = make_client(configuration, handler)
        waiters = [Waiter() for _ in range(6)]
        plain_done = threading.Semaphore(0)
        plain_results = []

        def completion(result):
            plain_results.append(result)
            plain_done.release()

        for waiter in waiters:
            client.chats_stream(chat_query, waiter.on_result, waiter.on_complete)
            client.chats(chat_query, completion)

        for waiter in waiters:
            waiter.wait()
            assert waiter.errors == [None]
            assert [r.value.id for r in waiter.results] == ["s"]
        for _ in waiters:
            assert plain_done.acquire(timeout=WAIT)

        assert all(r.is_success for r in plain_results)
        assert client.active_streams == 0
        transport.close()


class IdleStream(httpx.SyncByteStream):
    """Sends one chunk, then stays silent until closed."""

    def __init__(self, first: bytes):
        self.first = first
        self.closed = threading.Event()

    def __iter__(self):
        yield self.first
        self.closed.wait(30)

    def close(self):
        self.closed.set()


def plain_request(url="https://api.openai.com/v1/models"):
    return StreamRequest(method="GET", url=url, timeout=5.0)


@pytest.mark.integration
class TestHTTPXFailurePaths:
    """Every call reports exactly once, whatever goes wrong."""

    def test_non_http_error_from_send_is_reported(self, configuration, chat_query):
        def handler(request):
            raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

        client, transport = make_client(configuration, handler)
        done = threading.Event()
        results = []

        def completion(result):
            results.append(result)
            done.set()

        client.chats(chat_query, completion)

        assert done.wait(WAIT), "completion never fired"
        assert isinstance(results[0].error, TransportError)
        assert isinstance(results[0].error.original_error, httpx.InvalidURL)
        transport.close()

    def test_close_reports_queued_requests(self, chat_completion_body):
        entered = threading.Event()
        release = threading.Event()

        def handler(request):
            entered.set()
            release.wait(WAIT)
            return httpx.Response(200, json=chat_completion_body)

        transport = HTTPXTransport(client=httpx.Client(transport=httpx.MockTransport(handler)), max_workers=1)
        first, second = Waiter(), Waiter()

        transport.send(plain_request(), lambda response, error: first.on_complete(error))
        assert entered.wait(WAIT)
        transport.send(plain_request(), lambda response, error: second.on_complete(error))

        transport.close()
        second.wait()
        release.set()
        first.wait()

        assert isinstance(second.errors[0], TransportError)
        assert "closed" in str(second.errors[0])
        assert first.errors == [None]

    def test_send_after_close_is_reported(self, configuration, chat_query):
        client, transport = make_client(configuration, lambda request: httpx.Response(200, json={}))
        results = []

        transport.close()
        client.chats(chat_query, results.append)

        assert isinstance(results[0].error, TransportError)

    def test_cancel_releases_idle_connection(self, configuration, chat_query, chat_completion_body):
        stream = IdleStream(sse(chat_chunk("1", "a"), done=False))

        def handler(request):
            if json.loads(request.content).get("stream"):
                return httpx.Response(200, stream=stream)
            return httpx.Response(200, json=chat_completion_body)

        transport = HTTPXTransport(client=httpx.Client(transport=httpx.MockTransport(handler)), max_workers=1)
        client = OpenAI(configuration=configuration, transport=transport)
        waiter = Waiter()
        first = threading.Event()

        def on_result(result):
            waiter.on_result(result)
            first.set()

        session = client.chats_stream(chat_query, on_result, waiter.on_complete)
        assert first.wait(WAIT)
        session.cancel()

        assert stream.closed.wait(WAIT)
        # the single worker is free again for the next call
        plain_done = threading.Event()
        client.chats(chat_query, lambda result: plain_done.set())
        assert plain_done.wait(WAIT)

        assert isinstance(waiter.errors[0], StreamCancelledError)
        transport.close()
