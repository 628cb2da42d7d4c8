"""Main client interface for the OpenAI HTTP SDK."""

import time
import uuid
from typing import Callable, Optional, Type, TypeVar

from pydantic import BaseModel

from .config import Configuration, with_path
from .errors import ClientError, EmptyDataError, TransportError
from .http.builders import JSONRequest, MultipartFormDataRequest, RequestBuilder
from .http.transport import HTTPResponse, HTTPXTransport, OnResponse, Transport
from .models.queries import (
    AudioSpeechQuery,
    AudioTranscriptionQuery,
    AudioTranslationQuery,
    ChatQuery,
    CompletionsQuery,
    EditsQuery,
    EmbeddingsQuery,
    ImageEditsQuery,
    ImagesQuery,
    ImageVariationsQuery,
    ModelQuery,
    ModerationsQuery,
)
from .models.responses import (
    AudioSpeechResult,
    AudioTranscriptionResult,
    AudioTranslationResult,
    ChatResult,
    ChatStreamResult,
    CompletionsResult,
    EditsResult,
    EmbeddingsResult,
    ImagesResult,
    ModelResult,
    ModelsResult,
    ModerationsResult,
)
from .models.result import Result
from .models.streaming import StreamRequest
from .observability.logging import ClientLogger
from .streaming.decoder import EventDecoder, decode_api_error
from .streaming.helpers import safe_invoke
from .streaming.iterators import AsyncResultStream, ResultStream
from .streaming.registry import SessionRegistry
from .streaming.session import StreamingSession

T = TypeVar("T", bound=BaseModel)

Completion = Callable[[Result[T]], None]
OnResult = Callable[[Result[T]], None]
StreamCompletion = Callable[[Optional[BaseException]], None]
PrepareRequestHook = Callable[[StreamRequest], StreamRequest]


class OpenAI:
    """
    Client for the OpenAI HTTP API.

    Every operation returns without blocking. Plain calls report through a
    single ``completion(Result)``; streaming calls report each event through
    ``on_result(Result)`` and finish with exactly one ``completion(error)``.

    Args:
        configuration: Client configuration; read from the environment if omitted
        api_token: Shortcut for ``Configuration(token=api_token)``
        transport: Transport to use (defaults to an HTTPXTransport owned by the client)
        prepare_request: Optional hook that may replace each built request

    Example:
        >>> client = OpenAI(api_token="sk-...")
        >>> query = ChatQuery(model="gpt-4o-mini", messages=[ChatMessage(role="user", content="Hi")])
        >>> client.chats_stream(query, on_result=print, completion=lambda error: print("done", error))
    """

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        api_token: Optional[str] = None,
        transport: Optional[Transport] = None,
        prepare_request: Optional[PrepareRequestHook] = None
    ):
        if configuration is None:
            configuration = Configuration(token=api_token) if api_token else Configuration.from_env()
        self.configuration = configuration
        self.prepare_request = prepare_request

        self._transport = transport or HTTPXTransport()
        self._owns_transport = transport is None
        self._streaming_sessions = SessionRegistry()
        self._log = ClientLogger("client")
        self._closed = False

    @property
    def active_streams(self) -> int:
        """Number of streams still in flight."""
        return len(self._streaming_sessions)

    # ============================================================
    # Completions & chat
    # ============================================================

    def completions(self, query: CompletionsQuery, completion: Completion[CompletionsResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.completions), query),
                              CompletionsResult, completion)

    def completions_stream(
        self,
        query: CompletionsQuery,
        on_result: OnResult[CompletionsResult],
        completion: Optional[StreamCompletion] = None
    ) -> Optional[StreamingSession[CompletionsResult]]:
        return self._perform_streaming_request(
            JSONRequest(self._url(self.configuration.paths.completions), query.make_streamable()),
            CompletionsResult, on_result, completion
        )

    def chats(self, query: ChatQuery, completion: Completion[ChatResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.chats), query),
                              ChatResult, completion)

    def chats_stream(
        self,
        query: ChatQuery,
        on_result: OnResult[ChatStreamResult],
        completion: Optional[StreamCompletion] = None
    ) -> Optional[StreamingSession[ChatStreamResult]]:
        """
        Stream a chat completion.

        Returns:
            The session handle (use ``cancel()`` to stop early), or None if
            the request could not be built; the completion callback then
            carries the build error.
        """
        return self._perform_streaming_request(
            JSONRequest(self._url(self.configuration.paths.chats), query.make_streamable()),
            ChatStreamResult, on_result, completion
        )

    def edits(self, query: EditsQuery, completion: Completion[EditsResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.edits), query),
                              EditsResult, completion)

    # ============================================================
    # Iterator facades
    # ============================================================

    def stream_chats(self, query: ChatQuery) -> ResultStream[ChatStreamResult]:
        """Stream a chat completion as a blocking iterator of Results."""
        stream: ResultStream[ChatStreamResult] = ResultStream()
        stream.attach(self.chats_stream(query, stream.on_result, stream.on_complete))
        return stream

    def stream_completions(self, query: CompletionsQuery) -> ResultStream[CompletionsResult]:
        stream: ResultStream[CompletionsResult] = ResultStream()
        stream.attach(self.completions_stream(query, stream.on_result, stream.on_complete))
        return stream

    def astream_chats(self, query: ChatQuery) -> AsyncResultStream[ChatStreamResult]:
        """Stream a chat completion as an async iterator. Call from a running event loop."""
        stream: AsyncResultStream[ChatStreamResult] = AsyncResultStream()
        stream.attach(self.chats_stream(query, stream.on_result, stream.on_complete))
        return stream

    def astream_completions(self, query: CompletionsQuery) -> AsyncResultStream[CompletionsResult]:
        stream: AsyncResultStream[CompletionsResult] = AsyncResultStream()
        stream.attach(self.completions_stream(query, stream.on_result, stream.on_complete))
        return stream

    # ============================================================
    # Embeddings, moderation & models
    # ============================================================

    def embeddings(self, query: EmbeddingsQuery, completion: Completion[EmbeddingsResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.embeddings), query),
                              EmbeddingsResult, completion)

    def moderations(self, query: ModerationsQuery, completion: Completion[ModerationsResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.moderations), query),
                              ModerationsResult, completion)

    def model(self, query: ModelQuery, completion: Completion[ModelResult]) -> None:
        url = self._url(with_path(self.configuration.paths.models, query.model))
        self._perform_request(JSONRequest(url, method="GET"), ModelResult, completion)

    def models(self, completion: Completion[ModelsResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.models), method="GET"),
                              ModelsResult, completion)

    # ============================================================
    # Images
    # ============================================================

    def images(self, query: ImagesQuery, completion: Completion[ImagesResult]) -> None:
        self._perform_request(JSONRequest(self._url(self.configuration.paths.images), query),
                              ImagesResult, completion)

    def image_edits(self, query: ImageEditsQuery, completion: Completion[ImagesResult]) -> None:
        self._perform_request(MultipartFormDataRequest(self._url(self.configuration.paths.image_edits), query),
                              ImagesResult, completion)

    def image_variations(self, query: ImageVariationsQuery, completion: Completion[ImagesResult]) -> None:
        self._perform_request(
            MultipartFormDataRequest(self._url(self.configuration.paths.image_variations), query),
            ImagesResult, completion
        )

    # ============================================================
    # Audio
    # ============================================================

    def audio_transcriptions(self, query: AudioTranscriptionQuery,
                             completion: Completion[AudioTranscriptionResult]) -> None:
        self._perform_request(
            MultipartFormDataRequest(self._url(self.configuration.paths.audio_transcriptions), query),
            AudioTranscriptionResult, completion
        )

    def audio_translations(self, query: AudioTranslationQuery,
                           completion: Completion[AudioTranslationResult]) -> None:
        self._perform_request(
            MultipartFormDataRequest(self._url(self.configuration.paths.audio_translations), query),
            AudioTranslationResult, completion
        )

    def audio_create_speech(self, query: AudioSpeechQuery, completion: Completion[AudioSpeechResult]) -> None:
        """Text to speech. The result wraps the raw audio bytes."""
        self._perform_speech_request(JSONRequest(self._url(self.configuration.paths.audio_speech), query),
                                     completion)

    # ============================================================
    # Lifecycle
    # ============================================================

    def close(self) -> None:
        """Cancel active streams and release the transport."""
        if self._closed:
            return
        self._closed = True

        sessions = self._streaming_sessions.drain()
        if sessions:
            self._log.info("Cancelling active streams on close", count=len(sessions))
        for session in sessions:
            session.cancel()

        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "OpenAI":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # ============================================================
    # Private methods
    # ============================================================

    def _url(self, path: str) -> str:
        return self.configuration.build_url(path)

    def _build(self, builder: RequestBuilder) -> StreamRequest:
        if self._closed:
            raise ClientError("Client is closed")
        request = builder.build(
            token=self.configuration.token,
            organization_identifier=self.configuration.organization_identifier,
            timeout_interval=self.configuration.timeout_interval
        )
        if self.prepare_request is not None:
            request = self.prepare_request(request)
        return request

    def _perform_request(self, builder: RequestBuilder, result_type: Type[T], completion: Completion[T]) -> None:
        try:
            request = self._build(builder)
        except Exception as e:
            safe_invoke(completion, Result.failure(e), self._log)
            return

        decoder = EventDecoder(result_type)
        request_id = str(uuid.uuid4())[:8]
        started = time.time()

        def on_response(response: Optional[HTTPResponse], error: Optional[BaseException]) -> None:
            if error is not None:
                result = Result.failure(error)
            elif not response.body:
                result = Result.failure(EmptyDataError())
            else:
                result = decoder.decode(response.body, status_code=response.status_code)

            self._log.debug(
                "Request finished",
                request_id=request_id,
                url=request.url,
                success=result.is_success,
                duration_ms=int((time.time() - started) * 1000)
            )
            safe_invoke(completion, result, self._log, request_id=request_id)

        self._send(request, on_response, completion)

    def _perform_streaming_request(
        self,
        builder: RequestBuilder,
        result_type: Type[T],
        on_result: OnResult[T],
        completion: Optional[StreamCompletion]
    ) -> Optional[StreamingSession[T]]:
        try:
            request = self._build(builder)
        except Exception as e:
            safe_invoke(completion, e, self._log)
            return None

        session = StreamingSession(request, self._transport, result_type, on_result=on_result)

        def on_complete(error: Optional[BaseException]) -> None:
            self._streaming_sessions.remove(session)
            safe_invoke(completion, error, self._log, session_id=session.session_id)

        session.on_complete = on_complete
        # Registered before perform() so a synchronous completion still unregisters it
        self._streaming_sessions.add(session)
        session.perform()
        return session

    def _perform_speech_request(self, builder: RequestBuilder, completion: Completion[AudioSpeechResult]) -> None:
        try:
            request = self._build(builder)
        except Exception as e:
            safe_invoke(completion, Result.failure(e), self._log)
            return

        def on_response(response: Optional[HTTPResponse], error: Optional[BaseException]) -> None:
            if error is not None:
                result = Result.failure(error)
            elif not response.body:
                result = Result.failure(EmptyDataError())
            elif not response.is_success:
                api_error = decode_api_error(response.body, response.status_code)
                result = Result.failure(api_error or TransportError(
                    f"HTTP {response.status_code}", status_code=response.status_code, body=response.body
                ))
            else:
                result = Result.success(AudioSpeechResult(audio=response.body))
            safe_invoke(completion, result, self._log)

        self._send(request, on_response, completion)

    def _send(self, request: StreamRequest, on_response: OnResponse, completion: Completion) -> None:
        try:
            self._transport.send(request, on_response)
        except Exception as e:
            self._log.error("Transport refused request", error=e, url=request.url)
            error = e if isinstance(e, ClientError) else TransportError(
                f"Request could not be sent: {e}", original_error=e
            )
            safe_invoke(completion, Result.failure(error), self._log)
