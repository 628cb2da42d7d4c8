"""Request, response and result models."""

from .conversation_types import ChatMessage, ChatRole, ChatTool, FunctionCall, ToolCall
from .queries import (
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
    MultipartQuery,
)
from .responses import (
    APIErrorDetail,
    APIErrorResponse,
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
    Usage,
)
from .result import Result
from .streaming import StreamRequest

__all__ = [
    "ChatMessage",
    "ChatRole",
    "ChatTool",
    "FunctionCall",
    "ToolCall",
    "AudioSpeechQuery",
    "AudioTranscriptionQuery",
    "AudioTranslationQuery",
    "ChatQuery",
    "CompletionsQuery",
    "EditsQuery",
    "EmbeddingsQuery",
    "ImageEditsQuery",
    "ImagesQuery",
    "ImageVariationsQuery",
    "ModelQuery",
    "ModerationsQuery",
    "MultipartQuery",
    "APIErrorDetail",
    "APIErrorResponse",
    "AudioSpeechResult",
    "AudioTranscriptionResult",
    "AudioTranslationResult",
    "ChatResult",
    "ChatStreamResult",
    "CompletionsResult",
    "EditsResult",
    "EmbeddingsResult",
    "ImagesResult",
    "ModelResult",
    "ModelsResult",
    "ModerationsResult",
    "Usage",
    "Result",
    "StreamRequest",
]
