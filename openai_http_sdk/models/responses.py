"""
Typed result models for each API endpoint.

Decoding is strict about required fields so that an error object arriving in
place of a result never decodes as a result. Unknown fields are ignored.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List

from .conversation_types import ChatMessage, ChatRole, ToolCall


class Usage(BaseModel):
    """Token accounting."""
    prompt_tokens: int = 0
    completion_tokens: Optional[int] = None
    total_tokens: int = 0


class CompletionChoice(BaseModel):
    text: str
    index: int
    logprobs: Optional[Dict[str, Any]] = None
    finish_reason: Optional[str] = None


class CompletionsResult(BaseModel):
    """Text completion, also used for each streamed completion event."""
    id: str
    object: str
    created: int
    model: str
    choices: List[CompletionChoice]
    usage: Optional[Usage] = None


class ChatChoice(BaseModel):
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatResult(BaseModel):
    """Complete chat completion."""
    id: str
    object: str
    created: int
    model: str
    choices: List[ChatChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None


class ChatDelta(BaseModel):
    """Incremental message fragment."""
    role: Optional[ChatRole] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class ChatStreamChoice(BaseModel):
    index: int
    delta: ChatDelta
    finish_reason: Optional[str] = None


class ChatStreamResult(BaseModel):
    """One streamed chat completion chunk."""
    id: str
    object: str
    created: int
    model: str
    choices: List[ChatStreamChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def get_text(self) -> str:
        """Concatenated delta content of all choices."""
        return "".join(choice.delta.content or "" for choice in self.choices)


class EditChoice(BaseModel):
    text: str
    index: int


class EditsResult(BaseModel):
    object: str
    created: int
    choices: List[EditChoice]
    usage: Optional[Usage] = None


class Embedding(BaseModel):
    object: str = "embedding"
    embedding: List[float]
    index: int


class EmbeddingsResult(BaseModel):
    object: str = "list"
    data: List[Embedding]
    model: str
    usage: Optional[Usage] = None


class ImageData(BaseModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImagesResult(BaseModel):
    created: int
    data: List[ImageData]


class ModelResult(BaseModel):
    id: str
    object: str
    created: Optional[int] = None
    owned_by: str


class ModelsResult(BaseModel):
    object: str = "list"
    data: List[ModelResult]


class ModerationCategoryResult(BaseModel):
    flagged: bool
    categories: Dict[str, bool]
    category_scores: Dict[str, float]


class ModerationsResult(BaseModel):
    id: str
    model: str
    results: List[ModerationCategoryResult]


class AudioTranscriptionResult(BaseModel):
    text: str


class AudioTranslationResult(BaseModel):
    text: str


class AudioSpeechResult(BaseModel):
    """Raw audio returned by the speech endpoint."""
    audio: bytes = Field(..., repr=False)


class APIErrorDetail(BaseModel):
    message: str
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[str] = None


class APIErrorResponse(BaseModel):
    """Envelope the API uses for errors: ``{"error": {...}}``."""
    error: APIErrorDetail
