"""
Request bodies for each API endpoint.

JSON queries serialize through ``model_dump(exclude_none=True)``. Multipart
queries expose ``form_fields()`` and ``form_files()`` consumed by
``MultipartFormDataRequest``.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Tuple, Union

from .conversation_types import ChatMessage, ChatTool


# (filename, content, content type)
FileField = Tuple[str, bytes, str]


class StreamableQuery(BaseModel):
    """Query whose endpoint can answer with an event stream."""

    stream: Optional[bool] = Field(None, description="Request server-sent events")

    def make_streamable(self):
        """Return a copy with streaming enabled."""
        return self.model_copy(update={"stream": True})


class CompletionsQuery(StreamableQuery):
    """Legacy text completion request."""
    model: str = Field(..., description="Model identifier")
    prompt: Optional[Union[str, List[str]]] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, ge=1)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    n: Optional[int] = None
    stop: Optional[List[str]] = None
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    user: Optional[str] = None


class ChatQuery(StreamableQuery):
    """Chat completion request."""
    model: str = Field(..., description="Model identifier")
    messages: List[ChatMessage]
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    n: Optional[int] = None
    stop: Optional[List[str]] = None
    max_tokens: Optional[int] = Field(None, ge=1)
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    logit_bias: Optional[Dict[str, int]] = None
    user: Optional[str] = None
    tools: Optional[List[ChatTool]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    response_format: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None


class EditsQuery(BaseModel):
    """Edit request (deprecated endpoint, still routed)."""
    model: str
    input: Optional[str] = None
    instruction: str
    n: Optional[int] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)


class EmbeddingsQuery(BaseModel):
    """Embeddings request."""
    model: str
    input: Union[str, List[str]]
    dimensions: Optional[int] = None
    user: Optional[str] = None


class ModerationsQuery(BaseModel):
    """Moderation request."""
    input: Union[str, List[str]]
    model: Optional[str] = None


class ModelQuery(BaseModel):
    """Single model lookup; the model id becomes part of the path."""
    model: str


class ImagesQuery(BaseModel):
    """Image generation request."""
    prompt: str
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None
    response_format: Optional[str] = None
    user: Optional[str] = None


class AudioSpeechQuery(BaseModel):
    """Text-to-speech request; the response is raw audio."""
    model: str
    input: str
    voice: str
    response_format: Optional[str] = None
    speed: Optional[float] = Field(None, ge=0.25, le=4.0)


class MultipartQuery(BaseModel):
    """Base for endpoints that take multipart/form-data bodies."""

    def form_fields(self) -> Dict[str, str]:
        fields = {}
        for name, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, bytes):
                continue
            fields[name] = str(value)
        return fields

    def form_files(self) -> Dict[str, FileField]:
        raise NotImplementedError


class ImageEditsQuery(MultipartQuery):
    """Image edit request."""
    image: bytes
    image_name: str = "image.png"
    mask: Optional[bytes] = None
    prompt: str
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    size: Optional[str] = None
    response_format: Optional[str] = None
    user: Optional[str] = None

    def form_fields(self) -> Dict[str, str]:
        fields = super().form_fields()
        fields.pop("image_name", None)
        return fields

    def form_files(self) -> Dict[str, FileField]:
        files = {"image": (self.image_name, self.image, "image/png")}
        if self.mask is not None:
            files["mask"] = ("mask.png", self.mask, "image/png")
        return files


class ImageVariationsQuery(MultipartQuery):
    """Image variation request."""
    image: bytes
    image_name: str = "image.png"
    model: Optional[str] = None
    n: Optional[int] = Field(None, ge=1, le=10)
    size: Optional[str] = None
    response_format: Optional[str] = None
    user: Optional[str] = None

    def form_fields(self) -> Dict[str, str]:
        fields = super().form_fields()
        fields.pop("image_name", None)
        return fields

    def form_files(self) -> Dict[str, FileField]:
        return {"image": (self.image_name, self.image, "image/png")}


class AudioTranscriptionQuery(MultipartQuery):
    """Speech-to-text request."""
    file: bytes
    file_name: str = "audio.mp3"
    model: str
    prompt: Optional[str] = None
    response_format: Optional[str] = None
    temperature: Optional[float] = None
    language: Optional[str] = None

    def form_fields(self) -> Dict[str, str]:
        fields = super().form_fields()
        fields.pop("file_name", None)
        return fields

    def form_files(self) -> Dict[str, FileField]:
        return {"file": (self.file_name, self.file, "application/octet-stream")}


class AudioTranslationQuery(MultipartQuery):
    """Speech-to-English-text request."""
    file: bytes
    file_name: str = "audio.mp3"
    model: str
    prompt: Optional[str] = None
    response_format: Optional[str] = None
    temperature: Optional[float] = None

    def form_fields(self) -> Dict[str, str]:
        fields = super().form_fields()
        fields.pop("file_name", None)
        return fields

    def form_files(self) -> Dict[str, FileField]:
        return {"file": (self.file_name, self.file, "application/octet-stream")}
