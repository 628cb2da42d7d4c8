"""API path map. Override individual paths when talking to a proxy."""

from pydantic import BaseModel, ConfigDict


class APIPaths(BaseModel):
    """Endpoint paths, v1 by default."""

    model_config = ConfigDict(frozen=True)

    completions: str = "/v1/completions"
    embeddings: str = "/v1/embeddings"
    chats: str = "/v1/chat/completions"
    edits: str = "/v1/edits"
    models: str = "/v1/models"
    moderations: str = "/v1/moderations"
    audio_speech: str = "/v1/audio/speech"
    audio_transcriptions: str = "/v1/audio/transcriptions"
    audio_translations: str = "/v1/audio/translations"
    images: str = "/v1/images/generations"
    image_edits: str = "/v1/images/edits"
    image_variations: str = "/v1/images/variations"


def with_path(base: str, component: str) -> str:
    """Append a path component: with_path("/v1/models", "gpt-4") -> "/v1/models/gpt-4"."""
    return base + "/" + component
