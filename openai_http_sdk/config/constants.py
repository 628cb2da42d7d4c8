"""
Client defaults and environment variable names.

See openai_http_sdk/config/settings.py for how these are applied.
"""

DEFAULT_HOST = "api.openai.com"
DEFAULT_SCHEME = "https"
DEFAULT_TIMEOUT_SECONDS = 60.0

# Environment variables read by Configuration.from_env()
API_KEY_ENV_VAR = "OPENAI_API_KEY"
ORGANIZATION_ENV_VAR = "OPENAI_ORGANIZATION"
HOST_ENV_VAR = "OPENAI_HOST"
TIMEOUT_ENV_VAR = "OPENAI_TIMEOUT"

# Wire framing of streamed responses
EVENT_PREFIX = b"data:"
STREAM_TERMINATOR = b"[DONE]"

ORGANIZATION_HEADER = "OpenAI-Organization"
