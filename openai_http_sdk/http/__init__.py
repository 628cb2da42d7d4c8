"""HTTP plumbing: request builders and transports."""

from .builders import JSONRequest, MultipartFormDataRequest, RequestBuilder
from .transport import HTTPResponse, HTTPXTransport, Transport

__all__ = [
    "JSONRequest",
    "MultipartFormDataRequest",
    "RequestBuilder",
    "HTTPResponse",
    "HTTPXTransport",
    "Transport",
]
