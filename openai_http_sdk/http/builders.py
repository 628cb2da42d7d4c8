"""
Request builders: turn a query into a StreamRequest.

Builders carry the endpoint URL and body; credentials and timeout are applied
at build time from the client configuration.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx
from pydantic import BaseModel

from ..config.constants import ORGANIZATION_HEADER
from ..models.queries import MultipartQuery
from ..models.streaming import StreamRequest


class RequestBuilder(ABC):
    """Produces an immutable request descriptor."""

    def __init__(self, url: str, method: str = "POST"):
        self.url = url
        self.method = method

    @abstractmethod
    def build(self, token: str, organization_identifier: Optional[str],
              timeout_interval: float) -> StreamRequest:
        pass

    @staticmethod
    def auth_headers(token: str, organization_identifier: Optional[str]) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {token}"}
        if organization_identifier:
            headers[ORGANIZATION_HEADER] = organization_identifier
        return headers


class JSONRequest(RequestBuilder):
    """JSON body request; ``body`` may be None for GET calls."""

    def __init__(self, url: str, body: Optional[BaseModel] = None, method: str = "POST"):
        super().__init__(url, method)
        self.body = body

    def build(self, token, organization_identifier, timeout_interval) -> StreamRequest:
        headers = self.auth_headers(token, organization_identifier)
        headers["Content-Type"] = "application/json"

        content = None
        if self.body is not None:
            content = self.body.model_dump_json(exclude_none=True).encode("utf-8")

        return StreamRequest(
            method=self.method,
            url=self.url,
            headers=headers,
            body=content,
            timeout=timeout_interval
        )


class MultipartFormDataRequest(RequestBuilder):
    """multipart/form-data request for file uploads."""

    def __init__(self, url: str, body: MultipartQuery, method: str = "POST"):
        super().__init__(url, method)
        self.body = body

    def build(self, token, organization_identifier, timeout_interval) -> StreamRequest:
        # httpx produces the boundary and encoded body
        encoded = httpx.Request(
            self.method,
            self.url,
            data=self.body.form_fields(),
            files=self.body.form_files()
        )
        content = encoded.read()

        headers = self.auth_headers(token, organization_identifier)
        headers["Content-Type"] = encoded.headers["Content-Type"]

        return StreamRequest(
            method=self.method,
            url=self.url,
            headers=headers,
            body=content,
            timeout=timeout_interval
        )
