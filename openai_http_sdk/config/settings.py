import os
import logging
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    API_KEY_ENV_VAR,
    DEFAULT_HOST,
    DEFAULT_SCHEME,
    DEFAULT_TIMEOUT_SECONDS,
    HOST_ENV_VAR,
    ORGANIZATION_ENV_VAR,
    TIMEOUT_ENV_VAR,
)
from .paths import APIPaths

logger = logging.getLogger(__name__)


class Configuration(BaseModel):
    """
    Client configuration.

    Attributes:
        token: API token sent as a bearer credential
        organization_identifier: Optional organization id header
        host: API host; set this when going through a proxy
        timeout_interval: Default request timeout in seconds
        paths: Endpoint path map
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1, repr=False)
    organization_identifier: Optional[str] = None
    host: str = DEFAULT_HOST
    timeout_interval: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    paths: APIPaths = Field(default_factory=APIPaths)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True, **overrides) -> "Configuration":
        """Build a configuration from OPENAI_* environment variables."""
        if load_dotenv_file:
            load_dotenv()

        values = {
            "token": os.getenv(API_KEY_ENV_VAR, ""),
            "organization_identifier": os.getenv(ORGANIZATION_ENV_VAR) or None,
            "host": os.getenv(HOST_ENV_VAR) or DEFAULT_HOST,
        }
        try:
            values["timeout_interval"] = float(os.getenv(TIMEOUT_ENV_VAR, str(DEFAULT_TIMEOUT_SECONDS)))
        except ValueError:
            logger.warning(f"Ignoring invalid {TIMEOUT_ENV_VAR}, using {DEFAULT_TIMEOUT_SECONDS}s")
            values["timeout_interval"] = DEFAULT_TIMEOUT_SECONDS

        values.update(overrides)
        return cls(**values)

    def build_url(self, path: str) -> str:
        """Absolute URL for an API path on the configured host."""
        return f"{DEFAULT_SCHEME}://{self.host}{path}"
