"""Client configuration and its defaults for each API flavour."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

OPENAI_API_URL_V1 = "https://api.openai.com/v1"
ANTHROPIC_API_URL_V1 = "https://api.anthropic.com/v1"
DEFAULT_EMPTY_MESSAGES_LIMIT = 300

AZURE_API_PREFIX = "openai"
AZURE_DEPLOYMENTS_PREFIX = "deployments"
AZURE_AUTH_HEADER = "api-key"
AZURE_DEFAULT_API_VERSION = "2023-05-15"

ANTHROPIC_API_VERSION = "2023-06-01"
DEFAULT_ASSISTANT_VERSION = "v2"

_AZURE_MODEL_STRIP = re.compile(r"[.:]")


class APIType(str, Enum):
    OPENAI = "OPEN_AI"
    AZURE = "AZURE"
    AZURE_AD = "AZURE_AD"
    CLOUDFLARE_AZURE = "CLOUDFLARE_AZURE"
    ANTHROPIC = "ANTHROPIC"


def _azure_model_to_deployment(model: str) -> str:
    return _AZURE_MODEL_STRIP.sub("", model)


@dataclass(repr=False)
class ClientConfig:
    """Settings a client needs to reach an API.

    ``api_version`` is required for the Azure, Azure AD and Anthropic types.
    ``http_client`` is the object that performs requests.
    """

    auth_token: str = field(default_factory=str)
    base_url: str = OPENAI_API_URL_V1
    org_id: str = ""
    api_type: APIType = APIType.OPENAI
    api_version: str = ""
    assistant_version: str = ""
    azure_model_mapper: Optional[Callable[[str], str]] = None
    http_client: Any = None
    empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT

    def azure_deployment_by_model(self, model: str) -> str:
        """Return the Azure deployment name to use for ``model``."""
        if self.azure_model_mapper is not None:
            return self.azure_model_mapper(model)
        return model

    def __str__(self) -> str:
        return "<OpenAI API ClientConfig>"

    __repr__ = __str__


def default_config(auth_token: str) -> ClientConfig:
    """Configuration for the public OpenAI API."""
    return ClientConfig(
        auth_token=auth_token,
        base_url=OPENAI_API_URL_V1,
        api_type=APIType.OPENAI,
        assistant_version=DEFAULT_ASSISTANT_VERSION,
        org_id="",
        empty_messages_limit=DEFAULT_EMPTY_MESSAGES_LIMIT,
    )


def default_azure_config(api_key: str, base_url: str) -> ClientConfig:
    """Configuration for Azure OpenAI Service."""
    return ClientConfig(
        auth_token=api_key,
        base_url=base_url,
        org_id="",
        api_type=APIType.AZURE,
        api_version=AZURE_DEFAULT_API_VERSION,
        azure_model_mapper=_azure_model_to_deployment,
        empty_messages_limit=DEFAULT_EMPTY_MESSAGES_LIMIT,
    )


def default_anthropic_config(api_key: str, base_url: str = "") -> ClientConfig:
    """Configuration for the Anthropic API; an empty base URL uses the default."""
    return ClientConfig(
        auth_token=api_key,
        base_url=base_url or ANTHROPIC_API_URL_V1,
        org_id="",
        api_type=APIType.ANTHROPIC,
        api_version=ANTHROPIC_API_VERSION,
        empty_messages_limit=DEFAULT_EMPTY_MESSAGES_LIMIT,
    )