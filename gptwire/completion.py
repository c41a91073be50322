"""Requests and responses of the text completion endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .common import Usage, _as_mapping, _check, _get
from .marshal import MarshalError

O1_MINI = "o1-mini"
O1_MINI_20240912 = "o1-mini-2024-09-12"
O1_PREVIEW = "o1-preview"
O1_PREVIEW_20240912 = "o1-preview-2024-09-12"
O1 = "o1"
O1_20241217 = "o1-2024-12-17"
O3 = "o3"
O3_20250416 = "o3-2025-04-16"
O3_MINI = "o3-mini"
O3_MINI_20250131 = "o3-mini-2025-01-31"
O4_MINI = "o4-mini"
O4_MINI_20250416 = "o4-mini-2025-04-16"
GPT4_32K_0613 = "gpt-4-32k-0613"
GPT4_32K_0314 = "gpt-4-32k-0314"
GPT4_32K = "gpt-4-32k"
GPT4_0613 = "gpt-4-0613"
GPT4_0314 = "gpt-4-0314"
GPT4O = "gpt-4o"
GPT4O_20240513 = "gpt-4o-2024-05-13"
GPT4O_20240806 = "gpt-4o-2024-08-06"
GPT4O_20241120 = "gpt-4o-2024-11-20"
GPT4O_LATEST = "chatgpt-4o-latest"
GPT4O_MINI = "gpt-4o-mini"
GPT4O_MINI_20240718 = "gpt-4o-mini-2024-07-18"
GPT4_TURBO = "gpt-4-turbo"
GPT4_TURBO_20240409 = "gpt-4-turbo-2024-04-09"
GPT4_TURBO_0125 = "gpt-4-0125-preview"
GPT4_TURBO_1106 = "gpt-4-1106-preview"
GPT4_TURBO_PREVIEW = "gpt-4-turbo-preview"
GPT4_VISION_PREVIEW = "gpt-4-vision-preview"
GPT4 = "gpt-4"
GPT4_1 = "gpt-4.1"
GPT4_1_20250414 = "gpt-4.1-2025-04-14"
GPT4_1_MINI = "gpt-4.1-mini"
GPT4_1_MINI_20250414 = "gpt-4.1-mini-2025-04-14"
GPT4_1_NANO = "gpt-4.1-nano"
GPT4_1_NANO_20250414 = "gpt-4.1-nano-2025-04-14"
GPT4_5_PREVIEW = "gpt-4.5-preview"
GPT4_5_PREVIEW_20250227 = "gpt-4.5-preview-2025-02-27"
GPT3_5_TURBO_0125 = "gpt-3.5-turbo-0125"
GPT3_5_TURBO_1106 = "gpt-3.5-turbo-1106"
GPT3_5_TURBO_0613 = "gpt-3.5-turbo-0613"
GPT3_5_TURBO_0301 = "gpt-3.5-turbo-0301"
GPT3_5_TURBO_16K = "gpt-3.5-turbo-16k"
GPT3_5_TURBO_16K_0613 = "gpt-3.5-turbo-16k-0613"
GPT3_5_TURBO = "gpt-3.5-turbo"
GPT3_5_TURBO_INSTRUCT = "gpt-3.5-turbo-instruct"
# The following models are shut down; use gpt-3.5-turbo-instruct,
# davinci-002 or babbage-002 instead.
GPT3_TEXT_DAVINCI_003 = "text-davinci-003"
GPT3_TEXT_DAVINCI_002 = "text-davinci-002"
GPT3_TEXT_CURIE_001 = "text-curie-001"
GPT3_TEXT_BABBAGE_001 = "text-babbage-001"
GPT3_TEXT_ADA_001 = "text-ada-001"
GPT3_TEXT_DAVINCI_001 = "text-davinci-001"
GPT3_DAVINCI_INSTRUCT_BETA = "davinci-instruct-beta"
GPT3_DAVINCI = "davinci"
GPT3_DAVINCI_002 = "davinci-002"
GPT3_CURIE_INSTRUCT_BETA = "curie-instruct-beta"
GPT3_CURIE = "curie"
GPT3_CURIE_002 = "curie-002"
GPT3_ADA = "ada"
GPT3_ADA_002 = "ada-002"
GPT3_BABBAGE = "babbage"
GPT3_BABBAGE_002 = "babbage-002"

CODEX_CODE_DAVINCI_002 = "code-davinci-002"
CODEX_CODE_CUSHMAN_001 = "code-cushman-001"
CODEX_CODE_DAVINCI_001 = "code-davinci-001"

COMPLETIONS_SUFFIX = "/completions"
CHAT_COMPLETIONS_SUFFIX = "/chat/completions"

_DISABLED_MODELS_FOR_ENDPOINTS: Dict[str, frozenset] = {
    COMPLETIONS_SUFFIX: frozenset(
        {
            O1_MINI,
            O1_MINI_20240912,
            O1_PREVIEW,
            O1_PREVIEW_20240912,
            O3_MINI,
            O3_MINI_20250131,
            O4_MINI,
            O4_MINI_20250416,
            O3,
            O3_20250416,
            GPT3_5_TURBO,
            GPT3_5_TURBO_0301,
            GPT3_5_TURBO_0613,
            GPT3_5_TURBO_1106,
            GPT3_5_TURBO_0125,
            GPT3_5_TURBO_16K,
            GPT3_5_TURBO_16K_0613,
            GPT4,
            GPT4_5_PREVIEW,
            GPT4_5_PREVIEW_20250227,
            GPT4O,
            GPT4O_20240513,
            GPT4O_20240806,
            GPT4O_20241120,
            GPT4O_LATEST,
            GPT4O_MINI,
            GPT4O_MINI_20240718,
            GPT4_TURBO_PREVIEW,
            GPT4_VISION_PREVIEW,
            GPT4_TURBO_1106,
            GPT4_TURBO_0125,
            GPT4_TURBO,
            GPT4_TURBO_20240409,
            GPT4_0314,
            GPT4_0613,
            GPT4_32K,
            GPT4_32K_0314,
            GPT4_32K_0613,
            O1,
            GPT4_1,
            GPT4_1_20250414,
            GPT4_1_MINI,
            GPT4_1_MINI_20250414,
            GPT4_1_NANO,
            GPT4_1_NANO_20250414,
        }
    ),
    CHAT_COMPLETIONS_SUFFIX: frozenset(
        {
            CODEX_CODE_DAVINCI_002,
            CODEX_CODE_CUSHMAN_001,
            CODEX_CODE_DAVINCI_001,
            GPT3_TEXT_DAVINCI_003,
            GPT3_TEXT_DAVINCI_002,
            GPT3_TEXT_CURIE_001,
            GPT3_TEXT_BABBAGE_001,
            GPT3_TEXT_ADA_001,
            GPT3_TEXT_DAVINCI_001,
            GPT3_DAVINCI_INSTRUCT_BETA,
            GPT3_DAVINCI,
            GPT3_CURIE_INSTRUCT_BETA,
            GPT3_CURIE,
            GPT3_ADA,
            GPT3_BABBAGE,
        }
    ),
}


class CompletionError(ValueError):
    """A completion request that cannot be sent as it stands."""


class CompletionStreamNotSupportedError(CompletionError):
    """Streaming was requested from the non-streaming completion call."""

    def __init__(self) -> None:
        super().__init__("streaming is not supported by this call; use the stream call instead")


class UnsupportedModelError(CompletionError):
    """The model is not served by the requested endpoint."""

    def __init__(self, model: str = "", endpoint: str = COMPLETIONS_SUFFIX) -> None:
        self.model = model
        self.endpoint = endpoint
        super().__init__(f"model {model!r} is not supported by the {endpoint} endpoint")


class PromptTypeNotSupportedError(CompletionError):
    """The prompt is neither a string nor a list of strings."""

    def __init__(self) -> None:
        super().__init__("the prompt must be a string or a list of strings")


def endpoint_supports_model(endpoint: str, model: str) -> bool:
    """Tell whether ``model`` may be used with ``endpoint``."""
    return model not in _DISABLED_MODELS_FOR_ENDPOINTS.get(endpoint, frozenset())


def is_valid_prompt(prompt: Any) -> bool:
    """Tell whether ``prompt`` is a string or a sequence of strings."""
    if isinstance(prompt, str):
        return True
    if isinstance(prompt, (list, tuple)):
        return all(isinstance(item, str) for item in prompt)
    return False


@dataclass
class CompletionRequest:
    """A request to the completion endpoint.

    ``logit_bias`` keys are token ids as strings, not words.
    """

    model: str = ""
    prompt: Any = None
    best_of: int = 0
    echo: bool = False
    frequency_penalty: float = 0.0
    logit_bias: Dict[str, int] = field(default_factory=dict)
    store: bool = False
    metadata: Dict[str, str] = field(default_factory=dict)
    logprobs: int = 0
    max_tokens: int = 0
    n: int = 0
    presence_penalty: float = 0.0
    seed: Optional[int] = None
    stop: List[str] = field(default_factory=list)
    stream: bool = False
    suffix: str = ""
    temperature: float = 0.0
    top_p: float = 0.0
    user: str = ""
    stream_options: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        prompt = list(self.prompt) if isinstance(self.prompt, tuple) else self.prompt
        stream_options = self.stream_options
        if stream_options is not None and callable(getattr(stream_options, "to_dict", None)):
            stream_options = stream_options.to_dict()
        entries = [
            ("prompt", prompt, self.prompt is not None),
            ("best_of", self.best_of, bool(self.best_of)),
            ("echo", self.echo, self.echo),
            ("frequency_penalty", self.frequency_penalty, bool(self.frequency_penalty)),
            ("logit_bias", dict(self.logit_bias), bool(self.logit_bias)),
            ("store", self.store, self.store),
            ("metadata", dict(self.metadata), bool(self.metadata)),
            ("logprobs", self.logprobs, bool(self.logprobs)),
            ("max_tokens", self.max_tokens, bool(self.max_tokens)),
            ("n", self.n, bool(self.n)),
            ("presence_penalty", self.presence_penalty, bool(self.presence_penalty)),
            ("seed", self.seed, self.seed is not None),
            ("stop", list(self.stop), bool(self.stop)),
            ("stream", self.stream, self.stream),
            ("suffix", self.suffix, bool(self.suffix)),
            ("temperature", self.temperature, bool(self.temperature)),
            ("top_p", self.top_p, bool(self.top_p)),
            ("user", self.user, bool(self.user)),
            ("stream_options", stream_options, self.stream_options is not None),
        ]
        body: Dict[str, Any] = {"model": self.model}
        body.update((key, value) for key, value, keep in entries if keep)
        return body


def validate_completion_request(request: CompletionRequest) -> None:
    """Raise the error that stops ``request`` from being sent, if any."""
    if request.stream:
        raise CompletionStreamNotSupportedError()
    if not endpoint_supports_model(COMPLETIONS_SUFFIX, request.model):
        raise UnsupportedModelError(request.model, COMPLETIONS_SUFFIX)
    if not is_valid_prompt(request.prompt):
        raise PromptTypeNotSupportedError()


def _list(data: Mapping, key: str) -> list:
    return list(_get(data, key, list, []))


@dataclass
class LogprobResult:
    """Log probabilities of the tokens of one choice."""

    tokens: List[str] = field(default_factory=list)
    token_logprobs: List[float] = field(default_factory=list)
    top_logprobs: List[Dict[str, float]] = field(default_factory=list)
    text_offset: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "LogprobResult":
        doc = _as_mapping(data, "logprobs")
        return cls(
            tokens=["" if v is None else _check(v, str, "tokens") for v in _list(doc, "tokens")],
            token_logprobs=[
                0.0 if v is None else _check(v, float, "token_logprobs")
                for v in _list(doc, "token_logprobs")
            ],
            top_logprobs=[
                {
                    token: _check(value, float, "top_logprobs")
                    for token, value in _as_mapping(item, "top_logprobs").items()
                }
                for item in _list(doc, "top_logprobs")
            ],
            text_offset=[
                0 if v is None else _check(v, int, "text_offset")
                for v in _list(doc, "text_offset")
            ],
        )


@dataclass
class CompletionChoice:
    """One of the possible completions."""

    text: str = ""
    index: int = 0
    finish_reason: str = ""
    logprobs: LogprobResult = field(default_factory=LogprobResult)

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionChoice":
        doc = _as_mapping(data, "completion choice")
        return cls(
            text=_get(doc, "text", str, ""),
            index=_get(doc, "index", int, 0),
            finish_reason=_get(doc, "finish_reason", str, ""),
            logprobs=LogprobResult.from_dict(doc.get("logprobs")),
        )


@dataclass
class CompletionResponse:
    """The answer of the completion endpoint."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: List[CompletionChoice] = field(default_factory=list)
    usage: Optional[Usage] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionResponse":
        doc = _as_mapping(data, "completion response")
        usage = doc.get("usage")
        return cls(
            id=_get(doc, "id", str, ""),
            object=_get(doc, "object", str, ""),
            created=_get(doc, "created", int, 0),
            model=_get(doc, "model", str, ""),
            choices=[CompletionChoice.from_dict(item) for item in _list(doc, "choices")],
            usage=None if usage is None else Usage.from_dict(usage),
        )


__all__ = [
    "CompletionError",
    "CompletionStreamNotSupportedError",
    "UnsupportedModelError",
    "PromptTypeNotSupportedError",
    "CompletionRequest",
    "LogprobResult",
    "CompletionChoice",
    "CompletionResponse",
    "endpoint_supports_model",
    "is_valid_prompt",
    "validate_completion_request",
    "MarshalError",
]