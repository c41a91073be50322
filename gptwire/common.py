"""Token usage records shared by the API responses."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .marshal import MarshalError, unmarshal

_MISSING = object()


def _as_mapping(data: Any, what: str) -> Mapping:
    """Return ``data`` as a mapping; JSON null counts as an empty object."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise MarshalError(f"cannot decode {what} from {type(data).__name__}")
    return data


def _check(value: Any, kind: type, key: str) -> Any:
    """Check that a decoded JSON value has the expected kind."""
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            value = float(value)
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise MarshalError(
            f"cannot decode {key!r}: expected {kind.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _get(data: Mapping, key: str, kind: type, default: Any) -> Any:
    """Read ``key`` from ``data``; absent or null values give ``default``."""
    value = data.get(key)
    if value is None:
        return default
    return _check(value, kind, key)


@dataclass
class PromptTokensDetails:
    """Breakdown of tokens used in the prompt."""

    audio_tokens: int = 0
    cached_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "PromptTokensDetails":
        doc = _as_mapping(data, "prompt tokens details")
        return cls(
            audio_tokens=_get(doc, "audio_tokens", int, 0),
            cached_tokens=_get(doc, "cached_tokens", int, 0),
        )


@dataclass
class CompletionTokensDetails:
    """Breakdown of tokens used in a completion."""

    audio_tokens: int = 0
    reasoning_tokens: int = 0
    accepted_prediction_tokens: int = 0
    rejected_prediction_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionTokensDetails":
        doc = _as_mapping(data, "completion tokens details")
        return cls(
            audio_tokens=_get(doc, "audio_tokens", int, 0),
            reasoning_tokens=_get(doc, "reasoning_tokens", int, 0),
            accepted_prediction_tokens=_get(doc, "accepted_prediction_tokens", int, 0),
            rejected_prediction_tokens=_get(doc, "rejected_prediction_tokens", int, 0),
        )


_USAGE_KEYS = frozenset(
    {
        "prompt_tokens",
        "completion_tokens",
        "total_tokens",
        "prompt_tokens_details",
        "completion_tokens_details",
    }
)


@dataclass
class Usage:
    """Total token usage of one request.

    Members of the JSON object that have no field of their own are kept,
    decoded, in ``extra_fields``; they are not written back by ``to_dict``.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Usage":
        doc = _as_mapping(data, "usage")
        prompt_details = doc.get("prompt_tokens_details")
        completion_details = doc.get("completion_tokens_details")
        return cls(
            prompt_tokens=_get(doc, "prompt_tokens", int, 0),
            completion_tokens=_get(doc, "completion_tokens", int, 0),
            total_tokens=_get(doc, "total_tokens", int, 0),
            prompt_tokens_details=(
                None
                if prompt_details is None
                else PromptTokensDetails.from_dict(prompt_details)
            ),
            completion_tokens_details=(
                None
                if completion_details is None
                else CompletionTokensDetails.from_dict(completion_details)
            ),
            extra_fields={k: v for k, v in doc.items() if k not in _USAGE_KEYS},
        )

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "Usage":
        """Decode a usage object from JSON text."""
        return cls.from_dict(unmarshal(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "prompt_tokens_details": (
                None
                if self.prompt_tokens_details is None
                else dataclasses.asdict(self.prompt_tokens_details)
            ),
            "completion_tokens_details": (
                None
                if self.completion_tokens_details is None
                else dataclasses.asdict(self.completion_tokens_details)
            ),
        }