"""Requests and responses of the (deprecated) edits endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .common import Usage, _as_mapping, _get

EDITS_SUFFIX = "/edits"


@dataclass
class EditsRequest:
    """A request to the edits endpoint; prefer chat completions instead."""

    model: Optional[str] = None
    input: str = ""
    instruction: str = ""
    n: int = 0
    temperature: float = 0.0
    top_p: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        entries = [
            ("model", self.model, self.model is not None),
            ("input", self.input, bool(self.input)),
            ("instruction", self.instruction, bool(self.instruction)),
            ("n", self.n, bool(self.n)),
            ("temperature", self.temperature, bool(self.temperature)),
            ("top_p", self.top_p, bool(self.top_p)),
        ]
        return {key: value for key, value, keep in entries if keep}


@dataclass
class EditsChoice:
    """One of the possible edits."""

    text: str = ""
    index: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "EditsChoice":
        doc = _as_mapping(data, "edits choice")
        return cls(text=_get(doc, "text", str, ""), index=_get(doc, "index", int, 0))


@dataclass
class EditsResponse:
    """The answer of the edits endpoint."""

    object: str = ""
    created: int = 0
    usage: Usage = field(default_factory=Usage)
    choices: List[EditsChoice] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EditsResponse":
        doc = _as_mapping(data, "edits response")
        return cls(
            object=_get(doc, "object", str, ""),
            created=_get(doc, "created", int, 0),
            usage=Usage.from_dict(doc.get("usage")),
            choices=[EditsChoice.from_dict(item) for item in _get(doc, "choices", list, [])],
        )