"""Engine descriptions returned by the engines endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .common import _as_mapping, _get

ENGINES_SUFFIX = "/engines"


@dataclass
class Engine:
    """An engine and whether it is ready."""

    id: str = ""
    object: str = ""
    owner: str = ""
    ready: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Engine":
        doc = _as_mapping(data, "engine")
        return cls(
            id=_get(doc, "id", str, ""),
            object=_get(doc, "object", str, ""),
            owner=_get(doc, "owner", str, ""),
            ready=_get(doc, "ready", bool, False),
        )


@dataclass
class EnginesList:
    """The engines currently available."""

    engines: List[Engine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EnginesList":
        doc = _as_mapping(data, "engines list")
        return cls(engines=[Engine.from_dict(item) for item in _get(doc, "data", list, [])])


def engine_path(engine_id: str) -> str:
    """Return the URL suffix that addresses one engine."""
    return f"{ENGINES_SUFFIX}/{engine_id}"