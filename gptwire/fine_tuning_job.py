"""Fine-tuning jobs: requests, records and event listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from .common import _as_mapping, _check, _get
from .fine_tunes import FineTuneEvent

FINE_TUNING_JOBS_SUFFIX = "/fine_tuning/jobs"


@dataclass
class Hyperparameters:
    """Training settings; each may be a number or ``"auto"``."""

    epochs: Any = None
    learning_rate_multiplier: Any = None
    batch_size: Any = None

    def to_dict(self) -> Dict[str, Any]:
        entries = [
            ("n_epochs", self.epochs),
            ("learning_rate_multiplier", self.learning_rate_multiplier),
            ("batch_size", self.batch_size),
        ]
        return {key: value for key, value in entries if value is not None}

    @classmethod
    def from_dict(cls, data: Any) -> "Hyperparameters":
        doc = _as_mapping(data, "hyperparameters")
        return cls(
            epochs=doc.get("n_epochs"),
            learning_rate_multiplier=doc.get("learning_rate_multiplier"),
            batch_size=doc.get("batch_size"),
        )


@dataclass
class FineTuningJob:
    """A fine-tuning job and its current state."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    finished_at: int = 0
    model: str = ""
    fine_tuned_model: str = ""
    organization_id: str = ""
    status: str = ""
    hyperparameters: Hyperparameters = field(default_factory=Hyperparameters)
    training_file: str = ""
    validation_file: str = ""
    result_files: List[str] = field(default_factory=list)
    trained_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuningJob":
        doc = _as_mapping(data, "fine-tuning job")
        return cls(
            id=_get(doc, "id", str, ""),
            object=_get(doc, "object", str, ""),
            created_at=_get(doc, "created_at", int, 0),
            finished_at=_get(doc, "finished_at", int, 0),
            model=_get(doc, "model", str, ""),
            fine_tuned_model=_get(doc, "fine_tuned_model", str, ""),
            organization_id=_get(doc, "organization_id", str, ""),
            status=_get(doc, "status", str, ""),
            hyperparameters=Hyperparameters.from_dict(doc.get("hyperparameters")),
            training_file=_get(doc, "training_file", str, ""),
            validation_file=_get(doc, "validation_file", str, ""),
            result_files=[
                "" if item is None else _check(item, str, "result_files")
                for item in _get(doc, "result_files", list, [])
            ],
            trained_tokens=_get(doc, "trained_tokens", int, 0),
        )


@dataclass
class FineTuningJobRequest:
    """A request to create a fine-tuning job."""

    training_file: str = ""
    validation_file: str = ""
    model: str = ""
    hyperparameters: Optional[Hyperparameters] = None
    suffix: str = ""

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"training_file": self.training_file}
        if self.validation_file:
            body["validation_file"] = self.validation_file
        if self.model:
            body["model"] = self.model
        if self.hyperparameters is not None:
            body["hyperparameters"] = self.hyperparameters.to_dict()
        if self.suffix:
            body["suffix"] = self.suffix
        return body


@dataclass
class FineTuningJobEvent:
    """One event in the life of a fine-tuning job."""

    object: str = ""
    id: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""
    data: Any = None
    type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuningJobEvent":
        doc = _as_mapping(data, "fine-tuning job event")
        return cls(
            object=_get(doc, "object", str, ""),
            id=_get(doc, "id", str, ""),
            created_at=_get(doc, "created_at", int, 0),
            level=_get(doc, "level", str, ""),
            message=_get(doc, "message", str, ""),
            data=doc.get("data"),
            type=_get(doc, "type", str, ""),
        )


@dataclass
class FineTuningJobEventList:
    """A page of events of one fine-tuning job."""

    object: str = ""
    data: List[FineTuneEvent] = field(default_factory=list)
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuningJobEventList":
        doc = _as_mapping(data, "fine-tuning job event list")
        return cls(
            object=_get(doc, "object", str, ""),
            data=[FineTuneEvent.from_dict(item) for item in _get(doc, "data", list, [])],
            has_more=_get(doc, "has_more", bool, False),
        )


def fine_tuning_job_events_path(
    job_id: str, after: Optional[str] = None, limit: Optional[int] = None
) -> str:
    """Return the URL suffix listing a job's events, with paging parameters."""
    params = []
    if after is not None:
        params.append(("after", after))
    if limit is not None:
        params.append(("limit", str(int(limit))))
    path = f"{FINE_TUNING_JOBS_SUFFIX}/{job_id}/events"
    if params:
        path += "?" + urlencode(sorted(params))
    return path