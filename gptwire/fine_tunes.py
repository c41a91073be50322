"""Records of the deprecated fine-tunes endpoint.

Prefer the fine-tuning jobs API in :mod:`gptwire.fine_tuning_job`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .common import _as_mapping, _check, _get
from .files import File

FINE_TUNES_SUFFIX = "/fine-tunes"


def _files(doc: Any, key: str) -> List[File]:
    return [File.from_dict(item) for item in _get(doc, key, list, [])]


@dataclass
class FineTuneRequest:
    """A request to start a fine-tune."""

    training_file: str = ""
    validation_file: str = ""
    model: str = ""
    epochs: int = 0
    batch_size: int = 0
    learning_rate_multiplier: float = 0.0
    prompt_loss_rate: float = 0.0
    compute_classification_metrics: bool = False
    classification_classes: int = 0
    classification_positive_class: str = ""
    classification_betas: List[float] = field(default_factory=list)
    suffix: str = ""

    def to_dict(self) -> Dict[str, Any]:
        entries = [
            ("validation_file", self.validation_file),
            ("model", self.model),
            ("n_epochs", self.epochs),
            ("batch_size", self.batch_size),
            ("learning_rate_multiplier", self.learning_rate_multiplier),
            ("prompt_loss_rate", self.prompt_loss_rate),
            ("compute_classification_metrics", self.compute_classification_metrics),
            ("classification_n_classes", self.classification_classes),
            ("classification_positive_class", self.classification_positive_class),
            ("classification_betas", list(self.classification_betas)),
            ("suffix", self.suffix),
        ]
        body: Dict[str, Any] = {"training_file": self.training_file}
        body.update((key, value) for key, value in entries if value)
        return body


@dataclass
class FineTuneEvent:
    """One event in the life of a fine-tune."""

    object: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuneEvent":
        doc = _as_mapping(data, "fine-tune event")
        return cls(
            object=_get(doc, "object", str, ""),
            created_at=_get(doc, "created_at", int, 0),
            level=_get(doc, "level", str, ""),
            message=_get(doc, "message", str, ""),
        )


@dataclass
class FineTuneHyperParams:
    """The hyperparameters a fine-tune ran with."""

    batch_size: int = 0
    learning_rate_multiplier: float = 0.0
    epochs: int = 0
    prompt_loss_weight: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuneHyperParams":
        doc = _as_mapping(data, "fine-tune hyperparameters")
        return cls(
            batch_size=_get(doc, "batch_size", int, 0),
            learning_rate_multiplier=_get(doc, "learning_rate_multiplier", float, 0.0),
            epochs=_get(doc, "n_epochs", int, 0),
            prompt_loss_weight=_get(doc, "prompt_loss_weight", float, 0.0),
        )


@dataclass
class FineTune:
    """A fine-tune and its current state."""

    id: str = ""
    object: str = ""
    model: str = ""
    created_at: int = 0
    events: List[FineTuneEvent] = field(default_factory=list)
    fine_tuned_model: str = ""
    hyperparams: FineTuneHyperParams = field(default_factory=FineTuneHyperParams)
    organization_id: str = ""
    result_files: List[File] = field(default_factory=list)
    status: str = ""
    validation_files: List[File] = field(default_factory=list)
    training_files: List[File] = field(default_factory=list)
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "FineTune":
        doc = _as_mapping(data, "fine-tune")
        return cls(
            id=_get(doc, "id", str, ""),
            object=_get(doc, "object", str, ""),
            model=_get(doc, "model", str, ""),
            created_at=_get(doc, "created_at", int, 0),
            events=[
                FineTuneEvent.from_dict(item) for item in _get(doc, "events", list, [])
            ],
            fine_tuned_model=_get(doc, "fine_tuned_model", str, ""),
            hyperparams=FineTuneHyperParams.from_dict(doc.get("hyperparams")),
            organization_id=_get(doc, "organization_id", str, ""),
            result_files=_files(doc, "result_files"),
            status=_get(doc, "status", str, ""),
            validation_files=_files(doc, "validation_files"),
            training_files=_files(doc, "training_files"),
            updated_at=_get(doc, "updated_at", int, 0),
        )


@dataclass
class FineTuneList:
    """A page of fine-tunes."""

    object: str = ""
    data: List[FineTune] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuneList":
        doc = _as_mapping(data, "fine-tune list")
        return cls(
            object=_get(doc, "object", str, ""),
            data=[FineTune.from_dict(item) for item in _get(doc, "data", list, [])],
        )


@dataclass
class FineTuneEventList:
    """The events of one fine-tune."""

    object: str = ""
    data: List[FineTuneEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuneEventList":
        doc = _as_mapping(data, "fine-tune event list")
        return cls(
            object=_get(doc, "object", str, ""),
            data=[FineTuneEvent.from_dict(item) for item in _get(doc, "data", list, [])],
        )


@dataclass
class FineTuneDeleteResponse:
    """The answer to deleting a fine-tuned model."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "FineTuneDeleteResponse":
        doc = _as_mapping(data, "fine-tune delete response")
        return cls(
            id=_get(doc, "id", str, ""),
            object=_get(doc, "object", str, ""),
            deleted=_check(doc["deleted"], bool, "deleted")
            if doc.get("deleted") is not None
            else False,
        )