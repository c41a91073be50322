import json

import pytest

from gptwire.fine_tunes import (
    FineTune,
    FineTuneDeleteResponse,
    FineTuneEvent,
    FineTuneEventList,
    FineTuneHyperParams,
    FineTuneList,
    FineTuneRequest,
)
from gptwire.marshal import MarshalError, marshal


def test_request_empty_keeps_only_training_file():
    assert FineTuneRequest().to_dict() == {"training_file": ""}


def test_request_carries_set_fields():
    req = FineTuneRequest(
        training_file="file-abc123",
        model="davinci",
        epochs=4,
        classification_betas=[0.5, 1.0],
        compute_classification_metrics=True,
    )
    body = req.to_dict()
    assert body["training_file"] == "file-abc123"
    assert body["model"] == "davinci"
    assert body["n_epochs"] == 4
    assert body["classification_betas"] == [0.5, 1.0]
    assert body["compute_classification_metrics"] is True
    assert "suffix" not in body
    assert "batch_size" not in body


def test_request_marshals_through_to_dict():
    req = FineTuneRequest(training_file="file-abc123", suffix="custom")
    assert json.loads(marshal(req)) == req.to_dict()


def test_event_from_dict():
    event = FineTuneEvent.from_dict(
        {"object": "fine-tune-event", "created_at": 1692661014, "level": "info", "message": "started"}
    )
    assert event == FineTuneEvent("fine-tune-event", 1692661014, "info", "started")


def test_hyperparams_from_dict():
    params = FineTuneHyperParams.from_dict(
        {"batch_size": 8, "learning_rate_multiplier": 1, "n_epochs": 4, "prompt_loss_weight": 0.01}
    )
    assert params.batch_size == 8
    assert params.learning_rate_multiplier == 1.0
    assert params.epochs == 4
    assert params.prompt_loss_weight == 0.01


def test_fine_tune_from_dict_nested():
    tune = FineTune.from_dict(
        {
            "id": "fine-tune-id",
            "model": "curie",
            "events": [{"message": "queued"}],
            "hyperparams": {"n_epochs": 2},
            "result_files": [{"id": "file-abc123", "bytes": 10}],
            "training_files": None,
        }
    )
    assert tune.id == "fine-tune-id"
    assert tune.model == "curie"
    assert [e.message for e in tune.events] == ["queued"]
    assert tune.hyperparams.epochs == 2
    assert [f.id for f in tune.result_files] == ["file-abc123"]
    assert tune.result_files[0].bytes == 10
    assert tune.training_files == []


def test_fine_tune_empty_equals_default():
    assert FineTune.from_dict({}) == FineTune()
    assert FineTune.from_dict(None) == FineTune()


def test_fine_tune_wrong_type_raises():
    with pytest.raises(MarshalError):
        FineTune.from_dict({"id": 5})


def test_lists_from_dict():
    tunes = FineTuneList.from_dict({"object": "list", "data": [{"id": "a"}, {"id": "b"}]})
    assert tunes.object == "list"
    assert [t.id for t in tunes.data] == ["a", "b"]
    events = FineTuneEventList.from_dict({"data": [{"level": "warn"}]})
    assert events.data[0].level == "warn"


def test_delete_response():
    resp = FineTuneDeleteResponse.from_dict({"id": "ft-1", "object": "model", "deleted": True})
    assert resp == FineTuneDeleteResponse("ft-1", "model", True)
    assert FineTuneDeleteResponse.from_dict({}).deleted is False
    with pytest.raises(MarshalError):
        FineTuneDeleteResponse.from_dict({"deleted": "yes"})