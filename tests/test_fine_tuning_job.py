import json

import pytest

from gptwire.fine_tuning_job import (
    FineTuningJob,
    FineTuningJobEvent,
    FineTuningJobEventList,
    FineTuningJobRequest,
    Hyperparameters,
    fine_tuning_job_events_path,
)
from gptwire.marshal import MarshalError, marshal

JOB_ID = "fine-tuning-job-id"

SAMPLE_JOB = {
    "object": "fine_tuning.job",
    "id": JOB_ID,
    "model": "davinci-002",
    "created_at": 1692661014,
    "finished_at": 1692661190,
    "fine_tuned_model": "ft:davinci-002:my-org:custom_suffix:7q8mpxmy",
    "organization_id": "org-123",
    "result_files": ["file-abc123"],
    "status": "succeeded",
    "training_file": "file-abc123",
    "hyperparameters": {
        "n_epochs": "auto",
        "learning_rate_multiplier": "auto",
        "batch_size": "auto",
    },
    "trained_tokens": 5768,
}


def test_job_from_dict():
    job = FineTuningJob.from_dict(SAMPLE_JOB)
    assert job.object == "fine_tuning.job"
    assert job.id == JOB_ID
    assert job.model == "davinci-002"
    assert job.created_at == 1692661014
    assert job.finished_at == 1692661190
    assert job.fine_tuned_model == "ft:davinci-002:my-org:custom_suffix:7q8mpxmy"
    assert job.organization_id == "org-123"
    assert job.result_files == ["file-abc123"]
    assert job.status == "succeeded"
    assert job.validation_file == ""
    assert job.training_file == "file-abc123"
    assert job.hyperparameters == Hyperparameters("auto", "auto", "auto")
    assert job.trained_tokens == 5768


def test_job_empty_is_default():
    assert FineTuningJob.from_dict({}) == FineTuningJob()


def test_job_wrong_type():
    with pytest.raises(MarshalError):
        FineTuningJob.from_dict({"trained_tokens": "many"})


def test_hyperparameters_round_trip():
    params = Hyperparameters(epochs="auto", learning_rate_multiplier="auto", batch_size="auto")
    assert params.to_dict() == SAMPLE_JOB["hyperparameters"]
    assert Hyperparameters.from_dict(params.to_dict()) == params


def test_hyperparameters_omit_unset():
    assert Hyperparameters().to_dict() == {}
    assert Hyperparameters(epochs=3).to_dict() == {"n_epochs": 3}


def test_request_to_dict():
    assert FineTuningJobRequest().to_dict() == {"training_file": ""}
    req = FineTuningJobRequest(
        training_file="file-abc123",
        model="davinci-002",
        hyperparameters=Hyperparameters(epochs=3),
    )
    assert req.to_dict() == {
        "training_file": "file-abc123",
        "model": "davinci-002",
        "hyperparameters": {"n_epochs": 3},
    }
    assert json.loads(marshal(req)) == req.to_dict()


def test_event_and_event_list():
    event = FineTuningJobEvent.from_dict(
        {"id": "ev-1", "level": "info", "data": {"step": 1}, "type": "metrics"}
    )
    assert event.id == "ev-1"
    assert event.data == {"step": 1}
    assert event.type == "metrics"
    events = FineTuningJobEventList.from_dict(
        {"object": "list", "data": [{"message": "done"}], "has_more": True}
    )
    assert events.has_more is True
    assert [e.message for e in events.data] == ["done"]


@pytest.mark.parametrize(
    "after, limit, expected",
    [
        (None, None, "/fine_tuning/jobs/fine-tuning-job-id/events"),
        ("last-event-id", None, "/fine_tuning/jobs/fine-tuning-job-id/events?after=last-event-id"),
        (None, 10, "/fine_tuning/jobs/fine-tuning-job-id/events?limit=10"),
        (
            "last-event-id",
            10,
            "/fine_tuning/jobs/fine-tuning-job-id/events?after=last-event-id&limit=10",
        ),
    ],
)
def test_events_path(after, limit, expected):
    assert fine_tuning_job_events_path(JOB_ID, after, limit) == expected