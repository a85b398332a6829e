import pytest

from mlflow_client.entities import Experiment, ExperimentTag, LifecycleStage
from mlflow_client.exceptions import MlflowException

from tests.helper_functions import experiment_json


def test_experiment_from_dictionary():
    experiment = Experiment.from_dictionary(
        {
            **experiment_json(experiment_id=12, name="exp-A"),
            "tags": [{"key": "team", "value": "ml"}],
            "creation_time": 1,
            "last_update_time": 2,
        }
    )
    assert experiment.experiment_id == "12"
    assert experiment.name == "exp-A"
    assert experiment.lifecycle_stage == LifecycleStage.ACTIVE
    assert experiment.tags.get("team") == ExperimentTag("team", "ml")
    assert experiment.creation_time == 1
    assert experiment.last_update_time == 2


def test_experiment_to_dictionary():
    experiment = Experiment("1", "exp", "s3://bucket", "active", [ExperimentTag("a", "b")])
    assert experiment.to_dictionary() == {
        "experiment_id": "1",
        "name": "exp",
        "artifact_location": "s3://bucket",
        "lifecycle_stage": "active",
        "tags": [{"key": "a", "value": "b"}],
    }


@pytest.mark.parametrize("missing", ["experiment_id", "name"])
def test_experiment_requires_id_and_name(missing):
    experiment_dict = experiment_json()
    del experiment_dict[missing]
    with pytest.raises(MlflowException, match=missing):
        Experiment.from_dictionary(experiment_dict)
