import pytest

from mlflow_client.entities import MlflowExperimentLocation, TraceLocation, TraceLocationType
from mlflow_client.exceptions import MlflowException


def test_from_experiment_id():
    location = TraceLocation.from_experiment_id("3")
    assert location.type == TraceLocationType.MLFLOW_EXPERIMENT
    assert location.mlflow_experiment == MlflowExperimentLocation("3")
    assert location.to_dict() == {
        "type": "MLFLOW_EXPERIMENT",
        "mlflow_experiment": {"experiment_id": "3"},
    }


@pytest.mark.parametrize(
    "location_dict",
    [
        {"type": "MLFLOW_EXPERIMENT", "mlflow_experiment": {"experiment_id": "3"}},
        {"experiment_id": 3},
    ],
)
def test_from_dict(location_dict):
    assert TraceLocation.from_dict(location_dict) == TraceLocation.from_experiment_id("3")


def test_experiment_location_is_required():
    with pytest.raises(MlflowException, match="`mlflow_experiment` must be set"):
        TraceLocation(type="MLFLOW_EXPERIMENT")
