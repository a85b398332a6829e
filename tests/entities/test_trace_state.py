import pytest

from mlflow_client.entities import TraceState
from mlflow_client.exceptions import MlflowException


def test_from_string():
    assert TraceState.from_string("IN_PROGRESS") == TraceState.IN_PROGRESS
    with pytest.raises(MlflowException, match="Could not get trace state"):
        TraceState.from_string("DONE")
