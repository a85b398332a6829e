import pytest

from mlflow_client.entities import RunStatus
from mlflow_client.exceptions import MlflowException


def test_all_status_covered():
    all_statuses = {
        RunStatus.RUNNING,
        RunStatus.SCHEDULED,
        RunStatus.FINISHED,
        RunStatus.FAILED,
        RunStatus.KILLED,
    }
    assert all_statuses == set(RunStatus.all_status())


def test_status_mappings():
    for status in RunStatus.all_status():
        assert RunStatus.from_string(status.value) == status

    with pytest.raises(
        MlflowException, match=r"Could not get run status corresponding to string the IMPO"
    ):
        RunStatus.from_string("the IMPOSSIBLE status string")


def test_is_terminated():
    assert RunStatus.is_terminated(RunStatus.FAILED)
    assert RunStatus.is_terminated(RunStatus.FINISHED)
    assert RunStatus.is_terminated(RunStatus.KILLED)
    assert RunStatus.is_terminated("FINISHED")
    assert not RunStatus.is_terminated(RunStatus.SCHEDULED)
    assert not RunStatus.is_terminated(RunStatus.RUNNING)
