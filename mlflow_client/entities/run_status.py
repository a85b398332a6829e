from enum import Enum

from mlflow_client.exceptions import INVALID_PARAMETER_VALUE, MlflowException


class RunStatus(str, Enum):
    """Enum for status of an :py:class:`mlflow_client.entities.Run`."""

    RUNNING = "RUNNING"
    SCHEDULED = "SCHEDULED"
    FINISHED = "FINISHED"
    FAILED = "FAILED"
    KILLED = "KILLED"

    @staticmethod
    def from_string(status_str):
        try:
            return RunStatus(status_str)
        except ValueError:
            raise MlflowException(
                f"Could not get run status corresponding to string {status_str}. Valid run "
                f"status strings: {[status.value for status in RunStatus]}",
                error_code=INVALID_PARAMETER_VALUE,
            )

    @staticmethod
    def is_terminated(status):
        return RunStatus.from_string(status) in _TERMINATED_STATUSES

    @staticmethod
    def all_status():
        return list(RunStatus)


_TERMINATED_STATUSES = {RunStatus.FINISHED, RunStatus.FAILED, RunStatus.KILLED}
