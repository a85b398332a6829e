from enum import Enum

from mlflow_client.exceptions import INVALID_PARAMETER_VALUE, MlflowException


class TraceState(str, Enum):
    """State of a logged trace, derived from the statuses of its spans."""

    STATE_UNSPECIFIED = "STATE_UNSPECIFIED"
    OK = "OK"
    ERROR = "ERROR"
    IN_PROGRESS = "IN_PROGRESS"

    @staticmethod
    def from_string(state_str):
        try:
            return TraceState(state_str)
        except ValueError:
            raise MlflowException(
                f"Could not get trace state corresponding to string {state_str}. Valid trace "
                f"state strings: {[state.value for state in TraceState]}",
                error_code=INVALID_PARAMETER_VALUE,
            )
