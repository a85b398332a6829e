from __future__ import annotations

from enum import Enum

from mlflow_client.exceptions import INVALID_PARAMETER_VALUE, MlflowException


class SpanStatusCode(str, Enum):
    """Status code of a span. ``UNSET`` until the span ends."""

    UNSET = "UNSET"
    OK = "OK"
    ERROR = "ERROR"

    @staticmethod
    def from_string(status_code: str | SpanStatusCode) -> SpanStatusCode:
        try:
            return SpanStatusCode(status_code)
        except ValueError:
            raise MlflowException(
                f"{status_code} is not a valid SpanStatusCode value. "
                f"Please use one of {[status_code.value for status_code in SpanStatusCode]}",
                error_code=INVALID_PARAMETER_VALUE,
            )
