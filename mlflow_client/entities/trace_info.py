from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from mlflow_client.entities.trace_location import TraceLocation
from mlflow_client.entities.trace_state import TraceState
from mlflow_client.utils.validation import _validate_required_fields


@dataclass(frozen=True)
class TraceInfo:
    """Metadata about a trace, such as its ID, location, timestamp, etc.

    Args:
        trace_id: The primary identifier for the trace.
        trace_location: The location where the trace is stored, represented as
            a :py:class:`~mlflow_client.entities.TraceLocation` object.
        request_time: Time the trace was built, in milliseconds since the epoch.
        state: State of the trace, represented as a
            :py:class:`~mlflow_client.entities.TraceState` enum.
        request_preview: Request to the model/agent, equivalent to the input of the root
            span but JSON-encoded and can be truncated.
        response_preview: Response from the model/agent, equivalent to the output of the
            root span but JSON-encoded and can be truncated.
        client_request_id: Client supplied request ID associated with the trace.
        execution_duration: Duration of the trace, in milliseconds.
        trace_metadata: Key-value pairs associated with the trace. They are designed
            for immutable values like run ID associated with the trace.
        tags: Tags associated with the trace. They are designed for mutable values,
            that can be updated after the trace is created via MLflow UI or API.
    """

    trace_id: str
    trace_location: TraceLocation
    request_time: int
    state: TraceState
    request_preview: Optional[str] = None
    response_preview: Optional[str] = None
    client_request_id: Optional[str] = None
    execution_duration: Optional[int] = None
    trace_metadata: dict[str, str] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def experiment_id(self) -> Optional[str]:
        """ID of the experiment the trace is logged to."""
        if self.trace_location.mlflow_experiment is not None:
            return self.trace_location.mlflow_experiment.experiment_id

    def to_dict(self) -> dict[str, Any]:
        res = {
            "trace_id": self.trace_id,
            "trace_location": self.trace_location.to_dict(),
            "request_time": self.request_time,
            "state": self.state.value,
            "trace_metadata": dict(self.trace_metadata),
            "tags": dict(self.tags),
        }
        if self.request_preview is not None:
            res["request_preview"] = self.request_preview
        if self.response_preview is not None:
            res["response_preview"] = self.response_preview
        if self.client_request_id is not None:
            res["client_request_id"] = self.client_request_id
        if self.execution_duration is not None:
            res["execution_duration"] = self.execution_duration
        return res

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TraceInfo:
        # Older servers name the trace ID `request_id` and the state `status`
        trace_id = d.get("trace_id") or d.get("request_id")
        _validate_required_fields({"trace_id": trace_id}, ["trace_id"], "trace info")
        location = d.get("trace_location") or d.get("location") or {}
        if not location and "experiment_id" in d:
            location = {"experiment_id": d["experiment_id"]}
        execution_duration = d.get("execution_duration")
        if execution_duration is None:
            execution_duration = d.get("execution_duration_ms")
        return cls(
            trace_id=trace_id,
            trace_location=TraceLocation.from_dict(location),
            request_time=int(d.get("request_time") or 0),
            state=TraceState.from_string(d.get("state") or d.get("status") or TraceState.OK),
            request_preview=d.get("request_preview"),
            response_preview=d.get("response_preview"),
            client_request_id=d.get("client_request_id"),
            execution_duration=int(execution_duration) if execution_duration is not None else None,
            trace_metadata=d.get("trace_metadata") or {},
            tags=_tags_from_json(d.get("tags")),
        )


def _tags_from_json(tags):
    # Tags come back either as a map or as a list of {"key", "value"} objects
    if isinstance(tags, list):
        return {tag["key"]: tag.get("value", "") for tag in tags}
    return dict(tags or {})
