from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mlflow_client.entities.span_event import SpanEvent
from mlflow_client.entities.span_status import SpanStatusCode
from mlflow_client.utils.validation import _validate_required_fields

# Span inputs and outputs hold arbitrarily nested JSON values.
JsonValue = Union[dict[str, "JsonValue"], list["JsonValue"], str, int, float, bool, None]


class SpanType:
    """
    Predefined set of span types.
    """

    LLM = "LLM"
    CHAIN = "CHAIN"
    AGENT = "AGENT"
    TOOL = "TOOL"
    CHAT_MODEL = "CHAT_MODEL"
    RETRIEVER = "RETRIEVER"
    PARSER = "PARSER"
    EMBEDDING = "EMBEDDING"
    RERANKER = "RERANKER"
    MEMORY = "MEMORY"
    WORKFLOW = "WORKFLOW"
    TASK = "TASK"
    GUARDRAIL = "GUARDRAIL"
    EVALUATOR = "EVALUATOR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def all_types(cls) -> list[str]:
        return [value for key, value in vars(cls).items() if key.isupper()]


@dataclass(frozen=True)
class Span:
    """
    A finished span of a trace. Spans are created by
    :py:class:`SpanBuilder <mlflow_client.tracing.SpanBuilder>` and never change afterwards.

    Args:
        trace_id: ID of the trace the span belongs to, 32 hex characters.
        span_id: ID of the span, 16 hex characters.
        name: Name of the span.
        start_time_ns: Start time of the span, in nanoseconds since the epoch.
        end_time_ns: End time of the span, in nanoseconds since the epoch. None if the span
            did not end.
        parent_id: ID of the parent span. None for a root span.
        status: Status code of the span.
        span_type: One of the :py:class:`SpanType` values, or any custom string.
        inputs: JSON value passed to the operation the span records.
        outputs: JSON value produced by the operation the span records.
        attributes: Free-form attributes of the span.
        events: Events recorded while the span was open, in the order they were added.
    """

    trace_id: str
    span_id: str
    name: str
    start_time_ns: int
    end_time_ns: Optional[int] = None
    parent_id: Optional[str] = None
    status: SpanStatusCode = SpanStatusCode.UNSET
    span_type: str = SpanType.UNKNOWN
    inputs: JsonValue = None
    outputs: JsonValue = None
    attributes: dict[str, Any] = field(default_factory=dict)
    events: tuple[SpanEvent, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def duration_ns(self) -> Optional[int]:
        if self.end_time_ns is None:
            return None
        return self.end_time_ns - self.start_time_ns

    def get_attribute(self, key: str) -> Any:
        return self.attributes.get(key)

    def to_dict(self) -> dict[str, Any]:
        span_dict = {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "name": self.name,
            "start_time_ns": self.start_time_ns,
            "status": self.status.value,
            "span_type": self.span_type,
            "attributes": dict(self.attributes),
            "events": [event.to_dict() for event in self.events],
        }
        if self.end_time_ns is not None:
            span_dict["end_time_ns"] = self.end_time_ns
        if self.parent_id is not None:
            span_dict["parent_id"] = self.parent_id
        if self.inputs is not None:
            span_dict["inputs"] = self.inputs
        if self.outputs is not None:
            span_dict["outputs"] = self.outputs
        return span_dict

    @classmethod
    def from_dict(cls, span_dict: dict[str, Any]) -> Span:
        _validate_required_fields(span_dict, ["span_id", "name"], "span")
        end_time_ns = span_dict.get("end_time_ns")
        return cls(
            # Older servers name the trace ID `request_id`
            trace_id=span_dict.get("trace_id") or span_dict.get("request_id") or "",
            span_id=span_dict["span_id"],
            name=span_dict["name"],
            start_time_ns=int(span_dict.get("start_time_ns") or 0),
            end_time_ns=int(end_time_ns) if end_time_ns is not None else None,
            parent_id=span_dict.get("parent_id") or None,
            status=SpanStatusCode.from_string(span_dict.get("status") or SpanStatusCode.UNSET),
            span_type=span_dict.get("span_type") or SpanType.UNKNOWN,
            inputs=span_dict.get("inputs"),
            outputs=span_dict.get("outputs"),
            attributes=span_dict.get("attributes") or {},
            events=tuple(SpanEvent.from_dict(event) for event in span_dict.get("events") or []),
        )
