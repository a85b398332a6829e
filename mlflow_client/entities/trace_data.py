from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from mlflow_client.entities.span import Span


@dataclass(frozen=True)
class TraceData:
    """The spans of a trace. Immutable once built.

    Args:
        spans: Spans of the trace, in the order they ended. Stored as a tuple.
    """

    spans: tuple[Span, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "spans", tuple(self.spans))

    @classmethod
    def from_dict(cls, d):
        if not isinstance(d, dict):
            raise TypeError(f"TraceData.from_dict() expects a dictionary. Got: {type(d).__name__}")
        return cls(spans=[Span.from_dict(span) for span in d.get("spans", [])])

    def to_dict(self) -> dict[str, Any]:
        return {"spans": [span.to_dict() for span in self.spans]}

    @property
    def root_spans(self) -> list[Span]:
        return [span for span in self.spans if span.is_root]

    def get_span(self, span_id: str) -> Optional[Span]:
        for span in self.spans:
            if span.span_id == span_id:
                return span

    def get_children(self, span_id: str) -> list[Span]:
        return [span for span in self.spans if span.parent_id == span_id]

    def _get_root_span(self) -> Optional[Span]:
        for span in self.spans:
            if span.parent_id is None:
                return span

    @property
    def request(self) -> Any:
        if span := self._get_root_span():
            return span.inputs

    @property
    def response(self) -> Any:
        if span := self._get_root_span():
            return span.outputs
