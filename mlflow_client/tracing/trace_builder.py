from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from mlflow_client.entities.span import JsonValue, Span, SpanType
from mlflow_client.entities.span_status import SpanStatusCode
from mlflow_client.entities.trace import Trace
from mlflow_client.entities.trace_data import TraceData
from mlflow_client.entities.trace_info import TraceInfo
from mlflow_client.entities.trace_location import TraceLocation
from mlflow_client.entities.trace_state import TraceState
from mlflow_client.exceptions import MlflowException
from mlflow_client.tracing.span_builder import SpanBuilder
from mlflow_client.tracing.utils import generate_trace_id
from mlflow_client.utils.mlflow_tags import MLFLOW_TRACE_NAME
from mlflow_client.utils.time import get_current_time_nanos, nanos_to_millis

_logger = logging.getLogger(__name__)


class TraceBuilder:
    """
    Builds a trace out of spans.

    The trace starts when the builder is created. Spans are started with :py:meth:`start_span`
    and attached to the trace, in the order they end, by
    :py:meth:`SpanBuilder.end() <mlflow_client.tracing.SpanBuilder.end>`. :py:meth:`build`
    produces the immutable :py:class:`Trace <mlflow_client.entities.Trace>`; it may be called
    at any time, including before any span ended.

    A trace may hold several root spans. :py:attr:`root_span_id` is the ID of the root span
    that ended last.

    Args:
        experiment_id: ID of the experiment the trace is logged to.
        name: Name of the trace, recorded as the ``mlflow.traceName`` tag.
        clock: Zero-argument callable returning the current wall-clock time in nanoseconds.
            Defaults to :py:func:`time.time_ns`.
    """

    def __init__(
        self,
        experiment_id: str,
        name: str,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._clock = clock or get_current_time_nanos
        self._trace_id = generate_trace_id()
        self._experiment_id = str(experiment_id)
        self._name = name
        self._spans: list[Span] = []
        self._tags: dict[str, str] = {MLFLOW_TRACE_NAME: name}
        self._root_span_id: Optional[str] = None
        self._start_time_ns = self._clock()

    @property
    def clock(self) -> Callable[[], int]:
        return self._clock

    @property
    def trace_id(self) -> str:
        return self._trace_id

    @property
    def experiment_id(self) -> str:
        return self._experiment_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def root_span_id(self) -> Optional[str]:
        return self._root_span_id

    @property
    def spans(self) -> list[Span]:
        return list(self._spans)

    @property
    def start_time_ns(self) -> int:
        return self._start_time_ns

    def with_tag(self, key: str, value: str) -> TraceBuilder:
        self._tags[key] = str(value)
        return self

    def start_span(
        self,
        name: str,
        span_type: str = SpanType.UNKNOWN,
        inputs: JsonValue = None,
        attributes: Optional[dict[str, Any]] = None,
    ) -> SpanBuilder:
        """
        Start a new span of this trace. Link it to its parent with
        :py:meth:`SpanBuilder.with_parent() <mlflow_client.tracing.SpanBuilder.with_parent>`;
        a span without a parent is a root span.
        """
        return SpanBuilder(self, name, span_type, inputs, attributes)

    def add_span(self, span: Span) -> None:
        """
        Attach a finished span to the trace. The span must belong to this trace and its ID
        must not be taken by another span of the trace.
        """
        if span.trace_id != self._trace_id:
            raise MlflowException.invalid_parameter_value(
                f"Span {span.span_id} belongs to trace {span.trace_id}, not {self._trace_id}."
            )
        if any(existing.span_id == span.span_id for existing in self._spans):
            raise MlflowException.invalid_parameter_value(
                f"Trace {self._trace_id} already contains a span with ID {span.span_id}."
            )
        if span.parent_id is None:
            self._root_span_id = span.span_id
        self._spans.append(span)

    def build(self) -> Trace:
        """
        Finalize the trace. The trace state is ``ERROR`` if any span failed and ``OK``
        otherwise, and the execution duration covers the lifetime of the builder.
        """
        end_time_ns = self._clock()
        state = TraceState.OK
        for span in self._spans:
            if span.status == SpanStatusCode.ERROR:
                state = TraceState.ERROR
                break

        info = TraceInfo(
            trace_id=self._trace_id,
            trace_location=TraceLocation.from_experiment_id(self._experiment_id),
            request_time=nanos_to_millis(end_time_ns),
            state=state,
            execution_duration=nanos_to_millis(end_time_ns - self._start_time_ns),
            tags=dict(self._tags),
        )
        _logger.debug(
            f"Built trace {self._trace_id} with {len(self._spans)} spans and state {state.value}"
        )
        return Trace(info=info, data=TraceData(spans=list(self._spans)))

    def __repr__(self):
        return f"TraceBuilder(name={self._name!r}, trace_id={self._trace_id!r})"
