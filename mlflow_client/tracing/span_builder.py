from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from mlflow_client.entities.span import JsonValue, Span, SpanType
from mlflow_client.entities.span_event import SpanEvent
from mlflow_client.entities.span_status import SpanStatusCode
from mlflow_client.exceptions import INVALID_STATE, MlflowException
from mlflow_client.tracing.utils import generate_span_id

if TYPE_CHECKING:
    from mlflow_client.tracing.trace_builder import TraceBuilder

_logger = logging.getLogger(__name__)


class SpanBuilder:
    """
    Builds one span of a trace. Obtain instances from
    :py:meth:`TraceBuilder.start_span() <mlflow_client.tracing.TraceBuilder.start_span>`.

    The span starts when the builder is created. Mutators return the builder itself so calls
    can be chained; :py:meth:`end` freezes the span, attaches it to the trace and returns the
    owning :py:class:`TraceBuilder`. An ended builder rejects every further call.

    A builder is not thread-safe. Callers sharing one across threads must serialize access.

    .. code-block:: python

        trace = (
            TraceBuilder(experiment_id="1", name="predict")
            .start_span("retrieve", SpanType.RETRIEVER)
            .with_input("query", "what is mlflow?")
            .with_output("documents", ["doc-1", "doc-2"])
            .end()
            .build()
        )
    """

    def __init__(
        self,
        trace_builder: TraceBuilder,
        name: str,
        span_type: str = SpanType.UNKNOWN,
        inputs: JsonValue = None,
        attributes: Optional[dict[str, Any]] = None,
    ):
        self._trace_builder = trace_builder
        self._clock = trace_builder.clock
        self._span_id = generate_span_id()
        self._name = name
        self._span_type = span_type
        self._inputs = dict(inputs) if isinstance(inputs, dict) else inputs
        self._outputs = None
        self._attributes = dict(attributes or {})
        self._events = []
        self._parent_id = None
        self._status = SpanStatusCode.UNSET
        self._start_time_ns = self._clock()
        self._span = None

    @property
    def span_id(self) -> str:
        return self._span_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def start_time_ns(self) -> int:
        return self._start_time_ns

    @property
    def is_ended(self) -> bool:
        return self._span is not None

    @property
    def span(self) -> Optional[Span]:
        """The finished span, or None while the span is open."""
        return self._span

    def with_parent(self, parent_span_id: str) -> SpanBuilder:
        self._check_open()
        self._parent_id = parent_span_id
        return self

    def with_input(self, key: str, value: JsonValue) -> SpanBuilder:
        """Set ``key`` in the span inputs. Non-dict inputs are replaced by a dict."""
        self._check_open()
        if not isinstance(self._inputs, dict):
            self._inputs = {}
        self._inputs[key] = value
        return self

    def with_output(self, key: str, value: JsonValue) -> SpanBuilder:
        """Set ``key`` in the span outputs. Non-dict outputs are replaced by a dict."""
        self._check_open()
        if not isinstance(self._outputs, dict):
            self._outputs = {}
        self._outputs[key] = value
        return self

    def with_attribute(self, key: str, value: Any) -> SpanBuilder:
        self._check_open()
        self._attributes[key] = value
        return self

    def with_event(self, name: str, attributes: Optional[dict[str, Any]] = None) -> SpanBuilder:
        self._check_open()
        self._events.append(SpanEvent(name, self._clock(), dict(attributes or {})))
        return self

    def with_error(self, exception: BaseException) -> SpanBuilder:
        """
        Mark the span as failed and record ``exception`` as an ``exception`` event carrying its
        message, type and stack trace.
        """
        self._check_open()
        self._status = SpanStatusCode.ERROR
        self._events.append(SpanEvent.from_exception(exception, self._clock()))
        return self

    def end(self, status: Union[SpanStatusCode, str, None] = None) -> TraceBuilder:
        """
        End the span and attach it to the trace.

        Args:
            status: Final status of the span. When omitted, the span is ``ERROR`` if
                :py:meth:`with_error` was called and ``OK`` otherwise.

        Returns:
            The :py:class:`TraceBuilder` that started the span.
        """
        self._check_open()
        end_time_ns = self._clock()
        if status is not None:
            self._status = SpanStatusCode.from_string(status)
        elif self._status == SpanStatusCode.UNSET:
            self._status = SpanStatusCode.OK

        self._span = Span(
            trace_id=self._trace_builder.trace_id,
            span_id=self._span_id,
            name=self._name,
            start_time_ns=self._start_time_ns,
            end_time_ns=end_time_ns,
            parent_id=self._parent_id,
            status=self._status,
            span_type=self._span_type,
            inputs=copy.deepcopy(self._inputs),
            outputs=copy.deepcopy(self._outputs),
            attributes=copy.deepcopy(self._attributes),
            events=tuple(self._events),
        )
        self._trace_builder.add_span(self._span)
        _logger.debug(f"Ended span {self._name} ({self._span_id}) with status {self._status}")
        return self._trace_builder

    def _check_open(self):
        if self._span is not None:
            raise MlflowException(
                f"Span '{self._name}' ({self._span_id}) has already ended and can no longer be "
                "modified.",
                error_code=INVALID_STATE,
            )

    def __repr__(self):
        return f"SpanBuilder(name={self._name!r}, span_id={self._span_id!r})"
