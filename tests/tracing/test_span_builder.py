import pytest

from mlflow_client.entities import SpanStatusCode, SpanType
from mlflow_client.exceptions import MlflowException
from mlflow_client.tracing import TraceBuilder


@pytest.fixture
def trace_builder(fake_clock):
    return TraceBuilder(experiment_id="1", name="predict", clock=fake_clock)


def test_end_freezes_the_span(trace_builder):
    span_builder = trace_builder.start_span("retrieve", SpanType.RETRIEVER, inputs={"q": "hi"})
    span_builder.with_attribute("k", 3).with_output("docs", ["a", "b"])
    returned = span_builder.end()

    assert returned is trace_builder
    span = span_builder.span
    assert span_builder.is_ended
    assert span.trace_id == trace_builder.trace_id
    assert span.span_id == span_builder.span_id
    assert span.span_type == SpanType.RETRIEVER
    assert span.inputs == {"q": "hi"}
    assert span.outputs == {"docs": ["a", "b"]}
    assert span.attributes == {"k": 3}
    assert span.status == SpanStatusCode.OK
    assert span.end_time_ns >= span.start_time_ns
    assert trace_builder.spans == [span]


def test_mutators_after_end_raise_and_leave_span_untouched(trace_builder):
    span_builder = trace_builder.start_span("step")
    span_builder.end()
    span = span_builder.span

    for mutate in (
        lambda: span_builder.with_attribute("k", "v"),
        lambda: span_builder.with_input("k", "v"),
        lambda: span_builder.with_output("k", "v"),
        lambda: span_builder.with_event("e"),
        lambda: span_builder.with_parent("0" * 16),
        lambda: span_builder.with_error(ValueError("boom")),
        lambda: span_builder.end(),
    ):
        with pytest.raises(MlflowException, match="has already ended") as e:
            mutate()
        assert e.value.error_code == "INVALID_STATE"

    assert span_builder.span is span
    assert span.attributes == {}
    assert trace_builder.spans == [span]


def test_with_error_marks_span_failed(trace_builder):
    span_builder = trace_builder.start_span("tool").with_error(RuntimeError("timeout"))
    span_builder.end()
    span = span_builder.span
    assert span.status == SpanStatusCode.ERROR
    assert [event.name for event in span.events] == ["exception"]
    assert span.events[0].attributes["exception.message"] == "timeout"


def test_explicit_status_wins(trace_builder):
    span_builder = trace_builder.start_span("tool").with_error(RuntimeError("retry"))
    span_builder.end(status="OK")
    assert span_builder.span.status == SpanStatusCode.OK


def test_end_rejects_unknown_status(trace_builder):
    with pytest.raises(MlflowException, match="not a valid SpanStatusCode"):
        trace_builder.start_span("tool").end(status="DONE")


def test_events_use_the_trace_clock(fake_clock, trace_builder):
    span_builder = trace_builder.start_span("llm")
    fake_clock.now = 5_000
    span_builder.with_event("token", {"index": 0})
    span_builder.end()
    event = span_builder.span.events[0]
    assert event.timestamp_ns == 5_000
    assert event.attributes == {"index": 0}


def test_non_dict_inputs_are_replaced_by_with_input(trace_builder):
    span_builder = trace_builder.start_span("llm", inputs="raw prompt").with_input("prompt", "x")
    span_builder.end()
    assert span_builder.span.inputs == {"prompt": "x"}


def test_inputs_are_copied(trace_builder):
    inputs = {"q": "hi"}
    span_builder = trace_builder.start_span("llm", inputs=inputs)
    inputs["q"] = "changed"
    span_builder.end()
    assert span_builder.span.inputs == {"q": "hi"}


def test_span_ids_are_hex(trace_builder):
    span_builder = trace_builder.start_span("a")
    assert len(span_builder.span_id) == 16
    int(span_builder.span_id, 16)
    assert repr(span_builder) == f"SpanBuilder(name='a', span_id='{span_builder.span_id}')"


def test_ended_span_does_not_share_caller_values(trace_builder):
    documents = ["doc-1"]
    config = {"temperature": 0.1}
    filters = {"lang": ["en"]}
    span_builder = (
        trace_builder.start_span("retrieve")
        .with_input("filters", filters)
        .with_output("documents", documents)
        .with_attribute("config", config)
    )
    span_builder.end()

    documents.append("doc-2")
    config["temperature"] = 0.9
    filters["lang"].append("fr")

    span = span_builder.span
    assert span.inputs == {"filters": {"lang": ["en"]}}
    assert span.outputs == {"documents": ["doc-1"]}
    assert span.attributes == {"config": {"temperature": 0.1}}
