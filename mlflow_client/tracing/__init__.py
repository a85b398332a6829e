from mlflow_client.tracing.span_builder import SpanBuilder
from mlflow_client.tracing.trace_builder import TraceBuilder

__all__ = ["SpanBuilder", "TraceBuilder"]
