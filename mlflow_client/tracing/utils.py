import json
import logging
from datetime import date, datetime

from opentelemetry import trace as trace_api
from opentelemetry.sdk.trace.id_generator import RandomIdGenerator

_logger = logging.getLogger(__name__)

_ID_GENERATOR = RandomIdGenerator()


class TraceJSONEncoder(json.JSONEncoder):
    """
    Custom JSON encoder for serializing span inputs, outputs and attributes.

    Spans may hold values that are not JSON serializable, such as datetimes or arbitrary
    objects. Those fall back to their ISO format or ``str`` representation.
    """

    def default(self, obj):
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        try:
            return super().default(obj)
        except TypeError:
            return str(obj)


def generate_trace_id() -> str:
    """
    Generate a random trace ID as a 32 character lowercase hex string (128 bits).
    """
    return encode_trace_id(_ID_GENERATOR.generate_trace_id())


def generate_span_id() -> str:
    """
    Generate a random span ID as a 16 character lowercase hex string (64 bits).
    """
    return encode_span_id(_ID_GENERATOR.generate_span_id())


def encode_span_id(span_id: int) -> str:
    """
    Encode the given integer span ID to a 16 character hex string.
    """
    return trace_api.format_span_id(span_id)


def encode_trace_id(trace_id: int) -> str:
    """
    Encode the given integer trace ID to a 32 character hex string.
    """
    return trace_api.format_trace_id(trace_id)
