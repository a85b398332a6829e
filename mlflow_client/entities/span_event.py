from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any

from mlflow_client.utils.validation import _validate_required_fields


@dataclass(frozen=True)
class SpanEvent:
    """
    An event that records a specific occurrence or moment in time during a span, such as an
    exception being thrown. Compatible with OpenTelemetry.

    Args:
        name: Name of the event.
        timestamp_ns: The exact time the event occurred, in nanoseconds since the epoch.
        attributes: A collection of key-value pairs representing detailed attributes of the
            event, such as the exception stack trace.
    """

    name: str
    timestamp_ns: int
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exception: BaseException, timestamp_ns: int) -> SpanEvent:
        "Create a span event from an exception."
        return cls(
            name="exception",
            timestamp_ns=timestamp_ns,
            attributes={
                "exception.message": str(exception),
                "exception.type": exception.__class__.__name__,
                "exception.stacktrace": cls._get_stacktrace(exception),
            },
        )

    @staticmethod
    def _get_stacktrace(error: BaseException) -> str:
        """Get the stacktrace of the parent error."""
        tb = traceback.format_exception(type(error), error, error.__traceback__)
        return "".join(tb).strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "timestamp_ns": self.timestamp_ns,
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, event_dict: dict[str, Any]) -> SpanEvent:
        _validate_required_fields(event_dict, ["name"], "span event")
        return cls(
            name=event_dict["name"],
            timestamp_ns=int(event_dict.get("timestamp_ns") or event_dict.get("timestamp") or 0),
            attributes=event_dict.get("attributes") or {},
        )
