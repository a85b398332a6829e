"""
Checks applied to metrics, params, tags and experiment names before they are sent to the
tracking server. Every failure raises :py:class:`MlflowException` with
``INVALID_PARAMETER_VALUE`` naming the offending field by its JSON path, e.g.
``params[1].key``.
"""

import json
import numbers
import posixpath
import re

from mlflow_client.exceptions import INVALID_PARAMETER_VALUE, MlflowException

MAX_PARAMS_TAGS_PER_BATCH = 100
MAX_METRICS_PER_BATCH = 1000
MAX_ENTITIES_PER_BATCH = 1000
MAX_PARAM_VAL_LENGTH = 6000
MAX_TAG_VAL_LENGTH = 8000
MAX_EXPERIMENT_NAME_LENGTH = 500
MAX_ENTITY_KEY_LENGTH = 250

_VALID_NAME_REGEX = re.compile(r"^[/\w.\- :]*$")
_BAD_CHARACTER_MESSAGE = (
    "Names may only contain alphanumerics, underscores (_), dashes (-), periods (.),"
    " spaces ( ), colon(:) and slashes (/)."
)


def _error(message):
    return MlflowException(message, error_code=INVALID_PARAMETER_VALUE)


def invalid_value(path, value, message=None):
    formatted = json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    suffix = f": {message}" if message else "."
    return f"Invalid value {formatted} for parameter '{path}' supplied{suffix}"


def missing_value(path):
    return f"Missing value for required parameter '{path}'."


def json_path(parent, field):
    """
    Path of ``field`` inside ``parent``: ``json_path("metrics", "[0]") == "metrics[0]"`` and
    ``json_path("metrics[0]", "key") == "metrics[0].key"``.
    """
    if not parent:
        return field
    return f"{parent}{field}" if field.startswith("[") else f"{parent}.{field}"


def path_not_unique(name):
    """True if ``name``, read as a relative file path, would resolve to another name."""
    norm = posixpath.normpath(name)
    return norm != name or norm == "." or norm.startswith("..") or norm.startswith("/")


def bad_path_message(name):
    return (
        "Names may be treated as files in certain cases, and must not resolve to other names"
        f" when treated as such. This name would resolve to {posixpath.normpath(name)!r}"
    )


def _is_numeric(value):
    # bool is a Number but never a valid metric value
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _validate_required_fields(the_dict, fields, entity_name):
    """Raise unless ``the_dict`` is a dictionary holding a non-None value for every field."""
    if not isinstance(the_dict, dict):
        raise _error(
            f"Expected a dictionary describing a {entity_name}, got {type(the_dict).__name__}"
        )
    missing = [field for field in fields if the_dict.get(field) is None]
    if missing:
        raise _error(
            f"{missing_value(missing[0])} Cannot construct a {entity_name} from {the_dict}"
        )


def _validate_name(name, path):
    if name is None or name == "":
        problem = "A key name must be provided."
    elif not isinstance(name, str):
        problem = "Expected a string."
    elif not _VALID_NAME_REGEX.match(name):
        problem = _BAD_CHARACTER_MESSAGE
    elif path_not_unique(name):
        problem = bad_path_message(name)
    else:
        return
    raise _error(invalid_value(path, name, problem))


def _validate_length_limit(entity_name, limit, value):
    if value is not None and len(value) > limit:
        raise _error(f"'{entity_name}' exceeds the maximum length of {limit} characters")


def _validate_metric(key, value, timestamp, step, path=""):
    """
    Check the key, value, timestamp and step of a metric. ``path`` is the JSON path of the
    metric inside a request, e.g. ``metrics[3]``.
    """
    _validate_name(key, json_path(path, "key"))
    if value is None:
        raise _error(missing_value(json_path(path, "value")))
    if not _is_numeric(value):
        raise _error(
            invalid_value(
                json_path(path, "value"),
                value,
                f"metric '{key}' (timestamp={timestamp}). "
                "Please specify value as a valid double (64-bit floating point)",
            )
        )
    if not _is_numeric(timestamp) or timestamp < 0:
        raise _error(
            invalid_value(
                json_path(path, "timestamp"),
                timestamp,
                f"metric '{key}' (value={value}). "
                "Timestamp must be a nonnegative long (64-bit integer)",
            )
        )
    if not _is_numeric(step):
        raise _error(
            invalid_value(
                json_path(path, "step"),
                step,
                f"metric '{key}' (value={value}). Step must be a valid long (64-bit integer).",
            )
        )
    _validate_length_limit("Metric name", MAX_ENTITY_KEY_LENGTH, key)


def _validate_param(key, value, path=""):
    _validate_name(key, json_path(path, "key"))
    _validate_length_limit("Param key", MAX_ENTITY_KEY_LENGTH, key)
    _validate_length_limit("Param value", MAX_PARAM_VAL_LENGTH, value)


def _validate_tag(key, value, path=""):
    _validate_name(key, json_path(path, "key"))
    _validate_length_limit(json_path(path, "key"), MAX_ENTITY_KEY_LENGTH, key)
    _validate_length_limit(json_path(path, "value"), MAX_TAG_VAL_LENGTH, value)


def _validate_batch_log_limits(metrics, params, tags):
    """Raise if a ``runs/log-batch`` request with these entities exceeds the server's limits."""
    limits = [
        ("metrics", MAX_METRICS_PER_BATCH, len(metrics)),
        ("params", MAX_PARAMS_TAGS_PER_BATCH, len(params)),
        ("tags", MAX_PARAMS_TAGS_PER_BATCH, len(tags)),
        (
            "metrics, params, and tags",
            MAX_ENTITIES_PER_BATCH,
            len(metrics) + len(params) + len(tags),
        ),
    ]
    for entity_name, limit, length in limits:
        if length > limit:
            raise _error(
                f"A batch logging request can contain at most {limit} {entity_name}. "
                f"Got {length} {entity_name}. Please split up {entity_name} across multiple"
                " requests and try again."
            )


def _validate_experiment_name(experiment_name):
    if not isinstance(experiment_name, str) or experiment_name == "":
        raise _error(f"Invalid experiment name: {experiment_name!r}. Expected a non-empty string.")
    _validate_length_limit("name", MAX_EXPERIMENT_NAME_LENGTH, experiment_name)
