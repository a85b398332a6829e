"""
Environment variables read by the MLflow tracking client. Each variable is read when
``.get()`` is called, so changes to ``os.environ`` apply to the next request.
"""

import os

_BOOLEAN_VALUES = ("true", "false", "1", "0")


class _EnvironmentVariable:
    """
    An environment variable converted to ``type_`` when set, and ``default`` otherwise.
    """

    def __init__(self, name, type_, default):
        self.name = name
        self.type = type_
        self.default = default

    def _convert(self, raw):
        return self.type(raw)

    def get(self):
        raw = os.environ.get(self.name)
        if raw is None:
            return self.default
        try:
            return self._convert(raw)
        except ValueError as e:
            raise ValueError(f"Failed to convert {raw!r} for {self.name}: {e}") from e

    def __str__(self):
        return f"{self.name} (default: {self.default})"

    def __format__(self, format_spec):
        return format(self.name, format_spec)


class _BooleanEnvironmentVariable(_EnvironmentVariable):
    """
    A boolean environment variable set to one of true, false, 1 or 0 in any case.
    """

    def __init__(self, name, default):
        if not (default is None or isinstance(default, bool)):
            raise ValueError(f"{name} default value must be one of [True, False, None]")
        super().__init__(name, bool, default)

    def _convert(self, raw):
        value = raw.lower()
        if value not in _BOOLEAN_VALUES:
            raise ValueError(f"value must be one of {list(_BOOLEAN_VALUES)} (case-insensitive)")
        return value in ("true", "1")


# Tracking server

#: URI of the tracking server. ``http://localhost:5000`` when unset.
MLFLOW_TRACKING_URI = _EnvironmentVariable("MLFLOW_TRACKING_URI", str, None)

#: Username for Basic authentication, used together with ``MLFLOW_TRACKING_PASSWORD``.
MLFLOW_TRACKING_USERNAME = _EnvironmentVariable("MLFLOW_TRACKING_USERNAME", str, None)

#: Password for Basic authentication.
MLFLOW_TRACKING_PASSWORD = _EnvironmentVariable("MLFLOW_TRACKING_PASSWORD", str, None)

#: Token for Bearer authentication, used when no username and password are set.
MLFLOW_TRACKING_TOKEN = _EnvironmentVariable("MLFLOW_TRACKING_TOKEN", str, None)

#: Skip verification of the server's TLS certificate.
MLFLOW_TRACKING_INSECURE_TLS = _BooleanEnvironmentVariable("MLFLOW_TRACKING_INSECURE_TLS", False)

#: CA bundle used to verify the server's TLS certificate.
MLFLOW_TRACKING_SERVER_CERT_PATH = _EnvironmentVariable(
    "MLFLOW_TRACKING_SERVER_CERT_PATH", str, None
)

#: Client certificate (.pem) presented to the server.
MLFLOW_TRACKING_CLIENT_CERT_PATH = _EnvironmentVariable(
    "MLFLOW_TRACKING_CLIENT_CERT_PATH", str, None
)

# HTTP requests

#: Retries of a request failing with a connection error or a transient status. Below 10.
MLFLOW_HTTP_REQUEST_MAX_RETRIES = _EnvironmentVariable("MLFLOW_HTTP_REQUEST_MAX_RETRIES", int, 7)

#: Exponential backoff factor between retries, in seconds. Below 120.
MLFLOW_HTTP_REQUEST_BACKOFF_FACTOR = _EnvironmentVariable(
    "MLFLOW_HTTP_REQUEST_BACKOFF_FACTOR", int, 2
)

#: Upper bound of the random delay added to each backoff, in seconds.
MLFLOW_HTTP_REQUEST_BACKOFF_JITTER = _EnvironmentVariable(
    "MLFLOW_HTTP_REQUEST_BACKOFF_JITTER", float, 1.0
)

#: Timeout of a single request, in seconds.
MLFLOW_HTTP_REQUEST_TIMEOUT = _EnvironmentVariable("MLFLOW_HTTP_REQUEST_TIMEOUT", int, 120)

#: Wait as long as a ``Retry-After`` response header asks before retrying.
MLFLOW_HTTP_RESPECT_RETRY_AFTER_HEADER = _BooleanEnvironmentVariable(
    "MLFLOW_HTTP_RESPECT_RETRY_AFTER_HEADER", True
)

# Logging

#: Attach a stderr handler to the ``mlflow_client`` logger on import.
MLFLOW_CONFIGURE_LOGGING = _BooleanEnvironmentVariable("MLFLOW_CONFIGURE_LOGGING", True)

#: Level of the ``mlflow_client`` logger, e.g. ``DEBUG``. ``INFO`` when unset.
MLFLOW_LOGGING_LEVEL = _EnvironmentVariable("MLFLOW_LOGGING_LEVEL", str, None)
