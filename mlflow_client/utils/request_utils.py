import os
from functools import lru_cache
from typing import NamedTuple, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from mlflow_client.environment_variables import (
    MLFLOW_HTTP_REQUEST_BACKOFF_FACTOR,
    MLFLOW_HTTP_REQUEST_BACKOFF_JITTER,
    MLFLOW_HTTP_REQUEST_MAX_RETRIES,
    MLFLOW_HTTP_RESPECT_RETRY_AFTER_HEADER,
)
from mlflow_client.exceptions import MlflowException

# Statuses a tracking server or the proxy in front of it returns while overloaded or restarting
_TRANSIENT_FAILURE_RESPONSE_CODES = frozenset([408, 429, 500, 502, 503, 504])

_MAX_RETRIES_LIMIT = 10
_MAX_BACKOFF_FACTOR_LIMIT = 120


class RetryPolicy(NamedTuple):
    """
    How a request is retried on connection errors and transient statuses. The n-th retry waits
    ``backoff_factor * 2 ** (n - 1)`` seconds plus up to ``backoff_jitter`` random seconds.
    """

    max_retries: int
    backoff_factor: float
    backoff_jitter: float
    respect_retry_after_header: bool

    @classmethod
    def resolve(
        cls,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
    ) -> "RetryPolicy":
        """
        Build the policy for one request. Settings left as None come from the
        ``MLFLOW_HTTP_REQUEST_*`` environment variables.
        """
        if max_retries is None:
            max_retries = MLFLOW_HTTP_REQUEST_MAX_RETRIES.get()
        if backoff_factor is None:
            backoff_factor = MLFLOW_HTTP_REQUEST_BACKOFF_FACTOR.get()
        if not 0 <= max_retries < _MAX_RETRIES_LIMIT:
            raise MlflowException.invalid_parameter_value(
                f"max_retries must be at least 0 and below {_MAX_RETRIES_LIMIT}, "
                f"got {max_retries}."
            )
        if not 0 <= backoff_factor < _MAX_BACKOFF_FACTOR_LIMIT:
            raise MlflowException.invalid_parameter_value(
                f"backoff_factor must be at least 0 and below {_MAX_BACKOFF_FACTOR_LIMIT}, "
                f"got {backoff_factor}."
            )
        return cls(
            max_retries=max_retries,
            backoff_factor=backoff_factor,
            backoff_jitter=MLFLOW_HTTP_REQUEST_BACKOFF_JITTER.get(),
            respect_retry_after_header=MLFLOW_HTTP_RESPECT_RETRY_AFTER_HEADER.get(),
        )


@lru_cache(maxsize=64)
def _cached_request_session(retry_policy, _pid):
    # Keyed on the process id so that forked workers never share a connection pool
    retry = Retry(
        total=retry_policy.max_retries,
        status_forcelist=_TRANSIENT_FAILURE_RESPONSE_CODES,
        backoff_factor=retry_policy.backoff_factor,
        backoff_jitter=retry_policy.backoff_jitter,
        respect_retry_after_header=retry_policy.respect_retry_after_header,
        allowed_methods=None,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def get_request_session(retry_policy: RetryPolicy) -> requests.Session:
    """
    Return the session of this process that retries according to ``retry_policy``. When
    retries run out on a transient status, the last response is returned rather than raised.
    """
    return _cached_request_session(retry_policy, os.getpid())


def _send_with_retries(method, url, retry_policy, **kwargs):
    """Send one request through the session for ``retry_policy``."""
    return get_request_session(retry_policy).request(method, url, **kwargs)
