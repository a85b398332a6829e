from unittest import mock

import pytest
import requests
from urllib3.util import Retry

from mlflow_client.exceptions import MlflowException
from mlflow_client.utils.request_utils import (
    RetryPolicy,
    _send_with_retries,
    get_request_session,
)


def _policy(max_retries=3, backoff_factor=1, backoff_jitter=0.0):
    return RetryPolicy(max_retries, backoff_factor, backoff_jitter, True)


def test_request_session_is_cached_per_policy():
    assert get_request_session(_policy()) is get_request_session(_policy())
    assert get_request_session(_policy()) is not get_request_session(_policy(max_retries=4))


def test_request_session_retries_transient_statuses():
    session = get_request_session(_policy(max_retries=5, backoff_factor=2, backoff_jitter=0.5))
    retry = session.get_adapter("https://h").max_retries
    assert isinstance(retry, Retry)
    assert retry.total == 5
    assert retry.backoff_factor == 2
    assert retry.backoff_jitter == 0.5
    assert retry.raise_on_status is False
    assert set(retry.status_forcelist) == {408, 429, 500, 502, 503, 504}


def test_retry_policy_defaults_come_from_environment(monkeypatch):
    monkeypatch.setenv("MLFLOW_HTTP_REQUEST_MAX_RETRIES", "2")
    monkeypatch.setenv("MLFLOW_HTTP_REQUEST_BACKOFF_JITTER", "0.25")
    monkeypatch.setenv("MLFLOW_HTTP_RESPECT_RETRY_AFTER_HEADER", "false")
    assert RetryPolicy.resolve() == RetryPolicy(2, 2, 0.25, False)
    assert RetryPolicy.resolve(max_retries=0, backoff_factor=5).max_retries == 0


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"max_retries": 10}, "max_retries must be at least 0 and below 10, got 10"),
        ({"max_retries": -1}, "max_retries must be at least 0 and below 10, got -1"),
        ({"backoff_factor": 500}, "backoff_factor must be at least 0 and below 120, got 500"),
        ({"backoff_factor": -1}, "backoff_factor must be at least 0 and below 120, got -1"),
    ],
)
def test_retry_policy_rejects_out_of_range_settings(kwargs, match):
    with pytest.raises(MlflowException, match=match) as exc_info:
        RetryPolicy.resolve(**kwargs)
    assert exc_info.value.error_code == "INVALID_PARAMETER_VALUE"


def test_send_with_retries_uses_session_for_policy():
    with mock.patch.object(requests.Session, "request") as request:
        _send_with_retries("GET", "http://h/p", _policy(max_retries=0), timeout=3)
    request.assert_called_once_with("GET", "http://h/p", timeout=3)
