from collections import defaultdict, deque
from unittest import mock

import pytest

from mlflow_client.store.model_registry_rest_store import ModelRegistryRestStore
from mlflow_client.store.rest_store import RestStore
from mlflow_client.utils.rest_utils import MlflowHostCreds

_API_PREFIX = "/api/2.0/mlflow/"


class FakeClock:
    """Deterministic clock. Every reading advances the time by ``step``."""

    def __init__(self, start=1_000_000_000, step=1_000_000):
        self.now = start
        self.step = step

    def __call__(self):
        now = self.now
        self.now += self.step
        return now

    def advance(self, amount):
        self.now += amount


class FakeTransport:
    """
    Stands in for ``call_endpoint``: records every call and answers with canned responses.

    Responses registered for a path are returned in order; the last one is repeated. A response
    may be a dict, a callable taking the request body, or an exception to raise.
    """

    def __init__(self):
        self.calls = []
        self._responses = defaultdict(deque)

    def respond(self, path, *responses):
        self._responses[path].extend(responses)
        return self

    def __call__(self, host_creds, endpoint, method, json_body=None, extra_headers=None):
        path = endpoint[len(_API_PREFIX) :]
        self.calls.append((method, path, json_body))
        queue = self._responses.get(path)
        if not queue:
            return {}
        response = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(json_body)
        return response

    def count(self, path):
        return sum(1 for _, called_path, _ in self.calls if called_path == path)

    def last_body(self, path):
        for _, called_path, body in reversed(self.calls):
            if called_path == path:
                return body

    @property
    def paths(self):
        return [path for _, path, _ in self.calls]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def transport():
    fake = FakeTransport()
    with mock.patch("mlflow_client.store.base_rest_store.call_endpoint", new=fake):
        yield fake


@pytest.fixture
def host_creds():
    return MlflowHostCreds("https://hello")


@pytest.fixture
def store(transport, host_creds):
    return RestStore(lambda: host_creds)


@pytest.fixture
def registry_store(transport, host_creds):
    return ModelRegistryRestStore(lambda: host_creds)


@pytest.fixture(autouse=True)
def clean_tracking_env(monkeypatch):
    for name in (
        "MLFLOW_TRACKING_URI",
        "MLFLOW_TRACKING_USERNAME",
        "MLFLOW_TRACKING_PASSWORD",
        "MLFLOW_TRACKING_TOKEN",
        "MLFLOW_TRACKING_INSECURE_TLS",
        "MLFLOW_TRACKING_SERVER_CERT_PATH",
        "MLFLOW_TRACKING_CLIENT_CERT_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
