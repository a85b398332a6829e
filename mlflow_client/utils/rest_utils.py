import base64
import json
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from mlflow_client.environment_variables import MLFLOW_HTTP_REQUEST_TIMEOUT
from mlflow_client.exceptions import (
    InvalidUrlException,
    MlflowException,
    RestException,
    get_error_code,
)
from mlflow_client.utils.request_utils import RetryPolicy, _send_with_retries
from mlflow_client.utils.string_utils import strip_suffix, truncate_str_from_middle
from mlflow_client.version import VERSION

_logger = logging.getLogger(__name__)

_REST_API_PATH_PREFIX = "/api/2.0"
_ARTIFACTS_PROXY_PATH_PREFIX = f"{_REST_API_PATH_PREFIX}/mlflow-artifacts/artifacts"
_MAX_ERROR_BODY_LENGTH = 1000
_DEFAULT_HEADERS = {"User-Agent": f"mlflow-tracking-client/{VERSION}"}


@dataclass(frozen=True)
class MlflowHostCreds:
    """
    Address of a tracking server and the credentials to send with every request.

    Args:
        host: Base URL of the server, e.g. ``http://localhost:5000``. Required.
        username: Username for Basic authentication. Used only together with ``password``.
        password: Password for Basic authentication.
        token: Token for Bearer authentication. Ignored when username and password are set.
        ignore_tls_verification: Skip verification of the server's TLS certificate. Cannot be
            combined with ``server_cert_path``.
        client_cert_path: Path to a client certificate (.pem), sent as the ``cert`` argument
            of :py:meth:`requests.Session.request`.
        server_cert_path: Path to a CA bundle used to verify the server, sent as the
            ``verify`` argument of :py:meth:`requests.Session.request`.
    """

    host: str
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    ignore_tls_verification: bool = False
    client_cert_path: Optional[str] = None
    server_cert_path: Optional[str] = None

    def __post_init__(self):
        if not self.host:
            raise MlflowException.invalid_parameter_value(
                "A tracking server host is required to build MlflowHostCreds."
            )
        if self.ignore_tls_verification and self.server_cert_path is not None:
            raise MlflowException.invalid_parameter_value(
                "TLS verification cannot be disabled while a server certificate is configured. "
                "Set only one of MLFLOW_TRACKING_INSECURE_TLS and "
                "MLFLOW_TRACKING_SERVER_CERT_PATH."
            )

    @property
    def verify(self):
        if self.server_cert_path is not None:
            return self.server_cert_path
        return not self.ignore_tls_verification

    @property
    def authorization(self) -> Optional[str]:
        """Value of the ``Authorization`` header, or None when no credentials are set."""
        if self.username and self.password:
            user_pass = f"{self.username}:{self.password}".encode()
            return "Basic " + base64.standard_b64encode(user_pass).decode("utf-8")
        if self.token:
            return f"Bearer {self.token}"
        return None


def http_request(
    host_creds,
    endpoint,
    method,
    max_retries=None,
    backoff_factor=None,
    extra_headers=None,
    timeout=None,
    **kwargs,
):
    """
    Send a request to ``endpoint`` of the server described by ``host_creds``. Connection
    errors and the statuses 408, 429, 500, 502, 503 and 504 are retried with exponential
    backoff.

    Args:
        host_creds: :py:class:`MlflowHostCreds` of the server.
        endpoint: Path of the endpoint, e.g. ``/api/2.0/mlflow/runs/get``.
        method: HTTP method name.
        max_retries: Overrides ``MLFLOW_HTTP_REQUEST_MAX_RETRIES``.
        backoff_factor: Overrides ``MLFLOW_HTTP_REQUEST_BACKOFF_FACTOR``.
        extra_headers: Headers sent in addition to the default ones.
        timeout: Overrides ``MLFLOW_HTTP_REQUEST_TIMEOUT``, in seconds.
        kwargs: Passed on to :py:meth:`requests.Session.request`.

    Returns:
        The :py:class:`requests.Response`, whatever its status.
    """
    url = strip_suffix(host_creds.host, "/") + endpoint
    retry_policy = RetryPolicy.resolve(max_retries, backoff_factor)
    headers = {**_DEFAULT_HEADERS, **(extra_headers or {})}
    if authorization := host_creds.authorization:
        headers["Authorization"] = authorization
    if host_creds.client_cert_path is not None:
        kwargs["cert"] = host_creds.client_cert_path

    _logger.debug("Sending %s request to %s", method, url)
    try:
        return _send_with_retries(
            method,
            url,
            retry_policy,
            headers=headers,
            verify=host_creds.verify,
            timeout=MLFLOW_HTTP_REQUEST_TIMEOUT.get() if timeout is None else timeout,
            **kwargs,
        )
    except requests.exceptions.Timeout as e:
        raise MlflowException(
            f"API request to {url} failed with timeout exception {e}. To increase the timeout, "
            f"set the environment variable {MLFLOW_HTTP_REQUEST_TIMEOUT} to a larger value."
        ) from e
    except requests.exceptions.InvalidURL as e:
        raise InvalidUrlException(f"Invalid url: {url}") from e
    except requests.exceptions.RequestException as e:
        raise MlflowException(f"API request to {url} failed with exception {e}") from e


def _parse_json_object(text):
    try:
        body = json.loads(text)
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def raise_for_status(response, endpoint):
    """
    Raise if ``response`` has a non-2xx status; the body of a successful response is left
    unread. A JSON error body raises :py:class:`RestException`, any other body raises
    :py:class:`MlflowException` with the error code of the HTTP status.
    """
    if 200 <= response.status_code < 300:
        return
    if (error_json := _parse_json_object(response.text)) is not None:
        raise RestException(error_json, status_code=response.status_code)
    body = truncate_str_from_middle(response.text, _MAX_ERROR_BODY_LENGTH)
    raise MlflowException(
        f"API request to endpoint {endpoint} failed with error code {response.status_code} "
        f"!= 200. Response body: '{body}'",
        error_code=get_error_code(response.status_code),
        status_code=response.status_code,
    )


def verify_rest_response(response, endpoint):
    """
    Check the status and the body of a response to a JSON endpoint. An empty successful body
    is replaced with ``{}``.
    """
    raise_for_status(response, endpoint)
    if response.text.strip() == "":
        response._content = b"{}"
        return response
    # Uploads to the artifact proxy may answer with a non-JSON body
    if (
        endpoint.startswith(_REST_API_PATH_PREFIX)
        and not endpoint.startswith(_ARTIFACTS_PROXY_PATH_PREFIX)
        and _parse_json_object(response.text) is None
    ):
        raise MlflowException(
            "API request to endpoint was successful but the response body was not in a valid "
            f"JSON format. Response body: '{response.text}'"
        )
    return response


def call_endpoint(host_creds, endpoint, method, json_body=None, extra_headers=None):
    """
    Call a JSON endpoint of the tracking server and return the decoded response.

    ``GET`` requests send ``json_body`` as query parameters; every other request sends it as a
    JSON body.

    Args:
        host_creds: A :py:class:`MlflowHostCreds` describing the server.
        endpoint: Path of the endpoint, e.g. ``/api/2.0/mlflow/runs/get``.
        method: HTTP method name.
        json_body: A JSON-serializable dictionary, or None.
        extra_headers: Additional HTTP headers.

    Returns:
        The response body decoded into a dictionary.

    Raises:
        RestException: The server answered with a JSON error body.
        MlflowException: The request failed for any other reason.
    """
    body_kwarg = "params" if method == "GET" else "json"
    response = http_request(
        host_creds, endpoint, method, extra_headers=extra_headers, **{body_kwarg: json_body}
    )
    return json.loads(verify_rest_response(response, endpoint).text)
