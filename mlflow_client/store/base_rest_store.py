import logging

from mlflow_client.utils.rest_utils import _REST_API_PATH_PREFIX, call_endpoint

_logger = logging.getLogger(__name__)


class BaseRestStore:
    """
    Base class for stores talking to a tracking server through its REST API.

    :param get_host_creds: Method to be invoked prior to every REST request to get the
      :py:class:`mlflow_client.utils.rest_utils.MlflowHostCreds` for the request. Note that this
      is a function so that we can obtain fresh credentials in the case of expiry.
    """

    def __init__(self, get_host_creds):
        self.get_host_creds = get_host_creds

    def _call_endpoint(self, method, path, json_body=None):
        """
        Call ``/api/2.0/mlflow/<path>`` and return the decoded JSON response. Errors raised by
        the transport propagate unchanged.

        :param method: HTTP method name.
        :param path: Endpoint path relative to ``/api/2.0/mlflow/``, e.g. ``runs/get``.
        :param json_body: Query parameters for ``GET`` requests, JSON body otherwise.
        """
        endpoint = f"{_REST_API_PATH_PREFIX}/mlflow/{path}"
        if json_body is not None:
            json_body = {key: value for key, value in json_body.items() if value is not None}
        _logger.debug("Calling %s %s", method, endpoint)
        return call_endpoint(self.get_host_creds(), endpoint, method, json_body)
