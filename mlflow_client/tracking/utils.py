import logging
import urllib.parse

from mlflow_client.environment_variables import MLFLOW_TRACKING_URI
from mlflow_client.exceptions import MlflowException
from mlflow_client.store.model_registry_rest_store import ModelRegistryRestStore
from mlflow_client.store.rest_store import RestStore
from mlflow_client.utils.credentials import get_default_host_creds

_logger = logging.getLogger(__name__)

DEFAULT_TRACKING_URI = "http://localhost:5000"

_SUPPORTED_SCHEMES = ("http", "https")


def _resolve_tracking_uri(tracking_uri=None):
    """
    Returns ``tracking_uri`` if given, else the ``MLFLOW_TRACKING_URI`` environment variable,
    else ``http://localhost:5000``.
    """
    uri = tracking_uri or MLFLOW_TRACKING_URI.get() or DEFAULT_TRACKING_URI
    scheme = urllib.parse.urlparse(uri).scheme
    if scheme not in _SUPPORTED_SCHEMES:
        raise MlflowException.invalid_parameter_value(
            f"Unsupported tracking URI '{uri}'. Only {' and '.join(_SUPPORTED_SCHEMES)} tracking "
            "servers are supported."
        )
    return uri


def _get_rest_store(store_uri):
    def get_host_creds():
        return get_default_host_creds(store_uri)

    return RestStore(get_host_creds)


def _get_model_registry_rest_store(store_uri):
    def get_host_creds():
        return get_default_host_creds(store_uri)

    return ModelRegistryRestStore(get_host_creds)
