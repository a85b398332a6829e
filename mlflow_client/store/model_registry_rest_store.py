import logging

from mlflow_client.entities.model_registry import ModelVersion, RegisteredModel
from mlflow_client.entities.model_registry.model_version_stages import get_canonical_stage
from mlflow_client.exceptions import MlflowException
from mlflow_client.store.base_rest_store import BaseRestStore
from mlflow_client.store.entities.paged_list import PagedList
from mlflow_client.utils.validation import _validate_tag

_logger = logging.getLogger(__name__)

SEARCH_REGISTERED_MODEL_MAX_RESULTS_DEFAULT = 100
SEARCH_MODEL_VERSION_MAX_RESULTS_DEFAULT = 10000


def _validate_model_name(name):
    if name is None or name == "":
        raise MlflowException.invalid_parameter_value("Registered model name cannot be empty.")


class ModelRegistryRestStore(BaseRestStore):
    """
    Client for a remote model registry server accessed via REST API calls

    :param get_host_creds: Method to be invoked prior to every REST request to get the
      :py:class:`mlflow_client.utils.rest_utils.MlflowHostCreds` for the request.
    """

    # CRUD API for RegisteredModel objects

    def create_registered_model(self, name, tags=None, description=None):
        """
        Create a new registered model in backend store.

        :param name: Name of the new model. This is expected to be unique in the backend store.
        :param tags: Iterable of :py:class:`mlflow_client.entities.ModelTag` instances
            associated with this registered model.
        :param description: Description of the model.

        :return: A single object of :py:class:`mlflow_client.entities.RegisteredModel` created
            in the backend.
        """
        _validate_model_name(name)
        tags = list(tags or [])
        for tag in tags:
            _validate_tag(tag.key, tag.value)
        response = self._call_endpoint(
            "POST",
            "registered-models/create",
            {
                "name": name,
                "tags": [tag.to_dictionary() for tag in tags] or None,
                "description": description,
            },
        )
        return RegisteredModel.from_dictionary(response["registered_model"])

    def update_registered_model(self, name, description):
        response = self._call_endpoint(
            "PATCH",
            "registered-models/update",
            {"name": name, "description": description},
        )
        return RegisteredModel.from_dictionary(response["registered_model"])

    def rename_registered_model(self, name, new_name):
        _validate_model_name(new_name)
        response = self._call_endpoint(
            "POST", "registered-models/rename", {"name": name, "new_name": new_name}
        )
        return RegisteredModel.from_dictionary(response["registered_model"])

    def delete_registered_model(self, name):
        self._call_endpoint("DELETE", "registered-models/delete", {"name": name})

    def search_registered_models(
        self,
        filter_string=None,
        max_results=SEARCH_REGISTERED_MODEL_MAX_RESULTS_DEFAULT,
        order_by=None,
        page_token=None,
    ):
        """
        Search for registered models that satisfy the filter criteria.

        :param filter_string: Filter query string, e.g. ``"name LIKE 'fraud%'"``.
        :param max_results: Maximum number of registered models desired.
        :param order_by: List of column names with ASC|DESC annotation.
        :param page_token: Token specifying the next page of results.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.RegisteredModel` objects.
        """
        response = self._call_endpoint(
            "GET",
            "registered-models/search",
            {
                "filter": filter_string,
                "max_results": max_results,
                "order_by": order_by,
                "page_token": page_token,
            },
        )
        registered_models = [
            RegisteredModel.from_dictionary(registered_model)
            for registered_model in response.get("registered_models", [])
        ]
        return PagedList(registered_models, response.get("next_page_token"))

    def get_registered_model(self, name):
        response = self._call_endpoint("GET", "registered-models/get", {"name": name})
        return RegisteredModel.from_dictionary(response["registered_model"])

    def get_latest_versions(self, name, stages=None):
        """
        Latest version models for each requested stage. If no ``stages`` argument is provided,
        returns the latest version for each stage.

        :return: List of :py:class:`mlflow_client.entities.ModelVersion` objects.
        """
        stages = [get_canonical_stage(stage).value for stage in stages] if stages else None
        response = self._call_endpoint(
            "POST", "registered-models/get-latest-versions", {"name": name, "stages": stages}
        )
        return [
            ModelVersion.from_dictionary(model_version)
            for model_version in response.get("model_versions", [])
        ]

    def set_registered_model_tag(self, name, tag):
        _validate_tag(tag.key, tag.value)
        self._call_endpoint(
            "POST",
            "registered-models/set-tag",
            {"name": name, "key": tag.key, "value": tag.value},
        )

    def delete_registered_model_tag(self, name, key):
        self._call_endpoint("DELETE", "registered-models/delete-tag", {"name": name, "key": key})

    def set_registered_model_alias(self, name, alias, version):
        self._call_endpoint(
            "POST",
            "registered-models/alias",
            {"name": name, "alias": alias, "version": str(version)},
        )

    def delete_registered_model_alias(self, name, alias):
        self._call_endpoint("DELETE", "registered-models/alias", {"name": name, "alias": alias})

    def get_model_version_by_alias(self, name, alias):
        response = self._call_endpoint(
            "GET", "registered-models/alias", {"name": name, "alias": alias}
        )
        return ModelVersion.from_dictionary(response["model_version"])

    # CRUD API for ModelVersion objects

    def create_model_version(
        self, name, source, run_id=None, tags=None, run_link=None, description=None
    ):
        """
        Create a new model version from given source and run ID.

        :param name: Registered model name.
        :param source: URI indicating the location of the model artifacts.
        :param run_id: Run ID from MLflow tracking server that generated the model.
        :param tags: Iterable of :py:class:`mlflow_client.entities.ModelTag` instances
            associated with this model version.
        :param run_link: Link to the run from an MLflow tracking server that generated this
            model.
        :param description: Description of the version.

        :return: A single object of :py:class:`mlflow_client.entities.ModelVersion` created in
            the backend.
        """
        tags = list(tags or [])
        for tag in tags:
            _validate_tag(tag.key, tag.value)
        response = self._call_endpoint(
            "POST",
            "model-versions/create",
            {
                "name": name,
                "source": source,
                "run_id": run_id,
                "tags": [tag.to_dictionary() for tag in tags] or None,
                "run_link": run_link,
                "description": description,
            },
        )
        return ModelVersion.from_dictionary(response["model_version"])

    def update_model_version(self, name, version, description):
        response = self._call_endpoint(
            "PATCH",
            "model-versions/update",
            {"name": name, "version": str(version), "description": description},
        )
        return ModelVersion.from_dictionary(response["model_version"])

    def transition_model_version_stage(self, name, version, stage, archive_existing_versions):
        """
        Update model version stage.

        :param name: Registered model name.
        :param version: Registered model version.
        :param stage: New desired stage for this model version, a
            :py:class:`mlflow_client.entities.ModelStage` or its name.
        :param archive_existing_versions: If this flag is set to ``True``, all existing model
            versions in the stage will be automatically moved to the "archived" stage.

        :return: A single :py:class:`mlflow_client.entities.ModelVersion` object.
        """
        response = self._call_endpoint(
            "POST",
            "model-versions/transition-stage",
            {
                "name": name,
                "version": str(version),
                "stage": get_canonical_stage(stage).value,
                "archive_existing_versions": archive_existing_versions,
            },
        )
        return ModelVersion.from_dictionary(response["model_version"])

    def delete_model_version(self, name, version):
        self._call_endpoint(
            "DELETE", "model-versions/delete", {"name": name, "version": str(version)}
        )

    def get_model_version(self, name, version):
        response = self._call_endpoint(
            "GET", "model-versions/get", {"name": name, "version": str(version)}
        )
        return ModelVersion.from_dictionary(response["model_version"])

    def get_model_version_download_uri(self, name, version):
        response = self._call_endpoint(
            "GET", "model-versions/get-download-uri", {"name": name, "version": str(version)}
        )
        return response.get("artifact_uri")

    def search_model_versions(
        self,
        filter_string=None,
        max_results=SEARCH_MODEL_VERSION_MAX_RESULTS_DEFAULT,
        order_by=None,
        page_token=None,
    ):
        """
        Search for model versions in backend that satisfy the filter criteria.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.ModelVersion` objects.
        """
        response = self._call_endpoint(
            "GET",
            "model-versions/search",
            {
                "filter": filter_string,
                "max_results": max_results,
                "order_by": order_by,
                "page_token": page_token,
            },
        )
        model_versions = [
            ModelVersion.from_dictionary(model_version)
            for model_version in response.get("model_versions", [])
        ]
        return PagedList(model_versions, response.get("next_page_token"))

    def set_model_version_tag(self, name, version, tag):
        _validate_tag(tag.key, tag.value)
        self._call_endpoint(
            "POST",
            "model-versions/set-tag",
            {"name": name, "version": str(version), "key": tag.key, "value": tag.value},
        )

    def delete_model_version_tag(self, name, version, key):
        self._call_endpoint(
            "DELETE",
            "model-versions/delete-tag",
            {"name": name, "version": str(version), "key": key},
        )
