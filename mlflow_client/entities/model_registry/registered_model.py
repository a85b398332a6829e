from mlflow_client.collection.tag_collection import TagCollection
from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.model_registry.model_version import ModelVersion
from mlflow_client.entities.model_registry.registered_model_alias import RegisteredModelAlias
from mlflow_client.entities.model_tag import ModelTag
from mlflow_client.utils.validation import _validate_required_fields


class RegisteredModel(_MlflowObject):
    """
    MLflow entity for Registered Model.
    """

    def __init__(
        self,
        name,
        creation_timestamp=None,
        last_updated_timestamp=None,
        description=None,
        latest_versions=None,
        tags=None,
        aliases=None,
    ):
        super().__init__()
        self._name = name
        self._creation_time = creation_timestamp
        self._last_updated_timestamp = last_updated_timestamp
        self._description = description
        self._latest_version = list(latest_versions or [])
        self._tags = TagCollection(tags)
        self._aliases = list(aliases or [])

    @property
    def name(self):
        """String. Registered model name."""
        return self._name

    @property
    def creation_timestamp(self):
        """Integer. Model version creation timestamp (milliseconds since the Unix epoch)."""
        return self._creation_time

    @property
    def last_updated_timestamp(self):
        """Integer. Timestamp of last update for this model version (milliseconds since the Unix
        epoch).
        """
        return self._last_updated_timestamp

    @property
    def description(self):
        """String. Description"""
        return self._description

    @property
    def latest_versions(self):
        """List of the latest :py:class:`ModelVersion` instances for each stage"""
        return self._latest_version

    @property
    def tags(self):
        """:py:class:`TagCollection` of :py:class:`ModelTag` for the registered model."""
        return self._tags

    @property
    def aliases(self):
        """List of :py:class:`RegisteredModelAlias` of the registered model."""
        return self._aliases

    def get_version_for_alias(self, alias):
        for model_alias in self._aliases:
            if model_alias.alias == alias:
                return model_alias.version

    def to_dictionary(self):
        registered_model = {"name": self.name}
        if self.creation_timestamp is not None:
            registered_model["creation_timestamp"] = self.creation_timestamp
        if self.last_updated_timestamp is not None:
            registered_model["last_updated_timestamp"] = self.last_updated_timestamp
        if self.description is not None:
            registered_model["description"] = self.description
        if self.latest_versions:
            registered_model["latest_versions"] = [
                model_version.to_dictionary() for model_version in self.latest_versions
            ]
        if not self.tags.is_empty():
            registered_model["tags"] = self.tags.to_list()
        if self.aliases:
            registered_model["aliases"] = [alias.to_dictionary() for alias in self.aliases]
        return registered_model

    @classmethod
    def from_dictionary(cls, registered_model_dict):
        _validate_required_fields(registered_model_dict, ["name"], "registered model")
        creation_timestamp = registered_model_dict.get("creation_timestamp")
        last_updated_timestamp = registered_model_dict.get("last_updated_timestamp")
        return cls(
            name=registered_model_dict["name"],
            creation_timestamp=int(creation_timestamp) if creation_timestamp else None,
            last_updated_timestamp=(
                int(last_updated_timestamp) if last_updated_timestamp else None
            ),
            description=registered_model_dict.get("description"),
            latest_versions=[
                ModelVersion.from_dictionary(model_version)
                for model_version in registered_model_dict.get("latest_versions", [])
            ],
            tags=TagCollection.from_dictionaries(registered_model_dict.get("tags", []), ModelTag),
            aliases=[
                RegisteredModelAlias.from_dictionary(alias)
                for alias in registered_model_dict.get("aliases", [])
            ],
        )
