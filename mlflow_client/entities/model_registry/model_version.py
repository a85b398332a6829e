from mlflow_client.collection.tag_collection import TagCollection
from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.model_registry.model_version_stages import (
    ModelStage,
    get_canonical_stage,
)
from mlflow_client.entities.model_registry.model_version_status import ModelVersionStatus
from mlflow_client.entities.model_tag import ModelTag
from mlflow_client.utils.validation import _validate_required_fields


class ModelVersion(_MlflowObject):
    """
    MLflow entity for Model Version.
    """

    def __init__(
        self,
        name,
        version,
        creation_timestamp=None,
        last_updated_timestamp=None,
        description=None,
        user_id=None,
        current_stage=None,
        source=None,
        run_id=None,
        status=ModelVersionStatus.READY,
        status_message=None,
        tags=None,
        run_link=None,
        aliases=None,
    ):
        super().__init__()
        self._name = name
        self._version = version
        self._creation_time = creation_timestamp
        self._last_updated_timestamp = last_updated_timestamp
        self._description = description
        self._user_id = user_id
        self._current_stage = (
            get_canonical_stage(current_stage) if current_stage is not None else ModelStage.NONE
        )
        self._source = source
        self._run_id = run_id
        self._run_link = run_link
        self._status = ModelVersionStatus(status) if status is not None else None
        self._status_message = status_message
        self._tags = TagCollection(tags)
        self._aliases = list(aliases or [])

    @property
    def name(self):
        """String. Unique name within Model Registry."""
        return self._name

    @property
    def version(self):
        """String version number."""
        return self._version

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
    def user_id(self):
        """String. User ID that created this model version."""
        return self._user_id

    @property
    def current_stage(self):
        """:py:class:`ModelStage` of the model version."""
        return self._current_stage

    @property
    def source(self):
        """String. Source path for the model."""
        return self._source

    @property
    def run_id(self):
        """String. MLflow run ID that generated this model."""
        return self._run_id

    @property
    def run_link(self):
        """String. MLflow run link referring to the exact run that generated this model version."""
        return self._run_link

    @property
    def status(self):
        """:py:class:`ModelVersionStatus` of the model version."""
        return self._status

    @property
    def status_message(self):
        """String. Descriptive message for error status conditions."""
        return self._status_message

    @property
    def tags(self):
        """:py:class:`TagCollection` of :py:class:`ModelTag` for the model version."""
        return self._tags

    @property
    def aliases(self):
        """List of aliases (string) for the current model version."""
        return self._aliases

    def to_dictionary(self):
        model_version = {"name": self.name, "version": self.version}
        optional = {
            "creation_timestamp": self.creation_timestamp,
            "last_updated_timestamp": self.last_updated_timestamp,
            "description": self.description,
            "user_id": self.user_id,
            "current_stage": self.current_stage.value,
            "source": self.source,
            "run_id": self.run_id,
            "run_link": self.run_link,
            "status": self.status.value if self.status is not None else None,
            "status_message": self.status_message,
        }
        model_version.update({k: v for k, v in optional.items() if v is not None})
        if not self.tags.is_empty():
            model_version["tags"] = self.tags.to_list()
        if self.aliases:
            model_version["aliases"] = list(self.aliases)
        return model_version

    @classmethod
    def from_dictionary(cls, model_version_dict):
        _validate_required_fields(model_version_dict, ["name", "version"], "model version")
        creation_timestamp = model_version_dict.get("creation_timestamp")
        last_updated_timestamp = model_version_dict.get("last_updated_timestamp")
        return cls(
            name=model_version_dict["name"],
            version=str(model_version_dict["version"]),
            creation_timestamp=int(creation_timestamp) if creation_timestamp else None,
            last_updated_timestamp=(
                int(last_updated_timestamp) if last_updated_timestamp else None
            ),
            description=model_version_dict.get("description"),
            user_id=model_version_dict.get("user_id"),
            current_stage=model_version_dict.get("current_stage"),
            source=model_version_dict.get("source"),
            run_id=model_version_dict.get("run_id"),
            status=model_version_dict.get("status", ModelVersionStatus.READY),
            status_message=model_version_dict.get("status_message"),
            tags=TagCollection.from_dictionaries(model_version_dict.get("tags", []), ModelTag),
            run_link=model_version_dict.get("run_link"),
            aliases=model_version_dict.get("aliases", []),
        )
