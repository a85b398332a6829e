from mlflow_client.collection.tag_collection import TagCollection
from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.experiment_tag import ExperimentTag
from mlflow_client.entities.lifecycle_stage import LifecycleStage
from mlflow_client.utils.validation import _validate_required_fields


class Experiment(_MlflowObject):
    """
    Experiment object.
    """

    DEFAULT_EXPERIMENT_NAME = "Default"

    def __init__(
        self,
        experiment_id,
        name,
        artifact_location,
        lifecycle_stage,
        tags=None,
        creation_time=None,
        last_update_time=None,
    ):
        super().__init__()
        self._experiment_id = experiment_id
        self._name = name
        self._artifact_location = artifact_location
        self._lifecycle_stage = lifecycle_stage
        self._tags = TagCollection(tags)
        self._creation_time = creation_time
        self._last_update_time = last_update_time

    @property
    def experiment_id(self):
        """String ID of the experiment."""
        return self._experiment_id

    @property
    def name(self):
        """String name of the experiment."""
        return self._name

    @property
    def artifact_location(self):
        """String corresponding to the root artifact URI for the experiment."""
        return self._artifact_location

    @property
    def lifecycle_stage(self):
        """Lifecycle stage of the experiment. Can either be 'active' or 'deleted'."""
        return self._lifecycle_stage

    @property
    def tags(self):
        """Tags that have been set on the experiment."""
        return self._tags

    @property
    def creation_time(self):
        return self._creation_time

    @property
    def last_update_time(self):
        return self._last_update_time

    def to_dictionary(self):
        experiment = {
            "experiment_id": self.experiment_id,
            "name": self.name,
            "artifact_location": self.artifact_location,
            "lifecycle_stage": self.lifecycle_stage,
            "tags": self.tags.to_list(),
        }
        if self.creation_time is not None:
            experiment["creation_time"] = self.creation_time
        if self.last_update_time is not None:
            experiment["last_update_time"] = self.last_update_time
        return experiment

    @classmethod
    def from_dictionary(cls, experiment_dict):
        _validate_required_fields(experiment_dict, ["experiment_id", "name"], "experiment")
        return cls(
            experiment_id=str(experiment_dict["experiment_id"]),
            name=experiment_dict["name"],
            artifact_location=experiment_dict.get("artifact_location"),
            lifecycle_stage=experiment_dict.get("lifecycle_stage", LifecycleStage.ACTIVE),
            tags=TagCollection.from_dictionaries(experiment_dict.get("tags", []), ExperimentTag),
            creation_time=experiment_dict.get("creation_time"),
            last_update_time=experiment_dict.get("last_update_time"),
        )
