from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.validation import _validate_required_fields


class Dataset(_MlflowObject):
    """Dataset registered on the tracking server, optionally linked to experiments."""

    def __init__(
        self,
        dataset_id,
        name,
        experiment_id=None,
        tags=None,
        digest=None,
        source_type=None,
        source=None,
        schema=None,
        profile=None,
        creation_time=None,
        last_update_time=None,
    ):
        self._dataset_id = dataset_id
        self._name = name
        self._experiment_id = experiment_id
        self._tags = dict(tags or {})
        self._digest = digest
        self._source_type = source_type
        self._source = source
        self._schema = schema
        self._profile = profile
        self._creation_time = creation_time
        self._last_update_time = last_update_time

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return False

    @property
    def dataset_id(self):
        """String ID of the dataset."""
        return self._dataset_id

    @property
    def name(self):
        """String name of the dataset."""
        return self._name

    @property
    def experiment_id(self):
        """ID of the experiment the dataset was created in, or None."""
        return self._experiment_id

    @property
    def tags(self):
        """Dictionary of tag key to tag value."""
        return self._tags

    @property
    def digest(self):
        return self._digest

    @property
    def source_type(self):
        """Kind of the dataset source, e.g. ``http`` or ``delta_table``."""
        return self._source_type

    @property
    def source(self):
        return self._source

    @property
    def schema(self):
        return self._schema

    @property
    def profile(self):
        return self._profile

    @property
    def creation_time(self):
        return self._creation_time

    @property
    def last_update_time(self):
        return self._last_update_time

    def to_dictionary(self):
        dataset = {"dataset_id": self.dataset_id, "name": self.name, "tags": dict(self.tags)}
        for key in (
            "experiment_id",
            "digest",
            "source_type",
            "source",
            "schema",
            "profile",
            "creation_time",
            "last_update_time",
        ):
            if (value := getattr(self, key)) is not None:
                dataset[key] = value
        return dataset

    @classmethod
    def from_dictionary(cls, dataset_dict):
        _validate_required_fields(dataset_dict, ["name"], "dataset")
        # Some servers name the ID field `id`
        dataset_id = dataset_dict.get("dataset_id", dataset_dict.get("id"))
        _validate_required_fields({"dataset_id": dataset_id}, ["dataset_id"], "dataset")
        experiment_id = dataset_dict.get("experiment_id")
        return cls(
            dataset_id=str(dataset_id),
            name=dataset_dict["name"],
            experiment_id=str(experiment_id) if experiment_id is not None else None,
            tags=_tags_from_json(dataset_dict.get("tags")),
            digest=dataset_dict.get("digest"),
            source_type=dataset_dict.get("source_type"),
            source=dataset_dict.get("source"),
            schema=dataset_dict.get("schema"),
            profile=dataset_dict.get("profile"),
            creation_time=_optional_int(dataset_dict.get("creation_time")),
            last_update_time=_optional_int(dataset_dict.get("last_update_time")),
        )


def _tags_from_json(tags):
    # Tags come back either as a map or as a list of {"key", "value"} objects
    if isinstance(tags, list):
        return {tag["key"]: tag.get("value", "") for tag in tags}
    return dict(tags or {})


def _optional_int(value):
    return int(value) if value is not None else None
