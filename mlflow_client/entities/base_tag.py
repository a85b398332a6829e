from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.mlflow_tags import is_system_tag
from mlflow_client.utils.validation import _validate_required_fields


class BaseTag(_MlflowObject):
    """Base Tag object."""

    def __init__(self, key: str, value: str) -> None:
        self._key = key
        self._value = value

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return False

    def __hash__(self):
        return hash((type(self).__name__, self._key, self._value))

    @property
    def key(self):
        """String name of the tag."""
        return self._key

    @property
    def value(self):
        """String value of the tag."""
        return self._value

    @property
    def is_system_tag(self):
        """True if the tag lives in the reserved ``mlflow.`` namespace."""
        return is_system_tag(self._key)

    @classmethod
    def _properties(cls):
        return ["key", "value"]

    def to_dictionary(self):
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dictionary(cls, tag_dict):
        _validate_required_fields(tag_dict, ["key"], cls.__name__)
        value = tag_dict.get("value")
        return cls(tag_dict["key"], "" if value is None else str(value))
