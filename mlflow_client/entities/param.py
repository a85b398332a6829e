from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.validation import _validate_required_fields


class Param(_MlflowObject):
    """
    Parameter object.
    """

    def __init__(self, key, value):
        self._key = key
        self._value = value

    @property
    def key(self):
        """String key corresponding to the parameter name."""
        return self._key

    @property
    def value(self):
        """String value of the parameter."""
        return self._value

    def __eq__(self, __o):
        if isinstance(__o, self.__class__):
            return self._key == __o._key and self._value == __o._value

        return False

    def __hash__(self):
        return hash((self._key, self._value))

    def to_dictionary(self):
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dictionary(cls, param_dict):
        _validate_required_fields(param_dict, ["key"], "param")
        value = param_dict.get("value")
        return cls(param_dict["key"], "" if value is None else str(value))
