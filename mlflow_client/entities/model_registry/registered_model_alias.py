from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.validation import _validate_required_fields


class RegisteredModelAlias(_MlflowObject):
    """Alias object associated with a registered model."""

    def __init__(self, alias, version):
        self._alias = alias
        self._version = version

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return False

    @property
    def alias(self):
        """String name of the alias."""
        return self._alias

    @property
    def version(self):
        """String model version number that the alias points to."""
        return self._version

    def to_dictionary(self):
        return {"alias": self.alias, "version": self.version}

    @classmethod
    def from_dictionary(cls, alias_dict):
        _validate_required_fields(alias_dict, ["alias", "version"], "registered model alias")
        return cls(alias_dict["alias"], str(alias_dict["version"]))
