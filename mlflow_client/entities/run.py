from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.run_data import RunData
from mlflow_client.entities.run_info import RunInfo
from mlflow_client.exceptions import MlflowException
from mlflow_client.utils.validation import _validate_required_fields


class Run(_MlflowObject):
    """
    Run object.
    """

    def __init__(self, run_info: RunInfo, run_data: RunData) -> None:
        if run_info is None:
            raise MlflowException.invalid_parameter_value("run_info cannot be None")
        self._info = run_info
        self._data = run_data if run_data is not None else RunData()

    @property
    def info(self) -> RunInfo:
        """
        The run metadata, such as the run id, start time, and status.

        :rtype: :py:class:`mlflow_client.entities.RunInfo`
        """
        return self._info

    @property
    def data(self) -> RunData:
        """
        The run data, including metrics, parameters, and tags.

        :rtype: :py:class:`mlflow_client.entities.RunData`
        """
        return self._data

    def to_dictionary(self):
        return {
            "info": self.info.to_dictionary(),
            "data": self.data.to_dictionary(),
        }

    @classmethod
    def from_dictionary(cls, run_dict):
        _validate_required_fields(run_dict, ["info"], "run")
        return cls(
            RunInfo.from_dictionary(run_dict["info"]),
            RunData.from_dictionary(run_dict.get("data")),
        )
