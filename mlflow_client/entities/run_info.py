from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.lifecycle_stage import LifecycleStage
from mlflow_client.entities.run_status import RunStatus
from mlflow_client.exceptions import INVALID_PARAMETER_VALUE, MlflowException
from mlflow_client.utils.validation import _validate_required_fields


def check_run_is_active(run_info):
    if run_info.lifecycle_stage != LifecycleStage.ACTIVE:
        raise MlflowException(
            f"The run {run_info.run_id} must be in 'active' lifecycle_stage.",
            error_code=INVALID_PARAMETER_VALUE,
        )


class RunInfo(_MlflowObject):
    """
    Metadata about a run.
    """

    def __init__(
        self,
        run_id,
        experiment_id,
        user_id,
        status,
        start_time,
        end_time,
        lifecycle_stage,
        artifact_uri=None,
        run_name=None,
    ):
        if experiment_id is None:
            raise MlflowException.invalid_parameter_value("experiment_id cannot be None")
        if run_id is None:
            raise MlflowException.invalid_parameter_value("run_id cannot be None")
        self._run_id = run_id
        self._experiment_id = experiment_id
        self._user_id = user_id
        self._status = RunStatus.from_string(status)
        self._start_time = start_time
        self._end_time = end_time
        self._lifecycle_stage = lifecycle_stage
        self._artifact_uri = artifact_uri
        self._run_name = run_name

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return False

    @property
    def run_id(self):
        """String containing run id."""
        return self._run_id

    @property
    def experiment_id(self):
        """String ID of the experiment for the current run."""
        return self._experiment_id

    @property
    def run_name(self):
        """String containing run name."""
        return self._run_name

    @property
    def user_id(self):
        """String ID of the user who initiated this run."""
        return self._user_id

    @property
    def status(self):
        """
        One of the values in :py:class:`mlflow_client.entities.RunStatus`
        describing the status of the run.
        """
        return self._status

    @property
    def start_time(self):
        """Start time of the run, in number of milliseconds since the UNIX epoch."""
        return self._start_time

    @property
    def end_time(self):
        """End time of the run, in number of milliseconds since the UNIX epoch."""
        return self._end_time

    @property
    def artifact_uri(self):
        """String root artifact URI of the run."""
        return self._artifact_uri

    @property
    def lifecycle_stage(self):
        return self._lifecycle_stage

    @property
    def is_terminated(self):
        return RunStatus.is_terminated(self._status)

    def to_dictionary(self):
        run_info = {
            "run_id": self.run_id,
            "run_uuid": self.run_id,
            "experiment_id": self.experiment_id,
            "user_id": self.user_id,
            "status": self.status.value,
            "start_time": self.start_time,
            "lifecycle_stage": self.lifecycle_stage,
        }
        if self.end_time is not None:
            run_info["end_time"] = self.end_time
        if self.artifact_uri is not None:
            run_info["artifact_uri"] = self.artifact_uri
        if self.run_name is not None:
            run_info["run_name"] = self.run_name
        return run_info

    @classmethod
    def from_dictionary(cls, run_info_dict):
        _validate_required_fields(run_info_dict, ["experiment_id"], "run info")
        run_id = run_info_dict.get("run_id") or run_info_dict.get("run_uuid")
        if run_id is None:
            raise MlflowException.invalid_parameter_value(
                f"Missing value for required parameter 'run_id'. "
                f"Cannot construct a run info from {run_info_dict}"
            )
        # An absent or zero end time means the run has not ended.
        end_time = run_info_dict.get("end_time") or None
        start_time = run_info_dict.get("start_time")
        return cls(
            run_id=run_id,
            experiment_id=str(run_info_dict["experiment_id"]),
            user_id=run_info_dict.get("user_id", ""),
            status=run_info_dict.get("status", RunStatus.RUNNING),
            start_time=int(start_time) if start_time is not None else None,
            end_time=int(end_time) if end_time is not None else None,
            lifecycle_stage=run_info_dict.get("lifecycle_stage", LifecycleStage.ACTIVE),
            artifact_uri=run_info_dict.get("artifact_uri"),
            run_name=run_info_dict.get("run_name"),
        )
