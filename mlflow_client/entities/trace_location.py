from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from mlflow_client.exceptions import MlflowException


class TraceLocationType(str, Enum):
    TRACE_LOCATION_TYPE_UNSPECIFIED = "TRACE_LOCATION_TYPE_UNSPECIFIED"
    MLFLOW_EXPERIMENT = "MLFLOW_EXPERIMENT"


@dataclass(frozen=True)
class MlflowExperimentLocation:
    """
    Represents the location of an MLflow experiment.

    Args:
        experiment_id: The ID of the MLflow experiment where the trace is stored.
    """

    experiment_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"experiment_id": self.experiment_id}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "MlflowExperimentLocation":
        return cls(experiment_id=str(d["experiment_id"]))


@dataclass(frozen=True)
class TraceLocation:
    """
    Represents the location where the trace is stored. Only MLflow experiments are supported.

    Args:
        type: The type of the trace location.
        mlflow_experiment: The experiment location. Set when ``type`` is
            ``MLFLOW_EXPERIMENT``.
    """

    type: TraceLocationType
    mlflow_experiment: Optional[MlflowExperimentLocation] = None

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            object.__setattr__(self, "type", TraceLocationType(self.type))
        if self.type == TraceLocationType.MLFLOW_EXPERIMENT and self.mlflow_experiment is None:
            raise MlflowException.invalid_parameter_value(
                "`mlflow_experiment` must be set for a MLFLOW_EXPERIMENT trace location."
            )

    def to_dict(self) -> dict[str, Any]:
        d = {"type": self.type.value}
        if self.mlflow_experiment:
            d["mlflow_experiment"] = self.mlflow_experiment.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "TraceLocation":
        if mlflow_experiment := d.get("mlflow_experiment"):
            experiment_id = mlflow_experiment.get("experiment_id", "0")
        else:
            # Flat shape: {"experiment_id": ...}
            experiment_id = d.get("experiment_id", "0")
        return cls.from_experiment_id(str(experiment_id))

    @classmethod
    def from_experiment_id(cls, experiment_id: str) -> "TraceLocation":
        return cls(
            type=TraceLocationType.MLFLOW_EXPERIMENT,
            mlflow_experiment=MlflowExperimentLocation(experiment_id=experiment_id),
        )
