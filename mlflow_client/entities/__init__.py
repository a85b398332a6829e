"""
The ``mlflow_client.entities`` module defines entities returned by the MLflow
`REST API <https://mlflow.org/docs/latest/rest-api.html>`_.
"""

# Leaf value objects first: the collections imported by RunData and Experiment depend on them.
from mlflow_client.entities.metric import Metric
from mlflow_client.entities.param import Param
from mlflow_client.entities.run_tag import RunTag
from mlflow_client.entities.experiment_tag import ExperimentTag
from mlflow_client.entities.model_tag import ModelTag
from mlflow_client.entities.file_info import FileInfo
from mlflow_client.entities.lifecycle_stage import LifecycleStage
from mlflow_client.entities.view_type import ViewType
from mlflow_client.entities.run_status import RunStatus
from mlflow_client.entities.run_info import RunInfo
from mlflow_client.entities.run_data import RunData
from mlflow_client.entities.run import Run
from mlflow_client.entities.experiment import Experiment
from mlflow_client.entities.dataset import Dataset
from mlflow_client.entities.span_status import SpanStatusCode
from mlflow_client.entities.span_event import SpanEvent
from mlflow_client.entities.span import JsonValue, Span, SpanType
from mlflow_client.entities.trace_state import TraceState
from mlflow_client.entities.trace_location import (
    MlflowExperimentLocation,
    TraceLocation,
    TraceLocationType,
)
from mlflow_client.entities.trace_info import TraceInfo
from mlflow_client.entities.trace_data import TraceData
from mlflow_client.entities.trace import Trace
from mlflow_client.entities.model_registry import (
    ModelStage,
    ModelVersion,
    ModelVersionStatus,
    RegisteredModel,
    RegisteredModelAlias,
)

__all__ = [
    "Dataset",
    "Experiment",
    "ExperimentTag",
    "FileInfo",
    "JsonValue",
    "LifecycleStage",
    "Metric",
    "MlflowExperimentLocation",
    "ModelStage",
    "ModelTag",
    "ModelVersion",
    "ModelVersionStatus",
    "Param",
    "RegisteredModel",
    "RegisteredModelAlias",
    "Run",
    "RunData",
    "RunInfo",
    "RunStatus",
    "RunTag",
    "Span",
    "SpanEvent",
    "SpanStatusCode",
    "SpanType",
    "Trace",
    "TraceData",
    "TraceInfo",
    "TraceLocation",
    "TraceLocationType",
    "TraceState",
    "ViewType",
]
