"""
The ``mlflow_client.tracking`` module provides the :py:class:`MlflowClient` facade over the
tracking and model registry REST APIs, and the builders that create runs, experiments and
registered models.
"""

from mlflow_client.tracking.client import MlflowClient
from mlflow_client.tracking.experiment_builder import ExperimentBuilder
from mlflow_client.tracking.model_builder import ModelBuilder
from mlflow_client.tracking.run_builder import RunBuilder

__all__ = [
    "ExperimentBuilder",
    "MlflowClient",
    "ModelBuilder",
    "RunBuilder",
]
