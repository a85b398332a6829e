"""
The ``mlflow_client`` module provides a typed Python client for the MLflow Tracking REST API.

Use :py:class:`MlflowClient <mlflow_client.tracking.MlflowClient>` to create and query
experiments, runs, traces and registered models::

    from mlflow_client import MlflowClient

    client = MlflowClient("http://localhost:5000")
    experiment_id = client.create_experiment_builder("my-experiment").create()
    run = (
        client.create_run_builder(experiment_id)
        .with_name("baseline")
        .with_param("lr", 0.01)
        .with_metric("loss", 0.25)
        .start()
    )
"""

from mlflow_client.environment_variables import MLFLOW_CONFIGURE_LOGGING
from mlflow_client.utils.logging_utils import (
    _configure_loggers,
    disable_logging,
    enable_logging,
)
from mlflow_client.version import VERSION

__version__ = VERSION

if MLFLOW_CONFIGURE_LOGGING.get():
    _configure_loggers(root_module_name=__name__)

# Entities must be imported before the collections that depend on them.
from mlflow_client import entities  # noqa: E402
from mlflow_client import collection  # noqa: E402
from mlflow_client.collection import (  # noqa: E402
    MetricCollection,
    ParameterCollection,
    TagCollection,
)
from mlflow_client.entities import (  # noqa: E402
    Experiment,
    Metric,
    Param,
    Run,
    RunStatus,
    Trace,
)
from mlflow_client.exceptions import MlflowException, RestException  # noqa: E402
from mlflow_client.tracing import SpanBuilder, TraceBuilder  # noqa: E402
from mlflow_client.tracking import (  # noqa: E402
    ExperimentBuilder,
    MlflowClient,
    ModelBuilder,
    RunBuilder,
)

__all__ = [
    "Experiment",
    "ExperimentBuilder",
    "Metric",
    "MetricCollection",
    "MlflowClient",
    "MlflowException",
    "ModelBuilder",
    "Param",
    "ParameterCollection",
    "RestException",
    "Run",
    "RunBuilder",
    "RunStatus",
    "SpanBuilder",
    "TagCollection",
    "Trace",
    "TraceBuilder",
    "collection",
    "disable_logging",
    "enable_logging",
    "entities",
]
