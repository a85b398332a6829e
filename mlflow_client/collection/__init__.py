from mlflow_client.collection.metric_collection import MetricCollection, MinMax
from mlflow_client.collection.parameter_collection import ParameterCollection
from mlflow_client.collection.tag_collection import TagCollection

__all__ = [
    "MetricCollection",
    "MinMax",
    "ParameterCollection",
    "TagCollection",
]
