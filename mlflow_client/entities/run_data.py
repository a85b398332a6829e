from mlflow_client.collection.metric_collection import MetricCollection
from mlflow_client.collection.parameter_collection import ParameterCollection
from mlflow_client.collection.tag_collection import TagCollection
from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.entities.run_tag import RunTag


class RunData(_MlflowObject):
    """
    Run data (metrics, parameters and tags).
    """

    def __init__(self, metrics=None, params=None, tags=None):
        """
        Construct a new :py:class:`mlflow_client.entities.RunData` instance.

        Args:
            metrics: Iterable of :py:class:`mlflow_client.entities.Metric`.
            params: Iterable of :py:class:`mlflow_client.entities.Param`.
            tags: Iterable of :py:class:`mlflow_client.entities.RunTag`.
        """
        self._metrics = MetricCollection(metrics)
        self._params = ParameterCollection(params)
        self._tags = TagCollection(tags)

    @property
    def metrics(self):
        """
        :py:class:`MetricCollection <mlflow_client.collection.MetricCollection>` of the run.
        The server only returns the latest value of every metric here; use
        :py:meth:`MlflowClient.get_metric_history` for the full series.
        """
        return self._metrics

    @property
    def params(self):
        """:py:class:`ParameterCollection <mlflow_client.collection.ParameterCollection>`."""
        return self._params

    @property
    def tags(self):
        """:py:class:`TagCollection <mlflow_client.collection.TagCollection>`."""
        return self._tags

    def to_dictionary(self):
        return {
            "metrics": self.metrics.to_list(),
            "params": self.params.to_list(),
            "tags": self.tags.to_list(),
        }

    @classmethod
    def from_dictionary(cls, run_data_dict):
        run_data_dict = run_data_dict or {}
        return cls(
            metrics=MetricCollection.from_dictionaries(run_data_dict.get("metrics", [])),
            params=ParameterCollection.from_dictionaries(run_data_dict.get("params", [])),
            tags=TagCollection.from_dictionaries(run_data_dict.get("tags", []), RunTag),
        )
