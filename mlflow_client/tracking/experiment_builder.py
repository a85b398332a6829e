from mlflow_client.entities import ExperimentTag


class ExperimentBuilder:
    """
    Accumulates the configuration of a new experiment and creates it with a single request.

    Args:
        store: :py:class:`RestStore <mlflow_client.store.rest_store.RestStore>`.
        name: Name of the experiment.
    """

    def __init__(self, store, name):
        self._store = store
        self._name = name
        self._artifact_location = None
        self._tags = {}

    def with_artifact_location(self, location):
        self._artifact_location = location
        return self

    def with_tag(self, key, value):
        self._tags[key] = str(value)
        return self

    def with_tags(self, tags):
        for key, value in tags.items():
            self.with_tag(key, value)
        return self

    def create(self):
        """
        :return: The ID of the created experiment.
        """
        return self._store.create_experiment(
            self._name,
            artifact_location=self._artifact_location,
            tags=[ExperimentTag(key, value) for key, value in self._tags.items()],
        )
