from mlflow_client.entities import ModelTag


class ModelBuilder:
    """
    Accumulates the configuration of a new registered model and creates it with a single
    request.

    Args:
        registry_store: :py:class:`ModelRegistryRestStore
            <mlflow_client.store.model_registry_rest_store.ModelRegistryRestStore>`.
        name: Name of the registered model.
    """

    def __init__(self, registry_store, name):
        self._registry_store = registry_store
        self._name = name
        self._description = None
        self._tags = {}

    def with_description(self, description):
        self._description = description
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
        :return: The created :py:class:`RegisteredModel <mlflow_client.entities.RegisteredModel>`.
        """
        return self._registry_store.create_registered_model(
            self._name,
            tags=[ModelTag(key, value) for key, value in self._tags.items()],
            description=self._description,
        )
