from mlflow_client.collection._keyed_collection import _KeyedCollection
from mlflow_client.entities.run_tag import RunTag
from mlflow_client.utils.mlflow_tags import is_system_tag


class TagCollection(_KeyedCollection):
    """
    Tags of a run, experiment or model, keyed by tag name.

    Tags in the ``mlflow.`` namespace are system tags, all the others are user tags. The
    distinction is only used for querying.
    """

    _item_class = RunTag

    def filter_system_tags(self):
        return self.filter(lambda tag: is_system_tag(tag.key))

    def filter_user_tags(self):
        return self.filter(lambda tag: not is_system_tag(tag.key))
