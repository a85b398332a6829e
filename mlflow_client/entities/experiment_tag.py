from mlflow_client.entities.base_tag import BaseTag


class ExperimentTag(BaseTag):
    """Tag object associated with an experiment."""
