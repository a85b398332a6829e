from mlflow_client.entities.base_tag import BaseTag


class RunTag(BaseTag):
    """Tag object associated with a run."""
