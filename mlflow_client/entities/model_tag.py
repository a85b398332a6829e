from mlflow_client.entities.base_tag import BaseTag


class ModelTag(BaseTag):
    """Tag object associated with a registered model or a model version."""
