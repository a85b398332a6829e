from mlflow_client.entities.model_registry.model_version import ModelVersion
from mlflow_client.entities.model_registry.model_version_stages import ModelStage
from mlflow_client.entities.model_registry.model_version_status import ModelVersionStatus
from mlflow_client.entities.model_registry.registered_model import RegisteredModel
from mlflow_client.entities.model_registry.registered_model_alias import RegisteredModelAlias

__all__ = [
    "ModelStage",
    "ModelVersion",
    "ModelVersionStatus",
    "RegisteredModel",
    "RegisteredModelAlias",
]
