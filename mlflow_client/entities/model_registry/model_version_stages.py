from enum import Enum

from mlflow_client.exceptions import MlflowException


class ModelStage(str, Enum):
    """Stage of a model version. A version may move from any stage to any other stage."""

    NONE = "None"
    STAGING = "Staging"
    PRODUCTION = "Production"
    ARCHIVED = "Archived"

    @property
    def is_active(self):
        return self is not ModelStage.ARCHIVED

    @property
    def is_deployed(self):
        return self in DEPLOYABLE_STAGES

    @property
    def priority(self):
        return _STAGE_PRIORITY[self]

    def can_transition_to(self, target_stage):
        return True


DEPLOYABLE_STAGES = (ModelStage.STAGING, ModelStage.PRODUCTION)

_STAGE_PRIORITY = {
    ModelStage.PRODUCTION: 3,
    ModelStage.STAGING: 2,
    ModelStage.NONE: 1,
    ModelStage.ARCHIVED: 0,
}

_CANONICAL_MAPPING = {stage.value.lower(): stage for stage in ModelStage}


def get_canonical_stage(stage):
    """
    Returns the :py:class:`ModelStage` named by ``stage``, compared case-insensitively.
    """
    key = stage.value.lower() if isinstance(stage, ModelStage) else str(stage).lower()
    if key not in _CANONICAL_MAPPING:
        raise MlflowException.invalid_parameter_value(
            f"Invalid Model Version stage: {stage}. "
            f"Value must be one of {', '.join(stage.value for stage in ModelStage)}."
        )
    return _CANONICAL_MAPPING[key]
