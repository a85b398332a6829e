import pytest

from mlflow_client.entities import ModelStage, ModelTag, ModelVersion, ModelVersionStatus
from mlflow_client.entities.model_registry.model_version_stages import get_canonical_stage
from mlflow_client.exceptions import MlflowException


def test_model_version_from_dictionary():
    model_version = ModelVersion.from_dictionary(
        {
            "name": "clf",
            "version": 3,
            "creation_timestamp": "100",
            "current_stage": "production",
            "source": "runs:/abc/model",
            "run_id": "abc",
            "status": "PENDING_REGISTRATION",
            "tags": [{"key": "owner", "value": "ml"}],
            "aliases": ["champion"],
        }
    )
    assert model_version.version == "3"
    assert model_version.creation_timestamp == 100
    assert model_version.current_stage == ModelStage.PRODUCTION
    assert model_version.status == ModelVersionStatus.PENDING_REGISTRATION
    assert model_version.status.is_pending
    assert model_version.tags.get("owner") == ModelTag("owner", "ml")
    assert model_version.aliases == ["champion"]


def test_model_version_defaults():
    model_version = ModelVersion("clf", "1")
    assert model_version.current_stage == ModelStage.NONE
    assert model_version.status.is_ready
    assert model_version.tags.is_empty()


def test_model_version_round_trip():
    model_version = ModelVersion(
        "clf", "2", current_stage="Staging", tags=[ModelTag("a", "b")], aliases=["challenger"]
    )
    restored = ModelVersion.from_dictionary(model_version.to_dictionary())
    assert restored.current_stage == ModelStage.STAGING
    assert restored.tags == model_version.tags
    assert restored.aliases == ["challenger"]


@pytest.mark.parametrize(
    ("stage", "expected"),
    [
        ("none", ModelStage.NONE),
        ("STAGING", ModelStage.STAGING),
        ("Production", ModelStage.PRODUCTION),
        (ModelStage.ARCHIVED, ModelStage.ARCHIVED),
    ],
)
def test_get_canonical_stage(stage, expected):
    assert get_canonical_stage(stage) == expected


def test_get_canonical_stage_rejects_unknown_stage():
    with pytest.raises(MlflowException, match="Invalid Model Version stage: dev") as e:
        get_canonical_stage("dev")
    assert e.value.error_code == "INVALID_PARAMETER_VALUE"


def test_stage_properties():
    assert ModelStage.PRODUCTION.is_deployed
    assert ModelStage.STAGING.is_deployed
    assert not ModelStage.NONE.is_deployed
    assert not ModelStage.ARCHIVED.is_active
    assert ModelStage.PRODUCTION.priority > ModelStage.STAGING.priority > ModelStage.NONE.priority
    assert ModelStage.ARCHIVED.can_transition_to(ModelStage.PRODUCTION)
