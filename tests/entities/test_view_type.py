import pytest

from mlflow_client.entities import LifecycleStage, ViewType


def test_to_and_from_string():
    assert ViewType.from_string("active_only") == ViewType.ACTIVE_ONLY
    assert ViewType.to_string(ViewType.DELETED_ONLY) == "deleted_only"
    with pytest.raises(Exception, match="Could not get valid view type"):
        ViewType.from_string("bogus")


@pytest.mark.parametrize(
    ("view_type", "stages"),
    [
        (ViewType.ACTIVE_ONLY, ["active"]),
        (ViewType.DELETED_ONLY, ["deleted"]),
        (ViewType.ALL, ["active", "deleted"]),
    ],
)
def test_view_type_to_stages(view_type, stages):
    assert LifecycleStage.view_type_to_stages(view_type) == stages


def test_matches_view_type():
    assert LifecycleStage.matches_view_type(ViewType.ALL, LifecycleStage.DELETED)
    assert not LifecycleStage.matches_view_type(ViewType.ACTIVE_ONLY, LifecycleStage.DELETED)
