from mlflow_client.collection import TagCollection
from mlflow_client.entities import ExperimentTag, RunTag


def test_system_and_user_tags():
    tags = TagCollection(
        [RunTag("mlflow.runName", "baseline"), RunTag("team", "ml"), RunTag("mlflow.user", "me")]
    )
    assert tags.filter_system_tags().keys() == ["mlflow.runName", "mlflow.user"]
    assert tags.filter_user_tags().keys() == ["team"]
    assert isinstance(tags.filter_user_tags(), TagCollection)


def test_key_uniqueness_after_adds():
    tags = TagCollection()
    tags.add(RunTag("a", "1"))
    tags.add(RunTag("a", "2"))
    tags.add(RunTag("b", "3"))
    assert len(tags) == 2
    assert tags.to_dictionary() == {"a": "2", "b": "3"}


def test_from_dictionaries_with_item_class():
    tags = TagCollection.from_dictionaries([{"key": "k", "value": "v"}], ExperimentTag)
    assert tags.get("k") == ExperimentTag("k", "v")


def test_iteration_yields_tags_in_insertion_order():
    tags = TagCollection.from_dictionary({"z": "1", "a": "2"})
    assert [tag.key for tag in tags] == ["z", "a"]
    assert repr(tags) == "TagCollection({'z': '1', 'a': '2'})"
