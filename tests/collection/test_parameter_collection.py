import pytest

from mlflow_client.collection import ParameterCollection
from mlflow_client.entities import Param


@pytest.fixture
def params():
    return ParameterCollection(
        [Param("model.lr", "0.01"), Param("model.depth", "6"), Param("seed", "42")]
    )


def test_key_uniqueness():
    collection = ParameterCollection()
    for key, value in [("a", "1"), ("b", "2"), ("a", "3"), ("c", "4"), ("b", "5")]:
        collection.add(Param(key, value))
    assert collection.count() == 3
    assert collection.get_value("a") == "3"
    assert collection.keys() == ["a", "b", "c"]


def test_lookup(params):
    assert params.get("seed") == Param("seed", "42")
    assert params.get("missing") is None
    assert params.get_value("missing") is None
    assert params.has("seed")
    assert "seed" in params
    assert params["model.lr"].value == "0.01"


def test_remove(params):
    params.remove("seed")
    params.remove("missing")
    assert params.keys() == ["model.lr", "model.depth"]


def test_filter_by_key_prefix(params):
    assert params.filter_by_key_prefix("model.").keys() == ["model.lr", "model.depth"]


def test_filter_by_value_pattern(params):
    assert params.filter_by_value_pattern(r"^\d+$").keys() == ["model.depth", "seed"]


def test_merge_prefers_other(params):
    merged = params.merge(ParameterCollection([Param("seed", "7"), Param("epochs", "3")]))
    assert merged.to_dictionary() == {
        "model.lr": "0.01",
        "model.depth": "6",
        "seed": "7",
        "epochs": "3",
    }
    assert params.get_value("seed") == "42"


def test_equals_ignores_order(params):
    reordered = ParameterCollection(reversed(params.all()))
    assert params.equals(reordered)
    assert params == reordered
    assert not params.equals(params.filter_by_key_prefix("model."))


def test_reduce(params):
    assert params.reduce(lambda total, param: total + len(param.value), 0) == 7


def test_from_dictionary_and_to_list():
    collection = ParameterCollection.from_dictionary({"lr": 0.01, "layers": 2})
    assert collection.values() == ["0.01", "2"]
    assert collection.to_list() == [
        {"key": "lr", "value": "0.01"},
        {"key": "layers", "value": "2"},
    ]
