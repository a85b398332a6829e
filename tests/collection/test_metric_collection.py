import functools

import pytest

from mlflow_client.collection import MetricCollection, MinMax
from mlflow_client.entities import Metric


@pytest.fixture
def metrics():
    return MetricCollection(
        [
            Metric("acc", 0.90, 100, 0),
            Metric("acc", 0.95, 200, 1),
            Metric("loss", 0.10, 150, 0),
            Metric("loss", 0.05, 250, 1),
        ]
    )


def test_get_by_key_and_step(metrics):
    assert [m.value for m in metrics.get_by_key("acc")] == [0.90, 0.95]
    assert [m.key for m in metrics.get_by_step(1)] == ["acc", "loss"]
    assert metrics.get_by_key("missing").is_empty()


def test_get_latest_by_key():
    collection = MetricCollection(
        [Metric("acc", 0.90, 100, 0), Metric("acc", 0.95, 200, 0), Metric("loss", 0.10, 150, 0)]
    )
    latest = collection.get_latest_by_key()
    assert latest == {"acc": Metric("acc", 0.95, 200, 0), "loss": Metric("loss", 0.10, 150, 0)}


def test_get_latest_by_key_prefers_last_added_on_timestamp_tie():
    collection = MetricCollection([Metric("acc", 0.1, 100, 0), Metric("acc", 0.2, 100, 1)])
    assert collection.get_latest_by_key()["acc"].value == 0.2


def test_average_and_min_max():
    collection = MetricCollection([Metric("x", v, i, i) for i, v in enumerate([1, 3, 5])])
    assert collection.get_average("x") == 3.0
    assert collection.get_min_max("x") == MinMax(min=1, max=5)


def test_aggregates_of_missing_key_are_none(metrics):
    assert metrics.get_average("missing") is None
    assert metrics.get_min_max("missing") is None


def test_filter_is_idempotent(metrics):
    def predicate(metric):
        return metric.value > 0.5

    once = metrics.filter(predicate)
    assert once.filter(predicate) == once
    assert once.count() == 2


def test_queries_do_not_mutate_the_receiver(metrics):
    before = metrics.all()
    metrics.filter(lambda m: False)
    metrics.sort_by_timestamp()
    metrics.group_by_key()
    assert metrics.all() == before


def test_sort(metrics):
    assert [m.timestamp for m in metrics.sort_by_timestamp()] == [100, 150, 200, 250]
    assert [m.step for m in metrics.sort_by_step()] == [0, 0, 1, 1]
    by_value = metrics.sort(key=lambda m: m.value, reverse=True)
    assert [m.value for m in by_value] == [0.95, 0.90, 0.10, 0.05]


def test_sort_with_comparator(metrics):
    def compare(a, b):
        return (a.value > b.value) - (a.value < b.value)

    ordered = metrics.sort(key=functools.cmp_to_key(compare))
    assert [m.value for m in ordered] == [0.05, 0.10, 0.90, 0.95]


def test_sort_defaults_to_key_step_timestamp():
    collection = MetricCollection(
        [
            Metric("loss", 0.5, 300, 1),
            Metric("acc", 0.7, 200, 1),
            Metric("loss", 0.9, 100, 0),
            Metric("acc", 0.6, 400, 0),
            Metric("acc", 0.8, 150, 1),
        ]
    )
    ordered = collection.sort()
    assert [(m.key, m.step, m.timestamp) for m in ordered] == [
        ("acc", 0, 400),
        ("acc", 1, 150),
        ("acc", 1, 200),
        ("loss", 0, 100),
        ("loss", 1, 300),
    ]
    assert [m.key for m in collection.sort(reverse=True)][0] == "loss"


def test_sort_is_stable():
    collection = MetricCollection([Metric("b", 1.0, 1, 0), Metric("a", 2.0, 1, 0)])
    assert [m.key for m in collection.sort_by_timestamp()] == ["b", "a"]


def test_group_by(metrics):
    by_key = metrics.group_by_key()
    assert list(by_key) == ["acc", "loss"]
    assert by_key["loss"].count() == 2
    by_step = metrics.group_by_step()
    assert list(by_step) == [0, 1]
    assert [m.key for m in by_step[0]] == ["acc", "loss"]


def test_first_last_and_indexing(metrics):
    assert metrics.first() == Metric("acc", 0.90, 100, 0)
    assert metrics.last() == Metric("loss", 0.05, 250, 1)
    assert metrics[1].value == 0.95
    assert isinstance(metrics[1:3], MetricCollection)
    assert len(metrics[1:3]) == 2
    assert MetricCollection().first() is None
    assert MetricCollection().last() is None


def test_add_and_to_list():
    collection = MetricCollection()
    collection.add(Metric("acc", 0.5, 10, 2))
    assert collection.count() == 1
    assert collection.to_list() == [{"key": "acc", "value": 0.5, "timestamp": 10, "step": 2}]


def test_from_dictionaries():
    collection = MetricCollection.from_dictionaries([{"key": "acc", "value": 1}])
    assert collection.first() == Metric("acc", 1.0, 0, 0)
