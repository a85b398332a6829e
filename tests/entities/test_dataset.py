import pytest

from mlflow_client.entities import Dataset
from mlflow_client.exceptions import MlflowException


def test_dataset_dictionary_round_trip():
    dataset = Dataset(
        "d1",
        "eval",
        experiment_id="3",
        tags={"split": "test"},
        digest="abc123",
        source_type="http",
        source="https://data.example.com/eval.csv",
        creation_time=10,
    )
    as_dict = dataset.to_dictionary()
    assert as_dict == {
        "dataset_id": "d1",
        "name": "eval",
        "experiment_id": "3",
        "tags": {"split": "test"},
        "digest": "abc123",
        "source_type": "http",
        "source": "https://data.example.com/eval.csv",
        "creation_time": 10,
    }
    assert Dataset.from_dictionary(as_dict) == dataset


@pytest.mark.parametrize(
    ("dataset_dict", "match"),
    [
        ({"dataset_id": "d1"}, "Missing value for required parameter 'name'"),
        ({"name": "eval"}, "Missing value for required parameter 'dataset_id'"),
        (["d1"], "Expected a dictionary describing a dataset"),
    ],
)
def test_from_dictionary_requires_id_and_name(dataset_dict, match):
    with pytest.raises(MlflowException, match=match):
        Dataset.from_dictionary(dataset_dict)
