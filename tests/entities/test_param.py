import pytest

from mlflow_client.entities import Param
from mlflow_client.exceptions import MlflowException

from tests.helper_functions import random_str


def test_creation_and_hydration():
    key = random_str()
    value = random_str()
    param = Param(key, value)
    assert param.key == key
    assert param.value == value

    as_dict = {"key": key, "value": value}
    assert dict(param) == as_dict
    assert Param.from_dictionary(as_dict) == param


def test_missing_value_becomes_empty_string():
    assert Param.from_dictionary({"key": "lr"}).value == ""


def test_non_string_value_is_stringified():
    assert Param.from_dictionary({"key": "lr", "value": 0.01}).value == "0.01"


def test_missing_key_raises():
    with pytest.raises(MlflowException, match="'key'"):
        Param.from_dictionary({"value": "x"})
