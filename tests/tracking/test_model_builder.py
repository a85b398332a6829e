import pytest

from mlflow_client.exceptions import MlflowException
from mlflow_client.tracking import ModelBuilder


def test_create_sends_a_single_request(registry_store, transport):
    transport.respond(
        "registered-models/create",
        {"registered_model": {"name": "fraud", "description": "detector"}},
    )

    registered_model = (
        ModelBuilder(registry_store, "fraud")
        .with_description("detector")
        .with_tags({"owner": "risk"})
        .create()
    )

    assert registered_model.name == "fraud"
    assert registered_model.description == "detector"
    assert transport.calls == [
        (
            "POST",
            "registered-models/create",
            {
                "name": "fraud",
                "description": "detector",
                "tags": [{"key": "owner", "value": "risk"}],
            },
        )
    ]


def test_create_rejects_empty_name(registry_store, transport):
    with pytest.raises(MlflowException, match="cannot be empty"):
        ModelBuilder(registry_store, "").create()
    assert transport.calls == []
