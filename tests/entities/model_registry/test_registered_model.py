from mlflow_client.entities import RegisteredModel, RegisteredModelAlias


def test_registered_model_from_dictionary():
    registered_model = RegisteredModel.from_dictionary(
        {
            "name": "clf",
            "creation_timestamp": 1,
            "last_updated_timestamp": 2,
            "description": "classifier",
            "latest_versions": [{"name": "clf", "version": "1", "current_stage": "None"}],
            "tags": [{"key": "team", "value": "ml"}],
            "aliases": [{"alias": "champion", "version": 1}],
        }
    )
    assert registered_model.name == "clf"
    assert registered_model.description == "classifier"
    assert [mv.version for mv in registered_model.latest_versions] == ["1"]
    assert registered_model.tags.get_value("team") == "ml"
    assert registered_model.aliases == [RegisteredModelAlias("champion", "1")]
    assert registered_model.get_version_for_alias("champion") == "1"
    assert registered_model.get_version_for_alias("missing") is None


def test_registered_model_to_dictionary_omits_empty_fields():
    assert RegisteredModel("clf").to_dictionary() == {"name": "clf"}
