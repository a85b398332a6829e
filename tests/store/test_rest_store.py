import datetime
from unittest import mock

import pytest

from mlflow_client.entities import (
    ExperimentTag,
    Metric,
    Param,
    RunStatus,
    RunTag,
    TraceState,
    ViewType,
)
from mlflow_client.exceptions import MlflowException, RestException
from mlflow_client.store.rest_store import RestStore
from mlflow_client.tracing import TraceBuilder
from mlflow_client.utils.rest_utils import MlflowHostCreds

from tests.helper_functions import experiment_json, run_json


def test_call_endpoint_prefixes_path_and_drops_none_values(host_creds):
    store = RestStore(lambda: host_creds)
    with mock.patch(
        "mlflow_client.store.base_rest_store.call_endpoint", return_value={}
    ) as call_endpoint:
        store.update_run_info("run-1", run_status="FINISHED")
    call_endpoint.assert_called_once_with(
        host_creds,
        "/api/2.0/mlflow/runs/update",
        "POST",
        {"run_id": "run-1", "status": "FINISHED"},
    )


def test_host_creds_are_fetched_for_every_request():
    get_host_creds = mock.Mock(return_value=MlflowHostCreds("https://hello"))
    store = RestStore(get_host_creds)
    with mock.patch("mlflow_client.store.base_rest_store.call_endpoint", return_value={}):
        store.delete_run("a")
        store.restore_run("a")
    assert get_host_creds.call_count == 2


def test_create_experiment(store, transport):
    transport.respond("experiments/create", {"experiment_id": 12})
    experiment_id = store.create_experiment(
        "exp-A", artifact_location="s3://bucket", tags=[ExperimentTag("team", "ml")]
    )
    assert experiment_id == "12"
    assert transport.calls == [
        (
            "POST",
            "experiments/create",
            {
                "name": "exp-A",
                "artifact_location": "s3://bucket",
                "tags": [{"key": "team", "value": "ml"}],
            },
        )
    ]


def test_create_experiment_rejects_empty_name(store, transport):
    with pytest.raises(MlflowException, match="Invalid experiment name"):
        store.create_experiment("")
    assert transport.calls == []


def test_get_experiment(store, transport):
    transport.respond("experiments/get", {"experiment": experiment_json("3", "exp")})
    experiment = store.get_experiment(3)
    assert experiment.name == "exp"
    assert transport.calls == [("GET", "experiments/get", {"experiment_id": "3"})]


def test_get_experiment_by_name_returns_none_when_missing(store, transport):
    transport.respond(
        "experiments/get-by-name",
        RestException({"error_code": "RESOURCE_DOES_NOT_EXIST", "message": "nope"}, 404),
    )
    assert store.get_experiment_by_name("missing") is None


def test_get_experiment_by_name_propagates_other_errors(store, transport):
    transport.respond(
        "experiments/get-by-name",
        RestException({"error_code": "PERMISSION_DENIED", "message": "no"}, 403),
    )
    with pytest.raises(RestException, match="PERMISSION_DENIED: no"):
        store.get_experiment_by_name("secret")


def test_search_experiments_pages(store, transport):
    transport.respond(
        "experiments/search",
        {"experiments": [experiment_json("1", "a")], "next_page_token": "tok"},
    )
    page = store.search_experiments(view_type=ViewType.ALL, max_results=1)
    assert [e.name for e in page] == ["a"]
    assert page.token == "tok"
    assert transport.last_body("experiments/search") == {"view_type": "ALL", "max_results": 1}


def test_experiment_lifecycle_calls(store, transport):
    store.delete_experiment(1)
    store.restore_experiment(1)
    store.rename_experiment(1, "renamed")
    store.set_experiment_tag(1, ExperimentTag("k", "v"))
    store.delete_experiment_tag(1, "k")
    assert transport.calls == [
        ("POST", "experiments/delete", {"experiment_id": "1"}),
        ("POST", "experiments/restore", {"experiment_id": "1"}),
        ("POST", "experiments/update", {"experiment_id": "1", "new_name": "renamed"}),
        (
            "POST",
            "experiments/set-experiment-tag",
            {"experiment_id": "1", "key": "k", "value": "v"},
        ),
        ("POST", "experiments/delete-experiment-tag", {"experiment_id": "1", "key": "k"}),
    ]


def test_create_run(store, transport):
    transport.respond("runs/create", {"run": run_json("r1", "5")})
    run = store.create_run(
        "5", user_id="me", start_time=123, tags=[RunTag("a", "b")], run_name="baseline"
    )
    assert run.info.run_id == "r1"
    assert transport.last_body("runs/create") == {
        "experiment_id": "5",
        "user_id": "me",
        "run_name": "baseline",
        "start_time": 123,
        "tags": [{"key": "a", "value": "b"}],
    }


def test_get_run(store, transport):
    transport.respond("runs/get", {"run": run_json("r1")})
    assert store.get_run("r1").info.run_id == "r1"
    assert transport.calls == [("GET", "runs/get", {"run_id": "r1"})]


def test_update_run_info_validates_status(store, transport):
    with pytest.raises(MlflowException, match="Could not get run status"):
        store.update_run_info("r1", run_status="DONE")
    assert transport.calls == []


def test_update_run_info_returns_run_info(store, transport):
    transport.respond(
        "runs/update",
        {"run_info": {"run_id": "r1", "experiment_id": "1", "status": "FINISHED"}},
    )
    run_info = store.update_run_info("r1", run_status=RunStatus.FINISHED, end_time=5)
    assert run_info.status == RunStatus.FINISHED
    assert transport.last_body("runs/update") == {
        "run_id": "r1",
        "status": "FINISHED",
        "end_time": 5,
    }


def test_search_runs(store, transport):
    transport.respond("runs/search", {"runs": [run_json("r1"), run_json("r2")]})
    runs = store.search_runs([1, "2"], filter_string="metrics.acc > 0.9")
    assert [run.info.run_id for run in runs] == ["r1", "r2"]
    assert runs.token is None
    assert transport.last_body("runs/search") == {
        "experiment_ids": ["1", "2"],
        "filter": "metrics.acc > 0.9",
        "run_view_type": "ACTIVE_ONLY",
        "max_results": 1000,
    }


def test_log_metric_param_and_tag(store, transport):
    store.log_metric("r1", Metric("acc", 0.9, 10, 2))
    store.log_param("r1", Param("lr", "0.01"))
    store.set_tag("r1", RunTag("team", "ml"))
    store.delete_tag("r1", "team")
    assert transport.calls == [
        (
            "POST",
            "runs/log-metric",
            {"run_id": "r1", "key": "acc", "value": 0.9, "timestamp": 10, "step": 2},
        ),
        ("POST", "runs/log-parameter", {"run_id": "r1", "key": "lr", "value": "0.01"}),
        ("POST", "runs/set-tag", {"run_id": "r1", "key": "team", "value": "ml"}),
        ("POST", "runs/delete-tag", {"run_id": "r1", "key": "team"}),
    ]


@pytest.mark.parametrize(
    ("metric", "match"),
    [
        (Metric("acc", "high", 10, 0), "Please specify value as a valid double"),
        (Metric("acc", True, 10, 0), "Please specify value as a valid double"),
        (Metric("acc", 1.0, -1, 0), "Timestamp must be a nonnegative long"),
        (Metric("", 1.0, 10, 0), "A key name must be provided"),
        (Metric("../acc", 1.0, 10, 0), "Names may be treated as files"),
    ],
)
def test_log_metric_validates_before_sending(store, transport, metric, match):
    with pytest.raises(MlflowException, match=match):
        store.log_metric("r1", metric)
    assert transport.calls == []


def test_log_batch(store, transport):
    store.log_batch(
        "r1",
        metrics=[Metric("acc", 0.9, 10, 0)],
        params=[Param("lr", "0.01")],
        tags=[RunTag("t", "v")],
    )
    assert transport.calls == [
        (
            "POST",
            "runs/log-batch",
            {
                "run_id": "r1",
                "metrics": [{"key": "acc", "value": 0.9, "timestamp": 10, "step": 0}],
                "params": [{"key": "lr", "value": "0.01"}],
                "tags": [{"key": "t", "value": "v"}],
            },
        )
    ]


def test_log_batch_enforces_limits(store, transport):
    params = [Param(f"p{i}", "v") for i in range(101)]
    with pytest.raises(MlflowException, match="A batch logging request can contain at most 100"):
        store.log_batch("r1", params=params)
    assert transport.calls == []


def test_log_batch_reports_index_of_invalid_entry(store, transport):
    with pytest.raises(MlflowException, match=r"params\[1\]\.key"):
        store.log_batch("r1", params=[Param("ok", "v"), Param("", "v")])


def test_get_metric_history(store, transport):
    transport.respond(
        "metrics/get-history",
        {
            "metrics": [{"key": "acc", "value": 0.5, "timestamp": 1, "step": 0}],
            "next_page_token": "next",
        },
    )
    page = store.get_metric_history("r1", "acc", max_results=1)
    assert [m.value for m in page] == [0.5]
    assert page.token == "next"
    assert transport.calls == [
        ("GET", "metrics/get-history", {"run_id": "r1", "metric_key": "acc", "max_results": 1})
    ]


def test_list_artifacts(store, transport):
    transport.respond(
        "artifacts/list",
        {"files": [{"path": "model", "is_dir": True}, {"path": "a.txt", "file_size": 3}]},
    )
    files = store.list_artifacts("r1", path="sub")
    assert [(f.path, f.is_dir, f.file_size) for f in files] == [
        ("model", True, None),
        ("a.txt", False, 3),
    ]
    assert transport.last_body("artifacts/list") == {"run_id": "r1", "path": "sub"}


def test_log_trace(store, transport, fake_clock):
    builder = TraceBuilder("1", "predict", clock=fake_clock)
    builder.start_span("root").end()
    trace = builder.build()
    transport.respond(
        "traces", lambda body: {"trace_info": body["trace"]["info"] | {"state": "OK"}}
    )

    trace_info = store.log_trace(trace)

    body = transport.last_body("traces")
    assert body["trace"]["info"]["trace_id"] == trace.info.trace_id
    assert len(body["trace"]["data"]["spans"]) == 1
    assert trace_info.trace_id == trace.info.trace_id
    assert trace_info.state == TraceState.OK


def test_log_trace_sends_non_json_values_as_strings(store, transport, fake_clock):
    builder = TraceBuilder("1", "predict", clock=fake_clock)
    builder.start_span("root", inputs={"day": datetime.date(2024, 1, 2)}).end()
    transport.respond("traces", lambda body: {"trace_info": body["trace"]["info"]})

    store.log_trace(builder.build())

    span = transport.last_body("traces")["trace"]["data"]["spans"][0]
    assert span["inputs"] == {"day": "2024-01-02"}


def test_get_and_search_traces(store, transport, fake_clock):
    builder = TraceBuilder("1", "predict", clock=fake_clock)
    builder.start_span("root").end()
    trace_dict = builder.build().to_dict()
    transport.respond("traces/get", {"trace": trace_dict})
    transport.respond("traces/search", {"traces": [trace_dict], "next_page_token": "t"})

    assert store.get_trace(builder.trace_id).info.trace_id == builder.trace_id
    page = store.search_traces(["1"], filter_string="status = 'OK'")
    assert [trace.info.trace_id for trace in page] == [builder.trace_id]
    assert page.token == "t"
    assert transport.last_body("traces/search") == {
        "experiment_ids": ["1"],
        "filter": "status = 'OK'",
        "max_results": 100,
    }


def test_delete_traces(store, transport):
    transport.respond("traces", {"traces_deleted": 2})
    assert store.delete_traces("1", trace_ids=["a", "b"]) == 2
    assert transport.calls == [
        ("DELETE", "traces", {"experiment_id": "1", "trace_ids": ["a", "b"]})
    ]


def test_delete_traces_requires_a_selector(store, transport):
    with pytest.raises(MlflowException, match="Either `trace_ids` or `max_timestamp_millis`"):
        store.delete_traces("1")
    assert transport.calls == []


def test_trace_tags(store, transport):
    store.set_trace_tag("tr", "k", "v")
    store.delete_trace_tag("tr", "k")
    assert transport.calls == [
        ("POST", "traces/set-tag", {"trace_id": "tr", "key": "k", "value": "v"}),
        ("DELETE", "traces/delete-tag", {"trace_id": "tr", "key": "k"}),
    ]


def test_transport_errors_propagate(store, transport):
    transport.respond("runs/get", MlflowException("API request failed with exception boom"))
    with pytest.raises(MlflowException, match="boom"):
        store.get_run("r1")


def test_get_metric_history_bulk_groups_flat_response(store, transport):
    transport.respond(
        "metrics/get-history-bulk",
        {
            "metrics": [
                {"key": "loss", "value": 0.9, "timestamp": 1, "step": 0},
                {"key": "acc", "value": 0.5, "timestamp": 1, "step": 0},
                {"key": "loss", "value": 0.7, "timestamp": 2, "step": 1},
            ]
        },
    )
    histories = store.get_metric_history_bulk("r1", ("loss", "acc"))
    assert {key: [m.value for m in metrics] for key, metrics in histories.items()} == {
        "loss": [0.9, 0.7],
        "acc": [0.5],
    }
    assert transport.last_body("metrics/get-history-bulk") == {
        "run_id": "r1",
        "metric_keys": ["loss", "acc"],
    }


def test_get_metric_history_bulk_without_history(store, transport):
    assert store.get_metric_history_bulk("r1", ["loss"]) == {}


def test_get_dataset_accepts_id_field(store, transport):
    transport.respond(
        "datasets/get",
        {
            "dataset": {
                "id": "d9",
                "name": "train",
                "tags": [{"key": "split", "value": "train"}],
                "creation_time": "1700000000000",
            }
        },
    )
    dataset = store.get_dataset("d9")
    assert dataset.dataset_id == "d9"
    assert dataset.tags == {"split": "train"}
    assert dataset.creation_time == 1700000000000
    assert dataset.experiment_id is None
    assert transport.calls == [("GET", "datasets/get", {"dataset_id": "d9"})]


def test_create_dataset_validates_tags_before_sending(store, transport):
    with pytest.raises(MlflowException, match="A key name must be provided"):
        store.create_dataset("eval", tags={"": "x"})
    assert transport.calls == []
