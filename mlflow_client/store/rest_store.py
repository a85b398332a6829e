import json
import logging

from mlflow_client.entities import (
    Dataset,
    Experiment,
    FileInfo,
    Metric,
    Run,
    RunInfo,
    RunStatus,
    Trace,
    TraceInfo,
    ViewType,
)
from mlflow_client.exceptions import RESOURCE_DOES_NOT_EXIST, MlflowException
from mlflow_client.store.base_rest_store import BaseRestStore
from mlflow_client.store.entities.paged_list import PagedList
from mlflow_client.utils.time import get_current_time_millis
from mlflow_client.utils.validation import (
    _validate_batch_log_limits,
    _validate_experiment_name,
    _validate_metric,
    _validate_param,
    _validate_tag,
)

_logger = logging.getLogger(__name__)

SEARCH_MAX_RESULTS_DEFAULT = 1000
SEARCH_TRACES_DEFAULT_MAX_RESULTS = 100


class RestStore(BaseRestStore):
    """
    Client for a remote tracking server accessed via REST API calls

    :param get_host_creds: Method to be invoked prior to every REST request to get the
      :py:class:`mlflow_client.utils.rest_utils.MlflowHostCreds` for the request. Note that this
      is a function so that we can obtain fresh credentials in the case of expiry.
    """

    # Experiments

    def create_experiment(self, name, artifact_location=None, tags=None):
        """
        Create a new experiment.
        If an experiment with the given name already exists, throws exception.

        :param name: Desired name for an experiment
        :param artifact_location: Base location for artifacts in runs. May be None.
        :param tags: Iterable of :py:class:`mlflow_client.entities.ExperimentTag`. May be None.

        :return: experiment_id (string) for the newly created experiment.
        """
        _validate_experiment_name(name)
        tags = list(tags or [])
        for tag in tags:
            _validate_tag(tag.key, tag.value)
        response = self._call_endpoint(
            "POST",
            "experiments/create",
            {
                "name": name,
                "artifact_location": artifact_location,
                "tags": [tag.to_dictionary() for tag in tags] or None,
            },
        )
        return str(response["experiment_id"])

    def get_experiment(self, experiment_id):
        """
        Fetch the experiment from the backend store.

        :param experiment_id: String id for the experiment

        :return: A single :py:class:`mlflow_client.entities.Experiment` object if it exists,
            otherwise raises an Exception.
        """
        response = self._call_endpoint(
            "GET", "experiments/get", {"experiment_id": str(experiment_id)}
        )
        return Experiment.from_dictionary(response["experiment"])

    def get_experiment_by_name(self, experiment_name):
        """
        :return: The :py:class:`mlflow_client.entities.Experiment` named ``experiment_name``, or
            None if no such experiment exists.
        """
        try:
            response = self._call_endpoint(
                "GET", "experiments/get-by-name", {"experiment_name": experiment_name}
            )
        except MlflowException as e:
            if e.error_code == RESOURCE_DOES_NOT_EXIST:
                return None
            raise
        return Experiment.from_dictionary(response["experiment"])

    def delete_experiment(self, experiment_id):
        self._call_endpoint("POST", "experiments/delete", {"experiment_id": str(experiment_id)})

    def restore_experiment(self, experiment_id):
        self._call_endpoint("POST", "experiments/restore", {"experiment_id": str(experiment_id)})

    def rename_experiment(self, experiment_id, new_name):
        _validate_experiment_name(new_name)
        self._call_endpoint(
            "POST",
            "experiments/update",
            {"experiment_id": str(experiment_id), "new_name": new_name},
        )

    def search_experiments(
        self,
        view_type=ViewType.ACTIVE_ONLY,
        max_results=SEARCH_MAX_RESULTS_DEFAULT,
        filter_string=None,
        order_by=None,
        page_token=None,
    ):
        """
        Search for experiments that match the specified search query.

        :param view_type: One of :py:class:`mlflow_client.entities.ViewType` values.
        :param max_results: Maximum number of experiments desired.
        :param filter_string: Filter query string, e.g. ``"name = 'my_experiment'"``.
        :param order_by: List of columns to order by, e.g. ``["last_update_time DESC"]``.
        :param page_token: Token specifying the next page of results.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.Experiment`. Its ``token`` fetches the next page.
        """
        response = self._call_endpoint(
            "POST",
            "experiments/search",
            {
                "view_type": view_type,
                "max_results": max_results,
                "filter": filter_string,
                "order_by": order_by,
                "page_token": page_token,
            },
        )
        experiments = [Experiment.from_dictionary(e) for e in response.get("experiments", [])]
        return PagedList(experiments, response.get("next_page_token"))

    def set_experiment_tag(self, experiment_id, tag):
        """
        Set a tag for the specified experiment

        :param experiment_id: String id for the experiment
        :param tag: :py:class:`mlflow_client.entities.ExperimentTag` instance to set
        """
        _validate_tag(tag.key, tag.value)
        self._call_endpoint(
            "POST",
            "experiments/set-experiment-tag",
            {"experiment_id": str(experiment_id), "key": tag.key, "value": tag.value},
        )

    def delete_experiment_tag(self, experiment_id, key):
        self._call_endpoint(
            "POST",
            "experiments/delete-experiment-tag",
            {"experiment_id": str(experiment_id), "key": key},
        )

    # Runs

    def create_run(self, experiment_id, user_id=None, start_time=None, tags=None, run_name=None):
        """
        Create a run under the specified experiment ID, setting the run's status to "RUNNING".

        :param experiment_id: String id of the experiment for this run
        :param user_id: ID of the user launching this run
        :param start_time: Start time of the run in milliseconds. Defaults to the current time.
        :param tags: Iterable of :py:class:`mlflow_client.entities.RunTag`
        :param run_name: Name of the run

        :return: The created Run object
        """
        tags = list(tags or [])
        for tag in tags:
            _validate_tag(tag.key, tag.value)
        response = self._call_endpoint(
            "POST",
            "runs/create",
            {
                "experiment_id": str(experiment_id),
                "user_id": user_id,
                "run_name": run_name,
                "start_time": get_current_time_millis() if start_time is None else start_time,
                "tags": [tag.to_dictionary() for tag in tags] or None,
            },
        )
        return Run.from_dictionary(response["run"])

    def get_run(self, run_id):
        """
        Fetch the run from backend store

        :param run_id: Unique identifier for the run

        :return: A single Run object if it exists, otherwise raises an Exception
        """
        response = self._call_endpoint("GET", "runs/get", {"run_id": run_id})
        return Run.from_dictionary(response["run"])

    def update_run_info(self, run_id, run_status=None, end_time=None, run_name=None):
        """Updates the metadata of the specified run."""
        status = RunStatus.from_string(run_status).value if run_status is not None else None
        response = self._call_endpoint(
            "POST",
            "runs/update",
            {"run_id": run_id, "status": status, "end_time": end_time, "run_name": run_name},
        )
        if "run_info" in response:
            return RunInfo.from_dictionary(response["run_info"])

    def delete_run(self, run_id):
        self._call_endpoint("POST", "runs/delete", {"run_id": run_id})

    def restore_run(self, run_id):
        self._call_endpoint("POST", "runs/restore", {"run_id": run_id})

    def search_runs(
        self,
        experiment_ids,
        filter_string=None,
        run_view_type=ViewType.ACTIVE_ONLY,
        max_results=SEARCH_MAX_RESULTS_DEFAULT,
        order_by=None,
        page_token=None,
    ):
        """
        Return runs that match the given filter within the experiments.

        :param experiment_ids: List of experiment ids to scope the search
        :param filter_string: Filter query string, e.g. ``"metrics.accuracy > 0.9"``.
        :param run_view_type: ACTIVE_ONLY, DELETED_ONLY, or ALL runs.
        :param max_results: Maximum number of runs desired.
        :param order_by: List of columns to order by, e.g. ``["metrics.rmse ASC"]``.
        :param page_token: Token specifying the next page of results.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.Run` objects that satisfy the search expressions.
        """
        response = self._call_endpoint(
            "POST",
            "runs/search",
            {
                "experiment_ids": [str(experiment_id) for experiment_id in experiment_ids],
                "filter": filter_string,
                "run_view_type": run_view_type,
                "max_results": max_results,
                "order_by": order_by,
                "page_token": page_token,
            },
        )
        runs = [Run.from_dictionary(run) for run in response.get("runs", [])]
        return PagedList(runs, response.get("next_page_token"))

    def log_metric(self, run_id, metric):
        """
        Log a metric for the specified run

        :param run_id: String id for the run
        :param metric: Metric instance to log
        """
        _validate_metric(metric.key, metric.value, metric.timestamp, metric.step)
        self._call_endpoint(
            "POST",
            "runs/log-metric",
            {
                "run_id": run_id,
                "key": metric.key,
                "value": metric.value,
                "timestamp": metric.timestamp,
                "step": metric.step,
            },
        )

    def log_param(self, run_id, param):
        """
        Log a param for the specified run

        :param run_id: String id for the run
        :param param: Param instance to log
        """
        _validate_param(param.key, param.value)
        self._call_endpoint(
            "POST",
            "runs/log-parameter",
            {"run_id": run_id, "key": param.key, "value": param.value},
        )

    def log_batch(self, run_id, metrics=(), params=(), tags=()):
        """
        Log metrics, params and tags for the specified run in a single request.

        :param run_id: String id for the run
        :param metrics: Iterable of :py:class:`mlflow_client.entities.Metric`
        :param params: Iterable of :py:class:`mlflow_client.entities.Param`
        :param tags: Iterable of :py:class:`mlflow_client.entities.RunTag`
        """
        metrics, params, tags = list(metrics), list(params), list(tags)
        _validate_batch_log_limits(metrics, params, tags)
        for index, metric in enumerate(metrics):
            _validate_metric(
                metric.key, metric.value, metric.timestamp, metric.step, f"metrics[{index}]"
            )
        for index, param in enumerate(params):
            _validate_param(param.key, param.value, f"params[{index}]")
        for index, tag in enumerate(tags):
            _validate_tag(tag.key, tag.value, f"tags[{index}]")
        self._call_endpoint(
            "POST",
            "runs/log-batch",
            {
                "run_id": run_id,
                "metrics": [metric.to_dictionary() for metric in metrics],
                "params": [param.to_dictionary() for param in params],
                "tags": [tag.to_dictionary() for tag in tags],
            },
        )

    def set_tag(self, run_id, tag):
        """
        Set a tag for the specified run

        :param run_id: String id for the run
        :param tag: RunTag instance to log
        """
        _validate_tag(tag.key, tag.value)
        self._call_endpoint(
            "POST", "runs/set-tag", {"run_id": run_id, "key": tag.key, "value": tag.value}
        )

    def delete_tag(self, run_id, key):
        self._call_endpoint("POST", "runs/delete-tag", {"run_id": run_id, "key": key})

    def get_metric_history(self, run_id, metric_key, max_results=None, page_token=None):
        """
        Return one page of the logged values of a given metric.

        :param run_id: Unique identifier for run
        :param metric_key: Metric name within the run
        :param max_results: Maximum number of metrics in the page. The server decides when None.
        :param page_token: Token specifying the next page of results.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.Metric`.
        """
        response = self._call_endpoint(
            "GET",
            "metrics/get-history",
            {
                "run_id": run_id,
                "metric_key": metric_key,
                "max_results": max_results,
                "page_token": page_token,
            },
        )
        metrics = [Metric.from_dictionary(metric) for metric in response.get("metrics", [])]
        return PagedList(metrics, response.get("next_page_token"))

    def get_metric_history_bulk(self, run_id, metric_keys):
        """
        Return the logged values of several metrics of a run in one request.

        :param run_id: Unique identifier for run
        :param metric_keys: Metric names within the run

        :return: Dictionary of metric key to list of :py:class:`mlflow_client.entities.Metric`.
            Keys without history are absent.
        """
        response = self._call_endpoint(
            "POST",
            "metrics/get-history-bulk",
            {"run_id": run_id, "metric_keys": list(metric_keys)},
        )
        histories = response.get("metrics") or {}
        if isinstance(histories, list):
            # Flat shape: one list of metrics for every key
            grouped = {}
            for metric in histories:
                grouped.setdefault(metric.get("key"), []).append(metric)
            histories = grouped
        return {
            key: [Metric.from_dictionary({"key": key, **metric}) for metric in metrics]
            for key, metrics in histories.items()
        }

    def list_artifacts(self, run_id, path=None, page_token=None):
        """
        List the artifacts of a run directly under ``path``.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.FileInfo`.
        """
        response = self._call_endpoint(
            "GET",
            "artifacts/list",
            {"run_id": run_id, "path": path, "page_token": page_token},
        )
        files = [FileInfo.from_dictionary(file_info) for file_info in response.get("files", [])]
        return PagedList(files, response.get("next_page_token"))

    # Traces

    def log_trace(self, trace):
        """
        Log a complete trace, its info and all its spans, to the server.

        :param trace: A :py:class:`mlflow_client.entities.Trace`.

        :return: The :py:class:`mlflow_client.entities.TraceInfo` recorded by the server.
        """
        # Span values that are not JSON, such as datetimes, are sent as strings
        trace_json = json.loads(trace.to_json())
        response = self._call_endpoint("POST", "traces", {"trace": trace_json})
        return TraceInfo.from_dict(response.get("trace_info", response))

    def get_trace(self, trace_id):
        response = self._call_endpoint("POST", "traces/get", {"trace_id": trace_id})
        return Trace.from_dict(response.get("trace", response))

    def search_traces(
        self,
        experiment_ids,
        filter_string=None,
        max_results=SEARCH_TRACES_DEFAULT_MAX_RESULTS,
        order_by=None,
        page_token=None,
    ):
        """
        Return traces that match the given filter within the experiments.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.Trace`.
        """
        response = self._call_endpoint(
            "POST",
            "traces/search",
            {
                "experiment_ids": [str(experiment_id) for experiment_id in experiment_ids],
                "filter": filter_string,
                "max_results": max_results,
                "order_by": order_by,
                "page_token": page_token,
            },
        )
        traces = [Trace.from_dict(trace) for trace in response.get("traces", [])]
        return PagedList(traces, response.get("next_page_token"))

    def delete_traces(
        self, experiment_id, trace_ids=None, max_traces=None, max_timestamp_millis=None
    ):
        """
        Delete traces of an experiment, either by ID or older than ``max_timestamp_millis``.

        :return: The number of traces deleted.
        """
        if not trace_ids and max_timestamp_millis is None:
            raise MlflowException.invalid_parameter_value(
                "Either `trace_ids` or `max_timestamp_millis` must be specified."
            )
        response = self._call_endpoint(
            "DELETE",
            "traces",
            {
                "experiment_id": str(experiment_id),
                "trace_ids": trace_ids,
                "max_traces": max_traces,
                "max_timestamp_millis": max_timestamp_millis,
            },
        )
        return int(response.get("traces_deleted", 0))

    def set_trace_tag(self, trace_id, key, value):
        _validate_tag(key, value)
        self._call_endpoint(
            "POST", "traces/set-tag", {"trace_id": trace_id, "key": key, "value": value}
        )

    def delete_trace_tag(self, trace_id, key):
        self._call_endpoint("DELETE", "traces/delete-tag", {"trace_id": trace_id, "key": key})

    # Datasets

    def create_dataset(self, name, experiment_id=None, tags=None):
        """
        Register a dataset.

        :param name: Name of the dataset.
        :param experiment_id: ID of the experiment to create the dataset in. May be None.
        :param tags: Dictionary of tag key to tag value. May be None.

        :return: The created :py:class:`mlflow_client.entities.Dataset`.
        """
        tags = {key: str(value) for key, value in (tags or {}).items()}
        for key, value in tags.items():
            _validate_tag(key, value)
        response = self._call_endpoint(
            "POST",
            "datasets/create",
            {
                "name": name,
                "experiment_id": str(experiment_id) if experiment_id is not None else None,
                "tags": tags or None,
            },
        )
        return Dataset.from_dictionary(response.get("dataset", response))

    def get_dataset(self, dataset_id):
        response = self._call_endpoint("GET", "datasets/get", {"dataset_id": dataset_id})
        return Dataset.from_dictionary(response.get("dataset", response))

    def add_dataset_to_experiments(self, dataset_id, experiment_ids):
        self._call_endpoint(
            "POST",
            "datasets/add-to-experiments",
            {
                "dataset_id": dataset_id,
                "experiment_ids": [str(experiment_id) for experiment_id in experiment_ids],
            },
        )

    def search_datasets(
        self,
        experiment_id=None,
        filter_string=None,
        max_results=SEARCH_MAX_RESULTS_DEFAULT,
        page_token=None,
    ):
        """
        Return one page of the datasets matching ``filter_string``.

        :return: A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`mlflow_client.entities.Dataset`.
        """
        response = self._call_endpoint(
            "POST",
            "datasets/search",
            {
                "experiment_id": str(experiment_id) if experiment_id is not None else None,
                "filter": filter_string,
                "max_results": max_results,
                "page_token": page_token,
            },
        )
        datasets = [Dataset.from_dictionary(dataset) for dataset in response.get("datasets", [])]
        return PagedList(datasets, response.get("next_page_token"))

    def delete_dataset(self, dataset_id):
        self._call_endpoint("DELETE", "datasets/delete", {"dataset_id": dataset_id})
