"""
Client for the MLflow Tracking Server REST API. The client exposes every tracking and model
registry operation as a method and creates the fluent builders that batch their writes.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from mlflow_client.collection import MetricCollection
from mlflow_client.entities import (
    Dataset,
    Experiment,
    ExperimentTag,
    FileInfo,
    Metric,
    ModelTag,
    Param,
    Run,
    RunStatus,
    RunTag,
    Trace,
    TraceInfo,
    ViewType,
)
from mlflow_client.entities.model_registry import ModelVersion, RegisteredModel
from mlflow_client.exceptions import MlflowException
from mlflow_client.store.artifact_repo import RunArtifactRepository
from mlflow_client.store.entities import PagedList
from mlflow_client.store.model_registry_rest_store import (
    SEARCH_MODEL_VERSION_MAX_RESULTS_DEFAULT,
    SEARCH_REGISTERED_MODEL_MAX_RESULTS_DEFAULT,
)
from mlflow_client.store.rest_store import (
    SEARCH_MAX_RESULTS_DEFAULT,
    SEARCH_TRACES_DEFAULT_MAX_RESULTS,
)
from mlflow_client.tracing import TraceBuilder
from mlflow_client.tracking.experiment_builder import ExperimentBuilder
from mlflow_client.tracking.model_builder import ModelBuilder
from mlflow_client.tracking.run_builder import RunBuilder
from mlflow_client.tracking.utils import (
    _get_model_registry_rest_store,
    _get_rest_store,
    _resolve_tracking_uri,
)
from mlflow_client.utils.mlflow_tags import MLFLOW_RUN_NAME
from mlflow_client.utils.time import get_current_time_millis

_logger = logging.getLogger(__name__)


class MlflowClient:
    """
    Client of an MLflow Tracking Server that creates and manages experiments, runs, traces and
    registered models.
    """

    def __init__(self, tracking_uri: Optional[str] = None):
        """
        Args:
            tracking_uri: Address of the tracking server, e.g. ``http://localhost:5000``. If not
                provided, defaults to the ``MLFLOW_TRACKING_URI`` environment variable, and to
                ``http://localhost:5000`` when that is unset too.
        """
        self._tracking_uri = _resolve_tracking_uri(tracking_uri)
        self._tracking_store = _get_rest_store(self._tracking_uri)
        self._registry_store = _get_model_registry_rest_store(self._tracking_uri)
        _logger.debug("Created MlflowClient for tracking server %s", self._tracking_uri)

    @property
    def tracking_uri(self) -> str:
        return self._tracking_uri

    # Builders

    def create_run_builder(self, experiment_id: str, clock=None) -> RunBuilder:
        """
        Args:
            experiment_id: The ID of the experiment the run belongs to.
            clock: Zero-argument callable returning the current time in milliseconds, used for
                the default start time and metric timestamps.

        Returns:
            A :py:class:`RunBuilder <mlflow_client.tracking.RunBuilder>` bound to this client.
        """
        return RunBuilder(self._tracking_store, experiment_id, clock=clock)

    def create_experiment_builder(self, name: str) -> ExperimentBuilder:
        return ExperimentBuilder(self._tracking_store, name)

    def create_model_builder(self, name: str) -> ModelBuilder:
        return ModelBuilder(self._registry_store, name)

    def create_trace_builder(self, experiment_id: str, name: str, clock=None) -> TraceBuilder:
        """
        Start a new trace. Log the built trace with :py:meth:`log_trace`.

        Args:
            experiment_id: The ID of the experiment the trace is logged to.
            name: Name of the trace.
            clock: Zero-argument callable returning the current time in nanoseconds.

        Returns:
            A :py:class:`TraceBuilder <mlflow_client.tracing.TraceBuilder>`.
        """
        return TraceBuilder(experiment_id, name, clock=clock)

    # Experiments

    def create_experiment(
        self,
        name: str,
        artifact_location: Optional[str] = None,
        tags: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create an experiment.

        Args:
            name: The experiment name, which must be unique and is case sensitive.
            artifact_location: The location to store run artifacts. If not provided, the server
                picks an appropriate default.
            tags: A dictionary of key-value pairs that are converted into
                :py:class:`mlflow_client.entities.ExperimentTag` objects.

        Returns:
            String ID of the created experiment.
        """
        return self._tracking_store.create_experiment(
            name=name,
            artifact_location=artifact_location,
            tags=[ExperimentTag(key, str(value)) for key, value in tags.items()] if tags else [],
        )

    def get_experiment(self, experiment_id: str) -> Experiment:
        return self._tracking_store.get_experiment(experiment_id)

    def get_experiment_by_name(self, name: str) -> Optional[Experiment]:
        """
        Retrieve an experiment by experiment name from the backend store.

        Returns:
            An instance of :py:class:`mlflow_client.entities.Experiment` if an experiment with
            the specified name exists, otherwise None.
        """
        return self._tracking_store.get_experiment_by_name(name)

    def search_experiments(
        self,
        view_type: str = ViewType.ACTIVE_ONLY,
        max_results: Optional[int] = SEARCH_MAX_RESULTS_DEFAULT,
        filter_string: Optional[str] = None,
        order_by: Optional[List[str]] = None,
        page_token=None,
    ) -> PagedList[Experiment]:
        return self._tracking_store.search_experiments(
            view_type=view_type,
            max_results=max_results,
            filter_string=filter_string,
            order_by=order_by,
            page_token=page_token,
        )

    def delete_experiment(self, experiment_id: str) -> None:
        self._tracking_store.delete_experiment(experiment_id)

    def restore_experiment(self, experiment_id: str) -> None:
        self._tracking_store.restore_experiment(experiment_id)

    def rename_experiment(self, experiment_id: str, new_name: str) -> None:
        self._tracking_store.rename_experiment(experiment_id, new_name)

    def set_experiment_tag(self, experiment_id: str, key: str, value: Any) -> None:
        self._tracking_store.set_experiment_tag(experiment_id, ExperimentTag(key, str(value)))

    def delete_experiment_tag(self, experiment_id: str, key: str) -> None:
        self._tracking_store.delete_experiment_tag(experiment_id, key)

    # Runs

    def get_run(self, run_id: str) -> Run:
        """
        Fetch the run from backend store. The resulting
        :py:class:`Run <mlflow_client.entities.Run>` contains a collection of run metadata,
        :py:class:`RunInfo <mlflow_client.entities.RunInfo>`, as well as a collection of
        run parameters, tags, and metrics, :py:class:`RunData <mlflow_client.entities.RunData>`.
        In the case where multiple metrics with the same key are logged for the run, the
        :py:class:`RunData <mlflow_client.entities.RunData>` contains the most recently logged
        value at the largest step for each metric.

        Args:
            run_id: Unique identifier for the run.

        Returns:
            A single :py:class:`mlflow_client.entities.Run` object, if the run exists. Otherwise,
            raises an exception.
        """
        return self._tracking_store.get_run(run_id)

    def create_run(
        self,
        experiment_id: str,
        start_time: Optional[int] = None,
        tags: Optional[Dict[str, Any]] = None,
        run_name: Optional[str] = None,
    ) -> Run:
        """
        Create a :py:class:`mlflow_client.entities.Run` object that can be associated with
        metrics, parameters, artifacts, etc. Unlike the builder, this method does not log
        params or metrics.

        Args:
            experiment_id: The string ID of the experiment to create a run in.
            start_time: If not provided, use the current timestamp.
            tags: A dictionary of key-value pairs that are converted into
                :py:class:`mlflow_client.entities.RunTag` objects.
            run_name: The name of this run.

        Returns:
            :py:class:`mlflow_client.entities.Run` that was created.
        """
        tags = tags if tags else {}
        if run_name is not None and MLFLOW_RUN_NAME not in tags:
            tags = {**tags, MLFLOW_RUN_NAME: run_name}
        return self._tracking_store.create_run(
            experiment_id=experiment_id,
            start_time=start_time or get_current_time_millis(),
            tags=[RunTag(key, str(value)) for key, value in tags.items()],
            run_name=run_name,
        )

    def update_run(
        self, run_id: str, status: Optional[str] = None, name: Optional[str] = None
    ) -> None:
        """
        Update a run with the specified ID to a new status or name.

        Args:
            run_id: The ID of the run to update.
            status: The new status of the run to set, if specified. At least one of ``status``
                or ``name`` should be specified.
            name: The new name of the run to set, if specified.
        """
        if status is not None:
            RunStatus.from_string(status)
        self._tracking_store.update_run_info(run_id, run_status=status, run_name=name)

    def set_terminated(
        self, run_id: str, status: Optional[str] = None, end_time: Optional[int] = None
    ) -> None:
        """Set a run's status to terminated.

        Args:
            run_id: The ID of the run to terminate.
            status: A string value of :py:class:`mlflow_client.entities.RunStatus`. Defaults to
                "FINISHED". Only terminal statuses (FINISHED, FAILED, KILLED) are accepted.
            end_time: If not provided, defaults to the current time.
        """
        status = status or RunStatus.FINISHED.value
        if not RunStatus.is_terminated(status):
            raise MlflowException.invalid_parameter_value(
                f"Cannot terminate run '{run_id}' with non-terminal status '{status}'."
            )
        self._tracking_store.update_run_info(
            run_id,
            run_status=status,
            end_time=end_time or get_current_time_millis(),
        )

    def delete_run(self, run_id: str) -> None:
        self._tracking_store.delete_run(run_id)

    def restore_run(self, run_id: str) -> None:
        self._tracking_store.restore_run(run_id)

    def search_runs(
        self,
        experiment_ids: List[str],
        filter_string: str = "",
        run_view_type: str = ViewType.ACTIVE_ONLY,
        max_results: int = SEARCH_MAX_RESULTS_DEFAULT,
        order_by: Optional[List[str]] = None,
        page_token: Optional[str] = None,
    ) -> PagedList[Run]:
        """
        Search for Runs that fit the specified criteria.

        Args:
            experiment_ids: List of experiment IDs, or a single string experiment ID.
            filter_string: Filter query string, defaults to searching all runs.
            run_view_type: One of enum values ACTIVE_ONLY, DELETED_ONLY, or ALL runs
                defined in :py:class:`mlflow_client.entities.ViewType`.
            max_results: Maximum number of runs desired.
            order_by: List of columns to order by (e.g., "metrics.rmse"). The ``order_by``
                column can contain an optional ``DESC`` or ``ASC`` value.
            page_token: Token specifying the next page of results. It should be obtained from
                a ``search_runs`` call.

        Returns:
            A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`Run <mlflow_client.entities.Run>` objects that satisfy the search
            expressions. If the underlying tracking store supports pagination, the token for
            the next page may be obtained via the ``token`` attribute of the returned object.
        """
        if isinstance(experiment_ids, str):
            experiment_ids = [experiment_ids]
        return self._tracking_store.search_runs(
            experiment_ids=experiment_ids,
            filter_string=filter_string,
            run_view_type=run_view_type,
            max_results=max_results,
            order_by=order_by,
            page_token=page_token,
        )

    def log_metric(
        self,
        run_id: str,
        key: str,
        value: float,
        timestamp: Optional[int] = None,
        step: Optional[int] = None,
    ) -> None:
        """
        Log a metric against the run ID.

        Args:
            run_id: The run id to which the metric should be logged.
            key: Metric name.
            value: Metric value (float).
            timestamp: Time when this metric was calculated. Defaults to the current system
                time.
            step: Integer training step (iteration) at which the metric was calculated.
                Defaults to 0.
        """
        timestamp = timestamp if timestamp is not None else get_current_time_millis()
        step = step if step is not None else 0
        self._tracking_store.log_metric(run_id, Metric(key, value, timestamp, step))

    def log_param(self, run_id: str, key: str, value: Any) -> Any:
        """
        Log a parameter against the run ID. The value is converted to a string.

        Returns:
            The parameter value that was logged.
        """
        self._tracking_store.log_param(run_id, Param(key, str(value)))
        return value

    def set_tag(self, run_id: str, key: str, value: Any) -> None:
        self._tracking_store.set_tag(run_id, RunTag(key, str(value)))

    def delete_tag(self, run_id: str, key: str) -> None:
        self._tracking_store.delete_tag(run_id, key)

    def log_batch(
        self,
        run_id: str,
        metrics: Sequence[Metric] = (),
        params: Sequence[Param] = (),
        tags: Sequence[RunTag] = (),
    ) -> None:
        """
        Log multiple metrics, params, and/or tags in a single request.

        Args:
            run_id: String ID of the run.
            metrics: If provided, List of Metric(key, value, timestamp, step) instances.
            params: If provided, List of Param(key, value) instances.
            tags: If provided, List of RunTag(key, value) instances.
        """
        if len(metrics) == 0 and len(params) == 0 and len(tags) == 0:
            return
        self._tracking_store.log_batch(
            run_id=run_id, metrics=list(metrics), params=list(params), tags=list(tags)
        )

    def get_metric_history(self, run_id: str, key: str) -> MetricCollection:
        """Return every metric logged for a given key, across all pages of the history.

        Args:
            run_id: Unique identifier for run.
            key: Metric name within the run.

        Returns:
            A :py:class:`MetricCollection <mlflow_client.collection.MetricCollection>`, in the
            order the server returned them.
        """
        history = MetricCollection()
        page_token = None
        while True:
            page = self._tracking_store.get_metric_history(run_id, key, page_token=page_token)
            for metric in page:
                history.add(metric)
            page_token = page.token
            if not page_token:
                return history

    def get_metric_history_bulk(
        self, run_id: str, keys: Sequence[str]
    ) -> Dict[str, MetricCollection]:
        """Return the history of several metrics of a run in a single request.

        Returns:
            Dictionary of metric key to :py:class:`MetricCollection
            <mlflow_client.collection.MetricCollection>`. Every requested key is present; keys
            without history map to an empty collection.
        """
        histories = self._tracking_store.get_metric_history_bulk(run_id, keys)
        return {key: MetricCollection(histories.get(key, [])) for key in keys}

    # Artifacts

    def _get_artifact_repo(self, run_id):
        return RunArtifactRepository(self.get_run(run_id).info, self._tracking_store)

    def log_artifact(self, run_id: str, local_path: str, artifact_path: Optional[str] = None):
        """
        Write a local file to the artifacts of the run.

        Args:
            run_id: String ID of run.
            local_path: Path to the file to write.
            artifact_path: If provided, the directory in ``artifact_uri`` to write to.
        """
        self._get_artifact_repo(run_id).log_artifact(local_path, artifact_path)

    def log_artifacts(self, run_id: str, local_dir: str, artifact_path: Optional[str] = None):
        self._get_artifact_repo(run_id).log_artifacts(local_dir, artifact_path)

    def list_artifacts(self, run_id: str, path: Optional[str] = None) -> List[FileInfo]:
        """List the artifacts for a run.

        Args:
            run_id: The run to list artifacts from.
            path: The run's relative artifact path to list from. By default it is set to None
                or the root artifact path.

        Returns:
            List of :py:class:`mlflow_client.entities.FileInfo`.
        """
        return self._get_artifact_repo(run_id).list_artifacts(path)

    def download_artifacts(self, run_id: str, path: str, dst_path: Optional[str] = None) -> str:
        """
        Download an artifact file or directory from a run to a local directory if applicable,
        and return a local path for it.

        Args:
            run_id: The run to download artifacts from.
            path: Relative source path to the desired artifact.
            dst_path: Absolute path of the local filesystem destination directory to which to
                download the specified artifacts. This directory must already exist. If
                unspecified, the artifacts are downloaded to a new uniquely-named directory.

        Returns:
            Local path of desired artifact.
        """
        return self._get_artifact_repo(run_id).download_artifacts(path, dst_path)

    # Traces

    def log_trace(self, trace: Trace) -> TraceInfo:
        """
        Log a trace built with :py:meth:`create_trace_builder`, including all of its spans.

        Returns:
            The :py:class:`TraceInfo <mlflow_client.entities.TraceInfo>` recorded by the server.
        """
        _logger.debug("Logging trace %s with %d spans", trace.info.trace_id, len(trace.spans))
        return self._tracking_store.log_trace(trace)

    def get_trace(self, trace_id: str) -> Trace:
        return self._tracking_store.get_trace(trace_id)

    def search_traces(
        self,
        experiment_ids: List[str],
        filter_string: Optional[str] = None,
        max_results: int = SEARCH_TRACES_DEFAULT_MAX_RESULTS,
        order_by: Optional[List[str]] = None,
        page_token: Optional[str] = None,
    ) -> PagedList[Trace]:
        return self._tracking_store.search_traces(
            experiment_ids=experiment_ids,
            filter_string=filter_string,
            max_results=max_results,
            order_by=order_by,
            page_token=page_token,
        )

    def delete_traces(
        self,
        experiment_id: str,
        trace_ids: Optional[List[str]] = None,
        max_traces: Optional[int] = None,
        max_timestamp_millis: Optional[int] = None,
    ) -> int:
        """
        Delete traces of an experiment, either the given ``trace_ids`` or up to
        ``max_traces`` traces older than ``max_timestamp_millis``.

        Returns:
            The number of traces deleted.
        """
        return self._tracking_store.delete_traces(
            experiment_id=experiment_id,
            trace_ids=trace_ids,
            max_traces=max_traces,
            max_timestamp_millis=max_timestamp_millis,
        )

    def set_trace_tag(self, trace_id: str, key: str, value: Any) -> None:
        self._tracking_store.set_trace_tag(trace_id, key, str(value))

    def delete_trace_tag(self, trace_id: str, key: str) -> None:
        self._tracking_store.delete_trace_tag(trace_id, key)

    # Datasets

    def create_dataset(
        self,
        name: str,
        experiment_id: Optional[str] = None,
        tags: Optional[Dict[str, Any]] = None,
    ) -> Dataset:
        return self._tracking_store.create_dataset(name, experiment_id=experiment_id, tags=tags)

    def get_dataset(self, dataset_id: str) -> Dataset:
        return self._tracking_store.get_dataset(dataset_id)

    def add_dataset_to_experiments(self, dataset_id: str, experiment_ids: List[str]) -> None:
        self._tracking_store.add_dataset_to_experiments(dataset_id, experiment_ids)

    def search_datasets(
        self,
        experiment_id: Optional[str] = None,
        filter_string: Optional[str] = None,
        max_results: int = SEARCH_MAX_RESULTS_DEFAULT,
        page_token: Optional[str] = None,
    ) -> PagedList[Dataset]:
        """
        Search the datasets of the server, or of one experiment when ``experiment_id`` is set.

        Returns:
            A :py:class:`PagedList <mlflow_client.store.entities.PagedList>` of
            :py:class:`Dataset <mlflow_client.entities.Dataset>`. Pass its ``token`` as
            ``page_token`` to fetch the next page.
        """
        return self._tracking_store.search_datasets(
            experiment_id=experiment_id,
            filter_string=filter_string,
            max_results=max_results,
            page_token=page_token,
        )

    def delete_dataset(self, dataset_id: str) -> None:
        self._tracking_store.delete_dataset(dataset_id)

    # Registered models

    def create_registered_model(
        self,
        name: str,
        tags: Optional[Dict[str, Any]] = None,
        description: Optional[str] = None,
    ) -> RegisteredModel:
        """
        Create a new registered model in backend store.

        Args:
            name: Name of the new model. This is expected to be unique in the backend store.
            tags: A dictionary of key-value pairs that are converted into
                :py:class:`mlflow_client.entities.ModelTag` objects.
            description: Description of the model.

        Returns:
            A single object of :py:class:`mlflow_client.entities.RegisteredModel` created by
            backend.
        """
        tags = [ModelTag(key, str(value)) for key, value in tags.items()] if tags else []
        return self._registry_store.create_registered_model(name, tags, description)

    def rename_registered_model(self, name: str, new_name: str) -> RegisteredModel:
        return self._registry_store.rename_registered_model(name=name, new_name=new_name)

    def update_registered_model(
        self, name: str, description: Optional[str] = None
    ) -> RegisteredModel:
        return self._registry_store.update_registered_model(name=name, description=description)

    def delete_registered_model(self, name: str) -> None:
        self._registry_store.delete_registered_model(name)

    def search_registered_models(
        self,
        filter_string: Optional[str] = None,
        max_results: int = SEARCH_REGISTERED_MODEL_MAX_RESULTS_DEFAULT,
        order_by: Optional[List[str]] = None,
        page_token: Optional[str] = None,
    ) -> PagedList[RegisteredModel]:
        return self._registry_store.search_registered_models(
            filter_string, max_results, order_by, page_token
        )

    def get_registered_model(self, name: str) -> RegisteredModel:
        return self._registry_store.get_registered_model(name)

    def get_latest_versions(
        self, name: str, stages: Optional[List[str]] = None
    ) -> List[ModelVersion]:
        """
        Latest version models for each requests stage. If no ``stages`` provided, returns the
        latest version for each stage.

        Args:
            name: Name of the registered model from which to get the latest versions.
            stages: List of desired stages. If input list is None, return latest versions for
                'None', 'Staging', 'Production' and 'Archived' stages.

        Returns:
            List of :py:class:`mlflow_client.entities.ModelVersion` objects.
        """
        return self._registry_store.get_latest_versions(name, stages)

    def set_registered_model_tag(self, name: str, key: str, value: Any) -> None:
        self._registry_store.set_registered_model_tag(name, ModelTag(key, str(value)))

    def delete_registered_model_tag(self, name: str, key: str) -> None:
        self._registry_store.delete_registered_model_tag(name, key)

    def set_registered_model_alias(self, name: str, alias: str, version: str) -> None:
        self._registry_store.set_registered_model_alias(name, alias, version)

    def delete_registered_model_alias(self, name: str, alias: str) -> None:
        self._registry_store.delete_registered_model_alias(name, alias)

    def get_model_version_by_alias(self, name: str, alias: str) -> ModelVersion:
        return self._registry_store.get_model_version_by_alias(name, alias)

    # Model versions

    def create_model_version(
        self,
        name: str,
        source: str,
        run_id: Optional[str] = None,
        tags: Optional[Dict[str, Any]] = None,
        run_link: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ModelVersion:
        """
        Create a new model version from given source.

        Args:
            name: Name for the containing registered model.
            source: URI indicating the location of the model artifacts.
            run_id: Run ID from MLflow tracking server that generated the model.
            tags: A dictionary of key-value pairs that are converted into
                :py:class:`mlflow_client.entities.ModelTag` objects.
            run_link: Link to the run from an MLflow tracking server that generated this model.
            description: Description of the version.

        Returns:
            Single :py:class:`mlflow_client.entities.ModelVersion` object created by backend.
        """
        tags = [ModelTag(key, str(value)) for key, value in tags.items()] if tags else []
        return self._registry_store.create_model_version(
            name=name,
            source=source,
            run_id=run_id,
            tags=tags,
            run_link=run_link,
            description=description,
        )

    def update_model_version(
        self, name: str, version: str, description: Optional[str] = None
    ) -> ModelVersion:
        return self._registry_store.update_model_version(
            name=name, version=version, description=description
        )

    def transition_model_version_stage(
        self, name: str, version: str, stage: str, archive_existing_versions: bool = False
    ) -> ModelVersion:
        """
        Update model version stage.

        Args:
            name: Registered model name.
            version: Registered model version.
            stage: New desired stage for this model version.
            archive_existing_versions: If this flag is set to ``True``, all existing model
                versions in the stage will be automatically moved to the "archived" stage. Only
                valid when ``stage`` is ``"staging"`` or ``"production"`` otherwise an error
                will be raised.

        Returns:
            A single :py:class:`mlflow_client.entities.ModelVersion` object.
        """
        return self._registry_store.transition_model_version_stage(
            name, version, stage, archive_existing_versions
        )

    def delete_model_version(self, name: str, version: str) -> None:
        self._registry_store.delete_model_version(name, version)

    def get_model_version(self, name: str, version: str) -> ModelVersion:
        return self._registry_store.get_model_version(name, version)

    def get_model_version_download_uri(self, name: str, version: str) -> str:
        return self._registry_store.get_model_version_download_uri(name, version)

    def search_model_versions(
        self,
        filter_string: Optional[str] = None,
        max_results: int = SEARCH_MODEL_VERSION_MAX_RESULTS_DEFAULT,
        order_by: Optional[List[str]] = None,
        page_token: Optional[str] = None,
    ) -> PagedList[ModelVersion]:
        return self._registry_store.search_model_versions(
            filter_string, max_results, order_by, page_token
        )

    def set_model_version_tag(self, name: str, version: str, key: str, value: Any) -> None:
        self._registry_store.set_model_version_tag(name, version, ModelTag(key, str(value)))

    def delete_model_version_tag(self, name: str, version: str, key: str) -> None:
        self._registry_store.delete_model_version_tag(name, version, key)
