import logging

from mlflow_client.entities import Metric, Param, RunTag
from mlflow_client.utils.mlflow_tags import MLFLOW_RUN_NAME
from mlflow_client.utils.time import get_current_time_millis
from mlflow_client.utils.validation import (
    _validate_batch_log_limits,
    _validate_metric,
    _validate_param,
    _validate_tag,
)

_logger = logging.getLogger(__name__)


class RunBuilder:
    """
    Accumulates the configuration of a new run and creates it with as few requests as
    possible. Every ``with_*`` method returns the builder itself.

    :py:meth:`start` creates the run with its tags, logs all params and metrics in one
    ``log-batch`` request if there are any, then fetches the populated run.
    :py:meth:`create` only creates the run.

    Metric defaults are resolved when :py:meth:`with_metric` is called: ``step`` is 0 and
    ``timestamp`` is the current time in milliseconds at that call, not at :py:meth:`start`.

    Every ``with_*`` method validates its input. :py:meth:`start` checks the batch limits
    before the run is created.

    Args:
        store: :py:class:`RestStore <mlflow_client.store.rest_store.RestStore>` to create the
            run with.
        experiment_id: ID of the experiment owning the run.
        clock: Zero-argument callable returning the current time in milliseconds.
    """

    def __init__(self, store, experiment_id, clock=None):
        self._store = store
        self._experiment_id = str(experiment_id)
        self._clock = clock or get_current_time_millis
        self._run_name = None
        self._start_time = None
        self._user_id = None
        self._tags = {}
        self._params = {}
        self._metrics = []

    @property
    def experiment_id(self):
        return self._experiment_id

    def with_name(self, name):
        self._run_name = name
        return self

    def with_start_time(self, timestamp):
        """Start time of the run in milliseconds since the UNIX epoch."""
        self._start_time = int(timestamp)
        return self

    def with_user_id(self, user_id):
        self._user_id = user_id
        return self

    def with_tag(self, key, value):
        value = str(value)
        _validate_tag(key, value)
        self._tags[key] = value
        return self

    def with_tags(self, tags):
        for key, value in tags.items():
            self.with_tag(key, value)
        return self

    def with_param(self, key, value):
        value = str(value)
        _validate_param(key, value)
        self._params[key] = value
        return self

    def with_params(self, params):
        for key, value in params.items():
            self.with_param(key, value)
        return self

    def with_metric(self, key, value, step=None, timestamp=None):
        timestamp = self._clock() if timestamp is None else timestamp
        step = 0 if step is None else step
        _validate_metric(key, value, timestamp, step)
        self._metrics.append(Metric(key=key, value=value, timestamp=int(timestamp), step=int(step)))
        return self

    def with_metrics(self, metrics):
        """
        Add several metrics, each given as a :py:class:`Metric <mlflow_client.entities.Metric>`
        or a dictionary with ``key``, ``value`` and optional ``step`` and ``timestamp``.
        """
        for metric in metrics:
            if isinstance(metric, Metric):
                _validate_metric(metric.key, metric.value, metric.timestamp, metric.step)
                self._metrics.append(metric)
            else:
                self.with_metric(
                    metric["key"], metric["value"], metric.get("step"), metric.get("timestamp")
                )
        return self

    def _run_tags(self):
        tags = [RunTag(key, value) for key, value in self._tags.items()]
        if self._run_name is not None and MLFLOW_RUN_NAME not in self._tags:
            tags.append(RunTag(MLFLOW_RUN_NAME, self._run_name))
        return tags

    def create(self):
        """
        Create the run with its name, start time, user and tags. Accumulated params and metrics
        are not logged.

        :return: The created :py:class:`Run <mlflow_client.entities.Run>`.
        """
        return self._store.create_run(
            experiment_id=self._experiment_id,
            user_id=self._user_id,
            start_time=self._clock() if self._start_time is None else self._start_time,
            tags=self._run_tags(),
            run_name=self._run_name,
        )

    def start(self):
        """
        Create the run, then log accumulated params and metrics in a single batch.

        :return: The :py:class:`Run <mlflow_client.entities.Run>`, fetched again after logging
            when params or metrics were logged.
        """
        params = [Param(key, value) for key, value in self._params.items()]
        _validate_batch_log_limits(self._metrics, params, [])
        run = self.create()
        if not params and not self._metrics:
            return run

        run_id = run.info.run_id
        _logger.debug(
            f"Logging {len(self._params)} params and {len(self._metrics)} metrics to run {run_id}"
        )
        self._store.log_batch(
            run_id,
            metrics=list(self._metrics),
            params=params,
        )
        return self._store.get_run(run_id)
