from operator import attrgetter
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from mlflow_client.entities.metric import Metric


class MinMax(NamedTuple):
    min: float
    max: float


class MetricCollection:
    """
    An ordered collection of :py:class:`Metric <mlflow_client.entities.Metric>` objects.

    Metrics are kept in insertion order and keys are not unique: a metric logged at several
    steps appears once per logged value. Every query returns a new collection and leaves the
    receiver untouched; :py:meth:`add` is the only mutating operation.

    The collection is not synchronized. Callers sharing one across threads must lock around
    :py:meth:`add`.
    """

    def __init__(self, metrics: Optional[Iterable[Metric]] = None):
        self._metrics = list(metrics) if metrics is not None else []

    @classmethod
    def from_dictionaries(cls, metric_dicts) -> "MetricCollection":
        return cls(Metric.from_dictionary(metric_dict) for metric_dict in metric_dicts)

    def add(self, metric: Metric) -> None:
        self._metrics.append(metric)

    def all(self) -> list[Metric]:
        return list(self._metrics)

    def get_by_key(self, key: str) -> "MetricCollection":
        return self.filter(lambda metric: metric.key == key)

    def get_by_step(self, step: int) -> "MetricCollection":
        return self.filter(lambda metric: metric.step == step)

    def get_latest_by_key(self) -> dict[str, Metric]:
        """
        Returns the metric with the greatest timestamp for every key. When several metrics of a
        key share the greatest timestamp, the one added last wins.
        """
        latest = {}
        for metric in self._metrics:
            current = latest.get(metric.key)
            if current is None or metric.timestamp >= current.timestamp:
                latest[metric.key] = metric
        return latest

    def filter(self, predicate: Callable[[Metric], bool]) -> "MetricCollection":
        return MetricCollection(metric for metric in self._metrics if predicate(metric))

    def sort(
        self, key: Optional[Callable[[Metric], object]] = None, reverse: bool = False
    ) -> "MetricCollection":
        """
        Returns a new collection sorted by ``key``, or by metric key, then step, then timestamp
        when ``key`` is None. The sort is stable. Use :py:func:`functools.cmp_to_key` to sort
        with a comparator.
        """
        if key is None:
            key = attrgetter("key", "step", "timestamp")
        return MetricCollection(sorted(self._metrics, key=key, reverse=reverse))

    def sort_by_timestamp(self) -> "MetricCollection":
        return self.sort(key=attrgetter("timestamp"))

    def sort_by_step(self) -> "MetricCollection":
        return self.sort(key=attrgetter("step"))

    def group_by_key(self) -> dict[str, "MetricCollection"]:
        grouped = {}
        for metric in self._metrics:
            grouped.setdefault(metric.key, MetricCollection()).add(metric)
        return grouped

    def group_by_step(self) -> dict[int, "MetricCollection"]:
        grouped = {}
        for metric in self._metrics:
            grouped.setdefault(metric.step, MetricCollection()).add(metric)
        return grouped

    def get_min_max(self, key: str) -> Optional[MinMax]:
        values = self._values_for(key)
        if not values:
            return None
        return MinMax(min=min(values), max=max(values))

    def get_average(self, key: str) -> Optional[float]:
        values = self._values_for(key)
        if not values:
            return None
        return sum(values) / len(values)

    def _values_for(self, key):
        return [metric.value for metric in self._metrics if metric.key == key]

    def first(self) -> Optional[Metric]:
        return self._metrics[0] if self._metrics else None

    def last(self) -> Optional[Metric]:
        return self._metrics[-1] if self._metrics else None

    def count(self) -> int:
        return len(self._metrics)

    def is_empty(self) -> bool:
        return not self._metrics

    def to_list(self) -> list[dict]:
        return [metric.to_dictionary() for metric in self._metrics]

    def __iter__(self) -> Iterator[Metric]:
        return iter(list(self._metrics))

    def __len__(self):
        return len(self._metrics)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return MetricCollection(self._metrics[index])
        return self._metrics[index]

    def __eq__(self, other):
        if isinstance(other, MetricCollection):
            return self._metrics == other._metrics
        return NotImplemented

    def __repr__(self):
        return f"MetricCollection({self._metrics!r})"
