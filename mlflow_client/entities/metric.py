from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.validation import _validate_required_fields


class Metric(_MlflowObject):
    """
    Metric object.
    """

    def __init__(self, key, value, timestamp, step):
        self._key = key
        self._value = value
        self._timestamp = timestamp
        self._step = step

    @property
    def key(self):
        """String key corresponding to the metric name."""
        return self._key

    @property
    def value(self):
        """Float value of the metric."""
        return self._value

    @property
    def timestamp(self):
        """Metric timestamp as an integer (milliseconds since the Unix epoch)."""
        return self._timestamp

    @property
    def step(self):
        """Integer metric step (x-coordinate)."""
        return self._step

    def __eq__(self, __o):
        if isinstance(__o, self.__class__):
            return self.__dict__ == __o.__dict__

        return False

    def __hash__(self):
        return hash((self._key, self._value, self._timestamp, self._step))

    def to_dictionary(self):
        """
        Convert the Metric object to a dictionary.

        Returns:
            dict: The Metric object represented as a dictionary.
        """
        return {
            "key": self.key,
            "value": self.value,
            "timestamp": self.timestamp,
            "step": self.step,
        }

    @classmethod
    def from_dictionary(cls, metric_dict):
        """
        Create a Metric object from a dictionary. ``timestamp`` and ``step`` default to 0 when
        the server omits them.

        Args:
            metric_dict (dict): Dictionary containing metric information.

        Returns:
            Metric: The Metric object created from the dictionary.
        """
        _validate_required_fields(metric_dict, ["key", "value"], "metric")
        return cls(
            key=metric_dict["key"],
            value=float(metric_dict["value"]),
            timestamp=int(metric_dict.get("timestamp") or 0),
            step=int(metric_dict.get("step") or 0),
        )
