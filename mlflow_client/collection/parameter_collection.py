import re

from mlflow_client.collection._keyed_collection import _KeyedCollection
from mlflow_client.entities.param import Param


class ParameterCollection(_KeyedCollection):
    """
    The parameters of a run, keyed by parameter name. A parameter logged twice keeps the last
    value.
    """

    _item_class = Param

    def filter_by_key_prefix(self, prefix):
        return self.filter(lambda param: param.key.startswith(prefix))

    def filter_by_value_pattern(self, pattern):
        """
        Keep the parameters whose value matches the regular expression ``pattern`` anywhere
        (:py:func:`re.search` semantics).
        """
        regex = re.compile(pattern)
        return self.filter(lambda param: regex.search(param.value) is not None)
