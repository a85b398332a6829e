import functools


class _KeyedCollection:
    """
    Insertion-ordered collection holding at most one item per key. Adding an item whose key is
    already present replaces the stored item. Iteration yields items, membership tests keys.
    """

    _item_class = None

    def __init__(self, items=None):
        self._items = {}
        for item in items or []:
            self.add(item)

    @classmethod
    def from_dictionary(cls, mapping, item_class=None):
        """Build a collection from a ``{key: value}`` mapping."""
        item_class = item_class or cls._item_class
        return cls(item_class(key, str(value)) for key, value in mapping.items())

    @classmethod
    def from_dictionaries(cls, item_dicts, item_class=None):
        """Build a collection from a list of ``{"key": ..., "value": ...}`` JSON objects."""
        item_class = item_class or cls._item_class
        return cls(item_class.from_dictionary(item_dict) for item_dict in item_dicts)

    def add(self, item):
        self._items[item.key] = item

    def get(self, key):
        return self._items.get(key)

    def get_value(self, key):
        item = self._items.get(key)
        return item.value if item is not None else None

    def has(self, key):
        return key in self._items

    def remove(self, key):
        self._items.pop(key, None)

    def all(self):
        return list(self._items.values())

    def keys(self):
        return list(self._items)

    def values(self):
        return [item.value for item in self._items.values()]

    def filter(self, predicate):
        return type(self)(item for item in self._items.values() if predicate(item))

    def merge(self, other):
        """
        Returns a new collection holding the items of both collections. Items of ``other`` win
        when both collections hold the same key.
        """
        merged = type(self)(self._items.values())
        for item in other:
            merged.add(item)
        return merged

    def reduce(self, function, initial=None):
        return functools.reduce(function, self._items.values(), initial)

    def equals(self, other):
        """True if both collections hold the same keys with equal values, in any order."""
        if self.count() != other.count():
            return False
        for key, item in self._items.items():
            other_item = other.get(key)
            if other_item is None or other_item.value != item.value:
                return False
        return True

    def count(self):
        return len(self._items)

    def is_empty(self):
        return not self._items

    def to_dictionary(self):
        return {key: item.value for key, item in self._items.items()}

    def to_list(self):
        return [item.to_dictionary() for item in self._items.values()]

    def __iter__(self):
        return iter(list(self._items.values()))

    def __len__(self):
        return len(self._items)

    def __contains__(self, key):
        return key in self._items

    def __getitem__(self, key):
        return self._items[key]

    def __eq__(self, other):
        if isinstance(other, _KeyedCollection):
            return self.equals(other)
        return NotImplemented

    def __repr__(self):
        return f"{type(self).__name__}({self.to_dictionary()!r})"
