"""
Sundry Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import json
import math
import random
import weakref

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from . import arr
from .abc import Arrayable, Jsonable
from .formatters import fmt_type


# Methods --------------------------------------------------------------------------------------------------------------

def arrayable_items(items: Any) -> list | dict:
    """
    Normalize anything collection-like into a plain list or dict.

    - None becomes an empty list
    - Mappings become dicts, a Collection keeps its own shape
    - Arrayable and Jsonable objects are converted through to_dict() / to_json()
    - str, bytes, enum members and other scalars are wrapped in a one-item list
    - any other iterable is materialized into a list

    Raises:
        TypeError: For weak containers, whose items may vanish while the collection holds them.

    Examples:
        >>> arrayable_items(None), arrayable_items("abc"), arrayable_items(range(3))
        ([], ['abc'], [0, 1, 2])
    """
    if items is None:
        return []
    if isinstance(items, Collection):
        return items.all().copy()
    if isinstance(items, (weakref.WeakKeyDictionary, weakref.WeakValueDictionary, weakref.WeakSet)):
        raise TypeError(f"collections cannot be created from weak containers, got {fmt_type(items)}")
    if isinstance(items, Mapping):
        return dict(items)
    if isinstance(items, Arrayable):
        return dict(items.to_dict())
    if isinstance(items, Jsonable):
        return json.loads(items.to_json())
    if isinstance(items, (str, bytes, bytearray, Enum)):
        return [items]
    if isinstance(items, Iterable):
        return list(items)
    return [items]


# Classes --------------------------------------------------------------------------------------------------------------

class Collection:
    """
    An ordered collection of items backed by a list or a dict.

    List-backed collections are keyed by position. Iteration and membership always apply to
    VALUES, for both shapes; use keys() or items() for keys. Callbacks receive (value, key).

    Examples:
        >>> Collection(["a", "b"]).map(str.upper).implode(", ")
        'A, B'
        >>> Collection({"x": 1, "y": 2}).filter(lambda v, k: v > 1).all()
        {'y': 2}
    """

    def __init__(self, items: Any = None) -> None:
        self._items: list | dict = arrayable_items(items)

    @classmethod
    def times(cls, number: int, callback: Callable[[int], Any] | None = None) -> "Collection":
        """Create a collection of 1..number, optionally mapped through callback."""
        if number < 1:
            return cls()
        values = range(1, number + 1)
        return cls([callback(i) for i in values] if callback else list(values))

    # ----- Container protocol -----

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values())

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, key: Any) -> Any:
        return self._items[key]

    def __contains__(self, value: Any) -> bool:
        return value in self._values()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other._items
        return self._items == other

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    # ----- Access -----

    def all(self) -> list | dict:
        return self._items

    def count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def is_not_empty(self) -> bool:
        return bool(self._items)

    def keys(self) -> "Collection":
        return Collection(list(self._items.keys()) if self._is_dict() else list(range(len(self._items))))

    def values(self) -> "Collection":
        return Collection(self._values())

    def items(self) -> list[tuple[Any, Any]]:
        return list(self._items.items()) if self._is_dict() else list(enumerate(self._items))

    def first(self, callback: Callable | None = None, default: Any = None) -> Any:
        """Return the first item passing callback(value, key), or default."""
        call = _adapt_callback(callback) if callback else None
        for key, value in self.items():
            if call is None or call(value, key):
                return value
        return arr.value(default)

    def last(self, callback: Callable | None = None, default: Any = None) -> Any:
        """Return the last item passing callback(value, key), or default."""
        call = _adapt_callback(callback) if callback else None
        for key, value in reversed(self.items()):
            if call is None or call(value, key):
                return value
        return arr.value(default)

    def contains(self, value: Any) -> bool:
        """Check for a value, or for any item passing value(item, key) when value is callable."""
        if callable(value):
            call = _adapt_callback(value)
            return any(call(item, key) for key, item in self.items())
        return value in self._values()

    # ----- Transformations -----

    def map(self, callback: Callable) -> "Collection":
        """
        Apply callback to every item, keeping keys.

        Callback receives (value, key) when it accepts two arguments, else (value,).
        """
        call = _adapt_callback(callback)
        if self._is_dict():
            return Collection({key: call(value, key) for key, value in self._items.items()})
        return Collection([call(value, key) for key, value in enumerate(self._items)])

    def filter(self, callback: Callable | None = None) -> "Collection":
        """Keep items passing callback(value, key); without callback keep truthy items."""
        call = _adapt_callback(callback) if callback else (lambda value, key: bool(value))
        if self._is_dict():
            return Collection({key: value for key, value in self._items.items() if call(value, key)})
        return Collection([value for key, value in enumerate(self._items) if call(value, key)])

    def reject(self, callback: Callable) -> "Collection":
        call = _adapt_callback(callback)
        return self.filter(lambda value, key: not call(value, key))

    def each(self, callback: Callable) -> "Collection":
        """Call callback(value, key) for each item, stopping early when it returns False."""
        call = _adapt_callback(callback)
        for key, value in self.items():
            if call(value, key) is False:
                break
        return self

    def flatten(self, depth: float = math.inf) -> "Collection":
        """Flatten nested lists, tuples, mappings and collections into a single list of values."""
        return Collection(_flatten(self._values(), depth))

    def merge(self, items: Any) -> "Collection":
        """
        Merge items into a new collection.

        Lists concatenate. Dicts update by key. Merging into a list-backed collection with a dict
        converts the result to a dict keyed by positions and the given keys.
        """
        other = arrayable_items(items)
        if not self._is_dict() and isinstance(other, list):
            return Collection(self._items + other)

        merged = dict(self.items())
        if isinstance(other, dict):
            merged.update(other)
        else:
            merged.update((len(merged) + i, value) for i, value in enumerate(other))
        return Collection(merged)

    def push(self, *values: Any) -> "Collection":
        """Append values in place. Dict-backed collections receive the next free integer keys."""
        for value in values:
            if self._is_dict():
                key = len(self._items)
                while key in self._items:
                    key += 1
                self._items[key] = value
            else:
                self._items.append(value)
        return self

    def shuffle(self, seed: int | None = None) -> "Collection":
        """Return the values in random order, reproducibly when seed is given."""
        values = list(self._values())
        random.Random(seed).shuffle(values)
        return Collection(values)

    def implode(self, glue: str = "", key: str | None = None) -> str:
        """
        Join the values into a string.

        Args:
            glue: Separator between values.
            key: Dotted key plucked from each item before joining.
        """
        values = self._values() if key is None else [arr.data_get(item, key) for item in self._values()]
        return glue.join(str(value) for value in values)

    def pipe(self, callback: Callable[["Collection"], Any]) -> Any:
        return callback(self)

    # ----- Conversion -----

    def to_list(self) -> list:
        return list(self._values())

    def to_dict(self) -> dict:
        return dict(self.items())

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self._items, **kwargs)

    # ----- Private -----

    def _is_dict(self) -> bool:
        return isinstance(self._items, dict)

    def _values(self) -> list:
        return list(self._items.values()) if self._is_dict() else self._items


# Private Methods ------------------------------------------------------------------------------------------------------

def _adapt_callback(callback: Callable) -> Callable[[Any, Any], Any]:
    """Let single-argument callables such as str.upper be used where (value, key) is passed."""
    try:
        params = list(inspect.signature(callback).parameters.values())
    except (TypeError, ValueError):
        return lambda value, key: callback(value)

    positional = [p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    if len(positional) >= 2 or any(p.kind is p.VAR_POSITIONAL for p in params):
        return lambda value, key: callback(value, key)
    return lambda value, key: callback(value)


def _flatten(values: Iterable, depth: float) -> list:
    result = []
    for value in values:
        if isinstance(value, Collection):
            value = value.to_list()
        elif isinstance(value, Mapping):
            value = list(value.values())
        if isinstance(value, (list, tuple)) and depth > 0:
            result.extend(value if depth == 1 else _flatten(value, depth - 1))
        else:
            result.append(value)
    return result
