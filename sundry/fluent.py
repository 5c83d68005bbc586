"""
Sundry Fluent - an untyped, default-tolerant attribute container
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json

from collections import abc
from typing import Any, Iterable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from . import arr
from .abc import Arrayable
from .collections import Collection, arrayable_items
from .formatters import fmt_type


# Classes --------------------------------------------------------------------------------------------------------------

class Fluent:
    """
    A general-purpose attribute container.

    Values are untyped and reading never raises: absent keys resolve to a default, which is
    invoked when callable. Writing goes through the builder methods set() and __call__(), or through
    plain attribute and item assignment.

    Attribute reads (fluent.name) are literal and return None for missing keys. Keys that collide
    with method names, such as "get", are reachable through item access only.

    Examples:
        >>> f = Fluent({"user": {"name": "Ada"}})
        >>> f.get("user.name")
        'Ada'
        >>> f.set("user.age", 36)(active=True).to_dict()
        {'user': {'name': 'Ada', 'age': 36}, 'active': True}
        >>> f.missing is None
        True
    """

    def __init__(self, attributes: abc.Mapping | Iterable[tuple[Any, Any]] | None = None) -> None:
        if attributes is not None and (isinstance(attributes, (str, bytes))
                                       or not isinstance(attributes, (abc.Mapping, abc.Iterable))):
            raise TypeError(f"attributes must be a Mapping or iterable of pairs, got {fmt_type(attributes)}")
        object.__setattr__(self, "_attributes", dict(attributes or {}))

    # ----- Builder -----

    def set(self, key: str, value: Any = True) -> "Fluent":
        """Set the value at a dotted key; a bare set(key) stores True."""
        arr.set(self._attributes, key, value)
        return self

    def __call__(self, **attributes: Any) -> "Fluent":
        """Set several literal keys at once, e.g. fluent(name="Ada", active=True)."""
        self._attributes.update(attributes)
        return self

    def remove(self, key: str) -> "Fluent":
        arr.forget(self._attributes, key)
        return self

    # ----- Access -----

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, walking mappings, sequences and object attributes."""
        return arr.data_get(self._attributes, key, default)

    def value(self, key: str, default: Any = None) -> Any:
        """Get the value of a literal key, without path interpretation."""
        if key in self._attributes:
            return self._attributes[key]
        return arr.value(default)

    def has(self, key: str) -> bool:
        return arr.has(self._attributes, key)

    def scope(self, key: str, default: Any = None) -> "Fluent":
        """
        Return a new Fluent wrapping the value at key.

        Mappings are copied, sequences are keyed by position, a scalar becomes {0: value}.

        Examples:
            >>> Fluent({"db": {"host": "localhost"}}).scope("db").host
            'localhost'
        """
        items = arrayable_items(self.get(key, default))
        return type(self)(items if isinstance(items, dict) else dict(enumerate(items)))

    def get_attributes(self) -> dict:
        return self._attributes

    def collect(self, key: str | None = None) -> Collection:
        return Collection(self._attributes if key is None else self.get(key))

    def to_dict(self) -> dict:
        return {key: value.to_dict() if isinstance(value, Arrayable) else value
                for key, value in self._attributes.items()}

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    # ----- Attribute and item access -----

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._attributes.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._attributes[name] = value

    def __delattr__(self, name: str) -> None:
        self._attributes.pop(name, None)

    def __getitem__(self, key: str) -> Any:
        return self.value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __delitem__(self, key: str) -> None:
        self._attributes.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return self._attributes.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fluent):
            return self._attributes == other._attributes
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
