"""
Sundry Parameters - a typed, validating key/value bag with dotted-path access
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json
import re

from collections import abc
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from . import arr
from .errors import InvalidEnumValueError, InvalidFilterError, UnexpectedValueError
from .filters import FilterFlag, FilterKind, filter_value, scalar_text
from .formatters import fmt_type, fmt_value
from .sentinels import MISSING

E = TypeVar("E", bound=Enum)


# Classes --------------------------------------------------------------------------------------------------------------

class ParameterBag(abc.MutableMapping):
    """
    A mutable container of parameters with dotted-path access and typed getters.

    Keys are interpreted as dotted paths ("database.host") by get/set/has/remove and by item access;
    iteration and len() cover top-level keys only.

    Typed getters validate rather than coerce, accepting only canonical textual forms of their type:

    - get_int: int, integral float, or a string matching [+-]?(0|[1-9][0-9]*) after trimming
    - get_float: int, float, or a decimal/exponent string
    - get_boolean: bool, 0/1, or one of "1 true on yes" / "0 false off no ''" (case-insensitive)
    - get_string: str, numbers, bools ("true"/"false"), objects with their own __str__

    A bool is never accepted where an int or float is requested. Any other value raises
    UnexpectedValueError naming the key.

    Examples:
        >>> bag = ParameterBag({"user": {"name": "Ada", "age": "36"}})
        >>> bag.get("user.name")
        'Ada'
        >>> bag.get_int("user.age")
        36
        >>> bag.set("user.roles", ["admin"]).has("user.roles")
        True
    """

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        if parameters is not None and not isinstance(parameters, abc.Mapping):
            raise TypeError(f"parameters must be a Mapping, got {fmt_type(parameters)}")
        self._parameters: dict[str, Any] = dict(parameters or {})

    # ----- Mapping protocol -----

    def __getitem__(self, key: str) -> Any:
        found = arr.get(self._parameters, key, MISSING)
        if found is MISSING:
            raise KeyError(key)
        return found

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.has(key):
            raise KeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (str, int)) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parameters!r})"

    # ----- Basic access -----

    def all(self, key: str | None = None) -> Any:
        """
        Return all parameters, or the container stored at key.

        Raises:
            UnexpectedValueError: If the value at key is not a list, tuple or Mapping.
        """
        if key is None:
            return self._parameters

        found = self.get(key, [])
        if not isinstance(found, (list, tuple, abc.Mapping)):
            raise UnexpectedValueError(f"unexpected value for parameter '{key}': expected a container, "
                                       f"got {fmt_type(found)}", key=key)
        return found

    def replace(self, parameters: Mapping[str, Any] | None = None) -> "ParameterBag":
        """Replace all parameters with new ones."""
        self._parameters = dict(parameters or {})
        return self

    def add(self, parameters: Mapping[str, Any] | None = None) -> "ParameterBag":
        """Add parameters whose (dotted) keys are missing or hold None, leaving the others untouched."""
        for key, value in (parameters or {}).items():
            arr.add(self._parameters, key, value)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at a dotted key, or default (invoked if callable) when missing."""
        return arr.get(self._parameters, key, default)

    def set(self, key: str, value: Any) -> "ParameterBag":
        """Set the value at a dotted key, creating intermediate dicts."""
        arr.set(self._parameters, key, value)
        return self

    def has(self, key: Any) -> bool:
        return arr.has(self._parameters, key)

    def remove(self, key: str) -> "ParameterBag":
        """Remove a dotted key; removing a missing key is a no-op."""
        arr.forget(self._parameters, key)
        return self

    def get_many(self, keys: Iterable[str] | Mapping[str, Any]) -> dict[str, Any]:
        """
        Get several values at once.

        Args:
            keys: Keys to fetch, or a mapping of key to default.

        Examples:
            >>> ParameterBag({"a": 1}).get_many({"a": 0, "b": 2})
            {'a': 1, 'b': 2}
        """
        if isinstance(keys, abc.Mapping):
            return {key: self.get(key, default) for key, default in keys.items()}
        return {key: self.get(key) for key in keys}

    def push(self, key: str, value: Any) -> "ParameterBag":
        """Append a value onto a list parameter."""
        items = list(self.get_array(key))
        items.append(value)
        return self.set(key, items)

    def prepend(self, key: str, value: Any) -> "ParameterBag":
        """Prepend a value onto a list parameter."""
        items = list(self.get_array(key))
        items.insert(0, value)
        return self.set(key, items)

    def copy(self) -> "ParameterBag":
        return type(self)(self._parameters)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self._parameters, **kwargs)

    # ----- Typed getters -----

    def get_string(self, key: str, default: str = "") -> str:
        """
        Return the parameter value as a string.

        Raises:
            UnexpectedValueError: If the value has no textual form (None, containers, plain objects).
        """
        found = self.get(key, default)
        text = scalar_text(found)
        if text is MISSING:
            raise UnexpectedValueError(f"parameter '{key}' must be a string, got {fmt_type(found)}", key=key)
        return text

    def get_alpha(self, key: str, default: str = "") -> str:
        """Return the alphabetic characters of the parameter value."""
        return re.sub(r"[^A-Za-z]", "", self.get_string(key, default))

    def get_alnum(self, key: str, default: str = "") -> str:
        """Return the alphabetic characters and digits of the parameter value."""
        return re.sub(r"[^A-Za-z0-9]", "", self.get_string(key, default))

    def get_digits(self, key: str, default: str = "") -> str:
        """Return the digits of the parameter value."""
        return re.sub(r"[^0-9]", "", self.get_string(key, default))

    def get_int(self, key: str, default: int = 0) -> int:
        return self._validated(key, default, FilterKind.VALIDATE_INT, "an integer")

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._validated(key, default, FilterKind.VALIDATE_FLOAT, "a float")

    def get_boolean(self, key: str, default: bool = False) -> bool:
        return self._validated(key, default, FilterKind.VALIDATE_BOOL, "a boolean")

    def get_array(self, key: str, default: list | tuple | Mapping | None = None) -> list | tuple | Mapping:
        """
        Return a container parameter (list, tuple or Mapping) unchanged.

        Raises:
            UnexpectedValueError: If the value is not a container.
        """
        found = self.get(key, [] if default is None else default)
        if not isinstance(found, (list, tuple, abc.Mapping)):
            raise UnexpectedValueError(f"parameter '{key}' must be an array, got {fmt_type(found)}", key=key)
        return found

    def get_enum(self, key: str, enum_class: type[E], default: E | None = None) -> E | None:
        """
        Resolve the parameter value into a member of enum_class.

        Members pass through unchanged; other values are looked up by member value.

        Raises:
            InvalidEnumValueError: If the value matches no member; the lookup error is chained.

        Examples:
            >>> from enum import Enum
            >>> class Color(Enum):
            ...     RED = "red"
            >>> ParameterBag({"color": "red"}).get_enum("color", Color)
            <Color.RED: 'red'>
        """
        found = self.get(key)
        if found is None:
            return default
        if isinstance(found, enum_class):
            return found

        try:
            return enum_class(found)
        except (ValueError, TypeError) as exc:
            raise InvalidEnumValueError(
                f"parameter '{key}' cannot be converted to enum {enum_class.__name__}: {exc}",
                key=key, enum_class=enum_class,
            ) from exc

    def filter(self,
               key: str,
               default: Any = None,
               kind: FilterKind | str = FilterKind.DEFAULT,
               options: Mapping[str, Any] | FilterFlag | None = None) -> Any:
        """
        Filter a parameter value through filter_value().

        Args:
            key: Dotted parameter key.
            default: Value filtered when the key is missing.
            kind: Filter kind.
            options: A FilterFlag, or a mapping with optional "flags" (FilterFlag) and "options"
                (kind-specific options mapping, or the callable for CALLBACK).

        Returns:
            The filtered value. With NULL_ON_FAILURE in flags, None for invalid values.

        Raises:
            InvalidFilterError: If the kind and options are incompatible.
            UnexpectedValueError: If the value cannot be filtered, or is invalid and
                NULL_ON_FAILURE was not set.

        Examples:
            >>> bag = ParameterBag({"port": "8080", "tags": ["1", "2"]})
            >>> bag.filter("port", kind=FilterKind.VALIDATE_INT)
            8080
            >>> bag.filter("tags", kind=FilterKind.VALIDATE_INT)
            [1, 2]
        """
        found = self.get(key, default)

        if isinstance(options, FilterFlag):
            options = {"flags": options}
        elif options is None:
            options = {}
        elif not isinstance(options, abc.Mapping):
            raise InvalidFilterError(f"options must be a FilterFlag or Mapping, got {fmt_type(options)}", key=key)

        try:
            kind = FilterKind(kind)
        except ValueError:
            raise InvalidFilterError(f"unknown filter kind {fmt_value(kind)} for parameter '{key}'", key=key) from None

        flags = options.get("flags")
        if flags is None:
            flags = FilterFlag.REQUIRE_ARRAY if isinstance(found, (list, tuple, abc.Mapping)) else FilterFlag.NONE
        elif not isinstance(flags, FilterFlag):
            raise InvalidFilterError(f"flags for parameter '{key}' must be a FilterFlag, got {fmt_type(flags)}",
                                     key=key)

        if kind is FilterKind.CALLBACK and not callable(options.get("options")):
            raise InvalidFilterError(f"a callable must be passed in options['options'] when using the "
                                     f"CALLBACK filter for parameter '{key}'", key=key)

        if found is not None and scalar_text(found) is MISSING and not isinstance(found, (list, tuple, abc.Mapping)):
            raise UnexpectedValueError(f"parameter value '{key}' cannot be filtered, got {fmt_type(found)}",
                                       key=key)

        try:
            result = filter_value(found, kind, flags | FilterFlag.NULL_ON_FAILURE, options.get("options"))
        except InvalidFilterError as exc:
            exc.key = key
            raise

        if result is None and not flags & FilterFlag.NULL_ON_FAILURE:
            raise UnexpectedValueError(f"parameter value '{key}' is invalid and flag NULL_ON_FAILURE was not set, "
                                       f"got {fmt_value(found)}", key=key)
        return result

    # ----- Private -----

    def _validated(self, key: str, default: Any, kind: FilterKind, expected: str) -> Any:
        found = self.get(key, default)
        result = filter_value(found, kind, FilterFlag.NULL_ON_FAILURE | FilterFlag.REQUIRE_SCALAR)
        if result is None:
            raise UnexpectedValueError(f"parameter '{key}' must be {expected}, got {fmt_value(found)}", key=key)
        return result
