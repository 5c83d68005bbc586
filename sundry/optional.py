"""
Sundry Optional - null-tolerant access to a possibly missing value
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from . import arr


# Classes --------------------------------------------------------------------------------------------------------------

class Optional:
    """
    Wrap a value that may be None so attribute, item and method access never fail on it.

    Attribute reads return None when the target is None or lacks the attribute. Item access goes through
    sundry.arr, so dotted keys walk nested mappings and lists.

    Examples:
        >>> Optional(None).name is None
        True
        >>> Optional({"user": {"name": "Ada"}})["user.name"]
        'Ada'
        >>> Optional("ada").call("upper")
        'ADA'
    """

    def __init__(self, value: Any) -> None:
        object.__setattr__(self, "_value", value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        if self._value is None:
            return None
        return getattr(self._value, name, None)

    def __setattr__(self, name: str, value: Any) -> None:
        if self._value is not None:
            setattr(self._value, name, value)

    def has(self, name: str) -> bool:
        """Determine if the wrapped value has an attribute, or a mapping key, set to something other than None."""
        if self._value is None:
            return False
        if arr.accessible(self._value):
            return arr.exists(self._value, name) and arr.get(self._value, name) is not None
        return getattr(self._value, name, None) is not None

    def call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """Call a method of the wrapped value, or return None when it is None."""
        if self._value is None:
            return None
        return getattr(self._value, method)(*args, **kwargs)

    def unwrap(self) -> Any:
        return self._value

    def __getitem__(self, key: str | int) -> Any:
        if not arr.accessible(self._value):
            return None
        return arr.get(self._value, key)

    def __setitem__(self, key: str | int, value: Any) -> None:
        if arr.accessible(self._value):
            arr.set(self._value, key, value)

    def __delitem__(self, key: str | int) -> None:
        if arr.accessible(self._value):
            arr.forget(self._value, key)

    def __contains__(self, key: object) -> bool:
        return arr.accessible(self._value) and arr.exists(self._value, key)

    def __bool__(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"Optional({self._value!r})"


# Methods --------------------------------------------------------------------------------------------------------------

def optional(value: Any = None, callback: Callable[[Any], Any] | None = None) -> Any:
    """
    Wrap value in an Optional, or apply callback to it when it is not None.

    Examples:
        >>> optional(None, lambda v: v * 2) is None
        True
        >>> optional(21, lambda v: v * 2)
        42
    """
    if callback is None:
        return Optional(value)
    if value is not None:
        return callback(value)
    return None
