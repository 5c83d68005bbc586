"""
Sundry protocols for convertible objects and the conditional-chaining mixin.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable, Protocol, runtime_checkable


# Protocols ------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Arrayable(Protocol):
    """Protocol for objects convertible to a plain dict."""

    def to_dict(self) -> dict: ...


@runtime_checkable
class Jsonable(Protocol):
    """Protocol for objects that serialize themselves to a JSON string."""

    def to_json(self, **kwargs: Any) -> str: ...


@runtime_checkable
class Htmlable(Protocol):
    """Protocol for objects that render themselves as trusted HTML."""

    def to_html(self) -> str: ...


# Classes --------------------------------------------------------------------------------------------------------------

class Conditionable:
    """
    Mixin for fluent objects that apply a callback only when a condition holds.

    The condition may be a callable receiving the object. Callbacks receive (object, condition value)
    and their result is returned, or the object itself when the callback returns None.

    Examples:
        >>> from sundry.stringable import Stringable
        >>> s = Stringable("draft")
        >>> str(s.when(True, lambda s, v: s.upper()))
        'DRAFT'
    """

    def when(self, value: Any, callback: Callable | None = None, default: Callable | None = None) -> Any:
        value = value(self) if callable(value) else value

        if value:
            return self._conditional_result(callback, value)
        if default is not None:
            return self._conditional_result(default, value)
        return self

    def unless(self, value: Any, callback: Callable | None = None, default: Callable | None = None) -> Any:
        value = value(self) if callable(value) else value

        if not value:
            return self._conditional_result(callback, value)
        if default is not None:
            return self._conditional_result(default, value)
        return self

    def _conditional_result(self, callback: Callable | None, value: Any) -> Any:
        if callback is None:
            return self
        result = callback(self, value)
        return self if result is None else result
