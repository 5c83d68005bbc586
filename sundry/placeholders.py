"""
Sundry Placeholders - a parameter bag that resolves %name% references between its values

A value that is exactly "%name%" resolves to the referenced value whatever its type. Placeholders
embedded in longer strings must reference strings or numbers. "%%" is a literal percent sign.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re

from collections import abc
from typing import Any, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import CircularReferenceError, ParameterNotFoundError, UnexpectedValueError
from .formatters import fmt_type
from .parameters import ParameterBag
from .sentinels import MISSING

_WHOLE_PLACEHOLDER = re.compile(r"%([^%\s]+)%")
_EMBEDDED_PLACEHOLDER = re.compile(r"%%|%([^%\s]+)%")


# Classes --------------------------------------------------------------------------------------------------------------

class PlaceholderBag(ParameterBag):
    """
    Parameter bag whose string values may reference other parameters by dotted key.

    Examples:
        >>> bag = PlaceholderBag({"root": "/srv", "logs": "%root%/logs", "ratio": "100%%"})
        >>> bag.resolve().all()
        {'root': '/srv', 'logs': '/srv/logs', 'ratio': '100%'}
    """

    def __init__(self, parameters=None) -> None:
        super().__init__(parameters)
        self._resolved = False

    def is_resolved(self) -> bool:
        return self._resolved

    def resolve(self) -> "PlaceholderBag":
        """
        Replace every placeholder in the bag by the value it references, then unescape "%%".

        Resolution happens once; later calls are no-ops.

        Raises:
            CircularReferenceError: If parameters reference each other in a cycle.
            ParameterNotFoundError: If a placeholder references a missing parameter.
            UnexpectedValueError: If an embedded placeholder references a non-scalar value.
        """
        if self._resolved:
            return self

        self._parameters = {key: self.unescape_value(self.resolve_value(value))
                            for key, value in self._parameters.items()}
        self._resolved = True
        return self

    def resolve_value(self, value: Any, resolving: Sequence[str] | None = None) -> Any:
        """Resolve placeholders in a value, walking mappings and lists."""
        resolving = list(resolving or [])

        if isinstance(value, abc.Mapping):
            return {key: self.resolve_value(item, resolving) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.resolve_value(item, resolving) for item in value]
        if not isinstance(value, str) or len(value) < 2:
            return value

        return self.resolve_string(value, resolving)

    def resolve_string(self, value: str, resolving: Sequence[str] | None = None) -> Any:
        """
        Resolve placeholders in a string.

        Args:
            value: The string to resolve.
            resolving: Keys currently being resolved, outermost first.

        Returns:
            The referenced value for a whole-string placeholder, the interpolated string otherwise.
        """
        resolving = list(resolving or [])

        match = _WHOLE_PLACEHOLDER.fullmatch(value)
        if match:
            key = match.group(1)
            if key in resolving:
                raise CircularReferenceError(key, resolving + [key])
            found = self._reference(key)
            return found if self._resolved else self.resolve_value(found, resolving + [key])

        def interpolate(m: re.Match) -> str:
            key = m.group(1)
            if key is None:
                return "%%"
            if key in resolving:
                raise CircularReferenceError(key, resolving + [key])

            found = self._reference(key)
            if isinstance(found, bool) or not isinstance(found, (str, int, float)):
                raise UnexpectedValueError(f"a string value must be composed of strings and/or numbers, but found "
                                           f"parameter '{key}' of {fmt_type(found)} inside string value '{value}'",
                                           key=key)

            text = str(found)
            return text if self._resolved else self.resolve_string(text, resolving + [key])

        return _EMBEDDED_PLACEHOLDER.sub(interpolate, value)

    def escape_value(self, value: Any) -> Any:
        """Double every "%" in strings so they survive resolution literally."""
        if isinstance(value, str):
            return value.replace("%", "%%")
        if isinstance(value, abc.Mapping):
            return {key: self.escape_value(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.escape_value(item) for item in value]
        return value

    def unescape_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return value.replace("%%", "%")
        if isinstance(value, abc.Mapping):
            return {key: self.unescape_value(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.unescape_value(item) for item in value]
        return value

    def _reference(self, key: str) -> Any:
        found = self.get(key, MISSING)
        if found is MISSING:
            raise ParameterNotFoundError(f"placeholder references non-existent parameter '{key}'", key=key)
        return found
