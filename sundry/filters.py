"""
Sundry Filters - validate-or-default sanitization of scalar values

A filter is a (kind, flags, options) triple. On success the filtered value is returned, on failure the
caller gets options["default"] when given, None with NULL_ON_FAILURE, and False otherwise.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ipaddress
import math
import numbers
import re

from collections import abc
from enum import Flag, StrEnum, auto, unique
from typing import Any, Callable, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidFilterError
from .formatters import fmt_type, fmt_value
from .sentinels import MISSING
from .validators import validate_email, validate_ip_address, validate_url

__all__ = [
    "FilterKind",
    "FilterFlag",
    "filter_value",
    "scalar_text",
]

_INT_PATTERN = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_HEX_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+")
_OCTAL_PATTERN = re.compile(r"0[oO]?[0-7]+")
_FLOAT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_THOUSANDS_PATTERN = re.compile(r"[+-]?[0-9]{1,3}(,[0-9]{3})+(\.[0-9]*)?")

BOOL_TRUE = frozenset({"1", "true", "on", "yes"})
BOOL_FALSE = frozenset({"0", "false", "off", "no", ""})


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FilterKind(StrEnum):
    DEFAULT = "default"
    VALIDATE_INT = "int"
    VALIDATE_FLOAT = "float"
    VALIDATE_BOOL = "bool"
    VALIDATE_REGEXP = "regexp"
    VALIDATE_EMAIL = "email"
    VALIDATE_URL = "url"
    VALIDATE_IP = "ip"
    CALLBACK = "callback"


class FilterFlag(Flag):
    NONE = 0
    NULL_ON_FAILURE = auto()
    REQUIRE_SCALAR = auto()
    REQUIRE_ARRAY = auto()
    FORCE_ARRAY = auto()
    ALLOW_HEX = auto()
    ALLOW_OCTAL = auto()
    ALLOW_THOUSAND = auto()
    IPV4 = auto()
    IPV6 = auto()
    NO_PRIV_RANGE = auto()
    NO_RES_RANGE = auto()
    PATH_REQUIRED = auto()
    QUERY_REQUIRED = auto()


# Methods --------------------------------------------------------------------------------------------------------------

def filter_value(value: Any,
                 kind: FilterKind | str = FilterKind.DEFAULT,
                 flags: FilterFlag = FilterFlag.NONE,
                 options: Mapping[str, Any] | Callable | None = None) -> Any:
    """
    Validate or sanitize a value according to a filter kind.

    Containers (list, tuple, Mapping) fail unless REQUIRE_ARRAY or FORCE_ARRAY is set, in which case every
    element is filtered and the shape is preserved. FORCE_ARRAY also wraps a scalar result in a list.

    Args:
        value: The value to filter.
        kind: What to validate; DEFAULT converts scalars to text.
        flags: Combination of FilterFlag members.
        options: Mapping of kind-specific options ("min_range", "max_range", "regexp", "default"),
            or the callable for CALLBACK.

    Returns:
        The filtered value, or the failure value described in the module docstring.

    Raises:
        InvalidFilterError: If kind, flags and options are incompatible.

    Examples:
        >>> filter_value("42", FilterKind.VALIDATE_INT)
        42
        >>> filter_value("abc", FilterKind.VALIDATE_INT, FilterFlag.NULL_ON_FAILURE) is None
        True
        >>> filter_value("yes", FilterKind.VALIDATE_BOOL)
        True
        >>> filter_value(["1", "x"], FilterKind.VALIDATE_INT, FilterFlag.REQUIRE_ARRAY)
        [1, False]
    """
    try:
        kind = FilterKind(kind)
    except ValueError:
        raise InvalidFilterError(f"unknown filter kind {fmt_value(kind)}") from None
    if not isinstance(flags, FilterFlag):
        raise InvalidFilterError(f"flags must be a FilterFlag, got {fmt_type(flags)}")

    if kind is FilterKind.CALLBACK:
        if not callable(options):
            raise InvalidFilterError(f"a callable is required for the {kind.name} filter, got {fmt_type(options)}")
        callback, options = options, {}
    else:
        if options is not None and not isinstance(options, abc.Mapping):
            raise InvalidFilterError(f"options must be a Mapping, got {fmt_type(options)}")
        callback, options = None, dict(options or {})

    _check_arguments(kind, flags, options)

    if _is_container(value):
        if not flags & (FilterFlag.REQUIRE_ARRAY | FilterFlag.FORCE_ARRAY):
            return _failure(flags, options)
        return _filter_container(value, kind, flags, options, callback)

    if flags & FilterFlag.REQUIRE_ARRAY:
        return _failure(flags, options)

    result = _filter_scalar(value, kind, flags, options, callback)
    return [result] if flags & FilterFlag.FORCE_ARRAY else result


def scalar_text(value: Any) -> Any:
    """
    Convert a scalar to text, or return MISSING when it has no textual form.

    Booleans render as "true"/"false". Objects qualify when they define their own __str__
    and are not containers.

    Examples:
        >>> scalar_text(42), scalar_text(True), scalar_text("a")
        ('42', 'true', 'a')
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Number) and not isinstance(value, complex):
        return str(value)
    if value is None or _is_container(value) or isinstance(value, (bytes, bytearray, abc.Set)):
        return MISSING
    if type(value).__str__ is not object.__str__:
        return str(value)
    return MISSING


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_arguments(kind: FilterKind, flags: FilterFlag, options: dict) -> None:
    if flags & FilterFlag.REQUIRE_SCALAR and flags & (FilterFlag.REQUIRE_ARRAY | FilterFlag.FORCE_ARRAY):
        raise InvalidFilterError("flag REQUIRE_SCALAR cannot be combined with REQUIRE_ARRAY or FORCE_ARRAY")

    if kind is FilterKind.VALIDATE_REGEXP:
        pattern = options.get("regexp")
        if not isinstance(pattern, (str, re.Pattern)):
            raise InvalidFilterError(f"option 'regexp' is required for the {kind.name} filter")

    low, high = options.get("min_range"), options.get("max_range")
    if low is not None and high is not None and low > high:
        raise InvalidFilterError(f"min_range {fmt_value(low)} is greater than max_range {fmt_value(high)}")


def _is_container(value: Any) -> bool:
    return isinstance(value, (list, tuple, abc.Mapping))


def _failure(flags: FilterFlag, options: dict) -> Any:
    if "default" in options:
        return options["default"]
    if flags & FilterFlag.NULL_ON_FAILURE:
        return None
    return False


def _filter_container(value: Any, kind: FilterKind, flags: FilterFlag, options: dict, callback) -> Any:
    def element(item: Any) -> Any:
        if _is_container(item):
            return _filter_container(item, kind, flags, options, callback)
        return _filter_scalar(item, kind, flags, options, callback)

    if isinstance(value, abc.Mapping):
        return {k: element(v) for k, v in value.items()}
    return [element(v) for v in value]


def _filter_scalar(value: Any, kind: FilterKind, flags: FilterFlag, options: dict, callback) -> Any:
    if kind is FilterKind.CALLBACK:
        return callback(value)
    if kind is FilterKind.DEFAULT:
        if value is None:
            return ""
        text = scalar_text(value)
        return _failure(flags, options) if text is MISSING else text

    validator = _VALIDATORS[kind]
    result = validator(value, flags, options)
    return _failure(flags, options) if result is MISSING else result


def _in_range(number: int | float, options: dict) -> bool:
    low, high = options.get("min_range"), options.get("max_range")
    return (low is None or number >= low) and (high is None or number <= high)


def _validate_int(value: Any, flags: FilterFlag, options: dict) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return MISSING
        number = int(value)
    else:
        text = scalar_text(value)
        if text is MISSING:
            return MISSING
        text = text.strip()
        if _INT_PATTERN.fullmatch(text):
            number = int(text)
        elif flags & FilterFlag.ALLOW_HEX and _HEX_PATTERN.fullmatch(text):
            number = int(text, 16)
        elif flags & FilterFlag.ALLOW_OCTAL and _OCTAL_PATTERN.fullmatch(text):
            number = int(text.replace("o", "").replace("O", ""), 8)
        else:
            return MISSING

    return number if _in_range(number, options) else MISSING


def _validate_float(value: Any, flags: FilterFlag, options: dict) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = scalar_text(value)
        if text is MISSING:
            return MISSING
        text = text.strip()
        decimal = options.get("decimal", ".")
        if decimal != ".":
            text = text.replace(".", "\0").replace(decimal, ".")
        if flags & FilterFlag.ALLOW_THOUSAND and _THOUSANDS_PATTERN.fullmatch(text):
            text = text.replace(",", "")
        if not _FLOAT_PATTERN.fullmatch(text):
            return MISSING
        number = float(text)

    if not math.isfinite(number):
        return MISSING
    return number if _in_range(number, options) else MISSING


def _validate_bool(value: Any, flags: FilterFlag, options: dict) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)

    text = scalar_text(value)
    if text is MISSING:
        return MISSING
    text = text.strip().lower()
    if text in BOOL_TRUE:
        return True
    if text in BOOL_FALSE:
        return False
    return MISSING


def _validate_regexp(value: Any, flags: FilterFlag, options: dict) -> Any:
    text = scalar_text(value)
    if text is MISSING:
        return MISSING
    return text if re.search(options["regexp"], text) else MISSING


def _validate_email(value: Any, flags: FilterFlag, options: dict) -> Any:
    if not isinstance(value, str):
        return MISSING
    try:
        return validate_email(value, strip=False, lowercase=False)
    except ValueError:
        return MISSING


def _validate_url(value: Any, flags: FilterFlag, options: dict) -> Any:
    if not isinstance(value, str):
        return MISSING
    try:
        return validate_url(value,
                            require_path=bool(flags & FilterFlag.PATH_REQUIRED),
                            require_query=bool(flags & FilterFlag.QUERY_REQUIRED))
    except ValueError:
        return MISSING


def _validate_ip(value: Any, flags: FilterFlag, options: dict) -> Any:
    if not isinstance(value, str):
        return MISSING

    version = "any"
    if flags & FilterFlag.IPV4 and not flags & FilterFlag.IPV6:
        version = 4
    elif flags & FilterFlag.IPV6 and not flags & FilterFlag.IPV4:
        version = 6

    try:
        validate_ip_address(value, strip=False, version=version)
    except ValueError:
        return MISSING

    address = ipaddress.ip_address(value)
    if flags & FilterFlag.NO_PRIV_RANGE and address.is_private and not address.is_loopback:
        return MISSING
    if flags & FilterFlag.NO_RES_RANGE and (address.is_reserved or address.is_loopback
                                           or address.is_link_local or address.is_unspecified):
        return MISSING
    return value


_VALIDATORS = {
    FilterKind.VALIDATE_INT: _validate_int,
    FilterKind.VALIDATE_FLOAT: _validate_float,
    FilterKind.VALIDATE_BOOL: _validate_bool,
    FilterKind.VALIDATE_REGEXP: _validate_regexp,
    FilterKind.VALIDATE_EMAIL: _validate_email,
    FilterKind.VALIDATE_URL: _validate_url,
    FilterKind.VALIDATE_IP: _validate_ip,
}
