"""
Sundry Arr - dotted-path access to nested mappings and sequences

A path is a string split on "." into segments, e.g. "user.profile.name". Mappings are walked by key,
list-like values by canonical non-negative integer segments ("0", "1", ...). An exact literal key in
the target always wins over path interpretation, so a bag holding the key "a.b" returns that value
for get(bag, "a.b"). There is no wildcard syntax: "*" is an ordinary key.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from collections import abc
from typing import Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value
from .sentinels import MISSING

__all__ = [
    "accessible",
    "add",
    "data_get",
    "exists",
    "forget",
    "get",
    "has",
    "has_any",
    "object_get",
    "pull",
    "remove",
    "set",
    "value",
]

_INDEX_PATTERN = re.compile(r"0|[1-9][0-9]*")
_INT_KEY_PATTERN = re.compile(r"-?(0|[1-9][0-9]*)")


# Methods --------------------------------------------------------------------------------------------------------------

def accessible(target: Any) -> bool:
    """
    Check whether a value can be walked by a dotted path.

    Mappings and list-like sequences are accessible; str, bytes and other scalars are not.

    Examples:
        >>> accessible({"a": 1}), accessible([1, 2]), accessible("abc")
        (True, True, False)
    """
    return isinstance(target, abc.Mapping) or _is_list_like(target)


def exists(target: Any, key: str | int) -> bool:
    """Check whether the literal key (or list index) exists directly in target, without path traversal."""
    return _resolve_key(target, key) is not MISSING


def value(default: Any, *args: Any) -> Any:
    """
    Return the default value, invoking it first when it is callable.

    Lazy defaults let callers defer expensive fallbacks until a lookup actually misses.

    Examples:
        >>> value(5)
        5
        >>> value(lambda: "lazy")
        'lazy'
        >>> value(lambda x: x * 2, 21)
        42
    """
    return default(*args) if callable(default) else default


def get(target: Any, key: str | int | None = None, default: Any = None) -> Any:
    """
    Get a value from a nested structure using a dotted path.

    Args:
        target: The mapping or list-like structure to read from.
        key: Dotted path like "user.profile.name". None or "" return target itself.
        default: Value returned when the path does not resolve. Callables are invoked lazily.

    Returns:
        The value at the path, or the default.

    Examples:
        >>> data = {"user": {"name": "Ada", "roles": ["admin"]}}
        >>> get(data, "user.name")
        'Ada'
        >>> get(data, "user.roles.0")
        'admin'
        >>> get(data, "user.missing", "x")
        'x'
        >>> get({"a.b": 1, "a": {"b": 2}}, "a.b")
        1
    """
    if not accessible(target):
        return value(default)
    if key is None or key == "":
        return target

    found = _resolve_key(target, key)
    if found is not MISSING:
        return target[found]

    if not isinstance(key, str) or "." not in key:
        return value(default)

    for segment in key.split("."):
        if not accessible(target):
            return value(default)
        found = _resolve_key(target, segment)
        if found is MISSING:
            return value(default)
        target = target[found]

    return target


def has(target: Any, keys: str | int | Iterable[str | int] | None) -> bool:
    """
    Check whether all the given dotted paths exist in target.

    An empty target or an empty list of keys never has anything.

    Examples:
        >>> data = {"user": {"name": "Ada", "email": None}}
        >>> has(data, "user.email")
        True
        >>> has(data, ["user.name", "user.age"])
        False
    """
    keys = _wrap_keys(keys)
    if not accessible(target) or not target or not keys:
        return False

    return all(_has_path(target, key) for key in keys)


def has_any(target: Any, keys: str | int | Iterable[str | int] | None) -> bool:
    """Check whether at least one of the given dotted paths exists in target."""
    keys = _wrap_keys(keys)
    if not accessible(target) or not target or not keys:
        return False

    return any(_has_path(target, key) for key in keys)


def set(target: abc.MutableMapping | abc.MutableSequence,
        key: str | int | None,
        value: Any) -> abc.MutableMapping | abc.MutableSequence:
    """
    Set a value in a nested structure using a dotted path, creating intermediate dicts.

    A key already present literally in target ("a.b") is overwritten in place, as get reads it back.
    Intermediate values that are not mutable containers are overwritten with new dicts. A list met on the
    way keeps its items when the segment is an index (or its length, which appends); otherwise the list is
    converted to a dict keyed by its integer positions so the new key can be added.

    Args:
        target: The mutable mapping or list to write into. Mutated in place.
        key: Dotted path like "user.profile.name". None or "" replace the content of target
            with value, which must then be a Mapping.
        value: The value to assign at the final segment.

    Returns:
        The same target, for chaining.

    Raises:
        TypeError: If target is not mutable, or an empty path is given a non-Mapping value.

    Examples:
        >>> data = {"user": {"name": "Ada"}}
        >>> set(data, "user.age", 30)
        {'user': {'name': 'Ada', 'age': 30}}
        >>> set({"a": 1}, "a.b", 2)
        {'a': {'b': 2}}
    """
    if not _is_mutable(target):
        raise TypeError(f"target must be a MutableMapping or MutableSequence, got {fmt_type(target)}")

    if key is None or key == "":
        if not isinstance(value, abc.Mapping) or not isinstance(target, abc.MutableMapping):
            raise TypeError(f"an empty path can only replace a mapping with a Mapping, got {fmt_value(value)}")
        replacement = dict(value)
        target.clear()
        target.update(replacement)
        return target

    found = _resolve_key(target, key)
    if found is not MISSING:
        target[found] = value
        return target

    segments = key.split(".") if isinstance(key, str) else [key]
    parent, parent_slot = None, None
    current = target

    for position, segment in enumerate(segments):
        if _is_list_like(current) and _list_slot(current, segment) is None:
            if parent is None:
                raise TypeError(f"cannot set key {segment!r} on a sequence, got {fmt_type(current)}")
            current = parent[parent_slot] = dict(enumerate(current))

        slot = _resolve_key(current, segment)
        if slot is MISSING:
            slot = _list_slot(current, segment) if _is_list_like(current) else segment

        if position == len(segments) - 1:
            _assign(current, slot, value)
            return target

        child = current[slot] if _is_present(current, slot) else MISSING
        if not _is_mutable(child):
            child = {}
            _assign(current, slot, child)

        parent, parent_slot = current, slot
        current = child

    return target


def forget(target: abc.MutableMapping | abc.MutableSequence, keys: str | int | Iterable[str | int] | None) -> None:
    """
    Remove one or more dotted paths from target in place.

    Paths that do not resolve are ignored, so removing an absent path is a no-op.

    Examples:
        >>> data = {"user": {"name": "Ada", "roles": ["admin"]}}
        >>> forget(data, "user.roles")
        >>> data
        {'user': {'name': 'Ada'}}
        >>> forget(data, "user.roles.0")
    """
    for key in _wrap_keys(keys):
        if key is None or key == "":
            continue

        found = _resolve_key(target, key)
        if found is not MISSING:
            del target[found]
            continue

        if not isinstance(key, str):
            continue

        *parents, last = key.split(".")
        current = target
        for segment in parents:
            found = _resolve_key(current, segment)
            if found is MISSING or not _is_mutable(current[found]):
                break
            current = current[found]
        else:
            found = _resolve_key(current, last)
            if found is not MISSING:
                del current[found]


remove = forget


def add(target: abc.MutableMapping | abc.MutableSequence, key: str | int, value: Any):
    """Set the value at path only when the path is missing or holds None."""
    if get(target, key) is None:
        set(target, key, value)
    return target


def pull(target: abc.MutableMapping | abc.MutableSequence, key: str | int, default: Any = None) -> Any:
    """Get the value at path and remove it from target."""
    found = get(target, key, default)
    forget(target, key)
    return found


def data_get(target: Any, key: str | int | None = None, default: Any = None) -> Any:
    """
    Get a value by dotted path from mappings, sequences, and object attributes alike.

    Examples:
        >>> from types import SimpleNamespace
        >>> data_get({"user": SimpleNamespace(name="Ada")}, "user.name")
        'Ada'
    """
    if key is None or key == "":
        return target

    if accessible(target):
        found = _resolve_key(target, key)
        if found is not MISSING:
            return target[found]

    segments = key.split(".") if isinstance(key, str) else [key]
    for segment in segments:
        if accessible(target):
            found = _resolve_key(target, segment)
            if found is MISSING:
                return value(default)
            target = target[found]
        elif target is not None and isinstance(segment, str) and hasattr(target, segment):
            target = getattr(target, segment)
        else:
            return value(default)

    return target


def object_get(obj: Any, key: str | None = None, default: Any = None) -> Any:
    """
    Get an attribute by dotted path, e.g. object_get(user, "profile.name").

    Attributes holding None count as missing.
    """
    if key is None or key.strip() == "":
        return obj

    for segment in key.split("."):
        attr = getattr(obj, segment, None)
        if attr is None:
            return value(default)
        obj = attr

    return obj


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_list_like(target: Any) -> bool:
    return isinstance(target, abc.Sequence) and not isinstance(target, (str, bytes, bytearray))


def _is_mutable(target: Any) -> bool:
    return isinstance(target, abc.MutableMapping) or (
            isinstance(target, abc.MutableSequence) and not isinstance(target, bytearray))


def _list_slot(target: abc.Sequence, segment: Any) -> int | None:
    """Return the list index a segment addresses, its length included for appending."""
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        index = segment
    elif isinstance(segment, str) and _INDEX_PATTERN.fullmatch(segment):
        index = int(segment)
    else:
        return None
    return index if 0 <= index <= len(target) else None


def _resolve_key(target: Any, key: Any) -> Any:
    """Return the actual key under which target stores key, or MISSING."""
    if isinstance(target, abc.Mapping):
        try:
            if key in target:
                return key
        except TypeError:
            return MISSING
        if isinstance(key, str) and _INT_KEY_PATTERN.fullmatch(key) and int(key) in target:
            return int(key)
        return MISSING

    if _is_list_like(target):
        index = _list_slot(target, key)
        if index is not None and index < len(target):
            return index

    return MISSING


def _is_present(target: Any, slot: Any) -> bool:
    if _is_list_like(target):
        return slot < len(target)
    return slot in target


def _assign(target: Any, slot: Any, item: Any) -> None:
    if _is_list_like(target) and slot == len(target):
        target.append(item)
    else:
        target[slot] = item


def _has_path(target: Any, key: Any) -> bool:
    if exists(target, key):
        return True
    if not isinstance(key, str):
        return False

    for segment in key.split("."):
        if not accessible(target):
            return False
        found = _resolve_key(target, segment)
        if found is MISSING:
            return False
        target = target[found]

    return True


def _wrap_keys(keys: Any) -> list:
    if keys is None:
        return []
    if isinstance(keys, (str, int)):
        return [keys]
    return list(keys)
