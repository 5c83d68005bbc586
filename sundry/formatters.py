"""
Sundry Formatters for error messages and debug output
"""

# Standard library -----------------------------------------------------------------------------------------------------
from enum import Enum, unique
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FmtStyle(str, Enum):
    ASCII = "ascii"
    EQUAL = "equal"
    PAREN = "paren"
    COLON = "colon"


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, style: str = "ascii", max_repr: int = 120, show_module: bool = False) -> str:
    """Format the type of an object or a type itself for exception messages.

    Args:
        obj: Any Python object or type.
        style: Display style - "ascii" (default), "equal", "paren", "colon".
        max_repr: Maximum length of the type name before truncation.
        show_module: Whether to include the module name for non-builtin types.

    Returns:
        Formatted string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(dict)
        '<type: dict>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", str(target_type))

    if show_module:
        module_name = getattr(target_type, "__module__", None)
        if module_name and module_name != "builtins":
            type_name = f"{module_name}.{type_name}"

    return _fmt_format_pair("type", _fmt_truncate(type_name, max_repr, _fmt_more_token(style)), style)


def fmt_value(x: Any, *, style: str = "ascii", max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods are handled gracefully with fallback formatting, and
    for quoted reprs the ellipsis is placed outside the quotes.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hell'...>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    if style == FmtStyle.ASCII:
        base_repr = base_repr.replace(">", "\\>")

    return _fmt_format_pair(t, _fmt_truncate(base_repr, max_repr, _fmt_more_token(style)), style)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate s to at most max_len visible characters before appending the ellipsis."""
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    # Quoted repr keeps its quotes, ellipsis goes outside
    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis


def _fmt_format_pair(type_name: str, value_repr: str, style: str) -> str:
    if style == FmtStyle.EQUAL:
        return f"{type_name}={value_repr}"
    if style == FmtStyle.PAREN:
        return f"{type_name}({value_repr})"
    if style == FmtStyle.COLON:
        return f"{type_name}: {value_repr}"
    return f"<{type_name}: {value_repr}>"


def _fmt_more_token(style: str) -> str:
    return "..." if style == FmtStyle.ASCII else "…"
