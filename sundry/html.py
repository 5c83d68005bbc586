#
# Sundry HTML Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import html
import re

from enum import Enum
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import Htmlable

_BARE_AMPERSAND = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")


# Classes --------------------------------------------------------------------------------------------------------------

class HtmlString:
    """
    A string of trusted HTML that e() passes through unescaped.

    Examples:
        >>> e(HtmlString("<b>bold</b>"))
        '<b>bold</b>'
    """

    def __init__(self, html_: str = "") -> None:
        self._html = html_

    def to_html(self) -> str:
        return self._html

    def __html__(self) -> str:
        return self._html

    def is_empty(self) -> bool:
        return self._html == ""

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def __str__(self) -> str:
        return self._html

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HtmlString):
            return self._html == other._html
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._html)

    def __repr__(self) -> str:
        return f"HtmlString({self._html!r})"


# Methods --------------------------------------------------------------------------------------------------------------

def e(value: Any, double_encode: bool = True) -> str:
    """
    Escape HTML special characters in a string, quotes included.

    Htmlable objects (to_html) and objects with __html__ are trusted and returned as rendered.
    Enum members are escaped by value, None becomes "".

    Args:
        value: The value to escape.
        double_encode: When False, existing entities such as "&amp;" are left alone.

    Examples:
        >>> e('<a href="x">Tom & Jerry</a>')
        '&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&lt;/a&gt;'
        >>> e("&amp; more", double_encode=False)
        '&amp; more'
    """
    if isinstance(value, Htmlable):
        return value.to_html()
    if hasattr(value, "__html__"):
        return value.__html__()
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""

    text = str(value)
    if double_encode:
        return html.escape(text, quote=True)

    text = _BARE_AMPERSAND.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;").replace("'", "&#x27;")
