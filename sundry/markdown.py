#
# Sundry Markdown Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Mapping

# Third-party ----------------------------------------------------------------------------------------------------------
from markdown_it import MarkdownIt


# Methods --------------------------------------------------------------------------------------------------------------

def markdown(text: str, options: Mapping[str, Any] | None = None) -> str:
    """
    Convert GitHub flavored Markdown into HTML.

    Tables, strikethrough and autolinks are enabled. Options are markdown-it options such as
    {"html": False} or {"breaks": True}.

    Examples:
        >>> markdown("# Hello")
        '<h1>Hello</h1>\\n'
    """
    return _parser(options).render(text)


def inline_markdown(text: str, options: Mapping[str, Any] | None = None) -> str:
    """
    Convert inline Markdown into HTML, without the wrapping paragraph.

    Examples:
        >>> inline_markdown("*hi*")
        '<em>hi</em>'
    """
    return _parser(options).renderInline(text)


# Private Methods ------------------------------------------------------------------------------------------------------

def _parser(options: Mapping[str, Any] | None) -> MarkdownIt:
    return MarkdownIt("gfm-like", options_update=dict(options) if options else None)
