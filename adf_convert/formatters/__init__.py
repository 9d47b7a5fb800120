"""Stock formatters built on the traversal engine.

Each formatter is a plain Formatter table; none of them contains
traversal logic. Use `get_formatter()` to look one up by name.
"""

from typing import Any, Callable, Dict, List

from ..engine.models import Formatter
from ..errors import UnknownFormatterError
from .html import html_formatter
from .markdown import create_markdown_formatter, escape_markdown, markdown_formatter
from .plain_text import plain_text_formatter

# Formatter factories by name; options are passed as keyword arguments
FORMATTERS: Dict[str, Callable[..., Formatter[str]]] = {
    "markdown": create_markdown_formatter,
    "text": lambda: plain_text_formatter,
    "html": lambda: html_formatter,
}


def available_formatters() -> List[str]:
    return sorted(FORMATTERS)


def get_formatter(name: str, **options: Any) -> Formatter[str]:
    """Get a formatter by name.

    Args:
        name: Registered formatter name (markdown, text, html)
        **options: Formatter options (only the markdown formatter takes any)

    Returns:
        The formatter

    Raises:
        UnknownFormatterError: If no formatter is registered under name
        ValueError: If an option is invalid for the formatter
    """
    factory = FORMATTERS.get(name)
    if factory is None:
        raise UnknownFormatterError(name, FORMATTERS)
    try:
        return factory(**options)
    except TypeError as e:
        raise ValueError(f"Invalid options for '{name}' formatter: {e}") from e


__all__ = [
    "FORMATTERS",
    "available_formatters",
    "get_formatter",
    "create_markdown_formatter",
    "escape_markdown",
    "markdown_formatter",
    "plain_text_formatter",
    "html_formatter",
]
