"""adf-convert: turn Atlassian Document Format trees into any output.

The core is a generic depth-first traversal engine driven by a caller
supplied Formatter table. Markdown, plain text and HTML formatters ship
as stock clients of that engine.

Example:
    >>> from adf_convert import run, markdown_formatter
    >>> run({"type": "doc", "content": [...]}, markdown_formatter)
"""

__version__ = "0.1.0"

from .document import AdfMark, AdfNode, AdfNodeType, AdfParser
from .engine import (
    CollectingDiagnosticSink,
    ConversionContext,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    Formatter,
    ListType,
    LoggingDiagnosticSink,
    Traversal,
    run,
)
from .errors import (
    AdfConvertError,
    ConfigError,
    FilesystemError,
    InvalidDocumentError,
    UnknownFormatterError,
)
from .formatters import (
    create_markdown_formatter,
    get_formatter,
    html_formatter,
    markdown_formatter,
    plain_text_formatter,
)

__all__ = [
    "__version__",
    # Entry point
    "run",
    "Traversal",
    # Document model
    "AdfNode",
    "AdfMark",
    "AdfNodeType",
    "AdfParser",
    # Formatter table
    "Formatter",
    "ConversionContext",
    "ListType",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
    # Stock formatters
    "get_formatter",
    "create_markdown_formatter",
    "markdown_formatter",
    "plain_text_formatter",
    "html_formatter",
    # Errors
    "AdfConvertError",
    "InvalidDocumentError",
    "UnknownFormatterError",
    "ConfigError",
    "FilesystemError",
]
