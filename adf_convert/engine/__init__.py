"""Generic traversal engine turning ADF trees into arbitrary results.

Key classes:
    Traversal: Depth-first formatter dispatch and mark composition
    Formatter: Caller-supplied table of node and mark handlers
    ConversionContext: Override-on-descent traversal state
    DiagnosticSink: Receiver for recoverable-input notices
"""

from .diagnostics import (
    CollectingDiagnosticSink,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    LoggingDiagnosticSink,
)
from .models import (
    ROOT_LIST_LEVEL,
    ConversionContext,
    Formatter,
    ListType,
    MarkHandler,
    NextMark,
    NodeHandler,
    ProcessChildren,
)
from .traversal import Traversal, run

__all__ = [
    # Main interface
    "run",
    "Traversal",
    # Formatter table
    "Formatter",
    "NodeHandler",
    "MarkHandler",
    "NextMark",
    "ProcessChildren",
    # Context
    "ConversionContext",
    "ListType",
    "ROOT_LIST_LEVEL",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
]
