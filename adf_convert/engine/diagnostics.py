"""Diagnostic reporting for the traversal engine.

The engine never writes to a global output stream. Recoverable oddities
(unknown node types, unknown marks, a root that is not a document) are
reported to an injectable DiagnosticSink. Diagnostics are observational
only and never change the produced result.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class DiagnosticCode(Enum):
    """Kinds of diagnostics the engine reports."""

    UNKNOWN_NODE_TYPE = "unknown_node_type"
    UNKNOWN_MARK_TYPE = "unknown_mark_type"
    IMPLICIT_DOCUMENT_WRAP = "implicit_document_wrap"


@dataclass(frozen=True)
class Diagnostic:
    """A single notice raised during a traversal.

    Attributes:
        code: What happened
        level: Severity as a `logging` level
        message: Human readable description
        node_type: Type of the node involved
        mark_type: Type of the mark involved (mark diagnostics only)
    """

    code: DiagnosticCode
    level: int
    message: str
    node_type: Optional[str] = None
    mark_type: Optional[str] = None

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


class DiagnosticSink(Protocol):
    """Receives diagnostics from the engine."""

    def report(self, diagnostic: Diagnostic) -> None:
        ...


class LoggingDiagnosticSink:
    """Sink that forwards diagnostics to a Python logger.

    This is the default sink used by `run()` when none is given.
    """

    def __init__(self, target: Optional[logging.Logger] = None):
        self.logger = target or logger

    def report(self, diagnostic: Diagnostic) -> None:
        self.logger.log(diagnostic.level, diagnostic.message)


class CollectingDiagnosticSink:
    """Sink that records diagnostics in the order they were reported.

    Optionally forwards every diagnostic to another sink, which lets the
    CLI both log notices as they happen and summarize them afterwards.

    Example:
        >>> sink = CollectingDiagnosticSink()
        >>> run({"type": "paragraph"}, markdown_formatter, diagnostics=sink)
        >>> [d.code for d in sink.diagnostics]
        [<DiagnosticCode.IMPLICIT_DOCUMENT_WRAP: 'implicit_document_wrap'>]
    """

    def __init__(self, forward_to: Optional[DiagnosticSink] = None):
        self.forward_to = forward_to
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward_to is not None:
            self.forward_to.report(diagnostic)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Diagnostics at WARNING level or above."""
        return [d for d in self.diagnostics if d.level >= logging.WARNING]

    def by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def clear(self) -> None:
        self.diagnostics.clear()


def unknown_node_type(node_type: str) -> Diagnostic:
    return Diagnostic(
        code=DiagnosticCode.UNKNOWN_NODE_TYPE,
        level=logging.DEBUG,
        message=f"Unsupported node type \"{node_type}\", using default handler",
        node_type=node_type,
    )


def unknown_mark_type(node_type: str, mark_type: str) -> Diagnostic:
    return Diagnostic(
        code=DiagnosticCode.UNKNOWN_MARK_TYPE,
        level=logging.DEBUG,
        message=f"Unsupported mark type \"{mark_type}\" on node type \"{node_type}\"",
        node_type=node_type,
        mark_type=mark_type,
    )


def implicit_document_wrap(node_type: str) -> Diagnostic:
    return Diagnostic(
        code=DiagnosticCode.IMPLICIT_DOCUMENT_WRAP,
        level=logging.WARNING,
        message=f"Root node is of type \"{node_type}\", not \"doc\". Wrapping it for conversion.",
        node_type=node_type,
    )
