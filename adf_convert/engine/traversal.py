"""Depth-first traversal engine for ADF documents.

This module walks an AdfNode tree once, dispatching every node to the
matching handler of a Formatter and folding mark handlers around text
leaves. The engine is generic over the result type the formatter
produces: strings for Markdown or HTML, lists for a trace, and so on.

Key behaviors:
- A parent's handler runs before any of its children are visited;
  children are only visited when the handler calls `process_children`.
- Siblings are visited left to right, each tagged with its index.
- Marks on a text node are composed right to left so the first mark
  ends up outermost.
"""

import logging
from functools import partial
from typing import Any, Generic, List, Mapping, Optional, Union

from ..document.models import AdfNode
from ..document.parser import AdfParser, check_depth
from ..errors import InvalidDocumentError
from . import diagnostics as diag
from .diagnostics import DiagnosticSink, LoggingDiagnosticSink
from .models import (
    ROOT_LIST_LEVEL,
    ConversionContext,
    Formatter,
    NextMark,
    T,
)

logger = logging.getLogger(__name__)


class Traversal(Generic[T]):
    """Formats AdfNode trees with one formatter.

    A Traversal holds no per-document state, so a single instance can
    format any number of documents.

    Attributes:
        formatter: Table of node and mark handlers
        diagnostics: Sink receiving unknown-type notices

    Example:
        >>> traversal = Traversal(markdown_formatter)
        >>> traversal.format_node(doc, ConversionContext(list_item_level=-1), 0)
        '# Title\\n\\n'
    """

    def __init__(
        self,
        formatter: Formatter[T],
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        self.formatter = formatter
        self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnosticSink()

    def format_node(
        self,
        node: AdfNode,
        context: ConversionContext,
        sibling_index: int = 0,
    ) -> T:
        """Recursively format a node and its subtree.

        Args:
            node: The node to format
            context: Conversion context inherited from the parent
            sibling_index: Zero-based position of the node among its siblings

        Returns:
            The formatter's result for this node, with marks applied
            when the node is a marked text node
        """

        def process_children(**overrides: Any) -> List[T]:
            if not node.content:
                return []
            child_context = context.merge(**overrides)
            return [
                self.format_node(child, child_context, index)
                for index, child in enumerate(node.content)
            ]

        handler = self.formatter.node_handler_for(node.type)
        if handler is None:
            self.diagnostics.report(diag.unknown_node_type(node.type))
            handler = self.formatter.default_node_handler

        base_result = handler(node, process_children, context, sibling_index)

        if node.is_text and node.has_marks:
            return self.compose_marks(node, base_result, context)
        return base_result

    def compose_marks(
        self,
        node: AdfNode,
        base_result: T,
        context: ConversionContext,
    ) -> T:
        """Fold a text node's marks around its base result.

        The chain is built from the last mark to the first, so the first
        mark's handler is called first and wraps everything inside it.
        Each handler receives a zero-argument `next` callable producing
        the inner result, and decides if and how to use it. A mark with
        no handler passes the inner result through unchanged.

        Args:
            node: The text node carrying the marks
            base_result: The node handler's result for the node
            context: Conversion context of the node

        Returns:
            The result with all marks applied
        """
        chain: NextMark[T] = lambda: base_result
        for mark in reversed(node.marks):
            chain = partial(self._apply_mark, node, mark, chain, context)
        return chain()

    def _apply_mark(self, node, mark, next_mark, context):
        handler = self.formatter.mark_handler_for(node.type, mark.type)
        if handler is None:
            self.diagnostics.report(diag.unknown_mark_type(node.type, mark.type))
            return next_mark()
        return handler(mark, next_mark, node, context)


def run(
    document: Union[AdfNode, Mapping[str, Any]],
    formatter: Formatter[T],
    diagnostics: Optional[DiagnosticSink] = None,
) -> T:
    """Format an entire ADF document (or a single node) with a formatter.

    Mappings are parsed into AdfNode trees first. A root that is not a
    "doc" node is wrapped in a synthetic document and a warning
    diagnostic is reported.

    Args:
        document: ADF document as an AdfNode or a decoded JSON mapping
        formatter: Formatter whose handlers produce the result
        diagnostics: Sink for diagnostics (defaults to logging)

    Returns:
        The formatter's result for the document root

    Raises:
        InvalidDocumentError: If the input is not a typed ADF node
    """
    sink = diagnostics if diagnostics is not None else LoggingDiagnosticSink()
    root = _normalize_root(document, sink)

    logger.debug(f"Formatting document with {formatter.name} formatter")
    initial_context = ConversionContext(list_item_level=ROOT_LIST_LEVEL)
    return Traversal(formatter, sink).format_node(root, initial_context, 0)


def _normalize_root(
    document: Union[AdfNode, Mapping[str, Any]],
    sink: DiagnosticSink,
) -> AdfNode:
    """Validate the input and make sure it is rooted at a document node."""
    if isinstance(document, AdfNode):
        if not isinstance(document.type, str) or not document.type:
            raise InvalidDocumentError("root node has no type")
        check_depth(document)
        root = document
    elif isinstance(document, Mapping):
        root = AdfParser().parse_node(document)
    else:
        raise InvalidDocumentError(
            f"root must be an ADF node or object, got {type(document).__name__}"
        )

    if not root.is_document:
        sink.report(diag.implicit_document_wrap(root.type))
        root = AdfNode.document([root])
    return root
