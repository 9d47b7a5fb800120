"""ADF document model and parser.

Key classes:
    AdfNode: One element of the document tree
    AdfMark: An inline decoration attached to a text node
    AdfParser: Parses ADF JSON into AdfNode trees
"""

from .models import (
    DOC_TYPE,
    TEXT_TYPE,
    AdfMark,
    AdfMarkType,
    AdfNode,
    AdfNodeType,
)
from .parser import MAX_DOCUMENT_DEPTH, AdfParser, check_depth

__all__ = [
    "AdfParser",
    "AdfNode",
    "AdfMark",
    "AdfNodeType",
    "AdfMarkType",
    "DOC_TYPE",
    "TEXT_TYPE",
    "MAX_DOCUMENT_DEPTH",
    "check_depth",
]
