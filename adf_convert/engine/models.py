"""Data models for the traversal engine.

This module defines the conversion context threaded down the tree, the
handler signatures a formatter is built from, and the Formatter table
itself. All models are immutable so one formatter can be shared across
many traversals.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Generic, List, Mapping, Optional, Protocol, TypeVar

from ..document.models import AdfMark, AdfNode

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

# List nesting level of the root context (outside any list)
ROOT_LIST_LEVEL = -1


class ListType(str, Enum):
    """Kind of the innermost enclosing list."""

    BULLET = "bullet"
    ORDERED = "ordered"


@dataclass(frozen=True)
class ConversionContext:
    """Traversal state passed from a node to its children.

    A child inherits its parent's context unless the parent's handler
    supplies overrides when processing children. Overrides are merged
    shallowly: fields that are not overridden pass through unchanged.

    Attributes:
        list_item_level: Nesting depth of the innermost list
            (ROOT_LIST_LEVEL outside any list, 0 for a top-level list)
        list_type: Kind of the innermost enclosing list
        list_start: First number of the innermost ordered list
    """

    list_item_level: Optional[int] = None
    list_type: Optional[ListType] = None
    list_start: int = 1

    def merge(self, **overrides: Any) -> "ConversionContext":
        """Return a new context with the given fields replaced.

        Raises:
            TypeError: If an override names an unknown field
        """
        if not overrides:
            return self
        return replace(self, **overrides)


class ProcessChildren(Protocol[T_co]):
    """Callable handed to node handlers to format a node's children.

    Returns one result per child in original order. Keyword arguments are
    ConversionContext overrides for the children.
    """

    def __call__(self, **overrides: Any) -> List[T_co]:
        ...


# (node, process_children, context, sibling_index) -> result
NodeHandler = Callable[[AdfNode, ProcessChildren[T], ConversionContext, int], T]

# Produces the result of the inner marks (or the base text result)
NextMark = Callable[[], T]

# (mark, next, parent_node, context) -> result
MarkHandler = Callable[[AdfMark, NextMark[T], AdfNode, ConversionContext], T]


@dataclass(frozen=True)
class Formatter(Generic[T]):
    """Table of node and mark handlers that drives a traversal.

    Attributes:
        default_node_handler: Handler for node types missing from `nodes`
        nodes: Node handlers keyed by node type
        marks: Mark handlers keyed by parent node type, then mark type
        name: Human readable formatter name (used in logs)
    """

    default_node_handler: NodeHandler[T]
    nodes: Mapping[str, NodeHandler[T]] = field(default_factory=dict)
    marks: Mapping[str, Optional[Mapping[str, MarkHandler[T]]]] = field(default_factory=dict)
    name: str = "custom"

    def node_handler_for(self, node_type: str) -> Optional[NodeHandler[T]]:
        """Get the registered handler for a node type, if any."""
        return self.nodes.get(node_type)

    def mark_handler_for(
        self, parent_node_type: str, mark_type: str
    ) -> Optional[MarkHandler[T]]:
        """Get the registered handler for a mark on a given parent node type."""
        return (self.marks.get(parent_node_type) or {}).get(mark_type)
