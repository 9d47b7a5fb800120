"""Data models for ADF (Atlassian Document Format) documents.

This module defines the node and mark structures the traversal engine walks.
Node and mark type tags are open strings: the enums below only name the
well-known tags, and anything else is still a legal node that routes to a
formatter's default handler.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Type tag of the canonical document root
DOC_TYPE = "doc"

# Type tag of the node kind that carries literal text and marks
TEXT_TYPE = "text"


class AdfNodeType(Enum):
    """Well-known ADF node types."""

    # Document root
    DOC = "doc"

    # Block nodes
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    RULE = "rule"
    MEDIA_SINGLE = "mediaSingle"
    MEDIA_GROUP = "mediaGroup"
    PANEL = "panel"
    EXPAND = "expand"

    # Inline nodes
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    MENTION = "mention"
    EMOJI = "emoji"
    INLINE_CARD = "inlineCard"
    STATUS = "status"
    DATE = "date"

    # Extensions (macros)
    EXTENSION = "extension"
    INLINE_EXTENSION = "inlineExtension"
    BODIED_EXTENSION = "bodiedExtension"

    # Other
    UNKNOWN = "unknown"


class AdfMarkType(Enum):
    """Well-known ADF mark types."""

    STRONG = "strong"
    EM = "em"
    STRIKE = "strike"
    CODE = "code"
    LINK = "link"
    UNDERLINE = "underline"
    TEXT_COLOR = "textColor"
    SUBSUP = "subsup"


@dataclass
class AdfMark:
    """Represents a text mark (inline decoration) in ADF.

    Marks are applied to text nodes to add formatting like bold, italic
    and links. The order of marks on a node is significant: the first
    mark wraps outermost.

    Attributes:
        type: Mark type (strong, em, link, code, etc.)
        attrs: Mark-specific attributes (e.g. a link's href)
    """

    type: str
    attrs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AdfNode:
    """Represents a node in the ADF tree.

    Each node has a type, optional content (child nodes), optional text,
    optional attributes, and optional marks (for text nodes).

    Nodes are produced before a traversal starts and are never mutated by
    the engine.

    Attributes:
        type: Node type (doc, paragraph, heading, text, etc.)
        content: List of child nodes
        text: Text content (for text nodes)
        attrs: Node attributes (heading level, code language, ...)
        marks: Text formatting marks
        version: ADF schema version, only set on document roots
    """

    type: str
    content: List["AdfNode"] = field(default_factory=list)
    text: Optional[str] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    marks: List[AdfMark] = field(default_factory=list)
    version: Optional[int] = None

    @property
    def node_type(self) -> AdfNodeType:
        """Get the AdfNodeType enum value."""
        try:
            return AdfNodeType(self.type)
        except ValueError:
            return AdfNodeType.UNKNOWN

    @property
    def is_document(self) -> bool:
        """Check if this node is a document root."""
        return self.type == DOC_TYPE

    @property
    def is_text(self) -> bool:
        """Check if this node is a text leaf."""
        return self.type == TEXT_TYPE

    @property
    def has_marks(self) -> bool:
        return bool(self.marks)

    @classmethod
    def document(cls, content: List["AdfNode"], version: int = 1) -> "AdfNode":
        """Build a document root holding the given top-level nodes."""
        return cls(type=DOC_TYPE, content=list(content), version=version)
