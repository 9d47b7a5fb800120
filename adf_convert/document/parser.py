"""Parser for ADF (Atlassian Document Format) documents.

This module converts ADF JSON (as a string or an already-decoded mapping)
into AdfNode trees. It checks the shape of the tree only; node attributes
are not validated against any schema.
"""

import json
import logging
from typing import Any, Dict, List, Mapping

from ..errors import InvalidDocumentError
from .models import AdfMark, AdfNode, AdfNodeType

logger = logging.getLogger(__name__)

# Maximum nesting depth accepted from input documents
MAX_DOCUMENT_DEPTH = 100


class AdfParser:
    """Parser for ADF documents.

    Converts ADF JSON to AdfNode objects. The root must carry a type tag;
    nested nodes without one are tagged "unknown" so they reach the
    formatter's default handler.
    """

    def parse_node(self, node_data: Any) -> AdfNode:
        """Parse an ADF JSON node (usually a "doc") into an AdfNode tree.

        Args:
            node_data: The ADF node as a dictionary (parsed JSON)

        Returns:
            AdfNode with the parsed content tree

        Raises:
            InvalidDocumentError: If the root is not a typed mapping, the
                tree is malformed, or it nests deeper than MAX_DOCUMENT_DEPTH
        """
        if not isinstance(node_data, Mapping):
            raise InvalidDocumentError(
                f"root must be an object, got {type(node_data).__name__}"
            )

        node_type = node_data.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise InvalidDocumentError("root node has no type")

        return self._parse_node(node_data, path="$", depth=0)

    def parse_from_string(self, adf_string: str) -> AdfNode:
        """Parse an ADF JSON string into an AdfNode tree.

        Args:
            adf_string: The ADF document as a JSON string

        Returns:
            AdfNode with the parsed content tree

        Raises:
            InvalidDocumentError: If the string is not valid JSON or not ADF
        """
        try:
            adf_json = json.loads(adf_string)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(f"not valid JSON ({e.msg} at line {e.lineno})")
        return self.parse_node(adf_json)

    def _parse_node(self, node_data: Mapping[str, Any], path: str, depth: int) -> AdfNode:
        """Parse a single ADF node from JSON.

        Args:
            node_data: Node data as a dictionary
            path: JSON path of this node, used in error messages
            depth: Current nesting depth (0 for the root)

        Returns:
            Parsed AdfNode object
        """
        # Check depth so the traversal never overflows the stack part-way through
        if depth > MAX_DOCUMENT_DEPTH:
            raise InvalidDocumentError(
                f"document exceeds maximum depth of {MAX_DOCUMENT_DEPTH}",
                path=path,
            )

        node_type = node_data.get("type")
        if not isinstance(node_type, str) or not node_type:
            logger.debug(f"Node at {path} has no type, treating it as unknown")
            node_type = AdfNodeType.UNKNOWN.value

        text = node_data.get("text")
        if text is not None and not isinstance(text, str):
            raise InvalidDocumentError("'text' must be a string", path=path)

        attrs = self._get_mapping(node_data, "attrs", path)
        marks = [
            self._parse_mark(mark_data, f"{path}.marks[{i}]")
            for i, mark_data in enumerate(self._get_list(node_data, "marks", path))
        ]

        # Parse child content recursively
        content = []
        for i, child_data in enumerate(self._get_list(node_data, "content", path)):
            child_path = f"{path}.content[{i}]"
            if not isinstance(child_data, Mapping):
                raise InvalidDocumentError(
                    f"node must be an object, got {type(child_data).__name__}",
                    path=child_path,
                )
            content.append(self._parse_node(child_data, child_path, depth + 1))

        version = node_data.get("version")

        return AdfNode(
            type=node_type,
            content=content,
            text=text,
            attrs=attrs,
            marks=marks,
            version=version if isinstance(version, int) else None,
        )

    def _parse_mark(self, mark_data: Any, path: str) -> AdfMark:
        if not isinstance(mark_data, Mapping):
            raise InvalidDocumentError(
                f"mark must be an object, got {type(mark_data).__name__}",
                path=path,
            )
        mark_type = mark_data.get("type")
        if not isinstance(mark_type, str) or not mark_type:
            mark_type = "unknown"
        return AdfMark(type=mark_type, attrs=self._get_mapping(mark_data, "attrs", path))

    @staticmethod
    def _get_list(data: Mapping[str, Any], key: str, path: str) -> List[Any]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise InvalidDocumentError(
                f"'{key}' must be a list, got {type(value).__name__}", path=path
            )
        return value

    @staticmethod
    def _get_mapping(data: Mapping[str, Any], key: str, path: str) -> Dict[str, Any]:
        value = data.get(key)
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise InvalidDocumentError(
                f"'{key}' must be an object, got {type(value).__name__}", path=path
            )
        return dict(value)


def check_depth(root: AdfNode) -> None:
    """Reject an already-built AdfNode tree nested deeper than MAX_DOCUMENT_DEPTH.

    Walks the tree with an explicit stack, so checking a pathologically
    deep tree cannot itself exceed the recursion limit.

    Raises:
        InvalidDocumentError: If any node sits deeper than MAX_DOCUMENT_DEPTH
    """
    stack = [(root, "$", 0)]
    while stack:
        node, path, depth = stack.pop()
        if depth > MAX_DOCUMENT_DEPTH:
            raise InvalidDocumentError(
                f"document exceeds maximum depth of {MAX_DOCUMENT_DEPTH}",
                path=path,
            )
        for i, child in enumerate(node.content):
            stack.append((child, f"{path}.content[{i}]", depth + 1))
