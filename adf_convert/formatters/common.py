"""Helpers shared by the stock formatters."""

from datetime import datetime, timezone
from typing import Optional

from ..document.models import AdfNode
from ..engine.models import ROOT_LIST_LEVEL, ConversionContext


def int_attr(node: AdfNode, key: str, default: int) -> int:
    """Read an integer attribute, falling back to default when absent or invalid."""
    value = node.attrs.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def enclosing_list_level(context: ConversionContext) -> int:
    if context.list_item_level is None:
        return ROOT_LIST_LEVEL
    return context.list_item_level


def iso_date(node: AdfNode) -> Optional[str]:
    """Convert a date node's epoch-milliseconds timestamp to an ISO date.

    Returns None when the node has no timestamp, and the raw value when it
    cannot be read as a number.
    """
    timestamp = node.attrs.get("timestamp")
    if timestamp is None:
        return None
    try:
        moment = datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return str(timestamp)
    return moment.date().isoformat()


def join_children(node, process_children, context, sibling_index) -> str:
    return "".join(process_children())
