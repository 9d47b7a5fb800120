"""Plain text formatter for ADF documents.

Produces readable text without markup: blocks are separated by blank
lines, list items keep their indentation and bullets, and links show
their destination in parentheses.
"""

import re
from typing import Dict

from ..document.models import AdfMarkType, AdfNodeType
from ..engine.models import Formatter, ListType, MarkHandler, NodeHandler
from .common import enclosing_list_level, int_attr, iso_date, join_children

_BLANK_LINES = re.compile(r"\n{2,}")


def _document(node, process_children, context, sibling_index):
    text = "".join(process_children()).rstrip()
    return text + "\n" if text else ""


def _block(node, process_children, context, sibling_index):
    return "".join(process_children()) + "\n\n"


def _list(list_type: ListType) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        parent_level = enclosing_list_level(context)
        overrides = {"list_item_level": parent_level + 1, "list_type": list_type}
        if list_type is ListType.ORDERED:
            overrides["list_start"] = int_attr(node, "order", 1)
        items = "".join(process_children(**overrides))
        return items + "\n" if parent_level < 0 else items

    return handler


def _list_item(node, process_children, context, sibling_index):
    indent = "  " * (context.list_item_level or 0)
    if context.list_type is ListType.ORDERED:
        prefix = f"{context.list_start + sibling_index}. "
    else:
        prefix = "- "
    content = _BLANK_LINES.sub("\n", "".join(process_children())).strip()
    return f"{indent}{prefix}{content}\n"


def _code_block(node, process_children, context, sibling_index):
    return "\n".join(child.text or "" for child in node.content) + "\n\n"


def _text(node, process_children, context, sibling_index):
    return node.text or ""


def _mention(node, process_children, context, sibling_index):
    name = node.attrs.get("text") or node.attrs.get("id") or "mention"
    return "@" + str(name).lstrip("@")


def _table_row(node, process_children, context, sibling_index):
    cells = [cell.strip().replace("\n", " ") for cell in process_children()]
    return " | ".join(cells) + "\n"


def _link(mark, next_mark, parent_node, context):
    text = next_mark()
    href = mark.attrs.get("href")
    if not href or href == text:
        return text
    return f"{text} ({href})"


def _pass_through(mark, next_mark, parent_node, context):
    return next_mark()


_NODES: Dict[str, NodeHandler[str]] = {
    AdfNodeType.DOC.value: _document,
    AdfNodeType.PARAGRAPH.value: _block,
    AdfNodeType.HEADING.value: _block,
    AdfNodeType.BLOCKQUOTE.value: join_children,
    AdfNodeType.PANEL.value: join_children,
    AdfNodeType.BULLET_LIST.value: _list(ListType.BULLET),
    AdfNodeType.ORDERED_LIST.value: _list(ListType.ORDERED),
    AdfNodeType.LIST_ITEM.value: _list_item,
    AdfNodeType.CODE_BLOCK.value: _code_block,
    AdfNodeType.RULE.value: lambda node, process_children, context, sibling_index: "---\n\n",
    AdfNodeType.TABLE.value: _block,
    AdfNodeType.TABLE_ROW.value: _table_row,
    AdfNodeType.TABLE_HEADER.value: join_children,
    AdfNodeType.TABLE_CELL.value: join_children,
    AdfNodeType.TEXT.value: _text,
    AdfNodeType.HARD_BREAK.value: lambda node, process_children, context, sibling_index: "\n",
    AdfNodeType.MENTION.value: _mention,
    AdfNodeType.EMOJI.value: lambda node, process_children, context, sibling_index: (
        node.attrs.get("text") or node.attrs.get("shortName") or ""
    ),
    AdfNodeType.INLINE_CARD.value: lambda node, process_children, context, sibling_index: (
        node.attrs.get("url") or ""
    ),
    AdfNodeType.STATUS.value: lambda node, process_children, context, sibling_index: (
        (node.attrs.get("text") or "STATUS").upper()
    ),
    AdfNodeType.DATE.value: lambda node, process_children, context, sibling_index: (
        iso_date(node) or ""
    ),
}

_TEXT_MARKS: Dict[str, MarkHandler[str]] = {
    mark_type.value: _pass_through for mark_type in AdfMarkType
}
_TEXT_MARKS[AdfMarkType.LINK.value] = _link


plain_text_formatter: Formatter[str] = Formatter(
    default_node_handler=join_children,
    nodes=_NODES,
    marks={AdfNodeType.TEXT.value: _TEXT_MARKS},
    name="text",
)
