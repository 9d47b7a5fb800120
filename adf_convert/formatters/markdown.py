"""Markdown formatter for ADF documents.

This module provides the node and mark handlers that turn an ADF tree
into CommonMark-flavoured Markdown. Block handlers own their trailing
newlines; list nesting is tracked through the conversion context.
"""

import re
from typing import Dict

from ..document.models import AdfMark, AdfMarkType, AdfNode, AdfNodeType
from ..engine.models import (
    ConversionContext,
    Formatter,
    ListType,
    MarkHandler,
    NextMark,
    NodeHandler,
)
from .common import enclosing_list_level, int_attr, iso_date, join_children

# Characters with a meaning in Markdown inline syntax
_MARKDOWN_SPECIAL_CHARS = re.compile(r"([*_~`\[\]()#+\-!|>])")

# Bullet markers accepted by CommonMark
BULLET_MARKERS = ("*", "-", "+")


def escape_markdown(text: str) -> str:
    """Escape Markdown special characters in literal text.

    Backslashes are escaped first so the escapes added afterwards are
    not doubled.
    """
    if not text:
        return ""
    text = text.replace("\\", "\\\\")
    return _MARKDOWN_SPECIAL_CHARS.sub(r"\\\1", text)


# --- Node handlers ---

def _paragraph(node, process_children, context, sibling_index):
    return "".join(process_children()) + "\n\n"


def _heading(node, process_children, context, sibling_index):
    level = max(1, min(6, int_attr(node, "level", 1)))
    return "#" * level + " " + "".join(process_children()) + "\n\n"


def _list(list_type: ListType) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        parent_level = enclosing_list_level(context)
        overrides = {"list_item_level": parent_level + 1, "list_type": list_type}
        if list_type is ListType.ORDERED:
            overrides["list_start"] = int_attr(node, "order", 1)

        items = "".join(process_children(**overrides))
        # Only a top-level list is followed by a blank line
        suffix = "\n" if parent_level < 0 else ""
        return items + suffix

    return handler


def _list_item_handler(bullet_marker: str) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        level = context.list_item_level or 0
        indent = "  " * level
        nested_indent = "  " * (level + 1)

        if context.list_type is ListType.ORDERED:
            prefix = f"{context.list_start + sibling_index}. "
        else:
            prefix = f"{bullet_marker} "

        content = "".join(process_children())

        # A paragraph directly followed by a nested list keeps a single newline
        nested_marker = re.compile(
            r"\n\n(" + re.escape(nested_indent)
            + r"(?:" + "|".join(re.escape(m) for m in BULLET_MARKERS) + r"|\d+\.))"
        )
        content = nested_marker.sub(r"\n\1", content, count=1)

        return f"{indent}{prefix}{content.strip()}\n"

    return handler


def _blockquote(node, process_children, context, sibling_index):
    quote = "".join(process_children()).strip()
    return "\n".join(f"> {line}" for line in quote.split("\n")) + "\n\n"


def _code_block(node, process_children, context, sibling_index):
    # Code content is raw text, so children are read directly without escaping
    language = node.attrs.get("language") or ""
    code = "\n".join(child.text or "" for child in node.content)
    return f"```{language}\n{code}\n```\n\n"


def _rule(node, process_children, context, sibling_index):
    return "---\n\n"


def _table(node, process_children, context, sibling_index):
    # GitHub-flavoured table: the first row is always the header row
    rows = process_children()
    if not rows:
        return ""
    columns = max(len(row.content) for row in node.content) or 1
    separator = "| " + " | ".join("---" for _ in range(columns)) + " |\n"
    return rows[0] + separator + "".join(rows[1:]) + "\n"


def _table_row(node, process_children, context, sibling_index):
    cells = [cell.strip().replace("\n", " ") for cell in process_children()]
    return "| " + " | ".join(cells) + " |\n"


def _text_handler(escape_text: bool) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        # Escaping happens here, before any mark wraps the text
        if escape_text:
            return escape_markdown(node.text or "")
        return node.text or ""

    return handler


def _hard_break(node, process_children, context, sibling_index):
    return "  \n"


def _mention(node, process_children, context, sibling_index):
    name = node.attrs.get("text") or node.attrs.get("id") or "mention"
    return "@" + str(name).lstrip("@")


def _emoji(node, process_children, context, sibling_index):
    return node.attrs.get("shortName") or node.attrs.get("text") or ""


def _inline_card(node, process_children, context, sibling_index):
    url = node.attrs.get("url") or ""
    return f"[{url}]({url})"


def _panel(node, process_children, context, sibling_index):
    body = "".join(process_children()).strip()
    panel_type = node.attrs.get("panelType")
    title = f"**Panel ({panel_type}):**" if panel_type else "**Panel:**"
    return f"> {title}\n> " + "\n> ".join(body.split("\n")) + "\n\n"


def _status(node, process_children, context, sibling_index):
    text = node.attrs.get("text")
    return f"[{text.upper() if text else 'STATUS'}]"


def _date(node, process_children, context, sibling_index):
    return iso_date(node) or ""


# --- Mark handlers (applied to text nodes only) ---

def _wrap(delimiter: str) -> MarkHandler[str]:
    def handler(mark: AdfMark, next_mark: NextMark[str],
                parent_node: AdfNode, context: ConversionContext) -> str:
        return f"{delimiter}{next_mark()}{delimiter}"

    return handler


def _link(mark, next_mark, parent_node, context):
    href = mark.attrs.get("href") or ""
    return f"[{next_mark()}]({href})"


def _pass_through(mark, next_mark, parent_node, context):
    # No Markdown equivalent; keep the inner content only
    return next_mark()


def create_markdown_formatter(
    bullet_marker: str = "*",
    escape_text: bool = True,
) -> Formatter[str]:
    """Build a Markdown formatter.

    Args:
        bullet_marker: Marker used for bullet list items ("*", "-" or "+")
        escape_text: Escape Markdown special characters in text nodes

    Returns:
        Formatter producing Markdown strings

    Raises:
        ValueError: If bullet_marker is not a CommonMark bullet
    """
    if bullet_marker not in BULLET_MARKERS:
        raise ValueError(
            f"bullet_marker must be one of {', '.join(BULLET_MARKERS)}, got '{bullet_marker}'"
        )

    nodes: Dict[str, NodeHandler[str]] = {
        AdfNodeType.DOC.value: join_children,
        AdfNodeType.PARAGRAPH.value: _paragraph,
        AdfNodeType.HEADING.value: _heading,
        AdfNodeType.BULLET_LIST.value: _list(ListType.BULLET),
        AdfNodeType.ORDERED_LIST.value: _list(ListType.ORDERED),
        AdfNodeType.LIST_ITEM.value: _list_item_handler(bullet_marker),
        AdfNodeType.BLOCKQUOTE.value: _blockquote,
        AdfNodeType.CODE_BLOCK.value: _code_block,
        AdfNodeType.RULE.value: _rule,
        AdfNodeType.TABLE.value: _table,
        AdfNodeType.TABLE_ROW.value: _table_row,
        AdfNodeType.TABLE_HEADER.value: join_children,
        AdfNodeType.TABLE_CELL.value: join_children,
        AdfNodeType.TEXT.value: _text_handler(escape_text),
        AdfNodeType.HARD_BREAK.value: _hard_break,
        AdfNodeType.MENTION.value: _mention,
        AdfNodeType.EMOJI.value: _emoji,
        AdfNodeType.INLINE_CARD.value: _inline_card,
        AdfNodeType.PANEL.value: _panel,
        AdfNodeType.STATUS.value: _status,
        AdfNodeType.DATE.value: _date,
    }

    text_marks: Dict[str, MarkHandler[str]] = {
        AdfMarkType.STRONG.value: _wrap("**"),
        AdfMarkType.EM.value: _wrap("*"),
        AdfMarkType.STRIKE.value: _wrap("~~"),
        AdfMarkType.CODE.value: _wrap("`"),
        AdfMarkType.LINK.value: _link,
        AdfMarkType.UNDERLINE.value: _pass_through,
        AdfMarkType.TEXT_COLOR.value: _pass_through,
        AdfMarkType.SUBSUP.value: _pass_through,
    }

    return Formatter(
        default_node_handler=join_children,
        nodes=nodes,
        marks={AdfNodeType.TEXT.value: text_marks},
        name="markdown",
    )


markdown_formatter = create_markdown_formatter()
