"""HTML formatter for ADF documents.

Produces an HTML fragment (no <html>/<body> wrapper). Text and attribute
values are escaped; block elements end with a newline so the output
stays readable.
"""

from html import escape
from typing import Dict

from ..document.models import AdfMarkType, AdfNodeType
from ..engine.models import Formatter, ListType, MarkHandler, NodeHandler
from .common import enclosing_list_level, int_attr, iso_date, join_children


def _attr(value) -> str:
    return escape(str(value), quote=True)


def _element(tag: str) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        inner = "".join(process_children())
        return f"<{tag}>{inner}</{tag}>\n"

    return handler


def _heading(node, process_children, context, sibling_index):
    level = max(1, min(6, int_attr(node, "level", 1)))
    return f"<h{level}>{''.join(process_children())}</h{level}>\n"


def _list(list_type: ListType) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        overrides = {
            "list_item_level": enclosing_list_level(context) + 1,
            "list_type": list_type,
        }
        if list_type is ListType.ORDERED:
            start = int_attr(node, "order", 1)
            overrides["list_start"] = start
            open_tag = "<ol>" if start == 1 else f'<ol start="{start}">'
            close_tag = "</ol>"
        else:
            open_tag, close_tag = "<ul>", "</ul>"
        return f"{open_tag}\n{''.join(process_children(**overrides))}{close_tag}\n"

    return handler


def _list_item(node, process_children, context, sibling_index):
    return f"<li>{''.join(process_children()).strip()}</li>\n"


def _code_block(node, process_children, context, sibling_index):
    language = node.attrs.get("language")
    code = escape("\n".join(child.text or "" for child in node.content), quote=False)
    if language:
        return f'<pre><code class="language-{_attr(language)}">{code}</code></pre>\n'
    return f"<pre><code>{code}</code></pre>\n"


def _text(node, process_children, context, sibling_index):
    return escape(node.text or "", quote=False)


def _mention(node, process_children, context, sibling_index):
    name = str(node.attrs.get("text") or node.attrs.get("id") or "mention").lstrip("@")
    return f'<span class="mention">@{escape(name, quote=False)}</span>'


def _emoji(node, process_children, context, sibling_index):
    return escape(node.attrs.get("text") or node.attrs.get("shortName") or "", quote=False)


def _inline_card(node, process_children, context, sibling_index):
    url = node.attrs.get("url") or ""
    return f'<a href="{_attr(url)}">{escape(url, quote=False)}</a>'


def _panel(node, process_children, context, sibling_index):
    panel_type = node.attrs.get("panelType") or "info"
    inner = "".join(process_children())
    return f'<div class="panel panel-{_attr(panel_type)}">\n{inner}</div>\n'


def _status(node, process_children, context, sibling_index):
    text = (node.attrs.get("text") or "STATUS").upper()
    return f'<span class="status">{escape(text, quote=False)}</span>'


def _date(node, process_children, context, sibling_index):
    value = iso_date(node)
    if value is None:
        return ""
    return f'<time datetime="{_attr(value)}">{escape(value, quote=False)}</time>'


def _table(node, process_children, context, sibling_index):
    return f"<table>\n{''.join(process_children())}</table>\n"


def _table_row(node, process_children, context, sibling_index):
    return f"<tr>{''.join(process_children())}</tr>\n"


def _table_cell(tag: str) -> NodeHandler[str]:
    def handler(node, process_children, context, sibling_index):
        attributes = ""
        for name in ("colspan", "rowspan"):
            span = int_attr(node, name, 1)
            if span > 1:
                attributes += f' {name}="{span}"'
        inner = "".join(process_children()).strip()
        return f"<{tag}{attributes}>{inner}</{tag}>"

    return handler


# --- Mark handlers ---

def _wrap(tag: str) -> MarkHandler[str]:
    def handler(mark, next_mark, parent_node, context):
        return f"<{tag}>{next_mark()}</{tag}>"

    return handler


def _link(mark, next_mark, parent_node, context):
    href = mark.attrs.get("href") or ""
    return f'<a href="{_attr(href)}">{next_mark()}</a>'


def _subsup(mark, next_mark, parent_node, context):
    tag = "sup" if mark.attrs.get("type") == "sup" else "sub"
    return f"<{tag}>{next_mark()}</{tag}>"


def _text_color(mark, next_mark, parent_node, context):
    color = mark.attrs.get("color")
    if not color:
        return next_mark()
    return f'<span style="color: {_attr(color)}">{next_mark()}</span>'


_NODES: Dict[str, NodeHandler[str]] = {
    AdfNodeType.DOC.value: join_children,
    AdfNodeType.PARAGRAPH.value: _element("p"),
    AdfNodeType.HEADING.value: _heading,
    AdfNodeType.BULLET_LIST.value: _list(ListType.BULLET),
    AdfNodeType.ORDERED_LIST.value: _list(ListType.ORDERED),
    AdfNodeType.LIST_ITEM.value: _list_item,
    AdfNodeType.BLOCKQUOTE.value: _element("blockquote"),
    AdfNodeType.CODE_BLOCK.value: _code_block,
    AdfNodeType.RULE.value: lambda node, process_children, context, sibling_index: "<hr>\n",
    AdfNodeType.TABLE.value: _table,
    AdfNodeType.TABLE_ROW.value: _table_row,
    AdfNodeType.TABLE_HEADER.value: _table_cell("th"),
    AdfNodeType.TABLE_CELL.value: _table_cell("td"),
    AdfNodeType.TEXT.value: _text,
    AdfNodeType.HARD_BREAK.value: lambda node, process_children, context, sibling_index: "<br>",
    AdfNodeType.MENTION.value: _mention,
    AdfNodeType.EMOJI.value: _emoji,
    AdfNodeType.INLINE_CARD.value: _inline_card,
    AdfNodeType.PANEL.value: _panel,
    AdfNodeType.STATUS.value: _status,
    AdfNodeType.DATE.value: _date,
}

_TEXT_MARKS: Dict[str, MarkHandler[str]] = {
    AdfMarkType.STRONG.value: _wrap("strong"),
    AdfMarkType.EM.value: _wrap("em"),
    AdfMarkType.STRIKE.value: _wrap("s"),
    AdfMarkType.CODE.value: _wrap("code"),
    AdfMarkType.UNDERLINE.value: _wrap("u"),
    AdfMarkType.LINK.value: _link,
    AdfMarkType.SUBSUP.value: _subsup,
    AdfMarkType.TEXT_COLOR.value: _text_color,
}


html_formatter: Formatter[str] = Formatter(
    default_node_handler=join_children,
    nodes=_NODES,
    marks={AdfNodeType.TEXT.value: _TEXT_MARKS},
    name="html",
)
