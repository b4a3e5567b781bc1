from html import escape
from typing import Any

RichTextNode = dict[str, Any]

BLOCK_TAGS = {
    "paragraph": "p",
    "preformatted": "pre",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
}

LIST_TAGS = {
    "list-item": "ul",
    "o-list-item": "ol",
}


def as_text(nodes: list[RichTextNode], join: str = " ") -> str:
    return join.join(node["text"] for node in nodes if node.get("text"))


def _open_tag(span: dict[str, Any]) -> str:
    span_type = span.get("type")
    if span_type == "strong":
        return "<strong>"
    if span_type == "em":
        return "<em>"
    if span_type == "hyperlink":
        data = span.get("data") or {}
        url = escape(data.get("url", ""), quote=True)
        if data.get("target"):
            target = escape(data["target"], quote=True)
            return f'<a href="{url}" target="{target}" rel="noopener">'
        return f'<a href="{url}">'
    if span_type == "label":
        label = escape((span.get("data") or {}).get("label", ""), quote=True)
        return f'<span class="{label}">'
    return ""


def _close_tag(span: dict[str, Any]) -> str:
    return {
        "strong": "</strong>",
        "em": "</em>",
        "hyperlink": "</a>",
        "label": "</span>",
    }.get(span.get("type", ""), "")


def _render_text(text: str, spans: list[dict[str, Any]]) -> str:
    if not spans:
        return escape(text).replace("\n", "<br />")

    boundaries = sorted(
        {0, len(text)}
        | {min(max(span["start"], 0), len(text)) for span in spans}
        | {min(max(span["end"], 0), len(text)) for span in spans}
    )
    ordered = sorted(spans, key=lambda s: (s["start"], -s["end"]))

    html: list[str] = []
    for start, end in zip(boundaries, boundaries[1:]):
        # Each segment is wrapped in every span covering it, so nesting stays valid
        active = [s for s in ordered if s["start"] <= start and s["end"] >= end]
        segment = escape(text[start:end]).replace("\n", "<br />")
        html.append(
            "".join(_open_tag(s) for s in active)
            + segment
            + "".join(_close_tag(s) for s in reversed(active))
        )
    return "".join(html)


def _render_node(node: RichTextNode) -> str:
    node_type = node.get("type", "paragraph")

    if node_type == "image":
        url = escape(node.get("url", ""), quote=True)
        alt = escape(node.get("alt") or "", quote=True)
        return f'<p class="block-img"><img src="{url}" alt="{alt}" /></p>'

    if node_type == "embed":
        oembed = node.get("oembed") or {}
        return f'<div data-oembed="{escape(oembed.get("embed_url", ""), quote=True)}">{oembed.get("html", "")}</div>'

    content = _render_text(node.get("text", ""), node.get("spans") or [])

    if node_type in LIST_TAGS:
        return f"<li>{content}</li>"

    tag = BLOCK_TAGS.get(node_type, "p")
    return f"<{tag}>{content}</{tag}>"


def as_html(nodes: list[RichTextNode]) -> str:
    html: list[str] = []
    open_list: str | None = None

    for node in nodes:
        list_tag = LIST_TAGS.get(node.get("type", ""))

        if open_list and list_tag != open_list:
            html.append(f"</{open_list}>")
            open_list = None

        if list_tag and open_list is None:
            html.append(f"<{list_tag}>")
            open_list = list_tag

        html.append(_render_node(node))

    if open_list:
        html.append(f"</{open_list}>")

    return "".join(html)
