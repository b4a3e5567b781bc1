from src.content.richtext import as_html, as_text


def test_as_text_joins_nodes_with_spaces() -> None:
    nodes = [
        {"type": "paragraph", "text": "first paragraph", "spans": []},
        {"type": "image", "url": "https://example.com/image.png"},
        {"type": "paragraph", "text": "second", "spans": []},
    ]
    assert as_text(nodes) == "first paragraph second"
    assert as_text(nodes, join="\n") == "first paragraph\nsecond"
    assert as_text([]) == ""


def test_as_html_paragraph_and_headings() -> None:
    nodes = [
        {"type": "heading2", "text": "Title", "spans": []},
        {"type": "paragraph", "text": "a < b & c", "spans": []},
        {"type": "preformatted", "text": "line one\nline two", "spans": []},
    ]
    assert as_html(nodes) == (
        "<h2>Title</h2>"
        "<p>a &lt; b &amp; c</p>"
        "<pre>line one<br />line two</pre>"
    )


def test_as_html_spans() -> None:
    nodes = [
        {
            "type": "paragraph",
            "text": "Read the docs now",
            "spans": [
                {"start": 0, "end": 4, "type": "strong"},
                {
                    "start": 9,
                    "end": 13,
                    "type": "hyperlink",
                    "data": {"link_type": "Web", "url": "https://example.com"},
                },
            ],
        }
    ]
    assert as_html(nodes) == (
        '<p><strong>Read</strong> the <a href="https://example.com">docs</a> now</p>'
    )


def test_as_html_overlapping_spans_stay_nested() -> None:
    nodes = [
        {
            "type": "paragraph",
            "text": "abcdef",
            "spans": [
                {"start": 0, "end": 4, "type": "strong"},
                {"start": 2, "end": 6, "type": "em"},
            ],
        }
    ]
    assert as_html(nodes) == (
        "<p><strong>ab</strong><strong><em>cd</em></strong><em>ef</em></p>"
    )


def test_as_html_groups_list_items() -> None:
    nodes = [
        {"type": "list-item", "text": "one", "spans": []},
        {"type": "list-item", "text": "two", "spans": []},
        {"type": "o-list-item", "text": "first", "spans": []},
        {"type": "paragraph", "text": "after", "spans": []},
    ]
    assert as_html(nodes) == (
        "<ul><li>one</li><li>two</li></ul>"
        "<ol><li>first</li></ol>"
        "<p>after</p>"
    )


def test_as_html_image() -> None:
    nodes = [{"type": "image", "url": "https://example.com/a.png", "alt": "A \"quote\""}]
    assert as_html(nodes) == (
        '<p class="block-img"><img src="https://example.com/a.png" alt="A &quot;quote&quot;" /></p>'
    )
