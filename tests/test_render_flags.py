import pytest

from mathdown.markdown.config import HtmlRenderFlag
from mathdown.markdown.filters.render_flags import apply_render_flags, is_safe_link

NO_ATTR = ["", [], []]


def _doc(*blocks):
    return {"pandoc-api-version": [1, 23, 1], "meta": {}, "blocks": list(blocks)}


def _para(*inlines):
    return {"t": "Para", "c": list(inlines)}


def _str(text):
    return {"t": "Str", "c": text}


def _link(url, *inlines):
    return {"t": "Link", "c": [NO_ATTR, list(inlines), [url, ""]]}


def _image(url, *alt):
    return {"t": "Image", "c": [NO_ATTR, list(alt), [url, ""]]}


def _raw_inline(html):
    return {"t": "RawInline", "c": ["html", html]}


def _raw_block(html):
    return {"t": "RawBlock", "c": ["html", html]}


@pytest.mark.parametrize(
    "url, safe",
    [
        ("http://example.com", True),
        ("https://example.com/a", True),
        ("ftp://files.example.com", True),
        ("mailto:someone@example.com", True),
        ("/local/page", True),
        ("HTTP://EXAMPLE.COM", True),
        ("javascript:alert(1)", False),
        ("#anchor", False),
        ("http://", False),
        ("//evil.example.com", False),
    ],
)
def test_is_safe_link(url, safe) -> None:
    assert is_safe_link(url) is safe


def test_no_flags_leaves_document_alone() -> None:
    doc = _doc(_para(_link("javascript:x", _str("x"))), _raw_block("<div>raw</div>"))
    expected = _doc(_para(_link("javascript:x", _str("x"))), _raw_block("<div>raw</div>"))
    assert apply_render_flags(doc, HtmlRenderFlag.NONE) == expected


def test_safelink_unwraps_unsafe_links_only() -> None:
    doc = _doc(_para(_link("javascript:x", _str("bad")), _link("https://ok.example", _str("good"))))
    result = apply_render_flags(doc, HtmlRenderFlag.SAFELINK)
    assert result["blocks"][0]["c"] == [_str("bad"), _link("https://ok.example", _str("good"))]


def test_skip_links_unwraps_links_and_drops_raw_anchors() -> None:
    doc = _doc(_para(_link("https://ok.example", _str("text")), _raw_inline('<a href="/x">'), _str("y"), _raw_inline("</a>")))
    result = apply_render_flags(doc, HtmlRenderFlag.SKIP_LINKS)
    assert result["blocks"][0]["c"] == [_str("text"), _str("y")]


def test_skip_images_keeps_alt_text() -> None:
    doc = _doc(_para(_image("a.png", _str("alt")), _raw_inline('<img src="b.png">')))
    result = apply_render_flags(doc, HtmlRenderFlag.SKIP_IMAGES)
    assert result["blocks"][0]["c"] == [_str("alt")]


def test_skip_html_drops_all_raw_html() -> None:
    doc = _doc(_raw_block("<div>raw</div>"), _para(_raw_inline("<b>"), _str("bold"), _raw_inline("</b>")))
    result = apply_render_flags(doc, HtmlRenderFlag.SKIP_HTML)
    assert result["blocks"] == [_para(_str("bold"))]


def test_skip_style_drops_style_tags_only() -> None:
    doc = _doc(_raw_block("<style>p {}</style>"), _raw_block("<div>kept</div>"))
    result = apply_render_flags(doc, HtmlRenderFlag.SKIP_STYLE)
    assert result["blocks"] == [_raw_block("<div>kept</div>")]


def test_raw_content_in_other_formats_is_kept() -> None:
    doc = _doc({"t": "RawBlock", "c": ["latex", "\\newpage"]})
    assert apply_render_flags(doc, HtmlRenderFlag.SKIP_HTML)["blocks"] == doc["blocks"]


def test_containers_deeper_than_max_nesting_are_dropped() -> None:
    innermost = {"t": "BlockQuote", "c": [_para(_str("deep"))]}
    middle = {"t": "BlockQuote", "c": [_para(_str("middle")), innermost]}
    outer = {"t": "BlockQuote", "c": [middle]}
    result = apply_render_flags(_doc(outer), HtmlRenderFlag.NONE, max_nesting=2)
    kept_middle = result["blocks"][0]["c"][0]
    assert kept_middle["c"] == [_para(_str("middle"))]


def _header(level, identifier, *inlines):
    return {"t": "Header", "c": [level, [identifier, [], []], list(inlines)]}


def test_toc_numbers_headings_in_document_order() -> None:
    token = "0123456789abcdef0123456789abcdef"
    doc = _doc(
        _header(1, "", _str("Energy"), {"t": "Space"}, _str(token)),
        {"t": "BlockQuote", "c": [_header(2, "energy-inner", _str("Inner"))]},
        _header(1, "", _str("End")),
    )
    blocks = apply_render_flags(doc, HtmlRenderFlag.TOC)["blocks"]
    assert blocks[0]["c"][1][0] == "toc_0"
    assert blocks[1]["c"][0]["c"][1][0] == "toc_1"
    assert blocks[2]["c"][1][0] == "toc_2"
    # The heading text is untouched
    assert blocks[0]["c"][2][-1] == _str(token)


def test_headings_keep_their_ids_without_toc() -> None:
    doc = _doc(_header(1, "", _str("Title")))
    assert apply_render_flags(doc, HtmlRenderFlag.NONE)["blocks"][0]["c"][1][0] == ""
