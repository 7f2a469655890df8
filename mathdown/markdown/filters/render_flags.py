# mathdown/markdown/filters/render_flags.py
"""
Pandoc JSON-AST filter that applies the HTML render flags.

Pandoc has no switches for most of the classic renderer options, so they are
applied to the document tree between the reader and the HTML writer:

- SKIP_HTML drops raw HTML blocks and inline tags
- SKIP_STYLE drops raw <style> tags
- SKIP_IMAGES replaces images with their alt text and drops raw <img> tags
- SKIP_LINKS replaces links with their text and drops raw <a> tags
- SAFELINK replaces links with an unsafe URL scheme by their text
- TOC gives every heading a counter id (toc_0, toc_1, ...) for the table of
  contents to link to
- container nodes nested deeper than ``max_nesting`` are dropped

ESCAPE and HARD_WRAP are reader options and handled in config.py.
"""

import logging
import re

from ..config import MAX_NESTING, HtmlRenderFlag

logger = logging.getLogger(__name__)

SAFE_URI_PREFIXES = ("/", "http://", "https://", "ftp://", "mailto:")

# Node types that add one level of nesting
NESTING_TYPES = {
    "BlockQuote", "BulletList", "OrderedList", "DefinitionList", "Div",
    "Emph", "Strong", "Strikeout", "Superscript", "Subscript", "Underline",
    "SmallCaps", "Span", "Link", "Quoted", "Table",
}

RAW_TYPES = {"RawBlock", "RawInline"}


def _tag_pattern(name):
    return re.compile(rf"^<\s*/?\s*{name}(?=[\s>/]|$)", re.IGNORECASE)


_STYLE_TAG = _tag_pattern("style")
_IMG_TAG = _tag_pattern("img")
_A_TAG = _tag_pattern("a")


def is_safe_link(url: str) -> bool:
    """
    Return True if ``url`` starts with a known-safe prefix.

    The prefix must be followed by an alphanumeric character, so ``/`` alone or
    ``http://`` with nothing after it is not safe.
    """
    lowered = url.lower()
    for prefix in SAFE_URI_PREFIXES:
        if lowered.startswith(prefix) and len(url) > len(prefix) and url[len(prefix)].isalnum():
            return True
    return False


class RenderFlagFilter:
    def __init__(self, flags=HtmlRenderFlag.NONE, max_nesting=MAX_NESTING):
        self.flags = flags
        self.max_nesting = max_nesting
        self.dropped = 0
        self.headings = 0

    def __call__(self, document: dict) -> dict:
        """Filter a Pandoc JSON document in place and return it."""
        document["blocks"] = self._walk_list(document.get("blocks", []), depth=0)
        if self.dropped:
            logger.debug("Render flags removed %d node(s)", self.dropped)
        return document

    def _walk(self, value, depth):
        if isinstance(value, list):
            return self._walk_list(value, depth)
        if isinstance(value, dict):
            return {key: self._walk(item, depth) for key, item in value.items()}
        return value

    def _walk_list(self, items, depth):
        result = []
        for item in items:
            if isinstance(item, dict) and "t" in item:
                result.extend(self._filter_node(item, depth))
            else:
                result.append(self._walk(item, depth))
        return result

    def _filter_node(self, node, depth):
        """Return the list of nodes that replace ``node``."""
        kind = node["t"]

        if kind in NESTING_TYPES:
            depth += 1
            if depth > self.max_nesting:
                self.dropped += 1
                return []

        if kind in RAW_TYPES:
            if self._drop_raw(node):
                self.dropped += 1
                return []
            return [node]

        if kind == "Link":
            _attr, inlines, (url, _title) = node["c"]
            if self.flags & HtmlRenderFlag.SKIP_LINKS or (
                self.flags & HtmlRenderFlag.SAFELINK and not is_safe_link(url)
            ):
                return self._walk_list(inlines, depth)

        if kind == "Header" and self.flags & HtmlRenderFlag.TOC:
            node = self._number_heading(node)

        if kind == "Image" and self.flags & HtmlRenderFlag.SKIP_IMAGES:
            _attr, inlines, _target = node["c"]
            return self._walk_list(inlines, depth)

        if "c" in node:
            return [{**node, "c": self._walk(node["c"], depth)}]
        return [node]

    def _number_heading(self, node):
        # Ids depend on heading order only, never on the heading text
        level, (_identifier, classes, attributes), inlines = node["c"]
        identifier = f"toc_{self.headings}"
        self.headings += 1
        return {**node, "c": [level, [identifier, classes, attributes], inlines]}

    def _drop_raw(self, node) -> bool:
        fmt, content = node["c"]
        if fmt.lower() not in ("html", "html5", "html4"):
            return False

        content = content.strip()
        if self.flags & HtmlRenderFlag.SKIP_HTML:
            return True
        if self.flags & HtmlRenderFlag.SKIP_STYLE and _STYLE_TAG.match(content):
            return True
        if self.flags & HtmlRenderFlag.SKIP_IMAGES and _IMG_TAG.match(content):
            return True
        if self.flags & HtmlRenderFlag.SKIP_LINKS and _A_TAG.match(content):
            return True
        return False


def apply_render_flags(document, flags, max_nesting=MAX_NESTING):
    """Apply ``flags`` to a Pandoc JSON document."""
    return RenderFlagFilter(flags, max_nesting)(document)
