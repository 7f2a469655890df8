"""Markdown engines the pipeline can render with."""

import json
import logging
import re
from abc import ABC, abstractmethod

import pypandoc

from .config import MAX_NESTING, HtmlRenderFlag, MarkdownExtension, RenderMode, get_pandoc_config
from .errors import AllocationError
from .extensions.toc_extractor import toc_from_html
from .filters.render_flags import apply_render_flags

logger = logging.getLogger(__name__)

VOID_ELEMENTS = (
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
)

_VOID_TAG = re.compile(
    r"<(%s)((?:\s[^<>]*?)?)\s*/?>" % "|".join(VOID_ELEMENTS),
    re.IGNORECASE,
)


def normalize_void_elements(html: str, xhtml: bool = False) -> str:
    """Write void elements as ``<br />`` when ``xhtml`` is set, ``<br>`` otherwise."""
    close = " />" if xhtml else ">"
    return _VOID_TAG.sub(lambda match: f"<{match.group(1)}{match.group(2).rstrip()}{close}", html)


class MarkdownEngine(ABC):
    """A Markdown parser/renderer the pipeline can drive, one pass at a time."""

    @abstractmethod
    def render(
        self,
        text: str,
        extensions: MarkdownExtension,
        flags: HtmlRenderFlag,
        mode: RenderMode = RenderMode.BODY,
        max_nesting: int = MAX_NESTING,
    ) -> str:
        """
        Render ``text`` to HTML.

        Args:
            text: Markdown source
            extensions: Dialect bitmask
            flags: HTML renderer bitmask
            mode: RenderMode.BODY for the document, RenderMode.TOC for a
                table-of-contents list only
            max_nesting: Deepest allowed block/inline nesting

        Raises:
            AllocationError: the engine could not be set up for this pass
        """


class PandocEngine(MarkdownEngine):
    """
    Engine backed by Pandoc through pypandoc.

    Every call starts a fresh Pandoc reader and writer, so nothing carries over
    between passes or documents. The document goes through Pandoc's JSON AST on
    the way so the render flags can be applied to it.
    """

    def render(self, text, extensions, flags, mode=RenderMode.BODY, max_nesting=MAX_NESTING):
        if mode is RenderMode.TOC:
            flags |= HtmlRenderFlag.TOC
        pandoc_config = get_pandoc_config(extensions, flags)
        logger.debug("Rendering %s pass with reader %s", mode.value, pandoc_config["from"])

        try:
            ast = pypandoc.convert_text(
                text,
                to="json",
                format=pandoc_config["from"],
                extra_args=pandoc_config["extra_args"],
            )
            document = apply_render_flags(json.loads(ast), flags, max_nesting)
            html = pypandoc.convert_text(
                json.dumps(document),
                to=pandoc_config["to"],
                format="json",
                extra_args=pandoc_config["extra_args"],
            )
        except (OSError, RuntimeError, ValueError, MemoryError) as exc:
            raise AllocationError(
                f"pandoc could not render the {mode.value} pass: {exc}",
                location="PandocEngine.render",
            ) from exc

        html = html.replace("\r\n", "\n")
        if mode is RenderMode.TOC:
            html = toc_from_html(html)
        return normalize_void_elements(html, xhtml=bool(flags & HtmlRenderFlag.USE_XHTML))
