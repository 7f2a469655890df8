# mathdown/markdown/renderer.py

import logging

from .buffers import RenderBuffer
from .config import (
    MAX_NESTING,
    ExtensionSet,
    RenderMode,
    RenderOptions,
    extension_flags,
    render_flags,
)
from .engine import PandocEngine
from .errors import AllocationError
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors

logger = logging.getLogger(__name__)

TOC_OPEN = '<div id="toc">\n<div id="toc_header">Table of Contents</div>\n'
TOC_CLOSE = "</div>\n\n"


def render_pass(text, extensions, options, mode, engine, max_buffer_size=None):
    """
    Run one engine pass and finish its HTML.

    A pass gets its own input buffer, renderer configuration and engine
    invocation; the pass's postprocessors (typography) run on its output before
    it is handed back.

    Args:
        text: Markdown text, already math-protected if requested
        extensions: ExtensionSet of the render
        options: RenderOptions of the render
        mode: RenderMode.TOC or RenderMode.BODY
        engine: MarkdownEngine to render with
        max_buffer_size: Optional byte limit for the pass's buffers

    Raises:
        AllocationError: a buffer or the engine could not be set up
    """
    context = {"extensions": extensions, "options": options}
    # With a TOC requested both passes number the headings the same way
    flags = render_flags(options, mode)

    with RenderBuffer.from_text(text, max_size=max_buffer_size) as input_buffer:
        try:
            html = engine.render(
                input_buffer.getvalue(),
                extension_flags(extensions),
                flags,
                mode=mode,
                max_nesting=MAX_NESTING,
            )
        except MemoryError as exc:
            raise AllocationError(f"out of memory in {mode.value} pass", location="render_pass") from exc

    html = apply_postprocessors(html, context)

    with RenderBuffer(max_size=max_buffer_size) as output:
        output.put(html)
        return output.getvalue()


def markdown_to_html(text, extensions=None, options=None, engine=None, max_buffer_size=None):
    """
    Main rendering function: Markdown text in, HTML fragment out.

    Steps, in order:
        1. protect math regions (``extensions.ignore_math``)
        2. table-of-contents pass, wrapped in ``<div id="toc">`` (``options.toc``)
        3. body pass
        4. restore the protected math text, once, over the whole output

    Args:
        text: Raw Markdown (UTF-8 text)
        extensions: ExtensionSet; defaults to every extension off
        options: RenderOptions; defaults to every option off
        engine: MarkdownEngine; defaults to a PandocEngine
        max_buffer_size: Optional byte limit for every buffer of the render

    Raises:
        AllocationError: no output is produced
    """
    context = {
        "extensions": extensions or ExtensionSet(),
        "options": options or RenderOptions(),
    }
    engine = engine or PandocEngine()

    try:
        text = apply_preprocessors(text, context)

        with RenderBuffer(max_size=max_buffer_size) as output:
            if context["options"].toc:
                toc_html = render_pass(
                    text, context["extensions"], context["options"], RenderMode.TOC, engine, max_buffer_size
                )
                output.put(TOC_OPEN)
                output.put(toc_html)
                output.put(TOC_CLOSE)

            body_html = render_pass(
                text, context["extensions"], context["options"], RenderMode.BODY, engine, max_buffer_size
            )
            output.put(body_html)
            html = output.getvalue()

        # Terminal step: nothing may touch the HTML after the math is back
        guard = context.get("math_guard")
        if guard is not None:
            html = guard.restore(html)
        logger.debug("Rendered %d characters of Markdown to %d characters of HTML", len(text), len(html))
        return html
    finally:
        guard = context.pop("math_guard", None)
        if guard is not None:
            guard.clear()
