"""
mathdown: Markdown to HTML with math protection, tables of contents and
smartypants typography.

    from mathdown import ExtensionSet, RenderOptions, render

    html = render(text, ExtensionSet(tables=True, ignore_math=True), RenderOptions(toc=True))
"""

import logging

from .markdown import (
    AllocationError,
    ExtensionSet,
    MarkdownEngine,
    MarkdownError,
    PandocEngine,
    RenderOptions,
    markdown_to_html,
)
from .utils import read_text_file, write_text_file

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "ExtensionSet",
    "MarkdownEngine",
    "MarkdownError",
    "PandocEngine",
    "RenderOptions",
    "markdown_to_html",
    "render",
    "render_file",
    "render_to_file",
]


def render(markdown_text, extensions=None, options=None, *, engine=None, max_buffer_size=None):
    """Render Markdown text to an HTML string."""
    return markdown_to_html(
        markdown_text,
        extensions=extensions,
        options=options,
        engine=engine,
        max_buffer_size=max_buffer_size,
    )


def render_file(markdown_path, extensions=None, options=None, **kwargs):
    """Render a UTF-8 Markdown file to an HTML string."""
    markdown_text = read_text_file(markdown_path)
    return render(markdown_text, extensions, options, **kwargs)


def render_to_file(markdown_path, extensions, options, html_path, **kwargs):
    """
    Render a Markdown file and write the HTML to ``html_path``.

    The output file is only written once rendering has fully succeeded, so a
    failed render never leaves a partial HTML file behind.
    """
    html = render_file(markdown_path, extensions, options, **kwargs)
    write_text_file(html_path, html)
    logger.debug("Wrote %s", html_path)
