from .config import (
    MAX_NESTING,
    ExtensionSet,
    HtmlRenderFlag,
    MarkdownExtension,
    RenderMode,
    RenderOptions,
    extension_flags,
    render_flags,
)
from .engine import MarkdownEngine, PandocEngine
from .errors import AllocationError, MarkdownError
from .renderer import markdown_to_html, render_pass

__all__ = [
    "MAX_NESTING",
    "AllocationError",
    "ExtensionSet",
    "HtmlRenderFlag",
    "MarkdownEngine",
    "MarkdownError",
    "MarkdownExtension",
    "PandocEngine",
    "RenderMode",
    "RenderOptions",
    "extension_flags",
    "markdown_to_html",
    "render_flags",
    "render_pass",
]
