# mathdown/markdown/postprocessors/typography_enhancer.py
"""
Postprocessor that applies smartypants-style typography to rendered HTML.

The pass's HTML is read back through Pandoc with its 'smart' extension, which
rewrites the punctuation in text:
- "double" and 'single' quotes become curly quotes, apostrophes become ’
- --- becomes an em dash, -- an en dash
- ... becomes an ellipsis

Code, preformatted text, attributes and raw HTML are left alone, and applying
the pass to its own output changes nothing.
"""

import logging

import pypandoc

from ..engine import normalize_void_elements
from ..errors import AllocationError

logger = logging.getLogger(__name__)

# HTML reader with smart punctuation; raw_html keeps comments and unknown tags,
# and headings keep exactly the ids they were rendered with
SMART_READER = "html+smart+raw_html-auto_identifiers"


def smartypants(html: str, xhtml: bool = False) -> str:
    """
    Apply typographic substitutions to the text of an HTML fragment.

    Args:
        html: Rendered HTML
        xhtml: Serialize void elements XHTML-style

    Returns:
        HTML with typographic punctuation

    Raises:
        AllocationError: Pandoc could not be run
    """
    if not html.strip():
        return html

    try:
        educated = pypandoc.convert_text(
            html,
            to="html5",
            format=SMART_READER,
            extra_args=["--wrap=none"],
        )
    except (OSError, RuntimeError) as exc:
        raise AllocationError(f"pandoc could not apply smartypants: {exc}", location="smartypants") from exc

    logger.debug("Applied smartypants to %d characters of HTML", len(html))
    return normalize_void_elements(educated.replace("\r\n", "\n"), xhtml=xhtml)


def typography_enhancer(html: str, context: dict) -> str:
    """
    Run smartypants over one pass's HTML when the ``smartypants`` option is on.

    Args:
        html: HTML string to process
        context: Context dictionary; reads ``options``

    Returns:
        Processed HTML
    """
    options = context.get("options")
    if options is None or not options.smartypants:
        return html
    return smartypants(html, xhtml=options.use_xhtml)


def typography_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for typography_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return typography_enhancer(html, context)
