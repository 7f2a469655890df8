# mathdown/markdown/preprocessors/math_guard.py
"""
Preprocessor that shields math expressions from the Markdown parser.

Converts:
    $$\\sum_i x_i$$      → 3f2b...9c   (block math, may span lines)
    $a_1 * b_2$        → 8e41...07   (inline math)

and, once the HTML is final, puts the original text back in place of every
token. Tokens are plain hex strings so neither Markdown nor the typography pass
has anything to reinterpret in them.
"""

import logging
import re
import uuid

from ..errors import AllocationError

logger = logging.getLogger(__name__)

# Greedy: spans from the first $$ to the last $$, newlines included
BLOCK_MATH_PATTERN = re.compile(r"\${2}[\s\S]+\${2}")

# $X...Y$ where X and Y are non-whitespace and the run between them has no newline.
# "$5 and $10" does not match: the character before the closing $ is a space.
INLINE_MATH_PATTERN = re.compile(r"\$\S[^\n]+\S\$")

MATH_PATTERNS = (BLOCK_MATH_PATTERN, INLINE_MATH_PATTERN)


def generate_token() -> str:
    """Return a fresh 128-bit random token."""
    try:
        return uuid.uuid4().hex
    except NotImplementedError as exc:
        # os.urandom has no entropy source on this platform
        raise AllocationError("cannot generate math placeholder token", location="generate_token") from exc


class MathGuard:
    """
    Replace math regions with placeholder tokens and restore them later.

    The token table lives only as long as the guard; leaving the ``with`` block
    discards it on every exit path::

        with MathGuard() as guard:
            text = guard.protect(text)
            html = render(text)
            html = guard.restore(html)
    """

    def __init__(self, patterns=MATH_PATTERNS):
        self.patterns = patterns
        self.math_blocks = {}

    def protect(self, text: str) -> str:
        # Each pattern scans the output of the previous substitution
        for pattern in self.patterns:
            text = pattern.sub(self._substitute, text)
        if self.math_blocks:
            logger.debug("Protected %d math block(s)", len(self.math_blocks))
        return text

    def _substitute(self, match) -> str:
        token = generate_token()
        self.math_blocks[token] = match.group(0)
        return token

    def restore(self, html: str) -> str:
        """Put the original math text back for every token found in ``html``."""
        # Newest first: an inline match may have swallowed an earlier block token
        for token, original in reversed(list(self.math_blocks.items())):
            if token not in html:
                logger.warning("Math block %r was lost during rendering", original[:40])
                continue
            html = html.replace(token, original)
        return html

    def clear(self) -> None:
        self.math_blocks.clear()

    def __len__(self):
        return len(self.math_blocks)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()


def math_guard_default(text: str, context: dict) -> str:
    """
    Default configuration for the math guard.

    Only runs when the ``ignore_math`` extension is enabled; the guard is stored
    in ``context["math_guard"]`` so the pipeline can restore the blocks.
    """
    extensions = context.get("extensions")
    if extensions is None or not extensions.ignore_math:
        return text

    guard = context.get("math_guard")
    if guard is None:
        guard = context["math_guard"] = MathGuard()
    return guard.protect(text)
