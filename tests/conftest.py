"""
Pytest configuration and fixtures.

Includes:
- ``pandoc`` fixture that skips a test when no pandoc binary is available.
- ``fake_engine`` fixture: a recording MarkdownEngine that needs no pandoc, for
  exercising the pipeline's ordering and error handling.
"""

import pypandoc
import pytest

from mathdown.markdown import MAX_NESTING, MarkdownEngine, RenderMode


def _pandoc_available() -> bool:
    try:
        pypandoc.get_pandoc_version()
    except OSError:
        return False
    return True


PANDOC_AVAILABLE = _pandoc_available()


@pytest.fixture
def pandoc():
    if not PANDOC_AVAILABLE:
        pytest.skip("pandoc is not installed")


class FakeEngine(MarkdownEngine):
    """Wraps the text in a paragraph and records every call."""

    toc_html = '<ul>\n<li><a href="#intro">"Intro"</a></li>\n</ul>\n'

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def render(self, text, extensions, flags, mode=RenderMode.BODY, max_nesting=MAX_NESTING):
        self.calls.append(
            {"text": text, "extensions": extensions, "flags": flags, "mode": mode, "max_nesting": max_nesting}
        )
        if self.error is not None:
            raise self.error
        if mode is RenderMode.TOC:
            return self.toc_html
        return f"<p>{text}</p>\n"


@pytest.fixture
def fake_engine():
    return FakeEngine()
