# mathdown/markdown/preprocessors/__init__.py

from .math_guard import MathGuard, math_guard_default

PREPROCESSORS = [
    math_guard_default,  # Must run before the engine sees the text
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
