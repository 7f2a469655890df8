# mathdown/markdown/postprocessors/__init__.py

from .typography_enhancer import smartypants, typography_enhancer_default

# Run once per pass, on that pass's finished HTML
POSTPROCESSORS = [
    typography_enhancer_default,  # Smart quotes, dashes, ellipses (smartypants option)
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
