# mathdown/templatetags/markdown_tags.py

from dataclasses import replace

from django import template
from django.utils.safestring import mark_safe

from mathdown.markdown import ExtensionSet, RenderOptions, markdown_to_html

register = template.Library()

# Dialect used by the template filters
TEMPLATE_EXTENSIONS = ExtensionSet(
    no_intra_emphasis=True,
    tables=True,
    fenced_code=True,
    autolink=True,
    strikethrough=True,
    lax_spacing=True,
    space_headers=True,
    superscript=True,
)


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(markdown_to_html(str(value), TEMPLATE_EXTENSIONS))


@register.filter(name="markdown_math")
def markdown_math_filter(value):
    """Render markdown leaving $...$ and $$...$$ math untouched for MathJax"""
    return mark_safe(markdown_to_html(str(value), replace(TEMPLATE_EXTENSIONS, ignore_math=True)))


@register.simple_tag
def markdown_with_options(value, **flags):
    """
    Template tag that passes render options through to the pipeline:

        {% markdown_with_options post.body toc=True smartypants=True %}
    """
    options = RenderOptions.from_mapping(flags)
    return mark_safe(markdown_to_html(str(value), TEMPLATE_EXTENSIONS, options))
