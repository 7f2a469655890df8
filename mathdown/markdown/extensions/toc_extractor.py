from __future__ import annotations

from html import escape
from typing import TypedDict

from bs4 import BeautifulSoup, NavigableString, Tag
from django.utils.text import slugify


class HeadingNode(TypedDict):
    level: int
    id: str
    title: str
    title_html: str
    children: list["HeadingNode"]


def _node_html(node) -> str:
    if isinstance(node, NavigableString):
        return escape(str(node), quote=False)
    return str(node)


def _extract_heading_contents(heading: Tag) -> tuple[str, str]:
    """
    Return the plain text and inner HTML that should be displayed for a heading.

    The TOC entry is itself a link, so any anchors inside the heading are
    unwrapped and only their contents kept.
    """
    for anchor in heading.find_all("a"):
        anchor.unwrap()

    html = "".join(_node_html(child) for child in heading.contents).strip()
    text = " ".join(heading.get_text().split())
    return text, html or escape(text)


def extract_toc_from_html(html: str) -> list[HeadingNode]:
    """
    Given rendered HTML, return a hierarchical list of headings for a TOC.

    The resulting structure is a list of dictionaries. Each dictionary contains:
        - level: Heading level (1-6)
        - id: HTML id/slug for the heading
        - title: Plain-text version of the heading
        - title_html: HTML snippet preserving inline formatting
        - children: Nested list of child headings

    Headings appear in document order. A heading without an id falls back to a
    slug of its text.
    """
    soup = BeautifulSoup(html, "html.parser")
    toc: list[HeadingNode] = []
    stack: list[HeadingNode] = []
    for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        level = int(heading.name[1])  # "h2" -> 2
        text, html_contents = _extract_heading_contents(heading)
        if not text:
            continue

        identifier = heading.get("id") or slugify(text)

        node: HeadingNode = {
            "level": level,
            "id": identifier,
            "title": text,
            "title_html": html_contents,
            "children": [],
        }

        while stack and stack[-1]["level"] >= level:
            stack.pop()

        if stack:
            stack[-1]["children"].append(node)
        else:
            toc.append(node)

        stack.append(node)

    return toc


def render_toc_html(nodes: list[HeadingNode]) -> str:
    """
    Render the heading tree as nested ``<ul>`` lists of links.

    Returns an empty string when there are no headings.
    """
    if not nodes:
        return ""

    lines = ["<ul>"]
    for node in nodes:
        href = escape(f"#{node['id']}", quote=True)
        lines.append(f'<li><a href="{href}">{node["title_html"]}</a>')
        if node["children"]:
            lines.append(render_toc_html(node["children"]).rstrip("\n"))
        lines.append("</li>")
    lines.append("</ul>")
    return "\n".join(lines) + "\n"


def toc_from_html(html: str) -> str:
    """Extract the headings from ``html`` and render them as a TOC list."""
    return render_toc_html(extract_toc_from_html(html))
