import enum
import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

# Maximum block/inline nesting depth handed to the engine for every pass.
MAX_NESTING = 16


class MarkdownExtension(enum.IntFlag):
    """Parser extension bits (sundown-compatible values)."""

    NONE = 0
    NO_INTRA_EMPHASIS = 1 << 0
    TABLES = 1 << 1
    FENCED_CODE = 1 << 2
    AUTOLINK = 1 << 3
    STRIKETHROUGH = 1 << 4
    SPACE_HEADERS = 1 << 6
    SUPERSCRIPT = 1 << 7
    LAX_SPACING = 1 << 8


class HtmlRenderFlag(enum.IntFlag):
    """Output-mode bits understood by the HTML renderer."""

    NONE = 0
    SKIP_HTML = 1 << 0
    SKIP_STYLE = 1 << 1
    SKIP_IMAGES = 1 << 2
    SKIP_LINKS = 1 << 3
    SAFELINK = 1 << 5
    TOC = 1 << 6
    HARD_WRAP = 1 << 7
    USE_XHTML = 1 << 8
    ESCAPE = 1 << 9


class RenderMode(enum.Enum):
    BODY = "body"
    TOC = "toc"


def _flag_key(name: str) -> str:
    return name.replace("_", "").lower()


class _FlagRecord:
    """Shared helpers for the boolean option records."""

    @classmethod
    def from_mapping(cls, mapping):
        """
        Build the record from a mapping of flag names to truthy values.

        Keys match regardless of case and underscores, so ``skip_html``,
        ``skipHTML`` and ``skipHtml`` are the same flag. Unknown keys are
        ignored, so flags this version does not know about stay disabled.
        """
        known = {_flag_key(field.name): field.name for field in fields(cls)}

        values = {}
        for key, value in mapping.items():
            name = known.get(_flag_key(key))
            if name is None:
                logger.debug("Ignoring unknown %s flag %r", cls.__name__, key)
                continue
            values[name] = bool(value)
        return cls(**values)

    def enabled(self):
        """Return the names of the flags that are switched on."""
        return [field.name for field in fields(self) if getattr(self, field.name)]


@dataclass(frozen=True)
class ExtensionSet(_FlagRecord):
    """Markdown dialect toggles. Every flag is independent and off by default."""

    no_intra_emphasis: bool = False
    tables: bool = False
    fenced_code: bool = False
    autolink: bool = False
    strikethrough: bool = False
    lax_spacing: bool = False
    space_headers: bool = False
    superscript: bool = False
    ignore_math: bool = False


@dataclass(frozen=True)
class RenderOptions(_FlagRecord):
    """Output-shaping toggles. Every flag is independent and off by default."""

    toc: bool = False
    smartypants: bool = False
    use_xhtml: bool = False
    hard_wrap: bool = False
    safelink: bool = False
    skip_html: bool = False
    skip_style: bool = False
    skip_images: bool = False
    skip_links: bool = False
    escape: bool = False


_EXTENSION_BITS = {
    "no_intra_emphasis": MarkdownExtension.NO_INTRA_EMPHASIS,
    "tables": MarkdownExtension.TABLES,
    "fenced_code": MarkdownExtension.FENCED_CODE,
    "autolink": MarkdownExtension.AUTOLINK,
    "strikethrough": MarkdownExtension.STRIKETHROUGH,
    "lax_spacing": MarkdownExtension.LAX_SPACING,
    "space_headers": MarkdownExtension.SPACE_HEADERS,
    "superscript": MarkdownExtension.SUPERSCRIPT,
}

_RENDER_BITS = {
    "use_xhtml": HtmlRenderFlag.USE_XHTML,
    "hard_wrap": HtmlRenderFlag.HARD_WRAP,
    "toc": HtmlRenderFlag.TOC,
    "safelink": HtmlRenderFlag.SAFELINK,
    "skip_html": HtmlRenderFlag.SKIP_HTML,
    "skip_style": HtmlRenderFlag.SKIP_STYLE,
    "skip_images": HtmlRenderFlag.SKIP_IMAGES,
    "skip_links": HtmlRenderFlag.SKIP_LINKS,
    "escape": HtmlRenderFlag.ESCAPE,
}


def extension_flags(extensions: ExtensionSet) -> MarkdownExtension:
    """Map an ExtensionSet onto the parser's extension bitmask."""
    bits = MarkdownExtension.NONE
    for name, bit in _EXTENSION_BITS.items():
        if getattr(extensions, name):
            bits |= bit
    return bits


def render_flags(options: RenderOptions, mode: RenderMode = RenderMode.BODY) -> HtmlRenderFlag:
    """
    Map RenderOptions onto the HTML renderer's bitmask.

    A TOC-mode pass always carries the TOC bit so its headings are numbered the
    same way as the body's.
    """
    bits = HtmlRenderFlag.TOC if mode is RenderMode.TOC else HtmlRenderFlag.NONE
    for name, bit in _RENDER_BITS.items():
        if getattr(options, name):
            bits |= bit
    return bits


# Pandoc reader extensions enabled by each parser bit.
PANDOC_EXTENSIONS = {
    MarkdownExtension.NO_INTRA_EMPHASIS: ["intraword_underscores"],
    MarkdownExtension.TABLES: ["pipe_tables"],
    MarkdownExtension.FENCED_CODE: ["fenced_code_blocks", "backtick_code_blocks"],
    MarkdownExtension.AUTOLINK: ["autolink_bare_uris"],
    MarkdownExtension.STRIKETHROUGH: ["strikeout"],
    MarkdownExtension.LAX_SPACING: ["lists_without_preceding_blankline"],
    MarkdownExtension.SPACE_HEADERS: ["space_in_atx_header"],
    MarkdownExtension.SUPERSCRIPT: ["superscript"],
}


def get_pandoc_config(extensions, flags):
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    The reader starts from ``markdown_strict`` (plain Markdown.pl syntax) and
    switches on one Pandoc extension per dialect bit, so every dialect feature
    is off unless requested. Math syntax is never enabled here: math regions
    are protected before the text reaches Pandoc.

    Args:
        extensions: MarkdownExtension bitmask
        flags: HtmlRenderFlag bitmask

    Returns:
        dict with the reader format, writer format and extra arguments
    """
    reader = ["markdown_strict"]
    for bit, names in PANDOC_EXTENSIONS.items():
        if extensions & bit:
            reader.extend(f"+{name}" for name in names)

    if flags & HtmlRenderFlag.HARD_WRAP:
        reader.append("+hard_line_breaks")
    if flags & HtmlRenderFlag.ESCAPE:
        # Raw HTML is read as literal text and escaped by the writer
        reader.append("-raw_html")

    return {
        "from": "".join(reader),
        "to": "html5",
        "extra_args": [
            # Keep every text run on one line so substrings survive intact
            "--wrap=none",
        ],
    }
