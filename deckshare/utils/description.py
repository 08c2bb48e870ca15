import re

_BLANK_LINES = re.compile(r"\n\n+")
_BLOCK_MARKERS = ("<p>", "<div>")


def has_block_markup(text: str) -> bool:
    return any(marker in text for marker in _BLOCK_MARKERS)


def format_description(description: str | None) -> str | None:
    """Turn a plain-text description into paragraph markup.

    Paragraphs are separated by blank lines, lines inside a paragraph are
    trimmed and joined with ``<br />``. Text that already carries block
    markup is returned untouched, so formatting twice is a no-op.
    """
    if not description or has_block_markup(description):
        return description

    paragraphs = []
    for section in _BLANK_LINES.split(description):
        lines = [line.strip() for line in section.split("\n")]
        paragraphs.append("<br />".join(line for line in lines if line))
    return "\n\n".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)
