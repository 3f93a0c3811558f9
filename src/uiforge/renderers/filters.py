"""Filters applied to report content before and after rendering.

- to_plain_text: Strips markdown markup for the plain output format
- escape_html_context: HTML-escapes every string in a report context
- collapse_blank_lines: Normalizes vertical whitespace
"""

import re
from collections.abc import Mapping
from typing import Any

from markupsafe import escape

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*$")
_TABLE_RULE_RE = re.compile(r"^\|?(\s*:?-{3,}:?\s*\|)+\s*:?-*:?\s*\|?$")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"(?<![\w*])[_*](?![\s_*])(.+?)(?<![\s_*])[_*](?![\w*])")
_CODE_RE = re.compile(r"`([^`]*)`")
_FENCE_RE = re.compile(r"^```")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines to a single blank line."""
    return re.sub(r"\n{3,}", "\n\n", text)


def _strip_inline(text: str) -> str:
    text = _LINK_RE.sub(r"\1 (\2)", text)
    text = _BOLD_RE.sub(r"\1", text)
    text = _CODE_RE.sub(r"\1", text)
    return _ITALIC_RE.sub(r"\1", text)


def to_plain_text(markdown: str) -> str:
    """Convert rendered markdown to plain text.

    Headings become underlined titles, table rows become space-separated
    columns and inline markup (bold, italics, code, links) is removed.

    Args:
        markdown: Rendered markdown

    Returns:
        Plain text with the same line structure

    Examples:
        >>> to_plain_text("# Health Report")
        'Health Report\\n=============\\n'
        >>> to_plain_text("- **Security**: 90/100")
        '- Security: 90/100\\n'
    """
    lines: list[str] = []
    for line in markdown.split("\n"):
        stripped = line.strip()

        if _FENCE_RE.match(stripped) or _TABLE_RULE_RE.match(stripped):
            continue

        heading = _HEADING_RE.match(stripped)
        if heading:
            text = _strip_inline(heading.group(2))
            level = len(heading.group(1))
            lines.append(text)
            if level == 1:
                lines.append("=" * len(text))
            elif level == 2:
                lines.append("-" * len(text))
            continue

        if stripped.startswith("|") and stripped.endswith("|"):
            cells = [_strip_inline(cell.strip()) for cell in stripped.strip("|").split("|")]
            lines.append("  ".join(cells))
            continue

        lines.append(_strip_inline(line))

    return collapse_blank_lines("\n".join(lines)).strip() + "\n"


def escape_html_context(value: Any) -> Any:
    """Return a copy of a context with every string HTML-escaped.

    Mappings and lists are copied recursively; numbers, booleans and None
    pass through unchanged.
    """
    if isinstance(value, str):
        return str(escape(value))
    if isinstance(value, Mapping):
        return {key: escape_html_context(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [escape_html_context(item) for item in value]
    return value
