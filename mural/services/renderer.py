"""
Markdown rendering and HTML sanitization for user content.

Everything is escaped first and formatting is applied afterwards, so no tag,
attribute or event handler typed by an author survives. Only the small
markdown subset below produces markup:

  **bold**        → <strong>bold</strong>
  *italic*        → <em>italic</em>
  `code`          → <code>code</code>
  [text](url)     → <a href="url">text</a>   (http/https only)
  blank line      → paragraph break
  newline         → <br>
"""

from __future__ import annotations

import re
from html import escape as _html_escape
from html import unescape as _html_unescape

_LINK_RE = re.compile(r"\[([^\]]+)\]\((https?://[^\s\)&]+(?:&amp;[^\s\)&]+)*)\)")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_CODE_RE = re.compile(r"`([^`]+)`")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_TAG_RE = re.compile(r"<[^>]*>")
_BREAK_RE = re.compile(r"<br>|</p>\n<p>")


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


def sanitize(text: str | None) -> str:
    """Trim and escape plain text (titles). Returns "" for None."""
    if text is None:
        return ""
    return escape(str(text).strip())


def _render_inline(text: str) -> str:
    """Apply inline markdown formatting to already-escaped text."""
    text = _CODE_RE.sub(r"<code>\1</code>", text)
    text = _LINK_RE.sub(r'<a href="\2" rel="noopener noreferrer">\1</a>', text)
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_RE.sub(r"<em>\1</em>", text)
    return text


def render(markdown: str | None) -> str:
    """
    Render author markdown to safe HTML.

    Returns "" when the input is empty or whitespace, which callers treat as
    a missing field.
    """
    if markdown is None:
        return ""
    source = str(markdown).replace("\r\n", "\n").strip()
    if not source:
        return ""

    paragraphs = []
    for block in _PARAGRAPH_SPLIT_RE.split(source):
        lines = [_render_inline(escape(line.strip())) for line in block.split("\n")]
        paragraphs.append("<p>" + "<br>".join(lines) + "</p>")
    return "\n".join(paragraphs)


def to_plain_text(html: str) -> str:
    """
    Reduce rendered or escaped content back to the text the author typed.

    Line and paragraph breaks become newlines, remaining tags are dropped and
    entities are decoded, so "Tom &amp; Jerry" reads "Tom & Jerry" again.
    """
    text = _BREAK_RE.sub("\n", str(html))
    text = _TAG_RE.sub("", text)
    return _html_unescape(text)
