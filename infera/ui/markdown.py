"""Markdown to HTML conversion for chat bubbles.

Fenced code blocks are split out first so the page can render each one with
its own copy button; everything else goes through ``markdown_to_html``.
"""

import re
from dataclasses import dataclass

CODE_FENCE = re.compile(r"```(?:([\w+-]*)[^\n`]*\n)?([\s\S]*?)```")
LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
SAFE_LINK = re.compile(r"(?:https?://|mailto:)", re.IGNORECASE)


@dataclass(frozen=True)
class Segment:
    """A run of message text: prose or one fenced code block."""

    text: str
    is_code: bool = False
    language: str = ""


def split_code_blocks(text: str) -> list[Segment]:
    """Split message text into prose and code segments, in order.

    A fence that is never closed is left in the prose untouched. Code
    content loses its single trailing newline.
    """
    segments: list[Segment] = []
    position = 0
    for match in CODE_FENCE.finditer(text):
        if match.start() > position:
            segments.append(Segment(text[position : match.start()]))
        code = match.group(2)
        if code.endswith("\n"):
            code = code[:-1]
        segments.append(Segment(code, is_code=True, language=match.group(1) or ""))
        position = match.end()
    if position < len(text):
        segments.append(Segment(text[position:]))
    return [s for s in segments if s.is_code or s.text.strip()]


def escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _render_link(match: re.Match) -> str:
    label, url = match.group(1), match.group(2)
    if not SAFE_LINK.match(url):
        return label
    return f'<a href="{url}" class="text-indigo-300 underline" target="_blank">{label}</a>'


def _render_lists(text: str, marker: str, tag: str, css: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{css}">')
                in_list = True
            item = re.sub(marker, "", stripped)
            result.append(f"<li>{item}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: headings, bold, italic, inline code, links, lists.
    Fenced code is expected to have been removed with ``split_code_blocks``.
    """
    # Escape HTML entities first
    text = escape_html(text)

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-600 text-gray-200 px-1 py-0.5 rounded">\1</code>',
        text,
    )

    # Headings (# to ###)
    text = re.sub(r"(?m)^###\s+(.+)$", r'<h4 class="font-semibold">\1</h4>', text)
    text = re.sub(r"(?m)^##\s+(.+)$", r'<h3 class="font-semibold text-lg">\1</h3>', text)
    text = re.sub(r"(?m)^#\s+(.+)$", r'<h2 class="font-bold text-xl">\1</h2>', text)

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Unordered lists before italics so "* item" is not read as emphasis
    text = _render_lists(text, r"^[-*]\s+", "ul", "list-disc list-inside my-2 space-y-1")
    text = _render_lists(text, r"^\d+\.\s+", "ol", "list-decimal list-inside my-2 space-y-1")

    # Italic (*text* or _text_)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    # Links [text](url), only for http, https and mailto
    text = LINK.sub(_render_link, text)

    # Line breaks, except right after block elements
    text = text.strip("\n")
    text = re.sub(r"(</?(?:ul|ol|li|h2|h3|h4)[^>]*>)\n", r"\1", text)
    return text.replace("\n", "<br>")


def code_block_key(message_id: int, index: int) -> str:
    """Key for a code block's copy-confirmation flag."""
    return f"{message_id}-{index}"
