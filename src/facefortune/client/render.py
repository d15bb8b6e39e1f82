"""Rendering of reading text for display, speech and copying."""

from __future__ import annotations

import html
import re

_HEADING = re.compile(r"^(#{2,3})\s+(.*)$")
_MARKDOWN_MARKERS = re.compile(r"\*\*|__|`")


def render_result_html(result: str) -> str:
    """Turn ``##``/``###`` heading lines into h2/h3 and the rest into text.

    Everything else is HTML-escaped; line breaks become ``<br/>``.
    """
    parts: list[str] = []
    for line in result.splitlines():
        match = _HEADING.match(line.strip())
        if match:
            tag = "h2" if len(match.group(1)) == 2 else "h3"
            parts.append(f"<{tag}>{html.escape(match.group(2))}</{tag}>")
        else:
            parts.append(html.escape(line) + "<br/>")
    return "".join(parts)


def plain_text(result: str) -> str:
    """Strip Markdown markers so the text reads well aloud or when pasted."""
    lines: list[str] = []
    for line in result.splitlines():
        stripped = line.strip()
        match = _HEADING.match(stripped)
        if match:
            stripped = match.group(2)
        elif stripped.startswith("- "):
            stripped = stripped[2:]
        lines.append(_MARKDOWN_MARKERS.sub("", stripped))
    return "\n".join(lines).strip()


def share_text(result: str, *, date: str | None = None) -> str:
    """Text placed on the clipboard when a reading is shared."""
    header = "🔮 AI 관상 분석 결과"
    if date:
        header = f"{header} ({date})"
    return f"{header}\n\n{plain_text(result)}"
