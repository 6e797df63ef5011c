"""Markdown heading outline parsing for Obsidian notes."""

from __future__ import annotations

import re
from dataclasses import dataclass

HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)[ \t]*$")
BLOCK_ID_RE = re.compile(r"(?:^|[ \t]+)\^([A-Za-z0-9-]+)$")
CLOSING_HASHES_RE = re.compile(r"[ \t]+#+$")
FENCE_RE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
FRONTMATTER_DELIM = "---"


@dataclass(frozen=True)
class Heading:
    """A heading line and the extent of its section.

    ``line`` and ``end_line`` are 1-based and inclusive; the section runs
    until the next heading of the same or a shallower level.
    """

    title: str
    level: int
    line: int
    end_line: int
    block_id: str | None = None


def split_heading_text(text: str) -> tuple[str, str | None]:
    """Split raw heading text into its title and trailing block id.

    The block id may sit on either side of a closing hash sequence
    (``Intro ^id ##`` or ``Intro ## ^id``).
    """
    text = CLOSING_HASHES_RE.sub("", text.strip())
    block_id = None
    match = BLOCK_ID_RE.search(text)
    if match:
        block_id = match.group(1)
        text = text[: match.start()]
    return CLOSING_HASHES_RE.sub("", text.strip()).strip(), block_id


def _frontmatter_end(lines: list[str]) -> int:
    """Return the number of leading lines taken by YAML frontmatter."""
    if not lines or lines[0].strip() != FRONTMATTER_DELIM:
        return 0
    for index in range(1, len(lines)):
        if lines[index].strip() in (FRONTMATTER_DELIM, "..."):
            return index + 1
    return 0


def parse_headings(text: str) -> list[Heading]:
    """Parse ATX headings, skipping frontmatter and fenced code blocks."""
    lines = text.splitlines()
    found: list[tuple[int, int, str, str | None]] = []
    fence: str | None = None

    for index in range(_frontmatter_end(lines), len(lines)):
        line = lines[index]
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue

        match = HEADING_RE.match(line)
        if not match:
            continue
        title, block_id = split_heading_text(match.group(2))
        if not title:
            continue
        found.append((index + 1, len(match.group(1)), title, block_id))

    headings: list[Heading] = []
    for position, (line_no, level, title, block_id) in enumerate(found):
        end_line = len(lines)
        for next_line, next_level, _, _ in found[position + 1 :]:
            if next_level <= level:
                end_line = next_line - 1
                break
        headings.append(
            Heading(title=title, level=level, line=line_no, end_line=end_line, block_id=block_id)
        )
    return headings


def section_at(headings: list[Heading], line: int) -> Heading | None:
    """Return the heading whose line is the nearest at or above ``line``."""
    current = None
    for heading in headings:
        if heading.line > line:
            break
        current = heading
    return current


def find_by_block_id(headings: list[Heading], block_id: str) -> Heading | None:
    for heading in headings:
        if heading.block_id == block_id:
            return heading
    return None


def section_body(text: str, heading: Heading, headings: list[Heading]) -> str:
    """Return a section's body.

    Nested heading lines are dropped but their bodies are kept. Surrounding
    blank lines are trimmed.
    """
    lines = text.splitlines()
    nested = {
        h.line for h in headings if heading.line < h.line <= heading.end_line
    }
    body = [
        lines[index - 1]
        for index in range(heading.line + 1, heading.end_line + 1)
        if index not in nested
    ]
    while body and not body[0].strip():
        body.pop(0)
    while body and not body[-1].strip():
        body.pop()
    return "\n".join(body)
