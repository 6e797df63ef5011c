"""Obsidian vault adapters: heading outline parsing and the outline host."""

from .host import VaultOutlineHost
from .outline import Heading, parse_headings, section_at, section_body

__all__ = ["Heading", "VaultOutlineHost", "parse_headings", "section_at", "section_body"]
