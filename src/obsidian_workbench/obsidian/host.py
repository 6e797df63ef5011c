"""Outline host backed by Markdown notes in an Obsidian vault.

Identifiers are Obsidian block ids written at the end of the heading line,
e.g. ``## Intro ^wb-3f9c0a1b2c4d``.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from pathlib import Path

from ..domain.entities.card import Card
from ..domain.interfaces.outline_host import IOutlineHost, Location
from ..error_codes import ErrorCode
from ..exceptions import ExtractionError, IdentifierNotFoundError
from ..utils.io import atomic_write
from ..utils.logging import get_logger
from .outline import Heading, find_by_block_id, parse_headings, section_at, section_body

logger = get_logger(__name__)

NOTE_SUFFIX = ".md"


class VaultOutlineHost(IOutlineHost):
    """Reads and stamps headings in a vault's Markdown notes."""

    def __init__(self, vault_path: Path, identifier_prefix: str = "wb"):
        """Initialize the host.

        Args:
            vault_path: Root of the Obsidian vault
            identifier_prefix: Prefix for newly assigned block ids
        """
        self.vault_path = Path(vault_path).expanduser().resolve()
        self.identifier_prefix = identifier_prefix
        self._id_cache: dict[str, Path] = {}

    def _note_path(self, file: Path) -> Path:
        path = Path(file).expanduser()
        if not path.is_absolute():
            path = self.vault_path / path
        return path.resolve()

    def _read(self, path: Path) -> str:
        # newline="" keeps CRLF notes intact when a heading is rewritten
        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(
                f"Cannot read note {path}",
                error_code=ErrorCode.EXTRACT_UNREADABLE.value,
                context={"file": str(path)},
            ) from e

    def _heading_at(self, location: Location) -> tuple[Path, str, list[Heading], Heading]:
        path = self._note_path(location.file)
        text = self._read(path)
        headings = parse_headings(text)
        heading = section_at(headings, location.line)
        if heading is None:
            raise ExtractionError(
                f"No heading at {path}:{location.line}",
                suggestion="Point at a heading line or a line inside its section",
                context={"file": str(path), "line": location.line},
            )
        return path, text, headings, heading

    def iter_notes(self) -> Iterator[Path]:
        """Yield every note in the vault, skipping dot-directories."""
        for path in sorted(self.vault_path.rglob(f"*{NOTE_SUFFIX}")):
            relative = path.relative_to(self.vault_path)
            if any(part.startswith(".") for part in relative.parts):
                continue
            yield path

    def extract_card_at(self, location: Location) -> Card:
        path, text, headings, heading = self._heading_at(location)
        if heading.block_id:
            self._id_cache[heading.block_id] = path
        return Card(
            title=heading.title,
            content=section_body(text, heading, headings),
            level=heading.level,
            id=heading.block_id,
            file=str(path),
        )

    def new_identifier(self) -> str:
        return f"{self.identifier_prefix}-{uuid.uuid4().hex[:12]}"

    def get_or_create_identifier(self, location: Location) -> str:
        path, text, _, heading = self._heading_at(location)
        if heading.block_id:
            self._id_cache[heading.block_id] = path
            return heading.block_id

        identifier = self.new_identifier()
        lines = text.splitlines(keepends=True)
        raw = lines[heading.line - 1]
        ending = raw[len(raw.rstrip("\r\n")) :]
        lines[heading.line - 1] = f"{raw.rstrip()} ^{identifier}{ending}"
        with atomic_write(path, newline="") as f:
            f.write("".join(lines))

        self._id_cache[identifier] = path
        logger.info(
            "identifier_assigned",
            file=str(path),
            line=heading.line,
            title=heading.title,
            card_id=identifier,
        )
        return identifier

    def _find_in(self, path: Path, identifier: str) -> Location | None:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("note_unreadable", file=str(path), error=str(e))
            return None
        heading = find_by_block_id(parse_headings(text), identifier)
        if heading is None:
            return None
        return Location(file=path, line=heading.line)

    def resolve_identifier(self, identifier: str) -> Location:
        cached = self._id_cache.get(identifier)
        if cached is not None:
            location = self._find_in(cached, identifier)
            if location is not None:
                return location
            del self._id_cache[identifier]

        for path in self.iter_notes():
            location = self._find_in(path, identifier)
            if location is not None:
                self._id_cache[identifier] = path
                return location

        raise IdentifierNotFoundError(
            f"No heading carries identifier '{identifier}'",
            suggestion="The heading may have been deleted or its block id removed",
            context={"card_id": identifier, "vault": str(self.vault_path)},
        )
