"""Interface for the outline-document host."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..entities.card import Card


@dataclass(frozen=True)
class Location:
    """A position inside a note: file path plus 1-based line number."""

    file: Path
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class IOutlineHost(ABC):
    """Interface for the editor/vault that owns the source headings.

    The workbench core never reads notes itself; it asks the host to extract
    cards, to resolve identifiers back to locations, and to stamp headings
    with identifiers.
    """

    @abstractmethod
    def extract_card_at(self, location: Location) -> Card:
        """Read the heading that contains ``location``.

        Args:
            location: Position inside a note

        Returns:
            Freshly extracted card (title, content, level, file, id)

        Raises:
            ExtractionError: No heading at or above the location
        """
        pass

    @abstractmethod
    def resolve_identifier(self, identifier: str) -> Location:
        """Find the heading carrying ``identifier``.

        Args:
            identifier: Stable identifier previously assigned to a heading

        Returns:
            Location of the heading line

        Raises:
            IdentifierNotFoundError: No heading carries the identifier
        """
        pass

    @abstractmethod
    def get_or_create_identifier(self, location: Location) -> str:
        """Return the heading's identifier, assigning one if it has none.

        Args:
            location: Position inside a note

        Returns:
            The heading's identifier

        Raises:
            ExtractionError: No heading at or above the location
        """
        pass
