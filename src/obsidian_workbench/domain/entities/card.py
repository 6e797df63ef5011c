"""Domain entity for workbench cards."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace


def new_card_key() -> str:
    """Generate an internal slot key for a card."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Card:
    """Snapshot of a heading pulled out of a note.

    Cards are immutable; the sync engine swaps in a whole new record via
    ``replaced_by`` which keeps the slot ``key`` so list position and view
    handles stay valid.
    """

    title: str
    content: str = ""
    level: int = 1
    id: str | None = None
    file: str | None = None
    key: str = field(default_factory=new_card_key)

    def __post_init__(self) -> None:
        """Validate entity invariants."""
        if not self.title or not self.title.strip():
            raise ValueError("Card title cannot be empty")
        if self.level < 1:
            raise ValueError("Card level must be >= 1")
        if not self.key:
            raise ValueError("Card key cannot be empty")

    @property
    def has_identifier(self) -> bool:
        return bool(self.id)

    def is_duplicate_of(self, other: Card) -> bool:
        """Check whether two cards describe the same heading.

        Matching identifiers win, but equal titles alone are also treated as
        a duplicate.
        """
        if self.id and other.id and self.id == other.id:
            return True
        return self.title == other.title

    def replaced_by(self, fresh: Card) -> Card:
        """Return ``fresh`` re-keyed into this card's slot.

        The identifier is carried over when the fresh extraction has none.
        """
        return replace(fresh, key=self.key, id=fresh.id or self.id)
