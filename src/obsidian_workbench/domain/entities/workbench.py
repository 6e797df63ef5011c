"""Domain entity for workbenches."""

from __future__ import annotations

from dataclasses import dataclass, field

from .card import Card

DEFAULT_WORKBENCH = "default"


def normalize_name(name: str | None) -> str:
    """Strip surrounding whitespace from a workbench name."""
    return (name or "").strip()


@dataclass(frozen=True)
class Workbench:
    """A named, ordered collection of cards (display order, newest first)."""

    name: str
    cards: tuple[Card, ...] = field(default_factory=tuple)

    @property
    def identified_cards(self) -> list[Card]:
        """Cards that can be traced back to a source heading."""
        return [card for card in self.cards if card.has_identifier]

    def __len__(self) -> int:
        return len(self.cards)
