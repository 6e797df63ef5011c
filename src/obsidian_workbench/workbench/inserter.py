"""Add-card operation with duplicate rejection."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities.card import Card
from ..utils.logging import get_logger
from .store import WorkbenchStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class AddResult:
    """Outcome of an add-card attempt."""

    workbench: str
    card: Card
    added: bool
    existing: Card | None = None


def find_duplicate(candidate: Card, cards: list[Card]) -> Card | None:
    """Return the first card that ``candidate`` duplicates, if any."""
    for card in cards:
        if candidate.is_duplicate_of(card):
            return card
    return None


def add_card(
    store: WorkbenchStore, candidate: Card, workbench: str | None = None
) -> AddResult:
    """Prepend ``candidate`` to a workbench unless it is already present.

    A candidate counts as present when an existing card has the same
    identifier or the same title.

    Args:
        store: The workbench store
        candidate: Freshly extracted card
        workbench: Target workbench (current workbench if None)

    Returns:
        AddResult describing whether the card was stored
    """
    cards = store.get_cards(workbench)
    name = workbench if workbench is not None else store.current_name

    existing = find_duplicate(candidate, cards)
    if existing is not None:
        logger.info(
            "card_already_present",
            workbench=name,
            title=candidate.title,
            card_id=candidate.id,
        )
        return AddResult(workbench=name, card=candidate, added=False, existing=existing)

    store.set_cards(name, [candidate, *cards])
    logger.info(
        "card_added",
        workbench=name,
        title=candidate.title,
        card_id=candidate.id,
        file=candidate.file,
    )
    return AddResult(workbench=name, card=candidate, added=True)
