"""Value object for the persisted state of the whole store."""

from __future__ import annotations

from dataclasses import dataclass, field

from .card import Card
from .workbench import DEFAULT_WORKBENCH


@dataclass(frozen=True)
class StoreSnapshot:
    """All workbenches plus the current-workbench pointer."""

    workbenches: dict[str, tuple[Card, ...]] = field(
        default_factory=lambda: {DEFAULT_WORKBENCH: ()}
    )
    current_workbench: str = DEFAULT_WORKBENCH

    @property
    def card_count(self) -> int:
        return sum(len(cards) for cards in self.workbenches.values())
