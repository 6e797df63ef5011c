"""Re-sync stored cards from their source headings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..domain.entities.card import Card
from ..domain.interfaces.outline_host import IOutlineHost
from ..exceptions import ExtractionError, IdentifierNotFoundError
from ..utils.logging import get_logger
from .store import WorkbenchStore

logger = get_logger(__name__)


class SyncStatus(str, Enum):
    """Result category for a single-card sync."""

    SYNCED = "synced"
    NO_IDENTIFIER = "no_identifier"
    NOT_FOUND = "not_found"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass(frozen=True)
class SyncOutcome:
    """Outcome of syncing one card."""

    card: Card
    status: SyncStatus
    fresh: Card | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is SyncStatus.SYNCED


@dataclass
class SyncReport:
    """Outcome of syncing a whole workbench.

    ``total`` counts every card in the workbench, including cards without
    an identifier that were never attempted.
    """

    workbench: str
    synced: int = 0
    total: int = 0
    outcomes: list[SyncOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[SyncOutcome]:
        return [
            o
            for o in self.outcomes
            if not o.succeeded and o.status is not SyncStatus.NO_IDENTIFIER
        ]

    def as_tuple(self) -> tuple[int, int]:
        return self.synced, self.total


class SyncEngine:
    """Refreshes cards by re-reading their source heading through the host.

    Replacement targets the card's slot key, so a synced card keeps its
    position and every other card is left where it was.
    """

    def __init__(self, store: WorkbenchStore, host: IOutlineHost):
        self.store = store
        self.host = host

    def _refresh(self, card: Card) -> SyncOutcome:
        """Re-extract ``card`` from its source without touching the store."""
        if not card.id:
            return SyncOutcome(card=card, status=SyncStatus.NO_IDENTIFIER)

        try:
            location = self.host.resolve_identifier(card.id)
        except IdentifierNotFoundError as e:
            logger.warning("card_sync_failed", title=card.title, card_id=card.id, error=e.message)
            return SyncOutcome(card=card, status=SyncStatus.NOT_FOUND, error=e.message)

        try:
            fresh = self.host.extract_card_at(location)
        except ExtractionError as e:
            logger.warning(
                "card_sync_failed",
                title=card.title,
                card_id=card.id,
                location=str(location),
                error=e.message,
            )
            return SyncOutcome(
                card=card, status=SyncStatus.EXTRACTION_FAILED, error=e.message
            )

        if not fresh.content.strip():
            error = f"Heading at {location} has no content"
            logger.warning("card_sync_failed", title=card.title, card_id=card.id, error=error)
            return SyncOutcome(card=card, status=SyncStatus.EXTRACTION_FAILED, error=error)

        return SyncOutcome(card=card, status=SyncStatus.SYNCED, fresh=card.replaced_by(fresh))

    def sync_card(self, card: Card, workbench: str | None = None) -> SyncOutcome:
        """Sync one card in place.

        Failures are reported in the outcome and leave the stored card as it
        was.

        Raises:
            WorkbenchNotFoundError: Unknown workbench
            CardNotFoundError: The card is no longer in the workbench
        """
        name = workbench if workbench is not None else self.store.current_name
        self.store.index_of(name, card.key)

        outcome = self._refresh(card)
        if outcome.fresh is not None:
            index = self.store.replace_card(name, card.key, outcome.fresh)
            logger.info("card_synced", workbench=name, title=outcome.fresh.title, index=index)
        return outcome

    def sync_all(self, workbench: str | None = None) -> SyncReport:
        """Sync every identified card in a workbench and persist once."""
        bench = self.store.workbench(workbench)
        name = bench.name
        report = SyncReport(workbench=name, total=len(bench))

        fresh_by_key: dict[str, Card] = {}
        for card in bench.identified_cards:
            outcome = self._refresh(card)
            report.outcomes.append(outcome)
            if outcome.fresh is not None:
                fresh_by_key[card.key] = outcome.fresh
        report.synced = len(fresh_by_key)

        cards = list(bench.cards)
        refreshed = [fresh_by_key.get(card.key, card) for card in cards]
        if refreshed != cards:
            self.store.set_cards(name, refreshed)
        logger.info(
            "sync_completed",
            workbench=name,
            synced=report.synced,
            total=report.total,
            failed=len(report.failures),
        )
        return report
