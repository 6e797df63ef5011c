"""Application service wiring the workbench core to the outline host."""

from __future__ import annotations

from collections.abc import Sequence

from ...config_settings import Config
from ...domain.entities.card import Card
from ...domain.interfaces.outline_host import IOutlineHost, Location
from ...exceptions import CardNotFoundError
from ...infrastructure.snapshot_codec import SnapshotCodec
from ...obsidian.host import VaultOutlineHost
from ...utils.logging import get_logger
from ...workbench.inserter import AddResult, add_card
from ...workbench.presentation import apply_removal, apply_reorder
from ...workbench.store import WorkbenchStore
from ...workbench.sync import SyncEngine, SyncOutcome, SyncReport

logger = get_logger(__name__)


class WorkbenchService:
    """Card operations addressed by location or by 1-based position.

    This is the boundary the CLI talks to; it never catches workbench
    errors itself, so callers can report them to the user.
    """

    def __init__(
        self,
        store: WorkbenchStore,
        host: IOutlineHost,
        *,
        assign_identifiers: bool = True,
    ):
        """Initialize the service.

        Args:
            store: Loaded workbench store
            host: Outline host used for extraction and identifiers
            assign_identifiers: Stamp an identifier on headings before adding
        """
        self.store = store
        self.host = host
        self.assign_identifiers = assign_identifiers
        self.sync_engine = SyncEngine(store, host)

    @classmethod
    def from_config(cls, config: Config) -> WorkbenchService:
        """Build a service with a loaded store for the configured vault."""
        store = WorkbenchStore(SnapshotCodec(config.get_snapshot_path())).load()
        host = VaultOutlineHost(config.vault_path, identifier_prefix=config.identifier_prefix)
        return cls(store, host, assign_identifiers=config.assign_identifiers)

    def card_at(self, position: int, workbench: str | None = None) -> Card:
        """Return the card at a 1-based position."""
        cards = self.store.get_cards(workbench)
        if not 1 <= position <= len(cards):
            name = workbench if workbench is not None else self.store.current_name
            raise CardNotFoundError(
                f"No card at position {position} in '{name}' ({len(cards)} cards)",
                context={"workbench": name, "position": position},
            )
        return cards[position - 1]

    def add_card_at(self, location: Location, workbench: str | None = None) -> AddResult:
        """Extract the heading at ``location`` and add it to a workbench."""
        # Fail on unknown workbenches before touching the note
        self.store.get_cards(workbench)
        if self.assign_identifiers:
            self.host.get_or_create_identifier(location)
        candidate = self.host.extract_card_at(location)
        return add_card(self.store, candidate, workbench)

    def remove_card(self, position: int, workbench: str | None = None) -> Card:
        return apply_removal(self.store, workbench, self.card_at(position, workbench))

    def sync_card(self, position: int, workbench: str | None = None) -> SyncOutcome:
        return self.sync_engine.sync_card(self.card_at(position, workbench), workbench)

    def sync_all(self, workbench: str | None = None) -> SyncReport:
        return self.sync_engine.sync_all(workbench)

    def reorder(self, positions: Sequence[int], workbench: str | None = None) -> list[Card]:
        """Reorder by 1-based positions; cards not listed are removed."""
        cards = [self.card_at(position, workbench) for position in positions]
        return apply_reorder(self.store, workbench, cards)

    def jump(self, identifier: str) -> Location:
        """Resolve an identifier to the location of its heading."""
        location = self.host.resolve_identifier(identifier)
        logger.debug("identifier_resolved", card_id=identifier, location=str(location))
        return location
