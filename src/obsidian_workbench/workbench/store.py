"""In-memory workbench store with write-through snapshot persistence."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..domain.entities.card import Card
from ..domain.entities.snapshot import StoreSnapshot
from ..domain.entities.workbench import DEFAULT_WORKBENCH, Workbench, normalize_name
from ..domain.interfaces.snapshot_repository import ISnapshotRepository
from ..exceptions import (
    CardNotFoundError,
    InvalidNameError,
    PersistenceError,
    ProtectedWorkbenchError,
    WorkbenchNotFoundError,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

StoreListener = Callable[[frozenset[str]], None]


class WorkbenchStore:
    """Owns every workbench and card for the session.

    The store is constructed once and handed to every operation. Each
    mutator builds the candidate state, writes it through the snapshot
    repository and only then swaps it into memory, so a failed write leaves
    the previous state intact. ``set_cards`` follows the same rule; callers
    never persist on their own.

    Listeners registered with ``add_listener`` are called after each
    successful commit with the names of the workbenches that changed.
    """

    def __init__(
        self,
        repository: ISnapshotRepository | None = None,
        snapshot: StoreSnapshot | None = None,
    ):
        """Initialize the store.

        Args:
            repository: Where snapshots are written; None keeps the store
                in memory only
            snapshot: Initial state; defaults to a lone empty "default"
        """
        self.repository = repository
        self._workbenches: dict[str, list[Card]] = {DEFAULT_WORKBENCH: []}
        self._current = DEFAULT_WORKBENCH
        self._listeners: list[StoreListener] = []
        if snapshot is not None:
            self._restore(snapshot)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> WorkbenchStore:
        """Replace in-memory state with the persisted snapshot.

        A missing snapshot leaves an empty store. An unreadable one is
        logged and also leaves an empty store with just "default".
        """
        self._workbenches = {DEFAULT_WORKBENCH: []}
        self._current = DEFAULT_WORKBENCH
        if self.repository is None:
            return self

        try:
            snapshot = self.repository.load()
        except PersistenceError as e:
            logger.warning("snapshot_load_failed", **e.context, error=e.message)
            return self

        if snapshot is not None:
            self._restore(snapshot)
        logger.debug(
            "store_loaded",
            workbenches=len(self._workbenches),
            current=self._current,
        )
        return self

    def flush(self) -> None:
        """Write the current state to the repository."""
        if self.repository is not None:
            self.repository.save(self.snapshot())

    def snapshot(self) -> StoreSnapshot:
        """Return an immutable copy of the whole store."""
        return StoreSnapshot(
            workbenches={name: tuple(cards) for name, cards in self._workbenches.items()},
            current_workbench=self._current,
        )

    def _restore(self, snapshot: StoreSnapshot) -> None:
        workbenches = {name: list(cards) for name, cards in snapshot.workbenches.items()}
        if DEFAULT_WORKBENCH not in workbenches:
            workbenches = {DEFAULT_WORKBENCH: [], **workbenches}
        current = snapshot.current_workbench
        if current not in workbenches:
            logger.warning("dangling_current_workbench", current=current)
            current = DEFAULT_WORKBENCH
        self._workbenches = workbenches
        self._current = current

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _commit(
        self,
        workbenches: dict[str, list[Card]],
        current: str,
        changed: Iterable[str],
    ) -> None:
        """Persist the candidate state, then make it the live state."""
        if self.repository is not None:
            self.repository.save(
                StoreSnapshot(
                    workbenches={name: tuple(cards) for name, cards in workbenches.items()},
                    current_workbench=current,
                )
            )
        self._workbenches = workbenches
        self._current = current

        names = frozenset(changed)
        for listener in list(self._listeners):
            listener(names)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_name(self) -> str:
        return self._current

    def names(self) -> list[str]:
        return list(self._workbenches)

    def __contains__(self, name: object) -> bool:
        return name in self._workbenches

    def _resolve(self, name: str | None) -> str:
        resolved = self._current if name is None else name
        if resolved not in self._workbenches:
            raise WorkbenchNotFoundError(
                f"No workbench named '{resolved}'",
                suggestion="Run 'obsidian-workbench list' to see workbenches",
                context={"workbench": resolved},
            )
        return resolved

    def workbench(self, name: str | None = None) -> Workbench:
        resolved = self._resolve(name)
        return Workbench(name=resolved, cards=tuple(self._workbenches[resolved]))

    def get_cards(self, name: str | None = None) -> list[Card]:
        """Return a copy of a workbench's cards (current workbench by default)."""
        return list(self._workbenches[self._resolve(name)])

    def index_of(self, name: str | None, key: str) -> int:
        resolved = self._resolve(name)
        for index, card in enumerate(self._workbenches[resolved]):
            if card.key == key:
                return index
        raise CardNotFoundError(
            f"Card is not in workbench '{resolved}'",
            context={"workbench": resolved, "key": key},
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_cards(self, name: str | None, cards: Iterable[Card]) -> None:
        """Replace a workbench's card list and persist."""
        resolved = self._resolve(name)
        workbenches = dict(self._workbenches)
        workbenches[resolved] = list(cards)
        self._commit(workbenches, self._current, [resolved])

    def replace_card(self, name: str | None, key: str, card: Card) -> int:
        """Swap the card in slot ``key`` for ``card``; returns its index."""
        resolved = self._resolve(name)
        index = self.index_of(resolved, key)
        cards = list(self._workbenches[resolved])
        cards[index] = card
        self.set_cards(resolved, cards)
        return index

    def remove_card(self, name: str | None, key: str) -> Card:
        resolved = self._resolve(name)
        index = self.index_of(resolved, key)
        cards = list(self._workbenches[resolved])
        removed = cards.pop(index)
        self.set_cards(resolved, cards)
        logger.info("card_removed", workbench=resolved, title=removed.title)
        return removed

    def create_workbench(self, name: str) -> None:
        name = normalize_name(name)
        if not name:
            raise InvalidNameError("Workbench name cannot be empty")
        if name in self._workbenches:
            raise InvalidNameError(
                f"Workbench '{name}' already exists",
                suggestion=f"Use 'switch {name}' to make it current",
                context={"workbench": name},
            )
        workbenches = dict(self._workbenches)
        workbenches[name] = []
        self._commit(workbenches, name, [name])
        logger.info("workbench_created", workbench=name)

    def switch_to(self, name: str) -> None:
        resolved = self._resolve(normalize_name(name))
        self._commit(dict(self._workbenches), resolved, [])
        logger.debug("workbench_switched", workbench=resolved)

    def rename_workbench(self, old_name: str, new_name: str) -> None:
        """Rename a workbench, keeping its cards and its place in the order.

        Renaming onto a different existing workbench is rejected rather
        than overwriting its cards.
        """
        old_name = self._resolve(normalize_name(old_name))
        new_name = normalize_name(new_name)
        if old_name == DEFAULT_WORKBENCH:
            raise ProtectedWorkbenchError(
                "The default workbench cannot be renamed",
                suggestion="Create a new workbench and move cards there instead",
            )
        if not new_name:
            raise InvalidNameError("Workbench name cannot be empty")
        if new_name == old_name:
            return
        if new_name in self._workbenches:
            raise InvalidNameError(
                f"Workbench '{new_name}' already exists",
                suggestion="Delete or rename the existing workbench first",
                context={"workbench": new_name},
            )

        workbenches = {
            (new_name if name == old_name else name): cards
            for name, cards in self._workbenches.items()
        }
        current = new_name if self._current == old_name else self._current
        self._commit(workbenches, current, [old_name, new_name])
        logger.info("workbench_renamed", old_name=old_name, workbench=new_name)

    def delete_workbench(self, name: str) -> None:
        name = normalize_name(name)
        if name == DEFAULT_WORKBENCH:
            raise ProtectedWorkbenchError(
                "The default workbench cannot be deleted",
                suggestion="Use 'clear default' to empty it instead",
            )
        resolved = self._resolve(name)
        workbenches = {k: v for k, v in self._workbenches.items() if k != resolved}
        current = DEFAULT_WORKBENCH if self._current == resolved else self._current
        self._commit(workbenches, current, [resolved])
        logger.info("workbench_deleted", workbench=resolved)

    def clear_workbench(self, name: str | None = None) -> None:
        resolved = self._resolve(name)
        self.set_cards(resolved, [])
        logger.info("workbench_cleared", workbench=resolved)
