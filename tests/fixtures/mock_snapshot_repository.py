"""Mock implementation of ISnapshotRepository for testing."""

from obsidian_workbench.domain.entities.snapshot import StoreSnapshot
from obsidian_workbench.domain.interfaces.snapshot_repository import (
    ISnapshotRepository,
)
from obsidian_workbench.exceptions import PersistenceError


class MockSnapshotRepository(ISnapshotRepository):
    """In-memory snapshot storage that records every save.

    Set ``fail_on_save`` or ``fail_on_load`` to simulate disk errors.
    """

    def __init__(self, snapshot: StoreSnapshot | None = None):
        """Initialize mock repository."""
        self.snapshot = snapshot
        self.saves: list[StoreSnapshot] = []
        self.fail_on_save = False
        self.fail_on_load = False

    @property
    def save_count(self) -> int:
        return len(self.saves)

    def save(self, snapshot: StoreSnapshot) -> None:
        if self.fail_on_save:
            raise PersistenceError("disk full", context={"path": "memory"})
        self.saves.append(snapshot)
        self.snapshot = snapshot

    def load(self) -> StoreSnapshot | None:
        if self.fail_on_load:
            raise PersistenceError("corrupt snapshot", context={"path": "memory"})
        return self.snapshot
