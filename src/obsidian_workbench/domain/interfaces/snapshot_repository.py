"""Interface for snapshot persistence operations."""

from abc import ABC, abstractmethod

from ..entities.snapshot import StoreSnapshot


class ISnapshotRepository(ABC):
    """Interface for persisting the whole workbench store.

    Implementations overwrite the full snapshot on every save; there is no
    incremental or append mode.
    """

    @abstractmethod
    def save(self, snapshot: StoreSnapshot) -> None:
        """Persist the snapshot, replacing any previous one.

        Raises:
            PersistenceError: The snapshot could not be written
        """
        pass

    @abstractmethod
    def load(self) -> StoreSnapshot | None:
        """Read the persisted snapshot.

        Returns:
            The snapshot, or None if nothing has been saved yet

        Raises:
            PersistenceError: The snapshot exists but cannot be read
        """
        pass
