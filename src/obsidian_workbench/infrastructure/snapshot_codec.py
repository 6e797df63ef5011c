"""JSON snapshot persistence for the workbench store."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..domain.entities.card import Card, new_card_key
from ..domain.entities.snapshot import StoreSnapshot
from ..domain.entities.workbench import DEFAULT_WORKBENCH
from ..domain.interfaces.snapshot_repository import ISnapshotRepository
from ..error_codes import ErrorCode
from ..exceptions import PersistenceError
from ..utils.io import atomic_write
from ..utils.logging import get_logger

logger = get_logger(__name__)


class CardRecord(BaseModel):
    """Serialized form of a card."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = Field(default=None, description="Stable heading identifier")
    title: str = Field(min_length=1, description="Heading title")
    content: str = Field(default="", description="Heading body")
    level: int = Field(default=1, ge=1, description="Original heading depth")
    file: str | None = Field(default=None, description="Absolute path of source note")
    key: str | None = Field(default=None, description="Internal slot key")

    @classmethod
    def from_card(cls, card: Card) -> CardRecord:
        return cls(
            id=card.id,
            title=card.title,
            content=card.content,
            level=card.level,
            file=card.file,
            key=card.key,
        )

    def to_card(self) -> Card:
        return Card(
            title=self.title,
            content=self.content,
            level=self.level,
            id=self.id,
            file=self.file,
            key=self.key or new_card_key(),
        )


class SnapshotModel(BaseModel):
    """Serialized form of the whole store."""

    model_config = ConfigDict(extra="ignore")

    current_workbench: str = Field(default=DEFAULT_WORKBENCH)
    workbenches: dict[str, list[CardRecord]] = Field(
        default_factory=lambda: {DEFAULT_WORKBENCH: []}
    )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> SnapshotModel:
        return cls(
            current_workbench=snapshot.current_workbench,
            workbenches={
                name: [CardRecord.from_card(card) for card in cards]
                for name, cards in snapshot.workbenches.items()
            },
        )

    def to_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            workbenches={
                name: tuple(record.to_card() for record in records)
                for name, records in self.workbenches.items()
            },
            current_workbench=self.current_workbench,
        )


def encode_snapshot(snapshot: StoreSnapshot) -> str:
    """Serialize a snapshot to indented JSON, keeping workbench order."""
    return SnapshotModel.from_snapshot(snapshot).model_dump_json(indent=2) + "\n"


def decode_snapshot(payload: str) -> StoreSnapshot:
    """Parse JSON produced by ``encode_snapshot``.

    Raises:
        pydantic.ValidationError: Payload is not valid JSON or has bad fields
        ValueError: A record violates card invariants
    """
    return SnapshotModel.model_validate_json(payload).to_snapshot()


class SnapshotCodec(ISnapshotRepository):
    """Stores the snapshot as a single JSON file, overwritten on every save."""

    def __init__(self, path: Path):
        """Initialize the codec.

        Args:
            path: Snapshot file location
        """
        self.path = Path(path).expanduser()

    def save(self, snapshot: StoreSnapshot) -> None:
        payload = encode_snapshot(snapshot)
        try:
            with atomic_write(self.path) as f:
                f.write(payload)
        except OSError as e:
            raise PersistenceError(
                f"Could not write snapshot to {self.path}",
                suggestion="Check that the data directory exists and is writable",
                error_code=ErrorCode.PERSIST_SAVE_FAILED.value,
                context={"path": str(self.path)},
            ) from e
        logger.debug(
            "snapshot_saved",
            path=str(self.path),
            workbenches=len(snapshot.workbenches),
            cards=snapshot.card_count,
        )

    def load(self) -> StoreSnapshot | None:
        if not self.path.exists():
            logger.debug("snapshot_missing", path=str(self.path))
            return None
        try:
            snapshot = decode_snapshot(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(
                f"Could not read snapshot from {self.path}: {e}",
                suggestion="Fix or remove the snapshot file",
                error_code=ErrorCode.PERSIST_LOAD_FAILED.value,
                context={"path": str(self.path)},
            ) from e
        logger.debug(
            "snapshot_loaded",
            path=str(self.path),
            workbenches=len(snapshot.workbenches),
            cards=snapshot.card_count,
        )
        return snapshot
