"""Infrastructure layer: persistence adapters."""

from .snapshot_codec import CardRecord, SnapshotCodec, SnapshotModel

__all__ = ["CardRecord", "SnapshotCodec", "SnapshotModel"]
