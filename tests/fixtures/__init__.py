"""Test fixtures package."""

from .mock_outline_host import MockOutlineHost
from .mock_snapshot_repository import MockSnapshotRepository

__all__ = [
    "MockOutlineHost",
    "MockSnapshotRepository",
]
