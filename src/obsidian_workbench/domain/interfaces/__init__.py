"""Domain interfaces package."""

from .outline_host import IOutlineHost, Location
from .snapshot_repository import ISnapshotRepository

__all__ = ["IOutlineHost", "ISnapshotRepository", "Location"]
