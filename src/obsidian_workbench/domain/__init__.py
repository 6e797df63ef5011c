"""Domain layer for obsidian-workbench.

This package contains the domain entities and the interfaces the core
depends on, following Domain-Driven Design principles.
"""

from .entities import DEFAULT_WORKBENCH, Card, StoreSnapshot, Workbench
from .interfaces import IOutlineHost, ISnapshotRepository, Location

__all__ = [
    # Entities
    "DEFAULT_WORKBENCH",
    "Card",
    "StoreSnapshot",
    "Workbench",
    # Interfaces
    "IOutlineHost",
    "ISnapshotRepository",
    "Location",
]
