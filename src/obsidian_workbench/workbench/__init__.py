"""Workbench core: store, add-card, sync, and presentation view-model."""

from .inserter import AddResult, add_card
from .presentation import (
    RenderedBlock,
    WorkbenchView,
    apply_removal,
    apply_reorder,
    keys_from_rendered,
    move_card,
    render_workbench,
)
from .store import WorkbenchStore
from .sync import SyncEngine, SyncOutcome, SyncReport, SyncStatus

__all__ = [
    "AddResult",
    "RenderedBlock",
    "SyncEngine",
    "SyncOutcome",
    "SyncReport",
    "SyncStatus",
    "WorkbenchStore",
    "WorkbenchView",
    "add_card",
    "apply_removal",
    "apply_reorder",
    "keys_from_rendered",
    "move_card",
    "render_workbench",
]
