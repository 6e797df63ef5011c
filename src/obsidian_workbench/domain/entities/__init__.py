"""Domain entities package."""

from .card import Card, new_card_key
from .snapshot import StoreSnapshot
from .workbench import DEFAULT_WORKBENCH, Workbench, normalize_name

__all__ = [
    "DEFAULT_WORKBENCH",
    "Card",
    "StoreSnapshot",
    "Workbench",
    "new_card_key",
    "normalize_name",
]
