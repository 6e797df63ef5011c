"""View-model for rendering a workbench as a flat outline.

Rendered blocks keep an explicit (line range, card) mapping so a cursor
position in the rendered outline can be mapped back to the card it shows.
Each block also ends with a ``<!-- card:KEY -->`` marker, which lets an
edited copy of the rendering be read back as a new card order.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..domain.entities.card import Card
from ..exceptions import CardNotFoundError
from ..utils.logging import get_logger
from .store import WorkbenchStore

logger = get_logger(__name__)

DISPLAY_LEVEL = 2
CARD_MARKER_RE = re.compile(r"<!--\s*card:([0-9a-f]+)\s*-->")


@dataclass(frozen=True)
class RenderedBlock:
    """One card as displayed, with its 1-based inclusive line range."""

    card: Card
    text: str
    start_line: int
    end_line: int

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


def render_card(card: Card) -> str:
    """Render a card as a level-2 heading, its body, and its key marker."""
    lines = [f"{'#' * DISPLAY_LEVEL} {card.title}"]
    body = card.content.strip("\n")
    if body:
        lines.append(body)
    lines.append(f"<!-- card:{card.key} -->")
    return "\n".join(lines)


def render_workbench(store: WorkbenchStore, name: str | None = None) -> list[RenderedBlock]:
    """Render every card of a workbench in stored order.

    Blocks are separated by one blank line; line numbers count from 1.
    """
    blocks: list[RenderedBlock] = []
    line = 1
    for card in store.get_cards(name):
        text = render_card(card)
        height = text.count("\n") + 1
        blocks.append(
            RenderedBlock(card=card, text=text, start_line=line, end_line=line + height - 1)
        )
        line += height + 1
    return blocks


def blocks_to_text(blocks: Sequence[RenderedBlock]) -> str:
    return "\n\n".join(block.text for block in blocks) + ("\n" if blocks else "")


def keys_from_rendered(text: str) -> list[str]:
    """Read card keys, in order, from an edited rendering."""
    return CARD_MARKER_RE.findall(text)


def _key_of(item: Card | str) -> str:
    return item.key if isinstance(item, Card) else item


def apply_reorder(
    store: WorkbenchStore, name: str | None, new_order: Iterable[Card | str]
) -> list[Card]:
    """Replace a workbench's order with ``new_order`` (cards or keys).

    Cards missing from ``new_order`` are dropped, the same as deleting their
    block from the rendered view. Repeated entries keep their first
    position.

    Raises:
        CardNotFoundError: An entry does not belong to the workbench
    """
    resolved = name if name is not None else store.current_name
    by_key = {card.key: card for card in store.get_cards(resolved)}

    ordered: list[Card] = []
    seen: set[str] = set()
    for item in new_order:
        key = _key_of(item)
        if key in seen:
            continue
        if key not in by_key:
            raise CardNotFoundError(
                f"Card is not in workbench '{resolved}'",
                suggestion="Re-render the workbench and try again",
                context={"workbench": resolved, "key": key},
            )
        seen.add(key)
        ordered.append(by_key[key])

    store.set_cards(resolved, ordered)
    logger.info(
        "workbench_reordered",
        workbench=resolved,
        cards=len(ordered),
        dropped=len(by_key) - len(ordered),
    )
    return ordered


def apply_removal(store: WorkbenchStore, name: str | None, card: Card | str) -> Card:
    """Remove a card after its rendered block was deleted."""
    return store.remove_card(name, _key_of(card))


def move_card(
    store: WorkbenchStore, name: str | None, card: Card | str, offset: int
) -> int:
    """Move a card ``offset`` places (negative is up); returns its new index."""
    resolved = name if name is not None else store.current_name
    cards = store.get_cards(resolved)
    index = store.index_of(resolved, _key_of(card))
    target = max(0, min(len(cards) - 1, index + offset))
    if target != index:
        cards.insert(target, cards.pop(index))
        store.set_cards(resolved, cards)
    return target


class WorkbenchView:
    """A live rendering of one workbench.

    The view subscribes to the store and re-renders whenever its workbench
    changes; call ``close`` to detach it.
    """

    def __init__(self, store: WorkbenchStore, name: str | None = None):
        self.store = store
        self.name = name if name is not None else store.current_name
        self.blocks: list[RenderedBlock] = []
        self.refresh_count = 0
        self.refresh()
        store.add_listener(self._on_store_change)

    def _on_store_change(self, changed: frozenset[str]) -> None:
        if self.name not in changed:
            return
        if self.name in self.store:
            self.refresh()
            return
        # A rename reports both names; a delete reports only the old one
        renamed = [name for name in changed if name != self.name and name in self.store]
        if len(renamed) == 1:
            self.name = renamed[0]
            self.refresh()
        else:
            self.blocks = []

    def refresh(self) -> None:
        self.blocks = render_workbench(self.store, self.name)
        self.refresh_count += 1

    def close(self) -> None:
        self.store.remove_listener(self._on_store_change)

    @property
    def text(self) -> str:
        return blocks_to_text(self.blocks)

    @property
    def cards(self) -> list[Card]:
        return [block.card for block in self.blocks]

    def card_at_line(self, line: int) -> Card | None:
        """Map a line of the rendered outline back to its card."""
        for block in self.blocks:
            if block.contains(line):
                return block.card
        return None

    def apply_edited_text(self, text: str) -> list[Card]:
        """Store the card order found in an edited copy of ``text``."""
        return apply_reorder(self.store, self.name, keys_from_rendered(text))
