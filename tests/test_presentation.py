"""Tests for the workbench presentation view-model."""

import pytest

from obsidian_workbench.domain.entities.card import Card
from obsidian_workbench.exceptions import CardNotFoundError
from obsidian_workbench.workbench.inserter import add_card
from obsidian_workbench.workbench.presentation import (
    WorkbenchView,
    apply_removal,
    apply_reorder,
    keys_from_rendered,
    move_card,
    render_card,
    render_workbench,
)


@pytest.fixture
def cards(store):
    cards = [
        Card(title="Raft", content="Leader election.\nLog replication.", level=3),
        Card(title="Paxos", content="", level=1),
        Card(title="LSM", content="Compaction.", level=2),
    ]
    store.set_cards(None, cards)
    return cards


class TestRender:
    """Test rendering."""

    def test_card_flattens_to_one_depth(self) -> None:
        card = Card(title="Raft", content="Body", level=4, key="abc123")
        assert render_card(card) == "## Raft\nBody\n<!-- card:abc123 -->"

    def test_blocks_follow_store_order(self, store, cards) -> None:
        blocks = render_workbench(store)
        assert [b.card for b in blocks] == cards

    def test_line_ranges(self, store, cards) -> None:
        blocks = render_workbench(store)

        assert (blocks[0].start_line, blocks[0].end_line) == (1, 4)
        assert (blocks[1].start_line, blocks[1].end_line) == (6, 7)
        assert (blocks[2].start_line, blocks[2].end_line) == (9, 11)

    def test_text_lines_match_ranges(self, store, cards) -> None:
        view = WorkbenchView(store)
        lines = view.text.splitlines()
        for block in view.blocks:
            assert lines[block.start_line - 1] == f"## {block.card.title}"
            assert lines[block.end_line - 1] == f"<!-- card:{block.card.key} -->"
        view.close()

    def test_empty_workbench(self, store) -> None:
        view = WorkbenchView(store)
        assert view.blocks == []
        assert view.text == ""
        view.close()


class TestWorkbenchView:
    """Test the live view."""

    def test_card_at_line(self, store, cards) -> None:
        view = WorkbenchView(store)

        assert view.card_at_line(1) == cards[0]
        assert view.card_at_line(4) == cards[0]
        assert view.card_at_line(5) is None
        assert view.card_at_line(7) == cards[1]
        assert view.card_at_line(99) is None
        view.close()

    def test_view_refreshes_on_add(self, store, cards) -> None:
        view = WorkbenchView(store)
        add_card(store, Card(title="Gossip"))

        assert view.cards[0].title == "Gossip"
        assert view.refresh_count == 2
        view.close()

    def test_view_ignores_other_workbenches(self, store, cards) -> None:
        view = WorkbenchView(store)
        store.create_workbench("reading")
        add_card(store, Card(title="Gossip"), "reading")

        assert view.refresh_count == 1
        view.close()

    def test_closed_view_stops_refreshing(self, store, cards) -> None:
        view = WorkbenchView(store)
        view.close()
        add_card(store, Card(title="Gossip"))
        assert view.refresh_count == 1

    def test_view_of_deleted_workbench_empties(self, store) -> None:
        store.create_workbench("reading")
        add_card(store, Card(title="Gossip"))
        view = WorkbenchView(store, "reading")

        store.delete_workbench("reading")

        assert view.blocks == []
        view.close()

    def test_view_follows_rename(self, store) -> None:
        store.create_workbench("reading")
        add_card(store, Card(title="Gossip"))
        view = WorkbenchView(store, "reading")

        store.rename_workbench("reading", "papers")

        assert view.name == "papers"
        assert [c.title for c in view.cards] == ["Gossip"]
        view.close()

    def test_apply_edited_text(self, store, cards) -> None:
        view = WorkbenchView(store)
        blocks = view.blocks
        edited = "\n\n".join([blocks[2].text, blocks[0].text])

        view.apply_edited_text(edited)

        assert store.get_cards() == [cards[2], cards[0]]
        assert view.cards == [cards[2], cards[0]]
        view.close()


class TestReorderAndRemoval:
    """Test write-back operations."""

    def test_reorder_by_cards(self, store, cards) -> None:
        apply_reorder(store, None, [cards[2], cards[0], cards[1]])
        assert store.get_cards() == [cards[2], cards[0], cards[1]]

    def test_reorder_by_keys(self, store, cards) -> None:
        apply_reorder(store, None, [cards[1].key, cards[0].key, cards[2].key])
        assert store.get_cards() == [cards[1], cards[0], cards[2]]

    def test_reorder_drops_unlisted_cards(self, store, cards) -> None:
        apply_reorder(store, None, [cards[2]])
        assert store.get_cards() == [cards[2]]

    def test_reorder_collapses_duplicates(self, store, cards) -> None:
        apply_reorder(store, None, [cards[1], cards[1], cards[0]])
        assert store.get_cards() == [cards[1], cards[0]]

    def test_reorder_rejects_foreign_card(self, store, cards) -> None:
        with pytest.raises(CardNotFoundError):
            apply_reorder(store, None, [cards[0], Card(title="Stranger")])
        assert store.get_cards() == cards

    def test_removal(self, store, cards) -> None:
        apply_removal(store, None, cards[1])
        assert store.get_cards() == [cards[0], cards[2]]

    @pytest.mark.parametrize(
        ("index", "offset", "expected_index", "expected_titles"),
        [
            (0, 1, 1, ["Paxos", "Raft", "LSM"]),
            (2, -1, 1, ["Raft", "LSM", "Paxos"]),
            (0, -1, 0, ["Raft", "Paxos", "LSM"]),
            (1, 10, 2, ["Raft", "LSM", "Paxos"]),
        ],
    )
    def test_move_card(self, store, cards, index, offset, expected_index, expected_titles) -> None:
        assert move_card(store, None, cards[index], offset) == expected_index
        assert [c.title for c in store.get_cards()] == expected_titles


def test_keys_from_rendered_ignores_other_text() -> None:
    text = "## A\n<!-- card:aa11 -->\n\nfree text\n## B\n<!--card:bb22-->\n"
    assert keys_from_rendered(text) == ["aa11", "bb22"]
