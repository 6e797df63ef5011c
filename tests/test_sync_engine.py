"""Tests for the sync engine."""

import pytest

from obsidian_workbench.domain.entities.card import Card
from obsidian_workbench.exceptions import CardNotFoundError, PersistenceError
from obsidian_workbench.workbench.sync import SyncEngine, SyncStatus


@pytest.fixture
def engine(store, mock_host):
    return SyncEngine(store, mock_host)


@pytest.fixture
def seeded(store, mock_host):
    """Three cards: two identified and live, one without an identifier."""
    mock_host.add_heading("Raft", "old raft", line=3, id="raft")
    mock_host.add_heading("Paxos", "old paxos", line=9, id="paxos")
    cards = [
        Card(title="Raft", content="old raft", id="raft", file="/vault/note.md"),
        Card(title="Loose", content="no id"),
        Card(title="Paxos", content="old paxos", id="paxos", file="/vault/note.md"),
    ]
    store.set_cards(None, cards)
    return cards


class TestSyncCard:
    """Test single-card sync."""

    def test_sync_replaces_in_place(self, engine, store, mock_host, seeded) -> None:
        mock_host.edit_heading("paxos", title="Multi-Paxos", content="new paxos", level=2)

        outcome = engine.sync_card(seeded[2])

        assert outcome.succeeded
        cards = store.get_cards()
        assert cards[:2] == seeded[:2]
        assert cards[2].title == "Multi-Paxos"
        assert cards[2].content == "new paxos"
        assert cards[2].level == 2
        assert cards[2].key == seeded[2].key
        assert cards[2].id == "paxos"

    def test_sync_first_card_keeps_others(self, engine, store, mock_host, seeded) -> None:
        mock_host.edit_heading("raft", content="new raft")

        engine.sync_card(seeded[0])

        cards = store.get_cards()
        assert cards[0].content == "new raft"
        assert cards[1:] == seeded[1:]

    def test_sync_persists(self, engine, mock_repository, mock_host, seeded) -> None:
        mock_host.edit_heading("raft", content="new raft")
        saves = mock_repository.save_count

        engine.sync_card(seeded[0])

        assert mock_repository.save_count == saves + 1

    def test_unresolvable_identifier_is_reported(
        self, engine, store, mock_host, seeded
    ) -> None:
        mock_host.delete_heading("raft")

        outcome = engine.sync_card(seeded[0])

        assert outcome.status is SyncStatus.NOT_FOUND
        assert outcome.error
        assert store.get_cards() == seeded

    def test_extraction_failure_is_reported(self, engine, store, mock_host, seeded) -> None:
        location = mock_host.identifiers["paxos"]
        del mock_host.headings[location]

        outcome = engine.sync_card(seeded[2])

        assert outcome.status is SyncStatus.EXTRACTION_FAILED
        assert store.get_cards() == seeded

    def test_empty_heading_body_fails(self, engine, store, mock_host, seeded) -> None:
        mock_host.edit_heading("raft", title="Raft v2", content="  \n")

        outcome = engine.sync_card(seeded[0])

        assert outcome.status is SyncStatus.EXTRACTION_FAILED
        assert outcome.error
        assert store.get_cards() == seeded

    def test_card_without_identifier_is_untouched(
        self, engine, store, mock_host, seeded
    ) -> None:
        outcome = engine.sync_card(seeded[1])

        assert outcome.status is SyncStatus.NO_IDENTIFIER
        assert mock_host.extract_calls == 0
        assert store.get_cards() == seeded

    def test_card_not_in_workbench(self, engine, seeded) -> None:
        with pytest.raises(CardNotFoundError):
            engine.sync_card(Card(title="Stranger", id="raft"))

    def test_missing_identifier_on_fresh_card_is_carried_over(
        self, engine, store, mock_host, seeded
    ) -> None:
        mock_host.edit_heading("raft", id=None)

        engine.sync_card(seeded[0])

        assert store.get_cards()[0].id == "raft"

    def test_failed_save_keeps_old_card(
        self, engine, store, mock_repository, mock_host, seeded
    ) -> None:
        mock_host.edit_heading("raft", content="new raft")
        mock_repository.fail_on_save = True

        with pytest.raises(PersistenceError):
            engine.sync_card(seeded[0])
        assert store.get_cards() == seeded


class TestSyncAll:
    """Test bulk sync."""

    def test_reports_succeeded_over_all_cards(self, engine, mock_host, seeded) -> None:
        mock_host.delete_heading("paxos")

        report = engine.sync_all()

        assert report.as_tuple() == (1, 3)
        assert len(report.failures) == 1
        assert report.failures[0].card == seeded[2]

    def test_all_identified_cards_refreshed(self, engine, store, mock_host, seeded) -> None:
        mock_host.edit_heading("raft", content="new raft")
        mock_host.edit_heading("paxos", content="new paxos")

        report = engine.sync_all()

        assert report.as_tuple() == (2, 3)
        cards = store.get_cards()
        assert [c.content for c in cards] == ["new raft", "no id", "new paxos"]
        assert [c.key for c in cards] == [c.key for c in seeded]

    def test_empty_heading_body_counts_as_failure(self, engine, mock_host, seeded) -> None:
        mock_host.edit_heading("paxos", content="")

        report = engine.sync_all()

        assert report.as_tuple() == (1, 3)
        assert report.failures[0].status is SyncStatus.EXTRACTION_FAILED

    def test_persists_once(self, engine, mock_repository, mock_host, seeded) -> None:
        mock_host.edit_heading("raft", content="new raft")
        mock_host.edit_heading("paxos", content="new paxos")
        saves = mock_repository.save_count

        engine.sync_all()

        assert mock_repository.save_count == saves + 1

    def test_unchanged_cards_skip_save(self, engine, mock_repository, mock_host, store) -> None:
        mock_host.add_heading("Raft", "same", id="raft")
        store.set_cards(None, [Card(title="Raft", content="same", id="raft", file="/vault/note.md", key="k1")])
        saves = mock_repository.save_count

        report = engine.sync_all()

        assert report.synced == 1
        assert mock_repository.save_count == saves

    def test_empty_workbench(self, engine) -> None:
        assert engine.sync_all().as_tuple() == (0, 0)

    def test_named_workbench(self, engine, store, mock_host) -> None:
        mock_host.add_heading("Raft", "new", id="raft")
        store.create_workbench("reading")
        store.set_cards("reading", [Card(title="Raft", content="old", id="raft")])
        store.switch_to("default")

        report = engine.sync_all("reading")

        assert report.workbench == "reading"
        assert store.get_cards("reading")[0].content == "new"
