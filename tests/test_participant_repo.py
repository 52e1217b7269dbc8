"""Tests for participant directory persistence."""
import pytest

from cashsplit.models.participant import Tab
from cashsplit.repositories.participant_repo import DIRECTORY_DOC_ID, ParticipantRepository


@pytest.mark.asyncio
class TestParticipantRepository:

    async def test_first_load_seeds_you(self, mock_db):
        repo = ParticipantRepository(mock_db)

        directory = await repo.load_directory()

        assert [p.name for p in directory.list_participants()] == ["YOU"]
        mock_db.directories.find_one.assert_awaited_once_with({"_id": DIRECTORY_DOC_ID})

    async def test_save_then_load_round_trips(self, mock_db, burger_ledger):
        repo = ParticipantRepository(mock_db)
        directory = await repo.load_directory()
        bob = directory.add_participant("Bob", "+15550000")
        tab = Tab(ledger=burger_ledger)
        tab.add_item("Fries", 1.0, 5.0)
        directory.set_tab(bob.id, tab)

        await repo.save_directory(directory)
        loaded = await repo.load_directory()

        assert loaded.list_participants() == directory.list_participants()

    async def test_save_stores_json_array(self, mock_db):
        repo = ParticipantRepository(mock_db)
        directory = await repo.load_directory()

        await repo.save_directory(directory)

        stored = mock_db.directories.store[DIRECTORY_DOC_ID]["participants"]
        assert isinstance(stored, list)
        assert stored[0]["name"] == "YOU"
        assert stored[0]["tab"] is None
        _, kwargs = mock_db.directories.update_one.call_args
        assert kwargs["upsert"] is True

    async def test_seed_happens_only_once(self, mock_db):
        repo = ParticipantRepository(mock_db)
        first = await repo.load_directory()
        await repo.save_directory(first)

        second = await repo.load_directory()

        assert [p.id for p in second.list_participants()] == [p.id for p in first.list_participants()]

    async def test_save_tabs_keeps_participants_added_elsewhere(self, mock_db, burger_ledger):
        repo = ParticipantRepository(mock_db)
        held = await repo.load_directory()
        you = held.list_participants()[0]

        elsewhere = await repo.load_directory()
        elsewhere.add_participant("Bob")
        await repo.save_directory(elsewhere)

        tab = Tab(ledger=burger_ledger)
        tab.add_item("Burger", 1.0, 10.0)
        held.set_tab(you.id, tab)
        held.add_participant("Ghost")
        await repo.save_tabs(held)

        stored = await repo.load_directory()
        assert [p.name for p in stored.list_participants()] == ["YOU", "Bob"]
        assert stored.get(you.id).tab == tab
