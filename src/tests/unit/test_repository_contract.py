"""Contract tests run against every repository implementation."""

import asyncio

import pytest

from notekeep.core.errors import InvalidDataError, NotFoundError
from notekeep.core.repository import DataRepository
from notekeep.core.types import DeleteAllResult


async def _travel_fixture(repo):
    """Two notes from the search example plus a second category."""
    travel = await repo.create_category("Travel")
    work = await repo.create_category("Work")
    trip = await repo.create_note("Trip Plan", "Visit Paris", travel)
    groceries = await repo.create_note("Groceries", "Milk, eggs", None)
    return travel, work, trip, groceries


def test_implements_protocol(repository):
    """Both implementations satisfy the DataRepository protocol."""
    assert isinstance(repository, DataRepository)


class TestCategories:
    """Tests for category operations."""

    @pytest.mark.asyncio
    async def test_create_trims_name(self, repository):
        """create_category stores the trimmed name."""
        category = await repository.create_category("  Work \n")

        assert category.name == "Work"
        assert category.created_at == category.updated_at

    @pytest.mark.asyncio
    async def test_create_assigns_unique_ids(self, repository):
        """Every created category gets a distinct id."""
        created = [await repository.create_category(f"Cat {i}") for i in range(5)]

        assert len({category.id for category in created}) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "\n\t"])
    async def test_create_rejects_blank_name(self, repository, name):
        """Blank names fail with InvalidDataError and nothing is stored."""
        with pytest.raises(InvalidDataError):
            await repository.create_category(name)

        assert await repository.fetch_categories() == []

    @pytest.mark.asyncio
    async def test_fetch_orders_newest_first(self, repository):
        """fetch_categories orders by created_at descending."""
        first = await repository.create_category("First")
        second = await repository.create_category("Second")
        third = await repository.create_category("Third")

        categories = await repository.fetch_categories()

        assert [c.id for c in categories] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_update_renames_and_refreshes_timestamp(self, repository):
        """update_category writes the trimmed name and a newer updated_at."""
        category = await repository.create_category("Wrok")

        updated = await repository.update_category(category, "  Work  ")

        assert updated.id == category.id
        assert updated.name == "Work"
        assert updated.created_at == category.created_at
        assert updated.updated_at >= category.updated_at
        stored = await repository.fetch_categories()
        assert stored[0].name == "Work"

    @pytest.mark.asyncio
    async def test_update_does_not_mutate_argument(self, repository):
        """The caller's category value is left untouched."""
        category = await repository.create_category("Old")

        await repository.update_category(category, "New")

        assert category.name == "Old"

    @pytest.mark.asyncio
    async def test_update_rejects_blank_name(self, repository):
        """A blank rename fails and the stored name is unchanged."""
        category = await repository.create_category("Keep")

        with pytest.raises(InvalidDataError):
            await repository.update_category(category, "   ")

        stored = await repository.fetch_categories()
        assert stored[0].name == "Keep"
        assert stored[0].updated_at == category.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_category_not_found(self, repository):
        """Renaming a deleted category raises NotFoundError."""
        category = await repository.create_category("Gone")
        await repository.delete_category(category)

        with pytest.raises(NotFoundError):
            await repository.update_category(category, "Back")

    @pytest.mark.asyncio
    async def test_delete_cascades_to_notes(self, repository):
        """Deleting a category removes exactly its notes."""
        travel, work, trip, groceries = await _travel_fixture(repository)
        extra = await repository.create_note("Hotel", "", travel)
        memo = await repository.create_note("Memo", "", work)

        await repository.delete_category(travel)

        remaining = {n.id for n in await repository.fetch_notes()}
        assert remaining == {groceries.id, memo.id}
        assert trip.id not in remaining and extra.id not in remaining
        assert [c.id for c in await repository.fetch_categories()] == [work.id]
        assert await repository.fetch_notes_for_category(travel) == []

    @pytest.mark.asyncio
    async def test_delete_missing_category_not_found(self, repository):
        """Deleting a category twice raises NotFoundError the second time."""
        category = await repository.create_category("Once")
        await repository.delete_category(category)

        with pytest.raises(NotFoundError):
            await repository.delete_category(category)

    @pytest.mark.asyncio
    async def test_delete_all_categories(self, repository):
        """delete_all_categories returns the category count and keeps unfiled notes."""
        _, _, _, groceries = await _travel_fixture(repository)

        count = await repository.delete_all_categories()

        assert count == 2
        assert await repository.fetch_categories() == []
        notes = await repository.fetch_notes()
        assert [n.id for n in notes] == [groceries.id]
        assert all(n.category_id is None for n in notes)

    @pytest.mark.asyncio
    async def test_delete_all_categories_when_empty(self, repository):
        """delete_all_categories on an empty store returns 0."""
        assert await repository.delete_all_categories() == 0


class TestNotes:
    """Tests for note operations."""

    @pytest.mark.asyncio
    async def test_create_round_trip(self, repository):
        """A created note comes back from fetch_notes unchanged."""
        category = await repository.create_category("Ideas")

        created = await repository.create_note("  Title ", "Body text", category)
        notes = await repository.fetch_notes()

        assert len(notes) == 1
        fetched = notes[0]
        assert fetched.id == created.id
        assert fetched.title == "Title"
        assert fetched.content == "Body text"
        assert fetched.category_id == category.id
        assert fetched.created_at <= fetched.updated_at

    @pytest.mark.asyncio
    async def test_content_not_trimmed(self, repository):
        """Content is stored exactly as given, including empty."""
        spaced = await repository.create_note("Spaced", "  padded  ")
        empty = await repository.create_note("Empty", "")

        assert spaced.content == "  padded  "
        assert empty.content == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "  ", "\t\n"])
    async def test_create_rejects_blank_title(self, repository, title):
        """Blank titles fail and nothing is stored."""
        with pytest.raises(InvalidDataError) as exc_info:
            await repository.create_note(title, "content")

        assert "title" in str(exc_info.value).lower()
        assert await repository.fetch_notes() == []

    @pytest.mark.asyncio
    async def test_create_with_deleted_category_not_found(self, repository):
        """A note cannot reference a category that no longer exists."""
        category = await repository.create_category("Temp")
        await repository.delete_category(category)

        with pytest.raises(NotFoundError):
            await repository.create_note("Orphan", "", category)

        assert await repository.fetch_notes() == []

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, repository):
        """update_note replaces title, content and category together."""
        home = await repository.create_category("Home")
        work = await repository.create_category("Work")
        note = await repository.create_note("Draft", "v1", home)

        updated = await repository.update_note(note, " Final ", "v2", work)

        assert updated.id == note.id
        assert (updated.title, updated.content, updated.category_id) == (
            "Final",
            "v2",
            work.id,
        )
        assert updated.updated_at >= note.updated_at
        assert await repository.fetch_notes_for_category(home) == []
        assert [n.id for n in await repository.fetch_notes_for_category(work)] == [
            note.id
        ]

    @pytest.mark.asyncio
    async def test_update_can_clear_category(self, repository):
        """Passing None removes the note from its category."""
        home = await repository.create_category("Home")
        note = await repository.create_note("Draft", "", home)

        updated = await repository.update_note(note, note.title, note.content, None)

        assert updated.category_id is None

    @pytest.mark.asyncio
    async def test_update_rejects_blank_title(self, repository):
        """A blank title leaves the stored note unchanged."""
        note = await repository.create_note("Keep", "body")

        with pytest.raises(InvalidDataError):
            await repository.update_note(note, "  ", "new body", None)

        stored = (await repository.fetch_notes())[0]
        assert stored.title == "Keep"
        assert stored.content == "body"

    @pytest.mark.asyncio
    async def test_update_moves_note_to_top(self, repository):
        """fetch_notes orders by updated_at descending."""
        older = await repository.create_note("Older", "")
        newer = await repository.create_note("Newer", "")
        assert [n.id for n in await repository.fetch_notes()] == [newer.id, older.id]

        await asyncio.sleep(0.01)
        await repository.update_note(older, "Older", "edited", None)

        assert [n.id for n in await repository.fetch_notes()] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_delete_note(self, repository):
        """delete_note removes only that note and never its category."""
        category = await repository.create_category("Keep me")
        first = await repository.create_note("First", "", category)
        second = await repository.create_note("Second", "", category)

        await repository.delete_note(first)

        assert [n.id for n in await repository.fetch_notes()] == [second.id]
        assert len(await repository.fetch_categories()) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_note_not_found(self, repository):
        """Deleting an already deleted note raises NotFoundError."""
        note = await repository.create_note("Once", "")
        await repository.delete_note(note)

        with pytest.raises(NotFoundError):
            await repository.delete_note(note)

    @pytest.mark.asyncio
    async def test_delete_all_notes_is_idempotent(self, repository):
        """delete_all_notes returns the real count, then 0."""
        await _travel_fixture(repository)

        assert await repository.delete_all_notes() == 2
        assert await repository.delete_all_notes() == 0
        assert await repository.fetch_notes() == []
        assert len(await repository.fetch_categories()) == 2

    @pytest.mark.asyncio
    async def test_fetch_notes_for_category(self, repository):
        """Only notes filed under the category are returned."""
        travel, work, trip, _ = await _travel_fixture(repository)

        assert [n.id for n in await repository.fetch_notes_for_category(travel)] == [
            trip.id
        ]
        assert await repository.fetch_notes_for_category(work) == []


class TestBulk:
    """Tests for delete_all_data."""

    @pytest.mark.asyncio
    async def test_delete_all_data_counts(self, repository):
        """delete_all_data reports both counts and empties the store."""
        await _travel_fixture(repository)

        result = await repository.delete_all_data()

        assert result == DeleteAllResult(categories_deleted=2, notes_deleted=2)
        assert await repository.fetch_notes() == []
        assert await repository.fetch_categories() == []

    @pytest.mark.asyncio
    async def test_delete_all_data_when_empty(self, repository):
        """An empty store reports zero counts."""
        result = await repository.delete_all_data()

        assert result.categories_deleted == 0
        assert result.notes_deleted == 0


class TestSearch:
    """Tests for search_notes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", " ", "\n\t  "])
    async def test_blank_search_returns_nothing(self, repository, text):
        """Blank search text returns an empty list, not every note."""
        await _travel_fixture(repository)

        assert await repository.search_notes(text) == []

    @pytest.mark.asyncio
    async def test_matches_content_case_insensitively(self, repository):
        """'par' matches 'Visit Paris' but not the groceries note."""
        _, _, trip, _ = await _travel_fixture(repository)

        results = await repository.search_notes("par")

        assert [n.id for n in results] == [trip.id]

    @pytest.mark.asyncio
    async def test_matches_title(self, repository):
        _, _, _, groceries = await _travel_fixture(repository)

        results = await repository.search_notes("GROCER")

        assert [n.id for n in results] == [groceries.id]

    @pytest.mark.asyncio
    async def test_matches_category_name(self, repository):
        """Notes are found through their category's name."""
        _, _, trip, _ = await _travel_fixture(repository)

        results = await repository.search_notes("travel")

        assert [n.id for n in results] == [trip.id]

    @pytest.mark.asyncio
    async def test_category_rename_affects_search(self, repository):
        """Search uses the category's current name."""
        travel, _, trip, _ = await _travel_fixture(repository)
        await repository.update_category(travel, "Holidays")

        assert await repository.search_notes("travel") == []
        assert [n.id for n in await repository.search_notes("holi")] == [trip.id]

    @pytest.mark.asyncio
    async def test_no_match(self, repository):
        await _travel_fixture(repository)

        assert await repository.search_notes("zebra") == []

    @pytest.mark.asyncio
    async def test_unicode_case_folding(self, repository):
        """Matching folds non-ASCII case as well."""
        note = await repository.create_note("Café Ölmühle", "")

        assert [n.id for n in await repository.search_notes("CAFÉ ÖL")] == [note.id]

    @pytest.mark.asyncio
    async def test_results_ordered_by_updated_at(self, repository):
        """Results follow fetch order, most recently updated first."""
        first = await repository.create_note("Alpha note", "")
        second = await repository.create_note("Beta note", "")

        results = await repository.search_notes("note")

        assert [n.id for n in results] == [second.id, first.id]
