"""
Unit Tests for the Search Projection.

Tests filtering rules and the store-bound view.
"""

import pytest

from notekeeper.services.projection import (
    NoteProjection,
    filter_notes,
    normalize_query,
)


@pytest.fixture
def notes(make_draft):
    """Three notes in canonical order."""
    return (
        make_draft("Quarterly report", minutes=3, body="Numbers for Q1", tags=["work"]).with_id(3),
        make_draft("Shopping", minutes=2, body="Milk\nEggs", tags=["home"]).with_id(2),
        make_draft("Ideas", minutes=1, body="A novel about a WORKSHOP").with_id(1),
    )


class TestFilterNotes:
    """Tests for the pure filter."""

    def test_empty_query_returns_same_tuple(self, notes):
        result = filter_notes(notes, "")

        assert result is notes

    def test_blank_query_treated_as_empty(self, notes):
        assert filter_notes(notes, "   ") is notes

    def test_none_query_treated_as_empty(self, notes):
        assert filter_notes(notes, None) is notes

    def test_matches_title_case_insensitively(self, notes):
        result = filter_notes(notes, "SHOPPING")

        assert [n.id for n in result] == [2]

    def test_matches_body(self, notes):
        result = filter_notes(notes, "eggs")

        assert [n.id for n in result] == [2]

    def test_tag_only_match_included(self, make_draft):
        tagged = make_draft("Call Anna", tags=["work"]).with_id(10)
        other = make_draft("Groceries", body="bread").with_id(11)

        result = filter_notes((tagged, other), "wor")

        assert result == (tagged,)

    def test_match_across_fields_keeps_canonical_order(self, notes):
        result = filter_notes(notes, "wor")

        assert [n.id for n in result] == [3, 1]

    def test_query_is_trimmed(self, notes):
        assert [n.id for n in filter_notes(notes, "  ideas  ")] == [1]

    def test_no_match(self, notes):
        assert filter_notes(notes, "zzz") == ()

    def test_accepts_any_iterable(self, notes):
        result = filter_notes(list(notes), "")

        assert result == notes

    def test_normalize_query(self):
        assert normalize_query("  a b ") == "a b"
        assert normalize_query(None) == ""


class TestNoteProjection:
    """Tests for the projection bound to a store."""

    @pytest.mark.asyncio
    async def test_empty_query_is_canonical_list(self, store, make_draft):
        await store.create(make_draft("A", minutes=1))
        await store.create(make_draft("B", minutes=2))
        projection = NoteProjection(store)

        assert projection.notes is store.notes
        assert all(a is b for a, b in zip(projection.notes, store.notes))

    @pytest.mark.asyncio
    async def test_tracks_store_changes(self, store, make_draft):
        projection = NoteProjection(store, "milk")
        assert projection.notes == ()

        note = await store.create(make_draft("Shopping", body="milk"))

        assert projection.notes == (note,)

        await store.remove(note.id)

        assert projection.notes == ()

    @pytest.mark.asyncio
    async def test_set_query_reports_change(self, store):
        projection = NoteProjection(store)

        assert projection.set_query("work") is True
        assert projection.set_query("  work ") is False
        assert projection.query == "work"
        assert projection.set_query("") is True

    @pytest.mark.asyncio
    async def test_unchanged_query_reuses_result(self, store, make_draft):
        await store.create(make_draft("Work item", tags=["work"]))
        projection = NoteProjection(store, "work")

        first = projection.notes
        projection.set_query(" work")

        assert projection.notes is first

    @pytest.mark.asyncio
    async def test_note_at_and_position_of(self, store, make_draft):
        older = await store.create(make_draft("Old work", minutes=1))
        await store.create(make_draft("Unrelated", minutes=2))
        newer = await store.create(make_draft("New work", minutes=3))
        projection = NoteProjection(store, "work")

        assert projection.note_at(0) == newer
        assert projection.note_at(1) == older
        assert projection.position_of(older.id) == 1
        assert len(projection) == 2

    @pytest.mark.asyncio
    async def test_position_of_hidden_note_is_none(self, store, make_draft):
        hidden = await store.create(make_draft("Unrelated"))
        projection = NoteProjection(store, "work")

        assert projection.position_of(hidden.id) is None

    @pytest.mark.asyncio
    async def test_note_at_out_of_range(self, store):
        projection = NoteProjection(store)

        with pytest.raises(IndexError):
            projection.note_at(0)
        with pytest.raises(IndexError):
            projection.note_at(-1)
