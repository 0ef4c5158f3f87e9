"""
NoteKeep Backend — Notes View Selection Tests
===============================================

What:  Tests for select_view(): which screen a notes page request gets.

What we test:
    ✅ Reserved id → AUTHORIZED with that id's notes
    ✅ Any other id (or none) → DENIED with notes withheld
    ✅ Search narrows AUTHORIZED notes but never changes the mode
    ✅ Denied variant choice is stable per target id
    ✅ Every denied render carries a fresh decoy incident hash
"""

import pytest

from notekeep.models.note import Note
from notekeep.services.view_service import (
    DENIED_VARIANTS,
    ViewMode,
    matches_search,
    new_incident_hash,
    pick_denied_variant,
    select_view,
)


class TestSelectView:

    @pytest.mark.asyncio
    async def test_reserved_id_is_authorized(self, note_store, identity):
        state = await select_view(note_store, identity, "101")

        assert state.mode is ViewMode.AUTHORIZED
        assert not state.is_denied
        assert len(state.notes) == 3
        assert state.denied_variant is None
        assert state.incident_hash is None

    @pytest.mark.asyncio
    async def test_other_id_is_denied_and_notes_discarded(self, note_store, identity):
        state = await select_view(note_store, identity, "102")

        assert state.mode is ViewMode.DENIED
        assert state.notes == []
        assert state.denied_variant in DENIED_VARIANTS
        assert state.incident_hash.startswith("SHA-256:")
        assert 0 <= state.log_id < 999999

    @pytest.mark.asyncio
    async def test_missing_id_is_denied(self, note_store, identity):
        state = await select_view(note_store, identity, None)
        assert state.is_denied

    @pytest.mark.asyncio
    async def test_decision_ignores_session_user_id(self, note_store, identity):
        """The check compares the URL value with the reserved literal, not the session."""
        other = identity.model_copy(update={"user_id": 102})

        state = await select_view(note_store, other, "102")

        assert state.is_denied

    @pytest.mark.asyncio
    async def test_search_filters_title_and_content(self, note_store, identity):
        by_title = await select_view(note_store, identity, "101", "shopping")
        by_content = await select_view(note_store, identity, "101", "DELIVERABLES")

        assert [n.title for n in by_title.notes] == ["Shopping List"]
        assert [n.title for n in by_content.notes] == ["Meeting Notes"]

    @pytest.mark.asyncio
    async def test_search_never_changes_mode(self, note_store, identity):
        authorized = await select_view(note_store, identity, "101", "no such text")
        denied = await select_view(note_store, identity, "103", "Grocery")

        assert authorized.mode is ViewMode.AUTHORIZED
        assert authorized.notes == []
        assert denied.mode is ViewMode.DENIED


class TestHelpers:

    def test_variant_is_deterministic(self):
        assert pick_denied_variant("102") is pick_denied_variant("102")
        assert pick_denied_variant(None) is pick_denied_variant("")

    def test_empty_search_matches_everything(self):
        note = Note(id=1, title="A", content="B", date="2024-01-01")
        assert matches_search(note, "")

    def test_incident_hash_shape(self):
        first, second = new_incident_hash(), new_incident_hash()

        assert first.startswith("SHA-256:")
        assert len(first) == len("SHA-256:") + 64
        int(first[len("SHA-256:"):], 16)
        assert first != second

    def test_variants_carry_the_sign_out_label(self):
        labels = {variant.key: variant.button_label for variant in DENIED_VARIANTS}
        assert labels == {"boom": "Logout Immediately", "terminal": ">> TERMINATE SESSION"}
