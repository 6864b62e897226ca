"""Tests for open tabs and how they drive the current file."""

import pytest

from codepad.services.errors import NotFoundError
from codepad.services.file_store import NO_SELECTION
from codepad.services.tabs import OpenTabs


class TestOpenTabs:
    def test_open_is_idempotent(self):
        tabs = OpenTabs()
        tabs.open("a")
        tabs.open("b")
        tabs.open("a")
        state = tabs.state()
        assert state.open_ids == ("a", "b")
        assert state.active_id == "a"
        assert tabs.is_open("b")
        assert not tabs.is_open("c")

    def test_close_left_of_active_shifts_index(self):
        tabs = OpenTabs()
        for i in ("a", "b", "c"):
            tabs.open(i)
        assert tabs.close("a") == "c"
        assert tabs.state().active_index == 1

    def test_close_active_last_picks_new_last(self):
        tabs = OpenTabs()
        for i in ("a", "b", "c"):
            tabs.open(i)
        assert tabs.close("c") == "b"

    def test_close_active_middle_picks_right_neighbour(self):
        tabs = OpenTabs()
        for i in ("a", "b", "c"):
            tabs.open(i)
        tabs.activate("b")
        assert tabs.close("b") == "c"

    def test_close_last_tab(self):
        tabs = OpenTabs()
        tabs.open("a")
        assert tabs.close("a") is None
        assert tabs.state().active_index == -1

    def test_close_to_right(self):
        tabs = OpenTabs()
        for i in ("a", "b", "c", "d"):
            tabs.open(i)
        assert tabs.close_to_right("b") == "b"
        assert tabs.state().open_ids == ("a", "b")

    def test_restore_drops_unknown_ids(self):
        tabs = OpenTabs()
        tabs.restore(["a", "gone", "b"], 2, known_ids={"a", "b"})
        assert tabs.state().open_ids == ("a", "b")
        assert tabs.active_id == "b"


class TestStoreTabs:
    def test_open_tab_selects_file(self, store):
        b = store.create_file("b.txt")
        store.set_current_by_index(0)
        store.open_tab(b.id)
        assert store.get_current() == b
        assert [r.id for r in store.open_tab_records()] == [store.files[0].id, b.id]

    def test_close_tab_follows_active(self, store):
        first = store.files[0]
        b = store.create_file("b.txt")
        assert store.close_tab(b.id) == first
        assert store.current_index == 0
        assert len(store) == 2

    def test_close_other_tabs(self, store):
        b = store.create_file("b.txt")
        store.create_file("c.txt")
        assert store.close_other_tabs(b.id) == b
        assert store.tab_state().open_ids == (b.id,)
        assert store.get_current() == b

    def test_close_tabs_to_right(self, store):
        first = store.files[0]
        store.create_file("b.txt")
        store.create_file("c.txt")
        assert store.close_tabs_to_right(first.id) == first
        assert store.tab_state().open_ids == (first.id,)

    def test_close_all_clears_selection(self, store):
        store.create_file("b.txt")
        store.close_all_tabs()
        assert store.tab_state().open_ids == ()
        assert store.current_index == NO_SELECTION
        assert store.get_current() is None
        assert len(store) == 2

    def test_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.close_tab("nope")
