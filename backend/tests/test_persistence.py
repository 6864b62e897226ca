"""Tests for persistence — round trips, corrupt data recovery, quota failures."""

import json

import pytest

from codepad.database import init_db, make_engine, make_session_factory
from codepad.services.file_kinds import FileKind
from codepad.services.file_store import FileStore
from codepad.services.notifications import Notifier
from codepad.services.persistence import (
    LOAD_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE,
    PersistenceLayer,
)
from codepad.services.recent_files import RecentFilesTracker
from codepad.utils.storage import MemoryStorage, SqlStorage


class TestRoundTrip:
    def test_files_survive_reload(self, make_store):
        store = make_store()
        a = store.create_file("src/app.js", "console.log(1);")
        b = store.create_file("style.css", "body {}")
        store.set_current_by_id(a.id)

        reloaded = make_store()
        assert [r.to_dict() for r in reloaded.files] == [r.to_dict() for r in store.files]
        assert reloaded.get_current().id == a.id
        assert reloaded.tab_state().open_ids == store.tab_state().open_ids
        assert [e.id for e in reloaded.get_recent()] == [a.id]
        assert reloaded.find(b.id).kind == FileKind.CSS

    def test_storage_layout(self, store, storage):
        files = json.loads(storage.get_item("editorFiles"))
        assert files[0]["name"] == "index.html"
        assert files[0]["type"] == "html"
        assert set(files[0]) == {"id", "name", "content", "type"}
        assert json.loads(storage.get_item("editorRecentFiles")) == []
        assert json.loads(storage.get_item("editorOpenTabs")) == [files[0]["id"]]
        assert storage.get_item("editorActiveTabIndex") == "0"

    def test_new_ids_do_not_collide_after_reload(self, make_store):
        store = make_store()
        for name in ("a.txt", "b.txt", "c.txt"):
            store.create_file(name)
        reloaded = make_store()
        new = reloaded.create_file("d.txt")
        assert new.id not in {r.id for r in store.files}

    def test_no_tabs_selects_first_file(self, make_store, storage):
        store = make_store()
        store.create_file("a.txt")
        storage.remove_item("editorOpenTabs")
        reloaded = make_store()
        assert reloaded.current_index == 0
        assert reloaded.tab_state().active_id == reloaded.files[0].id

    def test_bad_active_tab_index_keeps_files(self, make_store, storage, notifier):
        store = make_store()
        record = store.create_file("a.txt")
        storage.set_item("editorActiveTabIndex", "not-a-number")
        reloaded = make_store()
        assert reloaded.find(record.id) is not None
        assert reloaded.current_index == 0
        assert reloaded.tab_state().active_id == reloaded.files[0].id
        assert notifier.pending() == []

    def test_unknown_type_rederived(self, make_store, storage):
        storage.set_item(
            "editorFiles",
            json.dumps([{"id": "file_1_0", "name": "main.py", "content": "", "type": "cobol"}]),
        )
        store = make_store()
        assert store.files[0].kind == FileKind.PYTHON


class TestRecovery:
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            json.dumps({"files": []}),
            json.dumps([{"name": "missing-id.txt"}]),
            json.dumps([
                {"id": "file_1_0", "name": "a.txt", "content": ""},
                {"id": "file_1_1", "name": "a.txt", "content": ""},
            ]),
        ],
    )
    def test_corrupt_files_reset_to_seed(self, make_store, storage, notifier, raw):
        storage.set_item("editorFiles", raw)
        store = make_store()
        assert [r.name for r in store.files] == ["index.html"]
        assert store.current_index == 0
        notices = notifier.drain()
        assert [n.message for n in notices] == [LOAD_FAILED_MESSAGE]
        assert notices[0].level == "warning"

    def test_corrupt_data_is_overwritten(self, make_store, storage):
        storage.set_item("editorFiles", "garbage")
        make_store()
        assert json.loads(storage.get_item("editorFiles"))[0]["name"] == "index.html"

    def test_stale_recent_entries_filtered(self, make_store, storage):
        storage.set_item(
            "editorFiles",
            json.dumps([{"id": "file_1_0", "name": "a.txt", "content": "", "type": "text"}]),
        )
        storage.set_item(
            "editorRecentFiles",
            json.dumps([
                {"id": "file_1_9", "timestamp": 5, "name": "gone.txt"},
                {"id": "file_1_0", "timestamp": 4, "name": "a.txt"},
            ]),
        )
        store = make_store()
        assert [e.id for e in store.get_recent()] == ["file_1_0"]

    def test_missing_keys_start_fresh(self, storage, notifier):
        state = PersistenceLayer(storage, notifier=notifier).load()
        assert state.files == []
        assert not state.recovered
        assert notifier.pending() == []


class TestSaveFailures:
    def test_quota_exceeded_notifies_without_rollback(self, clock):
        storage = MemoryStorage(quota_bytes=4000)
        notifier = Notifier()
        store = FileStore(
            persistence=PersistenceLayer(storage, notifier=notifier),
            recent=RecentFilesTracker(clock=clock),
            clock=clock,
        )
        store.load()
        assert notifier.pending() == []

        big = store.create_file("big.txt", "x" * 5000)

        assert store.find(big.id) is not None
        assert store.get_current() == big
        assert [n.message for n in notifier.drain()] == [SAVE_FAILED_MESSAGE]
        saved = json.loads(storage.get_item("editorFiles"))
        assert [f["name"] for f in saved] == ["index.html"]

    def test_save_returns_false_on_failure(self, store):
        store._persistence._storage = MemoryStorage(quota_bytes=10)
        assert store.save() is False

    def test_clear_removes_all_keys(self, store, storage, persistence):
        persistence.clear()
        for key in ("editorFiles", "editorRecentFiles", "editorOpenTabs", "editorActiveTabIndex"):
            assert storage.get_item(key) is None


class TestSqlStorage:
    @pytest.fixture
    def sql_storage(self, tmp_path):
        engine = make_engine(tmp_path / "codepad.db")
        init_db(engine)
        yield SqlStorage(make_session_factory(engine))
        engine.dispose()

    def test_get_set_remove(self, sql_storage):
        assert sql_storage.get_item("k") is None
        sql_storage.set_item("k", "v1")
        sql_storage.set_item("k", "v2")
        assert sql_storage.get_item("k") == "v2"
        sql_storage.remove_item("k")
        assert sql_storage.get_item("k") is None
        sql_storage.remove_item("k")

    def test_store_round_trip(self, sql_storage, clock):
        def _make():
            store = FileStore(
                persistence=PersistenceLayer(sql_storage),
                recent=RecentFilesTracker(clock=clock),
                clock=clock,
            )
            store.load()
            return store

        store = _make()
        record = store.create_file("notes.md", "# hi")
        reloaded = _make()
        assert reloaded.find(record.id).content == "# hi"
        assert reloaded.get_current().id == record.id
