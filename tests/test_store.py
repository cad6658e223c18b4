"""
Session store tests
"""

import os
import time

import pytest

from thread_runner.errors import SessionStoreError
from thread_runner.orchestrator import FileSessionStore, MemorySessionStore


class TestFileSessionStore:
    """File-backed handle persistence"""

    def test_load_missing_file(self, tmp_path):
        store = FileSessionStore(tmp_path / ".codex_thread_id")

        assert store.load() is None
        assert store.exists() is False
        assert store.age_hours() == 0.0

    def test_save_writes_raw_text(self, tmp_path):
        path = tmp_path / ".codex_thread_id"
        store = FileSessionStore(path)

        store.save("thread_abc")

        assert path.read_text(encoding="utf-8") == "thread_abc"
        assert store.load() == "thread_abc"
        assert store.exists() is True

    def test_save_overwrites(self, tmp_path):
        store = FileSessionStore(tmp_path / ".codex_thread_id")

        store.save("thread_one")
        store.save("thread_two")

        assert store.load() == "thread_two"
        # no temp files left behind
        assert [p.name for p in tmp_path.iterdir()] == [".codex_thread_id"]

    def test_save_creates_parent_directory(self, tmp_path):
        store = FileSessionStore(tmp_path / "state" / "thread")

        store.save("thread_abc")

        assert store.load() == "thread_abc"

    def test_blank_file_is_empty(self, tmp_path):
        path = tmp_path / ".codex_thread_id"
        path.write_text("  \n", encoding="utf-8")

        assert FileSessionStore(path).load() is None

    def test_blank_file_exists(self, tmp_path):
        path = tmp_path / ".codex_thread_id"
        path.write_text("", encoding="utf-8")

        assert FileSessionStore(path).exists() is True

    def test_load_strips_whitespace(self, tmp_path):
        path = tmp_path / ".codex_thread_id"
        path.write_text("thread_abc\n", encoding="utf-8")

        assert FileSessionStore(path).load() == "thread_abc"

    def test_clear(self, tmp_path):
        store = FileSessionStore(tmp_path / ".codex_thread_id")
        store.save("thread_abc")

        assert store.clear() is True
        assert store.load() is None
        assert store.clear() is False

    def test_save_failure_raises_store_error(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        store = FileSessionStore(blocker / ".codex_thread_id")

        with pytest.raises(SessionStoreError):
            store.save("thread_abc")

    def test_age_and_expiry(self, tmp_path):
        path = tmp_path / ".codex_thread_id"
        store = FileSessionStore(path)
        store.save("thread_abc")

        three_hours_ago = time.time() - 3 * 3600
        os.utime(path, (three_hours_ago, three_hours_ago))

        assert 2.9 < store.age_hours() < 3.1
        assert store.is_expired(2) is True
        assert store.is_expired(24) is False
        assert store.is_expired(0) is False

    def test_default_path_is_relative_to_cwd(self, tmp_path):
        store = FileSessionStore()
        store.save("thread_abc")

        assert (tmp_path / ".codex_thread_id").read_text(encoding="utf-8") == "thread_abc"


class TestMemorySessionStore:
    """In-process store"""

    def test_roundtrip(self):
        store = MemorySessionStore()
        assert store.load() is None

        store.save("thread_abc")

        assert store.load() == "thread_abc"
        assert store.saves == ["thread_abc"]
