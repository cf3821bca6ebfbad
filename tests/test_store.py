#!/usr/bin/env python3
"""
Tests for the command store: mutation, loading and atomic persistence.
"""

import json
import os
import pytest
from unittest.mock import patch

from keepc.core import (
    CommandEntry,
    CorruptStore,
    DuplicateName,
    NotFound,
    PersistFailure,
    validate,
)
from keepc.store import CommandStore


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def store_path(tmp_path):
    """Path of a store file that does not exist yet."""
    return tmp_path / "data" / "commands.json"


@pytest.fixture
def store(store_path):
    """Empty store backed by a temporary file."""
    return CommandStore(store_path)


def _names(entries):
    return [e.name for e in entries]


# ============================================================================
# In-memory Operations
# ============================================================================

class TestStoreOperations:
    """Tests for add/list/get/remove/replace_all."""

    def test_default_path(self, isolated_home):
        """Test that the store defaults to the per-user file."""
        assert CommandStore().path == isolated_home / "commands.json"

    def test_add_then_list(self, store):
        """Test round-trip fidelity including interior whitespace."""
        body = "grep -rn  'TODO'\t. | less"
        store.add(validate("todos", body))
        [entry] = store.list()
        assert entry.name == "todos"
        assert entry.body == body

    def test_list_preserves_insertion_order(self, store):
        """Test that list() returns entries in the order they were added."""
        for name in ["zeta", "alpha", "mid"]:
            store.add(validate(name, f"echo {name}"))
        assert _names(store.list()) == ["zeta", "alpha", "mid"]

    def test_add_duplicate_rejected(self, store):
        """Test that a duplicate name fails and leaves the original alone."""
        store.add(validate("build", "make all"))
        with pytest.raises(DuplicateName) as exc_info:
            store.add(validate("build", "rm -rf build"))
        assert exc_info.value.name == "build"
        assert store.get("build").body == "make all"
        assert len(store) == 1

    def test_add_overwrite(self, store):
        """Test that overwrite replaces in place and keeps created_at."""
        store.add(validate("a", "echo a"))
        original = store.add(validate("build", "make"))
        store.add(validate("z", "echo z"))

        replaced = store.add(validate("build", "make all"), overwrite=True)

        assert store.get("build").body == "make all"
        assert replaced.created_at == original.created_at
        assert _names(store.list()) == ["a", "build", "z"]

    def test_get_missing(self, store):
        """Test get on an unknown name."""
        with pytest.raises(NotFound):
            store.get("nope")

    def test_remove(self, store):
        """Test remove returns the entry and a second remove fails."""
        store.add(validate("build", "make all"))
        removed = store.remove("build")
        assert removed.name == "build"
        assert store.list() == []
        with pytest.raises(NotFound):
            store.remove("build")

    def test_contains(self, store):
        """Test membership by name."""
        store.add(validate("build", "make all"))
        assert "build" in store
        assert "make" not in store

    def test_replace_all(self, store):
        """Test swapping the whole content."""
        store.add(validate("old", "echo old"))
        store.replace_all([validate("b", "echo b"), validate("a", "echo a")])
        assert _names(store.list()) == ["b", "a"]

    def test_replace_all_duplicate_leaves_content(self, store):
        """Test that a replacement with duplicate names changes nothing."""
        store.add(validate("keep", "echo keep"))
        with pytest.raises(DuplicateName):
            store.replace_all([validate("x", "echo 1"), validate("x", "echo 2")])
        assert _names(store.list()) == ["keep"]


# ============================================================================
# Loading
# ============================================================================

class TestStoreLoad:
    """Tests for reading the backing file."""

    def test_load_missing_file(self, store, store_path):
        """Test that an absent file is an empty store, not an error."""
        assert store.load() == {}
        assert not store_path.exists()

    def test_load_invalid_json(self, store, store_path):
        """Test that garbage fails closed."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json")
        with pytest.raises(CorruptStore) as exc_info:
            store.load()
        assert exc_info.value.path == store_path

    @pytest.mark.parametrize("content", [
        [],
        {"commands": "build"},
        {"version": 1, "commands": [{"name": "a"}]},
        {"version": 1, "commands": [{"name": "", "body": "x"}]},
        {"version": 1, "commands": [{"name": "a", "body": "   "}]},
        {"version": 1, "commands": [], "unexpected": 1},
        {"version": 2, "commands": []},
    ])
    def test_load_schema_mismatch(self, store, store_path, content):
        """Test that any content outside the schema is CorruptStore."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps(content))
        with pytest.raises(CorruptStore):
            store.load()

    def test_load_duplicate_names(self, store, store_path):
        """Test that a file with the same name twice is corrupt."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({
            "version": 1,
            "commands": [
                {"name": "a", "body": "echo 1"},
                {"name": "a", "body": "echo 2"},
            ],
        }))
        with pytest.raises(CorruptStore, match="duplicate"):
            store.load()

    def test_corrupt_store_blocks_mutation(self, store, store_path):
        """Test that a mutating call on a corrupt store fails before writing."""
        store_path.parent.mkdir(parents=True)
        store_path.write_text("garbage")
        with pytest.raises(CorruptStore):
            store.add(validate("build", "make"))
        assert store_path.read_text() == "garbage"


# ============================================================================
# Persistence
# ============================================================================

class TestStorePersist:
    """Tests for atomic persistence."""

    def test_persist_empty_and_reload(self, store, store_path):
        """Test that an empty store round-trips to an empty mapping."""
        store.persist()
        assert store_path.exists()
        assert CommandStore(store_path).load() == {}

    def test_persist_and_reload_in_order(self, store, store_path):
        """Test that N entries come back identical and in order."""
        bodies = {
            "c": "echo 'c'",
            "a": "printf '%s\\n' \"$HOME\"",
            "b": "cat <<EOF\n  indented\n\ttabbed\nEOF\n",
            "d": "echo éè \U0001F680",
        }
        for name, body in bodies.items():
            store.add(validate(name, body, description=f"about {name}"))
        store.persist()

        reloaded = CommandStore(store_path).list()
        assert _names(reloaded) == ["c", "a", "b", "d"]
        for entry in reloaded:
            assert entry.body == bodies[entry.name]
            assert entry.description == f"about {entry.name}"
        assert reloaded == store.list()

    def test_persist_creates_parent_dir(self, store, store_path):
        """Test that the store directory is created on first save."""
        store.add(validate("a", "echo a"))
        assert store.persist() == store_path
        assert store_path.parent.is_dir()

    def test_persist_leaves_no_temp_files(self, store, store_path):
        """Test that only the store file remains after saving."""
        store.add(validate("a", "echo a"))
        store.persist()
        store.persist()
        assert os.listdir(store_path.parent) == [store_path.name]

    def test_persist_failure_keeps_previous_content(self, store, store_path):
        """Test that a failed write surfaces PersistFailure and changes nothing."""
        store.add(validate("a", "echo a"))
        store.persist()
        before = store_path.read_text()

        store.add(validate("b", "echo b"))
        with patch("keepc.store.manager.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistFailure, match="disk full"):
                store.persist()

        assert store_path.read_text() == before
        assert os.listdir(store_path.parent) == [store_path.name]

    def test_persist_failure_on_unwritable_location(self, tmp_path):
        """Test PersistFailure when the parent path is a file."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = CommandStore(blocker / "commands.json")
        store.replace_all([])
        with pytest.raises(PersistFailure):
            store.persist()

    def test_persist_unencodable_entry(self, store, store_path):
        """Test that an entry that cannot be serialized is PersistFailure, not a crash."""
        store.add(validate("a", "echo a"))
        store.persist()
        before = store_path.read_text()

        store.entries["bad"] = CommandEntry.model_construct(
            name="bad", body="echo \udcff", description=None,
            created_at="2020-01-01T00:00:00", modified_at="2020-01-01T00:00:00",
        )
        with pytest.raises(PersistFailure):
            store.persist()
        assert store_path.read_text() == before
        assert os.listdir(store_path.parent) == [store_path.name]

    def test_file_format(self, store, store_path):
        """Test the documented JSON layout."""
        store.add(CommandEntry(name="build", body="make all"))
        store.persist()
        data = json.loads(store_path.read_text())
        assert data["version"] == 1
        assert data["commands"][0]["name"] == "build"
        assert data["commands"][0]["body"] == "make all"


# ============================================================================
# Test Runner
# ============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
