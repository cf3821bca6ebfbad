"""
Command store for keepc.

Owns every saved command and persists them to a single JSON file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from keepc.core.datamodels import STORE_FORMAT_VERSION, CommandEntry, StoreFile
from keepc.core.exceptions import CorruptStore, DuplicateName, NotFound, PersistFailure

logger = logging.getLogger(__name__)


class CommandStore:
    """Ordered, name-keyed collection of saved commands backed by one file."""

    STORE_DIR = Path.home() / ".keepc"
    STORE_FILE = STORE_DIR / "commands.json"

    def __init__(self, path: Optional[Path] = None):
        """Initialize the store.

        Args:
            path: Backing file. Defaults to ~/.keepc/commands.json.
        """
        self.path = Path(path).expanduser() if path else self.STORE_FILE
        self._entries: Optional[dict[str, CommandEntry]] = None

    @property
    def entries(self) -> dict[str, CommandEntry]:
        """Current entries, loading from disk on first access."""
        if self._entries is None:
            self._entries = self.load()
        return self._entries

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> dict[str, CommandEntry]:
        """Read the backing file.

        Returns:
            Mapping of name to entry, in file order. Empty if the file
            does not exist.

        Raises:
            CorruptStore: If the file cannot be read or does not match the schema.
        """
        if not self.path.exists():
            logger.debug(f"No store at {self.path}, starting empty")
            self._entries = {}
            return self._entries

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptStore(self.path, f"cannot read file ({e})") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStore(self.path, f"invalid JSON ({e})") from e

        try:
            store_file = StoreFile.model_validate(data)
        except ValidationError as e:
            raise CorruptStore(self.path, f"unexpected content ({e.error_count()} errors)") from e

        if store_file.version != STORE_FORMAT_VERSION:
            raise CorruptStore(self.path, f"unsupported format version {store_file.version}")

        entries: dict[str, CommandEntry] = {}
        for entry in store_file.commands:
            if entry.name in entries:
                raise CorruptStore(self.path, f"duplicate command name '{entry.name}'")
            entries[entry.name] = entry

        logger.debug(f"Loaded {len(entries)} commands from {self.path}")
        self._entries = entries
        return entries

    def persist(self) -> Path:
        """Atomically write the current entries to the backing file.

        The content goes to a temporary file next to the target, which is
        then renamed over it, so a crash never leaves a partial store.

        Returns:
            Path to the written file.

        Raises:
            PersistFailure: If writing fails. The previous file is left intact.
        """
        store_file = StoreFile(commands=list(self.entries.values()))

        tmp_name: Optional[str] = None
        try:
            content = store_file.model_dump_json(indent=2) + "\n"
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, ValueError) as e:
            raise PersistFailure(f"Failed to write {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.debug(f"Saved {len(self.entries)} commands to {self.path}")
        return self.path

    # =========================================================================
    # Core Operations
    # =========================================================================

    def add(self, entry: CommandEntry, overwrite: bool = False) -> CommandEntry:
        """Add an entry.

        Args:
            entry: Entry to add.
            overwrite: Replace an existing entry with the same name. The
                replaced entry keeps its position and created_at.

        Returns:
            The stored entry.

        Raises:
            DuplicateName: If the name exists and overwrite is False.
        """
        existing = self.entries.get(entry.name)
        if existing is not None:
            if not overwrite:
                raise DuplicateName(entry.name)
            entry = entry.model_copy(update={"created_at": existing.created_at})
            entry.touch()
            logger.info(f"Overwriting command '{entry.name}'")
        self.entries[entry.name] = entry
        return entry

    def get(self, name: str) -> CommandEntry:
        """Get an entry by exact name.

        Raises:
            NotFound: If no entry has this name.
        """
        try:
            return self.entries[name]
        except KeyError:
            raise NotFound(f"No command named '{name}'") from None

    def list(self) -> list[CommandEntry]:
        """All entries in insertion order."""
        return list(self.entries.values())

    def remove(self, name: str) -> CommandEntry:
        """Remove an entry by exact name.

        Returns:
            The removed entry.

        Raises:
            NotFound: If no entry has this name.
        """
        entry = self.get(name)
        del self.entries[name]
        return entry

    def replace_all(self, entries: Iterable[CommandEntry]) -> None:
        """Swap the whole store content.

        Raises:
            DuplicateName: If two entries share a name. Current content is
                left unchanged.
        """
        replacement: dict[str, CommandEntry] = {}
        for entry in entries:
            if entry.name in replacement:
                raise DuplicateName(entry.name)
            replacement[entry.name] = entry
        self._entries = replacement
