"""Per-invocation state shared by verb handlers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from keepc.cli.prompts import ask, choose
from keepc.config import Config
from keepc.core.datamodels import CommandEntry
from keepc.core.exceptions import NotFound
from keepc.engine.matcher import resolve
from keepc.store import CommandStore

if TYPE_CHECKING:
    from keepc.cli.commands.registry import Verb


@dataclass
class AppContext:
    """Configuration, store and parser for one keepc invocation."""

    config: Config
    store_path: Optional[Path] = None
    parser: Optional[argparse.ArgumentParser] = None
    subparsers: dict["Verb", argparse.ArgumentParser] = field(default_factory=dict)
    _store: Optional[CommandStore] = field(default=None, repr=False)

    @property
    def store(self) -> CommandStore:
        """The command store, created on first use."""
        if self._store is None:
            self._store = CommandStore(self.store_path)
        return self._store

    def ask(self, message: str) -> Optional[str]:
        """Prompt the user, honoring the 'simple' setting."""
        return ask(message, simple=self.config.get("simple"))

    def select(self, pattern: str, action: str) -> CommandEntry:
        """Resolve a pattern to a single saved command.

        An exact name is used directly; otherwise the matches are listed
        and the user picks one.

        Raises:
            NotFound: If nothing matches.
            SelectionCancelled: If the user does not pick a valid entry.
        """
        candidates = resolve(pattern, self.store.list(), self.config.get("match_mode"))
        if not candidates:
            raise NotFound(f"No commands found matching '{pattern}'")
        if len(candidates) == 1 and candidates[0].name == pattern:
            return candidates[0]
        return choose(candidates, action, self.ask)
