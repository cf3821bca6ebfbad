"""
Exception classes and exit codes for keepc.

Every error raised by the core carries the exit code the CLI reports for it.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Stable process exit codes."""

    OK = 0
    ERROR = 1
    USAGE = 2
    VALIDATION = 3
    DUPLICATE_NAME = 4
    NOT_FOUND = 5
    CORRUPT_STORE = 6
    PERSIST_FAILURE = 7
    SPAWN_FAILURE = 8
    EDITOR = 9
    CANCELLED = 10
    INTERRUPTED = 130


class KeepcError(Exception):
    """Base exception for keepc errors."""

    exit_code: ExitCode = ExitCode.ERROR


# ============================================================================
# Entry validation
# ============================================================================

class EntryValidationError(KeepcError):
    """A name/body pair was rejected."""

    exit_code = ExitCode.VALIDATION


class EmptyName(EntryValidationError):
    """Name is empty or whitespace-only."""


class EmptyBody(EntryValidationError):
    """Body is empty or whitespace-only."""


class InvalidName(EntryValidationError):
    """Name cannot be stored or edited safely."""


class InvalidText(EntryValidationError):
    """Text is not valid Unicode (e.g. undecodable bytes from the command line)."""


# ============================================================================
# Store
# ============================================================================

class StoreError(KeepcError):
    """Base exception for store errors."""


class DuplicateName(StoreError):
    """An entry with this name already exists."""

    exit_code = ExitCode.DUPLICATE_NAME

    def __init__(self, name: str):
        super().__init__(f"A command named '{name}' already exists (use --force to overwrite)")
        self.name = name


class NotFound(StoreError):
    """No entry with this name (or matching this pattern)."""

    exit_code = ExitCode.NOT_FOUND


class CorruptStore(StoreError):
    """The backing file exists but cannot be parsed."""

    exit_code = ExitCode.CORRUPT_STORE

    def __init__(self, path, reason: str):
        super().__init__(
            f"Command store {path} is corrupt: {reason}\n"
            f"Fix or remove the file before making changes."
        )
        self.path = path
        self.reason = reason


class PersistFailure(StoreError):
    """Writing the backing file failed; on-disk content is unchanged."""

    exit_code = ExitCode.PERSIST_FAILURE


# ============================================================================
# Execution and interaction
# ============================================================================

class ExecError(KeepcError):
    """Base exception for execution errors."""


class SpawnFailure(ExecError):
    """The child process could not be started."""

    exit_code = ExitCode.SPAWN_FAILURE


class EditorError(KeepcError):
    """The editor failed or returned text that cannot be imported."""

    exit_code = ExitCode.EDITOR


class SelectionCancelled(KeepcError):
    """The user did not pick a valid entry."""

    exit_code = ExitCode.CANCELLED
