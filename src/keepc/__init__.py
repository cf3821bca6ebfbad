"""
keepc - a personal keeper for useful shell commands.

Save a command under a short name, then list, search, edit, delete or run it.

Example usage:
    from keepc import CommandStore, validate, match, execute

    store = CommandStore()
    store.add(validate("build", "make all"))
    store.persist()

    for entry in match("make", store.list()):
        execute(entry)
"""

__version__ = "0.1.0"

# Core exports
from keepc.core import (
    CommandEntry,
    CorruptStore,
    DuplicateName,
    EditorError,
    EmptyBody,
    EmptyName,
    EntryValidationError,
    ExecError,
    ExitCode,
    InvalidName,
    InvalidText,
    KeepcError,
    NotFound,
    PersistFailure,
    SelectionCancelled,
    SpawnFailure,
    StoreError,
    validate,
)
from keepc.engine import ExecResult, execute, match, resolve
from keepc.store import CommandStore

__all__ = [
    # Version
    "__version__",
    # Core
    "CommandEntry",
    "validate",
    "CommandStore",
    "match",
    "resolve",
    "execute",
    "ExecResult",
    # Errors
    "ExitCode",
    "KeepcError",
    "EntryValidationError",
    "EmptyName",
    "EmptyBody",
    "InvalidName",
    "InvalidText",
    "StoreError",
    "DuplicateName",
    "NotFound",
    "CorruptStore",
    "PersistFailure",
    "ExecError",
    "SpawnFailure",
    "EditorError",
    "SelectionCancelled",
]
