"""
Core module for the keepc package.

Provides the command entry model and the error taxonomy.
"""

from keepc.core.datamodels import CommandEntry, StoreFile, validate
from keepc.core.exceptions import (
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
)

__all__ = [
    # Models
    "CommandEntry",
    "StoreFile",
    "validate",
    # Exceptions
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
