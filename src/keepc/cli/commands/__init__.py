"""
Verb system for the keepc command line.

Verbs are the operations a user can ask for (new, list, grep, rm, edit,
run, help). Each builtin verb registers itself from its own package
under builtins/.
"""

from __future__ import annotations

from keepc.cli.commands.loader import load_builtins
from keepc.cli.commands.registry import (
    VERB_ALIASES,
    Verb,
    VerbRegistry,
    resolve_verb,
    verb_registry,
)

__all__ = [
    "VERB_ALIASES",
    "Verb",
    "VerbRegistry",
    "load_builtins",
    "resolve_verb",
    "verb_registry",
]
