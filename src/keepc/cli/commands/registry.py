"""
Verb registry for the keepc command line.

Every verb the user can type resolves, through one static alias table, to a
Verb. Handlers are registered against a Verb with a decorator.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


class Verb(str, Enum):
    """Canonical operations."""

    NEW = "new"
    LIST = "list"
    GREP = "grep"
    RM = "rm"
    EDIT = "edit"
    RUN = "run"
    HELP = "help"


# Every accepted spelling, canonical names included
VERB_ALIASES: dict[str, Verb] = {
    "new": Verb.NEW,
    "add": Verb.NEW,
    "list": Verb.LIST,
    "ls": Verb.LIST,
    "grep": Verb.GREP,
    "find": Verb.GREP,
    "search": Verb.GREP,
    "rm": Verb.RM,
    "remove": Verb.RM,
    "delete": Verb.RM,
    "edit": Verb.EDIT,
    "run": Verb.RUN,
    "execute": Verb.RUN,
    "help": Verb.HELP,
}


def resolve_verb(word: str) -> Optional[Verb]:
    """Map a typed verb or alias to its Verb, or None if it is not one."""
    return VERB_ALIASES.get(word)


def aliases_for(verb: Verb) -> list[str]:
    """Alternative spellings of a verb, in table order."""
    return [word for word, target in VERB_ALIASES.items() if target is verb and word != verb.value]


Handler = Callable[["AppContext", argparse.Namespace], int]


@dataclass
class VerbEntry:
    """Entry for a registered verb."""

    verb: Verb
    handler: Handler
    description: str
    usage: str | None = None
    configure: Optional[Callable[[argparse.ArgumentParser], None]] = None
    aliases: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.verb.value


class VerbRegistry:
    """Registry for verb handlers."""

    def __init__(self):
        self._verbs: dict[Verb, VerbEntry] = {}

    def register(
        self,
        verb: Verb,
        description: str,
        usage: str | None = None,
        configure: Optional[Callable[[argparse.ArgumentParser], None]] = None,
    ) -> Callable:
        """Decorator to register a verb handler.

        Args:
            verb: Operation the handler implements
            description: Short description for help
            usage: Usage string (e.g., "keepc grep <pattern>")
            configure: Adds the verb's arguments to its subparser

        Returns:
            Decorator function

        Example:
            @verb_registry.register(Verb.LIST, "List all saved commands")
            def cmd_list(ctx, args):
                print_entries(ctx.store.list())
                return ExitCode.OK
        """
        def decorator(func: Handler) -> Handler:
            self._verbs[verb] = VerbEntry(
                verb=verb,
                handler=func,
                description=description,
                usage=usage or f"keepc {verb.value}",
                configure=configure,
                aliases=aliases_for(verb),
            )
            return func
        return decorator

    def get(self, name: str | Verb) -> VerbEntry | None:
        """Get a verb entry by Verb, name or alias."""
        verb = name if isinstance(name, Verb) else resolve_verb(name)
        if verb is None:
            return None
        return self._verbs.get(verb)

    def all_verbs(self) -> list[VerbEntry]:
        """Registered verbs in Verb declaration order."""
        return [self._verbs[verb] for verb in Verb if verb in self._verbs]

    def __contains__(self, name: str | Verb) -> bool:
        return self.get(name) is not None


# Global verb registry
verb_registry = VerbRegistry()
