"""List command - show all saved commands."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.cli.output import print_entries
from keepc.core.exceptions import ExitCode

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


@verb_registry.register(Verb.LIST, "List all saved commands")
def cmd_list(ctx: "AppContext", args: argparse.Namespace) -> int:
    """List saved commands in the order they were added."""
    entries = ctx.store.list()
    if not entries:
        print("No commands saved.")
        return ExitCode.OK
    print_entries(entries)
    return ExitCode.OK
