"""Remove command - delete a saved command."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.core.exceptions import ExitCode

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pattern", nargs="+", help="Command name, or words to search for")


@verb_registry.register(
    Verb.RM,
    "Delete a saved command",
    usage="keepc rm <name|pattern...>",
    configure=configure,
)
def cmd_rm(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Delete by exact name, or pick from the commands matching a pattern."""
    entry = ctx.select(" ".join(args.pattern), "delete")
    ctx.store.remove(entry.name)
    ctx.store.persist()
    print(f"Deleted command: {entry.name}")
    return ExitCode.OK
