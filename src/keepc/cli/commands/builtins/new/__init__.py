"""New command - save a shell command under a name."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.core.datamodels import validate
from keepc.core.exceptions import ExitCode, SelectionCancelled

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-d", "--description", help="Short note shown next to the command")
    parser.add_argument(
        "-f", "--force", action="store_true",
        help="Overwrite an existing command with the same name",
    )
    parser.add_argument("name", nargs="?", help="Reference used to recall the command")
    parser.add_argument(
        "body", nargs=argparse.REMAINDER,
        help="The shell command; every word after the name, options included, is part of it",
    )


@verb_registry.register(
    Verb.NEW,
    "Save a new command",
    usage="keepc new [-d DESC] [-f] [name] [command...]  (options go before the name)",
    configure=configure,
)
def cmd_new(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Save a command, asking for whatever was not given on the command line.

    Options are only recognized before the name; anything after it, such as
    "-d", belongs to the command body.
    """
    name = args.name
    if name is None:
        name = ctx.ask("Enter name: ")
        if name is None:
            raise SelectionCancelled("Cancelled")
        name = name.strip()

    body = " ".join(args.body) if args.body else None
    if body is None:
        body = ctx.ask("Enter command: ")
        if body is None:
            raise SelectionCancelled("Cancelled")

    entry = validate(name, body, args.description)
    overwrite = args.force or ctx.config.get("overwrite")
    ctx.store.add(entry, overwrite=overwrite)
    ctx.store.persist()
    print(f"Saved command '{entry.name}'.")
    return ExitCode.OK
