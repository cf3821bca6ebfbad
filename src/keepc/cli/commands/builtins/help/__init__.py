"""Help command - show available verbs."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, resolve_verb, verb_registry
from keepc.core.exceptions import ExitCode

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("topic", nargs="?", help="Verb to show detailed help for")


def print_help() -> None:
    """Print the verb summary."""
    print("Usage: keepc <command> [args]   or   keepc <pattern...>\n")
    print("Commands:")
    for entry in verb_registry.all_verbs():
        aliases = f" ({', '.join(entry.aliases)})" if entry.aliases else ""
        print(f"  {entry.name + aliases:<26} - {entry.description}")
    print("\nAny other first word searches saved commands, like 'keepc grep'.")


@verb_registry.register(
    Verb.HELP,
    "Show available commands",
    usage="keepc help [command]",
    configure=configure,
)
def cmd_help(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Show the verb summary, or one verb's argument help."""
    if not args.topic:
        print_help()
        return ExitCode.OK

    verb = resolve_verb(args.topic)
    if verb is None or verb not in ctx.subparsers:
        print(f"Unknown command: {args.topic}\n")
        print_help()
        return ExitCode.USAGE
    ctx.subparsers[verb].print_help()
    return ExitCode.OK
