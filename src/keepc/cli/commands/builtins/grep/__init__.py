"""Grep command - search saved commands."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.cli.output import print_entries
from keepc.core.exceptions import ExitCode
from keepc.engine.matcher import match

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pattern", nargs="*", help="Words to look for, in any order")
    parser.add_argument(
        "--phrase", action="store_const", const="phrase", dest="match_mode",
        help="Match the pattern as one piece of text",
    )


@verb_registry.register(
    Verb.GREP,
    "Search for commands matching a pattern",
    usage="keepc grep [--phrase] <pattern...>",
    configure=configure,
)
def cmd_grep(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Print saved commands matching the pattern. No match is not an error."""
    pattern = " ".join(args.pattern)
    mode = args.match_mode or ctx.config.get("match_mode")
    matches = match(pattern, ctx.store.list(), mode)
    if not matches:
        if pattern.strip():
            print(f"No commands found matching '{pattern}'")
        else:
            print("No commands saved.")
        return ExitCode.OK
    print_entries(matches)
    return ExitCode.OK
