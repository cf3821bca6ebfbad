"""Run command - execute a saved command."""
from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.engine.executor import execute

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pattern", nargs="+", help="Command name, or words to search for")
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Do not print the command before running it",
    )


@verb_registry.register(
    Verb.RUN,
    "Execute a saved command",
    usage="keepc run [-q] <name|pattern...>",
    configure=configure,
)
def cmd_run(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Run a saved command and return its exit status as ours."""
    entry = ctx.select(" ".join(args.pattern), "execute")
    if ctx.config.get("echo_command") and not args.quiet:
        print(f"$ {entry.body}", file=sys.stderr, flush=True)
    sys.stdout.flush()
    result = execute(entry, shell=ctx.config.shell)
    return result.exit_code
