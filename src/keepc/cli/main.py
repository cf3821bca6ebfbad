#!/usr/bin/env python3
"""
CLI entry point for keeping and running saved shell commands (keepc command).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from keepc import __version__
from keepc.cli.commands import Verb, load_builtins, resolve_verb, verb_registry
from keepc.cli.context import AppContext
from keepc.config import get_config
from keepc.core.exceptions import ExitCode, KeepcError
from keepc.logging import close_logging, configure_logging, log_exception

logger = logging.getLogger(__name__)

# Global options that consume the following argument
OPTIONS_WITH_VALUE = {"--store"}


def build_parser() -> tuple[argparse.ArgumentParser, dict[Verb, argparse.ArgumentParser]]:
    """Build the argument parser from the registered verbs.

    Returns:
        The top-level parser and the subparser of each verb.
    """
    parser = argparse.ArgumentParser(
        prog="keepc",
        description="Keep and manage useful commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    keepc new build make all        Save 'make all' as 'build'
    keepc list                      List all saved commands
    keepc grep deploy prod          Find commands mentioning both words
    keepc deploy prod               Same as 'keepc grep deploy prod'
    keepc run build                 Run the command saved as 'build'
    keepc rm build                  Delete it
    keepc edit                      Edit all commands in $EDITOR
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--store", type=Path, metavar="PATH", help="Use this command store file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    verb_parsers: dict[Verb, argparse.ArgumentParser] = {}
    for entry in verb_registry.all_verbs():
        sub = subparsers.add_parser(
            entry.name,
            aliases=entry.aliases,
            help=entry.description,
            description=entry.description,
            usage=entry.usage,
        )
        if entry.configure is not None:
            entry.configure(sub)
        sub.set_defaults(verb=entry.verb)
        verb_parsers[entry.verb] = sub

    return parser, verb_parsers


def insert_implicit_grep(argv: Sequence[str]) -> list[str]:
    """Treat a leading word that is not a verb as a search pattern.

    "keepc deploy prod" becomes "keepc grep deploy prod". Global options
    before the first word are left in place, and "--" forces everything
    after it to be a pattern.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            return argv[:i] + ["grep", "--"] + argv[i + 1:]
        if arg.startswith("-"):
            i += 2 if arg in OPTIONS_WITH_VALUE else 1
            continue
        if resolve_verb(arg) is None:
            return argv[:i] + ["grep"] + argv[i:]
        return argv
    return argv


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run keepc and return its exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)

    load_builtins()
    parser, verb_parsers = build_parser()

    try:
        args = parser.parse_args(insert_implicit_grep(argv))
    except SystemExit as e:
        # argparse exits for --help, --version and usage errors
        return int(e.code or 0)

    if getattr(args, "verb", None) is None:
        parser.print_help()
        return ExitCode.OK

    config = get_config()
    configure_logging(
        verbose=args.verbose or config.get("verbose"),
        log_file=config.log_file,
    )

    store_path = args.store or (Path(config.store_path) if config.store_path else None)
    ctx = AppContext(
        config=config,
        store_path=store_path,
        parser=parser,
        subparsers=verb_parsers,
    )
    entry = verb_registry.get(args.verb)
    logger.debug(f"Dispatching '{args.command}' to {entry.name}")

    try:
        return int(entry.handler(ctx, args))
    except KeepcError as e:
        print(f"Error: {log_exception(e)}", file=sys.stderr)
        return int(e.exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.INTERRUPTED
    finally:
        close_logging()


def console_main() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    console_main()
