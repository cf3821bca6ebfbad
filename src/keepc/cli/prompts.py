"""
Interactive prompts for keepc.

Uses prompt_toolkit on a terminal, and plain input() when stdin is not a
terminal or the 'simple' config option is set.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence

from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.styles import Style

from keepc.cli.output import format_entry
from keepc.core.datamodels import CommandEntry
from keepc.core.exceptions import SelectionCancelled

AskFn = Callable[[str], Optional[str]]


def get_style() -> Style:
    """Get the prompt style."""
    return Style.from_dict({
        "prompt": "ansicyan bold",
    })


def ask(message: str, simple: bool = False) -> Optional[str]:
    """Ask the user for one line of input.

    Args:
        message: Prompt text.
        simple: Use input() instead of prompt_toolkit.

    Returns:
        The line typed (without the newline), or None on EOF/Ctrl-C.
    """
    try:
        if simple or not sys.stdin.isatty():
            return input(message)
        return pt_prompt(HTML("<prompt>{}</prompt>").format(message), style=get_style())
    except (EOFError, KeyboardInterrupt):
        return None


def choose(
    entries: Sequence[CommandEntry],
    action: str,
    ask_fn: AskFn,
) -> CommandEntry:
    """Show a numbered list of entries and let the user pick one.

    Args:
        entries: Candidates, in display order.
        action: Verb shown in the prompt (e.g. "delete").
        ask_fn: Reads the answer.

    Returns:
        The chosen entry.

    Raises:
        SelectionCancelled: On EOF, an empty answer or a number out of range.
    """
    print(f"Found {len(entries)} matching commands:")
    width = max(len(e.name) for e in entries)
    for i, entry in enumerate(entries, start=1):
        print(f"[{i}] {format_entry(entry, width)}")

    answer = ask_fn(f"Enter a number to {action}: ")
    if answer is None or not answer.strip():
        raise SelectionCancelled("Nothing selected")
    try:
        choice = int(answer.strip())
    except ValueError:
        raise SelectionCancelled(f"Not a number: {answer.strip()!r}") from None
    if not 1 <= choice <= len(entries):
        raise SelectionCancelled(f"Choice out of range: {choice}")
    return entries[choice - 1]
