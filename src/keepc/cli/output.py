"""Plain-text rendering of saved commands."""

from __future__ import annotations

from typing import Sequence

from keepc.core.datamodels import CommandEntry


def format_entry(entry: CommandEntry, width: int = 0) -> str:
    """Render one entry as "name  $ body  # description".

    Continuation lines of a multi-line body are indented under the first.
    """
    prefix = f"{entry.name:<{width}}  $ "
    body = entry.body.replace("\n", "\n" + " " * len(prefix))
    line = f"{prefix}{body}"
    if entry.description:
        line += f"  # {entry.description}"
    return line


def print_entries(entries: Sequence[CommandEntry]) -> None:
    """Print entries aligned on their names."""
    width = max((len(e.name) for e in entries), default=0)
    for entry in entries:
        print(format_entry(entry, width))
