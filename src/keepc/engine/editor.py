"""
Editor round-trip for bulk editing saved commands.

Commands are exported to a plain text file, opened in $VISUAL/$EDITOR and
parsed back. Format, one command per line:

    # comment
    build ::: make all
    multi ::: first line
    ... second line
    ::: optional description

Lines starting with "... " continue the previous body on a new line, and
lines starting with "::: " hold the description of the command above.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from keepc.core.datamodels import CommandEntry, validate
from keepc.core.exceptions import EditorError, EntryValidationError

logger = logging.getLogger(__name__)

SEPARATOR = " ::: "
CONTINUATION = "... "
DESCRIPTION = "::: "
DEFAULT_EDITOR = "vi"

HEADER = """\
# Edit saved commands below, one per line: <name> ::: <command>
# Lines starting with '... ' continue the command above on a new line.
# Lines starting with '::: ' are the description of the command above.
# Lines starting with '#' and blank lines are ignored.
# Delete a line to remove that command. Exit the editor with an error
# status to discard all changes.
"""


def get_editor(configured: Optional[str] = None) -> str:
    """Editor to launch: $VISUAL, then $EDITOR, then config, then vi."""
    return (
        os.environ.get("VISUAL")
        or os.environ.get("EDITOR")
        or configured
        or DEFAULT_EDITOR
    )


def _marker_lines(marker: str, text: str) -> list[str]:
    """Prefix every line of text with marker; empty lines get the bare marker."""
    return [f"{marker}{line}\n" if line else f"{marker.rstrip()}\n" for line in text.split("\n")]


def export_text(entries: Iterable[CommandEntry]) -> str:
    """Render entries in the editor text format."""
    lines = [HEADER]
    for entry in entries:
        first, *rest = entry.body.split("\n")
        lines.append(f"{entry.name}{SEPARATOR}{first}\n")
        for line in rest:
            lines.append(f"{CONTINUATION}{line}\n" if line else "...\n")
        if entry.description is not None:
            lines.extend(_marker_lines(DESCRIPTION, entry.description))
    return "".join(lines)


def _normalize_newlines(text: str) -> str:
    # Undo CRLF only when the editor rewrote every line ending; a lone \r
    # at the end of a line is part of a body.
    if "\n" in text and text.count("\r\n") == text.count("\n"):
        return text.replace("\r\n", "\n")
    return text


def parse_text(text: str) -> list[tuple[str, str, Optional[str]]]:
    """Parse editor text into (name, body, description) tuples.

    Raises:
        EditorError: If a line is neither a comment, blank, a continuation,
            a description nor a "name ::: body" line.
    """
    items: list[tuple[str, list[str], list[str]]] = []
    for lineno, line in enumerate(_normalize_newlines(text).split("\n"), start=1):
        if line.startswith(CONTINUATION) or line == "...":
            if not items:
                raise EditorError(f"Line {lineno}: continuation without a command above it")
            items[-1][1].append(line[len(CONTINUATION):])
            continue
        if line.startswith(DESCRIPTION) or line == DESCRIPTION.rstrip():
            if not items:
                raise EditorError(f"Line {lineno}: description without a command above it")
            items[-1][2].append(line[len(DESCRIPTION):])
            continue
        if not line.strip() or line.startswith("#"):
            continue
        if SEPARATOR not in line:
            raise EditorError(f"Line {lineno}: expected '<name>{SEPARATOR}<command>', got {line!r}")
        name, body = line.split(SEPARATOR, 1)
        items.append((name.strip(), [body], []))
    return [
        (name, "\n".join(body), "\n".join(description) if description else None)
        for name, body, description in items
    ]


def import_text(text: str, previous: dict[str, CommandEntry]) -> list[CommandEntry]:
    """Turn edited text into entries.

    Entries whose name already existed keep their created_at; modified_at
    only moves when the body or description changed. A renamed entry is a
    new entry and carries whatever description the text gives it.

    Raises:
        EditorError: On malformed text, invalid entries or duplicate names.
    """
    entries: list[CommandEntry] = []
    seen: set[str] = set()
    for name, body, description in parse_text(text):
        if name in seen:
            raise EditorError(f"Command '{name}' appears more than once")
        seen.add(name)

        try:
            fresh = validate(name, body, description)
        except EntryValidationError as e:
            raise EditorError(f"Invalid command '{name}': {e}") from e

        old = previous.get(name)
        if old is None:
            entries.append(fresh)
        elif old.body == fresh.body and old.description == fresh.description:
            entries.append(old)
        else:
            updated = old.model_copy(update={"body": fresh.body, "description": fresh.description})
            updated.touch()
            entries.append(updated)
    return entries


def run_editor(text: str, editor: str) -> str:
    """Open text in an editor and return what the user saved.

    Raises:
        EditorError: If the editor cannot start or exits non-zero.
    """
    with tempfile.NamedTemporaryFile(
        mode="w", encoding="utf-8", prefix="keepc-", suffix=".txt", delete=False
    ) as f:
        f.write(text)
        tmpfile = f.name

    try:
        logger.debug(f"Opening {tmpfile} in {editor}")
        try:
            subprocess.run([*shlex.split(editor), tmpfile], check=True)
        except subprocess.CalledProcessError as e:
            raise EditorError(f"Editor exited with status {e.returncode}; no changes saved") from e
        except OSError as e:
            raise EditorError(f"Could not start editor '{editor}': {e}") from e
        try:
            return Path(tmpfile).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise EditorError(f"Edited text is not valid UTF-8: {e}") from e
    finally:
        Path(tmpfile).unlink(missing_ok=True)


def edit_entries(
    entries: dict[str, CommandEntry],
    editor: Optional[str] = None,
) -> Optional[list[CommandEntry]]:
    """Let the user edit all entries in an external editor.

    Args:
        entries: Current store content.
        editor: Editor command. Defaults to get_editor().

    Returns:
        The edited entries, or None if the text came back unchanged.

    Raises:
        EditorError: If the editor fails or the edited text is invalid.
    """
    original = export_text(entries.values())
    edited = run_editor(original, editor or get_editor())
    if edited == original:
        return None
    return import_text(edited, entries)
