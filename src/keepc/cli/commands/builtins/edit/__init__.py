"""Edit command - edit all saved commands in a text editor."""
from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from keepc.cli.commands.registry import Verb, verb_registry
from keepc.core.exceptions import ExitCode
from keepc.engine.editor import edit_entries, get_editor

if TYPE_CHECKING:
    from keepc.cli.context import AppContext


@verb_registry.register(Verb.EDIT, "Edit commands in a text editor ($VISUAL/$EDITOR)")
def cmd_edit(ctx: "AppContext", args: argparse.Namespace) -> int:
    """Round-trip the whole store through an editor."""
    store = ctx.store
    edited = edit_entries(store.entries, editor=get_editor(ctx.config.editor))
    if edited is None:
        print("No changes made.")
        return ExitCode.OK
    store.replace_all(edited)
    store.persist()
    print(f"Commands updated ({len(edited)} saved).")
    return ExitCode.OK
