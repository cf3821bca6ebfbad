"""
Engine module for the keepc package.

Provides pattern matching, command execution and the editor round-trip.
"""

from keepc.engine.editor import edit_entries, export_text, get_editor, import_text, parse_text
from keepc.engine.executor import ExecResult, default_shell, execute
from keepc.engine.matcher import MATCH_MODES, match, resolve

__all__ = [
    # Matcher
    "MATCH_MODES",
    "match",
    "resolve",
    # Executor
    "ExecResult",
    "default_shell",
    "execute",
    # Editor
    "edit_entries",
    "export_text",
    "get_editor",
    "import_text",
    "parse_text",
]
