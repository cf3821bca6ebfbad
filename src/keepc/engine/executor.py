"""
Executor for saved commands.

Runs a command body through the user's shell with the terminal attached.
The body is run as-is: keepc is a personal memory aid and does not sandbox
or inspect what it runs.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from keepc.core.datamodels import CommandEntry
from keepc.core.exceptions import SpawnFailure

logger = logging.getLogger(__name__)

DEFAULT_POSIX_SHELL = "/bin/sh"


@dataclass
class ExecResult:
    """Outcome of running a saved command."""

    name: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def exit_code(self) -> int:
        """Exit status in shell convention (128+N for a signal N)."""
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode


def default_shell() -> str:
    """The invoking user's shell."""
    if sys.platform == "win32":
        return os.environ.get("COMSPEC", "cmd.exe")
    return os.environ.get("SHELL") or DEFAULT_POSIX_SHELL


def build_argv(body: str, shell: Optional[str] = None) -> list[str]:
    """Build the argument vector that runs body through shell."""
    shell = shell or default_shell()
    if sys.platform == "win32":
        return [shell, "/C", body]
    return [shell, "-c", body]


def execute(
    entry: CommandEntry,
    shell: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExecResult:
    """Run a saved command and wait for it.

    stdin, stdout and stderr are inherited, so the command talks to the
    terminal directly. A non-zero exit is returned, not raised, and the
    command is never retried.

    Args:
        entry: Command to run.
        shell: Shell executable. Defaults to $SHELL, then /bin/sh.
        env: Environment for the child. Defaults to this process's environment.

    Returns:
        ExecResult with the child's return code.

    Raises:
        SpawnFailure: If the shell cannot be started.
    """
    argv = build_argv(entry.body, shell)
    logger.debug(f"Running '{entry.name}' via {argv[0]}")

    try:
        completed = subprocess.run(
            argv,
            env=dict(env) if env is not None else os.environ.copy(),
        )
    except OSError as e:
        raise SpawnFailure(f"Could not start {argv[0]}: {e}") from e

    result = ExecResult(name=entry.name, returncode=completed.returncode)
    if not result.success:
        logger.info(f"Command '{entry.name}' exited with status {result.exit_code}")
    return result
