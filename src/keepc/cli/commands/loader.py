"""
Verb loader - imports the builtin verb handlers.

Each verb lives in its own subdirectory of builtins/ with an __init__.py
that registers the handler using the verb_registry decorator:

    # builtins/list/__init__.py
    from keepc.cli.commands.registry import Verb, verb_registry

    @verb_registry.register(Verb.LIST, "List all saved commands")
    def cmd_list(ctx, args):
        ...
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Package builtins directory
PACKAGE_BUILTINS_DIR = Path(__file__).parent / "builtins"
PACKAGE_BUILTINS_MODULE = "keepc.cli.commands.builtins"


def discover_builtins(builtins_dir: Path = PACKAGE_BUILTINS_DIR) -> list[str]:
    """
    Discover verb packages in the builtins directory.

    Args:
        builtins_dir: Directory to search

    Returns:
        Sorted subpackage names that have an __init__.py.
    """
    names = []
    for subdir in sorted(builtins_dir.iterdir()):
        if not subdir.is_dir():
            continue
        # Skip hidden and private directories
        if subdir.name.startswith((".", "_")):
            continue
        if (subdir / "__init__.py").exists():
            names.append(subdir.name)
        else:
            logger.debug(f"Skipping {subdir.name}: no __init__.py")
    return names


def load_builtins() -> int:
    """
    Import every builtin verb package so its handler registers itself.

    Importing twice is harmless: modules are cached and registration
    replaces the entry for the same Verb.

    Returns:
        Number of loaded verb packages.
    """
    loaded = 0
    for name in discover_builtins():
        importlib.import_module(f"{PACKAGE_BUILTINS_MODULE}.{name}")
        loaded += 1
    logger.debug(f"Loaded {loaded} builtin verbs")
    return loaded
