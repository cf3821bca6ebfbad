"""Command store persistence for keepc."""

from keepc.store.manager import CommandStore

__all__ = ["CommandStore"]
