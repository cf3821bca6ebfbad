"""
Pattern search over saved commands.

Matching is case-insensitive substring containment against an entry's name,
body and description. In token mode every whitespace-separated word of the
pattern must appear somewhere, in any order.
"""

from __future__ import annotations

import logging
from typing import Iterable, Literal

from keepc.core.datamodels import CommandEntry

logger = logging.getLogger(__name__)

MatchMode = Literal["tokens", "phrase"]
MATCH_MODES = ("tokens", "phrase")

# Rank buckets; lower sorts first
_RANK_EXACT_NAME = 0
_RANK_NAME = 1
_RANK_OTHER = 2


def split_pattern(pattern: str, mode: MatchMode = "tokens") -> list[str]:
    """Turn a pattern into the lowercase needles an entry must contain."""
    if mode not in MATCH_MODES:
        raise ValueError(f"Unknown match mode: {mode}")
    pattern = pattern.strip().lower()
    if not pattern:
        return []
    if mode == "phrase":
        return [pattern]
    return pattern.split()


def entry_matches(entry: CommandEntry, needles: list[str]) -> bool:
    """Check that every needle is found in at least one field of entry."""
    haystacks = [text.lower() for text in entry.matches_text()]
    return all(any(needle in text for text in haystacks) for needle in needles)


def _rank(entry: CommandEntry, pattern: str, needles: list[str]) -> int:
    name = entry.name.lower()
    if name == pattern:
        return _RANK_EXACT_NAME
    if all(needle in name for needle in needles):
        return _RANK_NAME
    return _RANK_OTHER


def match(
    pattern: str,
    entries: Iterable[CommandEntry],
    mode: MatchMode = "tokens",
) -> list[CommandEntry]:
    """Find entries matching a pattern.

    Args:
        pattern: Search text. Empty or whitespace-only matches everything.
        entries: Entries in insertion order.
        mode: "tokens" to match words in any order, "phrase" to match the
            whole pattern as one substring.

    Returns:
        Matching entries, best first. Entries of equal rank keep their
        original order. Empty list when nothing matches.
    """
    entries = list(entries)
    needles = split_pattern(pattern, mode)
    if not needles:
        return entries

    normalized = pattern.strip().lower()
    hits = [entry for entry in entries if entry_matches(entry, needles)]
    # sorted() is stable, so insertion order breaks ties
    ranked = sorted(hits, key=lambda e: _rank(e, normalized, needles))
    logger.debug(f"Pattern {pattern!r} ({mode}) matched {len(ranked)} of {len(entries)} commands")
    return ranked


def resolve(
    pattern: str,
    entries: Iterable[CommandEntry],
    mode: MatchMode = "tokens",
) -> list[CommandEntry]:
    """Find the entries a pattern refers to.

    An exact name wins outright and is returned alone; otherwise this is
    the same as match().
    """
    entries = list(entries)
    for entry in entries:
        if entry.name == pattern:
            return [entry]
    return match(pattern, entries, mode)
