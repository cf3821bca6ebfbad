"""
CLI module for the keepc package.

Provides the keepc command-line entry point.
"""

from keepc.cli.main import build_parser, console_main, main

__all__ = [
    "build_parser",
    "console_main",
    "main",
]
