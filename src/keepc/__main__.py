"""Allow running keepc as ``python -m keepc``."""

from keepc.cli.main import console_main

console_main()
