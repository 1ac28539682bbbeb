"""CLI package for MailSearch command orchestration.

This package contains the modular CLI components for the search and
translate commands.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from MailSearch.cli.runner import CommandRunner
from MailSearch.cli.ui import cli


def main() -> None:
    """Run MailSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
