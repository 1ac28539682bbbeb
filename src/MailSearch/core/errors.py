"""Search-specific exceptions."""

from __future__ import annotations

from typing import Sequence


class SearchError(Exception):
    """Base exception for search adapter errors."""


class QuerySyntaxError(SearchError, ValueError):
    """Raised when a raw query line cannot be tokenized."""


class SearchProcessError(SearchError):
    """The search program could not be started or exited with an error.

    Attributes:
        argv: Command line that was executed.
        exit_code: Exit status, or None when the program did not start.
        output: Whatever the program printed before it stopped.
    """

    def __init__(self, argv: Sequence[str], exit_code: int | None, output: str = "") -> None:
        self.argv = list(argv)
        self.exit_code = exit_code
        self.output = output
        program = self.argv[0] if self.argv else "<none>"
        if exit_code is None:
            message = f"Couldn't run {program}: program could not be started"
        else:
            message = f"Couldn't run {program}: exit status {exit_code}"
        super().__init__(message)
