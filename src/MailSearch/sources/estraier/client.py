"""``estcmd`` process client.

Runs the Hyper Estraier command-line tool once and returns its exit status and
captured output. Building the command line and parsing the output are handled
elsewhere.
"""

from __future__ import annotations

import os
import subprocess
from typing import Mapping, Sequence

from MailSearch.utils.log import log

DEFAULT_PROGRAM = "estcmd"
DEFAULT_ENV: Mapping[str, str] = {"LC_MESSAGES": "C"}


def child_env(overrides: Mapping[str, str], base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Build the environment for one child process.

    Args:
        overrides: Variables pinned for the child (e.g. ``LC_MESSAGES=C``).
        base: Environment to start from; defaults to a copy of ``os.environ``.

    Returns:
        A new mapping; neither ``base`` nor ``os.environ`` is modified.
    """
    env = dict(os.environ if base is None else base)
    env.update(overrides)
    return env


def build_search_argv(
    *,
    program: str,
    index_dir: str,
    text: str,
    attribute_args: Sequence[str] = (),
    additional_switches: Sequence[str] = (),
    max_results: int = -1,
) -> list[str]:
    """Build the ``estcmd search`` command line.

    Args:
        program: Executable name or path.
        index_dir: Index (casket) directory.
        text: Free-text part of the query.
        attribute_args: ``-attr`` pairs from the translated query.
        additional_switches: Raw extra switches from configuration.
        max_results: Maximum number of hits; negative means unlimited.

    Returns:
        argv list ready for `EstcmdClient.run`.
    """
    return [
        program,
        "search",
        "-vu",
        "-max",
        str(max_results),
        *attribute_args,
        *additional_switches,
        index_dir,
        text,
    ]


class EstcmdClient:
    """Low-level runner for the ``estcmd`` program.

    Each call starts one blocking child process with an empty stdin and
    captures stdout and stderr together. There is no timeout and no retry.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def run(self, argv: Sequence[str], env: Mapping[str, str] | None = None) -> tuple[int | None, str]:
        """Run one command and capture its output.

        Args:
            argv: Full command line, program first.
            env: Complete child environment; None inherits the parent's.

        Returns:
            ``(exit_code, text)``. ``exit_code`` is None when the program
            could not be started (missing program, NUL byte in argv or env);
            ``text`` then holds the error message.
        """
        log.debug("estcmd run: %s", " ".join(argv))
        try:
            proc = subprocess.run(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=None if env is None else dict(env),
                check=False,
            )
        except (OSError, ValueError) as e:
            log.debug("estcmd could not be started: %s", e)
            return None, str(e)

        text = proc.stdout.decode(self.encoding, errors="replace")
        log.debug("estcmd exit status=%s bytes=%d", proc.returncode, len(proc.stdout))
        return proc.returncode, text
