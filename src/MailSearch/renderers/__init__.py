"""Output renderers for command results.

Provides abstraction and implementations for writing search results to
the console or to JSON files, and a factory that picks writers from
configuration.
"""

from __future__ import annotations

from MailSearch.config import AppConfig
from MailSearch.renderers.base import MultiOutputWriter, OutputWriter
from MailSearch.renderers.console import ConsoleOutputWriter, render_text
from MailSearch.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no known format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
