from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from MailSearch.config.output import OutputConfig, check_output, load_output
from MailSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from MailSearch.config.servers import ServerConfig, check_servers, load_servers

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    servers: tuple[ServerConfig, ...]
    output: OutputConfig

    def server(self, name: str) -> ServerConfig:
        """Return the server named ``name``.

        Raises:
            KeyError: If no server has that name.
        """
        for server in self.servers:
            if server.name == name:
                return server
        raise KeyError(f"Unknown server: {name}")


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    servers = load_servers(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_servers(servers)
    check_output(output)

    return AppConfig(runtime=runtime, servers=servers, output=output)


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Load config by merging defaults and an optional override.

    Args:
        config_path: User config file.
        default_path: Defaults file merged under ``config_path``.
        _defaults_text: Defaults YAML given inline instead of ``default_path``.

    Returns:
        Parsed configuration.
    """
    if _defaults_text is None:
        if config_path == default_path:
            return load_config(config_path)
        _defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(_defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings.

    Nested mappings merge key by key; lists (such as ``servers``) are
    replaced as a whole.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
