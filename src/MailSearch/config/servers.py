"""Search server configuration.

Each entry under ``servers`` describes one ``estcmd`` index and how its
file paths map back to mail groups. Nothing here is process-wide: sources
receive their own `ServerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from MailSearch.config.common import (
    expand_path,
    expect_int,
    expect_str,
    expect_str_list,
    expect_str_map,
    get_optional_value,
    get_required_value,
)
from MailSearch.sources.estraier.client import DEFAULT_ENV, DEFAULT_PROGRAM
from MailSearch.sources.estraier.parser import BACKENDS
from MailSearch.sources.registry import supported_engine_names

DEFAULT_INDEX_DIR = "~/Mail/casket"
DEFAULT_REMOVE_PREFIX = "~/Mail/"
DEFAULT_MAX_RESULTS = 300


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Settings for one search server.

    Attributes:
        name: Server identity attached to every result.
        engine: Search engine driving this server (only ``estraier``).
        program: ``estcmd`` executable name or path.
        index_dir: Index directory passed to ``estcmd search``.
        remove_prefix: Directory prefix stripped to form group names.
        additional_switches: Raw switches inserted before the index directory.
        max_results: Hit limit; negative means unlimited.
        backend: Mailbox backend, ``nnml`` or ``nnmaildir``.
        env: Variables pinned in the child environment.
    """

    name: str
    engine: str = "estraier"
    program: str = DEFAULT_PROGRAM
    index_dir: str = expand_path(DEFAULT_INDEX_DIR)
    remove_prefix: str = expand_path(DEFAULT_REMOVE_PREFIX)
    additional_switches: tuple[str, ...] = ()
    max_results: int = DEFAULT_MAX_RESULTS
    backend: str = "nnml"
    env: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ENV))


def load_servers(raw: Mapping[str, Any]) -> tuple[ServerConfig, ...]:
    """Load the ``servers`` list.

    Args:
        raw: Root configuration mapping.

    Returns:
        Server configs in configured order.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If the list is missing.
    """
    servers_obj = raw.get("servers")
    if servers_obj is None:
        raise ValueError("Missing required config: servers")
    if not isinstance(servers_obj, list):
        raise TypeError("servers must be a list")
    return tuple(parse_server(item, f"servers[{idx}]") for idx, item in enumerate(servers_obj))


def parse_server(value: Any, config_key: str) -> ServerConfig:
    """Parse one server mapping into `ServerConfig`."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")

    env = dict(DEFAULT_ENV)
    env.update(expect_str_map(get_optional_value(value, "env", {}), f"{config_key}.env"))

    return ServerConfig(
        name=expect_str(get_required_value(value, "name", f"{config_key}.name"), f"{config_key}.name").strip(),
        engine=expect_str(get_optional_value(value, "engine", "estraier"), f"{config_key}.engine").strip().lower(),
        program=expand_path(
            expect_str(get_optional_value(value, "program", DEFAULT_PROGRAM), f"{config_key}.program")
        ),
        index_dir=expand_path(
            expect_str(get_optional_value(value, "index_dir", DEFAULT_INDEX_DIR), f"{config_key}.index_dir")
        ),
        remove_prefix=expand_path(
            expect_str(
                get_optional_value(value, "remove_prefix", DEFAULT_REMOVE_PREFIX),
                f"{config_key}.remove_prefix",
            )
        ),
        additional_switches=tuple(
            expect_str_list(
                get_optional_value(value, "additional_switches", []),
                f"{config_key}.additional_switches",
            )
        ),
        max_results=expect_int(
            get_optional_value(value, "max_results", DEFAULT_MAX_RESULTS),
            f"{config_key}.max_results",
        ),
        backend=expect_str(get_optional_value(value, "backend", "nnml"), f"{config_key}.backend").strip().lower(),
        env=env,
    )


def check_servers(servers: tuple[ServerConfig, ...]) -> None:
    """Validate server constraints.

    Raises:
        ValueError: If values violate server constraints.
    """
    if not servers:
        raise ValueError("servers must include at least one server")

    engines = set(supported_engine_names())
    seen: set[str] = set()
    for idx, server in enumerate(servers):
        key = f"servers[{idx}]"
        if not server.name:
            raise ValueError(f"{key}.name must not be empty")
        if server.name in seen:
            raise ValueError(f"{key}.name is duplicated: {server.name}")
        seen.add(server.name)
        if server.engine not in engines:
            raise ValueError(f"{key}.engine has unknown engine: {server.engine}")
        if not server.program.strip():
            raise ValueError(f"{key}.program must not be empty")
        if not server.index_dir.strip():
            raise ValueError(f"{key}.index_dir must not be empty")
        if server.max_results == 0:
            raise ValueError(f"{key}.max_results must be negative (unlimited) or positive")
        if server.backend not in BACKENDS:
            raise ValueError(f"{key}.backend must be one of {list(BACKENDS)}")
