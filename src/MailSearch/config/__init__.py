from __future__ import annotations

"""Public configuration API for MailSearch."""

from MailSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from MailSearch.config.output import OutputConfig
from MailSearch.config.runtime import RuntimeConfig
from MailSearch.config.servers import ServerConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "ServerConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
