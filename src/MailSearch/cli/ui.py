"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from MailSearch.cli.runner import CommandRunner
from MailSearch.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults


@click.group(help="MailSearch: search mail indexed by Hyper Estraier.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over the defaults when they exist).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading the config,
    so they also reach the search program's environment.
    """
    load_dotenv()

    if DEFAULT_CONFIG_PATH.exists():
        cfg = load_config_with_defaults(config_path)
    else:
        cfg = load_config(config_path)
    ctx.obj = CommandRunner(cfg)


@cli.command("search")
@click.argument("query")
@click.option(
    "--server",
    "servers",
    multiple=True,
    help="Search only this server (repeatable). Defaults to all servers.",
)
@click.pass_context
def search_cmd(ctx: click.Context, query: str, servers: tuple[str, ...]) -> None:
    """Search mail and print matches through the logger.

    QUERY may mix free text with @cdate, @author, @size, @title and @uri
    field markers, e.g. '@title=report @cdate>2013/01/01 budget'.
    """
    runner: CommandRunner = ctx.obj
    runner.run_search(action=ctx.command.name, query=query, servers=servers)


@cli.command("show")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.pass_context
def show_cmd(ctx: click.Context, path: Path) -> None:
    """Print results saved by a search with JSON output."""
    runner: CommandRunner = ctx.obj
    runner.run_show(action=ctx.command.name, path=path)


@cli.command("translate")
@click.argument("query")
@click.option("--server", default=None, help="Server whose settings build the command line.")
@click.pass_context
def translate_cmd(ctx: click.Context, query: str, server: str | None) -> None:
    """Show the estcmd command line for QUERY without running it."""
    runner: CommandRunner = ctx.obj
    argv = runner.run_translate(action=ctx.command.name, query=query, server=server)
    click.echo(" ".join(argv))
