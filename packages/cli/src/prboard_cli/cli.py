"""CLI entry point for prboard.

Commands:
  dashboard — fetch open pull requests and show them grouped by review status
  pin       — pin, unpin and list pinned pull requests
  filters   — show or reset the saved filter options
  repos     — list an organization's repositories
  init      — interactive setup wizard writing .prboard.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prboard_cli.commands.dashboard import dashboard_cmd
from prboard_cli.commands.filters import filters_cmd
from prboard_cli.commands.init import init_cmd
from prboard_cli.commands.pin import pin_cmd
from prboard_cli.commands.repos import repos_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .prboard.yml settings.

    Store selection hierarchy:
      store: gist   → GistStore   (requires gist_id and github_token)
      store: memory → MemoryStore (nothing persists past the process)
      (default)     → SQLiteStore (store_path or .prboard.db)
    """
    from prboard_store.memory import MemoryStore

    store_type = config.get("store", "sqlite")

    if store_type == "memory":
        return MemoryStore()

    if store_type == "gist":
        from prboard_store.gist import GistStore

        gist_id = config.get("gist_id")
        token = config.get("github_token")
        if not gist_id or not token:
            console.print(
                "[yellow]GistStore requires gist_id and a GitHub token. "
                "Pins and filters will not persist this session.[/yellow]"
            )
            return MemoryStore()
        return GistStore(gist_id=gist_id, token=token)

    from prboard_store.sqlite import SQLiteStore

    return SQLiteStore(db_path=config.get("store_path") or ".prboard.db")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("prboard"),
    prog_name="prboard",
)
@click.option(
    "--config",
    "config_path",
    default=".prboard.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRBOARD_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Open pull requests across your repositories, grouped by review status."""
    from prboard_core.config import load_config
    from prboard_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)
    config["config_path"] = config_path

    token = resolve_github_token()
    if token:
        config["github_token"] = token

    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.call_on_close(store.close)


main.add_command(dashboard_cmd)
main.add_command(pin_cmd)
main.add_command(filters_cmd)
main.add_command(repos_cmd)
main.add_command(init_cmd)
