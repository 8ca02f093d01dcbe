"""filters command — inspect or reset the saved filter options."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prboard_store.preferences import load_filters, reset_filters

console = Console()


@click.group("filters")
def filters_cmd():
    """Saved dashboard filters (written by `prboard dashboard --save-filters`)."""


@filters_cmd.command("show")
@click.pass_context
def show_cmd(ctx):
    options = load_filters(ctx.obj["store"])

    table = Table(title="Saved filters", show_header=True, header_style="bold cyan")
    table.add_column("Option", style="bold")
    table.add_column("Value")
    table.add_row("search", options.search_query or "[dim]-[/dim]")
    table.add_row("repositories", ", ".join(sorted(options.repositories)) or "[dim]all[/dim]")
    table.add_row("authors", ", ".join(sorted(options.authors)) or "[dim]all[/dim]")
    table.add_row("hide stale", "yes" if options.hide_stale else "no")
    table.add_row("sort by", options.sort_by)
    table.add_row("prioritize my reviews", "yes" if options.prioritize_my_reviews else "no")
    console.print(table)
    console.print(f"{options.active_filter_count} active filter(s)")


@filters_cmd.command("reset")
@click.pass_context
def reset_cmd(ctx):
    reset_filters(ctx.obj["store"])
    console.print("[green]Filters reset to defaults.[/green]")
