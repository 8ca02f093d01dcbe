"""pin command — keep chosen pull requests at the top of every tab."""

from __future__ import annotations

import click
from rich.console import Console

from prboard_store.pins import PinStore

console = Console()


def _pins(ctx) -> PinStore:
    return PinStore(ctx.obj["store"])


@click.group("pin")
def pin_cmd():
    """Pin or unpin pull requests by id.

    Pinned pull requests sort ahead of everything else on the dashboard.
    Ids are GitHub's numeric pull request ids, not PR numbers.
    """


@pin_cmd.command("toggle")
@click.argument("pr_id")
@click.pass_context
def toggle_cmd(ctx, pr_id: str):
    """Pin PR_ID if it is unpinned, unpin it otherwise."""
    if _pins(ctx).toggle(pr_id):
        console.print(f"[green]Pinned {pr_id}[/green]")
    else:
        console.print(f"[yellow]Unpinned {pr_id}[/yellow]")


@pin_cmd.command("add")
@click.argument("pr_id")
@click.pass_context
def add_cmd(ctx, pr_id: str):
    _pins(ctx).add(pr_id)
    console.print(f"[green]Pinned {pr_id}[/green]")


@pin_cmd.command("remove")
@click.argument("pr_id")
@click.pass_context
def remove_cmd(ctx, pr_id: str):
    _pins(ctx).remove(pr_id)
    console.print(f"[yellow]Unpinned {pr_id}[/yellow]")


@pin_cmd.command("list")
@click.pass_context
def list_cmd(ctx):
    pinned = _pins(ctx).ordered()
    if not pinned:
        console.print("[yellow]No pinned pull requests.[/yellow]")
        return
    for pr_id in pinned:
        console.print(pr_id)


@pin_cmd.command("clear")
@click.confirmation_option(prompt="Remove every pin?")
@click.pass_context
def clear_cmd(ctx):
    _pins(ctx).clear()
    console.print("[green]All pins removed.[/green]")
