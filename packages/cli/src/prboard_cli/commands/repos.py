"""repos command — list an organization's repositories."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.table import Table

from prboard_core.gh.pull_request import get_client, list_organization_repos

console = Console()


@click.command("repos")
@click.option("--org", default=None, help="GitHub organization. Defaults to `organization` in .prboard.yml.")
@click.pass_context
def repos_cmd(ctx, org: str | None):
    """List repositories of an organization, most recently updated first.

    Configured repositories are marked so you can see what the dashboard
    watches.
    """
    config = ctx.obj["config"]
    org = org or config.get("organization")
    if not org:
        raise click.UsageError("No organization given. Pass --org or set organization in .prboard.yml.")
    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    try:
        repos = list_organization_repos(get_client(token), org)
    except GithubException as e:
        raise click.ClickException(f"Could not list repositories for {org}: {e}")

    if not repos:
        console.print(f"[yellow]No repositories found for {org}.[/yellow]")
        return

    watched = set(config.get("repositories") or [])
    table = Table(title=f"Repositories — {org}", show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("Repository", style="bold")
    table.add_column("URL")
    for repo in repos:
        table.add_row("*" if repo.full_name in watched else "", repo.full_name, repo.url)
    console.print(table)
