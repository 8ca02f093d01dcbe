"""dashboard command — open pull requests grouped by review status."""

from __future__ import annotations

import time
from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from prboard_core.colors import color_for
from prboard_core.gh.pull_request import fetch_all_prs, get_client, get_viewer_login
from prboard_core.models import SORT_OPTIONS, STATUSES, FilterOptions, PullRequest
from prboard_core.pipeline import (
    filter_and_sort,
    group_by_status,
    mark_requested_reviewer,
    unique_authors,
    unique_repositories,
)
from prboard_core.status import classify_all
from prboard_core.utils.dates import format_time_ago
from prboard_store.pins import PinStore
from prboard_store.preferences import load_filters, save_filters

console = Console()

_STATUS_LABEL = {
    "APPROVED": "Approved",
    "CHANGES_REQUESTED": "Changes Requested",
    "NEEDS_REVIEW": "Needs Review",
    "DRAFT": "Draft",
    "UNKNOWN": "Unknown",
}

_STATUS_STYLE = {
    "APPROVED": "green",
    "CHANGES_REQUESTED": "red",
    "NEEDS_REVIEW": "yellow",
    "DRAFT": "dim",
    "UNKNOWN": "white",
}


def build_board(
    prs: list[PullRequest],
    options: FilterOptions,
    pins: PinStore,
    viewer_login: str | None,
    stale_threshold_days: int,
    show_drafts: bool = False,
    now: datetime | None = None,
) -> dict[str, list[PullRequest]]:
    """Run fetched pull requests through classification, pins, filters and grouping."""
    classified = classify_all(prs, stale_threshold_days, now)
    marked = mark_requested_reviewer(classified, viewer_login)
    visible = filter_and_sort(pins.apply_to(marked), options, show_drafts=show_drafts)
    return group_by_status(visible)


def _merge_options(
    saved: FilterOptions,
    search: str | None,
    repos: tuple[str, ...],
    authors: tuple[str, ...],
    sort_by: str | None,
    hide_stale: bool | None,
    prioritize: bool | None,
) -> FilterOptions:
    """Overlay CLI flags on the saved options. Flags left unset keep the saved value."""
    return FilterOptions(
        search_query=search if search is not None else saved.search_query,
        repositories=frozenset(repos) if repos else saved.repositories,
        authors=frozenset(authors) if authors else saved.authors,
        hide_stale=hide_stale if hide_stale is not None else saved.hide_stale,
        sort_by=sort_by or saved.sort_by,
        prioritize_my_reviews=prioritize if prioritize is not None else saved.prioritize_my_reviews,
    )


def unmatched_filter_hints(prs: list[PullRequest], options: FilterOptions) -> list[str]:
    """Messages for --repo/--author values that no fetched pull request carries.

    Each message lists the values that would match, so a typo is easy to spot.
    """
    hints = []
    for label, chosen, available in (
        ("repositories", options.repositories, unique_repositories(prs)),
        ("authors", options.authors, unique_authors(prs)),
    ):
        missing = sorted(chosen - set(available))
        if missing:
            hints.append(
                f"No open pull requests for {label} {', '.join(missing)}. "
                f"Available {label}: {', '.join(available) or 'none'}"
            )
    return hints


def _repo_text(name: str) -> Text:
    background, foreground = color_for(name).to_hex()
    return Text(f" {name} ", style=f"{foreground} on {background}")


def _render_table(status: str, prs: list[PullRequest], now: datetime) -> Table:
    style = _STATUS_STYLE[status]
    table = Table(
        title=f"[{style}]{_STATUS_LABEL[status]}[/{style}] ({len(prs)})",
        show_header=True,
        header_style="bold cyan",
        title_justify="left",
    )
    table.add_column("", width=2)
    table.add_column("Repository")
    table.add_column("PR", style="bold", width=7)
    table.add_column("Title", max_width=60)
    table.add_column("Author")
    table.add_column("Updated", width=18)

    for pr in prs:
        marker = "*" if pr.is_pinned else ("@" if pr.is_requested_reviewer else "")
        updated = format_time_ago(pr.updated_at, now)
        if pr.is_stale:
            updated = f"[red]{updated} (stale)[/red]"
        table.add_row(marker, _repo_text(pr.repository.name), f"#{pr.number}", pr.title, pr.author, updated)
    return table


def render_board(groups: dict[str, list[PullRequest]], only_status: str | None = None, now: datetime | None = None):
    now = now or datetime.now(timezone.utc)
    tabs = "  ".join(
        f"[{_STATUS_STYLE[s]}]{_STATUS_LABEL[s]} ({len(groups[s])})[/{_STATUS_STYLE[s]}]" for s in STATUSES
    )
    console.print(tabs)

    statuses = [only_status] if only_status else [s for s in STATUSES if groups[s]]
    if not any(groups[s] for s in statuses):
        console.print("[yellow]No pull requests match the current filters.[/yellow]")
        return
    for status in statuses:
        console.print(_render_table(status, groups[status], now))
    console.print("[dim]* pinned   @ review requested from you[/dim]")


@click.command("dashboard")
@click.option("--search", default=None, help="Match title, author or repository (case-insensitive).")
@click.option("--repo", "repos", multiple=True, help="Only show this repository name. Repeatable.")
@click.option("--author", "authors", multiple=True, help="Only show PRs by this login. Repeatable.")
@click.option("--sort", "sort_by", type=click.Choice(SORT_OPTIONS), default=None, help="Sort order.")
@click.option("--hide-stale/--show-stale", default=None, help="Hide PRs past the stale threshold.")
@click.option("--prioritize/--no-prioritize", default=None, help="Put PRs awaiting your review first.")
@click.option("--drafts/--no-drafts", default=None, help="Include draft PRs. Overrides show_drafts.")
@click.option("--status", "only_status", type=click.Choice(STATUSES), default=None, help="Show a single tab.")
@click.option("--watch", is_flag=True, help="Re-fetch every refresh_interval seconds until interrupted.")
@click.option("--save-filters", "remember", is_flag=True, help="Remember these filter options for next time.")
@click.pass_context
def dashboard_cmd(
    ctx,
    search: str | None,
    repos: tuple[str, ...],
    authors: tuple[str, ...],
    sort_by: str | None,
    hide_stale: bool | None,
    prioritize: bool | None,
    drafts: bool | None,
    only_status: str | None,
    watch: bool,
    remember: bool,
):
    """Show open pull requests grouped by review status.

    Starts from the saved filter options; any flag given here overrides the
    saved value for this run (and is remembered with --save-filters).
    """
    config = ctx.obj["config"]
    store = ctx.obj["store"]

    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")
    if not config.get("repositories"):
        raise click.UsageError("No repositories configured. Run `prboard init` or add repositories to .prboard.yml.")

    interval = config.get("refresh_interval") or 0
    if watch and interval <= 0:
        raise click.UsageError("--watch needs a positive refresh_interval in .prboard.yml.")

    saved = load_filters(store, default=FilterOptions(prioritize_my_reviews=config.get("prioritize_my_reviews", True)))
    options = _merge_options(saved, search, repos, authors, sort_by, hide_stale, prioritize)
    if remember:
        save_filters(store, options)

    show_drafts = drafts if drafts is not None else config.get("show_drafts", False)
    pins = PinStore(store)
    gh = get_client(token)
    viewer = get_viewer_login(gh) if options.prioritize_my_reviews else None

    while True:
        with console.status("Fetching pull requests..."):
            prs = fetch_all_prs(gh, config["repositories"], max_workers=config.get("max_workers", 8))
        now = datetime.now(timezone.utc)
        groups = build_board(prs, options, pins, viewer, config.get("stale_threshold_days", 7), show_drafts, now)
        if watch:
            console.clear()
        render_board(groups, only_status, now)
        for hint in unmatched_filter_hints(prs, options):
            console.print(f"[yellow]{hint}[/yellow]")
        if not watch:
            return
        console.print(f"[dim]Refreshing every {interval}s. Press Ctrl+C to stop.[/dim]")
        try:
            time.sleep(interval)
        except KeyboardInterrupt:
            console.print("\n[dim]Stopped.[/dim]")
            return
