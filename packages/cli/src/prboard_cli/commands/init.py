"""init command — interactive setup wizard.

Writes .prboard.yml with the organization, the repositories to watch, the
stale threshold and the store backend. For the Gist backend it creates a
secret Gist through the gh CLI so pins and filters can follow the user
between machines.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path

import click
import yaml
from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()

_GIST_FILENAME = "prboard_state.json"


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Create or update .prboard.yml."""
    config_path = Path((ctx.obj or {}).get("config", {}).get("config_path", ".prboard.yml"))
    console.print("\n[bold cyan]prboard init[/bold cyan] — dashboard setup\n")

    detected = _detect_repo_from_git()
    if detected:
        console.print(f"[dim]Detected repository: {detected}[/dim]")

    organization = click.prompt(
        "GitHub organization",
        default=detected.split("/")[0] if detected else "",
        show_default=bool(detected),
    )
    repos_answer = click.prompt(
        "Repositories to watch (owner/name, comma-separated)",
        default=detected or "",
        show_default=bool(detected),
    )
    repositories = _parse_repositories(repos_answer, organization)
    if not repositories:
        console.print("[yellow]No repositories given. Add some to .prboard.yml before running the dashboard.[/yellow]")

    stale_days = click.prompt("Days without activity before a PR is stale", type=click.IntRange(1, 30), default=7)
    show_drafts = click.confirm("Show draft pull requests?", default=False)

    console.print("\nWhere should pins and saved filters live?")
    console.print("  [bold]sqlite[/bold]  — local .prboard.db file (default)")
    console.print("  [bold]gist[/bold]    — secret GitHub Gist, shared across machines")
    console.print("  [bold]memory[/bold]  — nothing persisted")
    store_type = click.prompt("Store backend", type=click.Choice(["sqlite", "gist", "memory"]), default="sqlite")

    config: dict = {
        "organization": organization,
        "repositories": repositories,
        "stale_threshold_days": stale_days,
        "show_drafts": show_drafts,
        "store": store_type,
    }

    if store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".prboard.db")
        if db_path != ".prboard.db":
            config["store_path"] = db_path
    elif store_type == "gist":
        gist_id = _create_state_gist()
        if gist_id:
            console.print(f"[green]Created Gist: {gist_id}[/green]")
            config["gist_id"] = gist_id
        else:
            console.print("[yellow]Gist creation failed — add gist_id manually to .prboard.yml[/yellow]")

    _write_config(config_path, config)
    console.print(f"[green]Wrote {config_path}[/green]")
    console.print("\nOpen the dashboard with: [bold]prboard dashboard[/bold]")


def _parse_repositories(answer: str, organization: str) -> list[str]:
    """Split a comma-separated answer; bare names are qualified with the organization."""
    repos = []
    for part in answer.split(","):
        name = part.strip()
        if not name:
            continue
        if "/" not in name and organization:
            name = f"{organization}/{name}"
        if name not in repos:
            repos.append(name)
    return repos


def _detect_repo_from_git() -> str | None:
    """Return ``owner/name`` from the origin remote when it points at GitHub."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    url = result.stdout.strip()
    # https://github.com/owner/repo.git and git@github.com:owner/repo.git
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
    return slug if "/" in slug else None


def _create_state_gist() -> str | None:
    """Create a secret Gist holding an empty state file and return its id."""
    tmp_dir = tempfile.mkdtemp()
    # gh names the Gist file after the local path.
    state_path = os.path.join(tmp_dir, _GIST_FILENAME)
    try:
        with open(state_path, "w") as f:
            f.write("{}")
        result = subprocess.run(
            ["gh", "gist", "create", "--desc", "prboard pins and filters", state_path],
            capture_output=True,
            text=True,
            timeout=15,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    finally:
        if os.path.exists(state_path):
            os.unlink(state_path)
        os.rmdir(tmp_dir)

    if result.returncode != 0:
        logger.warning("gh gist create failed: %s", result.stderr.strip())
        return None
    return result.stdout.strip().rstrip("/").split("/")[-1]


def _write_config(path: Path, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
