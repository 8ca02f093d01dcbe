import logging
import os
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "organization": "",
    "repositories": [],  # "owner/name" slugs to watch
    "stale_threshold_days": 7,
    "show_drafts": False,
    "prioritize_my_reviews": True,
    "refresh_interval": 300,  # seconds between re-fetches in --watch mode; 0 disables
    "max_workers": 8,
    "store": "sqlite",  # sqlite | gist | memory
    "store_path": ".prboard.db",
    "gist_id": None,
}

MIN_STALE_THRESHOLD_DAYS = 1
MAX_STALE_THRESHOLD_DAYS = 30


def _clamp_stale_threshold(value) -> int:
    default = DEFAULT_CONFIG["stale_threshold_days"]
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("stale_threshold_days must be an integer, got %r; using %d.", value, default)
        return default
    return max(MIN_STALE_THRESHOLD_DAYS, min(MAX_STALE_THRESHOLD_DAYS, value))


def load_config(config_path: str = ".prboard.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prboard.yml in the current directory
      3. CLI argument overrides

    ``stale_threshold_days`` is clamped to the 1-30 range the dashboard
    recognises.
    """
    config = {**DEFAULT_CONFIG, "repositories": list(DEFAULT_CONFIG["repositories"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if isinstance(file_config, dict):
            config.update(file_config)
        else:
            logger.warning(
                "Ignoring %s: expected a mapping at the top level, got %s.", config_path, type(file_config).__name__
            )

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["stale_threshold_days"] = _clamp_stale_threshold(config["stale_threshold_days"])
    repositories = config.get("repositories") or []
    if isinstance(repositories, str):
        repositories = [repositories]
    config["repositories"] = list(repositories)

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config
