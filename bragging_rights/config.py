"""
Central configuration for the Bragging Rights leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
Environment-driven settings are read by get_settings() on every call so a
running server picks up the process environment it was started with.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
IMAGES_FOLDER = PROJECT_ROOT / "images"
AVATARS_FOLDER = IMAGES_FOLDER / "avatars"

# --- Repository Defaults (demo repository) ---
DEFAULT_REPO_OWNER = "lolidrk"
DEFAULT_REPO_NAME = "bragging-rights-log"
DEFAULT_REPO_BRANCH = "main"
GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "bragging-rights-leaderboard/1.0"

# --- Scoring Configuration ---
# Scan order matters: the first tag found wins
DIFFICULTY_POINTS = MappingProxyType({
    "Easy": 1,
    "Medium": 2,
    "Hard": 3,
})

# Attribution modes
ATTRIBUTION_MODES = frozenset({"commits", "files"})
DEFAULT_ATTRIBUTION_MODE = "commits"

# Participant-key policies for commit mode
AUTHOR_KEY_POLICIES = frozenset({"login", "login_or_name", "alias"})
DEFAULT_AUTHOR_KEY_POLICY = "alias"

# Alternate spellings and handles collapsed to one canonical participant
PARTICIPANT_ALIASES = MappingProxyType({
    "lolidrk": "kalyani",
    "Kalyani": "kalyani",
    "Kalyani Deshmukh": "kalyani",
    "Tanmay-Kulkarni101": "tanmay",
    "Tanmay": "tanmay",
    "Tanmay Kulkarni": "tanmay",
})

# --- Upstream Request Limits ---
COMMITS_PAGE_SIZE = 100  # Fixed page size; no further pagination
FILE_COMMITS_PAGE_SIZE = 20  # Commits inspected per file in file mode
FILE_LOOKUP_DELAY_SECONDS = 0.1  # Pause between per-file lookups (rate limits)
HTTP_TIMEOUT_SECONDS = 20.0

# --- File Mode Filters ---
SKIPPED_EXTENSIONS = frozenset({".md", ".txt", ".gitignore", ".yml", ".yaml"})
IGNORED_FOLDERS = frozenset({".github", ".vscode", ".idea"})

# --- Diagnostics ---
DEBUG_TRACE_LIMIT = 20  # Entries kept in debugInfo (file mode)
DEBUG_RECENT_LIMIT = 10  # Processed records shown in the dashboard debug panel

# --- Dashboard Configuration ---
DEFAULT_LEADERBOARD_API_URL = "http://localhost:8000/api/leaderboard"
DEFAULT_AVATAR = "default.svg"
AVATARS = MappingProxyType({
    "kalyani": "kalyani.svg",
    "tanmay": "tanmay.svg",
})


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the process environment."""

    repo_owner: str = DEFAULT_REPO_OWNER
    repo_name: str = DEFAULT_REPO_NAME
    repo_branch: str = DEFAULT_REPO_BRANCH
    github_token: str | None = None
    attribution_mode: str = DEFAULT_ATTRIBUTION_MODE
    author_key_policy: str = DEFAULT_AUTHOR_KEY_POLICY


def get_settings(environ=None) -> Settings:
    """
    Build Settings from environment variables, falling back to safe defaults.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings instance
    """
    env = os.environ if environ is None else environ
    token = (env.get("GITHUB_TOKEN") or "").strip() or None
    return Settings(
        repo_owner=env.get("REPO_OWNER") or DEFAULT_REPO_OWNER,
        repo_name=env.get("REPO_NAME") or DEFAULT_REPO_NAME,
        repo_branch=env.get("REPO_BRANCH") or DEFAULT_REPO_BRANCH,
        github_token=token,
        attribution_mode=(env.get("ATTRIBUTION_MODE") or DEFAULT_ATTRIBUTION_MODE).lower(),
        author_key_policy=(env.get("AUTHOR_KEY_POLICY") or DEFAULT_AUTHOR_KEY_POLICY).lower(),
    )


def get_leaderboard_api_url(environ=None) -> str:
    """Return the URL the dashboard fetches leaderboard JSON from."""
    env = os.environ if environ is None else environ
    return env.get("LEADERBOARD_API_URL") or DEFAULT_LEADERBOARD_API_URL
