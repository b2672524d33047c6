"""
File-Ownership Scoring

Alternate attribution mode: every code file under a top-level participant
folder is worth the points of the most recent tagged commit touching it,
credited to the folder owner rather than the commit author.

Two-stage pipeline:
1. enumerate_files: one recursive tree call -> list of FileTarget
2. resolve_files:   one commit lookup per file, sequential with a fixed delay

A failed lookup only skips that file; it never fails the whole request.
"""

import time
from dataclasses import dataclass
from pathlib import PurePosixPath

from bragging_rights.config import (
    DEBUG_TRACE_LIMIT,
    FILE_COMMITS_PAGE_SIZE,
    FILE_LOOKUP_DELAY_SECONDS,
    IGNORED_FOLDERS,
    SKIPPED_EXTENSIONS,
    Settings,
)
from bragging_rights.ingestion.github_client import GitHubClient, LeaderboardError, ParseError
from bragging_rights.scoring.aggregator import LeaderboardResult
from bragging_rights.scoring.participants import folder_owner
from bragging_rights.scoring.points import points_for_message
from bragging_rights.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class FileTarget:
    """A code file and the participant whose folder holds it."""

    path: str
    owner: str


class DebugTrace:
    """Append-only trace that keeps only the first `limit` entries."""

    def __init__(self, limit: int = DEBUG_TRACE_LIMIT):
        self.limit = limit
        self.entries: list[dict] = []

    def record(self, path: str, status: str, reason: str | None = None, **extra) -> None:
        if len(self.entries) >= self.limit:
            return
        entry = {"file": path, "status": status, "reason": reason}
        entry.update(extra)
        self.entries.append(entry)


def is_skipped_file(path: str) -> bool:
    """True for non-code files (.md, .txt, .gitignore, .yml, .yaml)."""
    pure = PurePosixPath(path)
    return pure.suffix.lower() in SKIPPED_EXTENSIONS or pure.name.lower() in SKIPPED_EXTENSIONS


def enumerate_files(tree: list[dict], trace: DebugTrace | None = None) -> list[FileTarget]:
    """
    Select scorable files from a recursive tree listing.

    Args:
        tree: GitHub tree entries ({"path", "type", ...})
        trace: Optional diagnostic trace

    Returns:
        FileTarget list in tree order

    Raises:
        ParseError: If an entry is not an object with a string path
    """
    trace = trace or DebugTrace()
    targets = []

    for entry in tree:
        if not isinstance(entry, dict) or not isinstance(entry.get("path"), str):
            raise ParseError(f"Malformed tree entry: {entry!r}")
        if entry.get("type") != "blob":
            continue

        path = entry["path"]
        top_folder = path.split("/", 1)[0]

        if "/" not in path:
            trace.record(path, "skipped", "not in a participant folder")
        elif top_folder in IGNORED_FOLDERS or top_folder.startswith("."):
            trace.record(path, "skipped", "ignored folder")
        elif is_skipped_file(path):
            trace.record(path, "skipped", "non-code extension")
        else:
            owner = folder_owner(path)
            targets.append(FileTarget(path=path, owner=owner))
            trace.record(path, "included", None, participant=owner)

    return targets


def resolve_files(
    client: GitHubClient,
    settings: Settings,
    targets: list[FileTarget],
    trace: DebugTrace | None = None,
    sleep=time.sleep,
    delay: float = FILE_LOOKUP_DELAY_SECONDS,
) -> LeaderboardResult:
    """
    Look up the latest tagged commit for each file and credit its folder owner.

    Args:
        client: GitHub client
        settings: Repository settings
        targets: Files from enumerate_files
        trace: Optional diagnostic trace
        sleep: Delay function applied between lookups
        delay: Seconds to wait between lookups

    Returns:
        LeaderboardResult with file-mode diagnostics filled in
    """
    trace = trace or DebugTrace()
    result = LeaderboardResult(processed_files=[], total_files=len(targets))

    for index, target in enumerate(targets):
        if index > 0 and delay > 0:
            sleep(delay)

        try:
            commits = client.list_commits(
                settings.repo_owner,
                settings.repo_name,
                path=target.path,
                per_page=FILE_COMMITS_PAGE_SIZE,
            )
        except LeaderboardError as e:
            logger.warning(f"Commit lookup failed for {target.path}: {e}")
            trace.record(target.path, "error", str(e))
            continue

        latest = next((c for c in commits if points_for_message(c.message) > 0), None)
        if latest is None:
            trace.record(target.path, "unscored", "no tagged commit touches this file")
            continue

        points = points_for_message(latest.message)
        result.add(target.owner, {
            "message": latest.message,
            "sha": latest.sha,
            "points": points,
            "date": latest.date,
            "file": target.path,
        })
        result.processed_files.append({
            "file": target.path,
            "participant": target.owner,
            "sha": latest.sha,
            "message": latest.message,
            "points": points,
        })
        trace.record(target.path, "scored", None, participant=target.owner, points=points)

    result.scored_files = len(result.processed_files)
    return result


def compute_file_leaderboard(client: GitHubClient, settings: Settings, sleep=None) -> LeaderboardResult:
    """
    Run the enumerate -> resolve pipeline for the configured repository.

    Each stage keeps its own bounded trace, so lookup outcomes still reach
    debugInfo when the tree alone has more than DEBUG_TRACE_LIMIT files.
    """
    enumerate_trace = DebugTrace()
    tree = client.get_tree(settings.repo_owner, settings.repo_name, settings.repo_branch)
    targets = enumerate_files(tree, enumerate_trace)
    logger.info(f"Scoring {len(targets)} files from {settings.repo_owner}/{settings.repo_name}")

    resolve_trace = DebugTrace()
    result = resolve_files(client, settings, targets, resolve_trace, sleep=sleep or time.sleep)
    result.debug_info = enumerate_trace.entries + resolve_trace.entries
    return result
