"""
Leaderboard Aggregation

This module turns GitHub commits into per-participant point totals.
Each qualifying commit (one carrying a difficulty tag) adds its points to the
participant resolved by the active key policy. Untagged or unattributable
commits are kept in the diagnostic list only.

Usage:
    python -m bragging_rights.scoring.aggregator
    OR
    from bragging_rights.scoring.aggregator import compute_leaderboard, build_leaderboard
"""

import sys
from pathlib import Path

# Enable both `python bragging_rights/scoring/aggregator.py` and `python -m bragging_rights.scoring.aggregator` execution modes.
# This ensures bragging_rights.config imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import json
from dataclasses import dataclass, field
from typing import Iterable

from bragging_rights.config import (
    ATTRIBUTION_MODES,
    AUTHOR_KEY_POLICIES,
    DEFAULT_AUTHOR_KEY_POLICY,
    Settings,
    get_settings,
)
from bragging_rights.ingestion.github_client import CommitRecord, GitHubClient
from bragging_rights.scoring.participants import resolve_participant
from bragging_rights.scoring.points import points_for_message
from bragging_rights.utils import setup_logging, validate_choice

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass
class LeaderboardResult:
    """Scores, per-participant details and optional diagnostics for one request."""

    scores: dict[str, int] = field(default_factory=dict)
    details: dict[str, list[dict]] = field(default_factory=dict)
    processed_commits: list[dict] | None = None
    debug_info: list[dict] | None = None
    processed_files: list[dict] | None = None
    total_files: int | None = None
    scored_files: int | None = None

    def add(self, participant: str, entry: dict) -> None:
        """Credit a qualifying entry to a participant."""
        if participant not in self.scores:
            self.scores[participant] = 0
            self.details[participant] = []
        self.scores[participant] += entry["points"]
        self.details[participant].append(entry)

    def to_payload(self) -> dict:
        """JSON body served by GET /api/leaderboard."""
        payload = {"scores": self.scores, "details": self.details}
        optional = {
            "processedCommits": self.processed_commits,
            "debugInfo": self.debug_info,
            "processedFiles": self.processed_files,
            "totalFiles": self.total_files,
            "scoredFiles": self.scored_files,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


def compute_leaderboard(
    records: Iterable[CommitRecord],
    policy: str = DEFAULT_AUTHOR_KEY_POLICY,
) -> LeaderboardResult:
    """
    Aggregate commits into scores and detail lists.

    Args:
        records: Commits in upstream order (newest first)
        policy: Participant-key policy (see participants module)

    Returns:
        LeaderboardResult with scores, details and processed_commits
    """
    validate_choice(policy, AUTHOR_KEY_POLICIES, "author key policy")
    result = LeaderboardResult(processed_commits=[])

    for record in records:
        points = points_for_message(record.message)
        participant = resolve_participant(record, policy)

        reason = None
        if points == 0:
            reason = "no difficulty tag"
        elif participant is None:
            reason = "no GitHub login" if policy == "login" else "no author identity"

        result.processed_commits.append({
            "sha": record.sha,
            "login": record.login,
            "authorName": record.author_name,
            "author": participant,
            "message": record.message,
            "points": points,
            "skipped": reason is not None,
            "reason": reason,
        })

        if reason is not None:
            continue

        result.add(participant, {
            "message": record.message,
            "sha": record.sha,
            "points": points,
            "date": record.date,
        })

    return result


def build_leaderboard(client: GitHubClient, settings: Settings | None = None, sleep=None) -> LeaderboardResult:
    """
    Fetch upstream data and compute the leaderboard for the configured mode.

    Args:
        client: GitHub client used for all upstream calls
        settings: Runtime settings (default: read from environment)
        sleep: Delay function for file mode (default: time.sleep)

    Returns:
        LeaderboardResult

    Raises:
        RemoteFetchError: If the upstream call fails
        ParseError: If the upstream payload is malformed
        ValueError: If the configured mode or policy is unknown
    """
    settings = settings or get_settings()
    validate_choice(settings.attribution_mode, ATTRIBUTION_MODES, "attribution mode")

    if settings.attribution_mode == "files":
        from bragging_rights.scoring.file_mode import compute_file_leaderboard
        result = compute_file_leaderboard(client, settings, sleep=sleep)
    else:
        commits = client.list_commits(settings.repo_owner, settings.repo_name)
        logger.info(f"Fetched {len(commits)} commits from {settings.repo_owner}/{settings.repo_name}")
        result = compute_leaderboard(commits, settings.author_key_policy)

    logger.info(f"Bragging Rights Leaderboard: {result.scores}")
    return result


def main():
    settings = get_settings()
    with GitHubClient(token=settings.github_token) as client:
        result = build_leaderboard(client, settings)
    print(json.dumps(result.to_payload()["scores"], indent=2))
    return result


if __name__ == "__main__":
    main()
