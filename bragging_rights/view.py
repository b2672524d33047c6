"""
Dashboard View Helpers

Pure functions behind streamlit_dashboard.py: fetching the leaderboard JSON,
the Loading/Success/Failure state transition, rank ordering, the tug-of-war
split, avatar lookup and the table/chart frames. Keeping them free of
Streamlit calls lets them be tested directly.
"""

import base64
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

import httpx
import pandas as pd

from bragging_rights.config import (
    AVATARS,
    AVATARS_FOLDER,
    DEBUG_RECENT_LIMIT,
    DEFAULT_AVATAR,
    DIFFICULTY_POINTS,
    HTTP_TIMEOUT_SECONDS,
)
from bragging_rights.scoring.points import difficulty_for_message
from bragging_rights.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

_AVATARS_LOWER = {name.lower(): image for name, image in AVATARS.items()}


class LeaderboardFetchError(Exception):
    """Leaderboard endpoint unreachable or returned a non-OK status"""
    pass


class ViewState(Enum):
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ViewModel:
    state: ViewState
    data: dict | None = None
    error: str | None = None


# --- Data Loading ---
def fetch_leaderboard(url: str, client: httpx.Client | None = None) -> dict:
    """
    GET the leaderboard JSON with a cache-busting timestamp.

    Args:
        url: Leaderboard endpoint URL
        client: Optional httpx client (default: one-off client)

    Returns:
        Decoded JSON payload

    Raises:
        LeaderboardFetchError: On transport error, non-OK status or invalid JSON
    """
    params = {"ts": int(time.time() * 1000)}
    try:
        if client is None:
            response = httpx.get(url, params=params, timeout=HTTP_TIMEOUT_SECONDS)
        else:
            response = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise LeaderboardFetchError(f"Error fetching data: {e}") from e

    if not response.is_success:
        raise LeaderboardFetchError(f"Error fetching data: {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise LeaderboardFetchError("Error fetching data: invalid JSON") from e

    if not isinstance(data, dict):
        raise LeaderboardFetchError("Error fetching data: unexpected response")
    return data


def load_leaderboard(
    fetch: Callable[[], dict],
    on_change: Callable[[ViewModel], None] | None = None,
) -> ViewModel:
    """
    Run one fetch and move from Loading to Success or Failure.

    Any exception raised by `fetch` becomes a user-visible Failure; there is
    no automatic retry.

    Args:
        fetch: Zero-argument callable returning the leaderboard payload
        on_change: Called with each model as the state changes
            (LOADING first, then SUCCESS or FAILURE)

    Returns:
        The final ViewModel
    """
    notify = on_change or (lambda model: None)
    notify(ViewModel(ViewState.LOADING))

    try:
        data = fetch()
    except Exception as e:
        logger.error(f"Error fetching leaderboard: {e}")
        view = ViewModel(ViewState.FAILURE, error=str(e) or "Unknown error")
    else:
        view = ViewModel(ViewState.SUCCESS, data=data)

    notify(view)
    return view


# --- Ranking ---
def rank_participants(scores: dict[str, int]) -> list[str]:
    """Participants by descending score; ties keep the mapping's order."""
    return sorted(scores, key=lambda name: scores[name], reverse=True)


def tug_of_war_percentages(scores: dict[str, int]) -> tuple[float, float] | None:
    """
    Bar widths (percent) for exactly two participants, in rank order.

    Returns None unless there are exactly two participants. When both
    scores are zero the denominator falls back to 1, giving (0.0, 0.0).
    """
    if len(scores) != 2:
        return None
    p1, p2 = rank_participants(scores)
    total = max(scores[p1] + scores[p2], 1)
    return scores[p1] / total * 100, scores[p2] / total * 100


# --- Avatars ---
def resolve_avatar(name: str) -> Path:
    """Avatar image for a participant, or the default image if unknown."""
    image = AVATARS.get(name) or _AVATARS_LOWER.get(name.lower())
    path = AVATARS_FOLDER / (image or DEFAULT_AVATAR)
    if not path.exists():
        return AVATARS_FOLDER / DEFAULT_AVATAR
    return path


def image_data_uri(path: Path) -> str:
    """Inline an image file as a data URI (empty string if unreadable)."""
    mime = "image/svg+xml" if path.suffix.lower() == ".svg" else f"image/{path.suffix.lstrip('.').lower()}"
    try:
        encoded = base64.b64encode(path.read_bytes()).decode()
    except OSError:
        return ""
    return f"data:{mime};base64,{encoded}"


# --- Tables ---
def build_leaderboard_table(scores: dict[str, int], details: dict[str, list[dict]]) -> pd.DataFrame:
    """Rank, name, score and contribution count for every participant."""
    rows = [
        {
            "Rank": rank,
            "Name": name,
            "Score": scores[name],
            "Contributions": len(details.get(name, [])),
        }
        for rank, name in enumerate(rank_participants(scores), start=1)
    ]
    return pd.DataFrame(rows, columns=["Rank", "Name", "Score", "Contributions"])


def difficulty_breakdown(details: dict[str, list[dict]]) -> pd.DataFrame:
    """Count of Easy/Medium/Hard contributions per participant (long format)."""
    rows = []
    for name, entries in details.items():
        for entry in entries:
            label = difficulty_for_message(entry.get("message"))
            if label:
                rows.append({"Name": name, "Difficulty": label})

    if not rows:
        return pd.DataFrame(columns=["Name", "Difficulty", "Count"])

    df = pd.DataFrame(rows)
    counts = df.groupby(["Name", "Difficulty"], sort=False).size().reset_index(name="Count")
    order = {label: i for i, label in enumerate(DIFFICULTY_POINTS)}
    return counts.sort_values("Difficulty", key=lambda col: col.map(order), kind="stable").reset_index(drop=True)


def recent_processed(data: dict, limit: int = DEBUG_RECENT_LIMIT) -> list[dict]:
    """First `limit` processed records (commits, or files in file mode)."""
    records = data.get("processedCommits") or data.get("processedFiles") or []
    return records[:limit]
