"""
Leaderboard Scoring

Modules:
- points: Difficulty-tag point rule
- participants: Participant-key resolution policies
- aggregator: Per-commit aggregation and request entry point
- file_mode: Per-file ownership pipeline (enumerate -> resolve)
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "points_for_message":
        from bragging_rights.scoring.points import points_for_message
        return points_for_message
    if name == "compute_leaderboard":
        from bragging_rights.scoring.aggregator import compute_leaderboard
        return compute_leaderboard
    if name == "build_leaderboard":
        from bragging_rights.scoring.aggregator import build_leaderboard
        return build_leaderboard
    if name == "run_leaderboard":
        from bragging_rights.scoring.aggregator import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
