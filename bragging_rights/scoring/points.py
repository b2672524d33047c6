"""
Difficulty-Tag Point Rule

A message earns points from the first difficulty tag found, scanning
[Easy] -> [Medium] -> [Hard] (case-insensitive). Untagged messages score 0.
"""

from bragging_rights.config import DIFFICULTY_POINTS
from bragging_rights.utils import TAG_PATTERNS


def difficulty_for_message(message: str | None) -> str | None:
    """
    Return the difficulty label for a message, or None if untagged.

    Args:
        message: Commit message text

    Returns:
        "Easy", "Medium", "Hard" or None
    """
    if not message:
        return None
    for label, pattern in TAG_PATTERNS:
        if pattern.search(message):
            return label
    return None


def points_for_message(message: str | None) -> int:
    """Points earned by a message: 1 (Easy), 2 (Medium), 3 (Hard) or 0."""
    label = difficulty_for_message(message)
    return DIFFICULTY_POINTS[label] if label else 0
