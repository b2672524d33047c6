"""
Shared utilities for the Bragging Rights leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
import re

from bragging_rights.config import DIFFICULTY_POINTS

# --- Shared Regex Patterns for Difficulty Tags ---
# One pattern per tag, in scan order: [Easy], [Medium], [Hard] (case-insensitive)
TAG_PATTERNS = tuple(
    (label, re.compile(rf"\[{label}\]", re.IGNORECASE))
    for label in DIFFICULTY_POINTS
)


def first_line(message: str) -> str:
    """Return the summary line of a commit message."""
    return message.strip().splitlines()[0] if message.strip() else ""


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Validation ---
def validate_choice(value: str, allowed: frozenset, setting: str) -> None:
    """
    Validate that a configuration value is one of the allowed options.

    Args:
        value: Configured value
        allowed: Allowed values
        setting: Setting name used in the error message

    Raises:
        ValueError: If value is not in allowed
    """
    if value not in allowed:
        raise ValueError(
            f"Invalid {setting}: '{value}'. "
            f"Allowed values: {', '.join(sorted(allowed))}"
        )


__all__ = [
    # Logging
    'setup_logging',
    # Validation
    'validate_choice',
    # Tag parsing
    'TAG_PATTERNS',
    'first_line',
]
