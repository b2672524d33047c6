"""
Participant-Key Resolution

Maps a commit (or a file path, in file mode) to the canonical participant
that earns its points. Exactly one commit policy is active per request:

- login:          GitHub handle only; commits without one are skipped
- login_or_name:  GitHub handle, falling back to the git author name
- alias:          login_or_name passed through PARTICIPANT_ALIASES
"""

from bragging_rights.config import AUTHOR_KEY_POLICIES, PARTICIPANT_ALIASES
from bragging_rights.ingestion.github_client import CommitRecord
from bragging_rights.utils import validate_choice

# Case-insensitive view of the alias table, built once at import
_ALIASES_LOWER = {key.lower(): value for key, value in PARTICIPANT_ALIASES.items()}


def canonical_name(name: str) -> str:
    """Collapse a known alternate spelling or handle to its participant name."""
    if name in PARTICIPANT_ALIASES:
        return PARTICIPANT_ALIASES[name]
    return _ALIASES_LOWER.get(name.lower(), name)


def _login_key(record: CommitRecord) -> str | None:
    return record.login or None


def _login_or_name_key(record: CommitRecord) -> str | None:
    return record.login or record.author_name.strip() or None


def _alias_key(record: CommitRecord) -> str | None:
    key = _login_or_name_key(record)
    return canonical_name(key) if key else None


_POLICIES = {
    "login": _login_key,
    "login_or_name": _login_or_name_key,
    "alias": _alias_key,
}


def resolve_participant(record: CommitRecord, policy: str) -> str | None:
    """
    Resolve the participant key for a commit under the given policy.

    Args:
        record: Commit to attribute
        policy: One of AUTHOR_KEY_POLICIES

    Returns:
        Participant key, or None if the commit cannot be attributed

    Raises:
        ValueError: If policy is unknown
    """
    validate_choice(policy, AUTHOR_KEY_POLICIES, "author key policy")
    return _POLICIES[policy](record)


def folder_owner(path: str) -> str | None:
    """
    Participant owning a repository file: its top-level folder, aliased.

    Returns None for files at the repository root.
    """
    parts = path.strip("/").split("/")
    if len(parts) < 2 or not parts[0]:
        return None
    return canonical_name(parts[0])
