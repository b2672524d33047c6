"""
Data Ingestion

Modules:
- github_client: GitHub REST wrapper (commits, repository tree)
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "GitHubClient":
        from bragging_rights.ingestion.github_client import GitHubClient
        return GitHubClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
