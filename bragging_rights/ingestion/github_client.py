"""
GitHub REST Client

Thin wrapper over the two GitHub endpoints the leaderboard needs:
- list commits for a repository (optionally filtered to one path)
- recursive repository tree listing

Usage:
    from bragging_rights.ingestion.github_client import GitHubClient
    with GitHubClient(token=settings.github_token) as client:
        commits = client.list_commits("owner", "repo")
"""

from dataclasses import dataclass
from typing import Any

import httpx

from bragging_rights.config import (
    COMMITS_PAGE_SIZE,
    GITHUB_API_URL,
    HTTP_TIMEOUT_SECONDS,
    USER_AGENT,
)
from bragging_rights.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class LeaderboardError(Exception):
    """Base exception for leaderboard data errors"""
    pass


class RemoteFetchError(LeaderboardError):
    """Upstream API returned a non-success status or was unreachable"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(LeaderboardError):
    """Upstream payload did not have the expected shape"""
    pass


@dataclass(frozen=True)
class CommitRecord:
    """One commit as returned by the GitHub commits endpoint."""

    sha: str
    message: str
    author_name: str
    date: str | None = None
    login: str | None = None
    email: str | None = None

    @classmethod
    def from_api(cls, payload: Any) -> "CommitRecord":
        """
        Build a CommitRecord from a GitHub commit JSON object.

        The top-level `author` object (GitHub account) may be null when the
        commit email is not linked to an account; only then is `login` None.

        Raises:
            ParseError: If sha, commit.message or commit.author is missing,
                or an identity field (name, email, date, login) is not a string
        """
        if not isinstance(payload, dict):
            raise ParseError(f"Expected commit object, got {type(payload).__name__}")

        sha = payload.get("sha")
        commit = payload.get("commit")
        if not isinstance(sha, str) or not isinstance(commit, dict):
            raise ParseError("Commit object is missing 'sha' or 'commit'")

        git_author = commit.get("author")
        message = commit.get("message")
        if not isinstance(git_author, dict) or not isinstance(message, str):
            raise ParseError(f"Commit {sha[:7]} is missing author or message")

        account = payload.get("author")
        login = account.get("login") if isinstance(account, dict) else None

        fields = {
            "commit.author.name": git_author.get("name"),
            "commit.author.email": git_author.get("email"),
            "commit.author.date": git_author.get("date"),
            "author.login": login,
        }
        for field_name, value in fields.items():
            if value is not None and not isinstance(value, str):
                raise ParseError(
                    f"Commit {sha[:7]} has non-string {field_name}: {type(value).__name__}"
                )

        return cls(
            sha=sha,
            message=message,
            author_name=fields["commit.author.name"] or "",
            date=fields["commit.author.date"],
            login=login or None,
            email=fields["commit.author.email"],
        )


def parse_commits(payload: Any) -> list[CommitRecord]:
    """
    Convert a commits-endpoint payload into CommitRecords, preserving order.

    Raises:
        ParseError: If the payload is not a list of commit objects
    """
    if not isinstance(payload, list):
        raise ParseError(f"Expected a list of commits, got {type(payload).__name__}")
    return [CommitRecord.from_api(item) for item in payload]


class GitHubClient:
    """Synchronous GitHub REST client with optional bearer-token auth."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No GitHub token configured; using unauthenticated access")

        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document from the API.

        Raises:
            RemoteFetchError: On transport failure or non-2xx status
            ParseError: If the body is not valid JSON
        """
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"GitHub API request failed for {path}: {e}") from e

        if not response.is_success:
            raise RemoteFetchError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"GitHub API returned invalid JSON for {path}") from e

    def list_commits(
        self,
        owner: str,
        repo: str,
        path: str | None = None,
        per_page: int = COMMITS_PAGE_SIZE,
        page: int = 1,
    ) -> list[CommitRecord]:
        """List one page of commits, newest first, optionally for a single path."""
        params: dict[str, Any] = {"per_page": per_page, "page": page}
        if path:
            params["path"] = path
        payload = self.get_json(f"/repos/{owner}/{repo}/commits", params=params)
        return parse_commits(payload)

    def get_tree(self, owner: str, repo: str, ref: str) -> list[dict]:
        """
        Return the recursive tree entries for a ref.

        Raises:
            ParseError: If the response has no 'tree' list
        """
        payload = self.get_json(
            f"/repos/{owner}/{repo}/git/trees/{ref}",
            params={"recursive": 1},
        )
        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise ParseError(f"Tree response for {owner}/{repo}@{ref} has no 'tree' list")
        if payload.get("truncated"):
            logger.warning(f"Tree listing for {owner}/{repo}@{ref} was truncated by GitHub")
        return tree
