"""Shared pytest fixtures for leaderboard tests."""

import httpx
import pytest

from bragging_rights.config import Settings
from bragging_rights.ingestion.github_client import CommitRecord, GitHubClient


def _commit_payload(message, sha="abc1234", login=None, name="Someone", date="2025-06-01T12:00:00Z", email=None):
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": name, "email": email, "date": date},
        },
        "author": {"login": login} if login else None,
    }


@pytest.fixture
def commit_payload():
    """Factory for GitHub commit JSON objects."""
    return _commit_payload


@pytest.fixture
def make_record():
    """Factory for CommitRecords built through the API parser."""
    def factory(message, **kwargs):
        return CommitRecord.from_api(_commit_payload(message, **kwargs))
    return factory


@pytest.fixture
def settings():
    """Settings pointing at a fixed test repository."""
    return Settings(repo_owner="owner", repo_name="repo", repo_branch="main")


@pytest.fixture
def github_client_factory():
    """Build GitHubClients backed by an httpx.MockTransport handler."""
    clients = []

    def factory(handler, token=None):
        client = GitHubClient(token=token, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
