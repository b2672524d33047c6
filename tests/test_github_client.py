"""
Tests for the GitHub REST client and commit parsing.
"""

import httpx
import pytest

from bragging_rights.ingestion.github_client import (
    CommitRecord,
    ParseError,
    RemoteFetchError,
    parse_commits,
)


class TestCommitRecord:
    """Tests for CommitRecord.from_api."""

    def test_parses_linked_account(self, commit_payload):
        record = CommitRecord.from_api(
            commit_payload("[Easy] a", sha="deadbeef", login="lolidrk", name="Kalyani", email="k@example.com")
        )
        assert record == CommitRecord(
            sha="deadbeef",
            message="[Easy] a",
            author_name="Kalyani",
            date="2025-06-01T12:00:00Z",
            login="lolidrk",
            email="k@example.com",
        )

    def test_unlinked_account_has_no_login(self, commit_payload):
        record = CommitRecord.from_api(commit_payload("[Easy] a", login=None))
        assert record.login is None
        assert record.author_name == "Someone"

    def test_missing_commit(self):
        with pytest.raises(ParseError):
            CommitRecord.from_api({"sha": "abc"})

    def test_missing_message(self):
        with pytest.raises(ParseError):
            CommitRecord.from_api({"sha": "abc", "commit": {"author": {"name": "x"}}})

    def test_non_string_author_name(self, commit_payload):
        payload = commit_payload("[Easy] a")
        payload["commit"]["author"]["name"] = 42
        with pytest.raises(ParseError, match="commit.author.name"):
            CommitRecord.from_api(payload)

    def test_non_string_login(self, commit_payload):
        payload = commit_payload("[Easy] a")
        payload["author"] = {"login": 7}
        with pytest.raises(ParseError, match="author.login"):
            CommitRecord.from_api(payload)

    def test_non_string_email(self, commit_payload):
        payload = commit_payload("[Easy] a")
        payload["commit"]["author"]["email"] = ["k@example.com"]
        with pytest.raises(ParseError):
            CommitRecord.from_api(payload)

    def test_null_name_becomes_empty(self, commit_payload):
        payload = commit_payload("[Easy] a")
        payload["commit"]["author"]["name"] = None
        assert CommitRecord.from_api(payload).author_name == ""

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            CommitRecord.from_api("abc")


class TestParseCommits:
    """Tests for parse_commits function."""

    def test_preserves_order(self, commit_payload):
        records = parse_commits([commit_payload("a", sha="1"), commit_payload("b", sha="2")])
        assert [r.sha for r in records] == ["1", "2"]

    def test_rejects_non_list(self):
        with pytest.raises(ParseError):
            parse_commits({"message": "API rate limit exceeded"})


class TestGitHubClient:
    """Tests for GitHubClient requests."""

    def test_list_commits_request(self, commit_payload, github_client_factory):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=[commit_payload("[Hard] x")])

        client = github_client_factory(handler)
        records = client.list_commits("owner", "repo", path="kalyani/a.py", per_page=20)

        request = seen["request"]
        assert request.url.host == "api.github.com"
        assert request.url.path == "/repos/owner/repo/commits"
        assert request.url.params["path"] == "kalyani/a.py"
        assert request.url.params["per_page"] == "20"
        assert "authorization" not in request.headers
        assert len(records) == 1

    def test_token_sent_as_bearer(self, github_client_factory):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json=[])

        github_client_factory(handler, token="secret").list_commits("o", "r")

        assert seen["auth"] == "Bearer secret"

    @pytest.mark.parametrize("status", [403, 404, 500])
    def test_error_status(self, github_client_factory, status):
        client = github_client_factory(lambda request: httpx.Response(status, json={"message": "x"}))
        with pytest.raises(RemoteFetchError) as excinfo:
            client.list_commits("o", "r")
        assert excinfo.value.status_code == status

    def test_transport_error(self, github_client_factory):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = github_client_factory(handler)
        with pytest.raises(RemoteFetchError):
            client.list_commits("o", "r")

    def test_invalid_json(self, github_client_factory):
        client = github_client_factory(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(ParseError):
            client.list_commits("o", "r")

    def test_get_tree(self, github_client_factory):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={"tree": [{"path": "a/b.py", "type": "blob"}]})

        tree = github_client_factory(handler).get_tree("o", "r", "main")

        assert seen["request"].url.path == "/repos/o/r/git/trees/main"
        assert seen["request"].url.params["recursive"] == "1"
        assert tree == [{"path": "a/b.py", "type": "blob"}]

    def test_get_tree_without_tree_list(self, github_client_factory):
        client = github_client_factory(lambda request: httpx.Response(200, json={"sha": "x"}))
        with pytest.raises(ParseError):
            client.get_tree("o", "r", "main")
