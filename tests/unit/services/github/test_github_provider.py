"""Tests for the GitHubProvider facade: set, get, pull requests and config."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from gitkvdb.exception.exceptions import (
    NotFoundError,
    ProtectedBranchError,
    RemoteError,
    ValidationError,
)
from gitkvdb.models.types import Change
from gitkvdb.services.github.github_provider import GitHubProvider
from gitkvdb.services.github.models.types import ApiResult, ProviderConfig, RemoteOutcome
from gitkvdb.services.kv_provider import KVProvider
from tests.fixtures.github_fixtures import encode_content


class TestProviderStaging:
    """Tests for add/commit/set through the facade."""

    def test_is_kv_provider(self, provider):
        """Test the provider implements the store interface."""
        assert isinstance(provider, KVProvider)

    def test_add_and_commit(self, provider):
        """Test staged changes end up in the queued commit."""
        provider.add("path", "data")
        assert provider.staged_changes == (Change("path", "data"),)

        commit = provider.commit("message")

        assert commit.message == "message"
        assert commit.changes == [Change("path", "data")]
        assert provider.staged_commits == (commit,)
        assert provider.staged_changes == ()

    def test_commit_without_changes(self, provider):
        """Test commit on an empty stage raises ValidationError."""
        with pytest.raises(ValidationError):
            provider.commit("message")

    @pytest.mark.asyncio
    async def test_set_adds_commits_and_pushes(self, provider, fake_host):
        """Test set is add + commit + push and returns the pushed commit."""
        with patch.object(provider, "add", wraps=provider.add) as add_spy, \
                patch.object(provider, "commit", wraps=provider.commit) as commit_spy, \
                patch.object(provider, "push", wraps=provider.push) as push_spy:
            commit = await provider.set("path", "data", "message")

        add_spy.assert_called_once_with("path", "data")
        commit_spy.assert_called_once_with("message")
        push_spy.assert_called_once()
        assert commit.message == "message"
        assert fake_host.created_commits[0]["message"] == "message"
        assert provider.staged_commits == ()


class TestProviderRead:
    """Tests for get."""

    @pytest.mark.asyncio
    async def test_get_reads_configured_branch(self, provider):
        """Test get returns content at the configured branch head."""
        provider.contents.get_file_content = AsyncMock(return_value="file content")

        content = await provider.get("path")

        assert content == "file content"
        provider.contents.get_file_content.assert_awaited_once_with("path", ref="test-branch")

    @pytest.mark.asyncio
    async def test_get_follows_change_branch(self, provider):
        """Test change_branch redirects reads without touching staged data."""
        provider.add("a.txt", "v1")
        provider.contents.get_file_content = AsyncMock(return_value="x")

        provider.change_branch("other")
        await provider.get("a.txt")

        provider.contents.get_file_content.assert_awaited_once_with("a.txt", ref="other")
        assert provider.branch == "other"
        assert provider.staged_changes == (Change("a.txt", "v1"),)

    @pytest.mark.asyncio
    async def test_get_missing_path(self, provider):
        """Test a missing path raises NotFoundError unchanged."""
        provider.contents.get_file_content = AsyncMock(side_effect=NotFoundError("path", "test-branch"))

        with pytest.raises(NotFoundError):
            await provider.get("path")

    @pytest.mark.asyncio
    async def test_get_wraps_remote_failures(self, provider):
        """Test host failures become RemoteError with the original kept."""
        original = RemoteError("Failed to get contents for path: Server Error", status_code=500)
        provider.contents.get_file_content = AsyncMock(side_effect=original)

        with pytest.raises(RemoteError, match="Failed to get file") as exc_info:
            await provider.get("path")

        assert exc_info.value.original is original
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_get_wraps_unexpected_errors(self, provider):
        """Test unexpected exceptions become RemoteError."""
        provider.contents.get_file_content = AsyncMock(side_effect=KeyError("content"))

        with pytest.raises(RemoteError, match="Failed to get file"):
            await provider.get("path")


class TestProviderPullRequests:
    """Tests for open_pull_request."""

    @pytest.mark.asyncio
    async def test_open_pull_request(self, provider):
        """Test the PR URL is returned on success."""
        provider.pulls.create_pull_request = AsyncMock(
            return_value=ApiResult(
                RemoteOutcome.SUCCESS,
                201,
                {"number": 3, "url": "api-url", "html_url": "https://github.com/test-owner/test-repo/pull/3"},
            )
        )

        url = await provider.open_pull_request("title", "body", "main")

        assert url == "https://github.com/test-owner/test-repo/pull/3"
        provider.pulls.create_pull_request.assert_awaited_once_with("title", "test-branch", "main", "body")

    @pytest.mark.asyncio
    async def test_open_pull_request_already_exists(self, provider):
        """Test an existing PR yields an empty string."""
        provider.pulls.create_pull_request = AsyncMock(
            return_value=ApiResult(
                RemoteOutcome.ALREADY_EXISTS,
                422,
                message="Validation Failed: A pull request already exists for test-owner:test-branch.",
            )
        )

        assert await provider.open_pull_request("title", "body", "main") == ""

    @pytest.mark.asyncio
    async def test_open_pull_request_failure(self, provider):
        """Test other failures raise RemoteError."""
        provider.pulls.create_pull_request = AsyncMock(
            return_value=ApiResult(RemoteOutcome.FAILURE, 422, message="No commits between main and test-branch")
        )

        with pytest.raises(RemoteError, match="Failed to open pull request: No commits"):
            await provider.open_pull_request("title", "body", "main")

    @pytest.mark.asyncio
    async def test_open_pull_request_transport_failure(self, provider):
        """Test transport errors are wrapped."""
        provider.pulls.create_pull_request = AsyncMock(side_effect=RemoteError("GitHub API request error: timeout"))

        with pytest.raises(RemoteError, match="Failed to open pull request"):
            await provider.open_pull_request("title", "body", "main")


class TestProviderBranches:
    """Tests for branch helpers on the facade."""

    @pytest.mark.asyncio
    async def test_ensure_branch_defaults_to_configured_branch(self, provider, fake_host):
        """Test ensure_branch creates the configured branch from the root branch."""
        assert await provider.ensure_branch() is True
        assert await provider.ensure_branch() is False
        assert fake_host.refs["test-branch"] == "commit-0"

    @pytest.mark.asyncio
    async def test_delete_protected_branch(self, provider):
        """Test protected branches are refused before any remote call."""
        for branch in ("main", "master"):
            with pytest.raises(ProtectedBranchError):
                await provider.delete_branch(branch)

        provider.refs.delete_branch_ref.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_branch(self, provider, fake_host):
        """Test a feature branch is deleted."""
        fake_host.refs["feature"] = "commit-0"

        await provider.delete_branch("feature")

        assert "feature" not in fake_host.refs


class TestProviderConfig:
    """Tests for configuration."""

    def test_from_env(self, monkeypatch):
        """Test provider configuration is read from the environment."""
        monkeypatch.setenv("GITKV_OWNER", "env-owner")
        monkeypatch.setenv("GITKV_REPO", "env-repo")
        monkeypatch.setenv("GITKV_BRANCH", "env-branch")
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "env-token")

        provider = GitHubProvider.from_env()

        assert provider.config.owner == "env-owner"
        assert provider.config.repo == "env-repo"
        assert provider.branch == "env-branch"
        assert provider.get_api_client().token == "env-token"
        assert provider.get_api_client().repo_path == "repos/env-owner/env-repo"

    def test_from_env_overrides(self, monkeypatch):
        """Test explicit values win over the environment."""
        monkeypatch.setenv("GITKV_OWNER", "env-owner")
        monkeypatch.setenv("GITKV_REPO", "env-repo")

        config = ProviderConfig.from_env(repo="explicit-repo", branch="feature")

        assert (config.owner, config.repo, config.branch) == ("env-owner", "explicit-repo", "feature")

    def test_from_env_missing_repo(self, monkeypatch):
        """Test missing coordinates raise ValidationError."""
        monkeypatch.setenv("GITKV_OWNER", "env-owner")
        monkeypatch.delenv("GITKV_REPO", raising=False)

        with pytest.raises(ValidationError, match="repo"):
            ProviderConfig.from_env()

    def test_defaults(self):
        """Test branch defaults and token redaction."""
        config = ProviderConfig(owner="o", repo="r", token="secret")

        assert config.branch == "main"
        assert config.root_branch == "main"
        assert "secret" not in repr(config)


class TestProviderReadRequests:
    """Tests for the URLs get sends, through a real client on a mock transport."""

    @staticmethod
    def _run_with_transport(requests):
        real_async_client = httpx.AsyncClient

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if "/git/ref/" in request.url.path:
                return httpx.Response(200, json={"object": {"sha": "head-sha"}})
            return httpx.Response(
                200,
                json={"type": "file", "path": "x", "content": encode_content("value"), "encoding": "base64"},
            )

        def client_factory(**kwargs):
            return real_async_client(transport=httpx.MockTransport(handler), **kwargs)

        return patch("httpx.AsyncClient", side_effect=client_factory)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["notes/a#1.txt", "q?x=1.txt", "dir/with space%.txt"])
    async def test_get_encodes_reserved_characters(self, config, key):
        """Test keys with URL delimiters reach the contents endpoint intact."""
        provider = GitHubProvider(config)
        requests = []

        with self._run_with_transport(requests):
            assert await provider.get(key) == "value"

        url = requests[0].url
        assert url.path == f"/repos/test-owner/test-repo/contents/{key}"
        assert url.fragment == ""
        assert dict(url.params) == {"ref": "test-branch"}

    @pytest.mark.asyncio
    async def test_branch_names_are_encoded(self, config):
        """Test branch names with delimiters are encoded in ref URLs."""
        provider = GitHubProvider(config)
        requests = []

        with self._run_with_transport(requests):
            assert await provider.refs.get_branch_sha("feature/a#1") == "head-sha"

        assert requests[0].url.path == "/repos/test-owner/test-repo/git/ref/heads/feature/a#1"
        assert requests[0].url.fragment == ""
