"""
GitHub provider - key-value store facade over the GitHub git database API.

Writes are staged locally with add/commit and materialized as one remote
commit per local commit on push. Reads always go to the branch head.
"""

import logging
from typing import Optional, Tuple

from gitkvdb.services.github.api.client import GitHubAPIClient
from gitkvdb.services.github.api.contents import ContentsOperations
from gitkvdb.services.github.api.git_data import GitDataOperations
from gitkvdb.services.github.api.pulls import PullRequestOperations
from gitkvdb.services.github.api.refs import RefOperations
from gitkvdb.services.github.git.branch_manager import BranchManager
from gitkvdb.services.github.git.push_pipeline import PushPipeline
from gitkvdb.services.github.git.staging import ChangeStager
from gitkvdb.models.types import Change, Commit
from gitkvdb.services.github.models.types import ProviderConfig, ProviderState
from gitkvdb.services.github.pull_requests import PullRequestOpener
from gitkvdb.services.github.reader import ContentReader
from gitkvdb.services.kv_provider import KVProvider

logger = logging.getLogger(__name__)


class GitHubProvider(KVProvider):
    """
    Key-value store backed by a GitHub repository branch.

    A single instance owns its staged state. add/commit are not safe for
    uncoordinated concurrent callers; concurrent pushes are serialized.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client: Optional[GitHubAPIClient] = None,
    ):
        """Initialize GitHub provider.

        Args:
            config: Repository coordinates and credentials
            client: GitHub API client (creates one from config if not provided)
        """
        self.config = config
        self.state = ProviderState()
        self.api_client = client or GitHubAPIClient(
            token=config.token,
            owner=config.owner,
            repo=config.repo,
            base_url=config.api_url,
            timeout=config.timeout,
        )

        self.refs = RefOperations(self.api_client)
        self.git_data = GitDataOperations(self.api_client)
        self.contents = ContentsOperations(self.api_client)
        self.pulls = PullRequestOperations(self.api_client)

        self.stager = ChangeStager(self.state)
        self.branches = BranchManager(self.refs, self.config)
        self.pipeline = PushPipeline(
            self.state, self.config, self.branches, self.refs, self.git_data
        )
        self.reader = ContentReader(self.contents, self.config)
        self.pull_requests = PullRequestOpener(self.pulls, self.config)

        logger.info(
            f"GitHub provider initialized for {config.owner}/{config.repo} on branch {config.branch}"
        )

    @classmethod
    def from_env(cls, **overrides) -> "GitHubProvider":
        """Create a provider from environment configuration."""
        return cls(ProviderConfig.from_env(**overrides))

    @property
    def branch(self) -> str:
        return self.config.branch

    @property
    def staged_changes(self) -> Tuple[Change, ...]:
        return tuple(self.state.staged_changes)

    @property
    def staged_commits(self) -> Tuple[Commit, ...]:
        return tuple(self.state.staged_commits)

    def add(self, path: str, data: str) -> Change:
        return self.stager.add(path, data)

    def commit(self, message: str) -> Commit:
        return self.stager.commit(message)

    async def push(self) -> int:
        return await self.pipeline.push()

    async def get(self, path: str) -> str:
        return await self.reader.get(path)

    def change_branch(self, branch: str) -> None:
        self.branches.change_branch(branch)

    async def ensure_branch(self, branch: Optional[str] = None, root_branch: Optional[str] = None) -> bool:
        """Create ``branch`` (default: the configured branch) if it does not exist."""
        return await self.branches.ensure_branch(
            branch or self.config.branch, root_branch or self.config.root_branch
        )

    async def delete_branch(self, branch: str) -> None:
        await self.branches.delete_branch(branch)

    async def open_pull_request(self, title: str, body: str, base: str) -> str:
        """GitHub specific: open a pull request if one is not already open."""
        return await self.pull_requests.open(title, body, base)

    def get_api_client(self) -> GitHubAPIClient:
        return self.api_client
