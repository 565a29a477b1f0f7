"""
Materializes queued commits as real commits on the git host.

Each queued commit becomes exactly one remote commit. The branch head is
re-read before every commit so that each new commit's parent is the commit
produced just before it.
"""

import asyncio
import logging
from typing import Dict, List

from gitkvdb.exception.exceptions import GitKVError, RemoteError
from gitkvdb.services.github.api.git_data import GitDataOperations
from gitkvdb.services.github.api.refs import RefOperations
from gitkvdb.services.github.git.branch_manager import BranchManager
from gitkvdb.models.types import Change, Commit, normalize_path
from gitkvdb.services.github.models.types import ProviderConfig, ProviderState, TreeEntry

logger = logging.getLogger(__name__)


def collapse_changes(changes: List[Change]) -> List[Change]:
    """Keep one change per path: the last value wins, first position is kept."""
    latest: Dict[str, Change] = {}
    for change in changes:
        latest[normalize_path(change.path)] = change
    return list(latest.values())


class PushPipeline:
    """Pushes a provider's queued commits in FIFO order."""

    def __init__(
        self,
        state: ProviderState,
        config: ProviderConfig,
        branches: BranchManager,
        refs: RefOperations,
        git_data: GitDataOperations,
    ):
        self.state = state
        self.config = config
        self.branches = branches
        self.refs = refs
        self.git_data = git_data
        self._lock = asyncio.Lock()

    async def push(self) -> int:
        """Push every queued commit to the configured branch.

        Returns:
            Number of commits created on the host by this call

        Raises:
            RemoteError: If branch creation or any commit step fails. Queued
                commits are kept; those confirmed before the failure are
                skipped on the next push.
        """
        async with self._lock:
            return await self._push_queued()

    async def _push_queued(self) -> int:
        branch = self.config.branch
        await self.branches.ensure_branch(branch, self.config.root_branch)

        if self.state.confirmed_count and self.state.confirmed_branch != branch:
            logger.warning(
                f"Branch changed from {self.state.confirmed_branch} to {branch} since the last "
                f"failed push; pushing all {len(self.state.staged_commits)} queued commit(s) again"
            )
            self.state.confirmed_count = 0

        pushed = 0
        try:
            # Commits queued while pushing are picked up by the same loop
            while self.state.confirmed_count < len(self.state.staged_commits):
                commit = self.state.staged_commits[self.state.confirmed_count]
                await self._push_commit(branch, commit)
                self.state.confirmed_count += 1
                self.state.confirmed_branch = branch
                pushed += 1
        except GitKVError as e:
            logger.error(f"Push to {branch} failed after {pushed} commit(s): {e.message}")
            raise RemoteError(
                f"Failed to push: {e.message}",
                status_code=getattr(e, "status_code", None),
                original=e,
            ) from e
        except Exception as e:
            logger.error(f"Push to {branch} failed after {pushed} commit(s): {e}")
            raise RemoteError(f"Failed to push: {e}", original=e) from e

        self.state.staged_commits = []
        self.state.confirmed_count = 0
        self.state.confirmed_branch = None

        logger.info(f"Pushed {pushed} commit(s) to {branch}")
        return pushed

    async def _create_blobs(self, changes: List[Change]) -> List[str]:
        """Create one blob per change concurrently, in change order.

        If any blob fails, the remaining requests are cancelled before the
        error propagates.
        """
        tasks = [asyncio.ensure_future(self.git_data.create_blob(change.data)) for change in changes]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _push_commit(self, branch: str, commit: Commit) -> str:
        """Create blobs, tree and commit for one queued commit and advance the branch."""
        head_sha = await self.refs.get_branch_sha(branch)
        head = await self.git_data.get_commit(head_sha)

        changes = collapse_changes(commit.changes)
        blob_shas = await self._create_blobs(changes)

        entries = [
            TreeEntry(path=normalize_path(change.path), sha=blob_sha)
            for change, blob_sha in zip(changes, blob_shas)
        ]
        tree_sha = await self.git_data.create_tree(head.tree_sha, entries)
        commit_sha = await self.git_data.create_commit(commit.message, tree_sha, [head.sha])

        await self.refs.update_branch_ref(branch, commit_sha)
        logger.info(f"Pushed commit {commit_sha} '{commit.message}' to {branch}")
        return commit_sha
