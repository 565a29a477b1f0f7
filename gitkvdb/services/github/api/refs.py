"""
GitHub git reference operations.
"""

import logging

from gitkvdb.services.github.api.client import GitHubAPIClient, quote_path, raise_for_result
from gitkvdb.services.github.models.types import ApiResult

logger = logging.getLogger(__name__)


class RefOperations:
    """Handles branch reference reads and writes."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_branch_sha(self, branch: str) -> str:
        """Get the commit SHA a branch points at.

        Args:
            branch: Branch name

        Returns:
            Head commit SHA

        Raises:
            RemoteError: If the reference cannot be read
        """
        result = await self.client.get(f"{self.client.repo_path}/git/ref/heads/{quote_path(branch)}")
        raise_for_result(result, f"get ref for branch {branch}")
        return result.data["object"]["sha"]

    async def create_branch_ref(self, branch: str, sha: str) -> ApiResult:
        """Create ``refs/heads/<branch>`` pointing at ``sha``.

        The result is returned unraised so callers can treat an existing
        reference as success.
        """
        return await self.client.post(
            f"{self.client.repo_path}/git/refs",
            data={"ref": f"refs/heads/{branch}", "sha": sha},
            expected_status=(201,),
        )

    async def delete_branch_ref(self, branch: str) -> ApiResult:
        return await self.client.delete(
            f"{self.client.repo_path}/git/refs/heads/{quote_path(branch)}",
            expected_status=(204,),
        )

    async def update_branch_ref(self, branch: str, sha: str, force: bool = False) -> None:
        """Move a branch to a new commit.

        Args:
            branch: Branch name
            sha: Commit SHA to point at
            force: Allow non fast-forward updates

        Raises:
            RemoteError: If the host rejects the update (e.g. stale head)
        """
        result = await self.client.patch(
            f"{self.client.repo_path}/git/refs/heads/{quote_path(branch)}",
            data={"sha": sha, "force": force},
        )
        raise_for_result(result, f"update branch {branch} to {sha}")
        logger.info(f"Branch {branch} now points at {sha}")
