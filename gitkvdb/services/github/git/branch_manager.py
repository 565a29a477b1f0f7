"""
Remote branch management operations.
"""

import logging

from gitkvdb.config.config import PROTECTED_BRANCHES
from gitkvdb.exception.exceptions import ProtectedBranchError, RemoteError, ValidationError
from gitkvdb.services.github.api.refs import RefOperations
from gitkvdb.services.github.models.types import ProviderConfig

logger = logging.getLogger(__name__)


class BranchManager:
    """Creates, deletes and selects branches on the git host."""

    def __init__(self, refs: RefOperations, config: ProviderConfig):
        self.refs = refs
        self.config = config

    async def ensure_branch(self, branch: str, root_branch: str = "main") -> bool:
        """Create a branch from the head of ``root_branch`` if it is missing.

        Args:
            branch: Branch to create
            root_branch: Branch whose head the new branch points at

        Returns:
            True if the branch was created, False if it already existed

        Raises:
            RemoteError: If the host fails for any reason other than an existing ref
        """
        try:
            sha = await self.refs.get_branch_sha(root_branch)
            result = await self.refs.create_branch_ref(branch, sha)
        except RemoteError as e:
            raise RemoteError(
                f"Failed to create branch: {e.message}", status_code=e.status_code, original=e
            ) from e

        if result.already_exists:
            logger.info(f"Branch {branch} already exists")
            return False
        if not result.ok:
            raise RemoteError(
                f"Failed to create branch: {result.message or f'HTTP {result.status_code}'}",
                status_code=result.status_code,
            )

        logger.info(f"Branch {branch} created from {root_branch} at {sha}")
        return True

    async def delete_branch(self, branch: str) -> None:
        """Delete a branch on the host.

        Raises:
            ProtectedBranchError: If ``branch`` is main or master
            RemoteError: If the host does not confirm the deletion
        """
        if branch in PROTECTED_BRANCHES:
            raise ProtectedBranchError(branch)

        result = await self.refs.delete_branch_ref(branch)
        if not result.ok:
            raise RemoteError(
                f"Failed to delete branch: {result.message or f'HTTP {result.status_code}'}",
                status_code=result.status_code,
            )
        logger.info(f"Branch {branch} deleted")

    def change_branch(self, branch: str) -> None:
        """Point future reads and pushes at another branch. Staged data is untouched."""
        if not branch or not branch.strip():
            raise ValidationError("Branch name must not be empty")
        self.config.branch = branch.strip()
        logger.debug(f"Switched to branch {self.config.branch}")
