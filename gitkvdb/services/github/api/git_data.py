"""
GitHub git database operations: blobs, trees and commits.
"""

import logging
from typing import List

from gitkvdb.services.github.api.client import GitHubAPIClient, raise_for_result
from gitkvdb.services.github.models.types import CommitRef, TreeEntry

logger = logging.getLogger(__name__)


class GitDataOperations:
    """Creates and reads low-level git objects."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_commit(self, sha: str) -> CommitRef:
        """Get a commit and the tree it points at.

        Args:
            sha: Commit SHA

        Returns:
            CommitRef with commit and tree SHAs
        """
        result = await self.client.get(f"{self.client.repo_path}/git/commits/{sha}")
        raise_for_result(result, f"get commit {sha}")
        return CommitRef(sha=result.data["sha"], tree_sha=result.data["tree"]["sha"])

    async def create_blob(self, content: str, encoding: str = "utf-8") -> str:
        """Create a blob and return its SHA."""
        result = await self.client.post(
            f"{self.client.repo_path}/git/blobs",
            data={"content": content, "encoding": encoding},
        )
        raise_for_result(result, "create blob")
        return result.data["sha"]

    async def create_tree(self, base_tree: str, entries: List[TreeEntry]) -> str:
        """Create a tree layered on ``base_tree`` and return its SHA.

        Paths not listed in ``entries`` are carried over from the base tree.
        """
        result = await self.client.post(
            f"{self.client.repo_path}/git/trees",
            data={
                "base_tree": base_tree,
                "tree": [entry.to_dict() for entry in entries],
            },
        )
        raise_for_result(result, "create tree")
        return result.data["sha"]

    async def create_commit(self, message: str, tree: str, parents: List[str]) -> str:
        """Create a commit object and return its SHA."""
        result = await self.client.post(
            f"{self.client.repo_path}/git/commits",
            data={"message": message, "tree": tree, "parents": parents},
        )
        raise_for_result(result, "create commit")
        logger.debug(f"Created commit {result.data['sha']} on parents {parents}")
        return result.data["sha"]
