"""
GitHub repository contents operations.

Provides file reads at a given reference.
"""

import base64
import logging
from typing import Any, Dict, Optional

from gitkvdb.exception.exceptions import NotFoundError, RemoteError
from gitkvdb.services.github.api.client import GitHubAPIClient, quote_path, raise_for_result
from gitkvdb.models.types import normalize_path

logger = logging.getLogger(__name__)


class FileInfo:
    """Information about a file or directory in a repository."""

    def __init__(self, data: Dict[str, Any]):
        self.name: str = data.get("name", "")
        self.path: str = data.get("path", "")
        self.type: str = data.get("type", "")  # "file" or "dir"
        self.sha: str = data.get("sha", "")
        self._content: Optional[str] = data.get("content")
        self._encoding: str = data.get("encoding", "base64")

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_truncated(self) -> bool:
        """Files over 1 MB come back without inline content."""
        return self._encoding == "none"

    def get_content(self) -> str:
        """Get decoded file content.

        Raises:
            RemoteError: If the content was not sent inline or cannot be decoded as UTF-8
        """
        if self.is_truncated:
            raise RemoteError(f"Content for {self.path} was not included in the response")

        if not self._content:
            return ""

        if self._encoding == "base64":
            try:
                return base64.b64decode(self._content).decode("utf-8")
            except (ValueError, UnicodeDecodeError) as e:
                logger.error(f"Failed to decode content for {self.path}: {e}")
                raise RemoteError(f"Failed to decode content for {self.path}: {e}", original=e) from e

        return self._content

    def __repr__(self) -> str:
        return f"FileInfo(name='{self.name}', type='{self.type}', path='{self.path}')"


class ContentsOperations:
    """Handles GitHub repository contents operations."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_file(self, file_path: str, ref: Optional[str] = None) -> FileInfo:
        """Get metadata and encoded content of a single file.

        Args:
            file_path: Path to file
            ref: Git reference (branch, tag, commit SHA)

        Returns:
            FileInfo for the file

        Raises:
            NotFoundError: If nothing exists at the path or the path is a directory
            RemoteError: If the request fails for any other reason
        """
        path = normalize_path(file_path)
        params = {"ref": ref} if ref else None

        result = await self.client.get(f"{self.client.repo_path}/contents/{quote_path(path)}", params=params)
        if result.status_code == 404:
            raise NotFoundError(path, ref)
        raise_for_result(result, f"get contents for {path}")

        # A list payload means the path is a directory
        if not isinstance(result.data, dict):
            raise NotFoundError(path, ref)
        info = FileInfo(result.data)
        if not info.is_file:
            raise NotFoundError(path, ref)
        return info

    async def get_file_content(self, file_path: str, ref: Optional[str] = None) -> str:
        """Get decoded content of a specific file.

        Large files are read through the blob API since the contents API
        omits their content.
        """
        info = await self.get_file(file_path, ref)
        if info.is_truncated:
            return await self.get_blob_content(info.sha, info.path)
        return info.get_content()

    async def get_blob_content(self, sha: str, path: str = "") -> str:
        """Get decoded content of a blob by SHA."""
        result = await self.client.get(f"{self.client.repo_path}/git/blobs/{sha}")
        raise_for_result(result, f"get blob {sha} for {path}")

        blob = FileInfo(
            {
                "type": "file",
                "path": path,
                "sha": sha,
                "content": result.data.get("content"),
                "encoding": result.data.get("encoding", "base64"),
            }
        )
        return blob.get_content()
