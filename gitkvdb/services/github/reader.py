"""
Read path: file content at the head of the configured branch.
"""

import logging

from gitkvdb.exception.exceptions import GitKVError, NotFoundError, RemoteError
from gitkvdb.services.github.api.contents import ContentsOperations
from gitkvdb.services.github.models.types import ProviderConfig

logger = logging.getLogger(__name__)


class ContentReader:
    """Fetches decoded file content. Every call goes to the host."""

    def __init__(self, contents: ContentsOperations, config: ProviderConfig):
        self.contents = contents
        self.config = config

    async def get(self, path: str) -> str:
        """Get the latest content of ``path`` on the configured branch.

        Raises:
            NotFoundError: If the host has no file at the path
            RemoteError: If the host or transport fails
        """
        branch = self.config.branch
        try:
            return await self.contents.get_file_content(path, ref=branch)
        except NotFoundError:
            logger.warning(f"No content for {path} on {branch}")
            raise
        except GitKVError as e:
            raise RemoteError(
                f"Failed to get file: {e.message}",
                status_code=getattr(e, "status_code", None),
                original=e,
            ) from e
        except Exception as e:
            raise RemoteError(f"Failed to get file: {e}", original=e) from e
