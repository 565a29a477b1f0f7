"""
Pull request opener for the provider's branch.
"""

import logging

from gitkvdb.exception.exceptions import GitKVError, RemoteError
from gitkvdb.services.github.api.pulls import PullRequestOperations
from gitkvdb.services.github.models.types import ProviderConfig

logger = logging.getLogger(__name__)


class PullRequestOpener:
    """Opens pull requests from the configured branch."""

    def __init__(self, pulls: PullRequestOperations, config: ProviderConfig):
        self.pulls = pulls
        self.config = config

    async def open(self, title: str, body: str, base: str) -> str:
        """Open a pull request from the configured branch into ``base``.

        Args:
            title: Pull request title
            body: Pull request description
            base: Branch to merge into

        Returns:
            The pull request URL, or an empty string if one is already open

        Raises:
            RemoteError: If the host rejects the request
        """
        head = self.config.branch
        try:
            result = await self.pulls.create_pull_request(title, head, base, body)
        except GitKVError as e:
            raise RemoteError(
                f"Failed to open pull request: {e.message}",
                status_code=getattr(e, "status_code", None),
                original=e,
            ) from e

        if result.already_exists:
            logger.info(f"Pull request from {head} into {base} already exists")
            return ""
        if not result.ok:
            raise RemoteError(
                f"Failed to open pull request: {result.message or f'HTTP {result.status_code}'}",
                status_code=result.status_code,
            )

        info = self.pulls.to_info(result)
        logger.info(f"Opened pull request #{info.number} from {head} into {base}: {info.html_url}")
        return info.html_url
