"""
GitHub pull request operations.
"""

import logging
from typing import Optional

from gitkvdb.services.github.api.client import GitHubAPIClient
from gitkvdb.services.github.models.types import ApiResult, PullRequestInfo

logger = logging.getLogger(__name__)


class PullRequestOperations:
    """Handles pull request creation."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def create_pull_request(
        self,
        title: str,
        head: str,
        base: str,
        body: Optional[str] = None,
    ) -> ApiResult:
        """Open a pull request from ``head`` into ``base``.

        The result is returned unraised so callers can decide how to treat an
        already open pull request.
        """
        data = {"title": title, "head": head, "base": base}
        if body is not None:
            data["body"] = body

        return await self.client.post(
            f"{self.client.repo_path}/pulls", data=data, expected_status=(201,)
        )

    @staticmethod
    def to_info(result: ApiResult) -> PullRequestInfo:
        return PullRequestInfo(
            number=result.data["number"],
            url=result.data["url"],
            html_url=result.data["html_url"],
        )
