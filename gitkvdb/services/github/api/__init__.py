"""
GitHub API Module

Handles the GitHub REST API interactions the store needs:
- Branch references
- Blobs, trees and commits
- File contents
- Pull requests
"""

from gitkvdb.services.github.api.client import GitHubAPIClient
from gitkvdb.services.github.api.contents import ContentsOperations
from gitkvdb.services.github.api.git_data import GitDataOperations
from gitkvdb.services.github.api.pulls import PullRequestOperations
from gitkvdb.services.github.api.refs import RefOperations

__all__ = [
    "GitHubAPIClient",
    "ContentsOperations",
    "GitDataOperations",
    "PullRequestOperations",
    "RefOperations",
]
