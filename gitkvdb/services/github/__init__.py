"""
GitHub Service Package

Key-value store provider backed by the GitHub git database API.

Main Components:
- GitHubProvider: Facade for staging, pushing, reading and pull requests
- API Client: GitHub REST API interactions
- Git: Staging, branch management and the push pipeline
"""

from gitkvdb.services.github.github_provider import GitHubProvider

__all__ = ["GitHubProvider"]
