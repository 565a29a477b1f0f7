"""
gitkvdb - a key-value store whose writes are git commits on a GitHub branch.
"""

from gitkvdb.exception.exceptions import (
    GitKVError,
    NotFoundError,
    ProtectedBranchError,
    RemoteError,
    ValidationError,
)
from gitkvdb.services.github.github_provider import GitHubProvider
from gitkvdb.models.types import Change, Commit
from gitkvdb.services.github.models.types import ProviderConfig
from gitkvdb.services.kv_provider import KVProvider

__all__ = [
    "Change",
    "Commit",
    "GitHubProvider",
    "GitKVError",
    "KVProvider",
    "NotFoundError",
    "ProtectedBranchError",
    "ProviderConfig",
    "RemoteError",
    "ValidationError",
]
