"""
Models Module

Shared types, enums, and dataclasses for store operations.
"""

from gitkvdb.services.github.models.types import (
    ApiResult,
    CommitRef,
    ProviderConfig,
    ProviderState,
    PullRequestInfo,
    RemoteOutcome,
    TreeEntry,
)

__all__ = [
    "ApiResult",
    "CommitRef",
    "ProviderConfig",
    "ProviderState",
    "PullRequestInfo",
    "RemoteOutcome",
    "TreeEntry",
]
