"""
Shared types and models for the git-backed key-value store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from gitkvdb.config.config import (
    GITHUB_API_TIMEOUT,
    GITHUB_API_URL,
    GITKV_BRANCH,
    GITKV_ROOT_BRANCH,
    get_optional_env,
)
from gitkvdb.exception.exceptions import ValidationError
from gitkvdb.models.types import Change, Commit

REGULAR_FILE_MODE = "100644"


class RemoteOutcome(str, Enum):
    SUCCESS = "success"
    ALREADY_EXISTS = "already_exists"
    FAILURE = "failure"


@dataclass
class ApiResult:
    """Classified response from the git host."""

    outcome: RemoteOutcome
    status_code: int
    data: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome == RemoteOutcome.SUCCESS

    @property
    def already_exists(self) -> bool:
        return self.outcome == RemoteOutcome.ALREADY_EXISTS


@dataclass
class CommitRef:
    sha: str
    tree_sha: str


@dataclass
class TreeEntry:
    path: str
    sha: str
    mode: str = REGULAR_FILE_MODE
    type: str = "blob"

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class PullRequestInfo:
    number: int
    url: str
    html_url: str


@dataclass
class ProviderState:
    """Mutable staging state owned by a single provider instance."""

    staged_changes: List[Change] = field(default_factory=list)
    staged_commits: List[Commit] = field(default_factory=list)
    # Number of queued commits (from the front) already applied remotely,
    # and the branch they were applied to
    confirmed_count: int = 0
    confirmed_branch: Optional[str] = None


class ProviderConfig(BaseModel):
    """Repository coordinates and credentials for a provider."""

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")
    branch: str = Field(default="main", description="Branch reads and writes target")
    root_branch: str = Field(
        default="main", description="Branch new branches are created from"
    )
    token: Optional[str] = Field(
        default=None, repr=False, description="Bearer credential for the GitHub API"
    )
    api_url: str = Field(default=GITHUB_API_URL, description="GitHub API base URL")
    timeout: float = Field(default=GITHUB_API_TIMEOUT, description="Request timeout in seconds")

    @field_validator("owner", "repo", "branch", "root_branch")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @classmethod
    def from_env(cls, **overrides: Any) -> "ProviderConfig":
        """Build a config from environment variables.

        Args:
            **overrides: Explicit values that take precedence over the environment

        Returns:
            ProviderConfig instance

        Raises:
            ValidationError: If owner or repo is missing
        """
        values: Dict[str, Any] = {
            "owner": get_optional_env("GITKV_OWNER"),
            "repo": get_optional_env("GITKV_REPO"),
            "branch": get_optional_env("GITKV_BRANCH", GITKV_BRANCH),
            "root_branch": get_optional_env("GITKV_ROOT_BRANCH", GITKV_ROOT_BRANCH),
            "token": get_optional_env("GITHUB_PERSONAL_ACCESS_TOKEN"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        missing = [key for key in ("owner", "repo") if not values.get(key)]
        if missing:
            raise ValidationError(f"Missing repository configuration: {', '.join(missing)}")

        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid repository configuration: {e}") from e
