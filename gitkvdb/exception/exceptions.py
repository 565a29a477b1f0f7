"""
Exception types raised by the git-backed key-value store.
"""

from typing import Optional


class GitKVError(Exception):
    """Base class for all store errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GitKVError):
    """Raised when an operation is called with invalid input or state."""

    pass


class ProtectedBranchError(GitKVError):
    """Raised when deleting a protected branch (main/master)."""

    def __init__(self, branch: str):
        super().__init__(f"Cannot delete {branch} branch")
        self.branch = branch


class NotFoundError(GitKVError):
    """Raised when the host has no file content at the requested path."""

    def __init__(self, path: str, ref: Optional[str] = None):
        where = f" at {ref}" if ref else ""
        super().__init__(f"No content found for {path}{where}")
        self.path = path
        self.ref = ref


class RemoteError(GitKVError):
    """Raised when a call to the git host fails.

    The original exception, if any, is kept on ``original`` and chained as
    ``__cause__`` so its traceback survives the re-raise.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.original = original
