"""
In-memory staging of changes and assembly of commit records.
"""

import logging

from gitkvdb.exception.exceptions import ValidationError
from gitkvdb.models.types import Change, Commit, normalize_path
from gitkvdb.services.github.models.types import ProviderState

logger = logging.getLogger(__name__)


class ChangeStager:
    """Accumulates pending writes and groups them into commits."""

    def __init__(self, state: ProviderState):
        self.state = state

    def add(self, path: str, data: str) -> Change:
        """Stage a write. Repeated paths are kept; the last one wins at push time."""
        change = Change(path=normalize_path(path), data=data)
        self.state.staged_changes.append(change)
        return change

    def commit(self, message: str) -> Commit:
        """Move every staged change into a new queued commit.

        Args:
            message: Commit message

        Returns:
            The queued Commit

        Raises:
            ValidationError: If nothing is staged
        """
        if not self.state.staged_changes:
            raise ValidationError("No changes to commit")

        commit = Commit(message=message, changes=list(self.state.staged_changes))
        self.state.staged_commits.append(commit)
        self.state.staged_changes = []

        logger.debug(f"Queued commit '{message}' with {len(commit.changes)} change(s)")
        return commit
