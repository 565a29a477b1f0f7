"""
Interface shared by key-value store providers.
"""

from abc import ABC, abstractmethod

from gitkvdb.models.types import Change, Commit


class KVProvider(ABC):
    """A key-value store whose writes are versioned commits."""

    @abstractmethod
    def add(self, path: str, data: str) -> Change:
        """Add a change to the current commit."""

    @abstractmethod
    def commit(self, message: str) -> Commit:
        """Commit the current changes."""

    @abstractmethod
    async def push(self) -> int:
        """Push queued commits to the remote."""

    @abstractmethod
    async def get(self, path: str) -> str:
        """Get the latest version of a file."""

    @abstractmethod
    def change_branch(self, branch: str) -> None:
        """Change the branch reads and writes target."""

    async def set(self, path: str, data: str, message: str) -> Commit:
        """Shorthand for add, commit and push."""
        self.add(path, data)
        commit = self.commit(message)
        await self.push()
        return commit
