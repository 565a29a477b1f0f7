"""
Change and commit records staged by a key-value store provider.
"""

import time
from dataclasses import dataclass, field
from typing import List


def normalize_path(path: str) -> str:
    """Return a repo-relative path with any leading slashes removed."""
    return path.lstrip("/")


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Change:
    path: str
    data: str


@dataclass
class Commit:
    message: str
    changes: List[Change]
    timestamp: int = field(default_factory=now_millis)
