"""
Provider-neutral records shared by every key-value store provider.
"""

from gitkvdb.models.types import Change, Commit, normalize_path, now_millis

__all__ = ["Change", "Commit", "normalize_path", "now_millis"]
