"""
Environment configuration for the git-backed key-value store.

Values are read once at import time, after loading an optional ``.env`` file.
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable, treating empty strings as unset."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


# Branch defaults; credentials and repository coordinates are read when a
# ProviderConfig is built from the environment
GITKV_BRANCH = get_optional_env("GITKV_BRANCH", "main")
GITKV_ROOT_BRANCH = get_optional_env("GITKV_ROOT_BRANCH", "main")

# GitHub API
GITHUB_API_URL = get_optional_env("GITHUB_API_URL", "https://api.github.com")
GITHUB_API_VERSION = get_optional_env("GITHUB_API_VERSION", "2022-11-28")
GITHUB_API_TIMEOUT = float(get_optional_env("GITHUB_API_TIMEOUT", "150"))
GITHUB_API_CONNECT_TIMEOUT = float(get_optional_env("GITHUB_API_CONNECT_TIMEOUT", "60"))

# Branches that can never be deleted through the store
PROTECTED_BRANCHES = ("main", "master")
