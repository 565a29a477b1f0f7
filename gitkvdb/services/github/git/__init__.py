"""
Git Module

Staging, branch management and the push pipeline built on the git database API.
"""

from gitkvdb.services.github.git.branch_manager import BranchManager
from gitkvdb.services.github.git.push_pipeline import PushPipeline
from gitkvdb.services.github.git.staging import ChangeStager

__all__ = ["BranchManager", "ChangeStager", "PushPipeline"]
