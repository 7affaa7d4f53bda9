"""Version-control collaborators."""

from .git import Differ, GitDiffer

__all__ = ["Differ", "GitDiffer"]
