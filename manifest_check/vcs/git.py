"""Change-set extraction through the git CLI."""

from __future__ import annotations

import subprocess
from typing import List, Optional, Protocol, Sequence

from manifest_check.errors import CollaboratorError
from manifest_check.models import RevisionPair
from manifest_check.utils import get_logger, redact_secrets

logger = get_logger(__name__)

ALLOWED_SUBCOMMANDS = ("diff",)


class Differ(Protocol):
    def changed_files(self, revisions: RevisionPair) -> List[str]:
        ...


def _run_safe(cmd_args: Sequence[str], cwd: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """Execute a whitelisted git command and return its stdout."""
    if not cmd_args or len(cmd_args) < 2:
        raise ValueError("Invalid command format")
    if cmd_args[0] != "git":
        raise ValueError(f"Only git commands are allowed, got: {cmd_args[0]}")
    if cmd_args[1] not in ALLOWED_SUBCOMMANDS:
        raise ValueError(f"Git subcommand '{cmd_args[1]}' not allowed")

    logger.debug("git$ %s", " ".join(cmd_args))

    try:
        completed = subprocess.run(
            list(cmd_args),
            shell=False,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CollaboratorError("git executable not found") from e
    except subprocess.TimeoutExpired as e:
        raise CollaboratorError(f"git timed out after {timeout}s") from e
    except OSError as e:
        raise CollaboratorError(f"git could not be started: {e}") from e

    if completed.returncode != 0:
        logger.error(
            "git failed: rc=%d stderr=%s",
            completed.returncode,
            redact_secrets(completed.stderr),
        )
        raise CollaboratorError(f"git error: {redact_secrets(completed.stderr).strip()}")
    return completed.stdout


def split_paths(raw: str) -> List[str]:
    # NUL-separated output from `-z`: paths are never C-quoted
    return [p for p in raw.split("\0") if p]


class GitDiffer:
    """Lists paths changed between the merge base of ``base`` and ``head``."""

    def __init__(self, repo_root: str = ".", timeout_sec: Optional[float] = None):
        self.repo_root = repo_root
        self.timeout_sec = timeout_sec

    def changed_files(self, revisions: RevisionPair) -> List[str]:
        raw = _run_safe(
            ["git", "diff", "--name-only", "-z", revisions.range_spec],
            cwd=self.repo_root,
            timeout=self.timeout_sec,
        )
        return split_paths(raw)
