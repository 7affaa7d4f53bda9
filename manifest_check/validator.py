"""Runs kubeconform against a single manifest file."""

from __future__ import annotations

import subprocess
from typing import Optional, Protocol, Sequence

from manifest_check.models import ValidationOutcome
from manifest_check.utils import get_logger

logger = get_logger(__name__)


class Validator(Protocol):
    def validate(self, path: str) -> ValidationOutcome:
        ...


class KubeconformValidator:
    """Classify a file as pass/fail from the exit status of the conformance tool.

    Every failure mode (non-zero exit, missing binary, timeout) becomes a
    failing :class:`ValidationOutcome`; nothing is raised to the caller.
    """

    def __init__(
        self,
        command: str = "kubeconform",
        args: Sequence[str] = (),
        timeout_sec: Optional[float] = None,
    ):
        self.command = command
        self.args = tuple(args)
        self.timeout_sec = timeout_sec

    def validate(self, path: str) -> ValidationOutcome:
        cmd = [self.command, *self.args, path]
        try:
            completed = subprocess.run(
                cmd,
                shell=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
            )
        except FileNotFoundError:
            return ValidationOutcome(path=path, passed=False, diagnostic=f"{self.command}: command not found")
        except subprocess.TimeoutExpired:
            return ValidationOutcome(
                path=path, passed=False, diagnostic=f"{self.command} timed out after {self.timeout_sec}s"
            )
        except OSError as e:
            return ValidationOutcome(path=path, passed=False, diagnostic=f"{self.command} could not be started: {e}")

        if completed.returncode == 0:
            if completed.stdout.strip():
                logger.info("%s", completed.stdout.strip())
            return ValidationOutcome(path=path, passed=True)

        # kubeconform reports schema errors on stdout, crashes on stderr
        diagnostic = "\n".join(
            part.strip() for part in (completed.stdout, completed.stderr) if part and part.strip()
        )
        return ValidationOutcome(
            path=path,
            passed=False,
            diagnostic=diagnostic or f"{self.command} exited with status {completed.returncode}",
        )
