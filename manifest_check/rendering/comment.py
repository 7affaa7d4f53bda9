"""Render an aggregated result to the pull request comment body."""

from typing import List

from manifest_check.config.constants import FAILURE_HEADER, FAILURE_MARKER, SUCCESS_MARKER, SUCCESS_TEXT
from manifest_check.models import AggregatedResult


def render_comment(result: AggregatedResult) -> str:
    """Render the comment body.

    Only file paths are listed; diagnostics stay in the job log.
    """
    if not result.failed_paths:
        return f"{SUCCESS_MARKER} {SUCCESS_TEXT}"

    lines: List[str] = [f"{FAILURE_MARKER} {FAILURE_HEADER}"]
    lines.extend(f"- {path}" for path in result.failed_paths)
    return "\n".join(lines) + "\n"
