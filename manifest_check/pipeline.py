"""File selection and result aggregation for a manifest check run."""

from __future__ import annotations

import os
from typing import Iterable, List, Sequence

from manifest_check.models import AggregatedResult
from manifest_check.utils import get_logger, redact_secrets
from manifest_check.validator import Validator

logger = get_logger(__name__)


def is_target_file(path: str, extensions: Sequence[str]) -> bool:
    # str.endswith is case-sensitive: "deploy.YAML" is not a target
    return path.endswith(tuple(extensions))


def filter_target_files(paths: Iterable[str], extensions: Sequence[str]) -> List[str]:
    """Keep the paths ending in one of ``extensions``, in their original order."""
    return [p for p in paths if is_target_file(p, extensions)]


def aggregate_results(paths: Sequence[str], validator: Validator, repo_root: str = ".") -> AggregatedResult:
    """Validate each path in order and collect the ones that failed.

    A failing file never stops the loop; every path is checked exactly once.
    """
    result = AggregatedResult()
    for path in paths:
        absolute_path = os.path.abspath(os.path.join(repo_root, path))
        logger.info("Linting file: %s", absolute_path)
        outcome = validator.validate(absolute_path)
        if not outcome.passed:
            logger.error(
                "Linting failed for file: %s with error: %s",
                absolute_path,
                redact_secrets(outcome.diagnostic),
            )
        result.record(path, outcome)
    logger.info("checked files=%d failed=%d", result.checked, len(result.failed_paths))
    return result
