import time
import uuid
from typing import Any, Dict, Optional

from manifest_check.config.settings import Settings, load_settings, resolve_revisions
from manifest_check.errors import ManifestCheckError
from manifest_check.models import CommentRequest
from manifest_check.pipeline import aggregate_results, filter_target_files
from manifest_check.publisher import CommentClient, build_publisher, parse_request_number, resolve_coordinates
from manifest_check.rendering.comment import render_comment
from manifest_check.utils import get_logger
from manifest_check.validator import KubeconformValidator, Validator
from manifest_check.vcs import Differ, GitDiffer

logger = get_logger(__name__)


def run_check(
    settings: Settings,
    differ: Optional[Differ] = None,
    validator: Optional[Validator] = None,
    publisher: Optional[CommentClient] = None,
) -> CommentRequest:
    """Run the check end to end and post exactly one comment.

    Configuration is fully resolved before git is invoked, so a setup error
    never leaves a half-finished run behind.
    """
    revisions = resolve_revisions(settings)
    coordinates = resolve_coordinates(settings)
    request_number = parse_request_number(settings.request_number)
    logger.info("Base revision: %s head revision: %s", revisions.base, revisions.head)

    differ = differ or GitDiffer(settings.repo_root, timeout_sec=settings.git_timeout_sec)
    validator = validator or KubeconformValidator(
        settings.validator_command,
        settings.validator_args,
        timeout_sec=settings.validator_timeout_sec,
    )
    publisher = publisher or build_publisher(settings)

    t0 = time.monotonic()
    changed = differ.changed_files(revisions)
    logger.info("Changed files: %s", changed)

    targets = filter_target_files(changed, settings.extensions)
    logger.info("target files=%d of changed=%d", len(targets), len(changed))

    result = aggregate_results(targets, validator, settings.repo_root)
    logger.info("validated took_ms=%d", int((time.monotonic() - t0) * 1000))

    request = CommentRequest(
        coordinates=coordinates,
        request_number=request_number,
        body=render_comment(result),
    )
    logger.info(
        "posting comment repo=%s number=%d verdict=%s",
        coordinates.full_name,
        request_number,
        "pass" if result.passed else "fail",
    )
    publisher.publish(request)
    return request


def run_once(config_path: Optional[str] = None, *, overrides: Optional[Dict[str, Any]] = None) -> CommentRequest:
    """Execute the check once with settings read from the environment."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        settings = load_settings(config_path=config_path, overrides=overrides)
        return run_check(settings)
    except ManifestCheckError as e:
        logger.error("Check failed: %s", e)
        raise
    except Exception:
        logger.exception("Check failed with unexpected error")
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
