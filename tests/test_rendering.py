import os

os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "_logs"))

from manifest_check.models import AggregatedResult
from manifest_check.rendering.comment import render_comment


def test_success_body_when_no_failures():
    assert render_comment(AggregatedResult()) == "✅ **Linting passed for all changed files**"


def test_success_body_when_all_checked_files_pass():
    assert render_comment(AggregatedResult(checked=4)) == render_comment(AggregatedResult())


def test_failure_body_lists_every_path_in_order():
    body = render_comment(AggregatedResult(failed_paths=["b.yml", "deploy/a.yaml"], checked=3))
    assert body == (
        "❌ **Linting failed for the following files:**\n"
        "- b.yml\n"
        "- deploy/a.yaml\n"
    )


def test_single_failure_bullet():
    body = render_comment(AggregatedResult(failed_paths=["a.yaml"], checked=2))
    assert body.splitlines() == ["❌ **Linting failed for the following files:**", "- a.yaml"]


def test_rendering_is_idempotent():
    result = AggregatedResult(failed_paths=["a.yaml", "b.yaml"], checked=2)
    assert render_comment(result) == render_comment(result)
    assert result.failed_paths == ["a.yaml", "b.yaml"]
