"""Post the check verdict as a GitHub pull request comment."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Protocol

import requests
from pydantic import ValidationError

from manifest_check.config.settings import Settings
from manifest_check.errors import CollaboratorError, ConfigurationError
from manifest_check.models import CommentRequest, RepositoryCoordinates
from manifest_check.net import retry_session
from manifest_check.utils import first_defined, get_logger, redact_secrets

logger = get_logger(__name__)

# Matches https://github.com/owner/repo(.git) and git@github.com:owner/repo(.git)
GITHUB_REMOTE_RE = re.compile(r"github\.com[/:]([^/:]+)/([^/]+)$")


class RemoteMatch(NamedTuple):
    owner: str
    repo: str


class CommentClient(Protocol):
    def publish(self, request: CommentRequest) -> dict:
        ...


def parse_github_remote(url: Optional[str]) -> Optional[RemoteMatch]:
    if not url:
        return None
    m = GITHUB_REMOTE_RE.search(url.strip())
    if not m:
        return None
    return RemoteMatch(owner=m.group(1), repo=m.group(2))


def resolve_coordinates(settings: Settings) -> RepositoryCoordinates:
    """Owner and repo from the remote URL, each falling back to its env override."""
    parsed = parse_github_remote(settings.remote_url)
    if settings.remote_url and parsed is None:
        logger.warning("remote url is not a github.com url: %s", redact_secrets(settings.remote_url))

    owner = first_defined(parsed.owner if parsed else None, settings.owner)
    repo = first_defined(parsed.repo if parsed else None, settings.repo)
    if not owner or not repo:
        raise ConfigurationError(
            "cannot determine repository owner/repo: set CI_REMOTE_URL or "
            "GITHUB_OWNER and GITHUB_REPO"
        )
    try:
        return RepositoryCoordinates(owner=owner, repo=repo)
    except ValidationError as e:
        raise ConfigurationError(f"invalid repository coordinates {owner}/{repo}") from e


def parse_request_number(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        raise ConfigurationError("PR_NUMBER is not set")
    try:
        number = int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"PR_NUMBER is not an integer: {raw!r}") from e
    if number <= 0:
        raise ConfigurationError(f"PR_NUMBER must be positive, got {number}")
    return number


@dataclass
class GitHubCommentConfig:
    token: Optional[str] = field(default=None, repr=False)
    api_url: str = "https://api.github.com"
    timeout_sec: float = 30.0
    retries: int = 0
    backoff_sec: float = 0.5


class GitHubCommentPublisher:
    def __init__(self, cfg: GitHubCommentConfig):
        self.cfg = cfg
        self.session = retry_session(total=cfg.retries, backoff=cfg.backoff_sec)
        self.headers = {"Accept": "application/vnd.github.v3+json"}
        if cfg.token:
            self.headers["Authorization"] = f"token {cfg.token}"
        else:
            logger.warning("github token missing: posting unauthenticated")

    def _comments_api(self, request: CommentRequest) -> str:
        coords = request.coordinates
        return f"{self.cfg.api_url}/repos/{coords.owner}/{coords.repo}/issues/{request.request_number}/comments"

    def publish(self, request: CommentRequest) -> dict:
        url = self._comments_api(request)
        try:
            response = self.session.post(
                url,
                headers=self.headers,
                json={"body": request.body},
                timeout=self.cfg.timeout_sec,
            )
        except requests.RequestException as e:
            raise CollaboratorError(f"github comment request failed: {redact_secrets(str(e))}") from e

        if response.status_code not in (200, 201):
            logger.error(
                "github comment failed status=%s body=%s",
                response.status_code,
                redact_secrets(response.text),
            )
            raise CollaboratorError(f"github comment failed: {response.status_code} {redact_secrets(response.text)[:256]}")

        logger.info(
            "github comment posted repo=%s number=%d",
            request.coordinates.full_name,
            request.request_number,
        )
        return response.json()


def build_publisher(settings: Settings) -> GitHubCommentPublisher:
    return GitHubCommentPublisher(
        GitHubCommentConfig(
            token=settings.token,
            api_url=settings.api_url,
            timeout_sec=settings.http_timeout_sec,
            retries=settings.http_retries,
            backoff_sec=settings.http_backoff_sec,
        )
    )
