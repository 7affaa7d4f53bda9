"""Run settings assembled once from the environment and an optional YAML file."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from manifest_check.config import constants
from manifest_check.errors import ConfigurationError, MissingRevisionError
from manifest_check.models import RevisionPair
from manifest_check.utils import first_env, validate_config


@dataclass(frozen=True)
class Settings:
    base_revision: Optional[str] = None
    head_revision: Optional[str] = None
    remote_url: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    request_number: Optional[str] = None
    token: Optional[str] = field(default=None, repr=False)

    repo_root: str = "."
    extensions: Tuple[str, ...] = (".yaml", ".yml")
    validator_command: str = "kubeconform"
    validator_args: Tuple[str, ...] = ()
    validator_timeout_sec: Optional[float] = None
    git_timeout_sec: Optional[float] = 120.0
    api_url: str = "https://api.github.com"
    http_timeout_sec: float = 30.0
    http_retries: int = 0
    http_backoff_sec: float = 0.5


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"config file {path} is not valid YAML: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"config file {path} must contain a mapping")
    validate_config(cfg)
    return cfg


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Read every input the run needs exactly once.

    Args:
        env: Environment mapping, defaults to ``os.environ``.
        config_path: Optional YAML file with tool settings.
        overrides: CLI overrides (``repo_root``, ``validator_command``).

    Raises:
        ConfigurationError: If the config file is unreadable or invalid.
    """
    env = os.environ if env is None else env
    cfg = constants.DEFAULT_CONFIG
    if config_path:
        cfg = _merge(cfg, load_config_file(config_path))

    validator_cfg = cfg["validator"]
    git_cfg = cfg["git"]
    github_cfg = cfg["github"]

    values: Dict[str, Any] = dict(
        base_revision=first_env(env, constants.BASE_REVISION_ENV),
        head_revision=first_env(env, constants.HEAD_REVISION_ENV),
        remote_url=first_env(env, constants.REMOTE_URL_ENV),
        owner=first_env(env, constants.OWNER_ENV),
        repo=first_env(env, constants.REPO_ENV),
        request_number=env.get(constants.REQUEST_NUMBER_ENV) or None,
        token=first_env(env, constants.TOKEN_ENV),
        repo_root=cfg.get("repo_root", "."),
        extensions=tuple(cfg["extensions"]),
        validator_command=validator_cfg["command"],
        validator_args=tuple(validator_cfg.get("args") or ()),
        validator_timeout_sec=validator_cfg.get("timeout_sec"),
        git_timeout_sec=git_cfg.get("timeout_sec"),
        api_url=github_cfg["api_url"].rstrip("/"),
        http_timeout_sec=float(github_cfg["timeout_sec"]),
        http_retries=int(github_cfg["retries"]),
        http_backoff_sec=float(github_cfg["backoff_sec"]),
    )
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    return Settings(**values)


def resolve_revisions(settings: Settings) -> RevisionPair:
    if not settings.base_revision or not settings.head_revision:
        raise MissingRevisionError("Base or head revision not found")
    return RevisionPair(base=settings.base_revision, head=settings.head_revision)
