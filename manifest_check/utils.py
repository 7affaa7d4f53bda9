import os
import re
import json
import datetime as dt
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Iterable, Mapping, Optional

from jsonschema import validate, Draft202012Validator
from jsonschema.exceptions import ValidationError

from manifest_check.errors import ConfigurationError

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

# ---------- Env helpers ----------

def first_env(env: Mapping[str, str], names: Iterable[str]) -> Optional[str]:
    """Return the first non-empty value among ``names`` in ``env``."""
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None

def first_defined(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None

# ---------- Config validation ----------

def load_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def validate_config(cfg: dict):
    schema = json.loads(load_file(str(SCHEMA_DIR / "config.schema.json")))
    try:
        validate(instance=cfg, schema=schema, cls=Draft202012Validator)
    except ValidationError as e:
        raise ConfigurationError(f"Config validation error: {e.message} at {list(e.path)}") from e

# ---------- Logging ----------

_LOGGER_INITIALIZED = False

class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _build_logger():
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR")
    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))

    if json_mode:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # file logging only when LOG_DIR is set
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(os.path.join(log_dir, "manifest-check.log"), when="D", backupCount=7, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    _LOGGER_INITIALIZED = True

def get_logger(name: str = None) -> logging.Logger:
    _build_logger()
    return logging.getLogger(name if name else __name__)

# ---------- Secret redaction ----------

SECRET_ENV_KEYS = ("GITHUB_TOKEN", "PLUGIN_GITHUB_TOKEN")

def redact_secrets(s: str) -> str:
    """Redact sensitive information from strings for safe logging."""
    if not s:
        return s

    redacted = s
    for k in SECRET_ENV_KEYS:
        v = os.getenv(k)
        if v and len(v) > 3:
            redacted = redacted.replace(v, "***")

    redacted = re.sub(r"x-access-token:[^@]+@", "x-access-token:***@", redacted)
    redacted = re.sub(r"gh[pousr]_[A-Za-z0-9]{36}", "ghp_***", redacted)
    redacted = re.sub(r"(?i)(authorization:\s*(?:token|bearer)\s+)\S+", r"\1***", redacted)

    return redacted
