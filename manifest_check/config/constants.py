"""Configuration constants for the manifest check."""

# Environment sources, first non-empty value wins
BASE_REVISION_ENV = ("CI_BASE_REVISION", "GITHUB_BASE_SHA")
HEAD_REVISION_ENV = ("CI_COMMIT_SHA", "GITHUB_SHA")
REMOTE_URL_ENV = ("CI_REMOTE_URL", "DRONE_REPO_LINK", "PLUGIN_REPO_LINK")
OWNER_ENV = ("PLUGIN_GITHUB_OWNER", "PLUGIN_OWNER", "GITHUB_OWNER")
REPO_ENV = ("PLUGIN_GITHUB_REPO", "PLUGIN_REPO", "GITHUB_REPO")
REQUEST_NUMBER_ENV = "PR_NUMBER"
TOKEN_ENV = ("GITHUB_TOKEN", "PLUGIN_GITHUB_TOKEN")

# Comment bodies
SUCCESS_MARKER = "✅"
FAILURE_MARKER = "❌"
SUCCESS_TEXT = "**Linting passed for all changed files**"
FAILURE_HEADER = "**Linting failed for the following files:**"

# Default configuration values
DEFAULT_CONFIG = {
    "extensions": [".yaml", ".yml"],
    "validator": {
        "command": "kubeconform",
        "args": [],
        "timeout_sec": None,
    },
    "git": {
        "timeout_sec": 120.0,
    },
    "github": {
        "api_url": "https://api.github.com",
        "timeout_sec": 30.0,
        "retries": 0,
        "backoff_sec": 0.5,
    },
}
