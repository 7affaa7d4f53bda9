"""HTTP session helpers."""

from .http import retry_session

__all__ = ["retry_session"]
