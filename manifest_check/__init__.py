"""Validate changed Kubernetes manifests and report the verdict on the pull request."""

__version__ = "0.1.0"
