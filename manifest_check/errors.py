"""Exceptions raised by the manifest check pipeline.

Validation failures of individual files are not exceptions: they are
reported as :class:`manifest_check.models.ValidationOutcome` values.
"""


class ManifestCheckError(Exception):
    """Base class for fatal errors that abort a run."""


class ConfigurationError(ManifestCheckError):
    """Operator or setup error detected before any comment is posted."""


class MissingRevisionError(ConfigurationError):
    """Base or head revision could not be found in any source."""


class CollaboratorError(ManifestCheckError):
    """An external collaborator (git, GitHub API) failed."""
