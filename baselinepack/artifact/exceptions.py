"""Artifact subsystem exceptions."""

from baselinepack.core.exceptions import BaselineKitError


class ArtifactError(BaselineKitError):
    """Base class for baseline document errors."""


class ArtifactIOError(ArtifactError):
    """A baseline file could not be created, read or written."""


class BaselineDecodeError(ArtifactError):
    """A baseline document does not decode into an artifact."""
