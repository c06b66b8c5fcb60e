"""Core exceptions shared by every BaselineKit subsystem."""

from __future__ import annotations

from typing import Any


class BaselineKitError(Exception):
    """Base class for BaselineKit errors."""


class ArtifactSerializationError(BaselineKitError):
    """A value could not be converted to the JSON model."""


class ContractViolationError(BaselineKitError):
    """The calling test broke a usage contract; the test itself is malformed."""


class InvalidKeyError(ContractViolationError):
    """Artifact keys must be non-empty strings."""


class DuplicateKeyError(ContractViolationError):
    """An artifact key was inserted twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate entries under the same name (`{key}`) are not allowed")
        self.key = key


class FrozenArtifactError(ContractViolationError):
    """An artifact was mutated after it was handed over for comparison."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Cannot insert `{key}`: artifact is frozen")
        self.key = key


class RegressionError(AssertionError):
    """Raised when a report contains mismatches against its baselines."""

    def __init__(self, message: str, report: Any) -> None:
        super().__init__(message)
        self.report = report
