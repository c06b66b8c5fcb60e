"""Snapshot store exceptions."""

from baselinepack.core.exceptions import BaselineKitError, ContractViolationError


class StoreError(BaselineKitError):
    """Base class for recoverable store faults."""


class ConfigError(StoreError):
    """The project config file could not be created, read or validated."""


class InvalidArtifactNameError(ContractViolationError):
    """Artifact names must be bare file stems; subdirs must stay relative."""


class DuplicateArtifactError(ContractViolationError):
    """An artifact name was claimed twice in one run."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Only one artifact allowed with the name `{name}`")
        self.name = name


class StoreClosedError(ContractViolationError):
    """The store was used after finalize."""
