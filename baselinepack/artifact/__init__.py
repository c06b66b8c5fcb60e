"""Artifact subsystem for BaselineKit."""

from baselinepack.artifact.exceptions import ArtifactError, ArtifactIOError, BaselineDecodeError
from baselinepack.artifact.io import (
    BASELINE_SUFFIX,
    build_baseline_document,
    dumps_baseline,
    loads_baseline,
    read_baseline,
    write_baseline,
)
from baselinepack.artifact.locking import create_exclusive, file_lock, read_shared
from baselinepack.artifact.schema import (
    BASELINE_SCHEMA,
    DEFAULT_BASELINE_VERSION,
    parse_baseline_version,
    validate_baseline_document,
)

__all__ = [
    "BASELINE_SCHEMA",
    "BASELINE_SUFFIX",
    "DEFAULT_BASELINE_VERSION",
    "ArtifactError",
    "ArtifactIOError",
    "BaselineDecodeError",
    "parse_baseline_version",
    "validate_baseline_document",
    "build_baseline_document",
    "dumps_baseline",
    "loads_baseline",
    "write_baseline",
    "read_baseline",
    "file_lock",
    "create_exclusive",
    "read_shared",
]
