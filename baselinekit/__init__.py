"""Stable public API surface for BaselineKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from pathlib import Path

from baselinepack import __version__
from baselinepack.artifact import ArtifactError, BaselineDecodeError
from baselinepack.core import (
    Artifact,
    ArtifactEntry,
    BytesEntry,
    ContractViolationError,
    Entry,
    JsonEntry,
    RegressionError,
    StringEntry,
)
from baselinepack.diff import (
    LengthMismatch,
    Mismatch,
    MissingInProduced,
    MissingInReference,
    NotEqual,
    Report,
    compare_artifacts,
)
from baselinepack.store import BaselineStore, ConfigError
from baselinepack.store import open_store as _open_store


def open_store(config_dir: str | Path, artifact_subdir: str | Path) -> BaselineStore:
    """Open a snapshot store for one test run.

    Args:
        config_dir: Project directory holding ``baselinekit.json``. The config
            is created with defaults on first use.
        artifact_subdir: Relative path scoping this run's baselines, usually
            derived from the test's module and name.

    Returns:
        Store handle exposing ``artifact(name)``, ``finalize()`` and
        ``finalize_and_assert()``.

    Raises:
        ConfigError: If the config cannot be created, read or validated.
    """
    return _open_store(config_dir, artifact_subdir)


def compare(
    produced: Artifact,
    reference: Artifact,
    *,
    atol: float | None = None,
    rtol: float | None = None,
) -> Report:
    """Compare two artifacts in memory.

    Args:
        produced: Freshly built artifact.
        reference: Baseline artifact to compare against.
        atol: Absolute tolerance for floating-point values.
        rtol: Relative tolerance for floating-point values.

    Returns:
        Report holding every mismatch; empty when the artifacts agree.
    """
    return Report(mismatches=compare_artifacts(produced, reference, atol=atol, rtol=rtol))


__all__ = [
    "__version__",
    "Artifact",
    "Entry",
    "StringEntry",
    "BytesEntry",
    "JsonEntry",
    "ArtifactEntry",
    "Mismatch",
    "NotEqual",
    "MissingInReference",
    "MissingInProduced",
    "LengthMismatch",
    "Report",
    "BaselineStore",
    "ArtifactError",
    "BaselineDecodeError",
    "ConfigError",
    "ContractViolationError",
    "RegressionError",
    "open_store",
    "compare",
]
