"""Snapshot store: record baselines on first run, compare on later runs."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Any

import structlog

from baselinepack.artifact import BASELINE_SUFFIX, read_baseline, write_baseline
from baselinepack.core.models import Artifact
from baselinepack.diff import ArtifactOutcome, Mismatch, Report, compare_artifacts
from baselinepack.store.config import StoreConfig, load_or_create_config
from baselinepack.store.exceptions import (
    DuplicateArtifactError,
    InvalidArtifactNameError,
    StoreClosedError,
)

_log = structlog.get_logger(component="store.snapshot")


def validate_artifact_name(name: str) -> str:
    """Return ``name`` if it is a bare file stem usable as a baseline file name."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidArtifactNameError("artifact name must be non-empty")
    if "/" in name or "\\" in name:
        raise InvalidArtifactNameError(f"artifact name must not include path separators: `{name}`")
    if name in {".", ".."} or PurePath(name).stem != name:
        raise InvalidArtifactNameError(f"artifact name must be a file stem: `{name}`")
    return name


def validate_artifact_subdir(artifact_subdir: str | Path) -> Path:
    """Return ``artifact_subdir`` as a relative path that cannot escape the artifact root."""
    subdir = Path(artifact_subdir)
    if subdir.is_absolute() or subdir.anchor:
        raise InvalidArtifactNameError(f"artifact subdir must be relative: `{artifact_subdir}`")
    if ".." in subdir.parts:
        raise InvalidArtifactNameError(f"artifact subdir must not contain `..`: `{artifact_subdir}`")
    return subdir


def resolve_baseline_path(name: str, artifact_dir: str | Path) -> Path:
    """Resolve the baseline file of artifact ``name`` inside ``artifact_dir``."""
    return Path(artifact_dir) / f"{validate_artifact_name(name)}{BASELINE_SUFFIX}"


class BaselineStore:
    """Per-run handle that owns the artifacts claimed by one test.

    Use it as a context manager to finalize and assert on a clean exit::

        with open_store(project_dir, "tests/test_math/test_sum") as store:
            store.artifact("sums").insert_serialize("1 + 1", 2)
    """

    def __init__(self, config: StoreConfig, artifact_subdir: str | Path) -> None:
        self.config = config
        self.artifact_subdir = validate_artifact_subdir(artifact_subdir)
        self.artifact_dir = config.artifacts_root / self.artifact_subdir
        self.atol: float | None = config.atol
        self.rtol: float | None = config.rtol
        self._artifacts: dict[str, Artifact] = {}
        self._report: Report | None = None

    @property
    def finalized(self) -> bool:
        return self._report is not None

    @property
    def names(self) -> list[str]:
        return sorted(self._artifacts)

    def artifact(self, name: str) -> Artifact:
        """Claim artifact ``name`` for this run and return it empty."""
        if self.finalized:
            raise StoreClosedError(f"Cannot claim `{name}`: store already finalized")
        validate_artifact_name(name)
        if name in self._artifacts:
            raise DuplicateArtifactError(name)
        artifact = Artifact()
        self._artifacts[name] = artifact
        return artifact

    def baseline_path(self, name: str) -> Path:
        return resolve_baseline_path(name, self.artifact_dir)

    def finalize(self) -> Report:
        """Record or compare every claimed artifact, in name order.

        Raises:
            ArtifactIOError: If a baseline cannot be read or written.
            BaselineDecodeError: If a stored baseline is corrupt.
        """
        if self.finalized:
            raise StoreClosedError("store already finalized")

        report = Report()
        for name in sorted(self._artifacts):
            artifact = self._artifacts[name]
            artifact.freeze()
            outcome, mismatches = self._settle(name, artifact)
            report.add_outcome(outcome, mismatches)

        self._report = report
        return report

    def finalize_and_assert(self) -> Report:
        report = self.finalize()
        report.assert_unregressed()
        return report

    def _settle(self, name: str, artifact: Artifact) -> tuple[ArtifactOutcome, list[Mismatch]]:
        path = self.baseline_path(name)
        try:
            reference = read_baseline(path)
        except FileNotFoundError:
            if write_baseline(artifact, path):
                _log.debug("baseline_recorded", artifact=name, path=str(path))
                return ArtifactOutcome(name=name, baseline_path=str(path), status="recorded"), []
            # Another process recorded this baseline first.
            reference = read_baseline(path)

        mismatches = compare_artifacts(
            artifact,
            reference,
            prefix=name,
            atol=self.atol,
            rtol=self.rtol,
        )
        status = "pass" if not mismatches else "fail"
        _log.debug(
            "baseline_compared",
            artifact=name,
            path=str(path),
            status=status,
            mismatch_count=len(mismatches),
        )
        outcome = ArtifactOutcome(
            name=name,
            baseline_path=str(path),
            status=status,
            mismatch_count=len(mismatches),
        )
        return outcome, mismatches

    def __enter__(self) -> "BaselineStore":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        if exc_type is None and not self.finalized:
            self.finalize_and_assert()
        return False


def open_store(config_dir: str | Path, artifact_subdir: str | Path) -> BaselineStore:
    """Open a store for one run.

    Args:
        config_dir: Project directory holding ``baselinekit.json``; created
            with defaults on first use.
        artifact_subdir: Relative path scoping this run's baselines.

    Raises:
        ConfigError: If the config cannot be created, read or validated.
        InvalidArtifactNameError: If ``artifact_subdir`` escapes the artifact root.
    """
    validate_artifact_subdir(artifact_subdir)
    config = load_or_create_config(config_dir)
    return BaselineStore(config, artifact_subdir)
