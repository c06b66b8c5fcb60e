"""Report model aggregating mismatches for one finalize cycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import structlog

from baselinepack.core.exceptions import RegressionError
from baselinepack.core.types import MISMATCH_KINDS, ArtifactStatus
from baselinepack.diff.formatting import render_report
from baselinepack.diff.models import Mismatch, mismatch_from_dict

_log = structlog.get_logger(component="diff.report")


@dataclass(slots=True)
class ArtifactOutcome:
    """What happened to one named artifact during finalize."""

    name: str
    baseline_path: str
    status: ArtifactStatus
    mismatch_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "baseline_path": self.baseline_path,
            "status": self.status,
            "mismatch_count": self.mismatch_count,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ArtifactOutcome":
        return cls(
            name=raw["name"],
            baseline_path=raw["baseline_path"],
            status=raw["status"],
            mismatch_count=int(raw.get("mismatch_count", 0)),
        )


@dataclass(slots=True)
class Report:
    """Ordered mismatches against the stored baselines. Empty means pass."""

    mismatches: list[Mismatch] = field(default_factory=list)
    artifacts: list[ArtifactOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.mismatches

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def extend(self, mismatches: Iterable[Mismatch]) -> None:
        self.mismatches.extend(mismatches)

    def add_outcome(self, outcome: ArtifactOutcome, mismatches: Iterable[Mismatch] = ()) -> None:
        self.artifacts.append(outcome)
        self.extend(mismatches)

    def summary(self) -> dict[str, int]:
        counts = {kind: 0 for kind in MISMATCH_KINDS}
        for mismatch in self.mismatches:
            counts[mismatch.kind] += 1
        return counts

    def assert_unregressed(self) -> None:
        """Raise ``RegressionError`` with a full breakdown if anything mismatched."""
        if self.passed:
            return
        _log.warning(
            "regression_detected",
            mismatch_count=len(self.mismatches),
            summary=self.summary(),
        )
        raise RegressionError(render_report(self), self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.passed else "fail",
            "exit_code": self.exit_code,
            "summary": self.summary(),
            "artifacts": [outcome.to_dict() for outcome in self.artifacts],
            "mismatches": [mismatch.to_dict() for mismatch in self.mismatches],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Report":
        return cls(
            mismatches=[mismatch_from_dict(item) for item in raw.get("mismatches", [])],
            artifacts=[ArtifactOutcome.from_dict(item) for item in raw.get("artifacts", [])],
        )
