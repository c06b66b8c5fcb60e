"""Diff subsystem for BaselineKit."""

from baselinepack.diff.engine import compare_artifacts, numbers_match
from baselinepack.diff.formatting import (
    render_entry,
    render_mismatch,
    render_report,
    render_report_summary,
)
from baselinepack.diff.models import (
    LengthMismatch,
    Mismatch,
    MissingInProduced,
    MissingInReference,
    NotEqual,
    mismatch_from_dict,
)
from baselinepack.diff.report import ArtifactOutcome, Report

__all__ = [
    "Mismatch",
    "NotEqual",
    "MissingInReference",
    "MissingInProduced",
    "LengthMismatch",
    "mismatch_from_dict",
    "ArtifactOutcome",
    "Report",
    "compare_artifacts",
    "numbers_match",
    "render_entry",
    "render_mismatch",
    "render_report",
    "render_report_summary",
]
