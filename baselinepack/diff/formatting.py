"""Human-readable rendering for mismatches and reports."""

from __future__ import annotations

import base64
import json
from typing import TYPE_CHECKING

from baselinepack.core.codec import encode_artifact
from baselinepack.core.models import ArtifactEntry, BytesEntry, Entry, JsonEntry, StringEntry
from baselinepack.diff.models import (
    LengthMismatch,
    Mismatch,
    MissingInProduced,
    MissingInReference,
    NotEqual,
)

if TYPE_CHECKING:
    from baselinepack.diff.report import Report


def render_entry(entry: Entry) -> str:
    """Render an entry for display. Never raises."""
    try:
        if isinstance(entry, StringEntry):
            return json.dumps(entry.text, ensure_ascii=False)
        if isinstance(entry, BytesEntry):
            return f"bytes({len(entry.data)}):{base64.b64encode(entry.data).decode('ascii')}"
        if isinstance(entry, JsonEntry):
            return json.dumps(entry.value, ensure_ascii=False)
        if isinstance(entry, ArtifactEntry):
            return json.dumps(encode_artifact(entry.artifact), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    return repr(entry)


def render_mismatch(mismatch: Mismatch) -> str:
    if isinstance(mismatch, NotEqual):
        return "\n".join(
            [
                f"MISMATCH [{mismatch.kind}] `{mismatch.path}` differs from the reference value",
                f"  reference={render_entry(mismatch.reference)}",
                f"  produced={render_entry(mismatch.produced)}",
            ]
        )
    if isinstance(mismatch, MissingInReference):
        return "\n".join(
            [
                f"MISMATCH [{mismatch.kind}] `{mismatch.path}` does not exist in the reference",
                f"  produced={render_entry(mismatch.produced)}",
            ]
        )
    if isinstance(mismatch, MissingInProduced):
        return "\n".join(
            [
                f"MISMATCH [{mismatch.kind}] `{mismatch.path}` exists in the reference "
                "but was not produced",
                f"  reference={render_entry(mismatch.reference)}",
            ]
        )
    if isinstance(mismatch, LengthMismatch):
        return "\n".join(
            [
                f"MISMATCH [{mismatch.kind}] `{mismatch.path}` has length "
                f"{mismatch.reference_length} in the reference but length "
                f"{mismatch.produced_length} in the produced artifact",
                f"  reference={render_entry(mismatch.reference)}",
                f"  produced={render_entry(mismatch.produced)}",
            ]
        )
    return f"MISMATCH {mismatch!r}"


def render_report_summary(report: Report) -> str:
    summary = report.summary()
    counts = " ".join(f"{kind}={count}" for kind, count in summary.items())
    status = "pass" if report.passed else "fail"
    return f"status={status} artifacts={len(report.artifacts)} mismatches={len(report.mismatches)} {counts}"


def render_report(report: Report, *, max_mismatches: int | None = None) -> str:
    """Render every mismatch in ``report``, optionally capped."""
    if report.passed:
        return "no mismatches detected"

    shown = report.mismatches if max_mismatches is None else report.mismatches[: max(1, max_mismatches)]
    lines = [f"found {len(report.mismatches)} mismatch(es) against the reference"]
    lines.extend(render_mismatch(mismatch) for mismatch in shown)
    remaining = len(report.mismatches) - len(shown)
    if remaining > 0:
        lines.append(f"... {remaining} additional mismatch(es) not shown")
    return "\n".join(lines)
