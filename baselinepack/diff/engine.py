"""Recursive artifact comparison with numeric tolerances."""

from __future__ import annotations

import math
from typing import Any

from baselinepack.core.canonical import json_kind
from baselinepack.core.models import Artifact, ArtifactEntry, JsonEntry
from baselinepack.diff.models import (
    LengthMismatch,
    Mismatch,
    MissingInProduced,
    MissingInReference,
    NotEqual,
)

ARTIFACT_SEPARATOR = "::"
FIELD_SEPARATOR = "."

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def compare_artifacts(
    produced: Artifact,
    reference: Artifact,
    *,
    prefix: str = "",
    atol: float | None = None,
    rtol: float | None = None,
) -> list[Mismatch]:
    """Compare a produced artifact against its reference.

    Paths join artifact levels with ``::``, JSON object fields with ``.`` and
    array indices with ``[i]``. Output order follows the sorted artifact keys
    and the source order of JSON documents, so it is deterministic.
    """
    _check_tolerance("atol", atol)
    _check_tolerance("rtol", rtol)
    out: list[Mismatch] = []
    _compare_artifacts(produced, reference, prefix=prefix, out=out, atol=atol, rtol=rtol)
    return out


def numbers_match(
    produced: float,
    reference: float,
    *,
    atol: float | None = None,
    rtol: float | None = None,
) -> bool:
    """Apply the tolerance rule to a produced and a reference number.

    The relative check is signed: only a produced value above the reference
    by more than ``rtol * |reference|`` fails it.
    """
    delta = produced - reference
    if atol is None and rtol is None:
        return produced == reference
    if atol is None:
        return delta <= rtol * abs(reference)
    if rtol is None:
        return abs(delta) <= atol
    return delta <= rtol * abs(reference) and abs(delta) <= atol


def _compare_artifacts(
    produced: Artifact,
    reference: Artifact,
    *,
    prefix: str,
    out: list[Mismatch],
    atol: float | None,
    rtol: float | None,
) -> None:
    for key, entry in produced.items():
        path = _join(prefix, ARTIFACT_SEPARATOR, key)
        reference_entry = reference.get(key)
        if reference_entry is None:
            out.append(MissingInReference(path=path, produced=entry))
            continue

        if isinstance(entry, ArtifactEntry) and isinstance(reference_entry, ArtifactEntry):
            _compare_artifacts(
                entry.artifact,
                reference_entry.artifact,
                prefix=path,
                out=out,
                atol=atol,
                rtol=rtol,
            )
        elif isinstance(entry, JsonEntry) and isinstance(reference_entry, JsonEntry):
            _compare_json(entry.value, reference_entry.value, path=path, out=out, atol=atol, rtol=rtol)
        elif entry != reference_entry:
            out.append(NotEqual(path=path, produced=entry, reference=reference_entry))

    for key, reference_entry in reference.items():
        if key not in produced:
            out.append(
                MissingInProduced(
                    path=_join(prefix, ARTIFACT_SEPARATOR, key),
                    reference=reference_entry,
                )
            )


def _compare_json(
    produced: Any,
    reference: Any,
    *,
    path: str,
    out: list[Mismatch],
    atol: float | None,
    rtol: float | None,
) -> None:
    kind = json_kind(produced)
    reference_kind = json_kind(reference)

    if kind != reference_kind:
        out.append(NotEqual(path=path, produced=JsonEntry(produced), reference=JsonEntry(reference)))
        return

    if kind == "object":
        for key, value in produced.items():
            child_path = _join(path, FIELD_SEPARATOR, key)
            if key not in reference:
                out.append(MissingInReference(path=child_path, produced=JsonEntry(value)))
                continue
            _compare_json(value, reference[key], path=child_path, out=out, atol=atol, rtol=rtol)
        for key, value in reference.items():
            if key not in produced:
                out.append(
                    MissingInProduced(
                        path=_join(path, FIELD_SEPARATOR, key),
                        reference=JsonEntry(value),
                    )
                )
        return

    if kind == "array":
        if len(produced) != len(reference):
            out.append(
                LengthMismatch(
                    path=path,
                    produced_length=len(produced),
                    reference_length=len(reference),
                    produced=JsonEntry(produced),
                    reference=JsonEntry(reference),
                )
            )
            return
        for idx, (item, reference_item) in enumerate(zip(produced, reference)):
            _compare_json(item, reference_item, path=f"{path}[{idx}]", out=out, atol=atol, rtol=rtol)
        return

    if kind == "number":
        if not _numbers_equivalent(produced, reference, atol=atol, rtol=rtol):
            out.append(NotEqual(path=path, produced=JsonEntry(produced), reference=JsonEntry(reference)))
        return

    if produced != reference:
        out.append(NotEqual(path=path, produced=JsonEntry(produced), reference=JsonEntry(reference)))


def _numbers_equivalent(
    produced: int | float,
    reference: int | float,
    *,
    atol: float | None,
    rtol: float | None,
) -> bool:
    if _is_i64(produced) and _is_i64(reference):
        return produced == reference
    try:
        produced_float = float(produced)
        reference_float = float(reference)
    except OverflowError:
        return produced == reference
    return numbers_match(produced_float, reference_float, atol=atol, rtol=rtol)


def _is_i64(value: int | float) -> bool:
    return isinstance(value, int) and _I64_MIN <= value <= _I64_MAX


def _join(prefix: str, separator: str, key: str) -> str:
    if not prefix:
        return key
    return f"{prefix}{separator}{key}"


def _check_tolerance(name: str, value: float | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number or None")
    if math.isnan(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value}")
