"""Type definitions for BaselineKit core models."""

from typing import Literal

MismatchKind = Literal[
    "not_equal",
    "missing_in_reference",
    "missing_in_produced",
    "length_mismatch",
]

MISMATCH_KINDS: tuple[str, ...] = (
    "not_equal",
    "missing_in_reference",
    "missing_in_produced",
    "length_mismatch",
)

ArtifactStatus = Literal["recorded", "pass", "fail"]
