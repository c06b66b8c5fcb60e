"""Mismatch models produced by artifact comparison."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from baselinepack.core.codec import decode_entry, encode_entry
from baselinepack.core.models import Entry
from baselinepack.core.types import MismatchKind


@dataclass(frozen=True, slots=True)
class NotEqual:
    """The path exists on both sides with different values."""

    path: str
    produced: Entry
    reference: Entry

    kind: ClassVar[MismatchKind] = "not_equal"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "produced": encode_entry(self.produced),
            "reference": encode_entry(self.reference),
        }


@dataclass(frozen=True, slots=True)
class MissingInReference:
    """The path was produced but the baseline does not have it."""

    path: str
    produced: Entry

    kind: ClassVar[MismatchKind] = "missing_in_reference"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "produced": encode_entry(self.produced),
        }


@dataclass(frozen=True, slots=True)
class MissingInProduced:
    """The baseline has the path but it was not produced."""

    path: str
    reference: Entry

    kind: ClassVar[MismatchKind] = "missing_in_produced"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "reference": encode_entry(self.reference),
        }


@dataclass(frozen=True, slots=True)
class LengthMismatch:
    """A JSON array has a different element count on each side."""

    path: str
    produced_length: int
    reference_length: int
    produced: Entry
    reference: Entry

    kind: ClassVar[MismatchKind] = "length_mismatch"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "produced_length": self.produced_length,
            "reference_length": self.reference_length,
            "produced": encode_entry(self.produced),
            "reference": encode_entry(self.reference),
        }


Mismatch = Union[NotEqual, MissingInReference, MissingInProduced, LengthMismatch]


def mismatch_from_dict(raw: dict[str, Any]) -> Mismatch:
    kind = raw.get("kind")
    if kind == "not_equal":
        return NotEqual(
            path=raw["path"],
            produced=decode_entry(raw["produced"]),
            reference=decode_entry(raw["reference"]),
        )
    if kind == "missing_in_reference":
        return MissingInReference(path=raw["path"], produced=decode_entry(raw["produced"]))
    if kind == "missing_in_produced":
        return MissingInProduced(path=raw["path"], reference=decode_entry(raw["reference"]))
    if kind == "length_mismatch":
        return LengthMismatch(
            path=raw["path"],
            produced_length=int(raw["produced_length"]),
            reference_length=int(raw["reference_length"]),
            produced=decode_entry(raw["produced"]),
            reference=decode_entry(raw["reference"]),
        )
    raise ValueError(f"Unknown mismatch kind: {kind}")
