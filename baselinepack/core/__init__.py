"""Core models and deterministic primitives for BaselineKit."""

from baselinepack.core.canonical import ensure_json_value, json_equal, json_kind, to_json_value
from baselinepack.core.codec import decode_artifact, decode_entry, encode_artifact, encode_entry
from baselinepack.core.exceptions import (
    ArtifactSerializationError,
    BaselineKitError,
    ContractViolationError,
    DuplicateKeyError,
    FrozenArtifactError,
    InvalidKeyError,
    RegressionError,
)
from baselinepack.core.models import (
    Artifact,
    ArtifactEntry,
    BytesEntry,
    Entry,
    JsonEntry,
    StringEntry,
)
from baselinepack.core.types import MISMATCH_KINDS, ArtifactStatus, MismatchKind

__all__ = [
    "Artifact",
    "ArtifactEntry",
    "BytesEntry",
    "Entry",
    "JsonEntry",
    "StringEntry",
    "MISMATCH_KINDS",
    "MismatchKind",
    "ArtifactStatus",
    "BaselineKitError",
    "ArtifactSerializationError",
    "ContractViolationError",
    "DuplicateKeyError",
    "FrozenArtifactError",
    "InvalidKeyError",
    "RegressionError",
    "ensure_json_value",
    "json_equal",
    "json_kind",
    "to_json_value",
    "encode_entry",
    "encode_artifact",
    "decode_entry",
    "decode_artifact",
]
