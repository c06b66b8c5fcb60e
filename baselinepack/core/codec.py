"""Externally tagged document encoding for entries and artifacts."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from baselinepack.core.canonical import ensure_json_value
from baselinepack.core.exceptions import ArtifactSerializationError
from baselinepack.core.models import (
    Artifact,
    ArtifactEntry,
    BytesEntry,
    Entry,
    JsonEntry,
    StringEntry,
)

ENTRY_TAGS = ("Str", "Bytes", "Json", "Artifact")


def encode_entry(entry: Entry) -> dict[str, Any]:
    if isinstance(entry, StringEntry):
        return {"Str": entry.text}
    if isinstance(entry, BytesEntry):
        return {"Bytes": base64.b64encode(entry.data).decode("ascii")}
    if isinstance(entry, JsonEntry):
        return {"Json": entry.value}
    if isinstance(entry, ArtifactEntry):
        return {"Artifact": encode_artifact(entry.artifact)}
    raise TypeError(f"Unsupported entry type: {type(entry).__name__}")


def encode_artifact(artifact: Artifact) -> dict[str, Any]:
    """Encode an artifact as a JSON object with keys in sorted order."""
    return {key: encode_entry(entry) for key, entry in artifact.items()}


def decode_entry(raw: Any) -> Entry:
    """Decode one tagged entry.

    Raises:
        ValueError: If the document is not a single-tag entry object.
    """
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ValueError(f"Entry must be an object with exactly one tag, got {raw!r}")
    ((tag, payload),) = raw.items()

    if tag == "Str":
        if not isinstance(payload, str):
            raise ValueError("Str entry payload must be a string")
        return StringEntry(payload)
    if tag == "Bytes":
        if not isinstance(payload, str):
            raise ValueError("Bytes entry payload must be a base64 string")
        try:
            return BytesEntry(base64.b64decode(payload.encode("ascii"), validate=True))
        except (binascii.Error, UnicodeEncodeError) as error:
            raise ValueError(f"Bytes entry payload is not valid base64: {error}") from error
    if tag == "Json":
        try:
            return JsonEntry(ensure_json_value(payload))
        except ArtifactSerializationError as error:
            raise ValueError(str(error)) from error
    if tag == "Artifact":
        return ArtifactEntry(decode_artifact(payload))
    raise ValueError(f"Unknown entry tag: {tag}")


def decode_artifact(raw: Any) -> Artifact:
    if not isinstance(raw, dict):
        raise ValueError("Artifact must be a JSON object")
    artifact = Artifact()
    for key, raw_entry in raw.items():
        if not isinstance(key, str) or not key:
            raise ValueError(f"Artifact keys must be non-empty strings, got {key!r}")
        entry = decode_entry(raw_entry)
        if isinstance(entry, ArtifactEntry):
            artifact.insert_artifact(key, entry.artifact)
        else:
            artifact.insert(key, entry)
    return artifact
