"""Baseline document read/write utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from baselinepack.artifact.exceptions import ArtifactIOError, BaselineDecodeError
from baselinepack.artifact.locking import create_exclusive, read_shared
from baselinepack.artifact.schema import DEFAULT_BASELINE_VERSION, validate_baseline_document
from baselinepack.core.codec import decode_artifact, encode_artifact
from baselinepack.core.models import Artifact

BASELINE_SUFFIX = ".json"


def build_baseline_document(
    artifact: Artifact,
    *,
    version: str = DEFAULT_BASELINE_VERSION,
) -> dict[str, Any]:
    document = {"version": version, "artifact": encode_artifact(artifact)}
    validate_baseline_document(document)
    return document


def dumps_baseline(artifact: Artifact) -> str:
    """Serialize an artifact as a pretty, diff-friendly baseline document.

    Artifact keys are already sorted; JSON entries keep their source order.
    """
    document = build_baseline_document(artifact)
    return json.dumps(document, indent=2, ensure_ascii=True, allow_nan=False) + "\n"


def loads_baseline(text: str, *, source: str = "<string>") -> Artifact:
    """Parse and validate a baseline document."""
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, ValueError) as error:
        raise BaselineDecodeError(f"Baseline is not valid JSON: {source} ({error})") from error

    validate_baseline_document(document)
    try:
        return decode_artifact(document["artifact"])
    except ValueError as error:
        raise BaselineDecodeError(f"Invalid baseline {source}: {error}") from error


def write_baseline(artifact: Artifact, path: str | Path) -> bool:
    """Write ``artifact`` as a new baseline at ``path``.

    Existing baselines are never overwritten; returns False if ``path``
    already exists.
    """
    target = Path(path)
    text = dumps_baseline(artifact)
    try:
        created = create_exclusive(target, text)
    except OSError as error:
        raise ArtifactIOError(f"Cannot write baseline {target}: {error}") from error
    return created


def read_baseline(path: str | Path) -> Artifact:
    """Read a baseline from ``path``.

    Raises:
        FileNotFoundError: If no baseline exists at ``path``.
        ArtifactIOError: If the file cannot be read.
        BaselineDecodeError: If the file is not a valid baseline document.
    """
    target = Path(path)
    try:
        text = read_shared(target)
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as error:
        raise BaselineDecodeError(f"Baseline is not valid UTF-8 text: {target}") from error
    except OSError as error:
        raise ArtifactIOError(f"Cannot read baseline {target}: {error}") from error
    return loads_baseline(text, source=str(target))


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")
