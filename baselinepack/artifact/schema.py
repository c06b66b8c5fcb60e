"""JSON schema and validation for baseline documents."""

from __future__ import annotations

from functools import lru_cache
import re
from typing import Any

from jsonschema import Draft202012Validator

from baselinepack.artifact.exceptions import BaselineDecodeError

SUPPORTED_MAJOR_VERSION = 1
DEFAULT_BASELINE_VERSION = "1.0"

_VERSION_PATTERN = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)$")

BASELINE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "BaselineKit baseline",
    "type": "object",
    "required": ["version", "artifact"],
    "additionalProperties": False,
    "properties": {
        "version": {
            "type": "string",
            "pattern": r"^\d+\.\d+$",
            "description": "Major.minor baseline document version",
        },
        "artifact": {"$ref": "#/$defs/artifact"},
    },
    "$defs": {
        "artifact": {
            "type": "object",
            "propertyNames": {"minLength": 1},
            "additionalProperties": {"$ref": "#/$defs/entry"},
        },
        "entry": {
            "type": "object",
            "minProperties": 1,
            "maxProperties": 1,
            "additionalProperties": False,
            "properties": {
                "Str": {"type": "string"},
                "Bytes": {"type": "string", "contentEncoding": "base64"},
                "Json": {},
                "Artifact": {"$ref": "#/$defs/artifact"},
            },
        },
    },
}


def parse_baseline_version(version: str) -> tuple[int, int]:
    """Parse major/minor baseline document version."""
    match = _VERSION_PATTERN.fullmatch(version.strip())
    if match is None:
        raise BaselineDecodeError(f"Invalid baseline version: {version}")
    return int(match.group("major")), int(match.group("minor"))


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    Draft202012Validator.check_schema(BASELINE_SCHEMA)
    return Draft202012Validator(BASELINE_SCHEMA)


def validate_baseline_document(document: Any) -> None:
    """Validate baseline document shape and supported version."""
    if not isinstance(document, dict):
        raise BaselineDecodeError("Baseline document must be a JSON object")

    version = str(document.get("version", "")).strip()
    major, _minor = parse_baseline_version(version)
    if major != SUPPORTED_MAJOR_VERSION:
        raise BaselineDecodeError(
            "Unsupported baseline major version: "
            f"{version}. Supported major: {SUPPORTED_MAJOR_VERSION}.x"
        )

    errors = sorted(_validator().iter_errors(document), key=lambda err: list(map(str, err.path)))
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.path) or "$"
        raise BaselineDecodeError(f"Invalid baseline at {location}: {first.message}")
