"""Conversion of Python values into the JSON model stored in artifacts."""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
import enum
import math
from typing import Any

from baselinepack.core.exceptions import ArtifactSerializationError

JSON_KINDS = ("null", "bool", "number", "string", "array", "object")


def json_kind(value: Any) -> str:
    """Return the JSON kind of a JSON-model value."""
    if value is None:
        return "null"
    # bool is an int subclass and must be checked first.
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON-model value: {type(value).__name__}")


def ensure_json_value(value: Any) -> Any:
    """Validate a JSON-model value and return an independent copy of it.

    Only ``None``, ``bool``, ``int``, finite ``float``, ``str``, ``list`` and
    ``dict`` with string keys are accepted.
    """
    return _ensure(value, path="$")


def to_json_value(value: Any) -> Any:
    """Convert an arbitrary Python value into the JSON model.

    Dataclasses, mappings with string keys, lists and tuples, enums, and
    objects exposing ``to_dict()`` or ``model_dump()`` are converted
    recursively. Anything else raises ``ArtifactSerializationError``.
    """
    return _convert(value, path="$")


def json_equal(left: Any, right: Any) -> bool:
    """Structural equality that keeps bool, int and float apart."""
    left_kind = json_kind(left)
    if left_kind != json_kind(right):
        return False
    if left_kind == "number":
        return type(left) is type(right) and left == right
    if left_kind == "array":
        return len(left) == len(right) and all(
            json_equal(item, other) for item, other in zip(left, right)
        )
    if left_kind == "object":
        return left.keys() == right.keys() and all(
            json_equal(left[key], right[key]) for key in left
        )
    return left == right


def _ensure(value: Any, *, path: str) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        _check_finite(value, path)
        return value
    if isinstance(value, list):
        return [_ensure(item, path=f"{path}[{idx}]") for idx, item in enumerate(value)]
    if isinstance(value, dict):
        normalized: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise ArtifactSerializationError(
                    f"JSON object keys must be strings at {path}: {key!r}"
                )
            normalized[key] = _ensure(item, path=f"{path}.{key}")
        return normalized
    raise ArtifactSerializationError(
        f"Value at {path} is not a JSON value: {type(value).__name__}"
    )


def _convert(value: Any, *, path: str) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, enum.Enum):
        return _convert(value.value, path=path)

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        _check_finite(value, path)
        return float(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _convert(getattr(value, field.name), path=f"{path}.{field.name}")
            for field in dataclasses.fields(value)
        }

    if isinstance(value, Mapping):
        converted: dict[str, Any] = {}
        for key, item in value.items():
            if isinstance(key, enum.Enum):
                key = key.value
            if not isinstance(key, str):
                raise ArtifactSerializationError(
                    f"Mapping keys must be strings at {path}: {key!r}"
                )
            converted[key] = _convert(item, path=f"{path}.{key}")
        return converted

    if isinstance(value, (list, tuple)):
        return [_convert(item, path=f"{path}[{idx}]") for idx, item in enumerate(value)]

    for method_name in ("model_dump", "to_dict"):
        method = getattr(value, method_name, None)
        if callable(method):
            return _convert(method(), path=path)

    raise ArtifactSerializationError(
        f"Cannot serialize value at {path}: unsupported type {type(value).__name__}"
    )


def _check_finite(value: float, path: str) -> None:
    if math.isnan(value) or math.isinf(value):
        raise ArtifactSerializationError(f"NaN and infinity are not supported at {path}")
