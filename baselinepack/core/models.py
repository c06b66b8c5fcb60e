"""Core data models for BaselineKit entries and artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
import pprint
from typing import Any, Iterator, Union

from baselinepack.core.canonical import ensure_json_value, json_equal, to_json_value
from baselinepack.core.exceptions import (
    ArtifactSerializationError,
    DuplicateKeyError,
    FrozenArtifactError,
    InvalidKeyError,
)


@dataclass(frozen=True, slots=True)
class StringEntry:
    """A text entry."""

    text: str


@dataclass(frozen=True, slots=True)
class BytesEntry:
    """A raw byte entry."""

    data: bytes


@dataclass(frozen=True, slots=True, eq=False)
class JsonEntry:
    """An embedded JSON document."""

    value: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonEntry):
            return NotImplemented
        return json_equal(self.value, other.value)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, slots=True)
class ArtifactEntry:
    """A nested artifact."""

    artifact: "Artifact"


Entry = Union[StringEntry, BytesEntry, JsonEntry, ArtifactEntry]
ENTRY_TYPES: tuple[type, ...] = (StringEntry, BytesEntry, JsonEntry, ArtifactEntry)


@dataclass(slots=True, eq=False)
class Artifact:
    """A tree of named entries produced by one test.

    Keys are unique and always iterated in sorted order, so comparison output
    and stored baselines are reproducible. The root artifact of a test comes
    from ``BaselineStore.artifact``; nested artifacts are built directly and
    inserted with ``insert_artifact``.
    """

    _entries: dict[str, Entry] = field(default_factory=dict)
    _frozen: bool = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further insertion into this artifact and its children."""
        self._frozen = True
        for entry in self._entries.values():
            if isinstance(entry, ArtifactEntry):
                entry.artifact.freeze()

    def insert(self, key: str, entry: Entry) -> None:
        """Insert an entry under ``key``. The ``insert_*`` helpers wrap this.

        JSON payloads are validated and copied; nested artifacts are frozen.

        Raises:
            ArtifactSerializationError: If the entry payload has the wrong type
                or is not in the JSON model.
        """
        if not isinstance(key, str) or not key:
            raise InvalidKeyError(f"Artifact keys must be non-empty strings, got {key!r}")
        if not isinstance(entry, ENTRY_TYPES):
            raise TypeError(f"Unsupported entry type: {type(entry).__name__}")
        if self._frozen:
            raise FrozenArtifactError(key)
        if key in self._entries:
            raise DuplicateKeyError(key)
        if isinstance(entry, ArtifactEntry) and entry.artifact is self:
            raise InvalidKeyError(f"Cannot insert an artifact into itself under `{key}`")
        entry = _checked_entry(key, entry)
        self._entries[key] = entry
        if isinstance(entry, ArtifactEntry):
            entry.artifact.freeze()

    def insert_str(self, key: str, text: str) -> None:
        self.insert(key, StringEntry(str(text)))

    def insert_bytes(self, key: str, data: bytes | bytearray | memoryview) -> None:
        self.insert(key, BytesEntry(bytes(data)))

    def insert_debug(self, key: str, value: Any) -> None:
        """Insert the pretty-printed ``repr`` of ``value`` as a string entry."""
        self.insert(key, StringEntry(pprint.pformat(value)))

    def insert_display(self, key: str, value: Any) -> None:
        """Insert ``str(value)`` as a string entry."""
        self.insert(key, StringEntry(str(value)))

    def insert_json(self, key: str, value: Any) -> None:
        """Insert a value that is already in the JSON model."""
        self.insert(key, JsonEntry(value))

    def insert_serialize(self, key: str, value: Any) -> None:
        """Convert ``value`` to the JSON model and insert it.

        Raises:
            ArtifactSerializationError: If the value has no JSON representation.
        """
        self.insert(key, JsonEntry(to_json_value(value)))

    def insert_artifact(self, key: str, child: "Artifact") -> None:
        """Insert a nested artifact. The child is frozen once inserted."""
        self.insert(key, ArtifactEntry(child))

    def get(self, key: str, default: Entry | None = None) -> Entry | None:
        return self._entries.get(key, default)

    def keys(self) -> list[str]:
        return sorted(self._entries)

    def items(self) -> list[tuple[str, Entry]]:
        return [(key, self._entries[key]) for key in sorted(self._entries)]

    def __getitem__(self, key: str) -> Entry:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Artifact):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Artifact({dict(self.items())!r})"


def _checked_entry(key: str, entry: Entry) -> Entry:
    if isinstance(entry, StringEntry) and not isinstance(entry.text, str):
        raise ArtifactSerializationError(
            f"String entry `{key}` must hold str, got {type(entry.text).__name__}"
        )
    if isinstance(entry, BytesEntry) and not isinstance(entry.data, bytes):
        raise ArtifactSerializationError(
            f"Bytes entry `{key}` must hold bytes, got {type(entry.data).__name__}"
        )
    if isinstance(entry, ArtifactEntry) and not isinstance(entry.artifact, Artifact):
        raise ArtifactSerializationError(
            f"Artifact entry `{key}` must hold an Artifact, got {type(entry.artifact).__name__}"
        )
    if isinstance(entry, JsonEntry):
        return JsonEntry(ensure_json_value(entry.value))
    return entry
