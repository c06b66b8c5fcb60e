"""Project config bootstrap for the snapshot store."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
import structlog

from baselinepack.artifact.locking import create_exclusive, read_shared
from baselinepack.store.exceptions import ConfigError

CONFIG_FILENAME = "baselinekit.json"
CONFIG_VERSION = "1.0"
DEFAULT_ROOT = "."
DEFAULT_ARTIFACT_DIR = "baselinekit/artifacts"

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "BaselineKit config",
    "type": "object",
    "required": ["version", "root", "artifact_dir"],
    "additionalProperties": False,
    "properties": {
        "version": {"type": "string", "pattern": r"^1\.\d+$"},
        "root": {"type": "string", "minLength": 1},
        "artifact_dir": {"type": "string", "minLength": 1},
        "atol": {"type": ["number", "null"], "minimum": 0},
        "rtol": {"type": ["number", "null"], "minimum": 0},
    },
}

_log = structlog.get_logger(component="store.config")


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Resolved per-project store settings."""

    config_dir: Path
    root: str = DEFAULT_ROOT
    artifact_dir: str = DEFAULT_ARTIFACT_DIR
    atol: float | None = None
    rtol: float | None = None

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def artifacts_root(self) -> Path:
        """Directory holding every artifact subdir. Relative roots resolve against the config dir."""
        root = Path(self.root)
        if not root.is_absolute():
            root = self.config_dir / root
        return root / self.artifact_dir

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": CONFIG_VERSION,
            "root": self.root,
            "artifact_dir": self.artifact_dir,
            "atol": self.atol,
            "rtol": self.rtol,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, config_dir: Path) -> "StoreConfig":
        atol = raw.get("atol")
        rtol = raw.get("rtol")
        return cls(
            config_dir=config_dir,
            root=raw["root"],
            artifact_dir=raw["artifact_dir"],
            atol=float(atol) if atol is not None else None,
            rtol=float(rtol) if rtol is not None else None,
        )


def load_or_create_config(config_dir: str | Path) -> StoreConfig:
    """Read the project config, creating it with defaults on first use.

    Creation holds an exclusive lock on a freshly created file; reads hold a
    shared lock, so concurrent first runs never observe a partial config.
    """
    directory = Path(config_dir)
    path = directory / CONFIG_FILENAME

    if not path.exists():
        default_config = StoreConfig(config_dir=directory)
        text = json.dumps(default_config.to_dict(), indent=2, ensure_ascii=True) + "\n"
        try:
            created = create_exclusive(path, text)
        except OSError as error:
            raise ConfigError(f"Cannot create config {path}: {error}") from error
        if created:
            _log.debug("config_created", path=str(path))
            return default_config

    return read_config(path)


def read_config(path: str | Path) -> StoreConfig:
    """Read and validate an existing config file."""
    target = Path(path)
    try:
        text = read_shared(target)
    except (OSError, UnicodeDecodeError) as error:
        raise ConfigError(f"Cannot read config {target}: {error}") from error

    if not text.strip():
        raise ConfigError(f"Config file is empty: {target}")

    try:
        raw = json.loads(text, parse_constant=_reject_constant)
    except ValueError as error:
        raise ConfigError(f"Invalid config JSON ({target}): {error}") from error

    errors = sorted(
        Draft202012Validator(CONFIG_SCHEMA).iter_errors(raw),
        key=lambda err: list(map(str, err.path)),
    )
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.path) or "$"
        raise ConfigError(f"Invalid config at {location} ({target}): {first.message}")

    _log.debug("config_loaded", path=str(target))
    return StoreConfig.from_dict(raw, config_dir=target.parent)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")
