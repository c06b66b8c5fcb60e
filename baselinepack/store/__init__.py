"""Snapshot store subsystem for BaselineKit."""

from baselinepack.store.config import (
    CONFIG_FILENAME,
    CONFIG_SCHEMA,
    DEFAULT_ARTIFACT_DIR,
    StoreConfig,
    load_or_create_config,
    read_config,
)
from baselinepack.store.exceptions import (
    ConfigError,
    DuplicateArtifactError,
    InvalidArtifactNameError,
    StoreClosedError,
    StoreError,
)
from baselinepack.store.snapshot import (
    BaselineStore,
    open_store,
    resolve_baseline_path,
    validate_artifact_name,
    validate_artifact_subdir,
)

__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_SCHEMA",
    "DEFAULT_ARTIFACT_DIR",
    "StoreConfig",
    "load_or_create_config",
    "read_config",
    "StoreError",
    "ConfigError",
    "InvalidArtifactNameError",
    "DuplicateArtifactError",
    "StoreClosedError",
    "BaselineStore",
    "open_store",
    "resolve_baseline_path",
    "validate_artifact_name",
    "validate_artifact_subdir",
]
