from concurrent.futures import ThreadPoolExecutor
import json
from pathlib import Path

import pytest

from baselinepack.store import (
    CONFIG_FILENAME,
    DEFAULT_ARTIFACT_DIR,
    ConfigError,
    StoreConfig,
    load_or_create_config,
    read_config,
)


def test_first_use_creates_default_config(tmp_path: Path) -> None:
    project = tmp_path / "project"

    config = load_or_create_config(project)

    assert config == StoreConfig(config_dir=project)
    raw = json.loads((project / CONFIG_FILENAME).read_text(encoding="utf-8"))
    assert raw == {
        "version": "1.0",
        "root": ".",
        "artifact_dir": DEFAULT_ARTIFACT_DIR,
        "atol": None,
        "rtol": None,
    }
    assert config.artifacts_root == project / "." / DEFAULT_ARTIFACT_DIR


def test_existing_config_is_read_not_rewritten(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        json.dumps(
            {
                "version": "1.0",
                "root": "data",
                "artifact_dir": "snapshots",
                "atol": 0.001,
                "rtol": None,
            }
        ),
        encoding="utf-8",
    )
    before = path.read_text(encoding="utf-8")

    config = load_or_create_config(tmp_path)

    assert path.read_text(encoding="utf-8") == before
    assert config.atol == 0.001
    assert config.rtol is None
    assert config.artifacts_root == tmp_path / "data" / "snapshots"


def test_absolute_root_is_used_as_is(tmp_path: Path) -> None:
    shared = tmp_path / "shared"
    (tmp_path / CONFIG_FILENAME).write_text(
        json.dumps({"version": "1.0", "root": str(shared), "artifact_dir": "a"}),
        encoding="utf-8",
    )

    assert load_or_create_config(tmp_path).artifacts_root == shared / "a"


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("", "empty"),
        ("{not json", "Invalid config JSON"),
        ('{"version": "1.0", "root": "."}', "artifact_dir"),
        ('{"version": "1.0", "root": ".", "artifact_dir": "a", "atol": -1}', "atol"),
        ('{"version": "1.0", "root": ".", "artifact_dir": "a", "extra": 1}', "extra"),
        ('{"version": "1.0", "root": ".", "artifact_dir": "a", "atol": NaN}', "NaN"),
        ('{"version": "1.0", "root": ".", "artifact_dir": "a", "rtol": Infinity}', "Infinity"),
    ],
)
def test_invalid_config_raises_config_error(tmp_path: Path, content: str, match: str) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=match):
        read_config(path)


def test_concurrent_bootstrap_yields_one_consistent_config(tmp_path: Path) -> None:
    project = tmp_path / "project"

    with ThreadPoolExecutor(max_workers=8) as pool:
        configs = list(pool.map(lambda _: load_or_create_config(project), range(16)))

    assert all(config == configs[0] for config in configs)
    assert [path.name for path in project.iterdir()] == [CONFIG_FILENAME]
