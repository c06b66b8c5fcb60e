from pathlib import Path
from typing import Iterator

import pytest
import structlog

pytest_plugins = ["baselinekit.pytest_plugin"]


@pytest.fixture()
def baselinekit_config_dir(tmp_path: Path) -> Path:
    return tmp_path / "project"


@pytest.fixture(autouse=True)
def _restore_structlog() -> Iterator[None]:
    # CLI invocations bind the logger to the runner's temporary stderr.
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)
