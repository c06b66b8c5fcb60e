"""pytest fixtures for BaselineKit.

Enable with ``pytest_plugins = ["baselinekit.pytest_plugin"]`` in a conftest.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
import re
from typing import Any, Iterator

import pytest

from baselinepack.observability import setup_logging
from baselinepack.store import BaselineStore, open_store

_UNSAFE_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def artifact_subdir_for_node(nodeid: str) -> str:
    """Derive a baseline subdir from a pytest node id.

    ``tests/test_math.py::TestSum::test_add[1-2]`` becomes
    ``tests/test_math/TestSum/test_add_1-2``.
    """
    module, _, rest = nodeid.partition("::")
    module_path = PurePosixPath(module.replace("\\", "/"))
    if module_path.suffix == ".py":
        module_path = module_path.with_suffix("")

    segments = [part for part in module_path.parts if part not in {"", ".", "..", "/"}]
    segments.extend(part for part in rest.split("::") if part)
    return "/".join(_sanitize(segment) for segment in segments)


def _sanitize(segment: str) -> str:
    cleaned = _UNSAFE_SEGMENT_CHARS.sub("_", segment).rstrip("_")
    if cleaned in {"", ".", ".."}:
        return "_"
    return cleaned


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "baselinekit_log_level",
        "Minimum level for BaselineKit structured logs written to stderr.",
        default="warning",
    )


def pytest_configure(config: pytest.Config) -> None:
    setup_logging(config.getini("baselinekit_log_level"))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: Any) -> Iterator[None]:
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"_baselinekit_report_{report.when}", report)


@pytest.fixture()
def baselinekit_config_dir(request: pytest.FixtureRequest) -> Path:
    """Project directory holding ``baselinekit.json``. Override to relocate."""
    return Path(request.config.rootpath)


@pytest.fixture()
def baseline_store(
    request: pytest.FixtureRequest,
    baselinekit_config_dir: Path,
) -> Iterator[BaselineStore]:
    """Store scoped to the current test; finalized and asserted on teardown.

    Nothing is recorded or compared when the test body failed.
    """
    store = open_store(baselinekit_config_dir, artifact_subdir_for_node(request.node.nodeid))
    yield store

    call_report = getattr(request.node, "_baselinekit_report_call", None)
    if call_report is not None and not call_report.passed:
        return
    if not store.finalized:
        store.finalize_and_assert()
