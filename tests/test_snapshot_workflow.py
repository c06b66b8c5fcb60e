import json
from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

from baselinepack.artifact import BaselineDecodeError, dumps_baseline, read_baseline, write_baseline
from baselinepack.core import (
    Artifact,
    DuplicateKeyError,
    FrozenArtifactError,
    JsonEntry,
    RegressionError,
)
from baselinepack.diff import NotEqual
from baselinepack.store import (
    ConfigError,
    DuplicateArtifactError,
    InvalidArtifactNameError,
    StoreClosedError,
    open_store,
    resolve_baseline_path,
)
from baselinepack.store import snapshot


def _record_fruits(project: Path, *fruits: str):
    store = open_store(project, "tests/mismatches")
    store.artifact("test").insert_serialize("fruits", list(fruits))
    return store, store.finalize()


def test_first_run_records_and_second_run_passes(tmp_path: Path) -> None:
    store, first = _record_fruits(tmp_path, "apples", "bananas", "oranges")

    assert first.passed is True
    assert [outcome.status for outcome in first.artifacts] == ["recorded"]
    baseline = store.baseline_path("test")
    assert baseline == tmp_path / "baselinekit" / "artifacts" / "tests" / "mismatches" / "test.json"
    assert baseline.exists()

    _, second = _record_fruits(tmp_path, "apples", "bananas", "oranges")

    assert second.passed is True
    assert [outcome.status for outcome in second.artifacts] == ["pass"]


def test_changed_value_reports_single_mismatch(tmp_path: Path) -> None:
    store, _ = _record_fruits(tmp_path, "apples", "bananas", "oranges")
    recorded = store.baseline_path("test").read_text(encoding="utf-8")

    _, report = _record_fruits(tmp_path, "apples", "pears", "oranges")

    assert report.mismatches == [
        NotEqual(
            path="test::fruits[1]",
            produced=JsonEntry("pears"),
            reference=JsonEntry("bananas"),
        )
    ]
    assert report.artifacts[0].status == "fail"
    assert report.artifacts[0].mismatch_count == 1
    assert store.baseline_path("test").read_text(encoding="utf-8") == recorded


def test_deleting_baseline_rebaselines(tmp_path: Path) -> None:
    store, _ = _record_fruits(tmp_path, "apples")
    store.baseline_path("test").unlink()

    _, report = _record_fruits(tmp_path, "pears")

    assert report.passed is True
    assert report.artifacts[0].status == "recorded"


def test_artifacts_are_settled_in_name_order(tmp_path: Path) -> None:
    store = open_store(tmp_path, "ordering")
    for name in ("zeta", "alpha", "mid"):
        store.artifact(name).insert_str("value", name)

    report = store.finalize()

    assert [outcome.name for outcome in report.artifacts] == ["alpha", "mid", "zeta"]


def test_config_tolerances_apply_and_can_be_overridden(tmp_path: Path) -> None:
    (tmp_path / "baselinekit.json").write_text(
        json.dumps(
            {"version": "1.0", "root": ".", "artifact_dir": "artifacts", "atol": 0.01, "rtol": None}
        ),
        encoding="utf-8",
    )

    store = open_store(tmp_path, "numbers")
    store.artifact("values").insert_json("pi", 3.14159)
    assert store.finalize().passed

    tolerant = open_store(tmp_path, "numbers")
    assert tolerant.atol == 0.01
    tolerant.artifact("values").insert_json("pi", 3.145)
    assert tolerant.finalize().passed

    strict = open_store(tmp_path, "numbers")
    strict.atol = None
    strict.artifact("values").insert_json("pi", 3.145)
    assert not strict.finalize().passed


def test_context_manager_asserts_on_clean_exit(tmp_path: Path) -> None:
    with open_store(tmp_path, "ctx") as store:
        store.artifact("value").insert_json("n", 1)
    assert store.finalized

    with pytest.raises(RegressionError, match="value::n"):
        with open_store(tmp_path, "ctx") as store:
            store.artifact("value").insert_json("n", 2)


def test_context_manager_skips_finalize_when_body_fails(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        with open_store(tmp_path, "ctx-error") as store:
            store.artifact("value").insert_json("n", 1)
            raise RuntimeError("boom")

    assert not store.finalized
    assert not store.baseline_path("value").exists()


def test_duplicate_key_aborts_before_store_interaction(tmp_path: Path) -> None:
    store = open_store(tmp_path, "dupes")
    artifact = store.artifact("test")
    artifact.insert_json("key", 1)

    with pytest.raises(DuplicateKeyError):
        artifact.insert_json("key", 2)

    assert not store.baseline_path("test").parent.exists()


def test_duplicate_artifact_claim_is_rejected(tmp_path: Path) -> None:
    store = open_store(tmp_path, "claims")
    store.artifact("test")

    with pytest.raises(DuplicateArtifactError, match="`test`"):
        store.artifact("test")


@pytest.mark.parametrize("name", ["", "a/b", "a\\b", "..", "name.json"])
def test_invalid_artifact_names_are_rejected(tmp_path: Path, name: str) -> None:
    store = open_store(tmp_path, "names")

    with pytest.raises(InvalidArtifactNameError):
        store.artifact(name)


@pytest.mark.parametrize("subdir", ["/absolute", "../escape", "a/../../b"])
def test_invalid_artifact_subdirs_are_rejected(tmp_path: Path, subdir: str) -> None:
    with pytest.raises(InvalidArtifactNameError):
        open_store(tmp_path, subdir)


def test_store_is_single_use(tmp_path: Path) -> None:
    store = open_store(tmp_path, "single")
    artifact = store.artifact("test")
    store.finalize()

    with pytest.raises(StoreClosedError):
        store.finalize()
    with pytest.raises(StoreClosedError):
        store.artifact("other")
    with pytest.raises(FrozenArtifactError):
        artifact.insert_str("late", "value")


def test_corrupt_baseline_surfaces_decode_error(tmp_path: Path) -> None:
    store = open_store(tmp_path, "corrupt")
    path = store.baseline_path("test")
    path.parent.mkdir(parents=True)
    path.write_text("{broken", encoding="utf-8")
    store.artifact("test").insert_str("value", "x")

    with pytest.raises(BaselineDecodeError, match="not valid JSON"):
        store.finalize()
    assert path.read_text(encoding="utf-8") == "{broken"


def test_resolve_baseline_path_uses_json_suffix(tmp_path: Path) -> None:
    assert resolve_baseline_path("demo-name", tmp_path) == tmp_path / "demo-name.json"


@pytest.mark.parametrize(
    ("competing_fruit", "status"),
    [("apples", "pass"), ("pears", "fail")],
)
def test_lost_record_race_compares_against_winner(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    competing_fruit: str,
    status: str,
) -> None:
    store = open_store(tmp_path, "race")
    store.artifact("test").insert_json("fruit", "apples")
    path = store.baseline_path("test")

    competing = Artifact()
    competing.insert_json("fruit", competing_fruit)
    reads: list[Path] = []

    def read_after_competing_write(target: Path) -> Artifact:
        reads.append(Path(target))
        if len(reads) == 1:
            with pytest.raises(FileNotFoundError):
                read_baseline(target)
            assert write_baseline(competing, target) is True
            raise FileNotFoundError(target)
        return read_baseline(target)

    monkeypatch.setattr(snapshot, "read_baseline", read_after_competing_write)
    written = dumps_baseline(competing)

    report = store.finalize()

    assert reads == [path, path]
    assert report.artifacts[0].status == status
    assert path.read_text(encoding="utf-8") == written


def test_nan_tolerance_in_config_fails_on_open(tmp_path: Path) -> None:
    (tmp_path / "baselinekit.json").write_text(
        '{"version": "1.0", "root": ".", "artifact_dir": "a", "atol": NaN}',
        encoding="utf-8",
    )

    with pytest.raises(ConfigError, match="NaN"):
        open_store(tmp_path, "numbers")


def test_recording_logs_one_debug_event_per_artifact(tmp_path: Path) -> None:
    store = open_store(tmp_path, "logging")
    store.artifact("test").insert_str("value", "x")
    structlog.reset_defaults()

    with capture_logs() as logs:
        store.finalize()

    assert [(entry["event"], entry["log_level"]) for entry in logs] == [
        ("baseline_recorded", "debug")
    ]
