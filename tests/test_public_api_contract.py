import inspect
from pathlib import Path

import baselinekit
from baselinepack.artifact import read_baseline


def test_public_api_symbol_list_is_explicit_and_stable() -> None:
    assert baselinekit.__all__ == [
        "__version__",
        "Artifact",
        "Entry",
        "StringEntry",
        "BytesEntry",
        "JsonEntry",
        "ArtifactEntry",
        "Mismatch",
        "NotEqual",
        "MissingInReference",
        "MissingInProduced",
        "LengthMismatch",
        "Report",
        "BaselineStore",
        "ArtifactError",
        "BaselineDecodeError",
        "ConfigError",
        "ContractViolationError",
        "RegressionError",
        "open_store",
        "compare",
    ]
    for name in baselinekit.__all__:
        assert hasattr(baselinekit, name), name


def test_public_api_function_signatures() -> None:
    assert tuple(inspect.signature(baselinekit.open_store).parameters) == (
        "config_dir",
        "artifact_subdir",
    )

    compare_params = inspect.signature(baselinekit.compare).parameters
    assert tuple(compare_params) == ("produced", "reference", "atol", "rtol")
    assert compare_params["atol"].kind is inspect.Parameter.KEYWORD_ONLY
    assert compare_params["atol"].default is None
    assert compare_params["rtol"].default is None


def test_public_compare_returns_report() -> None:
    produced = baselinekit.Artifact()
    produced.insert_json("value", 1.0)
    reference = baselinekit.Artifact()
    reference.insert_json("value", 1.05)

    assert baselinekit.compare(produced, reference).passed is False
    assert baselinekit.compare(produced, reference, atol=0.1).passed is True


def test_public_store_round_trip(tmp_path: Path) -> None:
    with baselinekit.open_store(tmp_path, "api") as store:
        store.artifact("result").insert_serialize("items", {"a": [1, 2]})

    loaded = read_baseline(store.baseline_path("result"))
    assert loaded["items"] == baselinekit.JsonEntry({"a": [1, 2]})


def test_regression_error_is_assertion_error() -> None:
    assert issubclass(baselinekit.RegressionError, AssertionError)
    assert issubclass(baselinekit.BaselineDecodeError, baselinekit.ArtifactError)
