import pytest

from baselinepack.core import Artifact, ArtifactEntry, BytesEntry, JsonEntry, RegressionError, StringEntry
from baselinepack.diff import (
    ArtifactOutcome,
    LengthMismatch,
    MissingInProduced,
    MissingInReference,
    NotEqual,
    Report,
    render_entry,
    render_mismatch,
    render_report,
    render_report_summary,
)


def _sample_report() -> Report:
    child = Artifact()
    child.insert_str("leaf", "x")
    report = Report()
    report.add_outcome(
        ArtifactOutcome(name="test", baseline_path="b/test.json", status="fail", mismatch_count=4),
        [
            NotEqual(path="test::fruits[1]", produced=JsonEntry("pears"), reference=JsonEntry("bananas")),
            MissingInReference(path="test::new", produced=StringEntry("hello")),
            MissingInProduced(path="test::old", reference=ArtifactEntry(child)),
            LengthMismatch(
                path="test::items",
                produced_length=1,
                reference_length=2,
                produced=JsonEntry([1]),
                reference=JsonEntry([1, 2]),
            ),
        ],
    )
    return report


def test_empty_report_passes_silently() -> None:
    report = Report()

    assert report.passed is True
    assert report.exit_code == 0
    assert report.assert_unregressed() is None
    assert render_report(report) == "no mismatches detected"


def test_summary_counts_every_kind() -> None:
    report = _sample_report()

    assert report.summary() == {
        "not_equal": 1,
        "missing_in_reference": 1,
        "missing_in_produced": 1,
        "length_mismatch": 1,
    }
    assert report.exit_code == 1
    assert render_report_summary(report).startswith("status=fail artifacts=1 mismatches=4")


def test_assert_unregressed_raises_with_full_breakdown() -> None:
    report = _sample_report()

    with pytest.raises(RegressionError) as excinfo:
        report.assert_unregressed()

    message = str(excinfo.value)
    assert isinstance(excinfo.value, AssertionError)
    assert excinfo.value.report is report
    assert "found 4 mismatch(es)" in message
    assert '`test::fruits[1]` differs from the reference value' in message
    assert 'reference="bananas"' in message
    assert 'produced="pears"' in message
    assert "`test::new` does not exist in the reference" in message
    assert "`test::old` exists in the reference but was not produced" in message
    assert "has length 2 in the reference but length 1 in the produced artifact" in message


def test_render_report_caps_output() -> None:
    rendered = render_report(_sample_report(), max_mismatches=1)

    assert "test::fruits[1]" in rendered
    assert "test::new" not in rendered
    assert "... 3 additional mismatch(es) not shown" in rendered


def test_render_entry_covers_every_entry_case() -> None:
    child = Artifact()
    child.insert_bytes("raw", b"\xff")

    assert render_entry(StringEntry("a\nb")) == '"a\\nb"'
    assert render_entry(BytesEntry(b"hi")) == "bytes(2):aGk="
    assert render_entry(JsonEntry({"b": 1, "a": [None]})) == '{"b": 1, "a": [null]}'
    assert render_entry(ArtifactEntry(child)) == '{"raw": {"Bytes": "/w=="}}'


def test_render_entry_falls_back_to_repr() -> None:
    broken = JsonEntry({"value": object()})

    assert render_entry(broken).startswith("JsonEntry(")
    assert "MISMATCH [missing_in_reference]" in render_mismatch(
        MissingInReference(path="p", produced=broken)
    )


def test_report_round_trips_through_dict() -> None:
    report = _sample_report()

    restored = Report.from_dict(report.to_dict())

    assert restored == report
    assert restored.to_dict()["status"] == "fail"
