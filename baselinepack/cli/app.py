import json
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Any

import typer

from baselinepack.artifact import ArtifactError, build_baseline_document, read_baseline
from baselinepack.core.models import Artifact, ArtifactEntry, BytesEntry, JsonEntry, StringEntry
from baselinepack.diff import Report, compare_artifacts, render_report, render_report_summary
from baselinepack.observability import get_logger, setup_logging
from baselinepack.store import CONFIG_FILENAME, ConfigError, load_or_create_config

app = typer.Typer(help="BaselineKit CLI")

_log = get_logger("cli")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("baselinekit")
    except PackageNotFoundError:
        from baselinepack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show BaselineKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Minimum level for structured logs written to stderr.",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json
    setup_logging(log_level)


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _render_tree(artifact: Artifact, *, indent: int = 0) -> list[str]:
    lines: list[str] = []
    pad = "  " * indent
    for key, entry in artifact.items():
        if isinstance(entry, ArtifactEntry):
            lines.append(f"{pad}{key}: artifact ({len(entry.artifact)} entries)")
            lines.extend(_render_tree(entry.artifact, indent=indent + 1))
        elif isinstance(entry, StringEntry):
            lines.append(f"{pad}{key}: str {json.dumps(entry.text, ensure_ascii=True)}")
        elif isinstance(entry, BytesEntry):
            lines.append(f"{pad}{key}: bytes ({len(entry.data)} bytes)")
        elif isinstance(entry, JsonEntry):
            lines.append(f"{pad}{key}: json {json.dumps(entry.value, ensure_ascii=True)}")
    return lines


@app.command()
def init(
    config_dir: Path = typer.Argument(
        Path("."),
        help=f"Project directory holding {CONFIG_FILENAME}.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable config output.",
    ),
) -> None:
    """Create the project config if missing and print the artifact directory."""
    try:
        config = load_or_create_config(config_dir)
    except ConfigError as error:
        message = f"init failed: {error}"
        if json_output:
            _echo_json({"status": "error", "exit_code": 1, "message": message})
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "config_path": str(config.config_path),
                "artifacts_root": str(config.artifacts_root),
                "config": config.to_dict(),
            }
        )
        return

    _echo(f"config: {config.config_path}")
    _echo(f"artifacts: {config.artifacts_root}")


@app.command()
def show(
    baseline: Path = typer.Argument(..., help="Path to a baseline .json file."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit the validated baseline document.",
    ),
) -> None:
    """Print the entry tree stored in a baseline file."""
    try:
        artifact = read_baseline(baseline)
    except (ArtifactError, FileNotFoundError) as error:
        message = f"show failed: {error}"
        if json_output:
            _echo_json({"status": "error", "exit_code": 1, "message": message})
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error

    if json_output:
        _echo_json(build_baseline_document(artifact))
        return

    _echo(f"{baseline}: {len(artifact)} entries")
    for line in _render_tree(artifact, indent=1):
        _echo(line)


@app.command()
def diff(
    produced: Path = typer.Argument(..., help="Path to the produced baseline .json file."),
    reference: Path = typer.Argument(..., help="Path to the reference baseline .json file."),
    atol: float | None = typer.Option(
        None,
        "--atol",
        min=0.0,
        help="Absolute tolerance for floating-point values.",
    ),
    rtol: float | None = typer.Option(
        None,
        "--rtol",
        min=0.0,
        help="Relative tolerance for floating-point values.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable report output.",
    ),
    max_mismatches: int = typer.Option(
        32,
        "--max-mismatches",
        help="Maximum number of mismatches to print in text mode.",
    ),
) -> None:
    """Compare two baseline files and report every mismatch."""
    try:
        produced_artifact = read_baseline(produced)
        reference_artifact = read_baseline(reference)
    except (ArtifactError, FileNotFoundError) as error:
        message = f"diff failed: {error}"
        if json_output:
            _echo_json(
                {
                    "status": "error",
                    "exit_code": 1,
                    "message": message,
                    "produced_path": str(produced),
                    "reference_path": str(reference),
                }
            )
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error

    report = Report(
        mismatches=compare_artifacts(
            produced_artifact,
            reference_artifact,
            atol=atol,
            rtol=rtol,
        )
    )
    _log.debug("diff_completed", mismatch_count=len(report.mismatches))

    if json_output:
        _echo_json(
            {
                **report.to_dict(),
                "produced_path": str(produced),
                "reference_path": str(reference),
            }
        )
    else:
        _echo(render_report_summary(report), force=not report.passed)
        if not report.passed:
            _echo(render_report(report, max_mismatches=max_mismatches), force=True)

    if report.exit_code != 0:
        raise typer.Exit(code=report.exit_code)


def main() -> None:
    app()
