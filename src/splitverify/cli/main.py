from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from ..core.config import SETTINGS, Settings
from ..core.logging import log, setup_logging
from ..core.models import VerificationReport
from ..verify import (
    InvalidArgument,
    VerificationError,
    build_config,
    estimate_corruption,
    run_verification,
    verify_log_content,
    verify_log_sizes,
)

app = typer.Typer(add_completion=False, help="Split log verification CLI")

paths_app = typer.Typer(help="Workspace path commands")
app.add_typer(paths_app, name="paths")

CHECKS = ["content", "sizes", "corruption"]


@app.callback()
def _init(
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: json|plain|auto (default from LOG_FORMAT)"
    ),
) -> None:
    setup_logging(log_format or SETTINGS.LOG_FORMAT)  # type: ignore[arg-type]


def _fail(e: Exception) -> NoReturn:
    """Report a hard failure and exit with the matching status."""
    typer.echo(f"❌ {e}", err=True)
    if isinstance(e, InvalidArgument):
        raise typer.Exit(2) from e
    raise typer.Exit(1) from e


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def content(
    input_path: str = typer.Argument(..., help="Input log fed to the pipeline"),
    outputs: list[str] = typer.Argument(..., help="Output shard logs"),
    unit: str = typer.Option("byte", "--unit", help="Compare raw bytes or decoded chars: byte|char"),
    encoding: str | None = typer.Option(None, "--encoding", help="Text encoding for --unit char"),
) -> None:
    """Prove the outputs hold exactly the bytes of the input, in any order."""
    try:
        result = verify_log_content(
            input_path,
            outputs,
            unit=unit,  # type: ignore[arg-type]
            encoding=encoding or SETTINGS.TEXT_ENCODING,
            chunk_size=SETTINGS.READ_CHUNK_SIZE,
        )
    except (VerificationError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    typer.echo(result.line_count)  # For scripting


@app.command()
def corruption(
    outputs: list[str] = typer.Argument(..., help="Output shard logs"),
    pattern: str = typer.Option(..., "--pattern", "-p", help="Regex a valid line must contain"),
    trailing_line: str | None = typer.Option(
        None, "--trailing-line", help="Final line without newline: evaluate|drop"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
) -> None:
    """Count output lines that do not match the expected pattern."""
    try:
        result = estimate_corruption(
            outputs,
            pattern,
            trailing_line=trailing_line or SETTINGS.TRAILING_LINE,  # type: ignore[arg-type]
            encoding=SETTINGS.TEXT_ENCODING,
            max_diagnostics=SETTINGS.MAX_DIAGNOSTICS,
            chunk_size=SETTINGS.READ_CHUNK_SIZE,
        )
    except (VerificationError, OSError) as e:
        _fail(e)

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
        return
    for line in result.corrupt_lines:
        typer.echo(f"{line.path}:{line.line_number}: {line.content!r}", err=True)
    typer.echo(result.corrupt_count)


@app.command()
def sizes(
    input_path: str = typer.Argument(..., help="Input log fed to the pipeline"),
    outputs: list[str] = typer.Argument(..., help="Output shard logs"),
) -> None:
    """Check shard sizes add up to the input and print the imbalance percentage."""
    try:
        result = verify_log_sizes(input_path, outputs)
    except (VerificationError, OSError) as e:
        _fail(e)
    typer.echo(result.imbalance_percent)


@app.command()
def run(
    input_path: str = typer.Argument(..., help="Input log fed to the pipeline"),
    outputs: list[str] = typer.Argument(..., help="Output shard logs"),
    pattern: str | None = typer.Option(None, "--pattern", "-p", help="Regex a valid line must contain"),
    config_file: str | None = typer.Option(
        None, "--config", help="Config file (.splitverify.yaml auto-discovered)"
    ),
    max_corruption: float | None = typer.Option(
        None, "--max-corruption", help="Acceptable corrupt line percentage"
    ),
    max_imbalance: int | None = typer.Option(
        None, "--max-imbalance", help="Acceptable shard size imbalance percentage"
    ),
    trailing_line: str | None = typer.Option(
        None, "--trailing-line", help="Final line without newline: evaluate|drop"
    ),
    unit: str | None = typer.Option(None, "--unit", help="Content comparison unit: byte|char"),
    expect_absent: list[str] | None = typer.Option(
        None, "--expect-absent", help="Output path that must not exist (repeatable)"
    ),
    skip: list[str] | None = typer.Option(None, "--skip", help="Check to skip (repeatable)"),
    run_id: str | None = typer.Option(None, "--run-id", help="Run ID for report artifacts"),
    no_report: bool = typer.Option(False, "--no-report", help="Do not write report files"),
    json_output: bool = typer.Option(False, "--json", help="Output report as JSON"),
) -> None:
    """
    Run content, size and corruption checks and apply pass/fail thresholds.

    Config precedence: config file < env vars < CLI flags
    """
    from ..verify.report import write_report

    try:
        settings = Settings.load_config(config_file)
        log.info("config.loaded", config_file=config_file or "auto-discovered")
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    unknown = [c for c in (skip or []) if c not in CHECKS]
    if unknown:
        typer.echo(f"❌ Unknown check(s): {', '.join(unknown)}", err=True)
        raise typer.Exit(2)

    try:
        config = build_config(
            input_path,
            outputs,
            settings=settings,
            pattern=pattern,
            max_corruption_percent=max_corruption,
            max_imbalance_percent=max_imbalance,
            trailing_line=trailing_line,
            unit=unit,
            expect_absent=expect_absent or None,
            checks=[c for c in CHECKS if c not in (skip or [])],
        )
    except ValueError as e:
        typer.echo(f"❌ Invalid options: {e}", err=True)
        raise typer.Exit(2) from e

    try:
        report = run_verification(config, run_id=run_id)
    except (VerificationError, OSError, UnicodeDecodeError) as e:
        _fail(e)

    if not no_report:
        json_path, _ = write_report(report, settings=settings)
        typer.echo(f"📝 Report: {json_path}", err=True)

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        _render_summary(report, settings)

    if not report.passed:
        raise typer.Exit(1)


def _render_summary(report: VerificationReport, settings: Settings) -> None:
    console = Console(no_color=settings.NO_COLOR)
    table = Table(title=f"Verification {report.run_id}")
    table.add_column("Check")
    table.add_column("Result")
    table.add_column("Detail")

    if report.content:
        table.add_row(
            "content",
            "equal",
            f"{report.content.line_count} lines, {report.content.output_bytes} bytes",
        )
    if report.balance:
        table.add_row(
            "sizes",
            f"{report.balance.imbalance_percent}% imbalance",
            f"{len(report.balance.shards)} shards, {report.balance.output_size} bytes",
        )
    if report.corruption:
        table.add_row(
            "corruption",
            f"{report.corruption_percent:.2f}%",
            f"{report.corruption.corrupt_count} of {report.corruption.lines_checked} lines",
        )
    for check in report.skipped_checks:
        table.add_row(check, "skipped", "")
    console.print(table)

    for failure in report.failures:
        console.print(f"❌ {failure}", markup=False)
    if report.passed:
        console.print("✅ Verification passed")


@paths_app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output paths as JSON"),
) -> None:
    """Show resolved workspace paths."""
    import json

    from ..core import paths

    path_info = {
        "workdir": str(paths.workdir()),
        "runs": str(paths.runs()),
        "logs": str(paths.logs()),
    }

    if json_output:
        typer.echo(json.dumps(path_info, indent=2))
    else:
        typer.echo("📁 Workspace Paths")
        typer.echo("==================")
        typer.echo(f"Workdir (managed): {path_info['workdir']}")
        typer.echo(f"Runs:              {path_info['runs']}")
        typer.echo(f"Logs:              {path_info['logs']}")


@paths_app.command()
def ensure() -> None:
    """Create all workspace directories."""
    from ..core import paths

    paths.ensure_all()
    typer.echo("✅ All workspace directories created")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
