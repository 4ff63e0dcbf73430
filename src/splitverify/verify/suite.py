"""Run the checks for one pipeline run and judge them against thresholds."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..core.artifacts import new_run_id
from ..core.config import SETTINGS, Settings
from ..core.logging import log
from ..core.models import CorruptionResult, VerificationConfig, VerificationReport
from .balance import verify_log_sizes
from .content import verify_log_content
from .corruption import estimate_corruption
from .sources import file_size


def build_config(
    input_path: str,
    output_paths: Sequence[str],
    settings: Optional[Settings] = None,
    **overrides: Any,
) -> VerificationConfig:
    """Create a run config with defaults taken from settings."""
    s = settings or SETTINGS
    values: dict[str, Any] = {
        "input_path": str(input_path),
        "output_paths": [str(p) for p in output_paths],
        "max_corruption_percent": s.MAX_CORRUPTION_PERCENT,
        "max_imbalance_percent": s.MAX_IMBALANCE_PERCENT,
        "trailing_line": s.TRAILING_LINE,
        "encoding": s.TEXT_ENCODING,
        "chunk_size": s.READ_CHUNK_SIZE,
        "max_diagnostics": s.MAX_DIAGNOSTICS,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return VerificationConfig(**values)


def corruption_rate(corruption: CorruptionResult, line_count: Optional[int]) -> float:
    """Percent of corrupt lines over the input's line count.

    Falls back to the number of lines scanned when the input has no newline
    (or the content check did not run).
    """
    denominator = line_count or corruption.lines_checked
    if denominator == 0:
        return 0.0
    return corruption.corrupt_count * 100 / denominator


def run_verification(config: VerificationConfig, run_id: Optional[str] = None) -> VerificationReport:
    """
    Run the selected checks in order: content, sizes, corruption.

    Hard failures (divergent content, size mismatch, bad arguments, I/O
    errors) propagate. Threshold breaches are collected in
    ``report.failures``.
    """
    report = VerificationReport(
        run_id=run_id or new_run_id(),
        started_at=datetime.now(timezone.utc),
        config=config,
    )
    log.info(
        "suite.start",
        run_id=report.run_id,
        input=config.input_path,
        outputs=len(config.output_paths),
        checks=config.checks,
    )

    outputs = list(config.output_paths)
    for absent in config.expect_absent:
        if Path(absent).exists():
            report.failures.append(f"Expected no output at {absent} but the file exists")
            log.warning("suite.unexpected_output", run_id=report.run_id, path=absent)
            # A shard holding data still has to reconcile with the input
            if file_size(absent) > 0:
                continue
        if absent in outputs:
            outputs.remove(absent)

    if outputs:
        _run_checks(config, outputs, report)
    else:
        _no_shards(config, report)

    report.finished_at = datetime.now(timezone.utc)
    log.info(
        "suite.complete",
        run_id=report.run_id,
        passed=report.passed,
        failures=len(report.failures),
    )
    return report


def _no_shards(config: VerificationConfig, report: VerificationReport) -> None:
    """Every shard was expected absent: only an empty input can pass."""
    input_bytes = file_size(config.input_path)
    report.skipped_checks = list(config.checks)
    log.info(
        "suite.no_shards",
        run_id=report.run_id,
        input=config.input_path,
        input_bytes=input_bytes,
        skipped=report.skipped_checks,
    )
    if input_bytes:
        report.failures.append(
            f"No output shards remain but the input holds {input_bytes} bytes"
        )


def _run_checks(config: VerificationConfig, outputs: List[str], report: VerificationReport) -> None:
    if "content" in config.checks:
        report.content = verify_log_content(
            config.input_path,
            outputs,
            unit=config.unit,
            encoding=config.encoding,
            chunk_size=config.chunk_size,
        )

    if "sizes" in config.checks:
        report.balance = verify_log_sizes(config.input_path, outputs)
        if report.balance.imbalance_percent > config.max_imbalance_percent:
            report.failures.append(
                f"The output file sizes are imbalanced: {report.balance.imbalance_percent}% "
                f"exceeds the threshold of {config.max_imbalance_percent}%"
            )

    if "corruption" in config.checks and config.pattern:
        report.corruption = estimate_corruption(
            outputs,
            config.pattern,
            trailing_line=config.trailing_line,
            encoding=config.encoding,
            max_diagnostics=config.max_diagnostics,
            chunk_size=config.chunk_size,
        )
        line_count = report.content.line_count if report.content else None
        report.corruption_percent = corruption_rate(report.corruption, line_count)
        if report.corruption_percent > config.max_corruption_percent:
            report.failures.append(
                f"The number of corrupt lines ({report.corruption_percent:.2f}%) exceeds "
                f"the threshold of {config.max_corruption_percent}%"
            )
    elif "corruption" in config.checks:
        report.skipped_checks.append("corruption")
        log.info("suite.corruption_skipped", reason="no pattern")
