"""Persist verification reports as JSON and Markdown."""

import json
from pathlib import Path
from typing import Optional, Tuple

from ..core.artifacts import phase_dir
from ..core.config import Settings
from ..core.logging import log
from ..core.models import VerificationReport


def write_report(
    report: VerificationReport,
    out_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> Tuple[Path, Path]:
    """Write verify.json and verify.md, by default under <workdir>/runs/<run_id>/verify/."""
    target = out_dir or phase_dir(report.run_id, "verify", settings)
    target.mkdir(parents=True, exist_ok=True)

    json_path = target / "verify.json"
    md_path = target / "verify.md"

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

    with open(md_path, "w", encoding="utf-8") as f:
        f.write(f"# Verification Report: {report.run_id}\n\n")
        f.write(f"**Status**: {'✅ PASSED' if report.passed else '❌ FAILED'}\n")
        f.write(f"**Input**: `{report.config.input_path}`\n")
        f.write(f"**Outputs**: {len(report.config.output_paths)}\n")
        if report.skipped_checks:
            f.write(f"**Skipped**: {', '.join(report.skipped_checks)}\n")
        f.write("\n")

        if report.content:
            f.write("## Content\n\n")
            f.write(f"- Input lines: {report.content.line_count}\n")
            f.write(f"- Input bytes: {report.content.input_bytes}\n")
            f.write(f"- Output bytes: {report.content.output_bytes}\n")
            f.write(f"- Distinct {report.content.unit}s: {report.content.distinct_symbols}\n\n")

        if report.balance:
            f.write("## Sizes\n\n")
            f.write("| Shard | Size | Exists |\n|---|---|---|\n")
            for shard in report.balance.shards:
                f.write(f"| `{shard.path}` | {shard.size} | {shard.exists} |\n")
            f.write(f"\n- Imbalance: {report.balance.imbalance_percent}%\n\n")

        if report.corruption:
            f.write("## Corruption\n\n")
            f.write(f"- Corrupt lines: {report.corruption.corrupt_count}\n")
            f.write(f"- Lines checked: {report.corruption.lines_checked}\n")
            if report.corruption_percent is not None:
                f.write(f"- Corruption rate: {report.corruption_percent:.2f}%\n")
            for line in report.corruption.corrupt_lines[:20]:
                f.write(f"- `{line.path}:{line.line_number}` {line.content!r}\n")
            f.write("\n")

        if report.failures:
            f.write("## Failures\n\n")
            for failure in report.failures:
                f.write(f"- {failure}\n")

    log.info("report.written", run_id=report.run_id, json=str(json_path), md=str(md_path))
    return json_path, md_path
