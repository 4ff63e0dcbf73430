"""Estimate how many shard lines were garbled in transit.

Every ``\\n`` terminated line of every output is searched for a caller
supplied pattern. Lines that do not contain a match are counted as corrupt.
The count is a measurement; judging it against a threshold is up to the
caller.
"""

import re
from pathlib import Path
from typing import Dict, List, Sequence

from ..core.logging import log
from ..core.models import CorruptionResult, CorruptLine, TrailingLine
from .content import check_encoding
from .errors import InvalidArgument
from .sources import DEFAULT_CHUNK_SIZE, PathLike, iter_lines

TRAILING_LINE_POLICIES = ("evaluate", "drop")


def compile_pattern(pattern: str | None) -> re.Pattern[str]:
    if pattern is None or len(pattern) == 0:
        raise InvalidArgument("There needs to be a specified regex pattern to search for")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidArgument(f"Invalid regex pattern {pattern!r}: {e}") from e


def estimate_corruption(
    output_paths: Sequence[PathLike],
    pattern: str,
    *,
    trailing_line: TrailingLine = "evaluate",
    encoding: str = "utf-8",
    max_diagnostics: int = 1000,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CorruptionResult:
    """
    Count output lines that do not contain a match for ``pattern``.

    Args:
        output_paths: Shard logs to scan; missing files contribute no lines
        pattern: Regex searched in each line (add anchors for full matches)
        trailing_line: "evaluate" checks a final line lacking ``\\n``,
            "drop" discards it uncounted
        encoding: Decoding for lines; undecodable bytes are kept as escapes
        max_diagnostics: Cap on CorruptLine records kept in the result
        chunk_size: Read size for streaming

    Returns:
        CorruptionResult with totals, per-file counts and diagnostics
    """
    if not output_paths:
        raise InvalidArgument("There needs to be a specified output location for calculations")
    if trailing_line not in TRAILING_LINE_POLICIES:
        raise InvalidArgument(f"Unknown trailing line policy: {trailing_line}")
    check_encoding(encoding)
    regex = compile_pattern(pattern)

    corrupt_lines: List[CorruptLine] = []
    per_file: Dict[str, int] = {}
    total_corrupt = 0
    lines_checked = 0
    dropped = 0

    for output in (str(p) for p in output_paths):
        per_file[output] = 0
        if not Path(output).exists():
            log.info("corruption.output_absent", path=output)
            continue

        line_number = 0
        for raw, terminated in iter_lines(output, chunk_size):
            if not terminated and trailing_line == "drop":
                dropped += 1
                log.info("corruption.trailing_line_dropped", path=output, length=len(raw))
                continue

            line_number += 1
            line = raw.decode(encoding, errors="surrogateescape")
            if regex.search(line):
                continue

            total_corrupt += 1
            per_file[output] += 1
            shown = raw.decode(encoding, errors="replace")
            log.warning(
                "corruption.line_corrupt",
                path=output,
                line_number=line_number,
                content=shown,
            )
            if len(corrupt_lines) < max_diagnostics:
                corrupt_lines.append(
                    CorruptLine(path=output, line_number=line_number, content=shown)
                )

        lines_checked += line_number

    log.info(
        "corruption.complete",
        corrupt_count=total_corrupt,
        lines_checked=lines_checked,
        trailing_line=trailing_line,
    )
    return CorruptionResult(
        corrupt_count=total_corrupt,
        lines_checked=lines_checked,
        corrupt_lines=corrupt_lines,
        per_file=per_file,
        trailing_line=trailing_line,
        dropped_trailing=dropped,
    )
