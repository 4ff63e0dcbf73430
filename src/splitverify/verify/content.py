"""Content equivalence: the outputs together hold exactly the input's bytes.

The input is tallied once into a frequency table, then every output is
streamed and subtracted from it. Order of lines and the way they were spread
over shards does not matter, only the multiset of symbols does.
"""

import codecs
from pathlib import Path
from typing import Iterator, List, Sequence, Union

from ..core.logging import log
from ..core.models import ContentResult, Unit
from .errors import InvalidArgument, MissingByte
from .frequency import ByteFrequencyTable
from .sources import DEFAULT_CHUNK_SIZE, PathLike, file_size, iter_chunks, iter_text


def check_paths(input_path: PathLike | None, output_paths: Sequence[PathLike] | None) -> None:
    if input_path is None or not str(input_path):
        raise InvalidArgument("There needs to be a specified input location")
    if not output_paths:
        raise InvalidArgument("There needs to be at least one output location")


def check_encoding(encoding: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise InvalidArgument(f"Unknown text encoding: {encoding}") from e


def _stream(
    path: PathLike, unit: Unit, encoding: str, chunk_size: int
) -> Iterator[Union[bytes, str]]:
    if unit == "char":
        return iter_text(path, encoding=encoding, chunk_size=chunk_size)
    return iter_chunks(path, chunk_size)


def verify_log_content(
    input_path: PathLike,
    output_paths: Sequence[PathLike],
    *,
    unit: Unit = "byte",
    encoding: str = "utf-8",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ContentResult:
    """
    Prove the outputs are a redistribution of the input.

    Args:
        input_path: The input log the pipeline was fed
        output_paths: One or more shard logs; missing files hold no data
        unit: "byte" compares raw bytes, "char" compares decoded code points
        encoding: Text encoding used when unit is "char"
        chunk_size: Read size for streaming

    Returns:
        ContentResult whose line_count is the input's newline count

    Raises:
        InvalidArgument: input path or output list missing, or unknown encoding
        UnexpectedByte: an output holds data the input does not
        MissingByte: input data absent from every output
    """
    check_paths(input_path, output_paths)
    if unit not in ("byte", "char"):
        raise InvalidArgument(f"Unknown comparison unit: {unit}")
    check_encoding(encoding)

    table = ByteFrequencyTable()
    for chunk in _stream(input_path, unit, encoding, chunk_size):
        table.add(chunk)

    line_count = table.newlines
    distinct = len(table)
    log.info(
        "content.input_scanned",
        path=str(input_path),
        line_count=line_count,
        distinct_symbols=distinct,
        unit=unit,
    )

    outputs: List[str] = [str(p) for p in output_paths]
    for output in outputs:
        if not Path(output).exists():
            log.info("content.output_absent", path=output)
            continue
        offset = 0
        for chunk in _stream(output, unit, encoding, chunk_size):
            table.consume(chunk, output, offset)
            offset += len(chunk)
        log.debug("content.output_consumed", path=output, symbols=offset)

    leftover = table.remaining()
    if leftover:
        symbol, missing = leftover[0]
        log.error(
            "content.missing_data",
            symbol=symbol,
            missing=missing,
            diverging=len(leftover),
        )
        raise MissingByte(symbol, missing, diverging=len(leftover))

    result = ContentResult(
        line_count=line_count,
        input_bytes=file_size(input_path),
        output_bytes=sum(file_size(p) for p in outputs),
        distinct_symbols=distinct,
        unit=unit,
    )
    log.info("content.verified", line_count=line_count, outputs=len(outputs))
    return result
