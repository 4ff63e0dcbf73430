"""Read-once file sources used by the checkers.

Each source is opened, drained, and closed inside the call that needs it.
An empty read is the only end-of-stream signal; byte 0 is ordinary data.
"""

import codecs
import os
from pathlib import Path
from typing import Iterator, Union

from ..core.logging import log

PathLike = Union[str, os.PathLike]

DEFAULT_CHUNK_SIZE = 64 * 1024


def iter_chunks(path: PathLike, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the raw bytes of ``path`` in order, closing the file on exhaustion."""
    log.debug("source.open", path=str(path))
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def iter_text(
    path: PathLike, encoding: str = "utf-8", chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[str]:
    """Yield decoded text of ``path``, decoding incrementally across chunk edges."""
    decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
    for chunk in iter_chunks(path, chunk_size):
        text = decoder.decode(chunk)
        if text:
            yield text
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


def iter_lines(path: PathLike, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[tuple[bytes, bool]]:
    """Yield ``(line, terminated)`` pairs split on ``\\n`` only.

    The terminator is stripped. A final line without ``\\n`` is yielded with
    ``terminated=False``; a file ending in ``\\n`` yields no empty tail.
    """
    buffer: list[bytes] = []
    for chunk in iter_chunks(path, chunk_size):
        start = 0
        while True:
            idx = chunk.find(b"\n", start)
            if idx < 0:
                if start < len(chunk):
                    buffer.append(chunk[start:])
                break
            buffer.append(chunk[start:idx])
            yield b"".join(buffer), True
            buffer = []
            start = idx + 1
    if buffer:
        yield b"".join(buffer), False


def file_size(path: PathLike) -> int:
    """Size in bytes, 0 when the file does not exist."""
    p = Path(path)
    if not p.exists():
        return 0
    return p.stat().st_size
