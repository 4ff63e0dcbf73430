"""Global test configuration for splitverify tests."""

import io
from pathlib import Path

import pytest

from splitverify.core.logging import setup_logging


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Keep report artifacts and config discovery inside the test's tmp dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("splitverify.core.paths.ROOT", tmp_path)
    setup_logging("plain")
    yield tmp_path


@pytest.fixture
def log_stream():
    """Capture structured log output as plain text."""
    stream = io.StringIO()
    setup_logging("plain", file=stream)
    yield stream
    setup_logging("plain")


@pytest.fixture
def write_log(tmp_path):
    """Write bytes (or joined lines) to tmp_path/<name> and return the path as str."""

    def _write(name: str, data: bytes | list[bytes]) -> str:
        if isinstance(data, list):
            data = b"".join(data)
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def event_lines():
    """Factory for "This is event number N" lines."""

    def _lines(count: int, start: int = 0) -> list[bytes]:
        return [f"This is event number {i}\n".encode() for i in range(start, start + count)]

    return _lines


@pytest.fixture
def split_events(write_log, event_lines):
    """100 event lines split evenly across two shards, interleaved and reordered."""
    lines = event_lines(100)
    input_path = write_log("input.log", lines)
    shard1 = [line for i, line in enumerate(lines) if i % 2 == 0]
    shard2 = [line for i, line in enumerate(lines) if i % 2 == 1]
    shard1.reverse()
    out1 = write_log("logs/events1.log", shard1)
    out2 = write_log("logs/events2.log", shard2)
    return input_path, [out1, out2]


@pytest.fixture
def missing_path(tmp_path) -> str:
    return str(Path(tmp_path) / "logs" / "never_created.log")
