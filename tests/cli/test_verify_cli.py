"""Tests for the splitverify command line."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from splitverify.cli.main import app

pytestmark = pytest.mark.unit

EVENT_PATTERN = r"This is event number (\d+)"


def json_payload(text: str) -> dict:
    """Pull the pretty-printed JSON document out of mixed command output."""
    start = text.index("{\n")
    end = text.rindex("\n}") + 2
    return json.loads(text[start:end])


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


def test_content_prints_line_count(runner, split_events):
    input_path, outputs = split_events
    result = runner.invoke(app, ["content", input_path, *outputs])
    assert result.exit_code == 0
    assert "100" in result.output.splitlines()


def test_content_mismatch_exits_1(runner, split_events, write_log):
    input_path, outputs = split_events
    extra = write_log("logs/extra.log", b"#")
    result = runner.invoke(app, ["content", input_path, *outputs, extra])
    assert result.exit_code == 1
    assert "extra characters not in input" in result.output


def test_content_unknown_encoding_exits_2(runner, write_log):
    input_path = write_log("input.log", b"abc\n")
    result = runner.invoke(
        app, ["content", input_path, input_path, "--unit", "char", "--encoding", "no-such-codec"]
    )
    assert result.exit_code == 2
    assert "Unknown text encoding" in result.output


def test_sizes_prints_imbalance(runner, write_log):
    input_path = write_log("input.log", b"a\n" * 10)
    outputs = [write_log("a.log", b"a\n" * 5), write_log("b.log", b"a\n" * 5)]
    result = runner.invoke(app, ["sizes", input_path, *outputs])
    assert result.exit_code == 0
    assert "0" in result.output.splitlines()


def test_sizes_empty_input_exits_1(runner, write_log):
    input_path = write_log("input.log", b"")
    result = runner.invoke(app, ["sizes", input_path, input_path])
    assert result.exit_code == 1
    assert "empty" in result.output


def test_corruption_counts_bad_lines(runner, write_log):
    output = write_log("out.log", b"This is event number 1\nThis is eve\n")
    result = runner.invoke(app, ["corruption", output, "--pattern", EVENT_PATTERN, "--json"])
    assert result.exit_code == 0
    data = json_payload(result.stdout)
    assert data["corrupt_count"] == 1
    assert data["corrupt_lines"][0]["line_number"] == 2


def test_corruption_empty_pattern_exits_2(runner, write_log):
    output = write_log("out.log", b"x\n")
    result = runner.invoke(app, ["corruption", output, "--pattern", ""])
    assert result.exit_code == 2


def test_run_passes_and_writes_report(runner, split_events, isolated_workspace):
    input_path, outputs = split_events
    result = runner.invoke(
        app, ["run", input_path, *outputs, "--pattern", EVENT_PATTERN, "--run-id", "cli-run"]
    )
    assert result.exit_code == 0, result.output
    assert "Verification passed" in result.output
    assert (isolated_workspace / "var" / "runs" / "cli-run" / "verify" / "verify.json").exists()


def test_run_threshold_failure_exits_1(runner, write_log, missing_path):
    input_path = write_log("input.log", b"This is event number 1\n" * 4)
    output = write_log("out.log", b"This is event number 1\n" * 4)
    result = runner.invoke(
        app, ["run", input_path, output, missing_path, "--pattern", EVENT_PATTERN, "--no-report"]
    )
    assert result.exit_code == 1
    assert "imbalanced" in result.output


def test_run_threshold_override(runner, write_log, missing_path):
    input_path = write_log("input.log", b"This is event number 1\n" * 4)
    output = write_log("out.log", b"This is event number 1\n" * 4)
    result = runner.invoke(
        app,
        ["run", input_path, output, missing_path, "--max-imbalance", "100", "--no-report"],
    )
    assert result.exit_code == 0, result.output


def test_run_reads_thresholds_from_config_file(runner, write_log, missing_path, isolated_workspace):
    (isolated_workspace / ".splitverify.yaml").write_text("MAX_IMBALANCE_PERCENT: 100\n")
    input_path = write_log("input.log", b"abc\n" * 4)
    output = write_log("out.log", b"abc\n" * 4)
    result = runner.invoke(app, ["run", input_path, output, missing_path, "--no-report"])
    assert result.exit_code == 0, result.output


def test_run_writes_report_under_config_workdir(
    runner, split_events, isolated_workspace, monkeypatch
):
    monkeypatch.delenv("SPLITVERIFY_WORKDIR", raising=False)
    (isolated_workspace / "cfg.yaml").write_text("SPLITVERIFY_WORKDIR: custom\n")
    input_path, outputs = split_events
    result = runner.invoke(
        app, ["run", input_path, *outputs, "--config", "cfg.yaml", "--run-id", "x"]
    )
    assert result.exit_code == 0, result.output
    assert (isolated_workspace / "custom" / "runs" / "x" / "verify" / "verify.json").exists()
    assert not (isolated_workspace / "var" / "runs" / "x").exists()


def test_run_summary_honors_config_no_color(runner, split_events, isolated_workspace, monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    (isolated_workspace / "cfg.yaml").write_text("NO_COLOR: true\n")
    input_path, outputs = split_events
    with patch("splitverify.cli.main.Console") as console_cls:
        result = runner.invoke(
            app, ["run", input_path, *outputs, "--config", "cfg.yaml", "--no-report"]
        )
    assert result.exit_code == 0, result.output
    console_cls.assert_called_once_with(no_color=True)


def test_run_unknown_skip_exits_2(runner, split_events):
    input_path, outputs = split_events
    result = runner.invoke(app, ["run", input_path, *outputs, "--skip", "speed"])
    assert result.exit_code == 2


def test_run_json_output(runner, split_events):
    input_path, outputs = split_events
    result = runner.invoke(
        app, ["run", input_path, *outputs, "--skip", "corruption", "--json", "--no-report"]
    )
    assert result.exit_code == 0
    data = json_payload(result.stdout)
    assert data["content"]["line_count"] == 100
    assert data["corruption"] is None


def test_version(runner):
    from splitverify import __version__

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_paths_show_json(runner, isolated_workspace):
    result = runner.invoke(app, ["paths", "show", "--json"])
    assert result.exit_code == 0
    data = json_payload(result.stdout)
    assert data["runs"] == str(isolated_workspace / "var" / "runs")
