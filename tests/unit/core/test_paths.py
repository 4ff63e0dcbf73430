"""Tests for workspace path management."""

import os
from unittest.mock import patch

import pytest

from splitverify.core import paths
from splitverify.core.artifacts import new_run_id, phase_dir

pytestmark = pytest.mark.unit


def test_paths_default_values():
    """Test default path values."""
    assert paths.workdir().name == "var"
    assert paths.runs().name == "runs"
    assert paths.logs().name == "logs"
    assert paths.runs().parent == paths.workdir()
    assert paths.logs().parent == paths.workdir()


def test_paths_env_overrides():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {"SPLITVERIFY_WORKDIR": "custom_var"}):
        from splitverify.core.config import Settings

        custom_settings = Settings()

        with patch("splitverify.core.paths.SETTINGS", custom_settings):
            assert paths.workdir().name == "custom_var"
            assert paths.runs().parent.name == "custom_var"


def test_ensure_all_creates_directories(isolated_workspace):
    """Test that ensure_all creates all workspace directories."""
    paths.ensure_all()

    assert (isolated_workspace / "var").is_dir()
    assert (isolated_workspace / "var" / "runs").is_dir()
    assert (isolated_workspace / "var" / "logs").is_dir()


def test_run_id_shape():
    rid = new_run_id()
    assert "_" in rid and len(rid.split("_")[-1]) == 4


def test_phase_dir_is_created(isolated_workspace):
    p = phase_dir("run-1", "verify")
    assert p == isolated_workspace / "var" / "runs" / "run-1" / "verify"
    assert p.is_dir()


def test_phase_dir_uses_given_settings(isolated_workspace):
    from splitverify.core.config import Settings

    settings = Settings(SPLITVERIFY_WORKDIR="custom")
    p = phase_dir("run-2", "verify", settings)
    assert p == isolated_workspace / "custom" / "runs" / "run-2" / "verify"
    assert paths.workdir(settings) == isolated_workspace / "custom"
