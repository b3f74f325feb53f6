"""Pytest configuration and shared fixtures for artifact-render tests."""

import pytest

import artifact_render.io.logging_setup
import artifact_render.io.perf_logging
import artifact_render.rendering
from tests.samples import PROSE_MESSAGE, REPORT_MESSAGE


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep logs and settings out of the real home directory."""
    monkeypatch.setenv("ARTIFACT_RENDER_LOG_FILE", str(tmp_path / "logs" / "test.log"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("ARTIFACT_RENDER_LOG_LEVEL", raising=False)
    yield
    artifact_render.io.logging_setup.reset()
    artifact_render.io.perf_logging.set_enabled(True)
    artifact_render.rendering.set_theme(artifact_render.rendering.DEFAULT_THEME)


# ---------------------------------------------------------------------------
# Sample messages
# ---------------------------------------------------------------------------


@pytest.fixture
def report_message():
    return REPORT_MESSAGE


@pytest.fixture
def prose_message():
    return PROSE_MESSAGE
