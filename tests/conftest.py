"""Shared test fixtures for ffdiag."""

import shutil
import tempfile
from pathlib import Path

import pytest

from ffdiag.config import clear_config_cache
from ffdiag.tools import reset_default_resolver

_ENV_VARS = [
    "FFDIAG_CONFIG_PATH",
    "FFDIAG_FFMPEG_PATH",
    "FFDIAG_FFPROBE_PATH",
    "FFDIAG_HISTORY_LINES",
    "FFDIAG_LOG_LEVEL",
    "FFDIAG_LOG_FORMAT",
    "FFDIAG_LOG_FILE",
    "FFDIAG_LOG_STDERR",
]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path: Path):
    """Keep tests independent of the user's config, env and shared caches."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("FFDIAG_CONFIG_PATH", str(tmp_path / "no-config.toml"))
    clear_config_cache()
    reset_default_resolver()
    yield
    clear_config_cache()
    reset_default_resolver()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def stderr_fixtures_dir() -> Path:
    """Return the path to the captured stderr fixtures directory."""
    return Path(__file__).parent / "fixtures" / "stderr"


def load_stderr_fixture(name: str) -> str:
    """Load a captured ffmpeg stderr fixture by name.

    Args:
        name: Name of the fixture file (without .log extension).

    Returns:
        Fixture contents.
    """
    fixture_path = Path(__file__).parent / "fixtures" / "stderr" / f"{name}.log"
    return fixture_path.read_text(encoding="utf-8")


@pytest.fixture
def transcode_stderr() -> str:
    """Stderr of a successful transcode with one input."""
    return load_stderr_fixture("transcode")


@pytest.fixture
def missing_input_stderr() -> str:
    """Stderr of a run that failed to open its input."""
    return load_stderr_fixture("missing_input")
