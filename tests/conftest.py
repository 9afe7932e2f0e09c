"""
Global test configuration for the MorphQL client tests.
"""

from collections.abc import Callable
import logging
import os
from pathlib import Path
import sys

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")
    config.addinivalue_line(
        "markers", "allow_env_pollution: keep MORPHQL_* variables from the host"
    )


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_morphql_env(request, monkeypatch):
    """Ensure a clean MORPHQL_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("MORPHQL_"):
            monkeypatch.delenv(key, raising=False)


# --- Fake Engine Fixtures ---
ECHO_ENGINE = """
import json
import os
import sys

print(json.dumps({
    "argv": sys.argv[1:],
    "node_no_warnings": os.environ.get("NODE_NO_WARNINGS"),
    "marker": os.environ.get("MORPHQL_TEST_MARKER"),
    "stdin": sys.stdin.read(),
}))
"""


@pytest.fixture
def make_engine(tmp_path) -> Callable[..., Path]:
    """Write an executable Python script standing in for the engine.

    Usage:
        engine = make_engine("import sys; sys.exit(3)")
    """
    if sys.platform.startswith("win"):
        pytest.skip("Fake engine scripts rely on POSIX shebangs.")

    counter = {"n": 0}

    def _make(body: str = ECHO_ENGINE, name: str | None = None) -> Path:
        counter["n"] += 1
        script = tmp_path / (name or f"fake-engine-{counter['n']}")
        script.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
        script.chmod(0o755)
        return script

    return _make


@pytest.fixture
def echo_engine(make_engine) -> Path:
    """An engine that prints its argv and relevant environment as JSON."""
    return make_engine(ECHO_ENGINE)


@pytest.fixture
def empty_bin_dir(tmp_path) -> Path:
    """A bundled-artifacts directory with nothing in it."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return bin_dir


@pytest.fixture
def query_file(tmp_path) -> Path:
    path = tmp_path / "users.morphql"
    path.write_text("  from json to json transform set name = first  \n", encoding="utf-8")
    return path


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
