"""Pytest configuration for the taintfloat test suite."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent

# Add the project root to path so the package imports without installing
sys.path.insert(0, str(ROOT))

from taintfloat import floats  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "diagnostic: needs the diagnostic build (payload-carrying NaNs)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip diagnostic tests when the suite runs against a release build."""
    if floats.DIAGNOSTICS:
        return
    skip = pytest.mark.skip(reason="diagnostics disabled (TAINTFLOAT_DIAGNOSTICS=0 or -O)")
    for item in items:
        if "diagnostic" in item.keywords:
            item.add_marker(skip)


def _clean_env(extra: dict[str, str]) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("TAINTFLOAT_")}
    env.update(extra)
    env["PYTHONPATH"] = str(ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    return env


@pytest.fixture
def run_python():
    """Run code in a fresh interpreter; settings are only read at import."""

    def run(code: str, *flags: str, **env: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, *flags, "-c", code],
            capture_output=True,
            text=True,
            timeout=60,
            env=_clean_env(env),
        )

    return run


@pytest.fixture
def run_cli():
    """Run `python -m taintfloat` with the given arguments."""

    def run(*args: str, **env: str) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, "-m", "taintfloat", *args],
            capture_output=True,
            text=True,
            timeout=60,
            env=_clean_env(env),
        )

    return run
