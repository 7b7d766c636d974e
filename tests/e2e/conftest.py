"""E2E test fixtures: run the real CLI in a subprocess."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def run_cli(tmp_path):
    """Run npm-checker from an empty dir, without a GitHub token or .env."""
    env = {k: v for k, v in os.environ.items() if k != "GITHUB_TOKEN"}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    env["COLUMNS"] = "200"
    env["PYTHONIOENCODING"] = "utf-8"

    def _run(*args, timeout=120):
        cmd = [sys.executable, "-m", "npm_checker.cli", *args]
        return subprocess.run(cmd, capture_output=True, encoding="utf-8", timeout=timeout, cwd=tmp_path, env=env)

    return _run
