"""E2E test fixtures: real API, isolated cache directory."""

import os
import subprocess
import sys

import pytest


@pytest.fixture
def e2e_env(tmp_path):
    """Environment pointing the CLI at a temp cache (NOT ~/.cache, to avoid polluting real cache)."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return {**os.environ, "CACHE_DIR": str(cache)}


@pytest.fixture
def run_cli(e2e_env):
    """Run the CLI in a subprocess and return CompletedProcess."""

    def _run(*args, timeout=300):
        return subprocess.run(
            [sys.executable, "-m", "github_repo_scanner.cli", *args],
            capture_output=True, text=True, timeout=timeout, env=e2e_env,
        )

    return _run
