"""Shared helpers for E2E tests that run the server as a subprocess."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def run_server(
    messages: list[str | dict[str, Any]],
    *args: str,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run ``python -m rulebook serve`` with *messages* on stdin, one per line."""
    lines = [m if isinstance(m, str) else json.dumps(m) for m in messages]
    full_env = {**os.environ, **(env or {})}
    full_env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), full_env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(
        [sys.executable, "-m", "rulebook", "serve", *args],
        input="".join(line + "\n" for line in lines),
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=full_env,
        timeout=30,
        check=False,
    )
