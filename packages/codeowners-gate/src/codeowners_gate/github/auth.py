from __future__ import annotations

import os
import subprocess


def select_auth_token(explicit: str | None = None) -> str:
    """Pick a GitHub token: explicit input, then `gh auth token`, then GITHUB_TOKEN."""
    if explicit:
        return explicit
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=False,
        )
    except (FileNotFoundError, OSError):
        result = None
    if result is not None and result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()

    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    raise RuntimeError("No GitHub token: pass --token, log in with `gh`, or set GITHUB_TOKEN.")
