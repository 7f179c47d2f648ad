import subprocess

import pytest

from codeowners_gate import action
from codeowners_gate.action import run_gate
from codeowners_gate.config import GateSettings
from codeowners_gate.github.auth import select_auth_token
from codeowners_gate.github.context import PullRequestContext
from codeowners_gate.reporter import State

CTX = PullRequestContext(owner="acme", repo="widgets", number=7, head_sha="abc123", run_id="42")


class GhResult:
    def __init__(self, returncode: int, stdout: str) -> None:
        self.returncode = returncode
        self.stdout = stdout


def _gh(monkeypatch, result) -> list[list[str]]:  # type: ignore[no-untyped-def]
    calls: list[list[str]] = []

    def run(args, **kwargs):  # type: ignore[no-untyped-def]
        calls.append(args)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(subprocess, "run", run)
    return calls


def test_action_token_input_skips_other_sources(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    calls = _gh(monkeypatch, GhResult(0, "ghp_cli\n"))
    monkeypatch.setenv("GITHUB_TOKEN", "ghs_env")
    settings = GateSettings.from_env({"INPUT_TOKEN": " ghs_input "})
    assert select_auth_token(settings.token) == "ghs_input"
    assert calls == []


def test_cli_token_overrides_action_input(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _gh(monkeypatch, FileNotFoundError())
    settings = GateSettings.from_env({"INPUT_TOKEN": "ghs_input"}).with_overrides(token="ghp_flag")
    assert select_auth_token(settings.token) == "ghp_flag"


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (GhResult(0, "  ghp_cli\n"), "ghp_cli"),
        (GhResult(1, ""), "ghs_env"),
        (GhResult(0, "\n"), "ghs_env"),
        (OSError("gh broken"), "ghs_env"),
    ],
)
def test_local_runs_fall_back_from_gh_to_environment(monkeypatch, result, expected) -> None:  # type: ignore[no-untyped-def]
    calls = _gh(monkeypatch, result)
    monkeypatch.setenv("GITHUB_TOKEN", "ghs_env")
    assert select_auth_token() == expected
    assert calls == [["gh", "auth", "token"]]


@pytest.mark.asyncio
async def test_missing_token_ends_run_with_error_and_no_status(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _gh(monkeypatch, FileNotFoundError())
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    settings = GateSettings(requirements="* @lead\n", requirements_format="codeowners", status="Review")

    outcome = await run_gate(settings, ctx=CTX)

    assert outcome.state is State.ERROR
    assert isinstance(outcome.error, RuntimeError)
    assert not outcome.reported


@pytest.mark.asyncio
async def test_run_gate_authenticates_with_settings_token(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    seen: list[str | None] = []

    def select(explicit=None):  # type: ignore[no-untyped-def]
        seen.append(explicit)
        raise RuntimeError("stop before any request")

    monkeypatch.setattr(action, "select_auth_token", select)
    outcome = await run_gate(GateSettings(token="ghs_input"), ctx=CTX)

    assert seen == ["ghs_input"]
    assert outcome.state is State.ERROR
