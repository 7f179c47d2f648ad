from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich import print
from rich.logging import RichHandler

from ..action import run_gate
from ..config import GateSettings
from ..errors import GateError
from ..loader import build_requirements, is_codeowners_file, parse_enforce_on
from ..membership import TeamMembershipCache, load_team_roster, roster_fetcher
from ..reporter import State
from ..requirements.requirement import Requirement
from ..resolution import resolve_requirements

app = typer.Typer(add_completion=False, pretty_exceptions_show_locals=False)

_FORMATS = ("auto", "codeowners", "yaml")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Check pull request approvals against CODEOWNERS or yaml requirements."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, show_time=False)],
        force=True,
    )


def _check_format(value: str) -> str:
    if value not in _FORMATS:
        raise typer.BadParameter(f"expected one of {', '.join(_FORMATS)}")
    return value


def _load_local_requirements(
    requirements_file: Path, requirements_format: str, enforce_on: str | None
) -> list[Requirement]:
    return build_requirements(
        requirements_file.read_text(encoding="utf-8"),
        is_codeowners=is_codeowners_file(str(requirements_file), requirements_format),  # type: ignore[arg-type]
        enforce_on=parse_enforce_on(enforce_on),
    )


@app.command()
def check(
    requirements: str | None = typer.Option(None, help="Inline requirements text"),
    requirements_file: str | None = typer.Option(
        None, help="Requirements file; CODEOWNERS locations are parsed as CODEOWNERS"
    ),
    requirements_format: str = typer.Option(
        "auto", "--format", callback=_check_format, help="auto | codeowners | yaml"
    ),
    enforce_on: str | None = typer.Option(
        None, help="Yaml list of CODEOWNERS paths to enforce"
    ),
    token: str | None = typer.Option(None, help="GitHub token"),
    status: str | None = typer.Option(None, help="Commit status context to report"),
    fail: str | None = typer.Option(
        None, help="Report failure instead of pending when unsatisfied (true/false)"
    ),
    event_path: str | None = typer.Option(None, help="Path to the workflow event payload"),
):
    """Evaluate the current pull request and report a commit status."""
    try:
        settings = GateSettings.from_env().with_overrides(
            requirements=requirements,
            requirements_file=requirements_file,
            requirements_format=requirements_format,
            enforce_on=enforce_on,
            token=token,
            status=status,
            fail=fail,
            event_path=event_path,
        )
    except GateError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    outcome = asyncio.run(run_gate(settings))
    print(f"[bold]{outcome.state.value}[/bold] {outcome.description}")
    if outcome.state in (State.ERROR, State.FAILURE):
        raise typer.Exit(code=1)


@app.command()
def evaluate(
    requirements_file: Path = typer.Option(..., help="CODEOWNERS or yaml requirements file"),
    requirements_format: str = typer.Option(
        "auto", "--format", callback=_check_format, help="auto | codeowners | yaml"
    ),
    enforce_on: str | None = typer.Option(
        None, help="Yaml list of CODEOWNERS paths to enforce"
    ),
    path: list[str] = typer.Option([], "--path", help="Changed path (repeatable)"),
    approver: list[str] = typer.Option([], "--approver", help="Approving login (repeatable)"),
    roster: Path | None = typer.Option(None, help="Team roster JSON file"),
):
    """Evaluate changed paths offline against local requirements and a roster."""
    try:
        requirements = _load_local_requirements(requirements_file, requirements_format, enforce_on)
        membership = TeamMembershipCache(
            roster_fetcher(load_team_roster(roster)) if roster is not None else None
        )
        verdict = asyncio.run(
            resolve_requirements(
                requirements, sorted(set(path)), sorted(set(approver)), membership
            )
        )
    except (GateError, OSError, ValueError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    for trace in verdict.traces:
        print(trace.describe())
    if verdict.satisfied:
        print("[bold green]satisfied[/bold green]")
        return
    print("[bold red]not satisfied[/bold red]")
    raise typer.Exit(code=1)


@app.command()
def parse(
    requirements_file: Path = typer.Option(..., help="CODEOWNERS or yaml requirements file"),
    requirements_format: str = typer.Option(
        "auto", "--format", callback=_check_format, help="auto | codeowners | yaml"
    ),
    enforce_on: str | None = typer.Option(
        None, help="Yaml list of CODEOWNERS paths to enforce"
    ),
):
    """Print the requirements that would be enforced, one JSON object per line."""
    try:
        requirements = _load_local_requirements(requirements_file, requirements_format, enforce_on)
    except (GateError, OSError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    for requirement in requirements:
        typer.echo(json.dumps(requirement.config.model_dump(), sort_keys=True, ensure_ascii=True))
