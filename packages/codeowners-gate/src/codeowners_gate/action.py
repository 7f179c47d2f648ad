from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import GateSettings
from .errors import ReportError
from .github.auth import select_auth_token
from .github.client import GitHubRestClient
from .github.context import PullRequestContext, load_pull_request_context
from .github.pulls import fetch_paths, fetch_reviewers
from .github.teams import github_team_fetcher
from .loader import load_requirements
from .membership import TeamMembershipCache
from .reporter import State, report_status
from .resolution import Verdict, resolve_requirements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOutcome:
    state: State
    description: str
    verdict: Verdict | None = None
    error: BaseException | None = None
    reported: bool = False

    @property
    def ok(self) -> bool:
        return self.state is State.SUCCESS


def verdict_outcome(verdict: Verdict, reviewers: list[str], *, fail: bool) -> RunOutcome:
    if verdict.satisfied:
        return RunOutcome(State.SUCCESS, "All required reviews have been provided!", verdict)
    return RunOutcome(
        State.FAILURE if fail else State.PENDING,
        "Awaiting more reviews..." if reviewers else "Awaiting reviews...",
        verdict,
    )


def error_outcome(exc: BaseException) -> RunOutcome:
    """Map an aborted run to a status; never success or pending."""
    if isinstance(exc, ReportError):
        return RunOutcome(State.FAILURE, str(exc), error=exc.cause or exc)
    return RunOutcome(State.ERROR, "Action encountered an error", error=exc)


async def evaluate_pull_request(
    settings: GateSettings, client: GitHubRestClient, ctx: PullRequestContext
) -> RunOutcome:
    fail = settings.fail_on_unsatisfied()
    requirements = load_requirements(settings)
    logger.info("Loaded %d review requirement(s)", len(requirements))

    reviewers = await fetch_reviewers(client, ctx)
    logger.info("Found %d reviewer(s): %s", len(reviewers), ", ".join(reviewers))

    paths = await fetch_paths(client, ctx)
    logger.info("PR affects %d file(s)", len(paths))
    for path in paths:
        logger.debug("  %s", path)

    membership = TeamMembershipCache(github_team_fetcher(client, ctx.owner))
    verdict = await resolve_requirements(requirements, paths, reviewers, membership)
    return verdict_outcome(verdict, reviewers, fail=fail)


async def run_gate(
    settings: GateSettings,
    *,
    client: GitHubRestClient | None = None,
    ctx: PullRequestContext | None = None,
) -> RunOutcome:
    """Evaluate the pull request and report the resulting commit status.

    Errors abort evaluation and are mapped to a failure or error status.
    """
    owns_client = client is None
    try:
        try:
            if ctx is None:
                ctx = load_pull_request_context(settings.event_path, run_id=settings.run_id)
            if client is None:
                client = GitHubRestClient(
                    select_auth_token(settings.token), base_url=settings.api_url
                )
            outcome = await evaluate_pull_request(settings, client, ctx)
        except Exception as exc:
            outcome = error_outcome(exc)
            logger.error("%s: %s", outcome.description, outcome.error, exc_info=outcome.error)

        if not (settings.token and settings.status and ctx is not None and client is not None):
            return outcome

        try:
            await report_status(
                client,
                ctx,
                state=outcome.state,
                description=outcome.description,
                context=settings.status,
                ci=settings.ci,
                server_url=settings.server_url,
            )
        except Exception as exc:
            logger.error("failed to report status: %s", exc)
            return outcome
        return RunOutcome(
            outcome.state, outcome.description, outcome.verdict, outcome.error, reported=True
        )
    finally:
        if owns_client and client is not None:
            await client.aclose()
