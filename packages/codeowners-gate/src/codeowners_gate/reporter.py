from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from rich import print

from .github.client import GitHubRestClient
from .github.context import PullRequestContext

logger = logging.getLogger(__name__)

# GitHub rejects longer commit status descriptions.
MAX_DESCRIPTION_LENGTH = 140


class State(str, Enum):
    ERROR = "error"
    FAILURE = "failure"
    PENDING = "pending"
    SUCCESS = "success"


def build_status_request(
    ctx: PullRequestContext,
    *,
    state: State,
    description: str,
    context: str,
    server_url: str = "https://github.com",
) -> dict[str, Any]:
    target_url = None
    if ctx.run_id:
        target_url = f"{server_url.rstrip('/')}/{ctx.owner}/{ctx.repo}/actions/runs/{ctx.run_id}"
    return {
        "state": state.value,
        "target_url": target_url,
        "description": description[:MAX_DESCRIPTION_LENGTH],
        "context": context,
    }


async def report_status(
    client: GitHubRestClient,
    ctx: PullRequestContext,
    *,
    state: State,
    description: str,
    context: str,
    ci: bool,
    server_url: str = "https://github.com",
) -> dict[str, Any]:
    """Report a commit status on the pull request head.

    Outside CI the request is printed instead of sent.
    """
    body = build_status_request(
        ctx, state=state, description=description, context=context, server_url=server_url
    )
    if ci:
        await client.post_json(f"/repos/{ctx.owner}/{ctx.repo}/statuses/{ctx.head_sha}", body)
        logger.info("reported %s status %r on %s", state.value, context, ctx.head_sha)
    else:
        print({"owner": ctx.owner, "repo": ctx.repo, "sha": ctx.head_sha, **body})
    return body
