from __future__ import annotations

import logging

from ..errors import CollaboratorError
from .client import GitHubRestClient
from .context import PullRequestContext

logger = logging.getLogger(__name__)


async def fetch_paths(client: GitHubRestClient, ctx: PullRequestContext) -> list[str]:
    """Fetch the distinct, sorted paths touched by the pull request.

    Renamed files contribute both their old and new names.
    """
    paths: set[str] = set()
    try:
        async for f in client.paginate(
            f"/repos/{ctx.owner}/{ctx.repo}/pulls/{ctx.number}/files",
            params={"per_page": 100},
        ):
            paths.add(f["filename"])
            if f.get("previous_filename"):
                paths.add(f["previous_filename"])
    except Exception as exc:
        raise CollaboratorError(
            "pull request files", f"{ctx.full_name} PR #{ctx.number}", str(exc)
        ) from exc
    return sorted(paths)


async def fetch_reviewers(client: GitHubRestClient, ctx: PullRequestContext) -> list[str]:
    """Fetch the distinct, sorted logins currently approving the pull request.

    GitHub may return more than one review per user and only the last
    non-comment one counts: APPROVED allows merging while CHANGES_REQUESTED
    and DISMISSED take a prior approval away.
    """
    reviewers: dict[str, None] = {}
    try:
        async for review in client.paginate(
            f"/repos/{ctx.owner}/{ctx.repo}/pulls/{ctx.number}/reviews",
            params={"per_page": 100},
        ):
            state = review.get("state")
            if state == "COMMENTED":
                continue
            user = review.get("user")
            if not user:
                logger.warning("Unexpected missing user in review object, skipping")
                continue
            if state == "APPROVED":
                reviewers[user["login"]] = None
            else:
                reviewers.pop(user["login"], None)
    except Exception as exc:
        raise CollaboratorError(
            "pull request reviews", f"{ctx.full_name} PR #{ctx.number}", str(exc)
        ) from exc
    return sorted(reviewers)
