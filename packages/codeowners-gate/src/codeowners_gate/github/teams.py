from __future__ import annotations

from ..errors import CollaboratorError
from ..membership import TeamMembersFetcher
from .client import GitHubRestClient


def github_team_fetcher(client: GitHubRestClient, org: str) -> TeamMembersFetcher:
    """Team lookup against the organization's team members endpoint."""

    async def fetch(team: str) -> list[str]:
        members: list[str] = []
        try:
            async for member in client.paginate(
                f"/orgs/{org}/teams/{team}/members", params={"per_page": 100}
            ):
                members.append(member["login"])
        except Exception as exc:
            raise CollaboratorError("team members", f"{org} team {team}", str(exc)) from exc
        return members

    return fetch
