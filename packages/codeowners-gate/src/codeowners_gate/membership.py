from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path

from .errors import CollaboratorError
from .requirements.teams import VIRTUAL_TEAM_PREFIX

logger = logging.getLogger(__name__)

TeamMembersFetcher = Callable[[str], Awaitable[Sequence[str]]]


class TeamMembershipCache:
    """Team member lists for one evaluation run.

    Entries are filled on first lookup and never evicted. `@login` names are
    one-member virtual teams and never reach the fetcher or the cache.
    """

    def __init__(self, fetch: TeamMembersFetcher | None = None) -> None:
        self._fetch = fetch
        self._members: dict[str, list[str]] = {}

    @property
    def cached_teams(self) -> list[str]:
        return sorted(self._members)

    async def members(self, team_or_user: str) -> list[str]:
        if team_or_user.startswith(VIRTUAL_TEAM_PREFIX):
            return [team_or_user[len(VIRTUAL_TEAM_PREFIX) :]]

        team = team_or_user
        cached = self._members.get(team)
        if cached is not None:
            return cached

        if self._fetch is None:
            raise CollaboratorError("team members", team, "no team lookup configured")

        try:
            fetched = list(await self._fetch(team))
        except CollaboratorError:
            raise
        except Exception as exc:
            raise CollaboratorError("team members", team, str(exc)) from exc

        logger.debug("fetched %d member(s) of %s", len(fetched), team)
        self._members[team] = fetched
        return fetched


def load_team_roster(path: str | Path) -> dict[str, list[str]]:
    """Load a team roster mapping from JSON.

    Supported shapes:

    1) {"team-a": ["alice", "bob"], ...}
    2) {"teams": {"team-a": ["alice", "bob"], ...}}

    Team keys are normalized to lowercase and may be either:
    - "org/team"
    - "team:slug"
    - "slug"
    """
    p = Path(path)
    raw = json.loads(p.read_text(encoding="utf-8"))

    table = raw.get("teams") if isinstance(raw, dict) and isinstance(raw.get("teams"), dict) else raw
    if not isinstance(table, dict):
        raise ValueError(f"team roster {p} must be a JSON object")

    out: dict[str, list[str]] = {}
    for team, members in table.items():
        if not isinstance(team, str) or not isinstance(members, list):
            continue
        cleaned = sorted(
            {
                str(m).strip()
                for m in members
                if isinstance(m, str) and str(m).strip()
            },
            key=str.lower,
        )
        out[team.strip().lower()] = cleaned
    return out


def team_key_variants(team_name: str) -> list[str]:
    t = team_name.strip().lower()
    keys = {t}
    if t.startswith("team:"):
        keys.add(t.split(":", 1)[1])
    if "/" in t:
        keys.add(t.split("/", 1)[1])
    else:
        keys.add(f"team:{t}")
    return sorted(keys)


def roster_fetcher(roster: Mapping[str, list[str]]) -> TeamMembersFetcher:
    """Team lookup backed by an in-memory roster; unknown teams are errors."""

    async def fetch(team: str) -> list[str]:
        for key in team_key_variants(team):
            if key in roster:
                return list(roster[key])
        raise CollaboratorError("team roster", team, "team not found in roster")

    return fetch
