from __future__ import annotations

import pytest

from codeowners_gate.membership import TeamMembershipCache


class FakeTeamLookup:
    def __init__(self, teams: dict[str, list[str]]) -> None:
        self.teams = teams
        self.calls: list[str] = []

    async def __call__(self, team: str) -> list[str]:
        self.calls.append(team)
        if team not in self.teams:
            raise RuntimeError(f"unknown team {team}")
        return self.teams[team]


@pytest.fixture
def team_lookup() -> FakeTeamLookup:
    return FakeTeamLookup({"team1": ["user1", "user2"], "team2": ["user3", "user4"]})


@pytest.fixture
def membership(team_lookup: FakeTeamLookup) -> TeamMembershipCache:
    return TeamMembershipCache(team_lookup)
