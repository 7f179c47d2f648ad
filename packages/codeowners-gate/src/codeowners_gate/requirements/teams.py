from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..errors import ConfigurationError

VIRTUAL_TEAM_PREFIX = "@"


class TeamOperation(str, Enum):
    ALL_OF = "all-of"
    ANY_OF = "any-of"


@dataclass(frozen=True)
class TeamRef:
    """A team slug, or `@login` for a one-member virtual team."""

    name: str

    @property
    def is_virtual(self) -> bool:
        return self.name.startswith(VIRTUAL_TEAM_PREFIX)


@dataclass(frozen=True)
class AnyOf:
    branches: tuple[TeamExpr, ...]


@dataclass(frozen=True)
class AllOf:
    branches: tuple[TeamExpr, ...]


TeamExpr = Union[TeamRef, AnyOf, AllOf]


def parse_team_expr(raw: Any, *, config: Any = None) -> TeamExpr:
    """Parse a raw team config value into a team expression.

    Accepted shapes: a team name string, or a single-keyed mapping
    `{"any-of": [...]}` / `{"all-of": [...]}` whose list items are themselves
    team configs.
    """
    if isinstance(raw, str):
        return TeamRef(raw)

    if not isinstance(raw, dict) or len(raw) != 1:
        raise ConfigurationError(
            "Expected a team name or a single-keyed object.",
            config=config,
            value=raw,
        )

    ((key, teams),) = raw.items()
    try:
        operation = TeamOperation(key)
    except ValueError:
        raise ConfigurationError(
            f'Unrecognized operation "{key}"', config=config, value=raw
        ) from None

    if not isinstance(teams, list):
        raise ConfigurationError(
            f"Expected an array of teams, got {type(teams).__name__}",
            config=config,
            value=teams,
        )

    branches = tuple(parse_team_expr(team, config=config) for team in teams)
    if operation is TeamOperation.ANY_OF:
        return AnyOf(branches)
    return AllOf(branches)


def any_of_teams(teams: list[Any], *, config: Any = None) -> TeamExpr:
    """Top-level expression for a requirement's team list."""
    return parse_team_expr({TeamOperation.ANY_OF.value: list(teams)}, config=config)
