from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from itertools import chain
from typing import TYPE_CHECKING, Awaitable, Callable

from ..errors import ConfigurationError
from .teams import AllOf, AnyOf, TeamExpr, TeamRef

if TYPE_CHECKING:
    from ..membership import TeamMembershipCache

logger = logging.getLogger(__name__)

ReviewerFilter = Callable[[Sequence[str], "TeamMembershipCache"], Awaitable[list[str]]]


def _print_set(label: str, items: list[str]) -> list[str]:
    logger.info("%s %s", label, ", ".join(items) if items else "<empty set>")
    return items


def _union(results: Iterable[list[str]]) -> list[str]:
    return list(dict.fromkeys(chain.from_iterable(results)))


def build_reviewer_filter(expr: TeamExpr, indent: str = "  ") -> ReviewerFilter:
    """Build a function filtering reviewers down to those satisfying `expr`.

    The returned coroutine function yields the approving reviewers that make
    the expression true; an empty list means it is not satisfied. Branches of
    any-of/all-of are evaluated concurrently.
    """
    match expr:
        case TeamRef(name=team):

            async def team_filter(
                reviewers: Sequence[str], membership: TeamMembershipCache
            ) -> list[str]:
                members = await membership.members(team)
                return _print_set(
                    f"{indent}Members of {team}:",
                    [reviewer for reviewer in reviewers if reviewer in members],
                )

            return team_filter

        case AnyOf(branches=branches):
            filters = [build_reviewer_filter(b, f"{indent}  ") for b in branches]

            async def any_of(
                reviewers: Sequence[str], membership: TeamMembershipCache
            ) -> list[str]:
                logger.info("%sUnion of these:", indent)
                results = await asyncio.gather(*(f(reviewers, membership) for f in filters))
                return _print_set(f"{indent}=>", _union(results))

            return any_of

        case AllOf(branches=branches):
            filters = [build_reviewer_filter(b, f"{indent}  ") for b in branches]

            async def all_of(
                reviewers: Sequence[str], membership: TeamMembershipCache
            ) -> list[str]:
                logger.info("%sUnion of these, if none are empty:", indent)
                results = await asyncio.gather(*(f(reviewers, membership) for f in filters))
                if any(not result for result in results):
                    return _print_set(f"{indent}=>", [])
                return _print_set(f"{indent}=>", _union(results))

            return all_of

    raise ConfigurationError(f"Unrecognized team expression {expr!r}", value=expr)
