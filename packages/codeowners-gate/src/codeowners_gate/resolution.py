from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .membership import TeamMembershipCache
from .requirements.requirement import MatchedPathSet, Requirement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathTrace:
    path: str
    requirement: str | None = None
    satisfied: bool | None = None

    @property
    def matched(self) -> bool:
        return self.requirement is not None

    def describe(self) -> str:
        if self.requirement is None:
            return f'No requirements apply to "{self.path}"'
        state = "satisfied" if self.satisfied else "not satisfied"
        return f'Requirement {self.requirement} applies to "{self.path}": {state}'


@dataclass(frozen=True)
class Verdict:
    satisfied: bool
    traces: list[PathTrace] = field(default_factory=list)

    @property
    def unsatisfied_paths(self) -> list[str]:
        return [t.path for t in self.traces if t.matched and not t.satisfied]


def governing_requirement(
    requirements: Sequence[Requirement], path: str, matched_paths: MatchedPathSet
) -> Requirement | None:
    """Return the last-declared requirement that applies to `path`."""
    for requirement in reversed(requirements):
        if requirement.applies_to_path(path, matched_paths):
            return requirement
    return None


async def resolve_requirements(
    requirements: Sequence[Requirement],
    paths: Sequence[str],
    reviewers: Sequence[str],
    membership: TeamMembershipCache,
) -> Verdict:
    """Check every changed path against the requirement that governs it.

    Only the last matching requirement applies to a path, so requirements
    are scanned from the end for each path. A failing path does not stop the
    run; every path gets a trace.
    """
    matched_paths = MatchedPathSet()
    satisfied = True
    traces: list[PathTrace] = []

    for path in paths:
        requirement = governing_requirement(requirements, path, matched_paths)
        if requirement is None:
            trace = PathTrace(path=path)
        else:
            ok = await requirement.is_satisfied(reviewers, membership)
            satisfied = satisfied and ok
            trace = PathTrace(path=path, requirement=requirement.name, satisfied=ok)
        logger.info("%s", trace.describe())
        traces.append(trace)

    return Verdict(satisfied=satisfied, traces=traces)


async def satisfies_all_requirements(
    requirements: Sequence[Requirement],
    paths: Sequence[str],
    reviewers: Sequence[str],
    membership: TeamMembershipCache,
) -> bool:
    verdict = await resolve_requirements(requirements, paths, reviewers, membership)
    return verdict.satisfied
