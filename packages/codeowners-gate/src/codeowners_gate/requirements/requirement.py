from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from .models import RequirementConfig
from .patterns import PathGlob, compile_glob
from .reviewer_filter import ReviewerFilter, build_reviewer_filter
from .teams import any_of_teams

if TYPE_CHECKING:
    from ..membership import TeamMembershipCache

logger = logging.getLogger(__name__)

PathsFilter = Callable[[str], bool]


class MatchedPathSet:
    """Paths already claimed by some requirement during one resolution run."""

    def __init__(self) -> None:
        self._paths: set[str] = set()

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def add(self, path: str) -> None:
        self._paths.add(path)

    def sorted(self) -> list[str]:
        return sorted(self._paths)


@dataclass(frozen=True)
class NegatableGlob:
    negated: bool
    glob: PathGlob


def build_paths_filter(paths: Sequence[str]) -> PathsFilter:
    """Combine globs so that the last one matching a path decides.

    Glob libraries combine several negated patterns with OR/AND semantics:
    `!a` and `!b` together would pass both `a` and `b`. Instead the patterns
    are tested in order and the last match wins; if none match, the answer is
    the opposite of the first pattern's polarity.
    """
    globs = [
        NegatableGlob(negated=True, glob=compile_glob(p[1:]))
        if p.startswith("!")
        else NegatableGlob(negated=False, glob=compile_glob(p))
        for p in paths
    ]
    if not globs:
        raise ConfigurationError("there must be at least one path", value=list(paths))
    first, rest = globs[0], globs[1:]

    def paths_filter(path: str) -> bool:
        matched = first.glob.matches(path) != first.negated
        for g in rest:
            if g.glob.matches(path):
                matched = not g.negated
        return matched

    return paths_filter


class Requirement:
    """An individual review requirement."""

    def __init__(self, config: RequirementConfig) -> None:
        self.name = config.name or "Unnamed requirement"
        self.config = config
        self.teams = list(config.teams)

        self.paths_filter: PathsFilter | None
        if config.is_unmatched:
            self.paths_filter = None
        elif (
            isinstance(config.paths, list)
            and config.paths
            and all(isinstance(p, str) and p for p in config.paths)
        ):
            self.paths_filter = build_paths_filter(config.paths)
        else:
            raise ConfigurationError(
                'Paths must be a non-empty array of strings, or the string "unmatched".',
                config=config,
            )

        # A requirement with no teams unrequires its paths, the way an
        # ownerless CODEOWNERS line does.
        self.reviewer_filter: ReviewerFilter | None = None
        if self.teams:
            self.reviewer_filter = build_reviewer_filter(
                any_of_teams(self.teams, config=config)
            )

    def __repr__(self) -> str:
        return f"Requirement(name={self.name!r}, paths={self.config.paths!r}, teams={self.teams!r})"

    @property
    def is_unmatched(self) -> bool:
        return self.paths_filter is None

    def applies_to_path(self, path: str, matched_paths: MatchedPathSet) -> bool:
        """Test whether this requirement applies to `path`.

        `matched_paths` holds the paths claimed so far in this run and gains
        `path` when this returns True. An "unmatched" requirement applies only
        to paths not already in it.
        """
        if self.paths_filter is not None:
            applies = self.paths_filter(path)
        else:
            applies = path not in matched_paths
            if not applies:
                logger.info("%s only covers unmatched paths; %s is already matched", self.name, path)

        if applies:
            logger.info("%s matches %s", self.name, path)
            matched_paths.add(path)
        return applies

    async def is_satisfied(
        self, reviewers: Sequence[str], membership: TeamMembershipCache
    ) -> bool:
        if self.reviewer_filter is None:
            logger.info("Requirement %s has no reviewers", self.name)
            return True
        logger.info("Checking reviewers for %s...", self.name)
        return len(await self.reviewer_filter(reviewers, membership)) > 0
